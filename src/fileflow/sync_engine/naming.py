"""
Name Resolver

Produces an alternative destination path when the preferred one is taken.
A naming strategy is any callable mapping a taken path to a free candidate;
two are built in (incrementing counter and high-resolution timestamp).

The active strategy is process-wide. Swapping it while other threads are
moving files races with them; pass strategy= to FileMover instead when
that matters.

Author: FileFlow Project
License: MIT
"""

import copy
import os
import re
import time
from contextlib import contextmanager
from datetime import datetime
from threading import Lock
from typing import Callable, Iterator, Optional

from ..config.config_loader import get_settings
from ..config.schema import NamingStrategyName
from ..errors import ResolutionExhaustedError
from ..utils.file_ops import exists
from ..utils.logger import get_logger

logger = get_logger(__name__)

NamingStrategy = Callable[[str], str]

INCREMENT_PATTERN = re.compile(r"-\d+$")


def split_base(path: str):
    """
    Split a path into (stem without increment suffix, extension).
    
    Args:
        path: Taken destination path
        
    Returns:
        Tuple of (stem, extension); extension may be empty
    """
    stem, ext = os.path.splitext(os.fspath(path))
    return INCREMENT_PATTERN.sub("", stem), ext


class _BoundedStrategy:
    """Shared bounded search loop over generated candidates."""
    
    def __init__(self, max_attempts: Optional[int] = None):
        self.max_attempts = max_attempts
    
    def candidate(self, stem: str, ext: str, attempt: int) -> str:
        raise NotImplementedError
    
    def __call__(self, base_path: str) -> str:
        max_attempts = self.max_attempts or get_settings().max_attempts
        stem, ext = split_base(base_path)
        
        for attempt in range(1, max_attempts + 1):
            candidate = self.candidate(stem, ext, attempt)
            if not exists(candidate) and not os.path.isdir(candidate):
                logger.debug(f"Resolved {base_path} -> {candidate} (attempt {attempt})")
                return candidate
        
        logger.error(f"Name resolution exhausted for {base_path} after {max_attempts} attempts")
        raise ResolutionExhaustedError(os.fspath(base_path), max_attempts)
    
    def __repr__(self):
        return f"{type(self).__name__}(max_attempts={self.max_attempts})"


class IncrementingStrategy(_BoundedStrategy):
    """
    Append -1, -2, ... before the extension until a free name is found.
    
    An existing trailing -<digits> suffix is replaced, not stacked:
    file-1.txt resolves to file-2.txt when file-1.txt is taken.
    """
    
    def candidate(self, stem: str, ext: str, attempt: int) -> str:
        return f"{stem}-{attempt}{ext}"


class TimestampStrategy(_BoundedStrategy):
    """
    Append -YYYYMMDD-HHMMSS.nnnnnnnnn (nanosecond fraction) before the extension.
    
    A fresh timestamp is taken for each attempt; collisions are retried
    up to the same attempt cap as the incrementing strategy.
    """
    
    def __init__(self, max_attempts: Optional[int] = None, clock: Callable[[], int] = time.time_ns):
        super().__init__(max_attempts)
        self.clock = clock
    
    def candidate(self, stem: str, ext: str, attempt: int) -> str:
        now_ns = self.clock()
        seconds, fraction = divmod(now_ns, 1_000_000_000)
        stamp = datetime.fromtimestamp(seconds).strftime("%Y%m%d-%H%M%S")
        return f"{stem}-{stamp}.{fraction:09d}{ext}"


def strategy_from_name(name, max_attempts: Optional[int] = None) -> NamingStrategy:
    """
    Build a built-in naming strategy from its configured name.

    Args:
        name: "increment" or "timestamp"
        max_attempts: Attempt cap (defaults to the active settings)

    Returns:
        Naming strategy instance
        
    Raises:
        ValueError: If the name is unknown
    """
    value = NamingStrategyName(name)
    if value == NamingStrategyName.TIMESTAMP:
        return TimestampStrategy(max_attempts)
    if max_attempts is None:
        return DEFAULT_STRATEGY
    return IncrementingStrategy(max_attempts)


DEFAULT_STRATEGY: NamingStrategy = IncrementingStrategy()

_strategy_lock = Lock()
_active_strategy: NamingStrategy = DEFAULT_STRATEGY


def get_naming_strategy() -> NamingStrategy:
    """Return the process-wide naming strategy."""
    return _active_strategy


def set_naming_strategy(strategy: NamingStrategy) -> NamingStrategy:
    """
    Install a process-wide naming strategy.
    
    Args:
        strategy: Callable mapping a taken path to a free candidate
        
    Returns:
        The previously active strategy
    """
    global _active_strategy
    if not callable(strategy):
        raise TypeError(f"Naming strategy must be callable: {strategy!r}")
    with _strategy_lock:
        previous = _active_strategy
        _active_strategy = strategy
    return previous


def reset_naming_strategy() -> None:
    """Restore the default incrementing strategy."""
    set_naming_strategy(DEFAULT_STRATEGY)


@contextmanager
def naming_strategy(strategy: NamingStrategy) -> Iterator[NamingStrategy]:
    """Temporarily install a naming strategy, restoring the previous one on exit."""
    previous = set_naming_strategy(strategy)
    try:
        yield strategy
    finally:
        set_naming_strategy(previous)


def resolve_available_name(
    base_path: str,
    strategy: Optional[NamingStrategy] = None,
    max_attempts: Optional[int] = None
) -> str:
    """
    Find an available alternative for a taken path.
    
    Args:
        base_path: Taken destination path
        strategy: Naming strategy to use (defaults to the process-wide one)
        max_attempts: Attempt cap for this call. Applies to the built-in
            strategies; a custom callable is used as given.
        
    Returns:
        Candidate path that did not exist when checked
        
    Raises:
        ResolutionExhaustedError: If no free candidate is found
    """
    resolver = strategy or get_naming_strategy()
    if max_attempts is not None and isinstance(resolver, _BoundedStrategy):
        resolver = copy.copy(resolver)
        resolver.max_attempts = max_attempts
    return resolver(base_path)
