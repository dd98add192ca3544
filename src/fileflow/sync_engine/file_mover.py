"""
File Mover

Conflict-safe rename and move operations. A destination that already
exists is never overwritten unless its content is byte-identical to the
source, in which case the source is discarded as a duplicate. Otherwise
a fresh name is resolved and the transfer retried against it.

Transport is either an atomic rename or, across filesystems, a streamed
copy followed by removal of the source. move_efficient() tries the rename
first and falls back to the copy only on the cross-device condition.

Author: FileFlow Project
License: MIT
"""

import os
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from ..config.config_loader import get_settings
from ..config.schema import Settings
from ..errors import MoveError, ResolutionExhaustedError, SameFileError
from ..utils.file_ops import (
    ensure_parent_directory,
    exists,
    is_cross_device_error,
    remove_file,
    same_path
)
from ..utils.logger import get_logger
from .comparator import files_equal
from .copier import copy_file_creating_path
from .naming import (
    NamingStrategy,
    get_naming_strategy,
    resolve_available_name,
    strategy_from_name
)

logger = get_logger(__name__)


class MoveOutcome(str, Enum):
    """How a successful move ended."""
    MOVED = "moved"
    DUPLICATE_REMOVED = "duplicate_removed"


@dataclass
class MoveResult:
    """Result of a successful move or rename."""
    source_path: str
    destination_path: str
    outcome: MoveOutcome = MoveOutcome.MOVED
    renamed: bool = False
    cross_device: bool = False


class FileMover:
    """
    Conflict-safe file relocation.
    
    Features:
    - Same-path rejection before any I/O
    - Duplicate detection by byte-exact comparison
    - Pluggable conflict renaming (incrementing or timestamp suffix)
    - Atomic rename with copy-and-remove fallback across devices
    - In-memory history of completed operations
    
    Each mover holds its own settings and naming strategy when given
    them; otherwise it follows the process-wide configuration at call
    time.
    """
    
    MAX_HISTORY = 1000
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        strategy: Optional[NamingStrategy] = None
    ):
        """
        Initialize file mover.
        
        Args:
            settings: Settings for this mover (process-wide if None)
            strategy: Naming strategy for this mover. If None, derived from
                settings when given, else the process-wide strategy.
        """
        self._settings = settings
        if strategy is None and settings is not None:
            strategy = strategy_from_name(settings.naming_strategy, settings.max_attempts)
        self._strategy = strategy
        self._move_log = []
    
    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()
    
    @property
    def strategy(self) -> NamingStrategy:
        return self._strategy or get_naming_strategy()
    
    def rename(self, src: str, dst: str) -> MoveResult:
        """
        Rename src to dst, resolving conflicts.
        
        Args:
            src: Source file path
            dst: Preferred destination path
        
        Returns:
            MoveResult with the final destination
        
        Raises:
            SameFileError: If src and dst are the same path
            FileAccessError: If comparing against an existing dst fails
            ResolutionExhaustedError: If no free name can be found
            DirectoryCreationError: If dst's directory cannot be created
            MoveError: If the rename itself fails
            RemovalError: If src could not be removed after matching dst
        """
        src, dst = os.fspath(src), os.fspath(dst)
        target, renamed, duplicate = self._settle_destination(src, dst)
        if duplicate:
            return self._record(MoveResult(src, target, MoveOutcome.DUPLICATE_REMOVED, renamed))
        
        settings = self.settings
        ensure_parent_directory(target, mode=settings.dir_mode)
        
        try:
            os.rename(src, target)
        except OSError as e:
            if is_cross_device_error(e):
                logger.debug(f"Rename crosses devices: {src} -> {target}")
            else:
                logger.error(f"Failed renaming {src} -> {target}: {e}")
            raise MoveError(src, cause=e, other_path=target) from e
        
        logger.info(f"Renamed {src} -> {target}")
        return self._record(MoveResult(src, target, MoveOutcome.MOVED, renamed))
    
    def move_across_filesystems(self, src: str, dst: str, cancel=None) -> MoveResult:
        """
        Move src to dst by copying and then removing the source.
        
        Args:
            src: Source file path
            dst: Preferred destination path
            cancel: Optional cancellation token passed to the copy
        
        Returns:
            MoveResult with the final destination
        
        Raises:
            SameFileError: If src and dst are the same path
            FileAccessError: If comparing or reading fails
            ResolutionExhaustedError: If no free name can be found
            DirectoryCreationError: If dst's directory cannot be created
            CopyError: If the copy fails (source untouched)
            OperationCancelledError: If cancel was set during the copy
            RemovalError: If src could not be removed after the copy
        """
        src, dst = os.fspath(src), os.fspath(dst)
        target, renamed, duplicate = self._settle_destination(src, dst)
        if duplicate:
            return self._record(
                MoveResult(src, target, MoveOutcome.DUPLICATE_REMOVED, renamed)
            )
        
        copy_file_creating_path(src, target, settings=self.settings, cancel=cancel)
        remove_file(src, target)
        
        logger.info(f"Moved {src} -> {target} (copy and remove)")
        return self._record(MoveResult(src, target, MoveOutcome.MOVED, renamed, cross_device=True))
    
    def move_efficient(self, src: str, dst: str, cancel=None) -> MoveResult:
        """
        Move src to dst, renaming when possible and copying across devices.
        
        Args:
            src: Source file path
            dst: Preferred destination path
            cancel: Optional cancellation token for the copy fallback
        
        Returns:
            MoveResult with the final destination
        
        Raises:
            Any error of rename() other than a cross-device MoveError, or
            any error of move_across_filesystems() after falling back
        """
        try:
            return self.rename(src, dst)
        except MoveError as e:
            if not e.cross_device:
                raise
            logger.warning(f"{e.src} and {e.dst} are on different devices, falling back to copy")
        
        return self.move_across_filesystems(src, dst, cancel=cancel)
    
    def _settle_destination(self, src: str, dst: str) -> Tuple[str, bool, bool]:
        """
        Walk the conflict policy until a destination is settled.
        
        Args:
            src: Source file path
            dst: Preferred destination path
        
        Returns:
            Tuple of (destination, renamed, duplicate). When duplicate is
            True the source has already been removed and destination holds
            identical content; otherwise destination did not exist when
            last checked.
        """
        settings = self.settings
        candidate = dst
        renamed = False
        
        for _ in range(settings.max_attempts + 1):
            if same_path(src, candidate):
                raise SameFileError(src)
            
            if not exists(candidate):
                return candidate, renamed, False
            
            if files_equal(src, candidate, buffer_size=settings.buffer_size):
                logger.warning(f"{candidate} already holds identical content, removing duplicate {src}")
                remove_file(src, candidate)
                return candidate, renamed, True
            
            logger.debug(f"Destination taken by different content: {candidate}")
            candidate = resolve_available_name(candidate, self.strategy)
            renamed = True
            logger.info(f"Resolved conflicting destination {dst} -> {candidate}")
        
        logger.error(f"Gave up resolving a destination for {src} -> {dst}")
        raise ResolutionExhaustedError(dst, settings.max_attempts)
    
    def _record(self, result: MoveResult) -> MoveResult:
        """Log a completed operation in the move history."""
        log_entry = asdict(result)
        log_entry['outcome'] = result.outcome.value
        log_entry['timestamp'] = datetime.now().isoformat()
        self._move_log.append(log_entry)
        
        if len(self._move_log) > self.MAX_HISTORY:
            self._move_log = self._move_log[-self.MAX_HISTORY:]
        
        return result
    
    def get_move_history(self, limit: int = 100) -> list:
        """
        Get recent move history.
        
        Args:
            limit: Maximum number of entries to return
        
        Returns:
            List of move log entries, oldest first
        """
        return self._move_log[-limit:]
    
    def clear_move_history(self):
        """Clear move history log."""
        self._move_log.clear()
        logger.debug("Move history cleared")


def rename(src: str, dst: str, strategy: Optional[NamingStrategy] = None,
           settings: Optional[Settings] = None) -> str:
    """Conflict-safe rename; returns the final destination path."""
    return FileMover(settings, strategy).rename(src, dst).destination_path


def move_across_filesystems(src: str, dst: str, strategy: Optional[NamingStrategy] = None,
                            settings: Optional[Settings] = None, cancel=None) -> str:
    """Conflict-safe copy-and-remove move; returns the final destination path."""
    return FileMover(settings, strategy).move_across_filesystems(src, dst, cancel=cancel).destination_path


def move_efficient(src: str, dst: str, strategy: Optional[NamingStrategy] = None,
                   settings: Optional[Settings] = None, cancel=None) -> str:
    """Rename with copy-and-remove fallback across devices; returns the final destination path."""
    return FileMover(settings, strategy).move_efficient(src, dst, cancel=cancel).destination_path
