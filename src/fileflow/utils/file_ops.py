"""
File Operation Utilities

Thin wrappers over the host filesystem: existence checks, directory
creation, source removal, and classification of the cross-device rename
failure that drives the move fallback.

Author: FileFlow Project
License: MIT
"""

import errno
import os
from typing import Optional

from ..errors import DirectoryCreationError, FileFlowError, RemovalError
from .logger import get_logger

logger = get_logger(__name__)


def exists(path: str) -> bool:
    """
    Check whether a regular (non-directory) file exists at path.
    
    Never raises: unreadable or missing paths report False.
    
    Args:
        path: Path to check
        
    Returns:
        True if path exists and is not a directory
    """
    try:
        return os.path.exists(path) and not os.path.isdir(path)
    except (OSError, ValueError):
        return False


def same_path(first: str, second: str) -> bool:
    """
    Check whether two paths refer to the same file.
    
    Paths that normalize to the same absolute location match without
    touching the filesystem. Otherwise, when both exist, aliases through
    symlinks or hardlinks are detected by comparing device and inode.
    
    Args:
        first: First path
        second: Second path
        
    Returns:
        True if both paths name the same file
    """
    first, second = os.fspath(first), os.fspath(second)
    if os.path.abspath(first) == os.path.abspath(second):
        return True
    try:
        return os.path.samefile(first, second)
    except (OSError, ValueError):
        # Either path is missing, so they cannot alias each other
        return False


def ensure_directory(directory: str, mode: int = 0o755) -> None:
    """
    Ensure a directory exists, creating it and its parents if necessary.
    
    Args:
        directory: Directory path
        mode: Permission bits for newly created directories
        
    Raises:
        DirectoryCreationError: If the directory cannot be created
    """
    if not directory:
        return
    
    try:
        os.makedirs(directory, mode=mode, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create directory {directory}: {e}")
        raise DirectoryCreationError(directory, cause=e) from e


def ensure_parent_directory(path: str, mode: int = 0o755) -> None:
    """Create the directory that will contain path."""
    ensure_directory(os.path.dirname(os.fspath(path)), mode=mode)


def remove_file(path: str, destination: str) -> None:
    """
    Remove a source file whose content is already at destination.
    
    Args:
        path: Source file to remove
        destination: Path that holds the correct content
        
    Raises:
        RemovalError: If the source cannot be removed
    """
    try:
        os.remove(path)
    except OSError as e:
        logger.error(f"Failed removing original {path} (content is at {destination}): {e}")
        raise RemovalError(path, destination, cause=e) from e


def is_cross_device_error(err: Optional[BaseException]) -> bool:
    """
    Check whether an error is the cross-device rename condition.
    
    Accepts raw OSErrors as well as fileflow errors wrapping one.
    
    Args:
        err: Exception to classify
        
    Returns:
        True if err (or the OSError it wraps) carries EXDEV
    """
    if isinstance(err, FileFlowError):
        err = getattr(err, "cause", None)
    return isinstance(err, OSError) and err.errno == errno.EXDEV
