"""
FileFlow Utilities

Filesystem primitives and logging helpers shared by the sync engine.

Author: FileFlow Project
License: MIT
"""

from .file_ops import (
    exists,
    ensure_directory,
    ensure_parent_directory,
    is_cross_device_error,
    same_path,
    remove_file
)
from .logger import setup_logging, get_logger

__all__ = [
    'exists', 'ensure_directory', 'ensure_parent_directory',
    'is_cross_device_error', 'same_path', 'remove_file',
    'setup_logging', 'get_logger'
]
