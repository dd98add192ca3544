"""
FileFlow

Safe move, copy, rename and byte-equality comparison of files, with
automatic conflict resolution by name incrementing.

Author: FileFlow Project
License: MIT
"""

from .errors import (
    FileFlowError,
    SameFileError,
    FileAccessError,
    DirectoryCreationError,
    ResolutionExhaustedError,
    MoveError,
    CopyError,
    RemovalError,
    OperationCancelledError
)
from .utils.file_ops import exists, is_cross_device_error
from .config import Settings, configure, get_settings, reset_settings, load_config, apply_config
from .sync_engine import (
    files_equal,
    copy_file,
    copy_file_creating_path,
    resolve_available_name,
    set_naming_strategy,
    reset_naming_strategy,
    naming_strategy,
    IncrementingStrategy,
    TimestampStrategy,
    FileMover,
    MoveResult,
    MoveOutcome,
    rename,
    move_across_filesystems,
    move_efficient
)

copy = copy_file
copy_creating_path = copy_file_creating_path

__version__ = "0.1.0"
__all__ = [
    'FileFlowError', 'SameFileError', 'FileAccessError', 'DirectoryCreationError',
    'ResolutionExhaustedError', 'MoveError', 'CopyError', 'RemovalError',
    'OperationCancelledError', 'exists', 'is_cross_device_error', 'Settings',
    'configure', 'get_settings', 'reset_settings', 'load_config', 'apply_config', 'files_equal',
    'copy', 'copy_creating_path', 'copy_file', 'copy_file_creating_path',
    'resolve_available_name', 'set_naming_strategy', 'reset_naming_strategy',
    'naming_strategy', 'IncrementingStrategy', 'TimestampStrategy', 'FileMover',
    'MoveResult', 'MoveOutcome', 'rename', 'move_across_filesystems', 'move_efficient'
]
