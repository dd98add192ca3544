"""
Sync Engine Module

Core relocation logic: content comparison, conflict naming, streamed
copying and the conflict-safe move orchestrator.

Author: FileFlow Project
License: MIT
"""

from .comparator import files_equal
from .naming import (
    NamingStrategy,
    IncrementingStrategy,
    TimestampStrategy,
    resolve_available_name,
    get_naming_strategy,
    set_naming_strategy,
    reset_naming_strategy,
    naming_strategy,
    strategy_from_name
)
from .copier import copy_file, copy_file_creating_path
from .file_mover import (
    FileMover,
    MoveResult,
    MoveOutcome,
    rename,
    move_across_filesystems,
    move_efficient
)

__all__ = [
    'files_equal', 'NamingStrategy', 'IncrementingStrategy', 'TimestampStrategy',
    'resolve_available_name', 'get_naming_strategy', 'set_naming_strategy',
    'reset_naming_strategy', 'naming_strategy', 'strategy_from_name',
    'copy_file', 'copy_file_creating_path', 'FileMover', 'MoveResult',
    'MoveOutcome', 'rename', 'move_across_filesystems', 'move_efficient'
]
