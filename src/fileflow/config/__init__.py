"""
FileFlow Configuration Module

Process-wide settings for buffered I/O, name resolution and permissions,
loaded from YAML with environment variable overrides.

Author: FileFlow Project
License: MIT
"""

from .schema import (
    FileFlowConfig,
    LoggingConfig,
    LogLevel,
    NamingStrategyName,
    Settings,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_FILE_MODE,
    DEFAULT_DIR_MODE
)
from .config_loader import (
    ConfigLoader,
    load_config,
    get_settings,
    configure,
    reset_settings,
    apply_config
)

__all__ = [
    'FileFlowConfig', 'LoggingConfig', 'LogLevel', 'NamingStrategyName',
    'Settings', 'DEFAULT_BUFFER_SIZE', 'DEFAULT_MAX_ATTEMPTS',
    'DEFAULT_FILE_MODE', 'DEFAULT_DIR_MODE', 'ConfigLoader', 'load_config',
    'get_settings', 'configure', 'reset_settings', 'apply_config'
]
