"""
Configuration Schema and Models

Defines Pydantic models for the configuration schema, providing validation,
default values, and type checking for all configuration options.

Author: FileFlow Project
License: MIT
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_BUFFER_SIZE = 32 * 1024
DEFAULT_MAX_ATTEMPTS = 100
DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class NamingStrategyName(str, Enum):
    """Built-in naming strategies for conflict resolution."""
    INCREMENT = "increment"
    TIMESTAMP = "timestamp"


def _parse_mode(value):
    """Accept permission bits as int or octal string ("0755", "0o755", "755")."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            return int(text, 8)
        except ValueError:
            raise ValueError(f"Invalid octal permission mode: {value}")
    return value


class Settings(BaseModel):
    """
    Process-wide settings for file operations.
    
    Instances are immutable; use model_copy(update=...) to derive a
    variant for a single call.
    """
    
    model_config = ConfigDict(frozen=True, use_enum_values=True)
    
    buffer_size: int = Field(
        default=DEFAULT_BUFFER_SIZE,
        description="Chunk size for streamed reads and writes (bytes)"
    )
    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        description="Maximum candidate names tried when resolving a conflict"
    )
    file_mode: int = Field(
        default=DEFAULT_FILE_MODE,
        description="Default permission bits for created files"
    )
    dir_mode: int = Field(
        default=DEFAULT_DIR_MODE,
        description="Permission bits for created directories"
    )
    naming_strategy: NamingStrategyName = Field(
        default=NamingStrategyName.INCREMENT,
        description="Naming strategy used to resolve destination conflicts"
    )
    
    @field_validator("buffer_size")
    @classmethod
    def validate_buffer_size(cls, v):
        """Buffers must hold at least one byte."""
        if v <= 0:
            raise ValueError(f"buffer_size must be positive: {v}")
        return v
    
    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v):
        """At least one candidate must be tried."""
        if v < 1:
            raise ValueError(f"max_attempts must be at least 1: {v}")
        return v
    
    @field_validator("file_mode", "dir_mode", mode="before")
    @classmethod
    def parse_modes(cls, v):
        """Convert octal strings to permission bits."""
        return _parse_mode(v)
    
    @field_validator("file_mode", "dir_mode")
    @classmethod
    def validate_modes(cls, v):
        """Permission bits must fit in 0o7777."""
        if not 0 <= v <= 0o7777:
            raise ValueError(f"Permission mode out of range: {oct(v)}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    
    model_config = ConfigDict(use_enum_values=True)
    
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level"
    )
    log_to_file: bool = Field(
        default=False,
        description="Enable logging to file"
    )
    log_file_path: Optional[str] = Field(
        default=None,
        description="Log file path (required when log_to_file is set)"
    )
    log_rotation_size: int = Field(
        default=10485760,  # 10MB
        description="Log file size before rotation (bytes)"
    )
    log_retention_count: int = Field(
        default=5,
        description="Number of rotated log files to keep"
    )
    json_format: bool = Field(
        default=False,
        description="Emit logs as JSON"
    )


class FileFlowConfig(BaseModel):
    """
    Root configuration model for FileFlow.
    
    Loaded from a YAML document and overridable by environment variables.
    """
    
    model_config = ConfigDict(validate_assignment=True)
    
    settings: Settings = Field(default_factory=Settings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
