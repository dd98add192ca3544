"""
Configuration Loader

Handles loading, parsing, and merging configuration from YAML files and
environment variables, and holds the process-wide active settings.

Author: FileFlow Project
License: MIT
"""

import os
import yaml
from pathlib import Path
from threading import Lock
from typing import Optional, Dict, Any
from dotenv import load_dotenv

from .schema import FileFlowConfig, Settings
from ..utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


# (environment variable, section, key, converter)
ENV_OVERRIDES = [
    ("FILEFLOW_BUFFER_SIZE", "settings", "buffer_size", int),
    ("FILEFLOW_MAX_ATTEMPTS", "settings", "max_attempts", int),
    ("FILEFLOW_FILE_MODE", "settings", "file_mode", str),
    ("FILEFLOW_DIR_MODE", "settings", "dir_mode", str),
    ("FILEFLOW_NAMING_STRATEGY", "settings", "naming_strategy", str.lower),
    ("FILEFLOW_LOG_LEVEL", "logging", "log_level", str.upper),
    ("FILEFLOW_LOG_JSON", "logging", "json_format", lambda v: v.lower() == "true"),
    ("FILEFLOW_LOG_FILE", "logging", "log_file_path", str),
]


class ConfigLoader:
    """
    Configuration loader.
    
    Loads configuration from a YAML file, merges environment variable
    overrides and validates the result.
    """
    
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration loader.
        
        Args:
            config_path: Path to the configuration file. If None, uses
                FILEFLOW_CONFIG or ./fileflow.yaml.
        """
        # Load environment variables from .env if present
        load_dotenv()
        
        self.config_path = config_path or os.getenv(
            "FILEFLOW_CONFIG",
            "fileflow.yaml"
        )
        self._config: Optional[FileFlowConfig] = None
    
    def load(self) -> FileFlowConfig:
        """
        Load and validate configuration.
        
        Returns:
            Validated FileFlowConfig object
            
        Raises:
            ValueError: If YAML parsing or validation fails
        """
        config_data = self._load_yaml()
        config_data = self._merge_env_vars(config_data)
        
        self._config = FileFlowConfig(**config_data)
        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config
    
    def _load_yaml(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.
        
        Returns:
            Dictionary with configuration data (empty if the file is missing)
        """
        config_file = Path(self.config_path)
        
        if not config_file.exists():
            logger.debug(f"No config file at {config_file}, using defaults")
            return {}
        
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML config: {e}")
        
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping: {config_file}")
        return data
    
    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge environment variables into configuration.
        
        Environment variables override config file values.
        
        Args:
            config_data: Configuration dictionary from file
            
        Returns:
            Merged configuration dictionary
        """
        for env_name, section, key, convert in ENV_OVERRIDES:
            value = os.getenv(env_name)
            if not value:
                continue
            try:
                config_data.setdefault(section, {})[key] = convert(value)
            except ValueError:
                raise ValueError(f"Invalid value for {env_name}: {value}")
        
        if os.getenv("FILEFLOW_LOG_FILE"):
            config_data.setdefault("logging", {})["log_to_file"] = True
        
        return config_data
    
    def save(self, config: FileFlowConfig, path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.
        
        Args:
            config: Config object to save
            path: Path to save to (uses default if None)
        """
        save_path = Path(path or self.config_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        
        config_dict = config.model_dump(mode="json")
        
        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)
    
    @property
    def config(self) -> Optional[FileFlowConfig]:
        """Get the current configuration object."""
        return self._config


def load_config(config_path: Optional[str] = None) -> FileFlowConfig:
    """
    Convenience function to load configuration.
    
    Args:
        config_path: Optional path to config file
        
    Returns:
        Loaded and validated FileFlowConfig object
    """
    loader = ConfigLoader(config_path)
    return loader.load()


# Process-wide active settings. Swapping them races with concurrent
# operations that read them; pass settings= per call to avoid that.
_settings_lock = Lock()
_active_settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide active settings."""
    return _active_settings


def configure(settings: Settings) -> Settings:
    """
    Replace the process-wide settings.
    
    Also installs the naming strategy named by settings.naming_strategy
    as the process-wide default.
    
    Args:
        settings: New settings
        
    Returns:
        The previously active settings
    """
    from ..sync_engine.naming import set_naming_strategy, strategy_from_name
    
    global _active_settings
    with _settings_lock:
        previous = _active_settings
        _active_settings = settings
    set_naming_strategy(strategy_from_name(settings.naming_strategy))
    logger.debug(f"Configured settings: {settings}")
    return previous


def reset_settings() -> None:
    """Restore default settings and the default naming strategy."""
    configure(Settings())


def apply_config(config: FileFlowConfig) -> Settings:
    """
    Activate a loaded configuration for this process.
    
    Installs config.settings (and its naming strategy) as the process-wide
    settings and configures logging from config.logging.
    
    Args:
        config: Loaded configuration
        
    Returns:
        The previously active settings
    """
    log = config.logging
    setup_logging(
        log_level=log.log_level,
        log_to_file=log.log_to_file,
        log_file_path=log.log_file_path,
        log_rotation_size=log.log_rotation_size,
        log_retention_count=log.log_retention_count,
        json_format=log.json_format
    )
    return configure(config.settings)
