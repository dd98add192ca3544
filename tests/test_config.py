"""
Unit Tests for Configuration Module

Tests settings validation, YAML loading, environment variable merging
and the process-wide active settings.

Author: FileFlow Project
License: MIT
"""

import logging
import pytest
import yaml

from fileflow.config.config_loader import (
    ConfigLoader,
    apply_config,
    configure,
    get_settings,
    load_config,
    reset_settings
)
from fileflow.config.schema import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_ATTEMPTS,
    FileFlowConfig,
    LoggingConfig,
    NamingStrategyName,
    Settings
)
from fileflow.sync_engine.naming import TimestampStrategy, get_naming_strategy


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FILEFLOW_* variables from the host out of these tests."""
    for name in [
        "FILEFLOW_CONFIG", "FILEFLOW_BUFFER_SIZE", "FILEFLOW_MAX_ATTEMPTS",
        "FILEFLOW_FILE_MODE", "FILEFLOW_DIR_MODE", "FILEFLOW_NAMING_STRATEGY",
        "FILEFLOW_LOG_LEVEL", "FILEFLOW_LOG_JSON", "FILEFLOW_LOG_FILE"
    ]:
        monkeypatch.delenv(name, raising=False)


class TestSettingsSchema:
    """Test suite for the Settings model."""
    
    def test_defaults(self):
        """Test Settings default values."""
        settings = Settings()
        
        assert settings.buffer_size == DEFAULT_BUFFER_SIZE == 32 * 1024
        assert settings.max_attempts == DEFAULT_MAX_ATTEMPTS == 100
        assert settings.file_mode == 0o644
        assert settings.dir_mode == 0o755
        assert settings.naming_strategy == "increment"
    
    def test_octal_string_modes(self):
        """Test that octal strings are parsed into permission bits."""
        settings = Settings(file_mode="0600", dir_mode="0o700")
        
        assert settings.file_mode == 0o600
        assert settings.dir_mode == 0o700
    
    def test_invalid_mode_string(self):
        """Test that a non-octal mode is rejected."""
        with pytest.raises(ValueError):
            Settings(file_mode="0999")
    
    def test_mode_out_of_range(self):
        """Test that modes above 0o7777 are rejected."""
        with pytest.raises(ValueError):
            Settings(dir_mode=0o17777)
    
    @pytest.mark.parametrize("field,value", [
        ("buffer_size", 0),
        ("buffer_size", -1),
        ("max_attempts", 0)
    ])
    def test_invalid_limits(self, field, value):
        """Test that non-positive limits are rejected."""
        with pytest.raises(ValueError):
            Settings(**{field: value})
    
    def test_unknown_strategy(self):
        """Test that unknown naming strategies are rejected."""
        with pytest.raises(ValueError):
            Settings(naming_strategy="random")
    
    def test_settings_are_frozen(self):
        """Test that settings cannot be mutated in place."""
        settings = Settings()
        
        with pytest.raises(ValueError):
            settings.buffer_size = 1
    
    def test_model_copy_variant(self):
        """Test deriving a variant for a single call."""
        settings = Settings().model_copy(update={"buffer_size": 1024})
        
        assert settings.buffer_size == 1024
    
    def test_strategy_enum_values(self):
        """Test NamingStrategyName values."""
        assert NamingStrategyName.INCREMENT == "increment"
        assert NamingStrategyName.TIMESTAMP == "timestamp"


class TestConfigLoader:
    """Test suite for ConfigLoader class."""
    
    def test_missing_config_uses_defaults(self, tmp_path):
        """Test that loading a non-existent config yields defaults."""
        loader = ConfigLoader(str(tmp_path / "fileflow.yaml"))
        
        config = loader.load()
        
        assert isinstance(config, FileFlowConfig)
        assert config.settings == Settings()
        assert config.logging == LoggingConfig()
        assert loader.config is config
    
    def test_load_yaml(self, tmp_path):
        """Test values are read from YAML."""
        config_path = tmp_path / "fileflow.yaml"
        config_path.write_text(
            "settings:\n"
            "  buffer_size: 4096\n"
            "  max_attempts: 10\n"
            "  dir_mode: 0700\n"
            "  naming_strategy: timestamp\n"
            "logging:\n"
            "  log_level: DEBUG\n"
        )
        
        config = load_config(str(config_path))
        
        assert config.settings.buffer_size == 4096
        assert config.settings.max_attempts == 10
        assert config.settings.dir_mode == 0o700
        assert config.settings.naming_strategy == "timestamp"
        assert config.logging.log_level == "DEBUG"
    
    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises ValueError."""
        config_path = tmp_path / "fileflow.yaml"
        config_path.write_text("settings: [unclosed\n")
        
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_config(str(config_path))
    
    def test_non_mapping_root(self, tmp_path):
        """Test that a YAML list root is rejected."""
        config_path = tmp_path / "fileflow.yaml"
        config_path.write_text("- a\n- b\n")
        
        with pytest.raises(ValueError, match="mapping"):
            load_config(str(config_path))
    
    def test_env_var_override(self, tmp_path, monkeypatch):
        """Test environment variable overrides."""
        monkeypatch.setenv("FILEFLOW_BUFFER_SIZE", "8192")
        monkeypatch.setenv("FILEFLOW_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("FILEFLOW_FILE_MODE", "0600")
        monkeypatch.setenv("FILEFLOW_NAMING_STRATEGY", "TIMESTAMP")
        monkeypatch.setenv("FILEFLOW_LOG_LEVEL", "debug")
        monkeypatch.setenv("FILEFLOW_LOG_JSON", "true")
        
        config = load_config(str(tmp_path / "fileflow.yaml"))
        
        assert config.settings.buffer_size == 8192
        assert config.settings.max_attempts == 5
        assert config.settings.file_mode == 0o600
        assert config.settings.naming_strategy == "timestamp"
        assert config.logging.log_level == "DEBUG"
        assert config.logging.json_format is True
    
    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """Test environment variables win over file values."""
        config_path = tmp_path / "fileflow.yaml"
        config_path.write_text("settings:\n  buffer_size: 4096\n")
        monkeypatch.setenv("FILEFLOW_BUFFER_SIZE", "1024")
        
        assert load_config(str(config_path)).settings.buffer_size == 1024
    
    def test_log_file_env_enables_file_logging(self, tmp_path, monkeypatch):
        """Test FILEFLOW_LOG_FILE turns on file logging."""
        log_file = str(tmp_path / "fileflow.log")
        monkeypatch.setenv("FILEFLOW_LOG_FILE", log_file)
        
        config = load_config(str(tmp_path / "fileflow.yaml"))
        
        assert config.logging.log_to_file is True
        assert config.logging.log_file_path == log_file
    
    def test_invalid_env_value(self, tmp_path, monkeypatch):
        """Test a non-numeric override raises ValueError."""
        monkeypatch.setenv("FILEFLOW_BUFFER_SIZE", "lots")
        
        with pytest.raises(ValueError, match="FILEFLOW_BUFFER_SIZE"):
            load_config(str(tmp_path / "fileflow.yaml"))
    
    def test_config_path_from_env(self, tmp_path, monkeypatch):
        """Test FILEFLOW_CONFIG selects the config file."""
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("settings:\n  max_attempts: 3\n")
        monkeypatch.setenv("FILEFLOW_CONFIG", str(config_path))
        
        assert ConfigLoader().load().settings.max_attempts == 3
    
    def test_save_round_trip(self, tmp_path):
        """Test saving and reloading a configuration."""
        config_path = tmp_path / "out" / "fileflow.yaml"
        loader = ConfigLoader(str(config_path))
        config = FileFlowConfig(settings=Settings(buffer_size=2048, naming_strategy="timestamp"))
        
        loader.save(config)
        
        data = yaml.safe_load(config_path.read_text())
        assert data["settings"]["buffer_size"] == 2048
        assert data["settings"]["naming_strategy"] == "timestamp"
        assert loader.load() == config


class TestActiveSettings:
    """Test suite for process-wide settings."""
    
    def test_default_active_settings(self):
        """Test the default active settings."""
        assert get_settings() == Settings()
    
    def test_configure_and_reset(self):
        """Test configure() swaps and reset_settings() restores."""
        custom = Settings(buffer_size=1024, naming_strategy="timestamp")
        
        previous = configure(custom)
        
        assert previous == Settings()
        assert get_settings() is custom
        assert isinstance(get_naming_strategy(), TimestampStrategy)
        
        reset_settings()
        
        assert get_settings() == Settings()
        assert not isinstance(get_naming_strategy(), TimestampStrategy)
    
    def test_apply_config(self, tmp_path):
        """Test a loaded config activates its settings and logging."""
        log_file = tmp_path / "fileflow.log"
        config = FileFlowConfig(
            settings=Settings(buffer_size=2048, naming_strategy="timestamp"),
            logging=LoggingConfig(log_level="DEBUG", log_to_file=True, log_file_path=str(log_file))
        )
        root = logging.getLogger("fileflow")
        
        try:
            previous = apply_config(config)
            
            assert previous == Settings()
            assert get_settings().buffer_size == 2048
            assert isinstance(get_naming_strategy(), TimestampStrategy)
            assert root.level == logging.DEBUG
            assert log_file.exists()
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            root.setLevel(logging.NOTSET)
            root.propagate = True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
