"""
Unit tests for ConfigManager.
"""

import tomllib

import pytest

from studdybuddy.core.config import (
    ConfigManager,
    ConfigurationValidationError,
    InvalidConfigurationError,
    LogLevel,
    MissingConfigurationError,
    SessionStoreType,
)


class TestConfigManager:
    """Test loading, overriding and saving configuration."""

    def test_defaults_without_file(self, config_file):
        config = ConfigManager(config_file).load_config()

        assert config.api.base_url == "http://localhost:5000"
        assert not config_file.exists()

    def test_load_from_toml(self, config_file):
        config_file.write_text(
            '[api]\nbase_url = "https://api.test/"\ntimeout = 12\n'
            '[session]\nstore = "memory"\n'
        )

        config = ConfigManager(config_file).load_config()

        assert config.api.base_url == "https://api.test"
        assert config.api.timeout == 12
        assert config.session.store == SessionStoreType.MEMORY

    def test_load_is_cached(self, config_file):
        manager = ConfigManager(config_file)

        assert manager.load_config() is manager.load_config()

    def test_invalid_toml(self, config_file):
        config_file.write_text("[api\nbase_url = ")

        with pytest.raises(InvalidConfigurationError):
            ConfigManager(config_file).load_config()

    def test_invalid_values(self, config_file):
        config_file.write_text('[api]\ntimeout = 0\n')

        with pytest.raises(ConfigurationValidationError) as exc_info:
            ConfigManager(config_file).load_config()

        assert any("api.timeout" in error for error in exc_info.value.errors)

    def test_environment_overrides(self, config_file, monkeypatch):
        config_file.write_text('[api]\nbase_url = "https://file.test"\n')
        monkeypatch.setenv("STUDDYBUDDY_BASE_URL", "https://env.test")
        monkeypatch.setenv("STUDDYBUDDY_TIMEOUT", "5")
        monkeypatch.setenv("STUDDYBUDDY_LOG_LEVEL", "debug")
        monkeypatch.setenv("STUDDYBUDDY_SESSION_FILE", "/tmp/sb-session.json")

        config = ConfigManager(config_file).load_config()

        assert config.api.base_url == "https://env.test"
        assert config.api.timeout == 5
        assert config.logging.level.value == "DEBUG"
        assert str(config.session.file_path) == "/tmp/sb-session.json"

    def test_save_round_trip(self, config_file):
        manager = ConfigManager(config_file)
        manager.set_value("api", "base_url", "https://saved.test")

        with open(config_file, "rb") as f:
            data = tomllib.load(f)

        assert data["api"]["base_url"] == "https://saved.test"
        assert ConfigManager(config_file).load_config().api.base_url == "https://saved.test"

    def test_set_value_coerces_strings(self, config_file):
        manager = ConfigManager(config_file)

        config = manager.set_value("api", "timeout", "15")
        config = manager.set_value("api", "with_credentials", "false")
        config = manager.set_value("logging", "output", "console, file")

        assert config.api.timeout == 15
        assert config.api.with_credentials is False
        assert config.logging.output == ["console", "file"]

    def test_set_enum_values_ignore_case(self, config_file):
        manager = ConfigManager(config_file)

        manager.set_value("logging", "level", "debug")
        config = manager.set_value("session", "store", "MEMORY")

        assert config.logging.level == LogLevel.DEBUG
        assert config.session.store == SessionStoreType.MEMORY
        assert tomllib.loads(config_file.read_text())["logging"]["level"] == "DEBUG"

    def test_set_unknown_key(self, config_file):
        with pytest.raises(InvalidConfigurationError):
            ConfigManager(config_file).set_value("api", "colour", "blue")

    def test_set_invalid_value(self, config_file):
        manager = ConfigManager(config_file)

        with pytest.raises(InvalidConfigurationError):
            manager.set_value("api", "base_url", "ftp://nope")

        assert not config_file.exists()

    def test_reset(self, config_file):
        manager = ConfigManager(config_file)
        manager.set_value("api", "timeout", "15")

        config = manager.reset_config()

        assert config.api.timeout == 30
        assert ConfigManager(config_file).load_config().api.timeout == 30

    def test_set_empty_value(self, config_file):
        with pytest.raises(MissingConfigurationError):
            ConfigManager(config_file).set_value("api", "base_url", " ")
