"""
Configuration manager for the StuddyBuddy client.

Loads ``config.toml``, layers environment variable overrides on top and
validates the result into a ``ClientConfig``.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomli_w
from pydantic import ValidationError

from studdybuddy.exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from studdybuddy.logging import get_logger

from .models import DEFAULT_CONFIG_DIR, ClientConfig, StuddyBuddySettings

logger = get_logger(__name__)


@dataclass
class EnvironmentOverride:
    """Helper for applying environment variable overrides."""
    config_section: Dict[str, Any]
    settings: StuddyBuddySettings

    def apply_if_set(self, setting_name: str, config_key: str) -> None:
        value = getattr(self.settings, setting_name, None)
        if value is not None:
            self.config_section[config_key] = value


class ConfigManager:
    """Load, validate and persist client configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to custom config file. If None, uses
                ``~/.config/studdybuddy/config.toml``.
        """
        self.config_file = Path(config_file) if config_file else DEFAULT_CONFIG_DIR / "config.toml"
        self._config: Optional[ClientConfig] = None

    def load_config(self) -> ClientConfig:
        """Load and validate configuration from file and environment."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}
        if self.config_file.exists():
            config_data = self._load_toml_file()

        config_data = self._apply_env_overrides(config_data)

        try:
            self._config = ClientConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            ) from e

        logger.debug("Configuration loaded", config_file=str(self.config_file))
        return self._config

    def _load_toml_file(self) -> Dict[str, Any]:
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(self.config_file), f"Invalid TOML syntax: {e}", "valid TOML format"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file {self.config_file}: {e}",
                help_text=f"Check that {self.config_file} is readable",
            ) from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        settings = StuddyBuddySettings()

        for section in ("api", "session", "logging"):
            config_data.setdefault(section, {})

        api = EnvironmentOverride(config_data["api"], settings)
        api.apply_if_set("base_url", "base_url")
        api.apply_if_set("timeout", "timeout")
        api.apply_if_set("login_path", "login_path")

        EnvironmentOverride(config_data["session"], settings).apply_if_set(
            "session_file", "file_path"
        )

        log = EnvironmentOverride(config_data["logging"], settings)
        log.apply_if_set("log_level", "level")
        log.apply_if_set("log_format", "format")

        return config_data

    def save_config(self, config: Optional[ClientConfig] = None) -> Path:
        """Write configuration to ``config_file`` as TOML."""
        config = config or self.load_config()
        data = _strip_none(config.model_dump(mode="json"))

        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "wb") as f:
                tomli_w.dump(data, f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot write configuration file {self.config_file}: {e}",
                help_text=f"Check that you have write permissions for {self.config_file.parent}",
            ) from e

        self._config = config
        logger.info("Configuration saved", config_file=str(self.config_file))
        return self.config_file

    def set_value(self, section: str, key: str, value: Any) -> ClientConfig:
        """Validate and persist a single ``section.key`` setting."""
        config = self.load_config()
        data = config.model_dump()
        if section not in data or key not in data[section]:
            raise InvalidConfigurationError(
                f"{section}.{key}", value, "a known configuration key"
            )
        if isinstance(value, str) and not value.strip():
            raise MissingConfigurationError(f"{section}.{key}")

        if isinstance(data[section][key], list) and isinstance(value, str):
            value = [item.strip() for item in value.split(",") if item.strip()]
        data[section][key] = value
        try:
            updated = ClientConfig(**data)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"{section}.{key}", value, e.errors()[0]["msg"]
            ) from e

        self.save_config(updated)
        return updated

    def reset_config(self) -> ClientConfig:
        """Replace the stored configuration with defaults."""
        self._config = None
        defaults = ClientConfig()
        self.save_config(defaults)
        return defaults


def _strip_none(data: Any) -> Any:
    # TOML has no null
    if isinstance(data, dict):
        return {k: _strip_none(v) for k, v in data.items() if v is not None}
    return data
