"""
Configuration models for the StuddyBuddy client.

Pydantic models validate ``config.toml``; ``StuddyBuddySettings`` carries the
environment variable overrides.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from studdybuddy.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_FILE_SIZE_BYTES,
    DEFAULT_LOGIN_PATH,
    DEFAULT_MAX_RETRIES,
    DEFAULT_SESSION_KEY,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_TIMEOUT_SECONDS,
    MAX_TRANSPORT_RETRIES,
    MIN_LOG_FILE_SIZE_BYTES,
)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "studdybuddy"


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class SessionStoreType(str, Enum):
    """Where the logged-in user record is kept."""

    FILE = "file"
    MEMORY = "memory"


class ApiConfig(BaseModel):
    """StuddyBuddy API connection settings."""

    base_url: str = Field(DEFAULT_BASE_URL, description="API base URL")
    timeout: int = Field(
        DEFAULT_TIMEOUT_SECONDS,
        ge=1,
        le=MAX_TIMEOUT_SECONDS,
        description="Request timeout in seconds",
    )
    max_retries: int = Field(
        DEFAULT_MAX_RETRIES,
        ge=0,
        le=MAX_TRANSPORT_RETRIES,
        description="Transport-level connection retries",
    )
    with_credentials: bool = Field(
        True, description="Keep and send cookies with every request"
    )
    login_path: str = Field(
        DEFAULT_LOGIN_PATH, description="Login location used when a session expires"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("login_path")
    @classmethod
    def validate_login_path(cls, v: str) -> str:
        if not v.startswith("/"):
            return "/" + v
        return v


class SessionConfig(BaseModel):
    """Session storage settings."""

    store: SessionStoreType = Field(SessionStoreType.FILE, description="Session store type")
    file_path: Path = Field(
        DEFAULT_CONFIG_DIR / "session.json", description="Session file path"
    )
    key: str = Field(DEFAULT_SESSION_KEY, min_length=1, description="Key of the user record")

    @field_validator("store", mode="before")
    @classmethod
    def normalize_store(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("file_path")
    @classmethod
    def expand_file_path(cls, v: Path) -> Path:
        return Path(v).expanduser()


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Logging level")
    format: str = Field("console", description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        DEFAULT_LOG_FILE_SIZE_BYTES,
        ge=MIN_LOG_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        DEFAULT_LOG_BACKUP_COUNT,
        ge=1,
        le=20,
        description="Number of backup log files to keep",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ["console", "json", "rich"]:
            raise ValueError("format must be one of: console, json, rich")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: List[str]) -> List[str]:
        valid_outputs = {"console", "file"}
        for output in v:
            if output not in valid_outputs:
                raise ValueError(
                    f"output must contain only: {', '.join(sorted(valid_outputs))}"
                )
        return v


class ClientConfig(BaseModel):
    """Main StuddyBuddy client configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }


class StuddyBuddySettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    base_url: Optional[str] = Field(None, alias="STUDDYBUDDY_BASE_URL")
    timeout: Optional[int] = Field(None, alias="STUDDYBUDDY_TIMEOUT")
    login_path: Optional[str] = Field(None, alias="STUDDYBUDDY_LOGIN_PATH")
    session_file: Optional[str] = Field(None, alias="STUDDYBUDDY_SESSION_FILE")
    log_level: Optional[str] = Field(None, alias="STUDDYBUDDY_LOG_LEVEL")
    log_format: Optional[str] = Field(None, alias="STUDDYBUDDY_LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
