"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubedrain.constants.defaults import (
    LOG_LEVEL_DEFAULT,
    MAX_CONCURRENT_DEFAULT,
    OUTPUT_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
    SHOW_DAEMONSETS_DEFAULT,
)
from kubedrain.constants.enums import OutputFormat

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Cluster access
    kubeconfig: str | None = None
    context: str | None = None
    request_timeout: str = Field(default=REQUEST_TIMEOUT_DEFAULT, pattern=r"^\d+[smh]?$")
    max_concurrent: int = Field(default=MAX_CONCURRENT_DEFAULT, ge=1, le=32)

    # Output
    output: OutputFormat = OutputFormat(OUTPUT_DEFAULT)
    show_daemonsets: bool = SHOW_DAEMONSETS_DEFAULT
    log_level: str = LOG_LEVEL_DEFAULT

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""
