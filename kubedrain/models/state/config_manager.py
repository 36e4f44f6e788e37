"""Settings file loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubedrain.constants.values import APP_NAME
from kubedrain.models.state.app_settings import AppSettings, ConfigLoadError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads AppSettings from a YAML file and applies overrides."""

    DEFAULT_PATH = Path.home() / ".config" / APP_NAME / "settings.yaml"

    @classmethod
    def load(cls, path: str | Path | None = None) -> AppSettings:
        """Load settings from ``path``, or the default location when it exists.

        An explicit path that does not exist is an error; a missing default
        file just yields default settings.

        Raises:
            ConfigLoadError: The file cannot be read, parsed or validated.
        """
        explicit = path is not None
        settings_path = Path(path).expanduser() if path is not None else cls.DEFAULT_PATH

        if not settings_path.exists():
            if explicit:
                raise ConfigLoadError(f"Settings file not found: {settings_path}")
            return AppSettings()

        try:
            with settings_path.open(encoding="utf-8") as handle:
                raw = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Failed to read settings {settings_path}: {exc}") from exc

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"Settings file {settings_path} must contain a mapping")

        try:
            settings = AppSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {settings_path}: {exc}") from exc

        logger.debug("Loaded settings from %s", settings_path)
        return settings

    @staticmethod
    def apply_overrides(settings: AppSettings, overrides: dict[str, Any]) -> AppSettings:
        """Return a copy of settings with non-None overrides applied and validated.

        Raises:
            ConfigLoadError: An override value is invalid.
        """
        values = settings.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return AppSettings.model_validate(values)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid option: {exc}") from exc
