"""Settings models and loading."""

from kubedrain.models.state.app_settings import AppSettings, ConfigError, ConfigLoadError
from kubedrain.models.state.config_manager import ConfigManager

__all__ = ["AppSettings", "ConfigError", "ConfigLoadError", "ConfigManager"]
