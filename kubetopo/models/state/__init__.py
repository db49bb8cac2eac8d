"""Settings models and persistence."""

from kubetopo.models.state.app_settings import (
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    FilterSettings,
)
from kubetopo.models.state.config_manager import ConfigManager

__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "FilterSettings",
]
