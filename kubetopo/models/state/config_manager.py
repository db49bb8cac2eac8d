"""Settings persistence backed by a YAML file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubetopo.constants.defaults import CONFIG_DIR_DEFAULT, CONFIG_FILE_DEFAULT
from kubetopo.constants.values import CONFIG_PATH_ENV
from kubetopo.models.state.app_settings import (
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    FilterSettings,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Load and save FilterSettings."""

    @staticmethod
    def default_path() -> Path:
        """Settings path from the environment, else the per-user default."""
        env_path = os.environ.get(CONFIG_PATH_ENV, "").strip()
        if env_path:
            return Path(env_path).expanduser()
        return Path(CONFIG_DIR_DEFAULT).expanduser() / CONFIG_FILE_DEFAULT

    @classmethod
    def load(cls, path: Path | None = None) -> FilterSettings:
        """Load settings, returning defaults when the file does not exist.

        Raises:
            ConfigLoadError: If the file cannot be read, parsed or validated.
        """
        settings_path = path or cls.default_path()
        if not settings_path.exists():
            logger.debug("No settings file at %s, using defaults", settings_path)
            return FilterSettings()

        try:
            raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Cannot read settings from {settings_path}: {exc}") from exc

        if raw is None:
            return FilterSettings()
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"Settings file {settings_path} must contain a mapping")

        try:
            return FilterSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {settings_path}: {exc}") from exc

    @classmethod
    def save(cls, settings: FilterSettings, path: Path | None = None) -> Path:
        """Write settings as YAML and return the path written.

        Raises:
            ConfigSaveError: If the file cannot be written.
        """
        settings_path = path or cls.default_path()
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            settings_path.write_text(
                yaml.safe_dump(settings.model_dump(), sort_keys=True),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigSaveError(f"Cannot write settings to {settings_path}: {exc}") from exc
        return settings_path


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "FilterSettings",
]
