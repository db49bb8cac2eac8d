"""Filter engine settings models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubetopo.constants.defaults import LOCALE_DEFAULT, LOG_LEVEL_DEFAULT
from kubetopo.constants.limits import (
    MAX_SPARE_SHAPES,
    MAX_TYPE_CHIPS,
    SPARE_SHAPE_FIRST_CLASS_THRESHOLD,
    SPARE_SHAPE_UNKNOWN_THRESHOLD,
    SPARE_SHAPES_MAX,
    SPARE_SHAPES_MIN,
    TYPE_CHIPS_MAX,
    TYPE_CHIPS_MIN,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FilterSettings(BaseModel):
    """Filter engine settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Type chips
    max_type_chips: int = Field(
        default=MAX_TYPE_CHIPS, ge=TYPE_CHIPS_MIN, le=TYPE_CHIPS_MAX
    )

    # Spare shapes for unknown node types
    max_spare_shapes: int = Field(
        default=MAX_SPARE_SHAPES, ge=SPARE_SHAPES_MIN, le=SPARE_SHAPES_MAX
    )
    spare_shape_unknown_threshold: int = Field(
        default=SPARE_SHAPE_UNKNOWN_THRESHOLD, ge=0
    )
    spare_shape_first_class_threshold: int = Field(
        default=SPARE_SHAPE_FIRST_CLASS_THRESHOLD, ge=0
    )

    # Display
    default_locale: str = LOCALE_DEFAULT
    log_level: str = LOG_LEVEL_DEFAULT

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
