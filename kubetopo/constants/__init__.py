"""Constants module for kubetopo.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (filter keys, sentinels)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings
"""

from kubetopo.constants.defaults import (
    LOCALE_DEFAULT,
    LOG_LEVEL_DEFAULT,
)
from kubetopo.constants.enums import (
    ClusterLabelKey,
    ClusterStatusBucket,
    FilterCategory,
    PodStatusBucket,
    ViewMode,
)
from kubetopo.constants.limits import (
    MAX_SPARE_SHAPES,
    MAX_TYPE_CHIPS,
)
from kubetopo.constants.values import (
    APP_TITLE,
    NO_NAMESPACE,
    OTHER_TYPE,
    TYPE_FILTER_KEY,
)

__all__ = [
    # Application
    "APP_TITLE",
    # Defaults
    "LOCALE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    # Limits
    "MAX_SPARE_SHAPES",
    "MAX_TYPE_CHIPS",
    # Sentinels
    "NO_NAMESPACE",
    "OTHER_TYPE",
    "TYPE_FILTER_KEY",
    # Enums
    "ClusterLabelKey",
    "ClusterStatusBucket",
    "FilterCategory",
    "PodStatusBucket",
    "ViewMode",
]
