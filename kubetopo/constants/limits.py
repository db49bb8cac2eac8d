"""Limit and threshold constants for the topology filter engine.

All limit values, thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# Type chip limits
# ============================================================================

MAX_TYPE_CHIPS: Final = 8
MAX_SPARE_SHAPES: Final = 5

# Spare shapes are only handed out when there are more than this many
# unknown types and fewer than this many first-class types.
SPARE_SHAPE_UNKNOWN_THRESHOLD: Final = 3
SPARE_SHAPE_FIRST_CLASS_THRESHOLD: Final = 3

# ============================================================================
# Validation limits
# ============================================================================

TYPE_CHIPS_MIN: Final = 1
TYPE_CHIPS_MAX: Final = MAX_TYPE_CHIPS
SPARE_SHAPES_MIN: Final = 0
SPARE_SHAPES_MAX: Final = 16

__all__ = [
    "MAX_SPARE_SHAPES",
    "MAX_TYPE_CHIPS",
    "SPARE_SHAPES_MAX",
    "SPARE_SHAPES_MIN",
    "SPARE_SHAPE_FIRST_CLASS_THRESHOLD",
    "SPARE_SHAPE_UNKNOWN_THRESHOLD",
    "TYPE_CHIPS_MAX",
    "TYPE_CHIPS_MIN",
]
