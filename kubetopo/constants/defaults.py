"""Default values for settings.

All default values used in the FilterSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Locale defaults
# ============================================================================

LOCALE_DEFAULT: Final = "en-US"

# ============================================================================
# Logging defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "WARNING"

# ============================================================================
# Config file defaults
# ============================================================================

CONFIG_DIR_DEFAULT: Final = "~/.config/kubetopo"
CONFIG_FILE_DEFAULT: Final = "settings.yaml"

__all__ = [
    "CONFIG_DIR_DEFAULT",
    "CONFIG_FILE_DEFAULT",
    "LOCALE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
]
