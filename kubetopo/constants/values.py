"""Scalar constants for the topology filter engine.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "kubetopo"

# ============================================================================
# Filter keys and sentinels
# ============================================================================

TYPE_FILTER_KEY: Final = "type"
OTHER_TYPE: Final = "other"
NO_NAMESPACE: Final = "<none>"
SPARE_SHAPE_PREFIX: Final = "spare"
CLUSTER_NODE_TYPE: Final = "cluster"
POD_NODE_TYPE: Final = "pod"

# ============================================================================
# Environment
# ============================================================================

CONFIG_PATH_ENV: Final = "KUBETOPO_CONFIG"

__all__ = [
    "APP_TITLE",
    "CLUSTER_NODE_TYPE",
    "CONFIG_PATH_ENV",
    "NO_NAMESPACE",
    "OTHER_TYPE",
    "POD_NODE_TYPE",
    "SPARE_SHAPE_PREFIX",
    "TYPE_FILTER_KEY",
]
