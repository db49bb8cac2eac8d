"""Topology filter engine."""

from kubetopo.filtering.engine import (
    TopologyFilterEngine,
    default_engine,
    filter_nodes,
    get_all_filters,
    get_available_filters,
    get_search_filter,
)
from kubetopo.filtering.registry import (
    DEFAULT_MODE_REGISTRY,
    ModeFilterSpec,
    ModeRegistry,
)

__all__ = [
    "DEFAULT_MODE_REGISTRY",
    "ModeFilterSpec",
    "ModeRegistry",
    "TopologyFilterEngine",
    "default_engine",
    "filter_nodes",
    "get_all_filters",
    "get_available_filters",
    "get_search_filter",
]
