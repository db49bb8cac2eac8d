"""kubetopo - topology filter engine for a multi-cluster Kubernetes console."""

from kubetopo.constants.enums import FilterCategory, ViewMode
from kubetopo.filtering import (
    DEFAULT_MODE_REGISTRY,
    ModeFilterSpec,
    ModeRegistry,
    TopologyFilterEngine,
    filter_nodes,
    get_all_filters,
    get_available_filters,
    get_search_filter,
)
from kubetopo.models.filters import (
    AllFiltersResult,
    AvailableFilters,
    FilterCategoryInfo,
    FilterOptions,
    SearchFilterSplit,
)
from kubetopo.models.topology import TopologyNode

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MODE_REGISTRY",
    "AllFiltersResult",
    "AvailableFilters",
    "FilterCategory",
    "FilterCategoryInfo",
    "FilterOptions",
    "ModeFilterSpec",
    "ModeRegistry",
    "SearchFilterSplit",
    "TopologyFilterEngine",
    "TopologyNode",
    "ViewMode",
    "filter_nodes",
    "get_all_filters",
    "get_available_filters",
    "get_search_filter",
]
