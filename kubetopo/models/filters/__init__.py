"""Filter state models."""

from kubetopo.models.filters.filter_state import (
    ActiveFilters,
    AllFiltersResult,
    AvailableFilters,
    FilterCategoryInfo,
    FilterOptions,
    SearchFilterSplit,
    TypeShapeMap,
    active_set,
)

__all__ = [
    "ActiveFilters",
    "AllFiltersResult",
    "AvailableFilters",
    "FilterCategoryInfo",
    "FilterOptions",
    "SearchFilterSplit",
    "TypeShapeMap",
    "active_set",
]
