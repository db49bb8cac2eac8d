"""Filter state containers passed between the engine and its callers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from kubetopo.constants.values import TYPE_FILTER_KEY

# Category key -> selected values. ``type`` keeps chip order, so it is
# usually a list; every other category is a set.
ActiveFilters = dict[str, Any]

# Node type -> shape descriptor, opaque to the engine.
TypeShapeMap = dict[str, Any]


@dataclass(frozen=True)
class FilterOptions:
    """Caller options for type bucketing.

    Attributes:
        available_types: Explicit type chip allow-list.
        initial_active_types: Type selection used until one exists.
    """

    available_types: tuple[str, ...] | None = None
    initial_active_types: tuple[str, ...] | None = None

    @classmethod
    def from_value(cls, value: FilterOptions | Mapping[str, Any] | None) -> FilterOptions:
        """Accept options as an instance or a mapping with snake or camel keys."""
        if isinstance(value, FilterOptions):
            return value
        if not value:
            return cls()
        available = value.get("available_types", value.get("availableTypes"))
        initial = value.get("initial_active_types", value.get("initialActiveTypes"))
        return cls(
            available_types=tuple(available) if available is not None else None,
            initial_active_types=tuple(initial) if initial is not None else None,
        )


@dataclass
class FilterCategoryInfo:
    """Display name and available values of one filter category.

    ``available_set`` is a set of raw values, or an ordered mapping of
    stable bucket key -> localized label for status categories.
    """

    name: str | None
    available_set: set[str] | dict[str, str] = field(default_factory=set)

    def values(self) -> list[str]:
        """Selectable values (bucket keys for status categories)."""
        if isinstance(self.available_set, dict):
            return list(self.available_set)
        return sorted(self.available_set)


@dataclass
class AvailableFilters:
    """Type chips plus per-category available values."""

    types: list[str] = field(default_factory=list)
    categories: dict[str, FilterCategoryInfo] = field(default_factory=dict)

    def __contains__(self, key: object) -> bool:
        if key == TYPE_FILTER_KEY:
            return bool(self.types)
        return key in self.categories

    def get(self, key: str) -> FilterCategoryInfo | None:
        return self.categories.get(key)

    def is_empty(self) -> bool:
        return not self.types and not self.categories


@dataclass
class AllFiltersResult:
    """Result of computing available and active filters for a node set."""

    available_filters: AvailableFilters = field(default_factory=AvailableFilters)
    other_type_filters: list[str] = field(default_factory=list)
    active_filters: ActiveFilters = field(default_factory=dict)
    type_to_shape_map: TypeShapeMap = field(default_factory=dict)


@dataclass
class SearchFilterSplit:
    """Selections split into pure filters and search seeds.

    ``search`` is None when no search-capable category has a selection.
    """

    filters: dict[str, Any] = field(default_factory=dict)
    search: dict[str, Any] | None = None


def active_set(active_filters: Mapping[str, Any] | None, key: str) -> set[str]:
    """Selected values of one category as a set, empty when missing."""
    if not active_filters:
        return set()
    values = active_filters.get(key)
    if not values:
        return set()
    if isinstance(values, str):
        return {values}
    if isinstance(values, Iterable):
        return set(values)
    return set()
