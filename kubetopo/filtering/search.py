"""Split filter selections into category filters and search seeds."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kubetopo.constants.enums import ViewMode
from kubetopo.filtering.registry import DEFAULT_MODE_REGISTRY, ModeRegistry
from kubetopo.models.filters.filter_state import SearchFilterSplit


def get_search_filter(
    mode: ViewMode | str | None,
    filters: Mapping[str, Any] | None = None,
    *,
    registry: ModeRegistry = DEFAULT_MODE_REGISTRY,
) -> SearchFilterSplit:
    """Separate search-capable selections from pure category filters.

    Selections of a mode's search categories also match related nodes by
    text, so they go to ``search``; empty ones are dropped. Everything else
    stays in ``filters``.
    """
    spec = registry.get(mode)
    split = SearchFilterSplit()
    for key, value in (filters or {}).items():
        if not spec.has_search_type(key):
            split.filters[key] = value
            continue
        if value:
            if split.search is None:
                split.search = {}
            split.search[key] = value
    return split
