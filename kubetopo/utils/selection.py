"""Helpers for toggling values in active filter selections."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from kubetopo.constants.values import TYPE_FILTER_KEY
from kubetopo.models.filters.filter_state import ActiveFilters, active_set


def add_or_remove(values: Iterable[Hashable] | None, value: Hashable) -> list[Any]:
    """Remove ``value`` if present, otherwise append it.

    Always returns a new list; the input is left untouched.
    """
    current = list(values or [])
    if value in current:
        return [item for item in current if item != value]
    return [*current, value]


def toggle_filter_value(
    active_filters: Mapping[str, Any] | None,
    category: str,
    value: str,
) -> ActiveFilters:
    """Return a copy of ``active_filters`` with ``value`` toggled in ``category``.

    The ``type`` category keeps chip order and stays a list; every other
    category is a set. An emptied set is kept as an empty set so that the
    category reads as "no filter".
    """
    updated: ActiveFilters = dict(active_filters or {})
    if category == TYPE_FILTER_KEY:
        updated[category] = add_or_remove(updated.get(category), value)
        return updated

    selected = active_set(updated, category)
    if value in selected:
        selected.discard(value)
    else:
        selected.add(value)
    updated[category] = selected
    return updated
