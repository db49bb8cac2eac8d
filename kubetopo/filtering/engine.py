"""Topology filter engine: available filters, active filters, filtered nodes.

Two independent queries share the same inputs. ``get_all_filters`` answers
"what can be filtered by" and is recomputed whenever the node set or the
view mode changes; ``filter_nodes`` answers "what passes" and is recomputed
whenever the selection changes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from kubetopo.constants.enums import ViewMode
from kubetopo.filtering.available import add_assorted_available_filters
from kubetopo.filtering.predicates import filter_nodes as _filter_nodes
from kubetopo.filtering.registry import DEFAULT_MODE_REGISTRY, ModeRegistry
from kubetopo.filtering.search import get_search_filter as _get_search_filter
from kubetopo.filtering.type_buckets import (
    bucket_node_types,
    count_node_types,
    resolve_active_types,
)
from kubetopo.models.filters.filter_state import (
    AllFiltersResult,
    AvailableFilters,
    FilterOptions,
    SearchFilterSplit,
)
from kubetopo.models.state.app_settings import FilterSettings
from kubetopo.models.topology.node import TopologyNode, coerce_nodes
from kubetopo.utils.messages import MessageLookup, lookup_message

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT")
NodeInput = TopologyNode | Mapping[str, Any]


class TopologyFilterEngine:
    """Stateless filter engine bound to a registry, settings and message lookup."""

    def __init__(
        self,
        registry: ModeRegistry = DEFAULT_MODE_REGISTRY,
        settings: FilterSettings | None = None,
        lookup: MessageLookup = lookup_message,
    ) -> None:
        self.registry = registry
        self.settings = settings or FilterSettings()
        self.lookup = lookup

    def _locale(self, locale: str | None) -> str:
        return locale or self.settings.default_locale

    # =========================================================================
    # Available filters
    # =========================================================================

    def get_all_filters(
        self,
        mode: ViewMode | str | None,
        type_to_shape_map: Mapping[str, Any] | None,
        is_loaded: bool,
        nodes: Iterable[NodeInput] | None,
        options: FilterOptions | Mapping[str, Any] | None = None,
        active_filters: Mapping[str, Any] | None = None,
        known_types: Iterable[str] | None = None,
        user_is_filtering: bool = False,
        locale: str | None = None,
    ) -> AllFiltersResult:
        """Compute type chips, the active selection and the mode's categories.

        Args:
            mode: View mode; None skips the mode categories.
            type_to_shape_map: Node type -> shape. Not modified; the returned
                result carries a copy with consumed spare slots removed.
            is_loaded: Whether the node set has finished loading. Accepted
                for call-site compatibility; chips are computed either way.
            nodes: Topology nodes, as models or raw mappings.
            options: ``available_types`` / ``initial_active_types``.
            active_filters: Current selection per category.
            known_types: Types seen before; new ones are logged.
            user_is_filtering: Keep a hand-picked type selection instead of
                following the chips.
            locale: Locale for category display names.

        Returns:
            AllFiltersResult. Without nodes the available filters are empty
            and ``active_filters`` comes back unchanged.
        """
        node_views = coerce_nodes(nodes)
        if not node_views:
            return AllFiltersResult(
                active_filters=active_filters if active_filters is not None else {},
                type_to_shape_map=dict(type_to_shape_map or {}),
            )

        resolved_options = FilterOptions.from_value(options)
        counts = count_node_types(node_views)
        if known_types is not None:
            new_types = sorted(set(counts) - set(known_types))
            if new_types:
                logger.debug("New topology node types: %s", new_types)

        buckets = bucket_node_types(
            counts,
            type_to_shape_map,
            resolved_options.available_types,
            max_type_chips=self.settings.max_type_chips,
            max_spare_shapes=self.settings.max_spare_shapes,
            spare_shape_unknown_threshold=self.settings.spare_shape_unknown_threshold,
            spare_shape_first_class_threshold=self.settings.spare_shape_first_class_threshold,
        )
        available = AvailableFilters(types=buckets.chips)
        resolved_active = resolve_active_types(
            active_filters,
            available.types,
            has_other=bool(buckets.other),
            initial_active_types=resolved_options.initial_active_types,
            user_is_filtering=user_is_filtering,
        )
        logger.debug(
            "Type chips %s, folded into other %s", available.types, buckets.other
        )

        if mode is not None:
            add_assorted_available_filters(
                mode,
                available,
                resolved_active,
                node_views,
                self._locale(locale),
                registry=self.registry,
                lookup=self.lookup,
            )

        return AllFiltersResult(
            available_filters=available,
            other_type_filters=buckets.other,
            active_filters=resolved_active,
            type_to_shape_map=buckets.type_to_shape_map,
        )

    def get_available_filters(
        self,
        mode: ViewMode | str | None,
        nodes: Iterable[NodeInput] | None,
        options: FilterOptions | Mapping[str, Any] | None = None,
        active_filters: Mapping[str, Any] | None = None,
        locale: str | None = None,
    ) -> AvailableFilters:
        """Mode categories only, without type bucketing.

        ``options`` is accepted for call-site symmetry with
        ``get_all_filters`` and does not affect the result.
        """
        available = AvailableFilters()
        add_assorted_available_filters(
            mode,
            available,
            active_filters,
            coerce_nodes(nodes),
            self._locale(locale),
            registry=self.registry,
            lookup=self.lookup,
        )
        return available

    # =========================================================================
    # Filtering
    # =========================================================================

    def filter_nodes(
        self,
        mode: ViewMode | str | None,
        nodes: Iterable[NodeT] | None,
        active_filters: Mapping[str, Any] | None,
        available_filters: AvailableFilters | None = None,
    ) -> list[NodeT]:
        """Nodes passing ``active_filters``, in input order."""
        return _filter_nodes(
            mode, nodes, active_filters, available_filters, registry=self.registry
        )

    def get_search_filter(
        self,
        mode: ViewMode | str | None,
        filters: Mapping[str, Any] | None = None,
    ) -> SearchFilterSplit:
        """Split selections into category filters and search seeds."""
        return _get_search_filter(mode, filters, registry=self.registry)


default_engine = TopologyFilterEngine()


def get_all_filters(
    mode: ViewMode | str | None,
    type_to_shape_map: Mapping[str, Any] | None,
    is_loaded: bool,
    nodes: Iterable[NodeInput] | None,
    options: FilterOptions | Mapping[str, Any] | None = None,
    active_filters: Mapping[str, Any] | None = None,
    known_types: Iterable[str] | None = None,
    user_is_filtering: bool = False,
    locale: str | None = None,
) -> AllFiltersResult:
    """``TopologyFilterEngine.get_all_filters`` on the default engine."""
    return default_engine.get_all_filters(
        mode,
        type_to_shape_map,
        is_loaded,
        nodes,
        options,
        active_filters,
        known_types,
        user_is_filtering,
        locale,
    )


def get_available_filters(
    mode: ViewMode | str | None,
    nodes: Iterable[NodeInput] | None,
    options: FilterOptions | Mapping[str, Any] | None = None,
    active_filters: Mapping[str, Any] | None = None,
    locale: str | None = None,
) -> AvailableFilters:
    return default_engine.get_available_filters(mode, nodes, options, active_filters, locale)


def filter_nodes(
    mode: ViewMode | str | None,
    nodes: Iterable[NodeT] | None,
    active_filters: Mapping[str, Any] | None,
    available_filters: AvailableFilters | None = None,
) -> list[NodeT]:
    return default_engine.filter_nodes(mode, nodes, active_filters, available_filters)


def get_search_filter(
    mode: ViewMode | str | None,
    filters: Mapping[str, Any] | None = None,
) -> SearchFilterSplit:
    return default_engine.get_search_filter(mode, filters)
