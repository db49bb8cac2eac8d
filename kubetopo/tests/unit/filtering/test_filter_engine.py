"""Unit tests for TopologyFilterEngine and the module-level entry points.

This module tests:
- get_all_filters() guards, type chips, active type resolution
- get_all_filters() mode categories fed by the resolved active types
- get_available_filters() without type bucketing
- Engine wiring of settings, lookup and registry
"""

from __future__ import annotations

from typing import Any

from kubetopo import filtering
from kubetopo.constants.enums import FilterCategory, ViewMode
from kubetopo.filtering.engine import (
    TopologyFilterEngine,
    filter_nodes,
    get_all_filters,
    get_available_filters,
    get_search_filter,
)
from kubetopo.models.filters.filter_state import FilterOptions
from kubetopo.models.state.app_settings import FilterSettings

# =============================================================================
# Test Helpers
# =============================================================================

_SHAPES: dict[str, Any] = {
    "pod": "circle",
    "deployment": "hexagon",
    "service": "square",
    "cluster": "diamond",
    "application": "triangle",
}


def _make_node(node_type: str, name: str, **extra: Any) -> dict[str, Any]:
    return {"type": node_type, "name": name, **extra}


def _weave_nodes() -> list[dict[str, Any]]:
    return [
        _make_node(
            "pod",
            "web-1",
            namespace="ns1",
            specs={"podStatus": {"hasFailure": True, "hostIPs": ["10.0.0.1"]}},
        ),
        _make_node(
            "pod",
            "web-2",
            namespace="ns1",
            specs={"podStatus": {"isRecent": True, "hostIPs": ["10.0.0.2"]}},
        ),
        _make_node("deployment", "web", namespace="ns1"),
        _make_node("widget", "mystery", namespace="ns3"),
    ]


# =============================================================================
# Guards
# =============================================================================


class TestGetAllFiltersGuards:
    """Tests for early returns."""

    def test_empty_nodes_return_active_unchanged(self) -> None:
        active = {"type": ["pod"], "namespaces": {"ns1"}}

        result = get_all_filters("weave", _SHAPES, True, [], active_filters=active)

        assert result.available_filters.is_empty()
        assert result.other_type_filters == []
        assert result.active_filters is active

    def test_none_nodes(self) -> None:
        result = get_all_filters("weave", _SHAPES, True, None)

        assert result.available_filters.is_empty()
        assert result.active_filters == {}

    def test_loaded_flag_does_not_gate_chips(self) -> None:
        nodes = [_make_node("pod", "web-1", namespace="ns1")]

        result = get_all_filters("weave", _SHAPES, False, nodes)

        assert result.available_filters.types == ["pod"]
        assert result.active_filters["type"] == ["pod"]
        namespaces = result.available_filters.get(FilterCategory.NAMESPACES.value)
        assert namespaces is not None and namespaces.available_set == {"ns1"}


# =============================================================================
# Type chips and active types
# =============================================================================


class TestGetAllFiltersTypes:
    """Tests for type chips and active type resolution."""

    def test_types_and_other(self) -> None:
        result = get_all_filters(None, _SHAPES, True, _weave_nodes())

        assert result.available_filters.types == ["deployment", "pod", "other"]
        assert result.other_type_filters == ["widget"]
        assert result.active_filters["type"] == ["deployment", "pod", "other"]

    def test_other_types_never_listed_as_chips(self) -> None:
        result = get_all_filters(None, _SHAPES, True, _weave_nodes())

        assert not set(result.other_type_filters) & set(result.available_filters.types)

    def test_more_than_eight_shaped_types(self) -> None:
        names = [f"kind{index}" for index in range(10)]
        nodes = [
            _make_node(name, f"{name}-{copy}")
            for index, name in enumerate(names)
            for copy in range(10 - index)
        ]
        shapes = {name: "circle" for name in names}

        result = get_all_filters(None, shapes, True, nodes)

        chips = result.available_filters.types
        assert chips == [*sorted(names[:8]), "other"]
        assert result.other_type_filters == ["kind8", "kind9"]
        assert len([chip for chip in chips if chip != "other"]) <= 8

    def test_user_selection_kept_and_pruned(self) -> None:
        result = get_all_filters(
            None,
            _SHAPES,
            True,
            _weave_nodes(),
            active_filters={"type": ["pod", "widget"]},
            user_is_filtering=True,
        )

        assert result.active_filters["type"] == ["pod"]

    def test_initial_active_types_option(self) -> None:
        result = get_all_filters(
            None,
            _SHAPES,
            True,
            _weave_nodes(),
            options={"initialActiveTypes": ["deployment"]},
        )

        assert result.active_filters["type"] == ["deployment"]

    def test_available_types_option(self) -> None:
        result = get_all_filters(
            None,
            _SHAPES,
            True,
            _weave_nodes(),
            options=FilterOptions(available_types=("pod",)),
        )

        assert result.available_filters.types == ["pod", "other"]
        assert result.other_type_filters == ["deployment", "widget"]

    def test_shape_map_returned_not_mutated(self) -> None:
        shapes = {"pod": "circle", **{f"spare{i}": f"s{i}" for i in range(1, 6)}}
        nodes = [_make_node(f"u{i}", f"n{i}") for i in range(1, 5)] + [_make_node("pod", "p")]

        result = get_all_filters(None, shapes, True, nodes)

        assert "spare1" in shapes
        assert "u1" not in shapes
        assert result.type_to_shape_map["u1"] == "s1"
        assert "spare1" not in result.type_to_shape_map
        assert result.available_filters.types == ["pod", "u1", "u2", "u3", "u4"]


# =============================================================================
# Mode categories
# =============================================================================


class TestGetAllFiltersModes:
    """Tests for the mode categories built from resolved active types."""

    def test_weave_categories_follow_active_types(self) -> None:
        result = get_all_filters("weave", _SHAPES, True, _weave_nodes())

        available = result.available_filters
        host_ips = available.get(FilterCategory.HOST_IPS.value)
        namespaces = available.get(FilterCategory.NAMESPACES.value)
        assert host_ips is not None and host_ips.available_set == {"10.0.0.1", "10.0.0.2"}
        assert namespaces is not None and namespaces.available_set == {"ns1", "ns3"}

    def test_user_selection_without_pods_hides_pod_categories(self) -> None:
        result = get_all_filters(
            "weave",
            _SHAPES,
            True,
            _weave_nodes(),
            active_filters={"type": ["deployment"]},
            user_is_filtering=True,
        )

        assert FilterCategory.POD_STATUSES.value not in result.available_filters
        namespaces = result.available_filters.get(FilterCategory.NAMESPACES.value)
        assert namespaces is not None and namespaces.available_set == {"ns1"}

    def test_cluster_mode(self) -> None:
        nodes = [
            _make_node("cluster", "east", specs={"cluster": {"metadata": {"labels": {"cloud": "aws"}}}}),
            _make_node("application", "app"),
        ]

        result = get_all_filters(ViewMode.CLUSTER, _SHAPES, True, nodes)

        providers = result.available_filters.get("providers")
        assert providers is not None and providers.available_set == {"aws"}
        assert filter_nodes(
            "cluster", nodes, {**result.active_filters, "providers": {"aws"}}
        ) == nodes

    def test_end_to_end_weave_filtering(self) -> None:
        nodes = _weave_nodes()
        result = get_all_filters("weave", _SHAPES, True, nodes)
        active = {**result.active_filters, "podStatuses": {"failed"}}

        visible = filter_nodes("weave", nodes, active, result.available_filters)

        assert [node["name"] for node in visible] == ["web-1"]


# =============================================================================
# get_available_filters
# =============================================================================


class TestGetAvailableFilters:
    """Tests for get_available_filters()."""

    def test_categories_without_types(self) -> None:
        available = get_available_filters("weave", _weave_nodes(), None, {"type": ["pod"]})

        assert available.types == []
        namespaces = available.get(FilterCategory.NAMESPACES.value)
        assert namespaces is not None and namespaces.available_set == {"ns1"}

    def test_no_mode(self) -> None:
        assert get_available_filters(None, _weave_nodes()).is_empty()


# =============================================================================
# Engine wiring
# =============================================================================


class TestTopologyFilterEngine:
    """Tests for engine configuration."""

    def test_settings_chip_limit(self) -> None:
        engine = TopologyFilterEngine(settings=FilterSettings(max_type_chips=1))

        result = engine.get_all_filters(None, _SHAPES, True, _weave_nodes())

        assert result.available_filters.types == ["pod", "other"]
        assert result.other_type_filters == ["widget", "deployment"]

    def test_custom_lookup_and_default_locale(self) -> None:
        seen: list[tuple[str, str | None]] = []

        def lookup(key: str, locale: str | None) -> str:
            seen.append((key, locale))
            return key.upper()

        engine = TopologyFilterEngine(
            settings=FilterSettings(default_locale="de-DE"), lookup=lookup
        )
        available = engine.get_available_filters("cluster", [_make_node("cluster", "c")])

        providers = available.get("providers")
        assert providers is not None
        assert providers.name == "TOPOLOGY.FILTER.CATEGORY.PROVIDERS"
        assert {locale for _, locale in seen} == {"de-DE"}

    def test_search_filter_delegates(self) -> None:
        split = get_search_filter("weave", {"labels": {"a"}, "namespaces": {"x"}})

        assert split.search == {"labels": {"a"}}
        assert split.filters == {"namespaces": {"x"}}

    def test_package_exports(self) -> None:
        assert filtering.get_all_filters is get_all_filters
        assert isinstance(filtering.default_engine, TopologyFilterEngine)
