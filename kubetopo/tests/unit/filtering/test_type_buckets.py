"""Unit tests for node type bucketing.

This module tests:
- count_node_types() / rank_node_types() ordering
- bucket_node_types() chip limits, allow-lists and spare shapes
- resolve_active_types() seeding, auto-follow and pruning
"""

from __future__ import annotations

from collections import Counter

from kubetopo.constants.values import OTHER_TYPE, TYPE_FILTER_KEY
from kubetopo.filtering.type_buckets import (
    TypeBuckets,
    bucket_node_types,
    count_node_types,
    rank_node_types,
    resolve_active_types,
)
from kubetopo.models.topology.node import TopologyNode

# =============================================================================
# Test Helpers
# =============================================================================

_SPARES = {f"spare{index}": f"spare-shape-{index}" for index in range(1, 6)}


def _counts(**counts: int) -> Counter[str]:
    return Counter(counts)


def _shapes(*types: str, spares: int = 0) -> dict[str, str]:
    shapes = {node_type: f"{node_type}-shape" for node_type in types}
    for index in range(1, spares + 1):
        shapes[f"spare{index}"] = _SPARES[f"spare{index}"]
    return shapes


# =============================================================================
# Counting and ranking
# =============================================================================


class TestRankNodeTypes:
    """Tests for frequency ranking."""

    def test_counts_per_type(self) -> None:
        nodes = [TopologyNode(type="pod"), TopologyNode(type="pod"), TopologyNode(type="service")]
        assert count_node_types(nodes) == {"pod": 2, "service": 1}

    def test_descending_frequency(self) -> None:
        assert rank_node_types(_counts(service=1, pod=5, deployment=3)) == [
            "pod",
            "deployment",
            "service",
        ]

    def test_ties_broken_alphabetically(self) -> None:
        assert rank_node_types(_counts(zeta=2, alpha=2, mid=2, top=4)) == [
            "top",
            "alpha",
            "mid",
            "zeta",
        ]


# =============================================================================
# Bucketing
# =============================================================================


class TestBucketNodeTypes:
    """Tests for bucket_node_types()."""

    def test_all_shaped_types_fit(self) -> None:
        buckets = bucket_node_types(_counts(service=1, pod=3), _shapes("pod", "service"))

        assert buckets.first_class == ["pod", "service"]
        assert buckets.other == []
        assert buckets.chips == ["pod", "service"]

    def test_more_than_eight_shaped_types_overflow_into_other(self) -> None:
        names = [f"type{index:02d}" for index in range(10)]
        counts = Counter({name: 20 - index for index, name in enumerate(names)})

        buckets = bucket_node_types(counts, _shapes(*names))

        assert buckets.first_class == sorted(names[:8])
        assert buckets.other == names[8:]
        assert buckets.chips == [*sorted(names[:8]), OTHER_TYPE]

    def test_overflow_tie_break_is_alphabetical(self) -> None:
        names = [f"t{letter}" for letter in "jihgfedcba"]
        counts = Counter({name: 1 for name in names})

        buckets = bucket_node_types(counts, _shapes(*names))

        assert buckets.first_class == ["ta", "tb", "tc", "td", "te", "tf", "tg", "th"]
        assert buckets.other == ["ti", "tj"]

    def test_shapeless_types_are_unknown_and_other(self) -> None:
        buckets = bucket_node_types(_counts(pod=2, widget=1), _shapes("pod"))

        assert buckets.first_class == ["pod"]
        assert buckets.unknown == ["widget"]
        assert buckets.other == ["widget"]
        assert buckets.chips == ["pod", OTHER_TYPE]

    def test_other_never_lists_a_chip(self) -> None:
        names = [f"type{index:02d}" for index in range(12)]
        counts = Counter({name: index + 1 for index, name in enumerate(names)})

        buckets = bucket_node_types(counts, _shapes(*names[:10]))

        assert set(buckets.other).isdisjoint(buckets.first_class)
        assert len(buckets.first_class) == 8

    def test_explicit_available_types(self) -> None:
        counts = Counter(["pod", "deployment", "service", "pod"])

        buckets = bucket_node_types(counts, {}, ["pod", "deployment"])

        assert buckets.first_class == ["pod", "deployment"]
        assert buckets.other == ["service"]
        assert buckets.chips == ["pod", "deployment", OTHER_TYPE]

    def test_explicit_available_types_skip_spare_shapes(self) -> None:
        counts = _counts(a=1, b=1, c=1, d=1, e=1)

        buckets = bucket_node_types(counts, _shapes(spares=5), ["a"])

        assert buckets.first_class == ["a"]
        assert "spare1" in buckets.type_to_shape_map

    def test_custom_chip_limit(self) -> None:
        buckets = bucket_node_types(
            _counts(pod=3, service=2, deployment=1),
            _shapes("pod", "service", "deployment"),
            max_type_chips=2,
        )

        assert buckets.first_class == ["pod", "service"]
        assert buckets.other == ["deployment"]


class TestSpareShapes:
    """Tests for promoting unknown types onto spare shapes."""

    def test_unknown_types_take_spare_shapes(self) -> None:
        counts = _counts(pod=1, u1=5, u2=4, u3=3, u4=2)
        shapes = _shapes("pod", spares=5)

        buckets = bucket_node_types(counts, shapes)

        assert buckets.first_class == ["pod", "u1", "u2", "u3", "u4"]
        assert buckets.other == []
        assert buckets.chips == ["pod", "u1", "u2", "u3", "u4"]
        assert buckets.type_to_shape_map["u1"] == "spare-shape-1"
        assert buckets.type_to_shape_map["u4"] == "spare-shape-4"
        assert "spare1" not in buckets.type_to_shape_map
        assert buckets.type_to_shape_map["spare5"] == "spare-shape-5"

    def test_input_shape_map_is_not_modified(self) -> None:
        shapes = _shapes("pod", spares=5)
        snapshot = dict(shapes)

        bucket_node_types(_counts(pod=1, u1=5, u2=4, u3=3, u4=2), shapes)

        assert shapes == snapshot

    def test_at_most_five_spares(self) -> None:
        counts = _counts(u1=9, u2=8, u3=7, u4=6, u5=5, u6=4, u7=3)
        shapes = _shapes(spares=5)
        shapes["spare6"] = "spare-shape-6"

        buckets = bucket_node_types(counts, shapes)

        assert buckets.first_class == ["u1", "u2", "u3", "u4", "u5"]
        assert buckets.other == ["u6", "u7"]
        assert buckets.chips[-1] == OTHER_TYPE

    def test_promotion_stops_when_spares_run_out(self) -> None:
        counts = _counts(pod=1, u1=5, u2=4, u3=3, u4=2)

        buckets = bucket_node_types(counts, _shapes("pod", spares=2))

        assert buckets.first_class == ["pod", "u1", "u2"]
        assert buckets.other == ["u3", "u4"]

    def test_no_promotion_with_three_unknown_types(self) -> None:
        counts = _counts(pod=1, u1=3, u2=2, u3=1)

        buckets = bucket_node_types(counts, _shapes("pod", spares=5))

        assert buckets.first_class == ["pod"]
        assert buckets.other == ["u1", "u2", "u3"]

    def test_no_promotion_with_three_first_class_types(self) -> None:
        counts = _counts(pod=1, service=1, deployment=1, u1=4, u2=3, u3=2, u4=1)

        buckets = bucket_node_types(
            counts, _shapes("pod", "service", "deployment", spares=5)
        )

        assert buckets.first_class == ["deployment", "pod", "service"]
        assert buckets.other == ["u1", "u2", "u3", "u4"]


class TestTypeBucketsChips:
    """Tests for the chips property."""

    def test_other_is_not_duplicated(self) -> None:
        buckets = TypeBuckets(first_class=["pod", OTHER_TYPE], other=["service"])
        assert buckets.chips == ["pod", OTHER_TYPE]


# =============================================================================
# Active type resolution
# =============================================================================


class TestResolveActiveTypes:
    """Tests for resolve_active_types()."""

    def test_follows_chips_by_default(self) -> None:
        resolved = resolve_active_types(
            {TYPE_FILTER_KEY: ["pod"], "namespaces": {"ns1"}},
            ["deployment", "pod"],
            has_other=False,
        )

        assert resolved[TYPE_FILTER_KEY] == ["deployment", "pod"]
        assert resolved["namespaces"] == {"ns1"}

    def test_keeps_user_selection(self) -> None:
        resolved = resolve_active_types(
            {TYPE_FILTER_KEY: ["pod"]},
            ["deployment", "pod"],
            has_other=False,
            user_is_filtering=True,
        )

        assert resolved[TYPE_FILTER_KEY] == ["pod"]

    def test_input_is_not_modified(self) -> None:
        active = {TYPE_FILTER_KEY: ["pod"], "namespaces": {"ns1"}}

        resolved = resolve_active_types(active, ["deployment"], has_other=False)
        resolved["namespaces"].add("ns2")

        assert active == {TYPE_FILTER_KEY: ["pod"], "namespaces": {"ns1"}}

    def test_seeds_initial_active_types(self) -> None:
        resolved = resolve_active_types(
            {}, ["deployment", "pod"], has_other=False, initial_active_types=["pod"]
        )

        assert resolved[TYPE_FILTER_KEY] == ["pod"]

    def test_existing_selection_wins_over_initial_types(self) -> None:
        resolved = resolve_active_types(
            {TYPE_FILTER_KEY: ["deployment"]},
            ["deployment", "pod"],
            has_other=False,
            initial_active_types=["pod"],
        )

        assert resolved[TYPE_FILTER_KEY] == ["deployment"]

    def test_prunes_types_folded_into_other(self) -> None:
        resolved = resolve_active_types(
            {TYPE_FILTER_KEY: ["pod", "service", OTHER_TYPE]},
            ["pod", OTHER_TYPE],
            has_other=True,
            user_is_filtering=True,
        )

        assert resolved[TYPE_FILTER_KEY] == ["pod", OTHER_TYPE]
