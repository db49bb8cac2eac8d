"""Node type bucketing: first-class type chips vs. the "other" bucket."""

from __future__ import annotations

import copy
import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from kubetopo.constants.limits import (
    MAX_SPARE_SHAPES,
    MAX_TYPE_CHIPS,
    SPARE_SHAPE_FIRST_CLASS_THRESHOLD,
    SPARE_SHAPE_UNKNOWN_THRESHOLD,
)
from kubetopo.constants.values import OTHER_TYPE, SPARE_SHAPE_PREFIX, TYPE_FILTER_KEY
from kubetopo.models.filters.filter_state import ActiveFilters, TypeShapeMap
from kubetopo.models.topology.node import TopologyNode

logger = logging.getLogger(__name__)


@dataclass
class TypeBuckets:
    """Outcome of splitting node types into chips and the "other" bucket."""

    first_class: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    type_to_shape_map: TypeShapeMap = field(default_factory=dict)

    @property
    def chips(self) -> list[str]:
        """First-class types followed by the "other" sentinel when needed."""
        if self.other and OTHER_TYPE not in self.first_class:
            return [*self.first_class, OTHER_TYPE]
        return list(self.first_class)


def count_node_types(nodes: Iterable[TopologyNode]) -> Counter[str]:
    """Occurrences per node type, keyed in first-seen order."""
    return Counter(node.type for node in nodes)


def rank_node_types(counts: Mapping[str, int]) -> list[str]:
    """Types by descending frequency, ties broken alphabetically."""
    return sorted(counts, key=lambda node_type: (-counts[node_type], node_type))


def bucket_node_types(
    counts: Mapping[str, int],
    type_to_shape_map: Mapping[str, Any] | None,
    available_types: Sequence[str] | None = None,
    *,
    max_type_chips: int = MAX_TYPE_CHIPS,
    max_spare_shapes: int = MAX_SPARE_SHAPES,
    spare_shape_unknown_threshold: int = SPARE_SHAPE_UNKNOWN_THRESHOLD,
    spare_shape_first_class_threshold: int = SPARE_SHAPE_FIRST_CLASS_THRESHOLD,
) -> TypeBuckets:
    """Decide which node types get their own chip.

    Args:
        counts: Node count per type.
        type_to_shape_map: Type -> shape; never modified.
        available_types: Explicit chip allow-list; when given, every other
            type goes to the "other" bucket and no shape checks apply.
        max_type_chips: Maximum number of shaped first-class types.
        max_spare_shapes: Maximum number of unknown types promoted onto
            spare shapes.
        spare_shape_unknown_threshold: Spare shapes are used only with more
            unknown types than this.
        spare_shape_first_class_threshold: Spare shapes are used only with
            fewer first-class types than this.

    Returns:
        TypeBuckets with a copy of the shape map, minus consumed spare slots.
    """
    shapes: TypeShapeMap = dict(type_to_shape_map or {})
    ranked = rank_node_types(counts)

    if available_types is not None:
        allowed = set(available_types)
        return TypeBuckets(
            first_class=list(available_types),
            other=[node_type for node_type in counts if node_type not in allowed],
            type_to_shape_map=shapes,
        )

    unknown = [node_type for node_type in ranked if not shapes.get(node_type)]
    shaped = [node_type for node_type in ranked if shapes.get(node_type)]
    first_class = sorted(shaped[:max_type_chips])
    other = [*unknown, *shaped[max_type_chips:]]

    if (
        len(unknown) > spare_shape_unknown_threshold
        and len(first_class) < spare_shape_first_class_threshold
    ):
        promoted = _promote_onto_spare_shapes(unknown, shapes, max_spare_shapes)
        if promoted:
            logger.debug("Promoted unknown node types onto spare shapes: %s", promoted)
            first_class.extend(promoted)
            other = [node_type for node_type in other if node_type not in promoted]

    return TypeBuckets(
        first_class=first_class,
        other=other,
        unknown=unknown,
        type_to_shape_map=shapes,
    )


def _promote_onto_spare_shapes(
    unknown: Sequence[str],
    shapes: TypeShapeMap,
    max_spare_shapes: int,
) -> list[str]:
    """Give the most frequent unknown types the spare shapes, consuming them."""
    promoted: list[str] = []
    for index, node_type in enumerate(unknown[:max_spare_shapes], start=1):
        spare_key = f"{SPARE_SHAPE_PREFIX}{index}"
        spare_shape = shapes.pop(spare_key, None)
        if spare_shape is None:
            break
        shapes[node_type] = spare_shape
        promoted.append(node_type)
    return promoted


def resolve_active_types(
    active_filters: Mapping[str, Any] | None,
    chips: Sequence[str],
    *,
    has_other: bool,
    initial_active_types: Sequence[str] | None = None,
    user_is_filtering: bool = False,
) -> ActiveFilters:
    """Work out the active type selection for freshly computed chips.

    With ``initial_active_types`` configured, a missing type selection is
    seeded from it. Otherwise the selection follows the chips unless the
    user picked types by hand. Types folded into "other" are dropped from
    the selection because the "other" chip stands for them.
    """
    if initial_active_types is not None:
        resolved: ActiveFilters = dict(active_filters or {})
        resolved.setdefault(TYPE_FILTER_KEY, list(initial_active_types))
    else:
        resolved = copy.deepcopy(dict(active_filters or {}))
        if not user_is_filtering:
            resolved[TYPE_FILTER_KEY] = list(chips)

    if has_other:
        chip_set = set(chips)
        resolved[TYPE_FILTER_KEY] = [
            node_type
            for node_type in resolved.get(TYPE_FILTER_KEY) or []
            if node_type in chip_set
        ]
    return resolved
