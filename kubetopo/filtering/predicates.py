"""Node filter predicates, one per view mode."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from kubetopo.constants.enums import ClusterLabelKey, ClusterStatusBucket, FilterCategory, ViewMode
from kubetopo.constants.values import CLUSTER_NODE_TYPE, OTHER_TYPE, TYPE_FILTER_KEY
from kubetopo.filtering.available import host_ips_match, pod_status_matches
from kubetopo.filtering.registry import DEFAULT_MODE_REGISTRY, ModeFilterSpec, ModeRegistry
from kubetopo.models.filters.filter_state import AvailableFilters, active_set
from kubetopo.models.topology.node import TopologyNode

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT")
NodePredicate = Callable[[TopologyNode], bool]


# =============================================================================
# Cluster label axes
# =============================================================================


def _cluster_label_selections(active_filters: Mapping[str, Any]) -> dict[ClusterLabelKey, set[str]]:
    return {
        label_key: active_set(active_filters, label_key.category.value)
        for label_key in ClusterLabelKey
    }


def _matches_cluster_labels(
    node: TopologyNode,
    selections: Mapping[ClusterLabelKey, set[str]],
) -> bool:
    labels = node.cluster_labels
    for label_key, selected in selections.items():
        if not selected:
            continue
        value = labels.get(label_key.value)
        if value is None or str(value) not in selected:
            return False
    return True


def _matches_cluster_status(node: TopologyNode, cluster_statuses: set[str]) -> bool:
    if not cluster_statuses:
        return True
    status = node.cluster_status
    if status is None:
        return False
    return any(
        bucket.value in cluster_statuses and getattr(status, bucket.flag)
        for bucket in ClusterStatusBucket
    )


# =============================================================================
# Per-mode predicates
# =============================================================================


def cluster_node_predicate(
    spec: ModeFilterSpec,
    active_filters: Mapping[str, Any],
    available_filters: AvailableFilters | None,
) -> NodePredicate:
    """Cluster view: type check, plus status and label axes for clusters."""
    active_types = active_set(active_filters, TYPE_FILTER_KEY)
    cluster_statuses = active_set(active_filters, FilterCategory.CLUSTER_STATUSES.value)
    selections = _cluster_label_selections(active_filters)

    def predicate(node: TopologyNode) -> bool:
        if node.type not in active_types:
            return False
        if node.type != CLUSTER_NODE_TYPE:
            return True
        return _matches_cluster_status(node, cluster_statuses) and _matches_cluster_labels(
            node, selections
        )

    return predicate


def policy_node_predicate(
    spec: ModeFilterSpec,
    active_filters: Mapping[str, Any],
    available_filters: AvailableFilters | None,
) -> NodePredicate:
    """Policy view: type check, plus label axes for clusters."""
    active_types = active_set(active_filters, TYPE_FILTER_KEY)
    selections = _cluster_label_selections(active_filters)

    def predicate(node: TopologyNode) -> bool:
        if node.type not in active_types:
            return False
        if node.type != CLUSTER_NODE_TYPE:
            return True
        return _matches_cluster_labels(node, selections)

    return predicate


def relationship_node_predicate(
    spec: ModeFilterSpec,
    active_filters: Mapping[str, Any],
    available_filters: AvailableFilters | None,
) -> NodePredicate:
    """Weave and application views.

    A node folded into "other" is shown while "other" is active, unless its
    type is structural for the mode. Label filters match when any selected
    label is on the node.
    """
    active_types = active_set(active_filters, TYPE_FILTER_KEY)
    chip_types = set(available_filters.types) if available_filters else set()
    include_other = OTHER_TYPE in active_types
    pod_statuses = active_set(active_filters, FilterCategory.POD_STATUSES.value)
    host_ips = active_set(active_filters, FilterCategory.HOST_IPS.value)
    namespaces = active_set(active_filters, FilterCategory.NAMESPACES.value)
    labels = active_set(active_filters, FilterCategory.LABELS.value)

    def predicate(node: TopologyNode) -> bool:
        has_type = node.type in active_types or (
            include_other
            and node.type not in spec.ignored
            and node.type not in chip_types
        )
        if not has_type:
            return False

        pod_status = node.pod_status
        if pod_statuses and (
            pod_status is None or not pod_status_matches(pod_status, pod_statuses)
        ):
            return False
        if host_ips and (pod_status is None or not host_ips_match(pod_status, host_ips)):
            return False
        if namespaces and node.namespace_or_placeholder not in namespaces:
            return False
        if labels and labels.isdisjoint(node.label_values()):
            return False
        return True

    return predicate


_PREDICATES: dict[
    ViewMode,
    Callable[[ModeFilterSpec, Mapping[str, Any], AvailableFilters | None], NodePredicate],
] = {
    ViewMode.CLUSTER: cluster_node_predicate,
    ViewMode.WEAVE: relationship_node_predicate,
    ViewMode.APPLICATION: relationship_node_predicate,
    ViewMode.POLICY: policy_node_predicate,
}


def filter_nodes(
    mode: ViewMode | str | None,
    nodes: Iterable[NodeT] | None,
    active_filters: Mapping[str, Any] | None,
    available_filters: AvailableFilters | None = None,
    *,
    registry: ModeRegistry = DEFAULT_MODE_REGISTRY,
) -> list[NodeT]:
    """Nodes passing the active filters of ``mode``, in their original order.

    The caller's node objects are returned as-is; raw mappings are only
    coerced for evaluation. An unknown mode returns every node.
    """
    node_list: Sequence[NodeT] = list(nodes or [])
    resolved = ViewMode.parse(mode)
    if resolved is None:
        if mode is not None:
            logger.warning("Unknown topology view mode %r, returning nodes unfiltered", mode)
        return list(node_list)

    predicate = _PREDICATES[resolved](registry.get(resolved), active_filters or {}, available_filters)
    return [node for node in node_list if predicate(TopologyNode.coerce(node))]
