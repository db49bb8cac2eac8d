"""Available-filter builders, one per view mode.

Each builder starts every category of its mode with a localized name and
an empty available set, then scans the nodes once to fill the sets.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping, Sequence
from typing import Any

from kubetopo.constants.enums import (
    ClusterLabelKey,
    ClusterStatusBucket,
    FilterCategory,
    PodStatusBucket,
    ViewMode,
)
from kubetopo.constants.values import (
    CLUSTER_NODE_TYPE,
    OTHER_TYPE,
    POD_NODE_TYPE,
    TYPE_FILTER_KEY,
)
from kubetopo.filtering.registry import DEFAULT_MODE_REGISTRY, ModeFilterSpec, ModeRegistry
from kubetopo.models.filters.filter_state import (
    AvailableFilters,
    FilterCategoryInfo,
    active_set,
)
from kubetopo.models.topology.node import PodStatus, TopologyNode
from kubetopo.utils.messages import MessageLookup, lookup_message

logger = logging.getLogger(__name__)

AvailableFilterBuilder = Callable[
    [
        ModeFilterSpec,
        AvailableFilters,
        Mapping[str, Any],
        Sequence[TopologyNode],
        MessageLookup,
        str | None,
    ],
    None,
]


# =============================================================================
# Shared helpers
# =============================================================================


def pod_status_matches(pod_status: PodStatus, pod_statuses: Collection[str]) -> bool:
    """Whether any selected pod-status bucket is flagged on ``pod_status``."""
    return any(
        bucket.value in pod_statuses and getattr(pod_status, bucket.flag)
        for bucket in PodStatusBucket
    )


def host_ips_match(pod_status: PodStatus, host_ips: Collection[str]) -> bool:
    """Whether the pod runs on a selected host; vacuous without a selection."""
    if not host_ips:
        return True
    return any(ip in pod_status.host_ips for ip in host_ips)


def passes_pod_gate(
    category: FilterCategory,
    pod_status: PodStatus | None,
    pod_statuses: Collection[str],
    host_ips: Collection[str] = (),
) -> bool:
    """Gate a node's contribution to ``category`` on the active pod filters.

    Nodes without pod status only contribute while no pod-status filter is
    active. For namespaces and labels the pod must also run on one of the
    selected hosts.
    """
    if pod_status is None:
        return not pod_statuses
    if pod_statuses and not pod_status_matches(pod_status, pod_statuses):
        return False
    if category in (FilterCategory.NAMESPACES, FilterCategory.LABELS):
        return host_ips_match(pod_status, host_ips)
    return True


def _status_buckets(
    buckets: type[ClusterStatusBucket] | type[PodStatusBucket],
    lookup: MessageLookup,
    locale: str | None,
) -> dict[str, str]:
    return {bucket.value: lookup(bucket.message_key, locale) for bucket in buckets}


def _init_categories(
    spec: ModeFilterSpec,
    available: AvailableFilters,
    lookup: MessageLookup,
    locale: str | None,
    *,
    hidden: Collection[FilterCategory] = (),
) -> None:
    for category in spec.filter_types:
        if category in hidden:
            continue
        if category is FilterCategory.CLUSTER_STATUSES:
            available_set: set[str] | dict[str, str] = _status_buckets(
                ClusterStatusBucket, lookup, locale
            )
        elif category is FilterCategory.POD_STATUSES:
            available_set = _status_buckets(PodStatusBucket, lookup, locale)
        else:
            available_set = set()
        available.categories[category.value] = FilterCategoryInfo(
            name=lookup(category.message_key, locale),
            available_set=available_set,
        )


def _add_cluster_label_values(available: AvailableFilters, node: TopologyNode) -> None:
    labels = node.cluster_labels
    for label_key in ClusterLabelKey:
        info = available.get(label_key.category.value)
        value = labels.get(label_key.value)
        if info is None or value is None:
            continue
        info.available_set.add(str(value))


# =============================================================================
# Builders
# =============================================================================


def add_available_cluster_filters(
    spec: ModeFilterSpec,
    available: AvailableFilters,
    active_filters: Mapping[str, Any],
    nodes: Sequence[TopologyNode],
    lookup: MessageLookup,
    locale: str | None,
) -> None:
    """Cluster view: label values of every node; fixed cluster-status buckets."""
    _init_categories(spec, available, lookup, locale)
    for node in nodes:
        _add_cluster_label_values(available, node)


def add_available_policy_filters(
    spec: ModeFilterSpec,
    available: AvailableFilters,
    active_filters: Mapping[str, Any],
    nodes: Sequence[TopologyNode],
    lookup: MessageLookup,
    locale: str | None,
) -> None:
    """Policy view: label values of the cluster nodes, if clusters are shown."""
    _init_categories(spec, available, lookup, locale)
    active_types = active_set(active_filters, TYPE_FILTER_KEY)
    if CLUSTER_NODE_TYPE not in active_types:
        return
    for node in nodes:
        if node.type == CLUSTER_NODE_TYPE:
            _add_cluster_label_values(available, node)


def add_available_relationship_filters(
    spec: ModeFilterSpec,
    available: AvailableFilters,
    active_filters: Mapping[str, Any],
    nodes: Sequence[TopologyNode],
    lookup: MessageLookup,
    locale: str | None,
) -> None:
    """Weave and application views.

    Available values cascade: host IPs come from pods matching the pod-status
    selection, namespaces from nodes also matching the host-IP selection, and
    labels from nodes also inside the selected namespaces.
    """
    active_types = active_set(active_filters, TYPE_FILTER_KEY)
    show_pods = POD_NODE_TYPE in active_types
    show_other = OTHER_TYPE in active_types
    chip_types = set(available.types)

    hidden = () if show_pods else (FilterCategory.POD_STATUSES, FilterCategory.HOST_IPS)
    _init_categories(spec, available, lookup, locale, hidden=hidden)

    pod_statuses = active_set(active_filters, FilterCategory.POD_STATUSES.value)
    host_ips = active_set(active_filters, FilterCategory.HOST_IPS.value)
    namespaces = active_set(active_filters, FilterCategory.NAMESPACES.value)

    host_ip_info = available.get(FilterCategory.HOST_IPS.value)
    namespace_info = available.get(FilterCategory.NAMESPACES.value)
    label_info = available.get(FilterCategory.LABELS.value)

    has_pods = False
    for node in nodes:
        if node.type in spec.ignored:
            continue
        folded = node.type not in chip_types
        if node.type not in active_types and not (show_other and folded):
            continue

        pod_status = node.pod_status
        has_pods = has_pods or pod_status is not None
        namespace = node.namespace_or_placeholder

        if (
            host_ip_info is not None
            and pod_status is not None
            and pod_status.host_ips
            and passes_pod_gate(FilterCategory.HOST_IPS, pod_status, pod_statuses)
        ):
            host_ip_info.available_set.update(pod_status.host_ips)

        if namespace_info is not None and passes_pod_gate(
            FilterCategory.NAMESPACES, pod_status, pod_statuses, host_ips
        ):
            namespace_info.available_set.add(namespace)

        if (
            label_info is not None
            and node.labels
            and passes_pod_gate(FilterCategory.LABELS, pod_status, pod_statuses, host_ips)
            and (not namespaces or namespace in namespaces)
        ):
            label_info.available_set.update(node.label_values())

    if show_pods and not has_pods:
        available.categories.pop(FilterCategory.POD_STATUSES.value, None)
        available.categories.pop(FilterCategory.HOST_IPS.value, None)


_BUILDERS: dict[ViewMode, AvailableFilterBuilder] = {
    ViewMode.CLUSTER: add_available_cluster_filters,
    ViewMode.WEAVE: add_available_relationship_filters,
    ViewMode.APPLICATION: add_available_relationship_filters,
    ViewMode.POLICY: add_available_policy_filters,
}


def add_assorted_available_filters(
    mode: ViewMode | str | None,
    available: AvailableFilters,
    active_filters: Mapping[str, Any] | None,
    nodes: Sequence[TopologyNode],
    locale: str | None = None,
    *,
    registry: ModeRegistry = DEFAULT_MODE_REGISTRY,
    lookup: MessageLookup = lookup_message,
) -> AvailableFilters:
    """Fill ``available`` with the non-type categories of ``mode``.

    Unknown modes and empty node lists leave ``available`` untouched.
    """
    if mode is None:
        return available
    resolved = ViewMode.parse(mode)
    if resolved is None:
        logger.warning("Unknown topology view mode %r, no mode filters added", mode)
        return available
    if not nodes:
        return available

    builder = _BUILDERS[resolved]
    builder(registry.get(resolved), available, active_filters or {}, nodes, lookup, locale)
    return available
