"""All enum definitions for the topology filter engine.

This module consolidates all enumerations used throughout the package.
"""

from __future__ import annotations

from enum import Enum

# =============================================================================
# View Mode Enums
# =============================================================================


class ViewMode(Enum):
    """Topology view modes.

    The mode decides which filter categories exist, which of them double as
    search terms, and which node types are structural only.
    """

    CLUSTER = "cluster"
    WEAVE = "weave"
    APPLICATION = "application"
    POLICY = "policy"

    @classmethod
    def parse(cls, value: ViewMode | str | None) -> ViewMode | None:
        """Resolve a mode from an enum member or its string value.

        Unknown or empty values resolve to None instead of raising.
        """
        if value is None or isinstance(value, ViewMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


# =============================================================================
# Filter Category Enums
# =============================================================================


class FilterCategory(Enum):
    """Filter axes; values are the keys used in filter mappings."""

    CLUSTER_STATUSES = "clusterStatuses"
    PROVIDERS = "providers"
    PURPOSE = "purpose"
    REGION = "region"
    K8TYPE = "k8type"
    POD_STATUSES = "podStatuses"
    HOST_IPS = "hostIPs"
    NAMESPACES = "namespaces"
    LABELS = "labels"

    @property
    def message_key(self) -> str:
        """Message catalog key of the category display name."""
        return f"topology.filter.category.{self.value}"


class ClusterLabelKey(Enum):
    """Cluster metadata label read for each cluster-label category."""

    PROVIDERS = "cloud"
    PURPOSE = "environment"
    REGION = "region"
    K8TYPE = "vendor"

    @property
    def category(self) -> FilterCategory:
        return FilterCategory[self.name]


# =============================================================================
# Status Bucket Enums
# =============================================================================


class PodStatusBucket(Enum):
    """Pod status buckets in display order, with the flag each one reads."""

    RECENT = "recent"
    RESTARTS = "restarts"
    PENDING = "pending"
    FAILED = "failed"

    @property
    def flag(self) -> str:
        return _POD_STATUS_FLAGS[self]

    @property
    def message_key(self) -> str:
        return f"topology.filter.category.status.{self.value}"


class ClusterStatusBucket(Enum):
    """Cluster status buckets in display order, with the flag each one reads."""

    RECENT = "recent"
    OFFLINE = "offline"
    VIOLATIONS = "violations"

    @property
    def flag(self) -> str:
        return _CLUSTER_STATUS_FLAGS[self]

    @property
    def message_key(self) -> str:
        return f"topology.filter.category.status.{self.value}"


_POD_STATUS_FLAGS: dict[PodStatusBucket, str] = {
    PodStatusBucket.RECENT: "is_recent",
    PodStatusBucket.RESTARTS: "has_restarts",
    PodStatusBucket.PENDING: "has_pending",
    PodStatusBucket.FAILED: "has_failure",
}

_CLUSTER_STATUS_FLAGS: dict[ClusterStatusBucket, str] = {
    ClusterStatusBucket.RECENT: "is_recent",
    ClusterStatusBucket.OFFLINE: "is_offline",
    ClusterStatusBucket.VIOLATIONS: "has_violations",
}
