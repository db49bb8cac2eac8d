"""Topology graph node models.

Raw nodes come from the console's search API and are loosely shaped. Each
part of a node is validated on its own: a malformed label entry or status
block is dropped with a warning while the rest of the node is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from kubetopo.constants.values import NO_NAMESPACE

logger = logging.getLogger(__name__)


class NodeLabel(BaseModel):
    """One Kubernetes label attached to a node."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""

    @field_validator("name", "value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def as_filter_value(self) -> str:
        """Label rendered the way label filters select it."""
        return f"{self.name}: {self.value}"


class PodStatus(BaseModel):
    """Aggregated pod status carried by pods and workloads owning pods."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    has_pending: bool = Field(default=False, alias="hasPending")
    has_failure: bool = Field(default=False, alias="hasFailure")
    has_restarts: bool = Field(default=False, alias="hasRestarts")
    is_recent: bool = Field(default=False, alias="isRecent")
    host_ips: frozenset[str] = Field(default_factory=frozenset, alias="hostIPs")

    @field_validator("has_pending", "has_failure", "has_restarts", "is_recent", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("host_ips", mode="before")
    @classmethod
    def _normalize_host_ips(cls, value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset({value})
        if not isinstance(value, Iterable):
            return frozenset()
        return frozenset(str(ip) for ip in value if ip is not None)


class ClusterStatus(BaseModel):
    """Cluster health flags."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_offline: bool = Field(default=False, alias="isOffline")
    has_violations: bool = Field(default=False, alias="hasViolations")
    is_recent: bool = Field(default=False, alias="isRecent")

    @field_validator("is_offline", "has_violations", "is_recent", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)


# (alias, field name, model) of the typed parts of NodeSpecs
_STATUS_PARTS: tuple[tuple[str, str, type[BaseModel]], ...] = (
    ("podStatus", "pod_status", PodStatus),
    ("clusterStatus", "cluster_status", ClusterStatus),
)


class NodeSpecs(BaseModel):
    """Mode-specific payload of a node.

    Only the parts the filters read are typed; everything else is kept as-is.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    pod_status: PodStatus | None = Field(default=None, alias="podStatus")
    cluster_status: ClusterStatus | None = Field(default=None, alias="clusterStatus")
    cluster: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_malformed_parts(cls, data: Any) -> Any:
        if isinstance(data, NodeSpecs):
            return data
        if not isinstance(data, Mapping):
            logger.warning("Ignoring malformed node specs: %r", data)
            return {}

        cleaned = dict(data)
        for alias, name, model in _STATUS_PARTS:
            for key in (alias, name):
                if key not in cleaned:
                    continue
                value = cleaned[key]
                if value is None or isinstance(value, model):
                    continue
                if not isinstance(value, Mapping):
                    logger.warning("Dropping malformed %s: %r", alias, value)
                    del cleaned[key]
                    continue
                try:
                    cleaned[key] = model.model_validate(value)
                except ValidationError as exc:
                    logger.warning("Dropping malformed %s: %s", alias, exc.error_count())
                    del cleaned[key]

        cluster = cleaned.get("cluster")
        if cluster is not None and not isinstance(cluster, Mapping):
            logger.warning("Dropping malformed cluster spec: %r", cluster)
            del cleaned["cluster"]
        return cleaned


class TopologyNode(BaseModel):
    """One graph entity (cluster, pod, deployment, application, policy, ...)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = ""
    name: str = ""
    namespace: str | None = None
    labels: list[NodeLabel] = Field(default_factory=list)
    specs: NodeSpecs = Field(default_factory=NodeSpecs)

    @field_validator("type", "name", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("namespace", mode="before")
    @classmethod
    def _stringify_namespace(cls, value: Any) -> str | None:
        return None if value is None else str(value)

    @field_validator("labels", mode="before")
    @classmethod
    def _drop_malformed_labels(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, (str, Mapping)) or not isinstance(value, Iterable):
            logger.warning("Ignoring malformed node labels: %r", value)
            return []

        labels: list[Any] = []
        for entry in value:
            if isinstance(entry, NodeLabel):
                labels.append(entry)
            elif isinstance(entry, Mapping) and entry.get("name") is not None:
                labels.append(entry)
            else:
                logger.warning("Dropping malformed node label: %r", entry)
        return labels

    @classmethod
    def coerce(cls, raw: TopologyNode | Mapping[str, Any] | None) -> TopologyNode:
        """Build a node view from a raw mapping."""
        if isinstance(raw, TopologyNode):
            return raw
        if not isinstance(raw, Mapping):
            logger.warning("Ignoring non-mapping topology node: %r", raw)
            return cls()
        return cls.model_validate({key: value for key, value in raw.items() if value is not None})

    @property
    def pod_status(self) -> PodStatus | None:
        return self.specs.pod_status

    @property
    def cluster_status(self) -> ClusterStatus | None:
        return self.specs.cluster_status

    @property
    def cluster_labels(self) -> dict[str, Any]:
        """Labels under ``specs.cluster.metadata.labels``, empty when absent."""
        cluster = self.specs.cluster or {}
        metadata = cluster.get("metadata")
        if not isinstance(metadata, Mapping):
            return {}
        labels = metadata.get("labels")
        if not isinstance(labels, Mapping):
            return {}
        return dict(labels)

    @property
    def namespace_or_placeholder(self) -> str:
        return self.namespace if self.namespace else NO_NAMESPACE

    def label_values(self) -> list[str]:
        """Labels formatted as ``name: value`` filter values."""
        return [label.as_filter_value() for label in self.labels]


def coerce_nodes(
    nodes: Iterable[TopologyNode | Mapping[str, Any]] | None,
) -> list[TopologyNode]:
    """Coerce a node collection, treating None as empty."""
    return [TopologyNode.coerce(node) for node in nodes or ()]
