"""Topology graph node models."""

from kubetopo.models.topology.node import (
    ClusterStatus,
    NodeLabel,
    NodeSpecs,
    PodStatus,
    TopologyNode,
    coerce_nodes,
)

__all__ = [
    "ClusterStatus",
    "NodeLabel",
    "NodeSpecs",
    "PodStatus",
    "TopologyNode",
    "coerce_nodes",
]
