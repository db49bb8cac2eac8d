"""Short human-readable descriptions of topology nodes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kubetopo.models.topology.node import TopologyNode


def get_node_description(
    node: TopologyNode | Mapping[str, Any],
    locale: str | None = None,
) -> str:
    """Describe a node for tooltips and list rows.

    Every node type is described by its name; a nameless node falls back to
    its type. ``locale`` is reserved for catalogs that localize type names.
    """
    view = TopologyNode.coerce(node)
    return view.name or view.type
