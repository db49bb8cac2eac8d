"""Default message catalog for filter display names.

The engine only stores what a lookup returns; callers with their own
localization pass a different callable with the same signature.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

MessageLookup = Callable[[str, str | None], str]

_EN_MESSAGES: Final[dict[str, str]] = {
    "topology.filter.category.clusterStatuses": "Cluster status",
    "topology.filter.category.providers": "Provider",
    "topology.filter.category.purpose": "Purpose",
    "topology.filter.category.region": "Region",
    "topology.filter.category.k8type": "Kubernetes type",
    "topology.filter.category.podStatuses": "Pod status",
    "topology.filter.category.hostIPs": "Host IP",
    "topology.filter.category.namespaces": "Namespaces",
    "topology.filter.category.labels": "Labels",
    "topology.filter.category.status.recent": "Recent changes",
    "topology.filter.category.status.restarts": "Restarts",
    "topology.filter.category.status.pending": "Pending",
    "topology.filter.category.status.failed": "Failed",
    "topology.filter.category.status.offline": "Offline",
    "topology.filter.category.status.violations": "Violations",
}


def lookup_message(key: str, locale: str | None = None) -> str:
    """Resolve a message key; unknown keys resolve to themselves.

    Only English is bundled, so ``locale`` is accepted for signature
    compatibility with real catalogs.
    """
    return _EN_MESSAGES.get(key, key)
