"""Per-mode filter category registry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from kubetopo.constants.enums import FilterCategory, ViewMode


@dataclass(frozen=True)
class ModeFilterSpec:
    """Filter categories recognized by one view mode.

    Attributes:
        filter_types: Categories shown for the mode, in display order.
        search_types: Categories whose selections also seed free-text search.
        ignored: Structural node types never filtered through relationships.
    """

    filter_types: tuple[FilterCategory, ...] = ()
    search_types: frozenset[FilterCategory] = frozenset()
    ignored: frozenset[str] = frozenset()

    def has_search_type(self, key: str) -> bool:
        return any(category.value == key for category in self.search_types)


EMPTY_MODE_SPEC = ModeFilterSpec()


class ModeRegistry:
    """Read-only table of ModeFilterSpec keyed by ViewMode."""

    __slots__ = ("_specs",)

    def __init__(self, specs: Mapping[ViewMode, ModeFilterSpec]) -> None:
        self._specs: Mapping[ViewMode, ModeFilterSpec] = MappingProxyType(dict(specs))

    def get(self, mode: ViewMode | str | None) -> ModeFilterSpec:
        """Spec for ``mode``; unknown modes get an empty spec."""
        resolved = ViewMode.parse(mode)
        if resolved is None:
            return EMPTY_MODE_SPEC
        return self._specs.get(resolved, EMPTY_MODE_SPEC)

    def __contains__(self, mode: object) -> bool:
        if not isinstance(mode, (ViewMode, str)):
            return False
        return ViewMode.parse(mode) in self._specs

    @property
    def modes(self) -> tuple[ViewMode, ...]:
        return tuple(self._specs)


_RELATIONSHIP_FILTER_TYPES = (
    FilterCategory.POD_STATUSES,
    FilterCategory.HOST_IPS,
    FilterCategory.NAMESPACES,
    FilterCategory.LABELS,
)
_RELATIONSHIP_SEARCH_TYPES = frozenset({FilterCategory.POD_STATUSES, FilterCategory.LABELS})
_RELATIONSHIP_IGNORED = frozenset({"internet", "host", "cluster"})

_CLUSTER_LABEL_FILTER_TYPES = (
    FilterCategory.PROVIDERS,
    FilterCategory.PURPOSE,
    FilterCategory.REGION,
    FilterCategory.K8TYPE,
)

DEFAULT_MODE_REGISTRY = ModeRegistry(
    {
        ViewMode.CLUSTER: ModeFilterSpec(
            filter_types=(FilterCategory.CLUSTER_STATUSES, *_CLUSTER_LABEL_FILTER_TYPES),
        ),
        ViewMode.WEAVE: ModeFilterSpec(
            filter_types=_RELATIONSHIP_FILTER_TYPES,
            search_types=_RELATIONSHIP_SEARCH_TYPES,
            ignored=_RELATIONSHIP_IGNORED,
        ),
        ViewMode.APPLICATION: ModeFilterSpec(
            filter_types=_RELATIONSHIP_FILTER_TYPES,
            search_types=_RELATIONSHIP_SEARCH_TYPES,
            ignored=_RELATIONSHIP_IGNORED,
        ),
        ViewMode.POLICY: ModeFilterSpec(
            filter_types=_CLUSTER_LABEL_FILTER_TYPES,
        ),
    }
)
