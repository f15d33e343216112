"""Process-scoped handle on the loaded catalog snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from modelsplus.catalog.records import Model, Provider
from modelsplus.utils.dates import utc_now_iso


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable point-in-time view of every model and provider."""

    models: tuple[Model, ...]
    providers: tuple[Provider, ...]
    source: str = "memory"
    loaded_at: str = field(default_factory=utc_now_iso)
    models_by_id: Mapping[str, Model] = field(init=False, repr=False)
    providers_by_id: Mapping[str, Provider] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "models_by_id", MappingProxyType({m.id: m for m in self.models})
        )
        object.__setattr__(
            self, "providers_by_id", MappingProxyType({p.id: p for p in self.providers})
        )


_snapshot: CatalogSnapshot | None = None


def set_snapshot(snapshot: CatalogSnapshot | None) -> None:
    # Single assignment; readers holding the previous snapshot keep a complete view.
    global _snapshot
    _snapshot = snapshot


def get_snapshot() -> CatalogSnapshot | None:
    return _snapshot
