from __future__ import annotations

import logging

from modelsplus.catalog.loader import (
    SnapshotLoadError,
    has_snapshot_files,
    load_snapshot,
    load_source_snapshot,
)
from modelsplus.config.settings import AppSettings
from modelsplus.core.store import CatalogSnapshot, set_snapshot

logger = logging.getLogger(__name__)


def build_configured_snapshot(settings: AppSettings) -> CatalogSnapshot:
    """Load from the pre-built JSON snapshot, else from the TOML source tree."""
    if has_snapshot_files(settings.data_dir):
        return load_snapshot(settings.data_dir)
    if settings.source_dir:
        return load_source_snapshot(settings.source_dir)
    raise SnapshotLoadError(
        f"No snapshot files in {settings.data_dir} and no source_dir configured"
    )


def refresh_snapshot(settings: AppSettings) -> CatalogSnapshot:
    """Build a complete snapshot and install it.

    The current snapshot stays in place when loading fails.
    """
    snapshot = build_configured_snapshot(settings)
    set_snapshot(snapshot)
    logger.info(
        "Catalog snapshot loaded from %s: %d models, %d providers",
        snapshot.source,
        len(snapshot.models),
        len(snapshot.providers),
    )
    return snapshot
