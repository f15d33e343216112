"""Build catalog snapshots from source files.

Two on-disk forms are understood:

* a models.dev style tree, ``providers/<id>/provider.toml`` plus
  ``providers/<id>/models/<slug>.toml``, read by :func:`read_source_tree`;
* the pre-built ``models.json`` / ``providers.json`` pair written by
  :func:`write_snapshot_files` and read back by :func:`load_snapshot`.

Either way the result is validated in full before a
:class:`~modelsplus.core.store.CatalogSnapshot` is returned, so callers never
see a partially populated store.
"""

from __future__ import annotations

import json
import logging
import tomllib
from datetime import date, time
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from modelsplus.catalog.records import Model, Provider
from modelsplus.config.defaults import MODELS_FILE, PROVIDERS_FILE
from modelsplus.core.store import CatalogSnapshot

logger = logging.getLogger(__name__)


class SnapshotLoadError(Exception):
    """Raised when a snapshot cannot be built from its source."""


def _plain(value: Any) -> Any:
    # TOML has native date/time values; the catalog stores them as text.
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def _read_toml(path: Path) -> dict[str, Any] | None:
    try:
        with path.open("rb") as fh:
            return _plain(tomllib.load(fh))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Skipping unreadable source file %s: %s", path, exc)
        return None


def read_source_tree(root: str | Path) -> tuple[list[dict], list[dict]]:
    """Collect raw model and provider dicts from a models.dev style tree."""
    providers_dir = Path(root) / "providers"
    if not providers_dir.is_dir():
        raise SnapshotLoadError(f"No providers directory under {root}")

    models: list[dict] = []
    providers: list[dict] = []
    for provider_toml in sorted(providers_dir.glob("*/provider.toml")):
        provider_id = provider_toml.parent.name
        raw_provider = _read_toml(provider_toml)
        if raw_provider is None:
            continue
        providers.append({**raw_provider, "id": provider_id})

        for model_toml in sorted((provider_toml.parent / "models").glob("*.toml")):
            raw_model = _read_toml(model_toml)
            if raw_model is None:
                continue
            models.append(
                {
                    **raw_model,
                    "id": f"{provider_id}:{model_toml.stem}",
                    "provider": provider_id,
                }
            )
    return models, providers


def _validate(
    raw_items: Iterable[Any], record_type: type[Model] | type[Provider], kind: str
) -> list:
    records = []
    seen_ids: set[str] = set()
    for index, item in enumerate(raw_items):
        if not isinstance(item, dict):
            raise SnapshotLoadError(f"{kind} entry #{index} is not an object")
        try:
            record = record_type.model_validate(item)
        except ValidationError as exc:
            raise SnapshotLoadError(f"Invalid {kind} entry #{index}: {exc}") from exc
        if record.id in seen_ids:
            logger.warning("Duplicate %s id %s; keeping the first", kind, record.id)
            continue
        seen_ids.add(record.id)
        records.append(record)
    records.sort(key=lambda r: r.id)
    return records


def build_snapshot(
    raw_models: Iterable[Any],
    raw_providers: Iterable[Any],
    *,
    source: str = "memory",
) -> CatalogSnapshot:
    models = _validate(raw_models, Model, "model")
    providers = _validate(raw_providers, Provider, "provider")
    known = {p.id for p in providers}
    orphans = sorted({m.provider for m in models if m.provider not in known})
    if orphans:
        logger.warning("Models reference unknown providers: %s", ", ".join(orphans))
    return CatalogSnapshot(
        models=tuple(models), providers=tuple(providers), source=source
    )


def _read_json_list(path: Path) -> list:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SnapshotLoadError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise SnapshotLoadError(f"{path} does not contain a JSON array")
    return payload


def has_snapshot_files(data_dir: str | Path) -> bool:
    base = Path(data_dir)
    return (base / MODELS_FILE).is_file() and (base / PROVIDERS_FILE).is_file()


def load_snapshot(data_dir: str | Path) -> CatalogSnapshot:
    base = Path(data_dir)
    models = _read_json_list(base / MODELS_FILE)
    providers = _read_json_list(base / PROVIDERS_FILE)
    return build_snapshot(models, providers, source=str(base))


def load_source_snapshot(root: str | Path) -> CatalogSnapshot:
    models, providers = read_source_tree(root)
    return build_snapshot(models, providers, source=str(root))


def write_snapshot_files(data_dir: str | Path, snapshot: CatalogSnapshot) -> None:
    base = Path(data_dir)
    base.mkdir(parents=True, exist_ok=True)
    (base / MODELS_FILE).write_text(
        json.dumps([m.to_dict() for m in snapshot.models], indent=2), encoding="utf-8"
    )
    (base / PROVIDERS_FILE).write_text(
        json.dumps([p.to_dict() for p in snapshot.providers], indent=2), encoding="utf-8"
    )
