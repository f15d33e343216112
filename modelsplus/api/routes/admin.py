from fastapi import APIRouter

from modelsplus.api.envelope import ok
from modelsplus.catalog.loader import SnapshotLoadError
from modelsplus.config.settings import get_settings
from modelsplus.middleware.error_handler import ServiceError
from modelsplus.schemas.catalog import ReloadResponse
from modelsplus.services.snapshot_service import refresh_snapshot

router = APIRouter(prefix="/v1/admin", tags=["admin"])


@router.api_route("/reload", methods=["GET", "POST"])
def reload_catalog():
    """Rebuild the catalog snapshot from its configured source and swap it in."""
    try:
        snapshot = refresh_snapshot(get_settings())
    except SnapshotLoadError as exc:
        raise ServiceError(f"Reload failed: {exc}") from exc
    return ok(
        ReloadResponse(
            models=len(snapshot.models),
            providers=len(snapshot.providers),
            source=snapshot.source,
            loadedAt=snapshot.loaded_at,
        ).model_dump()
    )
