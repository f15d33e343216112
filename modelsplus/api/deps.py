from modelsplus.core.store import get_snapshot
from modelsplus.middleware.error_handler import CatalogUnavailableError
from modelsplus.services.catalog_service import CatalogService


def get_catalog() -> CatalogService:
    # Resolve the snapshot once per request so a concurrent reload cannot
    # change the data mid-query.
    snapshot = get_snapshot()
    if snapshot is None:
        raise CatalogUnavailableError("Catalog snapshot is not loaded")
    return CatalogService(snapshot)
