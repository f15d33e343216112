from fastapi import APIRouter, Depends

from modelsplus.api.deps import get_catalog
from modelsplus.config.settings import get_settings
from modelsplus.engine.coercion import parse_int
from modelsplus.schemas.catalog import SuggestionsResponse
from modelsplus.services.catalog_service import CatalogService

router = APIRouter(prefix="/v1/search", tags=["search"])


@router.get("/suggestions", response_model=SuggestionsResponse)
def search_suggestions(
    q: str | None = None,
    limit: str | None = None,
    catalog: CatalogService = Depends(get_catalog),
):
    """Free-text completion over model names, model ids and provider names."""
    count = parse_int(limit)
    if count is None or count <= 0:
        count = get_settings().suggestion_limit
    return SuggestionsResponse(suggestions=catalog.suggest(q, count))
