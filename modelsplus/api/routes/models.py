"""Model listing, counting and lookup."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from modelsplus.api.deps import get_catalog
from modelsplus.engine import QueryOptions
from modelsplus.middleware.error_handler import error_response
from modelsplus.schemas.catalog import CountResponse, ModelFilterParams, ModelListParams
from modelsplus.services.catalog_service import CatalogService

router = APIRouter(prefix="/v1/models", tags=["models"])


@router.get("")
def list_models(
    params: Annotated[ModelListParams, Query()],
    catalog: CatalogService = Depends(get_catalog),
):
    """Filter, sort, page and project models."""
    options = QueryOptions.from_params(params.model_dump())
    return catalog.search_models(options)


# Declared before the id route so "count" is not taken for a model id.
@router.get("/count", response_model=CountResponse)
def count_models(
    params: Annotated[ModelFilterParams, Query()],
    catalog: CatalogService = Depends(get_catalog),
):
    options = QueryOptions.from_params(params.model_dump())
    return CountResponse(count=catalog.count_models(options))


@router.get("/{model_id:path}")
def get_model(model_id: str, catalog: CatalogService = Depends(get_catalog)):
    model = catalog.get_model(model_id)
    if model is None:
        return error_response(404, "Model not found")
    return model
