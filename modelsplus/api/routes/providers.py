"""Provider listing, counting and lookup."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from modelsplus.api.deps import get_catalog
from modelsplus.engine import PROVIDER_FILTER_PARAMS, QueryOptions
from modelsplus.middleware.error_handler import error_response
from modelsplus.schemas.catalog import (
    CountResponse,
    ProviderFilterParams,
    ProviderListParams,
)
from modelsplus.services.catalog_service import CatalogService

router = APIRouter(prefix="/v1/providers", tags=["providers"])


def _options(params: ProviderFilterParams) -> QueryOptions:
    return QueryOptions.from_params(
        params.model_dump(), filter_names=PROVIDER_FILTER_PARAMS
    )


@router.get("")
def list_providers(
    params: Annotated[ProviderListParams, Query()],
    catalog: CatalogService = Depends(get_catalog),
):
    return catalog.search_providers(_options(params))


@router.get("/count", response_model=CountResponse)
def count_providers(
    params: Annotated[ProviderFilterParams, Query()],
    catalog: CatalogService = Depends(get_catalog),
):
    return CountResponse(count=catalog.count_providers(_options(params)))


@router.get("/{provider_id}")
def get_provider(provider_id: str, catalog: CatalogService = Depends(get_catalog)):
    provider = catalog.get_provider(provider_id)
    if provider is None:
        return error_response(404, "Provider not found")
    return provider
