"""Query-string shapes for the catalog endpoints.

Every field is text: values are coerced by the query engine, which drops
filters it cannot parse instead of rejecting the request.
"""

from pydantic import BaseModel


class ModelFilterParams(BaseModel):
    q: str | None = None
    provider: str | None = None
    tool_call: str | None = None
    attachment: str | None = None
    reasoning: str | None = None
    temperature: str | None = None
    open_weights: str | None = None
    min_input_cost: str | None = None
    max_input_cost: str | None = None
    min_output_cost: str | None = None
    max_output_cost: str | None = None
    min_context: str | None = None
    max_context: str | None = None
    min_output_limit: str | None = None
    max_output_limit: str | None = None
    modalities: str | None = None
    release_after: str | None = None
    release_before: str | None = None
    updated_after: str | None = None
    updated_before: str | None = None


class ModelListParams(ModelFilterParams):
    sort: str | None = None
    order: str | None = None
    limit: str | None = None
    offset: str | None = None
    fields: str | None = None


class ProviderFilterParams(BaseModel):
    q: str | None = None
    env: str | None = None
    npm: str | None = None


class ProviderListParams(ProviderFilterParams):
    limit: str | None = None
    offset: str | None = None


class CountResponse(BaseModel):
    count: int


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


class ReloadResponse(BaseModel):
    models: int
    providers: int
    source: str
    loadedAt: str
