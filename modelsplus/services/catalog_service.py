"""Catalog queries shared by the HTTP routes and the MCP tools."""

from __future__ import annotations

import logging
from typing import Any

from modelsplus.config.defaults import MIN_SUGGESTION_QUERY_LENGTH
from modelsplus.core.store import CatalogSnapshot
from modelsplus.engine import (
    QueryOptions,
    apply_predicates,
    build_model_predicates,
    build_provider_predicates,
    paginate,
    select_fields,
    sort_models,
)

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, snapshot: CatalogSnapshot):
        self.snapshot = snapshot

    # Models

    def search_models(self, options: QueryOptions) -> list[dict[str, Any]]:
        """Filter, then sort, then page, then project."""
        matched = apply_predicates(
            self.snapshot.models, build_model_predicates(options.filters)
        )
        ordered = sort_models(matched, options.sort, options.order)
        page = paginate(ordered, options.offset, options.limit)
        logger.debug(
            "search_models matched=%d returned=%d", len(matched), len(page)
        )
        return [select_fields(m.to_dict(), options.fields) for m in page]

    def count_models(self, options: QueryOptions) -> int:
        return len(
            apply_predicates(self.snapshot.models, build_model_predicates(options.filters))
        )

    def get_model(self, model_id: str) -> dict[str, Any] | None:
        model = self.snapshot.models_by_id.get(model_id)
        return model.to_dict() if model is not None else None

    # Providers

    def search_providers(self, options: QueryOptions) -> list[dict[str, Any]]:
        matched = apply_predicates(
            self.snapshot.providers, build_provider_predicates(options.filters)
        )
        page = paginate(matched, options.offset, options.limit)
        return [select_fields(p.to_dict(), options.fields) for p in page]

    def count_providers(self, options: QueryOptions) -> int:
        return len(
            apply_predicates(
                self.snapshot.providers, build_provider_predicates(options.filters)
            )
        )

    def get_provider(self, provider_id: str) -> dict[str, Any] | None:
        provider = self.snapshot.providers_by_id.get(provider_id)
        return provider.to_dict() if provider is not None else None

    # Suggestions

    def suggest(self, query: str | None, limit: int) -> list[str]:
        """Names and ids containing ``query``, models first, without repeats."""
        if not query or len(query) < MIN_SUGGESTION_QUERY_LENGTH:
            return []
        needle = query.lower()
        # dict keeps insertion order and drops duplicates
        found: dict[str, None] = {}
        for model in self.snapshot.models:
            if model.name and needle in model.name.lower():
                found.setdefault(model.name)
            if needle in model.id.lower():
                found.setdefault(model.id)
        for provider in self.snapshot.providers:
            if needle in provider.name.lower():
                found.setdefault(provider.name)
        return list(found)[:limit]
