"""Protocol-agnostic filter, sort and paginate engine."""

from modelsplus.engine.options import (
    MODEL_FILTER_PARAMS,
    PROVIDER_FILTER_PARAMS,
    QueryOptions,
)
from modelsplus.engine.pagination import paginate, select_fields
from modelsplus.engine.predicates import (
    Predicate,
    apply_predicates,
    build_model_predicates,
    build_provider_predicates,
)
from modelsplus.engine.sorting import SORT_KEYS, sort_models

__all__ = [
    "MODEL_FILTER_PARAMS",
    "PROVIDER_FILTER_PARAMS",
    "Predicate",
    "QueryOptions",
    "SORT_KEYS",
    "apply_predicates",
    "build_model_predicates",
    "build_provider_predicates",
    "paginate",
    "select_fields",
    "sort_models",
]
