from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from modelsplus.config.defaults import DEFAULT_ORDER, DEFAULT_SORT
from modelsplus.engine.coercion import parse_int, split_list

RawValue = Union[str, bool, int, float]

MODEL_FILTER_PARAMS = (
    "q",
    "provider",
    "tool_call",
    "attachment",
    "reasoning",
    "temperature",
    "open_weights",
    "min_input_cost",
    "max_input_cost",
    "min_output_cost",
    "max_output_cost",
    "min_context",
    "max_context",
    "min_output_limit",
    "max_output_limit",
    "modalities",
    "release_after",
    "release_before",
    "updated_after",
    "updated_before",
)

PROVIDER_FILTER_PARAMS = ("q", "env", "npm")


@dataclass(frozen=True)
class QueryOptions:
    """Normalized per-request query: raw filter values plus ordering and paging."""

    filters: Mapping[str, RawValue] = field(default_factory=dict)
    sort: str = DEFAULT_SORT
    order: str = DEFAULT_ORDER
    offset: int = 0
    limit: int | None = None
    fields: tuple[str, ...] = ()

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        *,
        filter_names: tuple[str, ...] = MODEL_FILTER_PARAMS,
        default_limit: int | None = None,
    ) -> QueryOptions:
        """Build options from query-string or tool-call arguments.

        Both surfaces funnel through here, so a given set of criteria yields the
        same options regardless of where it came from. Unknown keys and None
        values are ignored; paging values that do not parse fall back to their
        defaults.
        """
        filters = {
            name: params[name]
            for name in filter_names
            if params.get(name) is not None
        }

        offset = parse_int(params.get("offset"))
        limit = parse_int(params.get("limit"))
        if params.get("limit") is None:
            limit = default_limit

        sort = params.get("sort")
        order = params.get("order")
        return cls(
            filters=filters,
            sort=sort if isinstance(sort, str) and sort else DEFAULT_SORT,
            order=order.lower() if isinstance(order, str) and order else DEFAULT_ORDER,
            offset=offset if offset and offset > 0 else 0,
            limit=limit if limit and limit > 0 else None,
            fields=split_list(params.get("fields")),
        )
