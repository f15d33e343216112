from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable

from modelsplus.catalog.records import Model
from modelsplus.config.defaults import DEFAULT_SORT
from modelsplus.engine.coercion import parse_date
from modelsplus.utils.dates import EPOCH_MIN


def _date_key(value: str | None) -> datetime:
    return parse_date(value) or EPOCH_MIN


SORT_KEYS: dict[str, Callable[[Model], object]] = {
    "name": lambda m: (m.name or m.id).lower(),
    "provider": lambda m: m.provider.lower(),
    "release_date": lambda m: _date_key(m.release_date),
    "last_updated": lambda m: _date_key(m.last_updated),
    "cost_input": lambda m: (m.cost.input if m.cost else None) or 0,
    "cost_output": lambda m: (m.cost.output if m.cost else None) or 0,
    "context_limit": lambda m: (m.limit.context if m.limit else None) or 0,
    "output_limit": lambda m: (m.limit.output if m.limit else None) or 0,
}


def sort_models(
    models: Iterable[Model], sort: str | None = None, order: str | None = None
) -> list[Model]:
    """Return a new list ordered by ``sort``; unknown keys order by name.

    ``sorted`` is stable in both directions, so records with equal keys keep
    their incoming relative order.
    """
    key = SORT_KEYS.get(sort or DEFAULT_SORT, SORT_KEYS[DEFAULT_SORT])
    return sorted(models, key=key, reverse=(order or "").lower() == "desc")
