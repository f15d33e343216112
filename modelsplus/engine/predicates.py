"""Translate raw filter values into a list of record predicates.

Each filter family has a factory that takes the raw value and returns a
:class:`Predicate`, or None when the value is blank or does not parse. A
record matches a query when it satisfies every predicate in the list.

Absence is handled per family. Exact-match and range filters fail for records
that lack the inspected field; a record without a cost can never satisfy a
cost bound. Text search falls back to whatever fields the record has.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Generic, Iterable, Mapping, TypeVar

from modelsplus.catalog.records import Model, Provider
from modelsplus.engine.coercion import parse_bool, parse_date, parse_number, split_list
from modelsplus.engine.options import RawValue

R = TypeVar("R")


@dataclass(frozen=True)
class Predicate(Generic[R]):
    field: str
    test: Callable[[R], bool]

    def __call__(self, record: R) -> bool:
        return self.test(record)


PredicateFactory = Callable[[RawValue], "Predicate | None"]


def apply_predicates(records: Iterable[R], predicates: list[Predicate[R]]) -> list[R]:
    if not predicates:
        return list(records)
    return [r for r in records if all(p(r) for p in predicates)]


# Model field accessors


def _cost_input(m: Model) -> float | None:
    return m.cost.input if m.cost else None


def _cost_output(m: Model) -> float | None:
    return m.cost.output if m.cost else None


def _limit_context(m: Model) -> int | None:
    return m.limit.context if m.limit else None


def _limit_output(m: Model) -> int | None:
    return m.limit.output if m.limit else None


def _released(m: Model) -> datetime | None:
    return parse_date(m.release_date)


def _updated(m: Model) -> datetime | None:
    return parse_date(m.last_updated)


# Factories


def _model_text(value: RawValue) -> Predicate[Model] | None:
    if not isinstance(value, str) or not value:
        return None
    query = value.lower()
    return Predicate("text", lambda m: query in m.search_text)


def _model_provider(value: RawValue) -> Predicate[Model] | None:
    if not isinstance(value, str) or not value:
        return None
    return Predicate("provider", lambda m: m.provider == value)


def _flag(name: str) -> PredicateFactory:
    def factory(value: RawValue) -> Predicate[Model] | None:
        wanted = parse_bool(value)
        if wanted is None:
            return None
        return Predicate(name, lambda m: getattr(m, name) is wanted)

    return factory


def _bound(
    name: str,
    accessor: Callable[[Model], float | int | None],
    compare: Callable[[float, float], bool],
) -> PredicateFactory:
    def factory(value: RawValue) -> Predicate[Model] | None:
        bound = parse_number(value)
        if bound is None:
            return None

        def test(m: Model) -> bool:
            actual = accessor(m)
            return actual is not None and compare(actual, bound)

        return Predicate(name, test)

    return factory


def _date_bound(
    name: str,
    accessor: Callable[[Model], datetime | None],
    compare: Callable[[datetime, datetime], bool],
) -> PredicateFactory:
    def factory(value: RawValue) -> Predicate[Model] | None:
        bound = parse_date(value)
        if bound is None:
            return None

        def test(m: Model) -> bool:
            actual = accessor(m)
            return actual is not None and compare(actual, bound)

        return Predicate(name, test)

    return factory


def _model_modalities(value: RawValue) -> Predicate[Model] | None:
    requested = {tag.lower() for tag in split_list(value)}
    if not requested:
        return None
    return Predicate("modalities", lambda m: requested <= m.all_modalities)


MODEL_FILTERS: Mapping[str, PredicateFactory] = {
    "q": _model_text,
    "provider": _model_provider,
    "tool_call": _flag("tool_call"),
    "attachment": _flag("attachment"),
    "reasoning": _flag("reasoning"),
    "temperature": _flag("temperature"),
    "open_weights": _flag("open_weights"),
    "min_input_cost": _bound("cost.input", _cost_input, operator.ge),
    "max_input_cost": _bound("cost.input", _cost_input, operator.le),
    "min_output_cost": _bound("cost.output", _cost_output, operator.ge),
    "max_output_cost": _bound("cost.output", _cost_output, operator.le),
    "min_context": _bound("limit.context", _limit_context, operator.ge),
    "max_context": _bound("limit.context", _limit_context, operator.le),
    "min_output_limit": _bound("limit.output", _limit_output, operator.ge),
    "max_output_limit": _bound("limit.output", _limit_output, operator.le),
    "modalities": _model_modalities,
    "release_after": _date_bound("release_date", _released, operator.ge),
    "release_before": _date_bound("release_date", _released, operator.le),
    "updated_after": _date_bound("last_updated", _updated, operator.ge),
    "updated_before": _date_bound("last_updated", _updated, operator.le),
}


def _provider_text(value: RawValue) -> Predicate[Provider] | None:
    if not isinstance(value, str) or not value:
        return None
    query = value.lower()
    return Predicate(
        "text", lambda p: query in p.name.lower() or query in p.id.lower()
    )


def _provider_env(value: RawValue) -> Predicate[Provider] | None:
    if not isinstance(value, str) or not value:
        return None
    needle = value.lower()
    return Predicate("env", lambda p: any(needle in e.lower() for e in p.env))


def _provider_npm(value: RawValue) -> Predicate[Provider] | None:
    if not isinstance(value, str) or not value:
        return None
    needle = value.lower()
    return Predicate("npm", lambda p: p.npm is not None and needle in p.npm.lower())


PROVIDER_FILTERS: Mapping[str, PredicateFactory] = {
    "q": _provider_text,
    "env": _provider_env,
    "npm": _provider_npm,
}


def _build(
    factories: Mapping[str, PredicateFactory], filters: Mapping[str, RawValue]
) -> list[Predicate]:
    predicates = []
    for name, factory in factories.items():
        if name not in filters:
            continue
        predicate = factory(filters[name])
        if predicate is not None:
            predicates.append(predicate)
    return predicates


def build_model_predicates(filters: Mapping[str, RawValue]) -> list[Predicate[Model]]:
    return _build(MODEL_FILTERS, filters)


def build_provider_predicates(
    filters: Mapping[str, RawValue],
) -> list[Predicate[Provider]]:
    return _build(PROVIDER_FILTERS, filters)
