"""Forgiving conversions from raw query values to typed values.

Every helper returns None when the input cannot be understood; the caller
then drops the corresponding filter instead of failing the request.
"""

from __future__ import annotations

import math
from datetime import datetime

from modelsplus.utils.dates import parse_date as _parse_date


def parse_bool(value: object) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


def parse_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def parse_int(value: object) -> int | None:
    number = parse_number(value)
    if number is None or math.isinf(number):
        return None
    return int(number)


def parse_date(value: object) -> datetime | None:
    return _parse_date(value)


def split_list(value: object) -> tuple[str, ...]:
    """Split a comma separated value, dropping blank entries."""
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [str(v) for v in value]
    else:
        return ()
    return tuple(p.strip() for p in parts if p.strip())
