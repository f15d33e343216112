from __future__ import annotations

from datetime import datetime, timezone

# Earliest orderable instant; missing dates sort here.
EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)

_PARTIAL_FORMATS = ("%Y-%m", "%Y")


def utc_now_iso() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def parse_date(value: object) -> datetime | None:
    """Parse a calendar date or ISO 8601 date-time into an aware UTC datetime.

    Accepts ``YYYY``, ``YYYY-MM``, ``YYYY-MM-DD`` and full ISO 8601 strings
    (a trailing ``Z`` is understood). Naive values are taken as UTC.
    Returns None for anything that does not parse or falls outside the
    representable range once converted to UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not isinstance(value, str):
            return None
        text = value.strip()
        if not text:
            return None
        parsed = _parse_text(text)
        if parsed is None:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


def _parse_text(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _PARTIAL_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
