"""
Date Normalization

Stored transactions carry dates in several textual encodings:
- ISO timestamps written by the app ("2024-01-10T09:15:00.000Z")
- ISO calendar dates ("2024-01-10")
- day-first slashed dates ("10/01/2024")
- day-first dashed dates ("10-01-2024")
- nothing at all

DESIGN DECISION: Parsing is an ordered chain of small strategies. Each one
either returns a datetime or None, and the first success wins. Anything
that no strategy understands falls back to `now`, which the caller always
passes in explicitly so results are reproducible.

Delimited dates are ALWAYS read day-first. "03/04/2024" is 3 April.
No attempt is made to guess month-first input.
"""

from datetime import date, datetime
from typing import Any, Callable, Optional

DAY_LABEL_FORMAT = "%d/%m/%Y"

ParseStrategy = Callable[[Any], Optional[datetime]]


def _naive(value: datetime) -> datetime:
    # Keep the wall-clock time as written; the calendar day must match
    # what a plain ISO parser reports for the same string.
    if value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def _from_native(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None


def _from_iso(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _naive(datetime.fromisoformat(text))
    except ValueError:
        return None


def _day_first(separator: str) -> ParseStrategy:
    """Build a strategy reading `DD<sep>MM<sep>YYYY`."""

    def parse(value: Any) -> Optional[datetime]:
        if not isinstance(value, str) or separator not in value:
            return None
        parts = [part.strip() for part in value.strip().split(separator)]
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            return None
        day, month, year = parts
        if len(year) != 4:
            return None
        try:
            return datetime.fromisoformat(f"{year}-{month:0>2}-{day:0>2}")
        except ValueError:
            return None

    parse.__name__ = f"day_first_{separator!r}"
    return parse


PARSE_STRATEGIES: tuple[ParseStrategy, ...] = (
    _from_native,
    _from_iso,
    _day_first("/"),
    _day_first("-"),
)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def normalize_datetime(value: Any, now: datetime) -> datetime:
    """
    Reduce any supported date encoding to a naive datetime.

    Blank and unparseable values return `now` (also made naive).
    """
    if _is_blank(value):
        return _naive(now)
    for strategy in PARSE_STRATEGIES:
        parsed = strategy(value)
        if parsed is not None:
            return parsed
    return _naive(now)


def normalize_date(value: Any, now: datetime) -> date:
    """Calendar day a raw date value is attributed to."""
    return normalize_datetime(value, now).date()


def is_parseable(value: Any) -> bool:
    """True when some strategy understands `value` without the fallback."""
    if _is_blank(value):
        return False
    return any(strategy(value) is not None for strategy in PARSE_STRATEGIES)


def format_day_label(value: date) -> str:
    """Render a normalized date as the zero-padded `DD/MM/YYYY` key."""
    return value.strftime(DAY_LABEL_FORMAT)
