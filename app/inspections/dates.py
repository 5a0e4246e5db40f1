"""Date canonicalization for inspection form values."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

_DAY_FIRST_RE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")
_YEAR_FIRST_RE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")

# Two unrelated defaults: a field dateutil fills in differs between the parses.
_FALLBACK_DEFAULTS = (datetime(1904, 1, 1), datetime(1905, 2, 2))


def _format(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _calendar_date(year: str, month: str, day: str) -> str | None:
    """Build ``YYYY-MM-DD`` from matched parts, or ``None`` for impossible dates."""
    iso = f"{year}-{int(month):02d}-{int(day):02d}"
    try:
        datetime.strptime(iso, "%Y-%m-%d")
    except ValueError:
        return None
    return iso


def _from_timestamp(value: float) -> str | None:
    """Format a millisecond epoch timestamp in local time."""
    if not math.isfinite(value):
        return None
    try:
        return _format(datetime.fromtimestamp(value / 1000))
    except (OverflowError, OSError, ValueError):
        return None


def canonicalize_date(value: Any) -> str | None:
    """Normalize a date-ish form value into ``YYYY-MM-DD``.

    Accepts ``date``/``datetime`` objects, millisecond timestamps and strings in
    ``DD-MM-YYYY``, ``DD/MM/YYYY``, ``YYYY-MM-DD`` or ``YYYY/MM/DD`` form. Other
    strings go through a lenient generic parse. Anything that cannot be turned
    into a real calendar date yields ``None``.
    """
    if value is None or value == "":
        return None

    if isinstance(value, date):
        return _format(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_timestamp(float(value))
    if not isinstance(value, str):
        return None

    normalized = value.strip()
    if not normalized:
        return None

    # A matched pattern is final: an impossible date does not fall through.
    match = _DAY_FIRST_RE.match(normalized)
    if match:
        day, month, year = match.groups()
        return _calendar_date(year, month, day)

    match = _YEAR_FIRST_RE.match(normalized)
    if match:
        year, month, day = match.groups()
        return _calendar_date(year, month, day)

    return _fallback_parse(normalized)


def _fallback_parse(text: str) -> str | None:
    """Generic parse that only accepts text naming a full year, month and day."""
    try:
        first, second = (
            date_parser.parse(text, dayfirst=True, yearfirst=False, default=default)
            for default in _FALLBACK_DEFAULTS
        )
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return _format(first)
