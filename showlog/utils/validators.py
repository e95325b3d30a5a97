# showlog/utils/validators.py
"""
Coercion helpers shared by the request schemas and the import pipeline.
"""

import math
from datetime import date, datetime, timezone
from typing import Any


def parse_show_date(value: Any) -> date:
    """
    Reduce a date-ish value to the UTC calendar day it falls on.

    Accepts ``date`` and ``datetime`` objects as well as ISO 8601 strings
    ("2016-03-15", "2016-03-15T20:00:00Z", "2016-03-15T20:00:00-08:00").
    Naive datetimes are taken to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("date is empty")
        if len(text) == 10:
            return date.fromisoformat(text)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    else:
        raise ValueError(f"unsupported date value: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def coerce_coordinate(value: Any) -> float:
    """Parse a latitude/longitude; anything unparsable becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coerce_concert_type(value: Any) -> str:
    """Only the exact literal 'festival' makes a festival."""
    return "festival" if value == "festival" else "concert"
