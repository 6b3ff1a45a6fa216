"""
Timestamp normalization for weighing times and bill dates.

Everything is stored as naive UTC with second precision and rendered as
``YYYY-MM-DD HH:MM:SS``. Input that cannot be parsed becomes ``None``: gate
tablets send whatever their date pickers produce and a bad timestamp must not
block recording a weight.
"""
from datetime import date, datetime, timezone
from typing import Any, Optional

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
DATE_FORMAT = '%Y-%m-%d'


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a client timestamp into a naive UTC datetime.

    Accepts ISO 8601 strings (``2024-01-15T08:30:00Z``, ``2024-01-15 08:30:00``,
    ``2024-01-15T10:30:00+02:00``), datetime objects and epoch milliseconds.
    Values without an offset are taken as UTC.

    Examples:
        parse_timestamp("2024-01-15T08:30:00Z") -> datetime(2024, 1, 15, 8, 30)
        parse_timestamp("") -> None
        parse_timestamp("yesterday") -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in 'Zz':
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed.replace(microsecond=0)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Render a stored timestamp as YYYY-MM-DD HH:MM:SS."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def parse_date(value: Any) -> Optional[date]:
    """Parse a bill date (YYYY-MM-DD or any timestamp parse_timestamp accepts)."""
    if isinstance(value, datetime):
        return parse_timestamp(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None
