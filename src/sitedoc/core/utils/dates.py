"""Coerce front matter date values to datetimes"""

from datetime import date, datetime
from typing import Optional

from dateutil import parser as dateutil_parser


def parse_date(value) -> datetime:
    """Return value as a datetime. Raises ValueError if it cannot be read as one.

    Strings are tried as ISO 8601 first, then with dateutil's free-form
    parser (year first, so two-digit filename years read as 20YY).
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date: {value!r}")

    text = value.strip()
    try:
        return dateutil_parser.isoparse(text)
    except (ValueError, OverflowError):
        pass
    try:
        return dateutil_parser.parse(text, yearfirst=True)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid date: {text!r}") from e


def epoch_seconds(value: datetime) -> int:
    """Integer seconds since the epoch (naive values are read as local time)."""
    return int(value.timestamp())


def timestamp_or_none(value) -> Optional[float]:
    """Seconds since the epoch for anything parse_date accepts, else None.

    Aware and naive datetimes become comparable this way.
    """
    if value is None:
        return None
    try:
        return parse_date(value).timestamp()
    except (ValueError, OverflowError, OSError):
        return None
