"""Unit tests for core/utils/dates.py"""

from datetime import date, datetime, timedelta, timezone

import pytest

from sitedoc.core.utils.dates import epoch_seconds, parse_date, timestamp_or_none


@pytest.mark.parametrize("value,expected", [
    ("2023-05-01", datetime(2023, 5, 1)),
    ("2023-5-1", datetime(2023, 5, 1)),
    ("2023-05-01 10:30", datetime(2023, 5, 1, 10, 30)),
    ("2023-05-01 10:30:15", datetime(2023, 5, 1, 10, 30, 15)),
    ("2023-05-01T10:30:15", datetime(2023, 5, 1, 10, 30, 15)),
    ("23-01-02", datetime(2023, 1, 2)),
    ("2023/05/01", datetime(2023, 5, 1)),
    ("May 1, 2023", datetime(2023, 5, 1)),
    ("1 May 2023 10:30", datetime(2023, 5, 1, 10, 30)),
    (date(2023, 5, 1), datetime(2023, 5, 1)),
])
def test_parse_date(value, expected):
    assert parse_date(value) == expected


def test_parse_date_with_offset():
    parsed = parse_date("2023-05-01 10:00:00 +0000")
    assert parsed == datetime(2023, 5, 1, 10, tzinfo=timezone.utc)


def test_parse_date_passes_datetimes_through():
    value = datetime(2020, 1, 1, 8)
    assert parse_date(value) is value


@pytest.mark.parametrize("value", ["not-a-date", "2023-02-30", 42, "", None])
def test_parse_date_invalid(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_epoch_seconds_truncates():
    value = datetime(2023, 5, 1, 10, 0, 0, 999999, tzinfo=timezone.utc)
    assert epoch_seconds(value) == 1682935200


def test_timestamp_or_none_compares_aware_and_naive():
    aware = timestamp_or_none(datetime(2023, 6, 1, 10, tzinfo=timezone(timedelta(hours=2))))
    naive = timestamp_or_none(datetime(2023, 12, 1))
    assert aware < naive
    assert timestamp_or_none("2023-06-01") == datetime(2023, 6, 1).timestamp()


@pytest.mark.parametrize("value", [None, "nonsense", 42])
def test_timestamp_or_none_unreadable(value):
    assert timestamp_or_none(value) is None
