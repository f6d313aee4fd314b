"""Tests for date parsing and period bounds."""

import pytest
from datetime import date, datetime, timedelta, timezone, UTC
from dateutil.relativedelta import relativedelta

from cajachica.utils.date_parser import (
    month_bounds,
    parse_date,
    parse_datetime,
    parse_optional_datetime,
    to_utc,
    week_bounds,
)


def test_parse_absolute_date():
    """Test parsing ISO dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_day_first_date():
    """Slash dates are read day first."""
    assert parse_date("05/03/2024") == date(2024, 3, 5)


def test_parse_today_in_both_languages():
    assert parse_date("today") == date.today()
    assert parse_date("Hoy") == date.today()


def test_parse_yesterday_and_tomorrow():
    assert parse_date("ayer") == date.today() - timedelta(days=1)
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


def test_parse_next_month():
    """Test parsing 'next month' as the first day of next month."""
    expected = (date.today() + relativedelta(months=1)).replace(day=1)
    assert parse_date("next month") == expected
    assert parse_date("proximo mes") == expected


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


def test_parse_datetime_plain_date_is_midnight_utc():
    assert parse_datetime("2024-01-15") == datetime(2024, 1, 15, tzinfo=UTC)


def test_parse_datetime_converts_offset_to_utc():
    result = parse_datetime("2024-01-15T10:00:00-03:00")
    assert result == datetime(2024, 1, 15, 13, 0, tzinfo=UTC)
    assert result.tzinfo == UTC


def test_parse_datetime_naive_timestamp_is_utc():
    assert parse_datetime("2024-01-15T10:30:00") == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


def test_parse_datetime_empty():
    with pytest.raises(ValueError):
        parse_datetime("   ")


def test_parse_optional_datetime_passes_blank_through():
    assert parse_optional_datetime(None) is None
    assert parse_optional_datetime("") is None
    assert parse_optional_datetime("2024-02-01") == datetime(2024, 2, 1, tzinfo=UTC)


def test_to_utc():
    naive = datetime(2024, 1, 1, 12, 0)
    assert to_utc(naive) == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    offset = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert to_utc(offset) == datetime(2024, 1, 1, 15, 0, tzinfo=UTC)


def test_week_bounds_start_on_sunday():
    """A Wednesday belongs to the week starting the previous Sunday."""
    start, end = week_bounds(datetime(2024, 3, 13, 15, 0, tzinfo=UTC))
    assert start == datetime(2024, 3, 10, tzinfo=UTC)
    assert start.weekday() == 6
    assert end.date() == date(2024, 3, 16)
    assert end.hour == 23 and end.minute == 59


def test_week_bounds_on_sunday_itself():
    start, _ = week_bounds(datetime(2024, 3, 10, 0, 0, tzinfo=UTC))
    assert start.date() == date(2024, 3, 10)


def test_month_bounds():
    start, end = month_bounds(datetime(2024, 2, 14, tzinfo=UTC))
    assert start == datetime(2024, 2, 1, tzinfo=UTC)
    # Leap year
    assert end.date() == date(2024, 2, 29)
