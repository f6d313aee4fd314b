"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta, UTC
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15/01/2024") and the relative
    words "today"/"hoy", "yesterday"/"ayer", "tomorrow"/"mañana", plus
    "next month"/"proximo mes" for the first day of next month.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "hoy": today,
        "yesterday": today - timedelta(days=1),
        "ayer": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "mañana": today + timedelta(days=1),
        "next month": (today + relativedelta(months=1)).replace(day=1),
        "proximo mes": (today + relativedelta(months=1)).replace(day=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Day-first, as written in Argentina
    try:
        dt = date_parser.parse(date_str, dayfirst="/" in date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-like timestamp or a date string into an aware UTC datetime.

    Plain dates ("2024-01-15", "hoy") map to midnight UTC of that day.

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip()
    if not text:
        raise ValueError("Empty date string")
    if "T" in text or ":" in text:
        try:
            return to_utc(date_parser.isoparse(text))
        except ValueError:
            pass
    return datetime.combine(parse_date(text), time.min, tzinfo=UTC)


def parse_optional_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a timestamp string, passing None and empty strings through."""
    if value is None or not value.strip():
        return None
    return parse_datetime(value)


def week_bounds(value: datetime) -> tuple[datetime, datetime]:
    """Return the Sunday 00:00 to Saturday 23:59:59.999999 range containing value."""
    day = value.date()
    start_day = day - timedelta(days=(day.weekday() + 1) % 7)
    start = datetime.combine(start_day, time.min, tzinfo=value.tzinfo)
    end = datetime.combine(start_day + timedelta(days=6), time.max, tzinfo=value.tzinfo)
    return start, end


def month_bounds(value: datetime) -> tuple[datetime, datetime]:
    """Return the first and last instant of the month containing value."""
    start = datetime.combine(value.date().replace(day=1), time.min, tzinfo=value.tzinfo)
    last_day = (start + relativedelta(months=1)).date() - timedelta(days=1)
    end = datetime.combine(last_day, time.max, tzinfo=value.tzinfo)
    return start, end
