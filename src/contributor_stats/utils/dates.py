"""Date parsing and window filtering helpers."""

import calendar
import re
from datetime import date, datetime, time, timezone

from contributor_stats.exceptions import InvalidDateRangeError

CALENDAR_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# RFC 3339 date-time with a mandatory offset
RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})"
)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp, returning None when it is unusable.

    Timestamps without a UTC offset are rejected so that comparisons are
    always between aware datetimes.
    """
    if not value or not isinstance(value, str):
        return None
    if not RFC3339_PATTERN.fullmatch(value):
        return None
    if value[-1] in "Zz":
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value.replace("t", "T"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def is_within_date_range(value: str | None, start: str | None, end: str | None) -> bool:
    """Check whether ``value`` lies strictly between ``start`` and ``end``.

    Both bounds are exclusive. A malformed timestamp on either side makes
    the item count as out of range instead of raising.
    """
    parsed = parse_datetime(value)
    parsed_start = parse_datetime(start)
    parsed_end = parse_datetime(end)
    if parsed is None or parsed_start is None or parsed_end is None:
        return False
    return parsed_start < parsed < parsed_end


def parse_calendar_date(value: str, label: str = "date") -> date:
    """Parse a YYYY-MM-DD string, raising InvalidDateRangeError on bad input."""
    try:
        return datetime.strptime(value, CALENDAR_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise InvalidDateRangeError(
            f"Invalid {label} format: {value!r}. Use YYYY-MM-DD"
        ) from e


def start_of_day(day: date) -> str:
    """First second of ``day`` in UTC, formatted for the REST API."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc).strftime(TIMESTAMP_FORMAT)


def end_of_day(day: date) -> str:
    """Last second of ``day`` in UTC, formatted for the REST API."""
    return datetime.combine(
        day, time(23, 59, 59), tzinfo=timezone.utc
    ).strftime(TIMESTAMP_FORMAT)


def months_before(day: date, months: int = 1) -> date:
    """Same calendar day ``months`` months earlier, clamped to month end."""
    index = day.year * 12 + day.month - 1 - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))
