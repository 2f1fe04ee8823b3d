"""Time Zone Clock - Pure functions over (instant, zone).

The upstream system stores naive timestamps that are implicitly UTC, so any
timestamp without an explicit offset is read as UTC, never as local time.
"Now" and the zone are always passed in by the caller.

Malformed input never raises: parsing failures come back as None and the
formatting helpers render an empty string.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


UTC = timezone.utc

TimestampInput = Optional[str | datetime | date]
ZoneInput = Optional[str | tzinfo]


def get_zone(zone: ZoneInput) -> tzinfo:
    """Resolve an IANA zone identifier, falling back to UTC.

    Args:
        zone: IANA name (e.g. "America/Toronto"), a tzinfo, or None

    Returns:
        The resolved tzinfo; UTC if the name is blank or unknown
    """
    if isinstance(zone, tzinfo):
        return zone
    if not zone or not zone.strip():
        return UTC
    try:
        return ZoneInfo(zone.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return UTC


def to_instant(value: TimestampInput) -> datetime | None:
    """Normalize a possibly naive timestamp to an aware UTC datetime.

    Strings and datetimes without an offset are treated as UTC. A trailing
    "Z" is accepted. Plain dates become UTC midnight.

    Args:
        value: ISO-8601 string, datetime, date, or None

    Returns:
        Aware datetime in UTC, or None if absent or unparseable
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def local_date(value: TimestampInput, zone: ZoneInput) -> date | None:
    """Calendar date of an instant as observed in a zone."""
    instant = to_instant(value)
    if instant is None:
        return None
    return instant.astimezone(get_zone(zone)).date()


def start_of_day(value: TimestampInput, zone: ZoneInput) -> datetime | None:
    """Midnight of the calendar day containing the instant, as observed in zone."""
    day = local_date(value, zone)
    if day is None:
        return None
    return datetime.combine(day, time.min, tzinfo=get_zone(zone))


def combine_local(day: date, time_of_day: time, zone: ZoneInput) -> datetime:
    """Aware instant for a wall-clock date and time in a zone."""
    return datetime.combine(day, time_of_day, tzinfo=get_zone(zone))


def same_calendar_day(a: TimestampInput, b: TimestampInput, zone: ZoneInput) -> bool:
    """True if both instants fall on the same calendar day in zone.

    Missing or malformed input is never the same day.
    """
    day_a = local_date(a, zone)
    day_b = local_date(b, zone)
    if day_a is None or day_b is None:
        return False
    return day_a == day_b


def format_time(value: TimestampInput, zone: ZoneInput) -> str:
    """Render the wall-clock time in zone, e.g. "3:05 PM"."""
    instant = to_instant(value)
    if instant is None:
        return ""
    local = instant.astimezone(get_zone(zone))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem}"


def format_date(value: TimestampInput, zone: ZoneInput) -> str:
    """Render the calendar date in zone, e.g. "February 17, 2026"."""
    day = local_date(value, zone)
    if day is None:
        return ""
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def date_separator_label(value: TimestampInput, zone: ZoneInput, now: TimestampInput) -> str:
    """Label a timestamp as "Today", "Yesterday" or its full date in zone.

    Args:
        value: Timestamp to label (naive means UTC)
        zone: Viewer's IANA zone
        now: Current instant supplied by the caller

    Returns:
        "Today", "Yesterday", a formatted date, or "" if value is absent
    """
    day_start = start_of_day(value, zone)
    if day_start is None:
        return ""

    today_start = start_of_day(now, zone)
    if today_start is None:
        return format_date(value, zone)

    if day_start == today_start:
        return "Today"
    if day_start == today_start - timedelta(days=1):
        return "Yesterday"
    return format_date(value, zone)
