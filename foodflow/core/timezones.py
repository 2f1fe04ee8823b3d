"""Time Zone Resolution - Map profile locations and UTC offsets to IANA zones.

Profiles store a city and country, and some clients only report an offset
such as "UTC-05:00". These lookups turn either into an IANA identifier the
clock functions can use. Unknown input always resolves to "UTC".
"""

from datetime import timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .clock import TimestampInput, to_instant


DEFAULT_TIMEZONE = "UTC"

CITY_TIMEZONES: dict[str, str] = {
    # Canada
    "Toronto|Canada": "America/Toronto",
    "Vancouver|Canada": "America/Vancouver",
    "Montreal|Canada": "America/Toronto",
    "Calgary|Canada": "America/Edmonton",
    "Ottawa|Canada": "America/Toronto",
    "Edmonton|Canada": "America/Edmonton",
    "Winnipeg|Canada": "America/Winnipeg",
    "Quebec City|Canada": "America/Toronto",
    "Halifax|Canada": "America/Halifax",
    # United States
    "New York|United States": "America/New_York",
    "Los Angeles|United States": "America/Los_Angeles",
    "Chicago|United States": "America/Chicago",
    "Houston|United States": "America/Chicago",
    "Phoenix|United States": "America/Phoenix",
    "Philadelphia|United States": "America/New_York",
    "San Francisco|United States": "America/Los_Angeles",
    "Seattle|United States": "America/Los_Angeles",
    "Denver|United States": "America/Denver",
    "Boston|United States": "America/New_York",
    "Detroit|United States": "America/Detroit",
    "Miami|United States": "America/New_York",
    # Europe
    "London|United Kingdom": "Europe/London",
    "Manchester|United Kingdom": "Europe/London",
    "Paris|France": "Europe/Paris",
    "Lyon|France": "Europe/Paris",
    "Berlin|Germany": "Europe/Berlin",
    "Munich|Germany": "Europe/Berlin",
    "Rome|Italy": "Europe/Rome",
    "Madrid|Spain": "Europe/Madrid",
    "Barcelona|Spain": "Europe/Madrid",
    "Amsterdam|Netherlands": "Europe/Amsterdam",
    "Dublin|Ireland": "Europe/Dublin",
    "Lisbon|Portugal": "Europe/Lisbon",
    # Asia
    "Tokyo|Japan": "Asia/Tokyo",
    "Beijing|China": "Asia/Shanghai",
    "Shanghai|China": "Asia/Shanghai",
    "Seoul|South Korea": "Asia/Seoul",
    "Hong Kong|Hong Kong": "Asia/Hong_Kong",
    "Singapore|Singapore": "Asia/Singapore",
    "Bangkok|Thailand": "Asia/Bangkok",
    "Mumbai|India": "Asia/Kolkata",
    "Delhi|India": "Asia/Kolkata",
    "Dubai|United Arab Emirates": "Asia/Dubai",
    "Tel Aviv|Israel": "Asia/Jerusalem",
}

# Most populous zone when only the country is known
COUNTRY_TIMEZONES: dict[str, str] = {
    "canada": "America/Toronto",
    "united states": "America/New_York",
    "usa": "America/New_York",
    "mexico": "America/Mexico_City",
    "united kingdom": "Europe/London",
    "uk": "Europe/London",
    "france": "Europe/Paris",
    "germany": "Europe/Berlin",
    "italy": "Europe/Rome",
    "spain": "Europe/Madrid",
    "japan": "Asia/Tokyo",
    "china": "Asia/Shanghai",
    "india": "Asia/Kolkata",
    "singapore": "Asia/Singapore",
    "australia": "Australia/Sydney",
    "new zealand": "Pacific/Auckland",
    "brazil": "America/Sao_Paulo",
    "argentina": "America/Argentina/Buenos_Aires",
}

OFFSET_TIMEZONES: dict[str, str] = {
    "-12:00": "Etc/GMT+12",
    "-11:00": "Pacific/Pago_Pago",
    "-10:00": "Pacific/Honolulu",
    "-09:30": "Pacific/Marquesas",
    "-09:00": "America/Anchorage",
    "-08:00": "America/Los_Angeles",
    "-07:00": "America/Denver",
    "-06:00": "America/Chicago",
    "-05:00": "America/New_York",
    "-04:00": "America/Halifax",
    "-03:30": "America/St_Johns",
    "-03:00": "America/Argentina/Buenos_Aires",
    "-02:00": "Atlantic/South_Georgia",
    "-01:00": "Atlantic/Azores",
    "": DEFAULT_TIMEZONE,
    "+00:00": DEFAULT_TIMEZONE,
    "-00:00": DEFAULT_TIMEZONE,
    "+01:00": "Europe/London",
    "+02:00": "Europe/Paris",
    "+03:00": "Europe/Moscow",
    "+03:30": "Asia/Tehran",
    "+04:00": "Asia/Dubai",
    "+04:30": "Asia/Kabul",
    "+05:00": "Asia/Karachi",
    "+05:30": "Asia/Kolkata",
    "+05:45": "Asia/Kathmandu",
    "+06:00": "Asia/Dhaka",
    "+06:30": "Asia/Yangon",
    "+07:00": "Asia/Bangkok",
    "+08:00": "Asia/Shanghai",
    "+08:45": "Australia/Eucla",
    "+09:00": "Asia/Tokyo",
    "+09:30": "Australia/Darwin",
    "+10:00": "Australia/Sydney",
    "+10:30": "Australia/Lord_Howe",
    "+11:00": "Pacific/Guadalcanal",
    "+12:00": "Pacific/Auckland",
    "+12:45": "Pacific/Chatham",
    "+13:00": "Pacific/Tongatapu",
    "+14:00": "Pacific/Kiritimati",
}


def resolve_timezone(city: Optional[str], country: Optional[str]) -> str:
    """Resolve an IANA zone from a profile's city and country.

    Args:
        city: City name as entered on the profile
        country: Country name as entered on the profile

    Returns:
        IANA zone, the country default if the city is unknown, else "UTC"
    """
    if city is None or country is None:
        return DEFAULT_TIMEZONE

    key = f"{city.strip()}|{country.strip()}"
    if key in CITY_TIMEZONES:
        return CITY_TIMEZONES[key]
    return COUNTRY_TIMEZONES.get(country.strip().lower(), DEFAULT_TIMEZONE)


def offset_to_timezone(offset: Optional[str]) -> str:
    """Map a "UTC±HH:MM" or "GMT±HH:MM" string to a representative IANA zone."""
    if not offset or not offset.strip():
        return DEFAULT_TIMEZONE

    normalized = offset.strip().upper()
    if not normalized.startswith(("UTC", "GMT")):
        return DEFAULT_TIMEZONE
    return OFFSET_TIMEZONES.get(normalized[3:], DEFAULT_TIMEZONE)


def is_valid_timezone(name: Optional[str]) -> bool:
    """True if name is a known IANA zone identifier."""
    if not name or not name.strip():
        return False
    try:
        ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def utc_offset(name: Optional[str], at: TimestampInput) -> str:
    """UTC offset of a zone at an instant, formatted "+HH:MM".

    Unknown zones and unparseable instants report "+00:00".
    """
    instant = to_instant(at)
    if instant is None or not is_valid_timezone(name):
        return "+00:00"

    offset = instant.astimezone(ZoneInfo(name.strip())).utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"
