"""Date parser service - Normalizes free-text dates entered in forms.

Supported formats, tried in order:

- "2025-06-01" / "2025-06-01T00:00:00Z" (ISO prefix)
- "06/01/2025", "06/01/25" (month/day/year)
- "June 1990" (day defaults to 1)
- "June 1 2025", "June 1, 2025"
- "1990" (January 1)
"""
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from ...domain.entities.parsed_date import ParsedDate

logger = logging.getLogger(__name__)

MONTH_NAMES = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

DISPLAY_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

MIN_YEAR = 1900
MAX_YEAR = 2100

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_SLASH = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$")
_MONTH_YEAR = re.compile(r"^([a-z]+)\s+(\d{4})$", re.IGNORECASE)
_MONTH_DAY_YEAR = re.compile(r"^([a-z]+)\s+(\d{1,2}),?\s+(\d{4})$", re.IGNORECASE)
_YEAR = re.compile(r"^(\d{4})$")


def to_iso(value: datetime) -> str:
    """Format a datetime as a UTC ISO-8601 instant with millisecond precision."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}.{value.microsecond // 1000:03d}Z"
    )


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_epoch_ms(value: datetime) -> int:
    """Milliseconds since the epoch; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def _build(year: int, month: int, day: int) -> Optional[ParsedDate]:
    """Build a ParsedDate at UTC midnight, or None if the date does not exist."""
    try:
        midnight = datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None
    return ParsedDate(year=year, month=month, day=day, iso=to_iso(midnight))


def _parse_iso(text: str) -> Optional[ParsedDate]:
    candidate = text.replace("Z", "+00:00").replace("z", "+00:00")
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        logger.warning(f"Failed to parse date: {text}")
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return _build(parsed.year, parsed.month, parsed.day)


def _parse_slash(match: "re.Match[str]") -> Optional[ParsedDate]:
    month = int(match.group(1))
    day = int(match.group(2))
    year = int(match.group(3))
    if year < 100:
        year = 2000 + year if year < 30 else 1900 + year
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return _build(year, month, day)


def _parse_month_name(month_name: str, day: int, year: int) -> Optional[ParsedDate]:
    month = MONTH_NAMES.get(month_name.lower())
    if not month:
        return None
    if not (1 <= day <= 31 and MIN_YEAR <= year <= MAX_YEAR):
        return None
    return _build(year, month, day)


def parse_flexible_date(value: Optional[str]) -> Optional[ParsedDate]:
    """
    Parse a date string in various formats - pure function.

    The first pattern that matches decides the outcome; a matching string
    with out-of-range parts yields None rather than trying later patterns.

    Args:
        value: Free-text date as typed into a form

    Returns:
        ParsedDate, or None when the input is empty or unrecognized
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if _ISO_PREFIX.match(text):
        return _parse_iso(text)

    match = _SLASH.match(text)
    if match:
        return _parse_slash(match)

    match = _MONTH_YEAR.match(text)
    if match:
        return _parse_month_name(match.group(1), 1, int(match.group(2)))

    match = _MONTH_DAY_YEAR.match(text)
    if match:
        return _parse_month_name(match.group(1), int(match.group(2)), int(match.group(3)))

    match = _YEAR.match(text)
    if match:
        year = int(match.group(1))
        if MIN_YEAR <= year <= MAX_YEAR:
            return _build(year, 1, 1)
        return None

    logger.warning(f"Failed to parse date: {text}")
    return None


def parse_date_or_default(value: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Parse a date string and return its ISO form, or the current time if parsing fails.

    Args:
        value: Free-text date, may be empty
        now: Override for the current time (UTC assumed when naive)

    Returns:
        ISO-8601 instant string
    """
    parsed = parse_flexible_date(value) if value else None
    if parsed:
        return parsed.iso

    current = now or utc_now()
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return to_iso(current)


def format_date(parsed: ParsedDate) -> str:
    """Format a parsed date for display, e.g. "June 1, 1990"."""
    return f"{DISPLAY_MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}"
