"""Parse Spanish-locale Jira timestamps and derive calendar keys."""

import calendar
import re
from datetime import datetime

from ticket_pipeline.utils.types import YearMonth

SPANISH_MONTHS = {
    "ene": "Jan",
    "feb": "Feb",
    "mar": "Mar",
    "abr": "Apr",
    "may": "May",
    "jun": "Jun",
    "jul": "Jul",
    "ago": "Aug",
    "sept": "Sep",
    "sep": "Sep",
    "oct": "Oct",
    "nov": "Nov",
    "dic": "Dec",
}

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_SPANISH_TOKEN = re.compile(r"/(" + "|".join(SPANISH_MONTHS) + r")/", re.IGNORECASE)

# e.g. 19/Jan/26 12:47 PM
_CREATED_PATTERN = re.compile(
    r"([0-9]{1,2})/(" + "|".join(MONTH_ABBREVIATIONS) + r")/([0-9]{2})\s+([0-9]{1,2}):([0-9]{2})\s*(AM|PM)",
    re.IGNORECASE,
)


def normalize_spanish_month(text: str) -> str:
    """Replace a ``/mes/`` Spanish abbreviation with its English form."""
    return _SPANISH_TOKEN.sub(lambda m: f"/{SPANISH_MONTHS[m.group(1).lower()]}/", text)


def _expand_year(two_digit: int) -> int:
    return 1900 + two_digit if two_digit >= 70 else 2000 + two_digit


def _to_24_hour(hour: int, meridiem: str) -> int:
    match meridiem.upper():
        case "AM" if hour == 12:
            return 0
        case "PM" if hour != 12:
            return hour + 12
        case _:
            return hour


def parse_created(text: str | None) -> datetime | None:
    """Parse a ``D/mes/YY H:MM AM|PM`` timestamp into local wall-clock time.

    Returns None for anything that does not match the pattern exactly or
    names an impossible date, so the caller can drop and count the row.
    """
    if not text:
        return None
    match = _CREATED_PATTERN.fullmatch(normalize_spanish_month(str(text)).strip())
    if match is None:
        return None

    day, month_name, yy, hour, minute, meridiem = match.groups()
    if int(hour) > 12:
        return None
    month = MONTH_ABBREVIATIONS.index(month_name.capitalize()) + 1

    try:
        return datetime(
            _expand_year(int(yy)),
            month,
            int(day),
            _to_24_hour(int(hour), meridiem),
            int(minute),
            0,
        )
    except ValueError:
        return None


def year_of(instant: datetime) -> int:
    return instant.year


def year_month(instant: datetime) -> YearMonth:
    """``YYYY-MM`` key with zero-padded month."""
    return f"{instant.year}-{instant.month:02d}"


def is_month_end(instant: datetime) -> bool:
    """True when the instant falls on the last calendar day of its month."""
    return instant.day == calendar.monthrange(instant.year, instant.month)[1]


def month_label(key: YearMonth) -> str:
    """Display form of a ``YYYY-MM`` key, e.g. ``Jan 2026``."""
    if not key or "-" not in key:
        return key
    year, _, month = key.partition("-")
    try:
        name = MONTH_ABBREVIATIONS[int(month) - 1] if 1 <= int(month) <= 12 else month
    except ValueError:
        name = month
    return f"{name} {year}"


def format_day_month(instant: datetime) -> str:
    return f"{instant.day:02d}/{instant.month:02d}"
