"""Date pattern formatting for note names and timestamps.

Patterns use the token style of the note viewer's daily-notes plugin
(``YYYY-MM-DD-ddd``), not strftime directives. Text inside ``[...]`` is
copied literally.
"""

import re
from datetime import date, datetime

_TOKEN_RE = re.compile(
    r"\[([^\]]*)\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|A|a"
)

_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
_MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _render(token: str, dt: datetime) -> str:
    hour12 = dt.hour % 12 or 12
    match token:
        case "YYYY":
            return f"{dt.year:04d}"
        case "YY":
            return f"{dt.year % 100:02d}"
        case "MMMM":
            return _MONTHS[dt.month - 1]
        case "MMM":
            return _MONTHS[dt.month - 1][:3]
        case "MM":
            return f"{dt.month:02d}"
        case "M":
            return str(dt.month)
        case "DD":
            return f"{dt.day:02d}"
        case "D":
            return str(dt.day)
        case "dddd":
            return _WEEKDAYS[dt.weekday()]
        case "ddd":
            return _WEEKDAYS[dt.weekday()][:3]
        case "HH":
            return f"{dt.hour:02d}"
        case "H":
            return str(dt.hour)
        case "hh":
            return f"{hour12:02d}"
        case "h":
            return str(hour12)
        case "mm":
            return f"{dt.minute:02d}"
        case "m":
            return str(dt.minute)
        case "ss":
            return f"{dt.second:02d}"
        case "s":
            return str(dt.second)
        case "A":
            return "PM" if dt.hour >= 12 else "AM"
        case "a":
            return "pm" if dt.hour >= 12 else "am"
    return token


def format_date(value: date | datetime, pattern: str) -> str:
    """
    Format a date or datetime with a token pattern.

    Args:
        value: Date to format
        pattern: Token pattern, e.g. "YYYY-MM-DD-ddd"

    Returns:
        Formatted string, e.g. "2026-01-15-Thu"
    """
    dt = _as_datetime(value)

    def _replace(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            return match.group(1)
        return _render(match.group(0), dt)

    return _TOKEN_RE.sub(_replace, pattern)


def format_timestamp(value: datetime) -> str:
    """Format a capture time, e.g. "2:35pm"."""
    return format_date(value, "h:mma")
