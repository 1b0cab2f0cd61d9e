"""Date and time picker widget and normalization of date/time strings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

_CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S"
_ACCEPTED_FORMATS = (
    _CANONICAL_FORMAT,
    "%Y-%m-%d",
    "%Y-%m",
    "%Y",
)


class DateTimeFormat(str, Enum):
    """Kinds of date/time picker a widget can render."""

    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    DATERANGE = "daterange"
    DATETIMERANGE = "datetimerange"
    MONTH = "month"
    YEAR = "year"
    WEEK = "week"


_DISPLAY_FORMATS: dict[DateTimeFormat, str] = {
    DateTimeFormat.DATE: "YYYY-MM-DD",
    DateTimeFormat.DATETIME: "YYYY-MM-DD HH:mm:ss",
    DateTimeFormat.TIME: "HH:mm:ss",
    DateTimeFormat.DATERANGE: "YYYY-MM-DD",
    DateTimeFormat.DATETIMERANGE: "YYYY-MM-DD HH:mm:ss",
    DateTimeFormat.MONTH: "YYYY-MM",
    DateTimeFormat.YEAR: "YYYY",
    DateTimeFormat.WEEK: "YYYY-[W]WW",
}

_RANGE_FORMATS = frozenset({DateTimeFormat.DATERANGE, DateTimeFormat.DATETIMERANGE})


@dataclass
class DateTimeWidget:
    """A date/time picker; format selects the kind of picker."""

    format: DateTimeFormat | str = DateTimeFormat.DATE
    placeholder: str = ""
    start_placeholder: str = ""
    end_placeholder: str = ""
    default_value: str = ""  # may be a special value such as "today" or "now"
    default_time: str = ""
    min_date: str = ""
    max_date: str = ""
    separator: str = "至"
    shortcuts: str = ""  # JSON text describing quick-pick entries

    def __post_init__(self) -> None:
        self.format = DateTimeFormat(self.format)

    def display_format(self) -> str:
        """Return the display pattern the front end uses for this format."""
        return _DISPLAY_FORMATS[DateTimeFormat(self.format)]

    def is_range(self) -> bool:
        """True if the widget picks a start and an end rather than one value."""
        return DateTimeFormat(self.format) in _RANGE_FORMATS


def normalize_datetime(value: str) -> str:
    """Bring a year, year-month, date or full date-time to ``YYYY-MM-DD HH:MM:SS``.

    Missing parts take their earliest value, so "2025-06" becomes
    "2025-06-01 00:00:00". Raises ValueError for anything else.
    """
    text = value.strip()
    for pattern in _ACCEPTED_FORMATS:
        try:
            moment = datetime.strptime(text, pattern)
        except ValueError:
            continue
        return moment.strftime(_CANONICAL_FORMAT)
    raise ValueError(f"not a recognised date or date-time: {value!r}")