"""Availability date parsing and interval overlap."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

import pendulum
import structlog

STORAGE_FORMAT = "MMM DD, YYYY"
_TEXT_FORMATS = ("MMM D, YYYY", "MMMM D, YYYY", "MMM D YYYY", "MMMM D YYYY")
_RANGE_SEPARATOR = re.compile(r" to | - ")

_logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DateInterval:
    """Inclusive calendar interval."""

    start: date
    end: date

    def overlaps(self, other: "DateInterval") -> bool:
        return self.start <= other.end and other.start <= self.end

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end


def parse_date(value: str | None) -> date | None:
    """Parse a single calendar date; ``None`` when unparseable."""
    if not value:
        return None
    text = value.strip()
    if not text:
        return None
    for fmt in _TEXT_FORMATS:
        try:
            return pendulum.from_format(text, fmt).date()
        except (ValueError, OverflowError):
            continue
    try:
        parsed = pendulum.parse(text, strict=False)
    except (ValueError, OverflowError):
        return None
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    return None


def parse_available_dates(text: str | None) -> DateInterval | None:
    """Parse ``"Jan 15, 2024 to Jan 20, 2024"`` or a single date.

    Reversed ranges are swapped. Returns ``None`` for unparseable text so the
    caller can exclude the job.
    """
    if not text or not text.strip():
        return None
    if _RANGE_SEPARATOR.search(text):
        parts = _RANGE_SEPARATOR.split(text)
        start = parse_date(parts[0]) if len(parts) == 2 else None
        end = parse_date(parts[1]) if len(parts) == 2 else None
        if start is None or end is None:
            _logger.debug("dates.unparseable", value=text)
            return None
        if start > end:
            start, end = end, start
        return DateInterval(start=start, end=end)

    single = parse_date(text)
    if single is None:
        _logger.debug("dates.unparseable", value=text)
        return None
    return DateInterval(start=single, end=single)


def format_date(value: date) -> str:
    return pendulum.date(value.year, value.month, value.day).format(STORAGE_FORMAT)


def format_available_dates(start: date, end: date | None = None) -> str:
    """Render the storage form written by the posting form."""
    if end is None or end == start:
        return format_date(start)
    return f"{format_date(start)} to {format_date(end)}"
