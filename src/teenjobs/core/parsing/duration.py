"""Free-text duration parsing, formatting and filter normalisation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

DurationUnit = Literal["minutes", "hours", "days", "weeks"]
DurationModifier = Literal["exact", "about", "up_to", "at_least", "flexible"]

UNIT_SINGULAR: dict[DurationUnit, str] = {
    "minutes": "minute",
    "hours": "hour",
    "days": "day",
    "weeks": "week",
}

DURATION_SYNONYMS: dict[str, str] = {
    "1 hr": "1 hour",
    "2 hrs": "2 hours",
    "3 hrs": "3 hours",
    "4 hrs": "4 hours",
    "1h": "1 hour",
    "2h": "2 hours",
    "3h": "3 hours",
    "4h": "4 hours",
    "half-day": "half day",
    "full-day": "full day",
    "all day": "full day",
    "1 day": "full day",
    "one day": "full day",
    "week": "weekly",
    "month": "monthly",
}

_MODIFIER_KEYWORDS: tuple[tuple[DurationModifier, tuple[str, ...]], ...] = (
    ("about", ("about", "approximately")),
    ("up_to", ("up to", "maximum")),
    ("at_least", ("at least", "minimum")),
    ("flexible", ("flexible", "negotiable")),
)
_UNIT_KEYWORDS: tuple[tuple[DurationUnit, str], ...] = (
    ("minutes", "minute"),
    ("hours", "hour"),
    ("days", "day"),
    ("weeks", "week"),
)
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")


@dataclass(frozen=True, slots=True)
class Duration:
    amount: float
    unit: DurationUnit = "hours"
    modifier: DurationModifier = "exact"


def parse_duration(text: str | None) -> Duration | None:
    """Parse strings like ``"About 2 hours"`` or ``"3 days (flexible)"``."""
    if not text:
        return None
    lowered = text.lower()
    match = _NUMBER_RE.search(lowered)
    if match is None:
        return None

    modifier: DurationModifier = "exact"
    for candidate, keywords in _MODIFIER_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            modifier = candidate
            break

    unit: DurationUnit = "hours"
    for candidate_unit, keyword in _UNIT_KEYWORDS:
        if keyword in lowered:
            unit = candidate_unit
            break

    return Duration(amount=float(match.group()), unit=unit, modifier=modifier)


def format_duration(duration: Duration) -> str:
    amount = _format_number(duration.amount)
    unit_label = UNIT_SINGULAR[duration.unit] if duration.amount == 1 else duration.unit
    body = f"{amount} {unit_label}"
    if duration.modifier == "about":
        return f"About {body}"
    if duration.modifier == "up_to":
        return f"Up to {body}"
    if duration.modifier == "at_least":
        return f"At least {body}"
    if duration.modifier == "flexible":
        return f"{body} (flexible)"
    return body


def normalize_duration(text: str) -> str:
    """Canonical form used for exact duration matching in filters."""
    normalized = text.strip().lower()
    return DURATION_SYNONYMS.get(normalized, normalized)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
