"""Parsers for the free-text job fields."""

from .dates import (
    DateInterval,
    format_available_dates,
    format_date,
    parse_available_dates,
    parse_date,
)
from .duration import Duration, format_duration, normalize_duration, parse_duration
from .payment import Payment, canonicalize_payment, format_payment, parse_payment, pay_amount

__all__ = [
    "DateInterval",
    "Duration",
    "Payment",
    "canonicalize_payment",
    "format_available_dates",
    "format_date",
    "format_duration",
    "format_payment",
    "normalize_duration",
    "parse_available_dates",
    "parse_date",
    "parse_duration",
    "parse_payment",
    "pay_amount",
]
