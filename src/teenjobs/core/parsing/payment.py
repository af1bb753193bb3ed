"""Free-text pay parsing and canonical formatting."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

PayPeriod = Literal["total", "hourly", "daily", "weekly"]

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "C$",
    "AUD": "A$",
}

PERIOD_LABELS: dict[PayPeriod, str] = {
    "hourly": "per hour",
    "daily": "per day",
    "weekly": "per week",
}

_SYMBOL_TO_CODE = {symbol: code for code, symbol in CURRENCY_SYMBOLS.items()}
_AMOUNT_RE = re.compile(
    r"(?P<symbol>C\$|A\$|\$|€|£)?\s*(?P<amount>\d[\d,]*(?:\.\d+)?)"
)
_HOURLY_RE = re.compile(r"hour|/\s*hr\b|/\s*h\b")
_DAILY_RE = re.compile(r"day|daily")
_WEEKLY_RE = re.compile(r"week")


@dataclass(frozen=True, slots=True)
class Payment:
    """Structured pay value."""

    amount: float
    currency: str = "USD"
    period: PayPeriod = "total"

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency, "$")


def parse_payment(text: str | None) -> Payment | None:
    """Parse strings like ``"$15/hour"`` or ``"€20 per day"``.

    Plain numbers default to USD totals. Returns ``None`` when no amount is
    present.
    """
    if not text:
        return None
    lowered = text.lower()

    match = _AMOUNT_RE.search(text)
    if match is None:
        return None
    symbol = match.group("symbol")
    currency = _SYMBOL_TO_CODE[symbol] if symbol else "USD"
    amount = float(match.group("amount").replace(",", ""))

    return Payment(amount=amount, currency=currency, period=_detect_period(lowered))


def format_payment(payment: Payment) -> str:
    """Render the canonical display form, e.g. ``"$15 per hour"``."""
    rendered = f"{payment.symbol}{format_amount(payment.amount)}"
    label = PERIOD_LABELS.get(payment.period)
    if label:
        rendered += f" {label}"
    return rendered


def canonicalize_payment(text: str | None) -> str | None:
    payment = parse_payment(text)
    return format_payment(payment) if payment else None


def pay_amount(text: str | None) -> float | None:
    """Numeric magnitude used for pay-range filtering."""
    payment = parse_payment(text)
    return payment.amount if payment else None


def format_amount(amount: float) -> str:
    amount = round(float(amount), 2)
    if amount.is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


def _detect_period(lowered: str) -> PayPeriod:
    if _HOURLY_RE.search(lowered):
        return "hourly"
    if _DAILY_RE.search(lowered):
        return "daily"
    if _WEEKLY_RE.search(lowered):
        return "weekly"
    return "total"
