"""
Render-time formatting helpers.
Stored values stay canonical (Decimal amounts, aware datetimes); these
functions produce the display strings the screens show.
"""
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

SYMBOL_CURRENCIES = {symbol: code for code, symbol in CURRENCY_SYMBOLS.items()}

CENTS = Decimal("0.01")


def to_iso_instant(value: datetime) -> str:
    """Serialize an instant as UTC ISO-8601 with millisecond precision and a Z suffix"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def format_amount(amount: Decimal, currency: str, unit: Optional[str] = None) -> str:
    """
    Format a money amount, e.g. "$5.00" or "$2.50/hr".
    Unknown currencies are prefixed with their code.
    """
    quantized = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency)
    text = f"{symbol}{quantized}" if symbol else f"{currency} {quantized}"
    if unit:
        text = f"{text}/{unit}"
    return text


def format_date(value: Optional[date]) -> str:
    """US short date, e.g. 05/26/2025"""
    if value is None:
        return ""
    return value.strftime("%m/%d/%Y")


def format_time(value: Optional[datetime], placeholder: str = "") -> str:
    """12-hour clock in local time, e.g. 09:30 AM"""
    if value is None:
        return placeholder
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%I:%M %p")


def greeting_for(moment: datetime) -> str:
    """Time-of-day greeting shown on the home screen"""
    if moment.hour < 12:
        return "Good Morning"
    if moment.hour < 18:
        return "Good Afternoon"
    return "Good Evening"
