from __future__ import annotations

import math
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

import pandas as pd

from config import CURRENCY_SYMBOL, DISPLAY_DECIMALS

from .errors import InvalidInput


def round_half_up(value: float, precision: int = 0) -> float:
    """Round ``value`` to ``precision`` decimal digits, halves away from zero.

    Matches the whole-unit rounding used for EMIs (8678.5 -> 8679), which
    the built-in round() does not: it rounds halves to even.
    """
    quantum = Decimal(1).scaleb(-int(precision))
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_currency(
    value: float, symbol: str = CURRENCY_SYMBOL, decimals: int = DISPLAY_DECIMALS
) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol} {abs(value):,.{decimals}f}"


def add_months(day: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the end of shorter months."""
    return (pd.Timestamp(day) + pd.DateOffset(months=months)).date()


def require_finite(field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidInput(field, value, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(field, value, "must be a number") from None
    if not math.isfinite(number):
        raise InvalidInput(field, value, "must be finite")
    return number


def require_positive(field: str, value: Any) -> float:
    number = require_finite(field, value)
    if number <= 0:
        raise InvalidInput(field, value, "must be greater than 0")
    return number


def require_non_negative(field: str, value: Any) -> float:
    number = require_finite(field, value)
    if number < 0:
        raise InvalidInput(field, value, "must not be negative")
    return number


def require_whole(field: str, value: Any) -> int:
    number = require_finite(field, value)
    if not number.is_integer():
        raise InvalidInput(field, value, "must be a whole number")
    return int(number)
