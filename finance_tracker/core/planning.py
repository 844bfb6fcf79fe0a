from __future__ import annotations

import math
from typing import Tuple

from .errors import InvalidInput
from .utils import require_non_negative, require_whole


def sip_maturity(monthly_amount: float, annual_rate_percent: float, months: int) -> Tuple[float, float, float]:
    """Value of a systematic investment plan with contributions at the start of each month.

    Returns (maturity_amount, total_investment, total_returns).
    """
    monthly_amount = require_non_negative("monthly_amount", monthly_amount)
    annual_rate_percent = require_non_negative("annual_rate_percent", annual_rate_percent)
    months = require_whole("months", months)
    if months < 0:
        raise InvalidInput("months", months, "must not be negative")

    monthly_rate = annual_rate_percent / (12 * 100)
    total_investment = monthly_amount * months
    if monthly_rate == 0:
        maturity = total_investment
    else:
        maturity = monthly_amount * (((1 + monthly_rate) ** months - 1) / monthly_rate) * (1 + monthly_rate)
    return maturity, total_investment, maturity - total_investment


def compound_interest(principal: float, annual_rate_percent: float, years: int) -> Tuple[float, float]:
    """Annually compounded amount and the interest earned on ``principal``."""
    principal = require_non_negative("principal", principal)
    annual_rate_percent = require_non_negative("annual_rate_percent", annual_rate_percent)
    years = require_whole("years", years)
    if years < 0:
        raise InvalidInput("years", years, "must not be negative")
    amount = principal * (1 + annual_rate_percent / 100) ** years
    return amount, amount - principal


def goal_progress(current_amount: float, target_amount: float) -> float:
    if target_amount == 0:
        return 0.0
    return min(current_amount / target_amount * 100, 100.0)


def months_to_goal(current_amount: float, target_amount: float, monthly_contribution: float) -> float:
    """Whole months of contributions still needed; ``math.inf`` without contributions."""
    if monthly_contribution <= 0:
        return math.inf
    remaining = target_amount - current_amount
    if remaining <= 0:
        return 0
    return math.ceil(remaining / monthly_contribution)


def savings_rate(income: float, expenses: float) -> float:
    if income == 0:
        return 0.0
    return (income - expenses) / income * 100


def percentage_change(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100
