from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Iterator, List

import pandas as pd

from config import CURRENCY_PRECISION, MAX_SCHEDULE_MONTHS

from .errors import InvalidInput
from .utils import require_non_negative, require_positive, require_whole, round_half_up


logger = logging.getLogger(__name__)

MONTHS_IN_YEAR: Final[int] = 12
SCHEDULE_COLUMNS: Final[List[str]] = ["month", "installment", "principal", "interest", "balance"]


@dataclass(frozen=True)
class LoanTerms:
    """Principal, nominal annual rate in percent and tenure in months.

    Validated on construction; a ``LoanTerms`` instance is always usable.
    """

    principal: float
    annual_rate_percent: float
    tenure_months: int

    def __post_init__(self) -> None:
        require_positive("principal", self.principal)
        require_non_negative("annual_rate_percent", self.annual_rate_percent)
        tenure = require_whole("tenure_months", self.tenure_months)
        if tenure <= 0:
            raise InvalidInput("tenure_months", self.tenure_months, "must be greater than 0")
        if tenure > MAX_SCHEDULE_MONTHS:
            raise InvalidInput(
                "tenure_months", self.tenure_months, f"must not exceed {MAX_SCHEDULE_MONTHS} months"
            )
        object.__setattr__(self, "principal", float(self.principal))
        object.__setattr__(self, "annual_rate_percent", float(self.annual_rate_percent))
        object.__setattr__(self, "tenure_months", tenure)

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / (MONTHS_IN_YEAR * 100)


@dataclass(frozen=True)
class AmortizationRow:
    month: int
    installment: float
    principal: float
    interest: float
    balance: float


def _fixed_monthly_payment(terms: LoanTerms, precision: int) -> float:
    n_months = terms.tenure_months
    monthly_rate = terms.monthly_rate
    if monthly_rate == 0:
        return terms.principal / n_months
    # Discount form: (1 + r) ** -n underflows to 0 on extreme rates, leaving P * r
    discount = (1 + monthly_rate) ** -n_months
    return round_half_up(terms.principal * monthly_rate / (1 - discount), precision)


def calculate_emi(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
    *,
    precision: int = CURRENCY_PRECISION,
) -> float:
    """Compute the equated monthly installment of a fully amortizing loan.

    Parameters
    ----------
    principal : float
        Amount borrowed, greater than 0.
    annual_rate_percent : float
        Nominal annual interest rate in percent (e.g., 8.5 for 8.5%).
    tenure_months : int
        Loan term in months, greater than 0.
    precision : int
        Minor-unit digits the installment is rounded to. Defaults to the
        configured currency precision (whole units).

    Returns
    -------
    float
        The constant monthly installment. A zero rate gives the plain even
        split ``principal / tenure_months``, left unrounded.

    Raises
    ------
    InvalidInput
        On a non-positive principal or tenure, or a negative rate.
    """
    terms = LoanTerms(principal, annual_rate_percent, tenure_months)
    emi = _fixed_monthly_payment(terms, precision)
    logger.debug(
        "EMI for %.2f at %.4f%% over %d months: %s",
        terms.principal,
        terms.annual_rate_percent,
        terms.tenure_months,
        emi,
    )
    return emi


class AmortizationSchedule:
    """Month-by-month split of each installment into interest and principal.

    Rows are computed lazily on every iteration, so a schedule can be walked
    any number of times and always yields the same sequence. The carried
    balance is kept unrounded; each emitted row is rounded to ``precision``.
    The row that clears the balance (early, because the rounded EMI
    overshoots, or in the final month) settles the whole remainder, so the
    last row always ends at a zero balance.
    """

    def __init__(self, terms: LoanTerms, precision: int = CURRENCY_PRECISION):
        self.terms = terms
        self.precision = precision
        self.emi = _fixed_monthly_payment(terms, precision)

    def __iter__(self) -> Iterator[AmortizationRow]:
        monthly_rate = self.terms.monthly_rate
        n_months = self.terms.tenure_months
        balance = self.terms.principal
        for m in range(1, n_months + 1):
            interest = balance * monthly_rate
            # A rounded-down EMI on a tiny loan can fall below the interest due
            principal_component = max(self.emi - interest, 0.0)
            installment = self.emi

            if m == n_months or principal_component >= balance:
                principal_component = balance
                installment = interest + principal_component

            balance = max(balance - principal_component, 0.0)
            yield AmortizationRow(
                month=m,
                installment=round_half_up(installment, self.precision),
                principal=round_half_up(principal_component, self.precision),
                interest=round_half_up(interest, self.precision),
                balance=round_half_up(balance, self.precision),
            )
            if balance <= 0:
                break

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"AmortizationSchedule({self.terms!r}, emi={self.emi})"

    def rows(self) -> List[AmortizationRow]:
        return list(self)

    def to_frame(self) -> pd.DataFrame:
        """Schedule as a DataFrame with columns: month, installment, principal, interest, balance"""
        rows = [vars(row) for row in self]
        if not rows:
            return pd.DataFrame(columns=SCHEDULE_COLUMNS, data=[])
        return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def generate_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
    *,
    precision: int = CURRENCY_PRECISION,
) -> AmortizationSchedule:
    """Build the amortization schedule for the given terms.

    Raises InvalidInput under the same conditions as ``calculate_emi``.
    """
    terms = LoanTerms(principal, annual_rate_percent, tenure_months)
    schedule = AmortizationSchedule(terms, precision=precision)
    logger.debug("Amortization schedule for %r", terms)
    return schedule


def aggregate_yearly(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly amortization schedule by loan year.

    Returns a DataFrame with columns: year, installment, interest, principal, end_balance
    """
    if schedule.empty:
        return pd.DataFrame(
            columns=["year", "installment", "interest", "principal", "end_balance"],
            data=[],
        )

    return (
        schedule.assign(year=(schedule["month"] - 1) // MONTHS_IN_YEAR + 1)
        .groupby("year", as_index=False, sort=True)
        .agg(
            installment=("installment", "sum"),
            interest=("interest", "sum"),
            principal=("principal", "sum"),
            end_balance=("balance", "last"),
        )
    )


@dataclass(frozen=True)
class LoanSummary:
    emi: float
    total_payment: float
    total_interest: float
    schedule_monthly: pd.DataFrame
    schedule_yearly: pd.DataFrame


def summarize(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
    *,
    precision: int = CURRENCY_PRECISION,
) -> LoanSummary:
    """EMI, headline totals and schedules, as shown by the EMI calculator.

    Totals are quoted as EMI x tenure, the figure a borrower is told up front,
    not the sum of the (settled) schedule rows.
    """
    schedule = generate_amortization_schedule(
        principal, annual_rate_percent, tenure_months, precision=precision
    )
    monthly = schedule.to_frame()
    total_payment = schedule.emi * schedule.terms.tenure_months
    return LoanSummary(
        emi=schedule.emi,
        total_payment=total_payment,
        total_interest=total_payment - schedule.terms.principal,
        schedule_monthly=monthly,
        schedule_yearly=aggregate_yearly(monthly),
    )
