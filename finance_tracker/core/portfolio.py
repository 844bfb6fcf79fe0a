from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from .payments import Loan


@dataclass(frozen=True)
class PortfolioSummary:
    active_loans: int
    total_remaining: float
    total_monthly_emi: float


def completion_percentage(loan: Loan) -> float:
    """Share of the original principal already repaid, in percent."""
    if loan.principal_amount <= 0:
        return 0.0
    return (loan.principal_amount - loan.remaining_amount) / loan.principal_amount * 100


def loans_frame(loans: Iterable[Loan]) -> pd.DataFrame:
    rows = [{**loan.to_record(), "completion": completion_percentage(loan)} for loan in loans]
    return pd.DataFrame(rows)


def portfolio_summary(loans: Iterable[Loan]) -> PortfolioSummary:
    """Headline figures of the loans page.

    Remaining amounts are totalled over every loan; the monthly EMI only over
    active ones.
    """
    df = loans_frame(loans)
    if df.empty:
        return PortfolioSummary(active_loans=0, total_remaining=0.0, total_monthly_emi=0.0)
    active = df["status"] == "active"
    return PortfolioSummary(
        active_loans=int(active.sum()),
        total_remaining=float(df["remaining_amount"].sum()),
        total_monthly_emi=float(df.loc[active, "emi_amount"].sum()),
    )
