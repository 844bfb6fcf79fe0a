from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date
from typing import Dict, Final, FrozenSet, Optional, Tuple

from config import CURRENCY_PRECISION

from .amortization import LoanTerms, calculate_emi
from .errors import InvalidInput
from .utils import add_months, require_non_negative, require_positive, require_whole


logger = logging.getLogger(__name__)

LOAN_STATUSES: Final[Tuple[str, ...]] = ("active", "completed", "defaulted", "paused")
# Set by new_loan itself, never taken from the caller
DERIVED_LOAN_FIELDS: Final[FrozenSet[str]] = frozenset(
    {
        "principal_amount",
        "interest_rate",
        "tenure_months",
        "emi_amount",
        "remaining_amount",
        "payments_made",
        "status",
        "next_payment_date",
    }
)


@dataclass
class Loan:
    """A loan as tracked by the application and stored in the loans table."""

    principal_amount: float
    interest_rate: float  # annual, in percent
    tenure_months: int
    emi_amount: float
    remaining_amount: float
    payments_made: int = 0
    status: str = "active"
    id: Optional[str] = None
    loan_name: str = ""
    lender_name: Optional[str] = None
    loan_type: str = "personal"
    start_date: Optional[date] = None
    next_payment_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.status not in LOAN_STATUSES:
            raise InvalidInput("status", self.status, f"must be one of {', '.join(LOAN_STATUSES)}")

    def to_record(self) -> Dict[str, object]:
        record = asdict(self)
        for key in ("start_date", "next_payment_date"):
            if record[key] is not None:
                record[key] = record[key].isoformat()
        return record


@dataclass(frozen=True)
class PaymentApplication:
    """How a tendered amount splits into accrued interest and principal."""

    amount: float
    interest_amount: float
    principal_amount: float
    new_balance: float
    payment_number: int

    def to_record(self, loan_id: Optional[str], payment_date: Optional[date] = None) -> Dict[str, object]:
        """Loan-payment row as persisted by the payment workflow."""
        payment_date = payment_date or date.today()
        return {
            "loan_id": loan_id,
            "payment_date": payment_date.isoformat(),
            "amount": self.amount,
            "principal_amount": self.principal_amount,
            "interest_amount": self.interest_amount,
            "remaining_balance": self.new_balance,
            "payment_number": self.payment_number,
            "status": "paid",
        }


def new_loan(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
    *,
    start_date: Optional[date] = None,
    precision: int = CURRENCY_PRECISION,
    **details,
) -> Loan:
    """Create the record submitted by the loan form.

    The EMI is fixed at creation, nothing has been repaid yet and the first
    installment falls due one month after ``start_date``.
    """
    computed = DERIVED_LOAN_FIELDS.intersection(details)
    if computed:
        field = sorted(computed)[0]
        raise InvalidInput(field, details[field], "is derived from the loan terms and cannot be set")

    terms = LoanTerms(principal, annual_rate_percent, tenure_months)
    emi = calculate_emi(
        terms.principal, terms.annual_rate_percent, terms.tenure_months, precision=precision
    )
    return Loan(
        principal_amount=terms.principal,
        interest_rate=terms.annual_rate_percent,
        tenure_months=terms.tenure_months,
        emi_amount=emi,
        remaining_amount=terms.principal,
        payments_made=0,
        status="active",
        start_date=start_date,
        next_payment_date=add_months(start_date, 1) if start_date is not None else None,
        **details,
    )


def apply_payment(loan: Loan, amount: float) -> PaymentApplication:
    """Split ``amount`` into the interest accrued on the current balance and principal.

    Interest for the month is ``remaining_amount * interest_rate / 1200``.
    Whatever exceeds it reduces the balance. A payment that does not cover
    the interest is still accepted: it reduces no principal and leaves the
    balance where it was.
    """
    amount = require_positive("amount", amount)
    remaining = require_non_negative("remaining_amount", loan.remaining_amount)
    rate = require_non_negative("interest_rate", loan.interest_rate)
    payments_made = require_whole("payments_made", loan.payments_made)
    if payments_made < 0:
        raise InvalidInput("payments_made", loan.payments_made, "must not be negative")

    interest_amount = remaining * (rate / 1200)
    principal_amount = max(0.0, amount - interest_amount)
    new_balance = max(0.0, remaining - principal_amount)

    if principal_amount == 0:
        logger.warning(
            "Payment of %.2f on loan %s does not cover accrued interest %.2f; balance unchanged",
            amount,
            loan.id,
            interest_amount,
        )

    return PaymentApplication(
        amount=amount,
        interest_amount=interest_amount,
        principal_amount=principal_amount,
        new_balance=new_balance,
        payment_number=payments_made + 1,
    )


def settle_payment(loan: Loan, application: PaymentApplication) -> Loan:
    """Return ``loan`` as it stands once ``application`` has been recorded."""
    next_payment_date = loan.next_payment_date
    if next_payment_date is not None:
        next_payment_date = add_months(next_payment_date, 1)
    status = "completed" if application.new_balance <= 0 else loan.status
    return replace(
        loan,
        remaining_amount=application.new_balance,
        payments_made=application.payment_number,
        status=status,
        next_payment_date=next_payment_date,
    )
