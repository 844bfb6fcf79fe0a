from .errors import InvalidInput
from .amortization import (
	AmortizationRow,
	AmortizationSchedule,
	LoanSummary,
	LoanTerms,
	aggregate_yearly,
	calculate_emi,
	generate_amortization_schedule,
	summarize,
)
from .payments import Loan, PaymentApplication, apply_payment, new_loan, settle_payment
from .portfolio import PortfolioSummary, completion_percentage, loans_frame, portfolio_summary
from .planning import compound_interest, goal_progress, months_to_goal, percentage_change, savings_rate, sip_maturity
from .utils import add_months, format_currency, round_half_up

__all__ = [
	"InvalidInput",
	"AmortizationRow",
	"AmortizationSchedule",
	"LoanSummary",
	"LoanTerms",
	"aggregate_yearly",
	"calculate_emi",
	"generate_amortization_schedule",
	"summarize",
	"Loan",
	"PaymentApplication",
	"apply_payment",
	"new_loan",
	"settle_payment",
	"PortfolioSummary",
	"completion_percentage",
	"loans_frame",
	"portfolio_summary",
	"compound_interest",
	"goal_progress",
	"months_to_goal",
	"percentage_change",
	"savings_rate",
	"sip_maturity",
	"add_months",
	"format_currency",
	"round_half_up",
]
