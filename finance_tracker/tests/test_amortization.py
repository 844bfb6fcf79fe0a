import math

import pytest

from finance_tracker.core.amortization import (
    aggregate_yearly,
    calculate_emi,
    generate_amortization_schedule,
    summarize,
)
from finance_tracker.core.errors import InvalidInput


def test_emi_known_case():
    # 10 lakh @8.5% over 20y, monthly rate ~0.0070833
    assert calculate_emi(1_000_000, 8.5, 240) == 8678


def test_emi_with_cent_precision():
    # Known monthly payment for 100k @5% over 20y ~ 659.96
    assert calculate_emi(100_000, 5, 240, precision=2) == 659.96


def test_emi_zero_rate_is_even_split():
    assert calculate_emi(120_000, 0, 24) == 5_000
    assert math.isclose(calculate_emi(1_000, 0, 3), 1_000 / 3)


@pytest.mark.parametrize(
    "principal, rate, tenure",
    [
        (0, 8.5, 12),
        (-1_000, 8.5, 12),
        (1_000, -0.5, 12),
        (1_000, 8.5, 0),
        (1_000, 8.5, -6),
        (1_000, 8.5, 12.5),
        (float("nan"), 8.5, 12),
        (1_000, 8.5, 1_201),
    ],
)
def test_emi_rejects_invalid_terms(principal, rate, tenure):
    with pytest.raises(InvalidInput):
        calculate_emi(principal, rate, tenure)


def test_invalid_input_names_the_field():
    with pytest.raises(ValueError) as excinfo:
        generate_amortization_schedule(10_000, 7, 0)
    assert excinfo.value.field == "tenure_months"


def test_schedule_first_row():
    row = next(iter(generate_amortization_schedule(1_000_000, 8.5, 240)))
    assert row.month == 1
    assert row.installment == 8678
    assert row.interest == 7083
    assert row.principal == 1595
    assert row.balance == 998_405


def test_schedule_balances_down_to_zero():
    schedule = generate_amortization_schedule(1_000_000, 8.5, 240)
    rows = schedule.rows()
    assert len(rows) <= 240
    assert rows[-1].balance == 0
    balances = [r.balance for r in rows]
    assert all(a >= b for a, b in zip(balances, balances[1:]))


def test_schedule_principal_sums_to_loan_amount():
    principal, tenure = 250_000, 60
    rows = generate_amortization_schedule(principal, 11.25, tenure).rows()
    assert abs(sum(r.principal for r in rows) - principal) <= tenure


def test_schedule_rows_split_installment():
    for row in generate_amortization_schedule(500_000, 9.75, 120):
        assert abs(row.principal + row.interest - row.installment) <= 1
        assert min(row.installment, row.principal, row.interest, row.balance) >= 0


def test_schedule_stops_early_when_rounding_overpays():
    # EMI of 0.89 rounds up to 1, clearing the balance in month 11
    schedule = generate_amortization_schedule(10, 12, 12)
    assert schedule.emi == 1
    rows = schedule.rows()
    assert len(rows) == 11
    assert rows[-1].balance == 0


def test_schedule_zero_rate():
    rows = generate_amortization_schedule(1_200, 0, 12).rows()
    assert len(rows) == 12
    assert all(r.interest == 0 for r in rows)
    assert all(r.installment == 100 for r in rows)
    assert rows[-1].balance == 0


def test_schedule_is_restartable():
    schedule = generate_amortization_schedule(300_000, 10.5, 36)
    first = list(schedule)
    assert list(schedule) == first
    assert generate_amortization_schedule(300_000, 10.5, 36).rows() == first
    assert len(schedule) == len(first)


def test_schedule_frame_and_yearly_aggregation():
    schedule = generate_amortization_schedule(100_000, 12, 24)
    df = schedule.to_frame()
    assert list(df.columns) == ["month", "installment", "principal", "interest", "balance"]
    assert len(df) == len(schedule)

    yearly = aggregate_yearly(df)
    assert list(yearly["year"]) == [1, 2]
    assert math.isclose(yearly["principal"].sum(), df["principal"].sum())
    assert yearly.iloc[0]["end_balance"] == df.iloc[11]["balance"]
    assert yearly.iloc[-1]["end_balance"] == 0


def test_aggregate_yearly_empty():
    empty = generate_amortization_schedule(1_000, 5, 12).to_frame().iloc[0:0]
    assert aggregate_yearly(empty).empty


def test_summarize_totals():
    s = summarize(1_000_000, 8.5, 240)
    assert s.emi == 8678
    assert s.total_payment == 8678 * 240
    assert s.total_interest == 8678 * 240 - 1_000_000
    assert s.schedule_monthly.iloc[-1]["balance"] == 0
    assert len(s.schedule_yearly) == 20


def test_extreme_rate_at_max_tenure():
    # Interest alone is 100_000 * 1000 / 1200 a month
    assert calculate_emi(100_000, 1_000, 1_200) == 83_333
    rows = generate_amortization_schedule(100_000, 1_000, 1_200).rows()
    assert len(rows) == 1_200
    assert rows[-1].balance == 0


def test_yearly_aggregation_columns():
    yearly = summarize(60_000, 10, 30).schedule_yearly
    assert list(yearly.columns) == ["year", "installment", "interest", "principal", "end_balance"]
    assert list(yearly["year"]) == [1, 2, 3]
    assert yearly.iloc[-1]["end_balance"] == 0
