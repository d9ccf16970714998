"""Tests for the annuity payment, amortization schedules and yearly roll-up."""
import pytest

from homecalc.services.financial.payments import (
    BIWEEKLY,
    MONTHLY,
    compute_monthly_payment,
    generate_amortization_schedule,
    schedule_summary,
    yearly_rollup,
)
from homecalc.services.financial.validation import ValidationError


class TestComputeMonthlyPayment:

    @pytest.mark.parametrize("principal,rate,years,expected", [
        (100000, 6.0, 30, 599.55),
        (200000, 5.0, 30, 1073.64),
    ])
    def test_known_payments(self, principal, rate, years, expected):
        assert compute_monthly_payment(principal, rate, years) == pytest.approx(expected, abs=0.01)

    def test_600k_at_479_over_25_years(self):
        payment = compute_monthly_payment(600000, 4.79, 25)
        assert payment == pytest.approx(3434.5, abs=0.1)

    @pytest.mark.parametrize("principal,years", [(300000, 25), (487500, 30), (1, 15)])
    def test_zero_rate_is_straight_line(self, principal, years):
        assert compute_monthly_payment(principal, 0, years) == principal / (years * 12)

    @pytest.mark.parametrize("rate", [1e-15, 1e-12, 1e-9])
    def test_tiny_rate_approaches_straight_line(self, rate):
        payment = compute_monthly_payment(600000, rate, 25)
        assert payment == pytest.approx(600000 / 300, rel=1e-6)

    def test_higher_rate_means_higher_payment(self):
        assert compute_monthly_payment(500000, 5, 25) > compute_monthly_payment(500000, 4, 25)

    @pytest.mark.parametrize("years", [0, -5])
    def test_non_positive_amortization_raises(self, years):
        with pytest.raises(ValidationError) as exc_info:
            compute_monthly_payment(500000, 5, years)
        assert exc_info.value.field == "amortization_years"

    def test_nan_rate_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            compute_monthly_payment(500000, float("nan"), 25)
        assert exc_info.value.field == "annual_rate_percent"


class TestMonthlySchedule:

    @pytest.fixture
    def schedule(self):
        payment = compute_monthly_payment(600000, 4.79, 25)
        return generate_amortization_schedule(600000, 4.79, 25, MONTHLY, payment)

    def test_runs_every_period(self, schedule):
        assert len(schedule) == 300
        assert [row.period for row in schedule[:3]] == [1, 2, 3]

    def test_principal_sums_to_loan(self, schedule):
        total_principal = sum(row.principal_component for row in schedule)
        assert total_principal == pytest.approx(600000, rel=1e-6)

    def test_ends_at_zero(self, schedule):
        assert schedule[-1].remaining_balance == pytest.approx(0, abs=1e-4)

    def test_balance_never_increases(self, schedule):
        balances = [row.remaining_balance for row in schedule]
        assert all(b >= 0 for b in balances)
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))

    def test_first_period_split(self, schedule):
        first = schedule[0]
        assert first.interest_component == pytest.approx(600000 * 0.0479 / 12)
        assert first.principal_component + first.interest_component == pytest.approx(first.payment_amount)

    def test_payment_defaults_to_annuity_payment(self):
        rows = generate_amortization_schedule(250000, 5, 20)
        assert rows[0].payment_amount == pytest.approx(compute_monthly_payment(250000, 5, 20))

    def test_zero_rate_schedule(self):
        rows = generate_amortization_schedule(120000, 0, 10, MONTHLY, 1000)
        assert all(row.interest_component == 0 for row in rows)
        assert rows[-1].remaining_balance == pytest.approx(0)


class TestBiweeklySchedule:

    def test_uses_half_the_monthly_rate(self):
        rows = generate_amortization_schedule(600000, 4.8, 25, BIWEEKLY, 3000)
        assert rows[0].interest_component == pytest.approx(600000 * 0.048 / 12 / 2)

    def test_keeps_monthly_payment_and_stops_at_zero(self):
        payment = compute_monthly_payment(600000, 4.79, 25)
        rows = generate_amortization_schedule(600000, 4.79, 25, BIWEEKLY, payment)

        assert len(rows) < 25 * 26
        assert rows[-1].remaining_balance == 0
        assert all(row.remaining_balance > 0 for row in rows[:-1])
        assert all(row.payment_amount == payment for row in rows)

    def test_unknown_frequency_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            generate_amortization_schedule(100000, 5, 25, "weekly", 600)
        assert exc_info.value.field == "frequency"


class TestYearlyRollup:

    def test_monthly_years(self):
        payment = compute_monthly_payment(600000, 4.79, 25)
        rows = generate_amortization_schedule(600000, 4.79, 25, MONTHLY, payment)
        years = yearly_rollup(rows, MONTHLY)

        assert len(years) == 25
        assert years[0].year == 1
        assert years[0].total_payment == pytest.approx(payment * 12)
        assert years[0].ending_balance == rows[11].remaining_balance
        assert years[0].total_interest > years[-1].total_interest
        assert sum(y.total_principal for y in years) == pytest.approx(600000, rel=1e-6)

    def test_biweekly_partial_final_year(self):
        payment = compute_monthly_payment(400000, 5, 25)
        rows = generate_amortization_schedule(400000, 5, 25, BIWEEKLY, payment)
        years = yearly_rollup(rows, BIWEEKLY)

        assert len(years) == -(-len(rows) // 26)
        assert years[-1].ending_balance == 0


def test_schedule_summary_totals():
    summary = schedule_summary(300000, 1750, 25)
    assert summary["total_paid"] == pytest.approx(525000)
    assert summary["total_interest"] == pytest.approx(225000)


def test_schedule_summary_follows_biweekly_rows():
    payment = compute_monthly_payment(400000, 5, 25)
    rows = generate_amortization_schedule(400000, 5, 25, BIWEEKLY, payment)
    summary = schedule_summary(400000, payment, 25, schedule=rows)

    assert summary["total_interest"] == pytest.approx(sum(row.interest_component for row in rows))
    assert summary["total_paid"] == pytest.approx(400000 + summary["total_interest"])
    # Paying off early costs less than the full monthly term
    assert summary["total_paid"] < schedule_summary(400000, payment, 25)["total_paid"]
