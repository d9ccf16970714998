"""Tests for the rental investment model."""
import pytest

from homecalc.services.financial.land_transfer_tax import compute_land_transfer_tax
from homecalc.services.financial.payments import compute_monthly_payment
from homecalc.services.financial.rental_model import ExpenseItem, analyze_rental
from homecalc.services.financial.validation import ValidationError


def _analyze(**overrides):
    args = dict(
        price=750000,
        down_payment_percent=20,
        annual_rate_percent=5.5,
        amortization_years=25,
        monthly_rent=3000,
        vacancy_rate_percent=5,
        annual_expenses=[5000, 1500, 3000],
        required_cap_rate_percent=5,
        is_toronto=True,
    )
    args.update(overrides)
    return analyze_rental(**args)


class TestRentalAnalysis:

    def test_noi_and_cap_rate(self):
        result = _analyze()

        assert result.effective_annual_rent == pytest.approx(34200)
        assert result.vacancy_loss == pytest.approx(1800)
        assert result.total_annual_expenses == pytest.approx(9500)
        assert result.net_operating_income == pytest.approx(24700)
        assert result.cap_rate_percent == pytest.approx(3.2933, abs=1e-4)
        assert result.cap_rate_met is False

    def test_cash_flow_after_mortgage(self):
        result = _analyze()
        annual_mortgage = compute_monthly_payment(600000, 5.5, 25) * 12

        assert result.annual_mortgage == pytest.approx(annual_mortgage)
        assert result.annual_cash_flow == pytest.approx(24700 - annual_mortgage)
        assert result.monthly_cash_flow == pytest.approx(result.annual_cash_flow / 12)
        assert result.cash_flow_positive is False

    def test_cash_invested_ignores_first_time_rebates(self):
        result = _analyze()
        full_ltt = compute_land_transfer_tax(750000, True, False).total

        assert result.land_transfer_tax == pytest.approx(full_ltt)
        assert result.total_cash_invested == pytest.approx(150000 + full_ltt + 2300)
        assert result.cash_on_cash_return_percent == pytest.approx(
            result.annual_cash_flow / result.total_cash_invested * 100
        )

    def test_gross_yield(self):
        assert _analyze().gross_yield_percent == pytest.approx(4.8)

    def test_required_rent_for_target_cap_rate(self):
        result = _analyze()
        # (750000 * 5% + 9500) / 12 / 0.95
        assert result.required_monthly_rent_for_target_cap_rate == pytest.approx(47000 / 12 / 0.95)

    def test_required_rent_hits_target_when_charged(self):
        first = _analyze()
        second = _analyze(monthly_rent=first.required_monthly_rent_for_target_cap_rate)
        assert second.cap_rate_percent == pytest.approx(5)

    def test_named_expense_items(self):
        expenses = [
            ExpenseItem("Property Tax", 5000),
            ExpenseItem("Insurance", 1500),
            ExpenseItem("Maintenance / Repairs", 3000),
            ExpenseItem("Snow Removal", 600),
        ]
        assert _analyze(annual_expenses=expenses).total_annual_expenses == pytest.approx(10100)

    def test_insured_rental_mortgage(self):
        result = _analyze(price=600000, down_payment_percent=10)
        assert result.insurance_premium == pytest.approx(540000 * 0.031)
        assert result.total_mortgage == pytest.approx(540000 * 1.031)

    def test_zero_price_guards(self):
        result = _analyze(price=0)
        assert result.cap_rate_percent == 0
        assert result.gross_yield_percent == 0

    def test_zero_vacancy(self):
        result = _analyze(vacancy_rate_percent=0)
        assert result.effective_annual_rent == pytest.approx(36000)
        assert result.vacancy_loss == 0


@pytest.mark.parametrize("overrides,field", [
    ({"vacancy_rate_percent": 100}, "vacancy_rate_percent"),
    ({"monthly_rent": float("nan")}, "monthly_rent"),
    ({"annual_expenses": [5000, float("inf")]}, "annual_expenses[1]"),
    ({"amortization_years": 0}, "amortization_years"),
])
def test_invalid_inputs_raise(overrides, field):
    with pytest.raises(ValidationError) as exc_info:
        _analyze(**overrides)
    assert exc_info.value.field == field
