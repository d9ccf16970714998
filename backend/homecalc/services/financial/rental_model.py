"""
Rental Financial Model.
Buy-to-rent scenario: NOI, cap rate, cash flow after the mortgage,
cash-on-cash return, gross yield, and the rent needed to hit a target cap rate.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from homecalc.services.financial.affordability import (
    compute_total_mortgage,
    resolve_closing_costs,
)
from homecalc.services.financial.land_transfer_tax import compute_land_transfer_tax
from homecalc.services.financial.payments import compute_monthly_payment
from homecalc.services.financial.validation import ValidationError, require_finite

logger = logging.getLogger(__name__)

# Always present on a rental, in this order
STANDARD_EXPENSE_CATEGORIES = [
    "Property Tax",
    "Insurance",
    "Maintenance / Repairs",
]

# Optional lines a caller may add on top of the standard ones
ADDITIONAL_EXPENSE_CATEGORIES = [
    "Utilities",
    "Landscaping",
    "Snow Removal",
    "Property Management Fees",
    "Advertising",
    "Legal Fees",
    "Accounting Fees",
    "Office Expenses",
    "Travel",
    "Salaries & Wages",
]


@dataclass(frozen=True)
class ExpenseItem:
    category: str
    amount: float  # Annual


@dataclass(frozen=True)
class RentalAnalysisResult:
    gross_annual_rent: float
    vacancy_loss: float
    effective_annual_rent: float
    total_annual_expenses: float
    net_operating_income: float
    cap_rate_percent: float
    annual_mortgage: float
    annual_cash_flow: float
    monthly_cash_flow: float
    total_cash_invested: float
    cash_on_cash_return_percent: float
    gross_yield_percent: float
    required_monthly_rent_for_target_cap_rate: float
    required_cap_rate_percent: float
    down_payment_amount: float
    insurance_premium: float
    total_mortgage: float
    land_transfer_tax: float
    closing_costs: float

    @property
    def cap_rate_met(self) -> bool:
        return self.cap_rate_percent >= self.required_cap_rate_percent

    @property
    def cash_flow_positive(self) -> bool:
        return self.annual_cash_flow >= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gross_annual_rent": round(self.gross_annual_rent, 2),
            "vacancy_loss": round(self.vacancy_loss, 2),
            "effective_annual_rent": round(self.effective_annual_rent, 2),
            "total_annual_expenses": round(self.total_annual_expenses, 2),
            "net_operating_income": round(self.net_operating_income, 2),
            "cap_rate_percentage": round(self.cap_rate_percent, 2),
            "annual_mortgage": round(self.annual_mortgage, 2),
            "annual_cash_flow": round(self.annual_cash_flow, 2),
            "monthly_cash_flow": round(self.monthly_cash_flow, 2),
            "total_cash_invested": round(self.total_cash_invested, 2),
            "cash_on_cash_return_percentage": round(self.cash_on_cash_return_percent, 2),
            "gross_yield_percentage": round(self.gross_yield_percent, 2),
            "required_monthly_rent": round(self.required_monthly_rent_for_target_cap_rate, 2),
            "required_cap_rate_percentage": self.required_cap_rate_percent,
            "down_payment_amount": round(self.down_payment_amount, 2),
            "insurance_premium": round(self.insurance_premium, 2),
            "total_mortgage": round(self.total_mortgage, 2),
            "land_transfer_tax": round(self.land_transfer_tax, 2),
            "closing_costs": round(self.closing_costs, 2),
            "cap_rate_met": self.cap_rate_met,
            "cash_flow_positive": self.cash_flow_positive,
        }


def _expense_amounts(annual_expenses: Sequence[Union[float, ExpenseItem]]) -> List[float]:
    amounts: List[float] = []
    for i, expense in enumerate(annual_expenses):
        if isinstance(expense, ExpenseItem):
            amounts.append(require_finite(f"annual_expenses[{expense.category}]", expense.amount))
        else:
            amounts.append(require_finite(f"annual_expenses[{i}]", expense))
    return amounts


def analyze_rental(
    price: float,
    down_payment_percent: float,
    annual_rate_percent: float,
    amortization_years: int,
    monthly_rent: float,
    vacancy_rate_percent: float,
    annual_expenses: Sequence[Union[float, ExpenseItem]],
    required_cap_rate_percent: float,
    is_toronto: bool,
    closing_costs: Optional[float] = None,
) -> RentalAnalysisResult:
    """
    Calculate the rental hold scenario - 1 year cashflow.

    Investment purchases never get first-time buyer LTT rebates. Down
    payments above 80% are not offered by the calculator but are not rejected
    here.

    Args:
        annual_expenses: Operating expenses per year (property tax, insurance,
            maintenance, plus any named extras), as numbers or ExpenseItems.
        closing_costs: Plain total; None uses the configured default.

    Returns:
        RentalAnalysisResult with the full breakdown.
    """
    price = require_finite("price", price)
    monthly_rent = require_finite("monthly_rent", monthly_rent)
    vacancy_rate_percent = require_finite("vacancy_rate_percent", vacancy_rate_percent)
    required_cap_rate_percent = require_finite("required_cap_rate_percent", required_cap_rate_percent)
    if vacancy_rate_percent >= 100:
        raise ValidationError("vacancy_rate_percent", "must be below 100 to solve for the required rent")
    expenses = _expense_amounts(annual_expenses)

    # INCOME
    occupancy = 1 - vacancy_rate_percent / 100
    gross_annual_rent = monthly_rent * 12
    effective_annual_rent = gross_annual_rent * occupancy

    # EXPENSES
    total_annual_expenses = sum(expenses)

    # NOI & CAP RATE
    noi = effective_annual_rent - total_annual_expenses
    cap_rate = (noi / price) * 100 if price > 0 else 0.0

    # FINANCING
    mortgage = compute_total_mortgage(price, down_payment_percent)
    annual_mortgage = compute_monthly_payment(
        mortgage["total_mortgage"], annual_rate_percent, amortization_years
    ) * 12
    annual_cash_flow = noi - annual_mortgage

    # CASH INVESTED
    ltt = compute_land_transfer_tax(price, is_toronto, is_first_time_buyer=False)
    closing = resolve_closing_costs(closing_costs)["total"]
    total_cash_invested = mortgage["down_payment_amount"] + ltt.total + closing

    # RETURNS
    cash_on_cash = (annual_cash_flow / total_cash_invested) * 100 if total_cash_invested > 0 else 0.0
    gross_yield = (gross_annual_rent / price) * 100 if price > 0 else 0.0

    # Required rent to hit target cap rate
    required_noi = price * required_cap_rate_percent / 100
    required_gross_annual_rent = required_noi + total_annual_expenses
    required_monthly_rent = required_gross_annual_rent / 12 / occupancy

    logger.debug(
        f"Rental ${price:,.0f} @ ${monthly_rent:,.0f}/mo: NOI ${noi:,.2f}, cap {cap_rate:.2f}%, "
        f"cash flow ${annual_cash_flow:,.2f}/yr"
    )

    return RentalAnalysisResult(
        gross_annual_rent=gross_annual_rent,
        vacancy_loss=gross_annual_rent - effective_annual_rent,
        effective_annual_rent=effective_annual_rent,
        total_annual_expenses=total_annual_expenses,
        net_operating_income=noi,
        cap_rate_percent=cap_rate,
        annual_mortgage=annual_mortgage,
        annual_cash_flow=annual_cash_flow,
        monthly_cash_flow=annual_cash_flow / 12,
        total_cash_invested=total_cash_invested,
        cash_on_cash_return_percent=cash_on_cash,
        gross_yield_percent=gross_yield,
        required_monthly_rent_for_target_cap_rate=required_monthly_rent,
        required_cap_rate_percent=required_cap_rate_percent,
        down_payment_amount=mortgage["down_payment_amount"],
        insurance_premium=mortgage["insurance"],
        total_mortgage=mortgage["total_mortgage"],
        land_transfer_tax=ltt.total,
        closing_costs=closing,
    )
