"""
Household Budget & Debt Service.
GDS/TDS ratios against lender guidelines, credit score band, and a
monthly income-versus-expenses budget for a chosen scenario.
"""

from typing import Any, Dict, List

from homecalc.config import settings
from homecalc.services.financial.validation import (
    ValidationError,
    require_finite,
    require_positive,
)

# Annual property tax as a fraction of price (municipal averages)
TORONTO_PROPERTY_TAX_RATE = 0.006135
ONTARIO_PROPERTY_TAX_RATE = 0.01

# Lower bound of each band, best first
CREDIT_SCORE_BANDS = [
    (740, "Excellent"),
    (680, "Good"),
    (620, "Fair"),
]

HOUSING_FIELDS = ["mortgage_payment", "maintenance_fee", "property_tax", "utilities", "insurance"]
LIVING_FIELDS = ["cable", "internet", "telephone", "groceries", "transportation", "other_expenses"]


def credit_score_band(score: float) -> str:
    for floor, label in CREDIT_SCORE_BANDS:
        if score >= floor:
            return label
    return "Poor"


def compute_debt_service(
    monthly_payment: float,
    stress_test_payment: float,
    monthly_income: float,
    other_debts: float,
    credit_score: float,
) -> Dict[str, Any]:
    """
    Gross (GDS) and total (TDS) debt service ratios, as percent of income.

    Returns:
        Dict with gds, tds, stress_test_gds, limit checks and the credit band.
    """
    monthly_payment = require_finite("monthly_payment", monthly_payment)
    stress_test_payment = require_finite("stress_test_payment", stress_test_payment)
    monthly_income = require_positive("monthly_income", monthly_income)
    other_debts = require_finite("other_debts", other_debts)
    credit_score = require_finite("credit_score", credit_score)

    gds = monthly_payment / monthly_income * 100
    tds = (monthly_payment + other_debts) / monthly_income * 100
    stress_gds = stress_test_payment / monthly_income * 100

    return {
        "gds": round(gds, 1),
        "tds": round(tds, 1),
        "stress_test_gds": round(stress_gds, 1),
        "gds_limit": settings.gds_limit_percent,
        "tds_limit": settings.tds_limit_percent,
        "gds_within_limit": gds <= settings.gds_limit_percent,
        "tds_within_limit": tds <= settings.tds_limit_percent,
        "credit_score": credit_score,
        "credit_band": credit_score_band(credit_score),
    }


def estimate_monthly_property_tax(price: float, is_toronto: bool) -> float:
    price = require_finite("price", price)
    rate = TORONTO_PROPERTY_TAX_RATE if is_toronto else ONTARIO_PROPERTY_TAX_RATE
    return price * rate / 12


def compute_monthly_budget(monthly_income: float, savings: float = 0, **expenses: float) -> Dict[str, Any]:
    """
    Monthly budget summary.

    Expense keywords are the housing fields (mortgage_payment, maintenance_fee,
    property_tax, utilities, insurance) and living fields (cable, internet,
    telephone, groceries, transportation, other_expenses); missing ones are 0.
    """
    monthly_income = require_finite("monthly_income", monthly_income)
    savings = require_finite("savings", savings)
    unknown = set(expenses) - set(HOUSING_FIELDS) - set(LIVING_FIELDS)
    if unknown:
        raise ValidationError(sorted(unknown)[0], "is not a budget line item")
    values = {k: require_finite(k, v) for k, v in expenses.items()}

    housing = sum(values.get(k, 0.0) for k in HOUSING_FIELDS)
    living = sum(values.get(k, 0.0) for k in LIVING_FIELDS)
    total_expenses = housing + living + savings
    remaining = monthly_income - total_expenses
    health = remaining / monthly_income * 100 if monthly_income > 0 else 0.0

    categories: List[Dict[str, Any]] = []
    for name, value in (("Housing", housing), ("Living", living), ("Savings", savings)):
        share = value / total_expenses * 100 if total_expenses > 0 else 0.0
        categories.append({"name": name, "value": round(value, 2), "percentage": round(share, 1)})

    return {
        "monthly_income": round(monthly_income, 2),
        "housing_costs": round(housing, 2),
        "living_costs": round(living, 2),
        "savings": round(savings, 2),
        "total_expenses": round(total_expenses, 2),
        "remaining_income": round(remaining, 2),
        "budget_health_percentage": round(health, 1),
        "categories": categories,
    }
