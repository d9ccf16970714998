"""
Affordability Model.
Combines down payment, CMHC insurance, land transfer tax and closing costs
into the total mortgage, the monthly payment, the stress-test payment and the
cash needed on closing.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from homecalc.config import settings
from homecalc.services.financial.insurance import compute_insurance_premium
from homecalc.services.financial.land_transfer_tax import (
    LandTransferTaxResult,
    compute_land_transfer_tax,
)
from homecalc.services.financial.payments import compute_monthly_payment
from homecalc.services.financial.validation import require_choice, require_finite

logger = logging.getLogger(__name__)

MORTGAGE_KINDS = ("fixed", "variable")


@dataclass(frozen=True)
class ClosingCosts:
    """Itemized closing costs; each item is edited independently."""
    legal: float = 1500
    appraisal: float = 400
    inspection: float = 400

    @property
    def total(self) -> float:
        return self.legal + self.appraisal + self.inspection

    def to_dict(self) -> Dict[str, float]:
        return {"legal": self.legal, "appraisal": self.appraisal, "inspection": self.inspection}


@dataclass(frozen=True)
class AffordabilityResult:
    # Inputs, echoed for the persistence record
    property_price: float
    down_payment_percent: float
    interest_rate: float
    amortization_years: int
    is_toronto: bool
    is_first_time_buyer: bool

    # Derived
    down_payment_amount: float
    mortgage_insurance_amount: float
    total_mortgage_amount: float
    monthly_payment: float
    monthly_mortgage_cost: float
    monthly_insurance_cost: float
    stress_test_rate: float
    stress_test_payment: float
    total_land_transfer_tax: float
    total_closing_costs: float
    total_upfront_cash: float
    deposit_amount: float
    amount_due_on_closing: float
    land_transfer_tax: LandTransferTaxResult
    closing_costs_breakdown: Optional[ClosingCosts] = None

    # Descriptive inputs carried through to the saved scenario
    term_years: int = 5
    mortgage_kind: str = "fixed"
    lender_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "down_payment_amount": round(self.down_payment_amount, 2),
            "mortgage_insurance_amount": round(self.mortgage_insurance_amount, 2),
            "total_mortgage_amount": round(self.total_mortgage_amount, 2),
            "monthly_payment": round(self.monthly_payment, 2),
            "monthly_mortgage_cost": round(self.monthly_mortgage_cost, 2),
            "monthly_insurance_cost": round(self.monthly_insurance_cost, 2),
            "stress_test_rate": round(self.stress_test_rate, 4),
            "stress_test_payment": round(self.stress_test_payment, 2),
            "total_land_transfer_tax": round(self.total_land_transfer_tax, 2),
            "total_closing_costs": round(self.total_closing_costs, 2),
            "total_upfront_cash": round(self.total_upfront_cash, 2),
            "deposit_amount": round(self.deposit_amount, 2),
            "amount_due_on_closing": round(self.amount_due_on_closing, 2),
            "land_transfer_tax": self.land_transfer_tax.to_dict(),
        }

    def to_record(self) -> Dict[str, Any]:
        """Flat snake_case record in the shape the scenario store expects."""
        return {
            "property_price": self.property_price,
            "down_payment_percent": self.down_payment_percent,
            "interest_rate": self.interest_rate,
            "amortization": self.amortization_years,
            "mortgage_term": self.term_years,
            "mortgage_type": self.mortgage_kind,
            "lender_name": self.lender_name,
            "is_toronto": self.is_toronto,
            "is_first_time_buyer": self.is_first_time_buyer,
            "closing_costs": round(self.total_closing_costs, 2),
            "closing_costs_breakdown": (
                self.closing_costs_breakdown.to_dict() if self.closing_costs_breakdown else None
            ),
            "mortgage_insurance": round(self.mortgage_insurance_amount, 2),
            "stress_test_rate": round(self.stress_test_rate, 4),
            "stress_test_payment": round(self.stress_test_payment, 2),
            "monthly_payment": round(self.monthly_payment, 2),
            "total_ltt": round(self.total_land_transfer_tax, 2),
            "total_cash_needed": round(self.total_upfront_cash, 2),
        }


def compute_stress_test_rate(annual_rate_percent: float) -> float:
    """Qualifying rate: contract rate plus the buffer, never below the benchmark."""
    annual_rate_percent = require_finite("annual_rate_percent", annual_rate_percent)
    return max(annual_rate_percent + settings.stress_test_buffer, settings.stress_test_benchmark_rate)


def compute_total_mortgage(price: float, down_payment_percent: float) -> Dict[str, float]:
    """Down payment, CMHC premium and the insured mortgage principal."""
    price = require_finite("price", price)
    down_payment_percent = require_finite("down_payment_percent", down_payment_percent)

    down_payment_amount = price * down_payment_percent / 100
    insurance = compute_insurance_premium(price, down_payment_percent)
    return {
        "down_payment_amount": down_payment_amount,
        "insurance": insurance,
        "base_mortgage": price - down_payment_amount,
        "total_mortgage": (price - down_payment_amount) + insurance,
    }


def resolve_closing_costs(closing_costs: Union[ClosingCosts, float, None]) -> Dict[str, Any]:
    """Accept an itemized breakdown, a plain total, or nothing (configured default)."""
    if closing_costs is None:
        return {"total": settings.default_closing_costs, "breakdown": None}
    if isinstance(closing_costs, ClosingCosts):
        for name, value in closing_costs.to_dict().items():
            require_finite(f"closing_costs.{name}", value)
        return {"total": closing_costs.total, "breakdown": closing_costs}
    return {"total": require_finite("closing_costs", closing_costs), "breakdown": None}


def compute_affordability(
    price: float,
    down_payment_percent: float,
    annual_rate_percent: float,
    amortization_years: int,
    is_toronto: bool,
    is_first_time_buyer: bool,
    closing_costs: Union[ClosingCosts, float, None] = None,
    deposit_amount: float = 0,
    term_years: int = 5,
    mortgage_kind: str = "fixed",
    lender_name: Optional[str] = None,
) -> AffordabilityResult:
    """
    Full purchase affordability picture for one set of inputs.

    Args:
        price: Purchase price.
        down_payment_percent: Down payment as a percent of price (0-100).
        annual_rate_percent: Nominal annual contract rate, percent.
        amortization_years: Amortization period (15/20/25/30 in practice).
        is_toronto: Property is inside the City of Toronto (municipal LTT applies).
        is_first_time_buyer: Apply first-time buyer LTT rebates.
        closing_costs: ClosingCosts breakdown, a plain total, or None for the default.
        deposit_amount: Deposit already paid, deducted from the amount due on closing.

    Returns:
        AffordabilityResult with every derived figure.
    """
    price = require_finite("price", price)
    annual_rate_percent = require_finite("annual_rate_percent", annual_rate_percent)
    require_finite("amortization_years", amortization_years)
    deposit_amount = require_finite("deposit_amount", deposit_amount)
    require_choice("mortgage_kind", mortgage_kind, MORTGAGE_KINDS)

    mortgage = compute_total_mortgage(price, down_payment_percent)
    total_mortgage = mortgage["total_mortgage"]

    monthly_payment = compute_monthly_payment(total_mortgage, annual_rate_percent, amortization_years)
    monthly_mortgage_cost = compute_monthly_payment(
        mortgage["base_mortgage"], annual_rate_percent, amortization_years
    )

    stress_rate = compute_stress_test_rate(annual_rate_percent)
    stress_payment = compute_monthly_payment(total_mortgage, stress_rate, amortization_years)

    ltt = compute_land_transfer_tax(price, is_toronto, is_first_time_buyer)
    closing = resolve_closing_costs(closing_costs)

    down_payment_amount = mortgage["down_payment_amount"]
    total_upfront = down_payment_amount + ltt.total + closing["total"]
    amount_due = (down_payment_amount - deposit_amount) + ltt.total + closing["total"]

    logger.debug(
        f"Affordability ${price:,.0f} @ {annual_rate_percent}% / {amortization_years:g}y: "
        f"payment ${monthly_payment:,.2f}, upfront ${total_upfront:,.2f}"
    )

    return AffordabilityResult(
        property_price=price,
        down_payment_percent=down_payment_percent,
        interest_rate=annual_rate_percent,
        amortization_years=amortization_years,
        is_toronto=is_toronto,
        is_first_time_buyer=is_first_time_buyer,
        down_payment_amount=down_payment_amount,
        mortgage_insurance_amount=mortgage["insurance"],
        total_mortgage_amount=total_mortgage,
        monthly_payment=monthly_payment,
        monthly_mortgage_cost=monthly_mortgage_cost,
        monthly_insurance_cost=monthly_payment - monthly_mortgage_cost,
        stress_test_rate=stress_rate,
        stress_test_payment=stress_payment,
        total_land_transfer_tax=ltt.total,
        total_closing_costs=closing["total"],
        total_upfront_cash=total_upfront,
        deposit_amount=deposit_amount,
        amount_due_on_closing=amount_due,
        land_transfer_tax=ltt,
        closing_costs_breakdown=closing["breakdown"],
        term_years=term_years,
        mortgage_kind=mortgage_kind,
        lender_name=lender_name,
    )
