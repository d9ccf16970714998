"""
Mortgage Payment & Amortization.

Standard fixed-rate annuity payment:
  M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
where r = annual_rate/12 and n = years*12. The annual rate is treated as a
nominal rate divided evenly by 12, not compounded semi-annually.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from homecalc.services.financial.validation import (
    require_choice,
    require_finite,
    require_positive,
)

logger = logging.getLogger(__name__)

MONTHLY = "monthly"
BIWEEKLY = "biweekly"

PERIODS_PER_YEAR = {
    MONTHLY: 12,
    BIWEEKLY: 26,
}


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    payment_amount: float
    principal_component: float
    interest_component: float
    remaining_balance: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "payment_amount": round(self.payment_amount, 2),
            "principal_component": round(self.principal_component, 2),
            "interest_component": round(self.interest_component, 2),
            "remaining_balance": round(self.remaining_balance, 2),
        }


@dataclass(frozen=True)
class YearlySummary:
    year: int
    total_payment: float
    total_principal: float
    total_interest: float
    ending_balance: float

    def to_dict(self) -> Dict[str, Any]:
        return {k: (round(v, 2) if isinstance(v, float) else v) for k, v in asdict(self).items()}


def compute_monthly_payment(principal: float, annual_rate_percent: float, amortization_years: float) -> float:
    """Monthly principal + interest payment for a fully amortizing loan."""
    principal = require_finite("principal", principal)
    annual_rate_percent = require_finite("annual_rate_percent", annual_rate_percent)
    amortization_years = require_positive("amortization_years", amortization_years)

    n = amortization_years * 12
    r = annual_rate_percent / 100 / 12
    # (1 + r)^n - 1 without cancellation. Non-positive rates, and rates too
    # small to move the growth factor, pay straight-line.
    growth_minus_one = math.expm1(n * math.log1p(r)) if r > 0 else 0.0
    if growth_minus_one <= 0:
        return principal / n

    growth = growth_minus_one + 1
    return principal * r * growth / growth_minus_one


def generate_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    years: int,
    frequency: str = MONTHLY,
    monthly_payment: Optional[float] = None,
) -> List[AmortizationRow]:
    """
    Period-by-period amortization schedule.

    Monthly schedules always run the full ``years * 12`` periods, with the
    balance floored at zero. Biweekly schedules use half the monthly rate over
    ``years * 26`` periods and stop as soon as the balance hits zero.

    The payment on every row is ``monthly_payment`` in both modes; biweekly
    rows are not re-derived as half-payments.
    """
    principal = require_finite("principal", principal)
    annual_rate_percent = require_finite("annual_rate_percent", annual_rate_percent)
    years = require_positive("years", years)
    require_choice("frequency", frequency, PERIODS_PER_YEAR)

    if monthly_payment is None:
        monthly_payment = compute_monthly_payment(principal, annual_rate_percent, years)
    payment = require_finite("monthly_payment", monthly_payment)

    monthly_rate = annual_rate_percent / 100 / 12
    if frequency == BIWEEKLY:
        period_rate = monthly_rate / 2
    else:
        period_rate = monthly_rate
    total_periods = int(round(years * PERIODS_PER_YEAR[frequency]))

    schedule: List[AmortizationRow] = []
    balance = principal
    for period in range(1, total_periods + 1):
        interest = balance * period_rate
        principal_portion = payment - interest
        balance = max(0.0, balance - principal_portion)
        schedule.append(AmortizationRow(
            period=period,
            payment_amount=payment,
            principal_component=principal_portion,
            interest_component=interest,
            remaining_balance=balance,
        ))
        if frequency == BIWEEKLY and balance <= 0:
            break

    logger.debug(
        f"{frequency} schedule for ${principal:,.2f} @ {annual_rate_percent}%: "
        f"{len(schedule)} of {total_periods} periods"
    )
    return schedule


def yearly_rollup(schedule: Sequence[AmortizationRow], frequency: str = MONTHLY) -> List[YearlySummary]:
    """Aggregate a schedule into one row per year of ``periods_per_year`` periods."""
    require_choice("frequency", frequency, PERIODS_PER_YEAR)
    periods_per_year = PERIODS_PER_YEAR[frequency]

    yearly: List[YearlySummary] = []
    for start in range(0, len(schedule), periods_per_year):
        chunk = schedule[start:start + periods_per_year]
        yearly.append(YearlySummary(
            year=start // periods_per_year + 1,
            total_payment=sum(row.payment_amount for row in chunk),
            total_principal=sum(row.principal_component for row in chunk),
            total_interest=sum(row.interest_component for row in chunk),
            ending_balance=chunk[-1].remaining_balance,
        ))
    return yearly


def schedule_summary(
    principal: float,
    monthly_payment: float,
    years: int,
    schedule: Optional[Sequence[AmortizationRow]] = None,
) -> Dict[str, float]:
    """
    Lifetime totals.

    Without ``schedule`` every monthly payment over ``years`` is assumed made.
    With it, totals follow the rows: interest is summed and the principal is
    whatever the rows actually repaid.
    """
    principal = require_finite("principal", principal)
    monthly_payment = require_finite("monthly_payment", monthly_payment)
    years = require_positive("years", years)

    if schedule is None:
        total_paid = monthly_payment * years * 12
        total_interest = total_paid - principal
    else:
        repaid = principal - (schedule[-1].remaining_balance if schedule else principal)
        total_interest = sum(row.interest_component for row in schedule)
        total_paid = repaid + total_interest
    return {
        "principal": principal,
        "monthly_payment": monthly_payment,
        "total_paid": total_paid,
        "total_interest": total_interest,
    }
