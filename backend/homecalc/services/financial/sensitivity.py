"""
Scenario Sensitivity & Stress Tests.
Re-runs the affordability model with one input shifted at a time and
tabulates the resulting monthly payments per scenario.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from homecalc.services.financial.affordability import compute_affordability
from homecalc.services.financial.validation import (
    ValidationError,
    require_all_finite,
    require_choice,
)

logger = logging.getLogger(__name__)

RATE = "rate"
PRICE = "price"
DOWN_PAYMENT = "down_payment"

# Rate: percentage points. Price: percent of price. Down payment: percentage points.
DEFAULT_STEPS: Dict[str, List[float]] = {
    RATE: [-2.0, -1.5, -1.0, -0.5, 0.0, 0.5, 1.0, 1.5, 2.0],
    PRICE: [-20.0, -15.0, -10.0, -5.0, 0.0, 5.0, 10.0, 15.0, 20.0],
    DOWN_PAYMENT: [-10.0, -5.0, 0.0, 5.0, 10.0, 15.0, 20.0],
}

MIN_DOWN_PAYMENT_PERCENT = 5.0
MAX_DOWN_PAYMENT_PERCENT = 100.0
STRESS_TEST_SHIFT = 2.0


@dataclass(frozen=True)
class Scenario:
    name: str
    price: float
    down_payment_percent: float
    annual_rate_percent: float
    amortization_years: int
    is_toronto: bool = True
    is_first_time_buyer: bool = True
    closing_costs: Optional[float] = None
    term_years: int = 5
    mortgage_kind: str = "fixed"


def perturb(scenario: Scenario, metric: str, step: float) -> Scenario:
    """Copy of ``scenario`` with one input shifted by ``step``."""
    if metric == RATE:
        # A rate cannot drop below zero
        return replace(scenario, annual_rate_percent=max(0.0, scenario.annual_rate_percent + step))
    if metric == PRICE:
        return replace(scenario, price=scenario.price * (1 + step / 100))
    if metric == DOWN_PAYMENT:
        shifted = scenario.down_payment_percent + step
        clamped = min(MAX_DOWN_PAYMENT_PERCENT, max(MIN_DOWN_PAYMENT_PERCENT, shifted))
        return replace(scenario, down_payment_percent=clamped)
    raise ValidationError("metric", f"unknown metric {metric!r}")


def scenario_payment(scenario: Scenario) -> float:
    return compute_affordability(
        price=scenario.price,
        down_payment_percent=scenario.down_payment_percent,
        annual_rate_percent=scenario.annual_rate_percent,
        amortization_years=scenario.amortization_years,
        is_toronto=scenario.is_toronto,
        is_first_time_buyer=scenario.is_first_time_buyer,
        closing_costs=scenario.closing_costs,
        term_years=scenario.term_years,
        mortgage_kind=scenario.mortgage_kind,
    ).monthly_payment


def check_unique_names(scenarios: Sequence[Scenario]) -> None:
    seen = set()
    for scenario in scenarios:
        if scenario.name in seen:
            raise ValidationError("scenarios", f"duplicate scenario name {scenario.name!r}")
        seen.add(scenario.name)


def run_sensitivity(
    scenarios: Sequence[Scenario],
    metric: str,
    steps: Optional[Sequence[float]] = None,
) -> Dict[float, Dict[str, float]]:
    """
    Monthly payment for every (step, scenario) pair.

    Returns:
        ``table[step][scenario_name] = monthly_payment``, steps in the given order.
    """
    require_choice("metric", metric, DEFAULT_STEPS)
    steps = require_all_finite("steps", DEFAULT_STEPS[metric] if steps is None else steps)
    check_unique_names(scenarios)

    table: Dict[float, Dict[str, float]] = {}
    for step in steps:
        table[step] = {
            scenario.name: scenario_payment(perturb(scenario, metric, step))
            for scenario in scenarios
        }

    logger.debug(f"Sensitivity on {metric}: {len(steps)} steps x {len(scenarios)} scenarios")
    return table


def run_stress_test(scenarios: Sequence[Scenario]) -> Dict[str, Dict[str, float]]:
    """
    Payment at the current rate and at +/-2 points for each scenario, with
    the monthly saving if rates fall and the increase if they rise.
    """
    table = run_sensitivity(scenarios, RATE, [STRESS_TEST_SHIFT, 0.0, -STRESS_TEST_SHIFT])

    results: Dict[str, Dict[str, float]] = {}
    for scenario in scenarios:
        current = table[0.0][scenario.name]
        higher = table[STRESS_TEST_SHIFT][scenario.name]
        lower = table[-STRESS_TEST_SHIFT][scenario.name]
        results[scenario.name] = {
            "rate_plus_2": higher,
            "current": current,
            "rate_minus_2": lower,
            "savings_if_lower": current - lower,
            "increase_if_higher": higher - current,
        }
    return results
