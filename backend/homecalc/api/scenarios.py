from typing import List

from fastapi import APIRouter

from homecalc.schemas.scenarios import (
    CompareRequest,
    CompareResponse,
    ScenarioInput,
    SensitivityRequest,
    SensitivityResponse,
    SensitivityRow,
    StressTestRequest,
)
from homecalc.services.financial.comparison import compare_scenarios
from homecalc.services.financial.sensitivity import Scenario, run_sensitivity, run_stress_test

router = APIRouter()


def _to_scenarios(items: List[ScenarioInput]) -> List[Scenario]:
    return [
        Scenario(
            name=s.name,
            price=s.price,
            down_payment_percent=s.down_payment_percent,
            annual_rate_percent=s.interest_rate,
            amortization_years=s.amortization_years,
            is_toronto=s.is_toronto,
            is_first_time_buyer=s.is_first_time_buyer,
            closing_costs=s.closing_costs,
            term_years=s.mortgage_term,
            mortgage_kind=s.mortgage_type,
        )
        for s in items
    ]


@router.post("/sensitivity", response_model=SensitivityResponse)
def sensitivity(payload: SensitivityRequest):
    """Monthly payment per scenario as one input is shifted step by step."""
    table = run_sensitivity(_to_scenarios(payload.scenarios), payload.metric, payload.steps)
    rows = [
        SensitivityRow(adjustment=step, payments={name: round(p, 2) for name, p in payments.items()})
        for step, payments in table.items()
    ]
    return SensitivityResponse(metric=payload.metric, rows=rows)


@router.post("/stress-test")
def stress_test(payload: StressTestRequest):
    """Payments at the current rate and at +/-2 points."""
    results = run_stress_test(_to_scenarios(payload.scenarios))
    return {
        name: {k: round(v, 2) for k, v in figures.items()}
        for name, figures in results.items()
    }


@router.post("/compare", response_model=CompareResponse)
def compare(payload: CompareRequest):
    """Side-by-side comparison with best picks and spreads."""
    return compare_scenarios(
        _to_scenarios(payload.scenarios),
        sort_by=payload.sort_by,
        descending=payload.sort_order == "desc",
    )
