from fastapi import APIRouter

from homecalc.schemas.affordability import (
    AffordabilityRequest,
    AffordabilityResponse,
    LandTransferTaxRequest,
    ScheduleRequest,
    ScheduleResponse,
)
from homecalc.services.financial.affordability import ClosingCosts, compute_affordability
from homecalc.services.financial.land_transfer_tax import compute_land_transfer_tax
from homecalc.services.financial.payments import (
    BIWEEKLY,
    compute_monthly_payment,
    generate_amortization_schedule,
    schedule_summary,
    yearly_rollup,
)

router = APIRouter()


@router.post("", response_model=AffordabilityResponse)
def calculate_affordability(payload: AffordabilityRequest):
    """Monthly payment, stress test, LTT and cash needed for one purchase."""
    if payload.closing_costs_breakdown is not None:
        closing_costs = ClosingCosts(**payload.closing_costs_breakdown.model_dump())
    else:
        closing_costs = payload.closing_costs

    result = compute_affordability(
        price=payload.price,
        down_payment_percent=payload.down_payment_percent,
        annual_rate_percent=payload.interest_rate,
        amortization_years=payload.amortization_years,
        is_toronto=payload.is_toronto,
        is_first_time_buyer=payload.is_first_time_buyer,
        closing_costs=closing_costs,
        deposit_amount=payload.deposit_amount,
        term_years=payload.mortgage_term,
        mortgage_kind=payload.mortgage_type,
        lender_name=payload.lender_name,
    )
    return AffordabilityResponse(result=result.to_dict(), record=result.to_record())


@router.post("/schedule", response_model=ScheduleResponse)
def amortization_schedule(payload: ScheduleRequest):
    """Period-by-period schedule with a yearly roll-up."""
    monthly_payment = payload.monthly_payment
    if monthly_payment is None:
        monthly_payment = compute_monthly_payment(
            payload.principal, payload.interest_rate, payload.amortization_years
        )

    schedule = generate_amortization_schedule(
        payload.principal,
        payload.interest_rate,
        payload.amortization_years,
        frequency=payload.frequency,
        monthly_payment=monthly_payment,
    )
    # Biweekly schedules finish early, so their totals come from the rows
    summary = schedule_summary(
        payload.principal,
        monthly_payment,
        payload.amortization_years,
        schedule=schedule if payload.frequency == BIWEEKLY else None,
    )

    return ScheduleResponse(
        frequency=payload.frequency,
        periods=[row.to_dict() for row in schedule],
        yearly=[year.to_dict() for year in yearly_rollup(schedule, payload.frequency)],
        summary={k: round(v, 2) for k, v in summary.items()},
    )


@router.post("/land-transfer-tax")
def land_transfer_tax(payload: LandTransferTaxRequest):
    """Ontario and Toronto land transfer tax with bracket detail."""
    result = compute_land_transfer_tax(payload.price, payload.is_toronto, payload.is_first_time_buyer)
    return result.to_dict()
