from fastapi import APIRouter

from homecalc.schemas.budget import DebtServiceRequest, MonthlyBudgetRequest
from homecalc.services.financial.budget import (
    compute_debt_service,
    compute_monthly_budget,
    estimate_monthly_property_tax,
)

router = APIRouter()


@router.post("/debt-service")
def debt_service(payload: DebtServiceRequest):
    """GDS/TDS ratios and credit score band."""
    return compute_debt_service(
        monthly_payment=payload.monthly_payment,
        stress_test_payment=payload.stress_test_payment,
        monthly_income=payload.monthly_income,
        other_debts=payload.other_debts,
        credit_score=payload.credit_score,
    )


@router.post("/monthly")
def monthly_budget(payload: MonthlyBudgetRequest):
    """Income versus housing, living and savings."""
    fields = payload.model_dump()
    property_price = fields.pop("property_price")
    is_toronto = fields.pop("is_toronto")
    if fields["property_tax"] is None:
        fields["property_tax"] = (
            estimate_monthly_property_tax(property_price, is_toronto) if property_price is not None else 0.0
        )

    return compute_monthly_budget(
        monthly_income=fields.pop("monthly_income"),
        savings=fields.pop("savings"),
        **fields,
    )
