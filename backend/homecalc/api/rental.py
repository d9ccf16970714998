from fastapi import APIRouter

from homecalc.schemas.rental import RentalRequest
from homecalc.services.financial.rental_model import (
    STANDARD_EXPENSE_CATEGORIES,
    ExpenseItem,
    analyze_rental,
)

router = APIRouter()


@router.post("")
def rental_analysis(payload: RentalRequest):
    """Cap rate, cash flow and returns for a buy-to-rent purchase."""
    standard = (payload.property_tax, payload.insurance, payload.maintenance)
    expenses = [
        ExpenseItem(category, amount)
        for category, amount in zip(STANDARD_EXPENSE_CATEGORIES, standard)
    ]
    expenses += [ExpenseItem(e.category, e.amount) for e in payload.additional_expenses]

    result = analyze_rental(
        price=payload.price,
        down_payment_percent=payload.down_payment_percent,
        annual_rate_percent=payload.interest_rate,
        amortization_years=payload.amortization_years,
        monthly_rent=payload.monthly_rent,
        vacancy_rate_percent=payload.vacancy_rate,
        annual_expenses=expenses,
        required_cap_rate_percent=payload.required_cap_rate,
        is_toronto=payload.is_toronto,
        closing_costs=payload.closing_costs,
    )
    return {
        **result.to_dict(),
        "expenses": [{"category": e.category, "amount": e.amount} for e in expenses],
    }
