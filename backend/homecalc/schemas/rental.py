from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional

from homecalc.services.financial.rental_model import ADDITIONAL_EXPENSE_CATEGORIES


class ExpenseLine(BaseModel):
    category: str  # One of ADDITIONAL_EXPENSE_CATEGORIES
    amount: float = Field(ge=0)  # Annual

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if v not in ADDITIONAL_EXPENSE_CATEGORIES:
            raise ValueError(f"category must be one of {ADDITIONAL_EXPENSE_CATEGORIES}, got {v!r}")
        return v


class RentalRequest(BaseModel):
    """Buy-to-rent inputs. Down payment tops out at 80% for investment purchases."""
    price: float = Field(gt=0)
    down_payment_percent: float = Field(default=20, ge=0, le=80)
    interest_rate: float = Field(default=5.5, ge=0)
    amortization_years: Literal[15, 20, 25, 30] = 25
    is_toronto: bool = True

    # Income
    monthly_rent: float = Field(default=3000, ge=0)
    vacancy_rate: float = Field(default=5, ge=0, lt=100)
    required_cap_rate: float = Field(default=5, ge=0)

    # Annual expenses
    property_tax: float = Field(default=5000, ge=0)
    insurance: float = Field(default=1500, ge=0)
    maintenance: float = Field(default=3000, ge=0)
    additional_expenses: List[ExpenseLine] = []

    closing_costs: Optional[float] = Field(default=None, ge=0)
