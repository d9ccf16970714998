from pydantic import BaseModel, Field
from typing import Optional


class DebtServiceRequest(BaseModel):
    monthly_payment: float = Field(ge=0)
    stress_test_payment: float = Field(ge=0)
    monthly_income: float = Field(gt=0)
    other_debts: float = Field(default=0, ge=0)
    credit_score: int = Field(ge=300, le=900)


class MonthlyBudgetRequest(BaseModel):
    monthly_income: float = Field(default=0, ge=0)
    savings: float = Field(default=0, ge=0)

    # Scenario the budget is for
    property_price: Optional[float] = Field(default=None, gt=0)
    is_toronto: bool = True

    # Housing
    mortgage_payment: float = Field(default=0, ge=0)
    maintenance_fee: float = Field(default=0, ge=0)
    property_tax: Optional[float] = Field(default=None, ge=0)  # Estimated from property_price when omitted
    utilities: float = Field(default=0, ge=0)
    insurance: float = Field(default=0, ge=0)

    # Living
    cable: float = Field(default=0, ge=0)
    internet: float = Field(default=0, ge=0)
    telephone: float = Field(default=0, ge=0)
    groceries: float = Field(default=0, ge=0)
    transportation: float = Field(default=0, ge=0)
    other_expenses: float = Field(default=0, ge=0)
