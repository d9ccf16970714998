from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal


class ClosingCostsBreakdown(BaseModel):
    legal: float = Field(default=1500, ge=0)
    appraisal: float = Field(default=400, ge=0)
    inspection: float = Field(default=400, ge=0)


class AffordabilityRequest(BaseModel):
    """Purchase inputs from the calculator form."""
    price: float = Field(gt=0)
    down_payment_percent: float = Field(default=20, ge=0, le=100)
    interest_rate: float = Field(default=4.5, ge=0)
    amortization_years: Literal[15, 20, 25, 30] = 25
    is_toronto: bool = True
    is_first_time_buyer: bool = True
    closing_costs: Optional[float] = Field(default=None, ge=0)  # Plain total
    closing_costs_breakdown: Optional[ClosingCostsBreakdown] = None  # Takes precedence over the total
    deposit_amount: float = Field(default=0, ge=0)
    mortgage_term: int = Field(default=5, ge=1, le=10)
    mortgage_type: Literal["fixed", "variable"] = "fixed"
    lender_name: Optional[str] = None


class AffordabilityResponse(BaseModel):
    result: Dict[str, Any]
    record: Dict[str, Any]  # Flat scenario record for the caller to store


class ScheduleRequest(BaseModel):
    principal: float = Field(gt=0)
    interest_rate: float = Field(ge=0)
    amortization_years: int = Field(gt=0, le=40)
    frequency: Literal["monthly", "biweekly"] = "monthly"
    monthly_payment: Optional[float] = Field(default=None, gt=0)  # Derived when omitted


class ScheduleResponse(BaseModel):
    frequency: str
    periods: List[Dict[str, Any]]
    yearly: List[Dict[str, Any]]
    summary: Dict[str, float]


class LandTransferTaxRequest(BaseModel):
    price: float = Field(ge=0)
    is_toronto: bool = True
    is_first_time_buyer: bool = True
