from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal


class ScenarioInput(BaseModel):
    name: str
    price: float = Field(gt=0)
    down_payment_percent: float = Field(ge=0, le=100)
    interest_rate: float = Field(ge=0)
    amortization_years: Literal[15, 20, 25, 30] = 25
    mortgage_term: int = Field(default=5, ge=1, le=10)
    mortgage_type: Literal["fixed", "variable"] = "fixed"
    is_toronto: bool = True
    is_first_time_buyer: bool = True
    closing_costs: Optional[float] = Field(default=None, ge=0)


class SensitivityRequest(BaseModel):
    scenarios: List[ScenarioInput] = Field(min_length=1)
    metric: Literal["rate", "price", "down_payment"] = "rate"
    steps: Optional[List[float]] = None  # Defaults per metric when omitted


class SensitivityRow(BaseModel):
    adjustment: float
    payments: Dict[str, float]


class SensitivityResponse(BaseModel):
    metric: str
    rows: List[SensitivityRow]


class StressTestRequest(BaseModel):
    scenarios: List[ScenarioInput] = Field(min_length=1)


class CompareRequest(BaseModel):
    scenarios: List[ScenarioInput] = Field(min_length=1)
    sort_by: Literal[
        "monthly_payment", "total_cash_needed", "total_ltt", "property_price", "interest_rate"
    ] = "monthly_payment"
    sort_order: Literal["asc", "desc"] = "asc"


class CompareResponse(BaseModel):
    scenarios: List[Dict[str, Any]]
    best: Dict[str, str]
    spread: Dict[str, Dict[str, float]]
