from homecalc.schemas.affordability import (
    AffordabilityRequest,
    AffordabilityResponse,
    ClosingCostsBreakdown,
    LandTransferTaxRequest,
    ScheduleRequest,
    ScheduleResponse,
)
from homecalc.schemas.rental import (
    ExpenseLine,
    RentalRequest,
)
from homecalc.schemas.scenarios import (
    CompareRequest,
    CompareResponse,
    ScenarioInput,
    SensitivityRequest,
    SensitivityResponse,
    StressTestRequest,
)
from homecalc.schemas.budget import (
    DebtServiceRequest,
    MonthlyBudgetRequest,
)
