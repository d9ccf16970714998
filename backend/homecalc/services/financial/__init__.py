from homecalc.services.financial.affordability import ClosingCosts, compute_affordability
from homecalc.services.financial.insurance import compute_insurance_premium
from homecalc.services.financial.land_transfer_tax import compute_land_transfer_tax
from homecalc.services.financial.payments import (
    compute_monthly_payment,
    generate_amortization_schedule,
    yearly_rollup,
)
from homecalc.services.financial.rental_model import analyze_rental
from homecalc.services.financial.sensitivity import Scenario, run_sensitivity, run_stress_test
from homecalc.services.financial.tax_brackets import evaluate_bracket_tax
from homecalc.services.financial.validation import ValidationError

__all__ = [
    "ClosingCosts",
    "Scenario",
    "ValidationError",
    "analyze_rental",
    "compute_affordability",
    "compute_insurance_premium",
    "compute_land_transfer_tax",
    "compute_monthly_payment",
    "evaluate_bracket_tax",
    "generate_amortization_schedule",
    "run_sensitivity",
    "run_stress_test",
    "yearly_rollup",
]
