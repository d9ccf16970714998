"""
Side-by-side scenario comparison: sorted table, best scenario per headline
figure, and the spread of each figure across scenarios.
"""

from typing import Any, Dict, List, Sequence

from homecalc.services.financial.affordability import compute_affordability
from homecalc.services.financial.sensitivity import Scenario, check_unique_names
from homecalc.services.financial.validation import require_choice

SORT_FIELDS = ("monthly_payment", "total_cash_needed", "total_ltt", "property_price", "interest_rate")
SPREAD_FIELDS = ("monthly_payment", "total_cash_needed", "interest_rate")


def _spread(records: List[Dict[str, Any]], field: str) -> Dict[str, float]:
    values = [r[field] for r in records]
    low, high = min(values), max(values)
    return {
        "min": low,
        "max": high,
        "diff": high - low,
        "percentage": round((high - low) / low * 100, 1) if low else 0.0,
    }


def compare_scenarios(
    scenarios: Sequence[Scenario],
    sort_by: str = "monthly_payment",
    descending: bool = False,
) -> Dict[str, Any]:
    require_choice("sort_by", sort_by, SORT_FIELDS)
    check_unique_names(scenarios)
    if not scenarios:
        return {"scenarios": [], "best": {}, "spread": {}}

    records: List[Dict[str, Any]] = []
    for scenario in scenarios:
        result = compute_affordability(
            price=scenario.price,
            down_payment_percent=scenario.down_payment_percent,
            annual_rate_percent=scenario.annual_rate_percent,
            amortization_years=scenario.amortization_years,
            is_toronto=scenario.is_toronto,
            is_first_time_buyer=scenario.is_first_time_buyer,
            closing_costs=scenario.closing_costs,
            term_years=scenario.term_years,
            mortgage_kind=scenario.mortgage_kind,
        )
        records.append({"name": scenario.name, **result.to_record()})

    ordered = sorted(records, key=lambda r: r[sort_by] or 0, reverse=descending)

    # Lowest wins for every headline figure
    best = {
        field: min(records, key=lambda r: r[field])["name"]
        for field in ("monthly_payment", "total_cash_needed", "total_ltt")
    }
    return {
        "scenarios": ordered,
        "best": best,
        "spread": {field: _spread(records, field) for field in SPREAD_FIELDS},
    }
