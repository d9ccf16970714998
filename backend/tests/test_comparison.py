"""Tests for side-by-side scenario comparison."""
import pytest

from homecalc.services.financial.comparison import compare_scenarios
from homecalc.services.financial.validation import ValidationError


def test_sorted_by_monthly_payment(base_scenarios):
    result = compare_scenarios(base_scenarios)

    # 25% down is cheapest; 15% down carries CMHC on a bigger loan
    assert [s["name"] for s in result["scenarios"]] == ["Scenario 3", "Scenario 1", "Scenario 2"]


def test_descending_sort(base_scenarios):
    result = compare_scenarios(base_scenarios, descending=True)
    assert result["scenarios"][0]["name"] == "Scenario 2"


def test_best_picks(base_scenarios):
    best = compare_scenarios(base_scenarios)["best"]

    assert best["monthly_payment"] == "Scenario 3"
    assert best["total_cash_needed"] == "Scenario 2"
    # Same price everywhere, so LTT ties and the first scenario wins
    assert best["total_ltt"] == "Scenario 1"


def test_spread(base_scenarios):
    spread = compare_scenarios(base_scenarios)["spread"]

    payments = spread["monthly_payment"]
    assert payments["diff"] == pytest.approx(payments["max"] - payments["min"])
    assert payments["percentage"] > 0
    assert spread["interest_rate"]["diff"] == 0
    assert spread["interest_rate"]["percentage"] == 0


def test_records_carry_scenario_fields(base_scenarios):
    record = compare_scenarios(base_scenarios)["scenarios"][0]
    assert record["down_payment_percent"] == 25
    assert record["total_ltt"] == 14475.0


def test_empty_comparison():
    assert compare_scenarios([]) == {"scenarios": [], "best": {}, "spread": {}}


def test_unknown_sort_field(base_scenarios):
    with pytest.raises(ValidationError):
        compare_scenarios(base_scenarios, sort_by="lender_name")
