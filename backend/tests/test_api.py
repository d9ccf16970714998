"""Endpoint tests through the FastAPI test client."""
import pytest


def _scenario(name, down_payment_percent):
    return {
        "name": name,
        "price": 750000,
        "down_payment_percent": down_payment_percent,
        "interest_rate": 4.79,
        "amortization_years": 25,
    }


SCENARIOS = [_scenario("Scenario 1", 20), _scenario("Scenario 2", 15), _scenario("Scenario 3", 25)]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": "1.0.0"}


class TestAffordabilityEndpoints:

    def test_calculate(self, client):
        response = client.post("/api/affordability", json={
            "price": 750000, "down_payment_percent": 20, "interest_rate": 4.79,
            "amortization_years": 25, "is_toronto": True, "is_first_time_buyer": True,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["down_payment_amount"] == 150000
        assert data["result"]["total_land_transfer_tax"] == 14475
        assert data["record"]["total_ltt"] == 14475
        assert data["record"]["stress_test_rate"] == pytest.approx(6.79)

    def test_closing_cost_breakdown(self, client):
        response = client.post("/api/affordability", json={
            "price": 600000, "closing_costs_breakdown": {"legal": 2000},
        })
        assert response.status_code == 200
        assert response.json()["result"]["total_closing_costs"] == 2800

    def test_tiny_rate_is_straight_line(self, client):
        response = client.post("/api/affordability", json={
            "price": 750000, "down_payment_percent": 20, "interest_rate": 1e-15,
        })

        assert response.status_code == 200
        assert response.json()["result"]["monthly_payment"] == pytest.approx(600000 / 300, abs=0.01)

    def test_unsupported_amortization(self, client):
        response = client.post("/api/affordability", json={"price": 750000, "amortization_years": 0})
        assert response.status_code == 422

    def test_monthly_schedule(self, client):
        response = client.post("/api/affordability/schedule", json={
            "principal": 300000, "interest_rate": 5, "amortization_years": 25,
        })

        assert response.status_code == 200
        data = response.json()
        assert len(data["periods"]) == 300
        assert len(data["yearly"]) == 25
        assert data["periods"][-1]["remaining_balance"] == pytest.approx(0, abs=0.01)
        assert data["summary"]["total_interest"] > 0

    def test_biweekly_schedule_pays_off_early(self, client):
        response = client.post("/api/affordability/schedule", json={
            "principal": 300000, "interest_rate": 5, "amortization_years": 25, "frequency": "biweekly",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["frequency"] == "biweekly"
        assert len(data["periods"]) < 25 * 26
        assert data["periods"][-1]["remaining_balance"] == 0

        summary = data["summary"]
        row_interest = sum(p["interest_component"] for p in data["periods"])
        assert summary["total_interest"] == pytest.approx(row_interest, abs=5)
        assert summary["total_paid"] == pytest.approx(300000 + summary["total_interest"], abs=0.02)

    def test_land_transfer_tax(self, client):
        response = client.post("/api/affordability/land-transfer-tax", json={
            "price": 750000, "is_toronto": True, "is_first_time_buyer": True,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["ontario_tax"] == 11475
        assert data["ontario_rebate"] == 4000
        assert data["toronto_rebate"] == 4475
        assert data["total"] == 14475
        assert data["has_rebate"] is True


def test_rental_analysis(client):
    response = client.post("/api/rental", json={
        "price": 750000, "down_payment_percent": 20, "interest_rate": 5.5,
        "amortization_years": 25, "monthly_rent": 3000, "vacancy_rate": 5,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["net_operating_income"] == 24700
    assert data["cap_rate_percentage"] == 3.29
    assert data["cap_rate_met"] is False
    assert [e["category"] for e in data["expenses"]] == ["Property Tax", "Insurance", "Maintenance / Repairs"]


def test_rental_additional_expense(client):
    response = client.post("/api/rental", json={
        "price": 750000,
        "additional_expenses": [{"category": "Snow Removal", "amount": 600}],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["total_annual_expenses"] == 10100
    assert data["expenses"][-1] == {"category": "Snow Removal", "amount": 600}


def test_rental_rejects_unknown_expense_category(client):
    response = client.post("/api/rental", json={
        "price": 750000,
        "additional_expenses": [{"category": "Boat Slip", "amount": 600}],
    })
    assert response.status_code == 422


def test_rental_rejects_full_vacancy(client):
    response = client.post("/api/rental", json={"price": 750000, "vacancy_rate": 100})
    assert response.status_code == 422


class TestScenarioEndpoints:

    def test_sensitivity(self, client):
        response = client.post("/api/scenarios/sensitivity", json={"scenarios": SCENARIOS, "metric": "rate"})

        assert response.status_code == 200
        data = response.json()
        assert data["metric"] == "rate"
        assert [row["adjustment"] for row in data["rows"]] == [-2.0, -1.5, -1.0, -0.5, 0.0, 0.5, 1.0, 1.5, 2.0]
        assert set(data["rows"][0]["payments"]) == {"Scenario 1", "Scenario 2", "Scenario 3"}

    def test_stress_test(self, client):
        response = client.post("/api/scenarios/stress-test", json={"scenarios": SCENARIOS[:1]})

        assert response.status_code == 200
        figures = response.json()["Scenario 1"]
        assert figures["rate_plus_2"] > figures["current"] > figures["rate_minus_2"]

    def test_compare(self, client):
        response = client.post("/api/scenarios/compare", json={"scenarios": SCENARIOS})

        assert response.status_code == 200
        data = response.json()
        assert [s["name"] for s in data["scenarios"]] == ["Scenario 3", "Scenario 1", "Scenario 2"]
        assert data["best"]["total_cash_needed"] == "Scenario 2"

    def test_duplicate_names_rejected(self, client):
        response = client.post("/api/scenarios/stress-test", json={
            "scenarios": [_scenario("Same", 20), _scenario("Same", 15)],
        })

        assert response.status_code == 422
        assert response.json()["field"] == "scenarios"


class TestBudgetEndpoints:

    def test_debt_service(self, client):
        response = client.post("/api/budget/debt-service", json={
            "monthly_payment": 2000, "stress_test_payment": 2400, "monthly_income": 8000,
            "other_debts": 400, "credit_score": 720,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["gds"] == 25.0
        assert data["tds"] == 30.0
        assert data["credit_band"] == "Good"

    def test_monthly_budget(self, client):
        response = client.post("/api/budget/monthly", json={
            "monthly_income": 8000, "savings": 500, "mortgage_payment": 3000,
            "property_tax": 400, "utilities": 200, "groceries": 600, "transportation": 300,
        })

        assert response.status_code == 200
        assert response.json()["remaining_income"] == 3000

    def test_monthly_budget_estimates_property_tax(self, client):
        response = client.post("/api/budget/monthly", json={
            "monthly_income": 8000, "property_price": 750000, "is_toronto": True,
        })

        assert response.status_code == 200
        assert response.json()["housing_costs"] == pytest.approx(750000 * 0.006135 / 12, abs=0.01)

    def test_monthly_budget_keeps_given_property_tax(self, client):
        response = client.post("/api/budget/monthly", json={
            "monthly_income": 8000, "property_price": 750000, "property_tax": 400,
        })
        assert response.json()["housing_costs"] == 400


class TestRateEndpoints:

    def test_second_call_is_cached(self, client):
        client.app.state.rate_cache.clear()

        first = client.get("/api/rates").json()
        second = client.get("/api/rates").json()

        assert first["cached"] is False
        assert second["cached"] is True
        assert len(second["rates"]) == 16

    def test_lowest_variable(self, client):
        response = client.get("/api/rates/lowest", params={"type": "variable"})

        assert response.status_code == 200
        assert response.json() == {"lender_name": "EQ Bank", "rate_percent": 6.10, "type": "variable"}

    def test_unknown_type(self, client):
        assert client.get("/api/rates/lowest", params={"type": "hybrid"}).status_code == 422
