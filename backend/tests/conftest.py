import pytest
from fastapi.testclient import TestClient

from homecalc.services.financial.sensitivity import Scenario


@pytest.fixture
def client():
    from homecalc.main import app
    return TestClient(app)


@pytest.fixture
def base_scenarios():
    """The three default comparison scenarios: 20%, 15% and 25% down."""
    common = dict(price=750000, annual_rate_percent=4.79, amortization_years=25)
    return [
        Scenario(name="Scenario 1", down_payment_percent=20, **common),
        Scenario(name="Scenario 2", down_payment_percent=15, **common),
        Scenario(name="Scenario 3", down_payment_percent=25, **common),
    ]
