"""
Tests for the catalog and calculation API endpoints.
"""

import pytest

# Client fixture is provided by conftest.py


class TestHealth:
    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCalculatorsAPI:
    """Test catalog endpoints."""

    def test_list_calculators(self, client):
        """Test listing the whole catalog."""
        response = client.get("/api/calculators")
        assert response.status_code == 200
        assert len(response.json()) == 101

    def test_list_by_category(self, client):
        """Test the category filter."""
        response = client.get("/api/calculators", params={"category": "E-commerce"})
        data = response.json()
        assert data
        assert all(item["category"] == "E-commerce" for item in data)

    def test_categories(self, client):
        """Test category listing."""
        response = client.get("/api/calculators/categories")
        assert response.json()[0] == "Financial"

    def test_get_calculator(self, client):
        """Test a calculator's full definition."""
        response = client.get("/api/calculators/mortgage")
        assert response.status_code == 200
        data = response.json()
        assert data["has_schedule"] is True
        assert [f["key"] for f in data["fields"]][:2] == ["homePrice", "downPayment"]

    def test_get_by_slug(self, client):
        """Test lookup by slug."""
        response = client.get("/api/calculators/tip-calculator")
        assert response.json()["id"] == "tip"

    def test_unknown_calculator(self, client):
        """Test 404 for unknown calculators."""
        assert client.get("/api/calculators/nope").status_code == 404
        assert client.post("/api/calculators/nope/compute", json={"values": {}}).status_code == 404

    def test_compute(self, client):
        """Test computing with raw string values."""
        response = client.post(
            "/api/calculators/loan/compute",
            json={"values": {"principal": "15000", "interestRate": "8.9", "termMonths": "60"}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "loan"
        assert data["results"][0] == {
            "label": "Monthly payment",
            "value": "$310.65",
            "emphasis": True,
        }

    def test_compute_uses_defaults(self, client):
        """Test computing with no values."""
        response = client.post("/api/calculators/fraction-simplifier/compute", json={})
        assert response.json()["results"][0]["value"] == "3/4"

    def test_compute_unusable_input(self, client):
        """Test that unusable input gives no rows."""
        response = client.post(
            "/api/calculators/fraction-simplifier/compute",
            json={"values": {"fraction": "abc"}},
        )
        assert response.json()["results"] == []

    def test_visibility(self, client):
        """Test the visibility endpoint."""
        response = client.post(
            "/api/calculators/random-number/visibility",
            json={"values": {"mode": "decimal"}},
        )
        assert response.json()["decimals"] is True

    def test_schedule(self, client):
        """Test a loan calculator's schedule."""
        response = client.post(
            "/api/calculators/amortization-schedule/schedule",
            json={"values": {}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["term_months"] == 360
        assert data["truncated"] is False
        assert len(data["schedule"]) == 360
        assert data["schedule"][-1]["balance"] == pytest.approx(0, abs=0.01)

    def test_schedule_long_term(self, client):
        """Test that a very long term returns a cut schedule."""
        response = client.post(
            "/api/calculators/loan/schedule",
            json={"values": {"principal": 1000, "interestRate": 0, "termMonths": 3000000}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["term_months"] == 3000000
        assert data["truncated"] is True
        assert len(data["schedule"]) == 600

    def test_schedule_not_available(self, client):
        """Test 400 for calculators without a schedule."""
        response = client.post("/api/calculators/tip/schedule", json={"values": {}})
        assert response.status_code == 400

    def test_related(self, client):
        """Test the related limit."""
        response = client.get("/api/calculators/cagr/related", params={"limit": 3})
        assert len(response.json()) == 3


class TestCalculationsAPI:
    """Test engine endpoints."""

    def test_amortization(self, client):
        """Test a schedule with totals."""
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 15000, "annual_rate": 8.9, "months": 60},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["monthly_payment"] == pytest.approx(310.65, abs=0.01)
        assert data["months"] == 60
        assert data["total_principal"] == pytest.approx(15000, abs=0.01)
        assert data["truncated"] is False

    def test_amortization_long_term(self, client):
        """Test that the schedule is cut and totals cover the whole term."""
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 1200, "annual_rate": 0, "months": 1200},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["truncated"] is True
        assert len(data["schedule"]) == 600
        assert data["months"] == 1200
        assert data["total_principal"] == pytest.approx(1200)

    def test_amortization_term_limit(self, client):
        """Test that terms past 100 years are rejected."""
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 1000, "annual_rate": 0, "months": 3000000},
        )
        assert response.status_code == 422

    def test_amortization_validation(self, client):
        """Test request validation."""
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": -5, "annual_rate": 5, "months": 12},
        )
        assert response.status_code == 422

    def test_debt_payoff(self, client):
        """Test an avalanche payoff order."""
        debts = [
            {"name": "Card", "balance": 2500, "apr": 24.99, "minimum": 75},
            {"name": "Car", "balance": 9000, "apr": 6.5, "minimum": 250},
        ]
        response = client.post(
            "/api/calculate/debt-payoff",
            json={"debts": debts, "extra_payment": 100, "strategy": "avalanche"},
        )
        assert response.status_code == 200
        assert response.json()["payoff_order"] == ["Card", "Car"]

    def test_debt_payoff_not_payable(self, client):
        """Test 400 when debts never get paid off."""
        response = client.post(
            "/api/calculate/debt-payoff",
            json={"debts": [{"balance": 10000, "apr": 30, "minimum": 10}]},
        )
        assert response.status_code == 400

    def test_debt_payoff_bad_strategy(self, client):
        """Test validation of the strategy name."""
        response = client.post(
            "/api/calculate/debt-payoff",
            json={"debts": [{"balance": 100, "apr": 5, "minimum": 10}], "strategy": "random"},
        )
        assert response.status_code == 422

    def test_fraction(self, client):
        """Test fraction approximation."""
        response = client.get("/api/calculate/fraction", params={"value": 0.75})
        assert response.json()["fraction"] == "3/4"

    def test_random_int(self, client):
        """Test a random integer in range."""
        response = client.get("/api/calculate/random-int", params={"minimum": 1, "maximum": 6})
        assert 1 <= response.json()["value"] <= 6

    def test_random_int_empty_range(self, client):
        """Test 400 for a range with no integers."""
        response = client.get("/api/calculate/random-int", params={"minimum": 1.2, "maximum": 1.8})
        assert response.status_code == 400

    def test_password(self, client):
        """Test password generation options."""
        response = client.get("/api/calculate/password", params={"length": 20, "symbols": True})
        data = response.json()
        assert data["length"] == 20
        assert len(data["password"]) == 20
