"""
Tests for the calculator API endpoints.
"""

import pytest

# The `client` fixture is provided by conftest.py


class TestTVMAPI:
    """Test the TVM solver endpoint."""

    def test_solve_payment(self, client):
        response = client.post(
            "/api/calculate/tvm",
            json={"solve_for": "PMT", "n": 360, "iy": 4.5, "pv": 300000, "py": 12, "cy": 12},
        )
        assert response.status_code == 200
        data = response.json()
        assert abs(data["result"]["pmt"] - (-1520.06)) < 0.01
        assert data["schedule"] is None

    def test_solve_with_schedule(self, client):
        response = client.post(
            "/api/calculate/tvm",
            json={
                "solve_for": "PMT",
                "n": 12,
                "iy": 6,
                "pv": 12000,
                "py": 12,
                "cy": 12,
                "include_schedule": True,
                "start_date": "2025-01-15",
            },
        )
        assert response.status_code == 200
        schedule = response.json()["schedule"]
        assert len(schedule) == 12
        assert schedule[0]["payment_date"] == "2025-01-15"
        assert schedule[1]["payment_date"] == "2025-02-15"
        assert abs(schedule[-1]["balance"]) < 0.01

    def test_domain_error(self, client):
        """A payment below the periodic interest never pays off the loan."""
        response = client.post(
            "/api/calculate/tvm",
            json={"solve_for": "N", "iy": 10, "pv": 1000, "pmt": -50},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "domain_error"
        assert data["detail"] == ["No number of periods satisfies these values"]

    def test_no_convergence(self, client):
        response = client.post(
            "/api/calculate/tvm",
            json={"solve_for": "IY", "n": 1, "pv": 100, "fv": -1e30},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "no_convergence"

    def test_overflow_is_domain_error(self, client):
        response = client.post(
            "/api/calculate/tvm",
            json={"solve_for": "FV", "n": 100000, "iy": 10, "pv": -1000, "py": 12, "cy": 12},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "domain_error"
        assert data["detail"] == ["Result is too large to represent"]

    def test_unknown_variable_is_validation_error(self, client):
        response = client.post(
            "/api/calculate/tvm",
            json={"solve_for": "RATE", "n": 10, "pv": 100},
        )
        assert response.status_code == 422


class TestLoanAPI:
    """Test amortization, IRR, cash back and lease endpoints."""

    def test_calculate_amortization(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 100000, "annual_rate": 6, "years": 30},
        )
        assert response.status_code == 200
        data = response.json()
        assert abs(data["payment"] - 599.55) < 0.01
        assert len(data["schedule"]) == 360
        assert len(data["yearly"]) == 30
        assert abs(data["total_principal"] - 100000) < 0.01

    def test_amortization_continuous_rejected(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 100000, "annual_rate": 6, "years": 30, "frequency": "continuously"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_calculate_irr(self, client):
        response = client.post(
            "/api/calculate/irr",
            json={
                "cash_flows": [-100, 20, 20, 20, 20, 120],
                "finance_rate": 10,
                "reinvestment_rate": 10,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert abs(data["irr"] - 0.20) < 1e-6
        assert abs(data["multiple"] - 2.0) < 1e-9
        assert data["profit"] == 100
        assert data["mirr"] is not None
        assert data["payback_period"] == pytest.approx(4 + 20 / 120)

    def test_calculate_xirr(self, client):
        response = client.post(
            "/api/calculate/irr",
            json={"cash_flows": [-1000, 1100], "dates": ["2025-01-01", "2026-01-01"]},
        )
        assert response.status_code == 200
        assert abs(response.json()["irr"] - 0.10) < 1e-6

    def test_calculate_irr_invalid_cash_flows(self, client):
        """Test IRR with invalid cash flows."""
        response = client.post(
            "/api/calculate/irr",
            json={"cash_flows": [100, 50, 50]},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == [
            "Cash flows must contain both positive and negative values"
        ]

    def test_cash_back(self, client):
        response = client.post(
            "/api/calculate/cash-back",
            json={
                "purchase_price": 30000,
                "cash_back": 2000,
                "standard_rate": 6,
                "reduced_rate": 2,
                "loan_term_months": 60,
                "down_payment": 5000,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["recommendation"] == "low_interest"
        assert data["break_even_months"] == 310

    def test_auto_lease(self, client):
        response = client.post(
            "/api/calculate/auto-lease",
            json={
                "msrp": 50000,
                "negotiated_price": 50000,
                "lease_term": 36,
                "interest_rate": 6,
                "residual_percent": 50,
                "down_payment": 8000,
                "trade_in_value": 5000,
                "sales_tax_rate": 6,
            },
        )
        assert response.status_code == 200
        assert abs(response.json()["monthly_payment"] - 517.63) < 0.01


class TestGrowthAPI:
    """Test interest, investment and annuity endpoints."""

    def test_simple_interest(self, client):
        response = client.post(
            "/api/calculate/simple-interest",
            json={"principal": 10000, "annual_rate": 5, "years": 3},
        )
        assert response.status_code == 200
        assert response.json()["total_interest"] == pytest.approx(1500)

    def test_compound_interest(self, client):
        response = client.post(
            "/api/calculate/compound-interest",
            json={"principal": 10000, "annual_rate": 5, "years": 10},
        )
        assert response.status_code == 200
        data = response.json()
        assert abs(data["end_balance"] - 16470.09) < 0.01
        assert len(data["yearly"]) == 10

    def test_compound_interest_zero_years(self, client):
        response = client.post(
            "/api/calculate/compound-interest",
            json={"principal": 10000, "annual_rate": 5, "years": 0},
        )
        assert response.status_code == 400
        assert "Time period must be greater than 0" in response.json()["detail"]

    def test_compound_interest_overflow(self, client):
        response = client.post(
            "/api/calculate/compound-interest",
            json={"principal": 1000, "annual_rate": 10, "years": 100000},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "domain_error"

    def test_compound_interest_mismatched_contributions(self, client):
        response = client.post(
            "/api/calculate/compound-interest",
            json={
                "principal": 0,
                "annual_rate": 6,
                "years": 1,
                "contribution": 100,
                "contributions_per_year": 26,
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_investment(self, client):
        response = client.post(
            "/api/calculate/investment",
            json={
                "starting_amount": 1000,
                "contribution": 100,
                "years": 2,
                "annual_rate": 0,
                "contribution_frequency": "monthly",
                "compounding": "annually",
            },
        )
        assert response.status_code == 200
        assert response.json()["end_balance"] == pytest.approx(3400)

    def test_annuity(self, client):
        response = client.post(
            "/api/calculate/annuity",
            json={"starting_principal": 10000, "annual_rate": 6, "years": 1},
        )
        assert response.status_code == 200
        assert abs(response.json()["end_balance"] - 10616.78) < 0.01

    def test_annuity_payout_fixed_length(self, client):
        response = client.post(
            "/api/calculate/annuity-payout",
            json={"principal": 100000, "annual_rate": 6, "years": 10},
        )
        assert response.status_code == 200
        assert abs(response.json()["payout_amount"] - 1110.21) < 0.01

    def test_annuity_payout_duration(self, client):
        response = client.post(
            "/api/calculate/annuity-payout",
            json={"principal": 12500, "annual_rate": 0, "payout_amount": 1000},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["depletes"] is True
        assert data["total_payments"] == 13


class TestPricingAPI:
    """Test margin, discount and ROI endpoints."""

    def test_margin(self, client):
        response = client.post("/api/calculate/margin", json={"cost": 50, "revenue": 100})
        assert response.status_code == 200
        data = response.json()
        assert data["margin"] == 50
        assert data["markup"] == 100

    def test_margin_needs_two_values(self, client):
        response = client.post("/api/calculate/margin", json={"cost": 50})
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "invalid_input"
        assert data["detail"] == ["Please provide at least 2 values"]

    def test_margin_contradictory_values(self, client):
        response = client.post(
            "/api/calculate/margin", json={"cost": 50, "revenue": 100, "profit": 10}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == ["Profit does not match the other values"]

    def test_discount_fixed_mode(self, client):
        response = client.post(
            "/api/calculate/discount",
            json={"original_price": 200, "discount_amount": 50, "mode": "fixed"},
        )
        assert response.status_code == 200
        assert response.json()["discount_percent"] == 25

    def test_roi_with_projection(self, client):
        response = client.post(
            "/api/calculate/roi",
            json={
                "initial_investment": 10000,
                "final_value": 15000,
                "investment_period": 2,
                "projection_years": 3,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["result"]["roi"] == pytest.approx(50)
        assert len(data["projection"]) == 3

    def test_roi_solve(self, client):
        response = client.post(
            "/api/calculate/roi/solve",
            json={"amount_invested": 1000, "roi": 25},
        )
        assert response.status_code == 200
        assert response.json()["amount_returned"] == pytest.approx(1250)

    def test_roi_compare(self, client):
        response = client.post(
            "/api/calculate/roi/compare",
            json={
                "scenarios": [
                    {"name": "bonds", "initial_investment": 1000, "final_value": 1100, "period": 2},
                    {"name": "stocks", "initial_investment": 1000, "final_value": 1500, "period": 3},
                ]
            },
        )
        assert response.status_code == 200
        ranked = response.json()
        assert ranked[0]["scenario"] == "stocks"
        assert ranked[0]["rank"] == 1


class TestTaxAPI:
    """Test the marriage tax endpoint."""

    def test_marriage_tax(self, client):
        response = client.post(
            "/api/calculate/marriage-tax",
            json={"person1": {"salary": 50000}, "person2": {"salary": 50000}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["separate_total_tax"] == pytest.approx(7743)
        assert data["married_filing_jointly"]["filing_status"] == "married_filing_jointly"
        assert data["impact"] == "minimal"
        assert data["recommendation"].startswith("Marriage has minimal tax impact")

    def test_marriage_tax_unknown_year(self, client):
        response = client.post(
            "/api/calculate/marriage-tax",
            json={"person1": {"salary": 50000}, "person2": {"salary": 0}, "tax_year": 1999},
        )
        assert response.status_code == 400


class TestHealthCheck:
    """Test health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
