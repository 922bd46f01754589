"""
API tests for the quote, profit and ingredient cost calculators.
"""
import uuid

import pytest


class TestQuoteCalculator:

    def test_upcharge_options(self, client, client_headers):
        response = client.get("/api/v1/quotes/upcharges", headers=client_headers)
        assert response.status_code == 200
        options = {o["name"]: o["amount"] for o in response.json()}
        assert options["Filet Mignon"] == 7.0
        assert len(options) == 5

    def test_calculate_with_house_defaults(self, client, employee_headers):
        response = client.post("/api/v1/quotes/calculate", headers=employee_headers, json={
            "adult_count": 10,
            "child_count": 2,
            "selected_upcharges": ["Filet Mignon"],
        })
        assert response.status_code == 200
        body = response.json()
        assert body["subtotal"] == pytest.approx(744.0)
        assert body["total"] == pytest.approx(892.8)

    def test_calculate_with_overrides(self, client, employee_headers):
        response = client.post("/api/v1/quotes/calculate", headers=employee_headers, json={
            "adult_count": 2,
            "adult_base_price": 50,
            "gratuity_percent": 0,
        })
        body = response.json()
        assert body["subtotal"] == pytest.approx(100.0)
        assert body["gratuity_amount"] == 0
        assert body["gratuity_percent"] == 0

    def test_three_upcharges_is_bad_request(self, client, employee_headers):
        response = client.post("/api/v1/quotes/calculate", headers=employee_headers, json={
            "adult_count": 1,
            "selected_upcharges": ["Shrimp", "Chicken", "Steak"],
        })
        assert response.status_code == 400
        assert "At most 2" in response.json()["detail"]

    def test_toggle(self, client, employee_headers):
        response = client.post("/api/v1/quotes/toggle-upcharge", headers=employee_headers,
                               json={"selected": ["Shrimp", "Steak"], "name": "Scallops"})
        assert response.json() == {"selected": ["Shrimp", "Steak"], "changed": False}

        response = client.post("/api/v1/quotes/toggle-upcharge", headers=employee_headers,
                               json={"selected": ["Shrimp", "Steak"], "name": "Shrimp"})
        assert response.json() == {"selected": ["Steak"], "changed": True}


class TestEventProfit:

    def test_requires_analytics(self, client, employee_headers):
        assert client.post("/api/v1/quotes/event-profit", headers=employee_headers, json={}).status_code == 403

    def test_defaults(self, client, admin_headers):
        response = client.post("/api/v1/quotes/event-profit", headers=admin_headers, json={"labor_costs": [500]})
        assert response.status_code == 200
        body = response.json()
        assert body["base_revenue"] == pytest.approx(4250.0)
        assert body["total_labor_costs"] == 500

    def test_bad_food_cost_mode(self, client, admin_headers):
        response = client.post("/api/v1/quotes/event-profit", headers=admin_headers, json={"food_cost_mode": "guess"})
        assert response.status_code == 400


class TestIngredientCost:

    def test_costs_inventory_and_reports_missing(self, client, employee_headers):
        rice = client.post("/api/v1/inventory", headers=employee_headers, json={
            "name": "Jasmine Rice", "unit_type": "lb", "cost_per_unit": 1.5,
        }).json()
        chicken = client.post("/api/v1/inventory", headers=employee_headers, json={
            "name": "Chicken Thigh", "unit_type": "lb", "cost_per_unit": 3.0,
        }).json()
        missing = str(uuid.uuid4())

        response = client.post("/api/v1/quotes/ingredient-cost", headers=employee_headers, json={"usages": [
            {"ingredient_id": rice["id"], "quantity": 4},
            {"ingredient_id": chicken["id"], "quantity": 2.5},
            {"ingredient_id": missing, "quantity": 10},
        ]})
        assert response.status_code == 200
        body = response.json()
        assert body["total_cost"] == pytest.approx(13.5)
        assert body["missing_ingredient_ids"] == [missing]
