# =============================================================================
# tests/test_api_orders.py - Order Endpoint Tests
# =============================================================================
# Covers the require_auth gate, order placement, pricing and ownership.
# Users are switched by logging in again on the same client.
# =============================================================================

from decimal import Decimal

import pytest

from lib.datastore import DatastoreError


@pytest.fixture
def two_users(client, signup):
    """Register Rose and Martha; leaves the client logged out."""
    rose = signup(name="Rose", email="rose@example.com", password="bad-wolf")
    martha = signup(name="Martha", email="martha@example.com", password="doctor1")
    client.post("/api/auth/logout")
    return rose, martha


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


# =============================================================================
# Auth Gate
# =============================================================================

class TestRequireAuth:
    """Protected routes reject requests without a live session."""

    def test_create_requires_login(self, client, datastore):
        response = client.post("/api/orders", json={"flower_id": 1, "quantity": 1})

        assert response.status_code == 401
        assert response.json() == {"detail": "Please log in", "code": "AUTH_REQUIRED"}
        assert datastore.orders == {}

    def test_list_requires_login(self, client):
        assert client.get("/api/orders").status_code == 401

    def test_gate_runs_before_body_validation(self, client):
        response = client.post("/api/orders", json={"flower_id": "rose"})

        assert response.status_code == 401

    def test_logout_closes_gate(self, client, signup):
        signup()
        assert client.get("/api/orders").status_code == 200

        client.post("/api/auth/logout")

        assert client.get("/api/orders").status_code == 401


# =============================================================================
# Create Order
# =============================================================================

class TestCreateOrder:
    """POST /api/orders"""

    def test_create_order(self, client, signup):
        user = signup()

        response = client.post("/api/orders", json={"flower_id": 2, "quantity": 4})

        assert response.status_code == 201
        order = response.json()
        assert order["user_id"] == user["id"]
        assert order["flower_id"] == 2
        assert order["quantity"] == 4
        assert Decimal(order["total_price"]) == Decimal("25.00")
        assert order["created_at"]

    @pytest.mark.parametrize(
        "payload",
        [{}, {"flower_id": 1}, {"quantity": 2}, {"flower_id": 1, "quantity": 0}],
    )
    def test_missing_fields(self, client, signup, datastore, payload):
        signup()

        response = client.post("/api/orders", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Flower and quantity are required"
        assert datastore.orders == {}

    def test_malformed_fields(self, client, signup):
        signup()

        response = client.post("/api/orders", json={"flower_id": "rose", "quantity": 1})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_missing_body(self, client, signup, datastore):
        signup()

        response = client.post("/api/orders")

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": {"fields": ["body"]},
        }
        assert datastore.orders == {}

    def test_unknown_flower(self, client, signup):
        signup()

        response = client.post("/api/orders", json={"flower_id": 99, "quantity": 1})

        assert response.status_code == 404
        assert response.json()["code"] == "FLOWER_NOT_FOUND"
        assert client.get("/api/orders").json() == []

    def test_price_change_does_not_touch_past_orders(self, client, signup, datastore):
        signup()
        client.post("/api/orders", json={"flower_id": 1, "quantity": 2})

        datastore.flowers[1]["price"] = Decimal("20.00")

        [order] = client.get("/api/orders").json()
        assert Decimal(order["total_price"]) == Decimal("25.00")

        response = client.post("/api/orders", json={"flower_id": 1, "quantity": 2})
        assert Decimal(response.json()["total_price"]) == Decimal("40.00")

    def test_datastore_down(self, client, signup, datastore):
        signup()

        async def failing_insert(**kwargs):
            raise DatastoreError("insert failed")

        datastore.insert_order = failing_insert

        response = client.post("/api/orders", json={"flower_id": 1, "quantity": 1})

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create order", "code": "INTERNAL_ERROR"}


# =============================================================================
# List Orders
# =============================================================================

class TestListOrders:
    """GET /api/orders"""

    def test_newest_first_with_flower_details(self, client, signup):
        signup()
        first = client.post("/api/orders", json={"flower_id": 1, "quantity": 1}).json()
        second = client.post("/api/orders", json={"flower_id": 3, "quantity": 2}).json()

        orders = client.get("/api/orders").json()

        assert [o["id"] for o in orders] == [second["id"], first["id"]]
        assert orders[0]["flower_name"] == "Sunflower"
        assert orders[0]["image_url"] == "/images/sunflower.jpg"
        assert orders[1]["flower_name"] == "Red Rose"

    def test_ownership_isolation(self, client, two_users):
        rose, martha = two_users

        login(client, "rose@example.com", "bad-wolf")
        client.post("/api/orders", json={"flower_id": 1, "quantity": 1})

        login(client, "martha@example.com", "doctor1")
        client.post("/api/orders", json={"flower_id": 2, "quantity": 3})
        martha_orders = client.get("/api/orders").json()

        login(client, "rose@example.com", "bad-wolf")
        rose_orders = client.get("/api/orders").json()

        assert [o["user_id"] for o in rose_orders] == [rose["id"]]
        assert [o["user_id"] for o in martha_orders] == [martha["id"]]
        assert rose_orders[0]["flower_id"] == 1
        assert martha_orders[0]["flower_id"] == 2

    def test_empty(self, client, signup):
        signup()

        assert client.get("/api/orders").json() == []
