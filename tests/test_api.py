"""End-to-end tests for the REST endpoints."""

import json
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from app.core.app_factory import create_application
from app.core.config import Settings

from conftest import MONTHLY_ID, YEARLY_ID


@pytest.fixture
def client(tmp_path, monkeypatch):
    catalog = tmp_path / "products.json"
    catalog.write_text(
        json.dumps(
            [
                {"id": MONTHLY_ID, "name": "Monthly", "subscription_period": 1, "price": 10, "tax_percentage": 10},
                {"id": YEARLY_ID, "name": "Yearly", "subscription_period": 12, "price": 90, "tax_percentage": 19},
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "app.db"))
    monkeypatch.setenv("PRODUCT_SEED_PATH", str(catalog))
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    with TestClient(create_application(Settings())) as test_client:
        yield test_client


def _buy(client, product_id=MONTHLY_ID, email="buyer@example.com"):
    return client.post("/api/v1/subscription", json={"product_id": product_id, "email_id": email})


class TestProductEndpoints:
    def test_list_products(self, client):
        response = client.get("/api/v1/product")

        assert response.status_code == 200
        names = sorted(item["name"] for item in response.json()["products"])
        assert names == ["Monthly", "Yearly"]

    def test_get_product(self, client):
        response = client.get(f"/api/v1/product/{YEARLY_ID}")

        assert response.status_code == 200
        assert response.json() == {
            "id": YEARLY_ID,
            "name": "Yearly",
            "subscription_period": 12,
            "price": 90.0,
            "tax_percentage": 19.0,
        }

    def test_get_unknown_product(self, client):
        response = client.get("/api/v1/product/ffffffffffffffffffffffff")

        assert response.status_code == 404
        assert response.json() == {"errorMessage": "product not found for given id"}

    def test_get_product_with_malformed_id(self, client):
        response = client.get("/api/v1/product/p1")

        assert response.status_code == 400
        assert "invalid argument" in response.json()["errorMessage"]


class TestSubscriptionEndpoints:
    def test_buy_subscription(self, client):
        response = _buy(client)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "active"
        assert body["email"] == "buyer@example.com"
        assert body["product_name"] == "Monthly"
        assert body["price"] == 10.0
        assert body["tax"] == 1.0
        assert body["updated_at"] is None
        assert body["pause_start_date"] is None

    def test_buy_subscription_rejects_invalid_email(self, client):
        response = _buy(client, email="not-an-email")

        assert response.status_code == 400
        assert "email_id" in response.json()["errorMessage"]

    def test_buy_subscription_rejects_missing_product(self, client):
        response = client.post("/api/v1/subscription", json={"email_id": "buyer@example.com"})

        assert response.status_code == 400

    def test_buy_subscription_unknown_product(self, client):
        response = _buy(client, product_id="ffffffffffffffffffffffff")

        assert response.status_code == 404

    def test_get_subscription(self, client):
        created = _buy(client).json()

        response = client.get(f"/api/v1/subscription/{created['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        assert response.json()["end_date"] == created["end_date"]

    def test_get_unknown_subscription(self, client):
        response = client.get("/api/v1/subscription/ffffffffffffffffffffffff")

        assert response.status_code == 404

    def test_get_subscription_with_malformed_id(self, client):
        response = client.get("/api/v1/subscription/unknown-id")

        assert response.status_code == 400

    def test_pause_resume_and_cancel(self, client):
        subscription_id = _buy(client).json()["id"]

        paused = client.patch(f"/api/v1/subscription/{subscription_id}/changeStatus/pause")
        assert paused.status_code == 200
        assert paused.json()["status"] == "paused"
        assert paused.json()["pause_start_date"] is not None

        resumed = client.patch(f"/api/v1/subscription/{subscription_id}/changeStatus/active")
        assert resumed.status_code == 200
        assert resumed.json()["status"] == "active"

        cancelled = client.patch(f"/api/v1/subscription/{subscription_id}/changeStatus/cancel")
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "cancelled"

        reactivated = client.patch(f"/api/v1/subscription/{subscription_id}/changeStatus/active")
        assert reactivated.status_code == 400
        assert "not allowed" in reactivated.json()["errorMessage"]

    def test_unchanged_status_is_bad_request(self, client):
        subscription_id = _buy(client).json()["id"]

        response = client.patch(f"/api/v1/subscription/{subscription_id}/changeStatus/active")

        assert response.status_code == 400
        assert "status is unchanged" in response.json()["errorMessage"]

    def test_unknown_status_value(self, client):
        subscription_id = _buy(client).json()["id"]

        response = client.patch(f"/api/v1/subscription/{subscription_id}/changeStatus/resume")

        assert response.status_code == 400
        assert response.json() == {"errorMessage": "invalid status value"}

    def test_change_status_of_unknown_subscription(self, client):
        response = client.patch("/api/v1/subscription/ffffffffffffffffffffffff/changeStatus/pause")

        assert response.status_code == 404

    def test_unexpected_errors_hide_their_detail(self, client):
        service = Mock()
        service.get_by_id.side_effect = RuntimeError("database file is corrupt")
        client.app.state.container.subscription_service = service

        response = client.get("/api/v1/subscription/ffffffffffffffffffffffff")

        assert response.status_code == 500
        assert response.json() == {"errorMessage": "internal server error"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
