"""HTTP tests for the FastAPI surface, backed by the in-memory fakes."""

from fastapi.testclient import TestClient

from storefront.domain.exceptions import DomainError, TransportError
from storefront.infrastructure.config import Settings
from storefront.infrastructure.web.app import WebServices, create_app
from tests.fakes import (
    VARIANT_ID,
    FakeAccountGateway,
    FakeCheckoutGateway,
    FakeCheckoutRepository,
)

ADDRESS = {
    "full_name": "Alice Smith",
    "street1": "1 Main St",
    "city": "Springfield",
    "region": "IL",
    "postal_code": "62701",
}

BILLING = {
    "first_name": "Alice",
    "last_name": "Smith",
    "street1": "1 Main St",
    "city": "Springfield",
    "region": "IL",
    "postal_code": "62701",
}


def _setup():
    services = WebServices(
        settings=Settings(variant_id=VARIANT_ID, quantity=1),
        checkout_repo=FakeCheckoutRepository(),
        checkout_gateway=FakeCheckoutGateway(),
        account_gateway=FakeAccountGateway(),
    )
    return TestClient(create_app(services)), services


def _login(client: TestClient) -> None:
    response = client.post(
        "/api/login", json={"email": "alice@example.com", "password": "secret"}
    )
    assert response.status_code == 200


class TestAccountRoutes:

    def test_login_sets_http_only_cookie(self):
        client, _ = _setup()

        response = client.post(
            "/api/login", json={"email": "alice@example.com", "password": "secret"}
        )

        assert response.json() == {"ok": True, "user": {"email": "alice@example.com"}}
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("saleor_token=tok-alice")
        assert "HttpOnly" in cookie
        assert "samesite=lax" in cookie.lower()
        assert client.get("/api/me").json() == {"user": {"email": "alice@example.com"}}

    def test_bad_credentials(self):
        client, _ = _setup()

        response = client.post(
            "/api/login", json={"email": "alice@example.com", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "invalid credentials"}
        assert "set-cookie" not in response.headers

    def test_missing_fields(self):
        client, _ = _setup()

        response = client.post("/api/login", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing email or password"}

    def test_logout_expires_cookie(self):
        client, _ = _setup()
        _login(client)

        response = client.post("/api/logout")

        assert "Max-Age=0" in response.headers["set-cookie"]

    def test_anonymous_me(self):
        client, _ = _setup()
        assert client.get("/api/me").json() == {"user": None}

    def test_profile_requires_session(self):
        client, _ = _setup()
        assert client.get("/api/profile").status_code == 401

    def test_profile_partial_failure(self):
        client, services = _setup()
        services.account_gateway.errors["change_password"] = DomainError("Too common")
        _login(client)

        response = client.post(
            "/api/profile",
            json={
                "current_password": "secret",
                "first_name": "Alicia",
                "new_password": "password",
                "confirm_password": "password",
            },
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Too common",
            "step": "password",
            "applied": ["name"],
        }


class TestCheckoutRoutes:

    def test_product(self):
        client, _ = _setup()

        body = client.get("/api/checkout/product").json()

        assert body["name"] == "Juice"
        assert body["pricing"]["total"] == "$49.99"

    def test_create_and_address(self):
        client, _ = _setup()
        key = client.post("/api/checkout").json()["key"]

        response = client.post(f"/api/checkout/{key}/address", json=ADDRESS)

        assert response.status_code == 200
        assert response.json()["pricing"]["tax"] == "$4.25"
        assert client.get(f"/api/checkout/{key}").json()["state"] == "TAX_READY"

    def test_validation_message_reaches_client(self):
        client, _ = _setup()
        key = client.post("/api/checkout").json()["key"]

        response = client.post(f"/api/checkout/{key}/address", json={**ADDRESS, "region": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Please enter state"}

    def test_step_failure_names_step(self):
        client, services = _setup()
        key = client.post("/api/checkout").json()["key"]
        services.checkout_gateway.errors["update_shipping_address"] = TransportError("boom")

        response = client.post(f"/api/checkout/{key}/address", json=ADDRESS)

        assert response.status_code == 502
        assert response.json() == {
            "error": "Could not reach the store. Please try again.",
            "step": "shipping_address",
            "persistent": False,
        }

    def test_billing_requires_sign_in(self):
        client, _ = _setup()
        key = client.post("/api/checkout").json()["key"]
        client.post(f"/api/checkout/{key}/address", json=ADDRESS)

        response = client.post(f"/api/checkout/{key}/billing", json=BILLING)

        assert response.status_code == 401
        assert response.json() == {"error": "Sign in required to continue"}

    def test_backend_outage_is_not_reported_as_sign_in(self):
        client, services = _setup()
        _login(client)
        key = client.post("/api/checkout").json()["key"]
        client.post(f"/api/checkout/{key}/address", json=ADDRESS)
        services.account_gateway.errors["me"] = TransportError("connection refused")

        response = client.post(f"/api/checkout/{key}/billing", json=BILLING)

        assert response.status_code == 502
        assert response.json() == {"error": "Could not reach the store. Please try again."}

    def test_out_of_order_step(self):
        client, _ = _setup()
        key = client.post("/api/checkout").json()["key"]

        response = client.get(f"/api/checkout/{key}/delivery-methods")

        assert response.status_code == 409

    def test_unknown_checkout(self):
        client, _ = _setup()
        assert client.get("/api/checkout/nope").status_code == 404

    def test_signed_in_purchase(self):
        client, _ = _setup()
        _login(client)
        key = client.post("/api/checkout").json()["key"]

        client.post(f"/api/checkout/{key}/address", json=ADDRESS)
        client.post(f"/api/checkout/{key}/billing", json=BILLING)
        gateway = client.post(f"/api/checkout/{key}/payment-gateway").json()
        client.post(f"/api/checkout/{key}/transaction", json={"payment_method": "pm_card_visa"})
        processed = client.post(f"/api/checkout/{key}/process", json={}).json()
        completed = client.post(f"/api/checkout/{key}/complete").json()

        assert gateway["amount"] == "$54.24"
        assert processed["state"] == "PROCESSED"
        assert completed["order_id"] == "order-1"
        assert client.get(f"/api/checkout/{key}").status_code == 404
