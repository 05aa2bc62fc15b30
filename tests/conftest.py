"""Shared pytest fixtures for flask-checkout tests."""

import httpx
import pytest
from flask import Flask

from flask_checkout import CheckoutConfig, FlaskCheckout
from flask_checkout.config import SANDBOX_BASE_URL

TOKEN_URL = f"{SANDBOX_BASE_URL}/v1/oauth2/token"
ACCESS_TOKEN = "A21AAtest-access-token"


@pytest.fixture
def config():
    """Configuration with sandbox credentials."""
    return CheckoutConfig(client_id="test-client-id", client_secret="test-client-secret")


@pytest.fixture
def app(config):
    """Flask app with the checkout extension and test settings."""
    application = Flask(__name__)
    application.config["TESTING"] = True

    FlaskCheckout(application, config=config)

    yield application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def ext(app):
    """The FlaskCheckout extension instance."""
    return app.extensions["checkout"]


@pytest.fixture
def token_route(respx_mock):
    """Mock the OAuth endpoint to hand out a fixed access token."""
    return respx_mock.post(TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"access_token": ACCESS_TOKEN, "expires_in": 32400})
    )


ORDERS_URL = f"{SANDBOX_BASE_URL}/v2/checkout/orders"

# (gateway path, upstream url, fixed error message)
ENDPOINTS = [
    (
        "/api/token",
        f"{SANDBOX_BASE_URL}/v1/identity/generate-token",
        "Failed to generate client token.",
    ),
    ("/api/orders", ORDERS_URL, "Failed to create order."),
    ("/api/orders/ORDER-1/capture", f"{ORDERS_URL}/ORDER-1/capture", "Failed to capture order."),
    (
        "/api/orders/ORDER-1/authorize",
        f"{ORDERS_URL}/ORDER-1/authorize",
        "Failed to authorize order.",
    ),
    (
        "/orders/AUTH-1/captureAuthorize",
        f"{SANDBOX_BASE_URL}/v2/payments/authorizations/AUTH-1/capture",
        "Failed to capture authorize.",
    ),
]


@pytest.fixture(params=ENDPOINTS, ids=[path for path, _, _ in ENDPOINTS])
def endpoint(request):
    """One ``(path, upstream_url, error_message)`` triple per gateway route."""
    return request.param
