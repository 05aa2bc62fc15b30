"""Tests for the index page and the checkout API routes."""

import json

import httpx
from flask import Flask

from flask_checkout import CheckoutConfig, FlaskCheckout
from flask_checkout.config import SANDBOX_BASE_URL

ORDERS_URL = f"{SANDBOX_BASE_URL}/v2/checkout/orders"


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

def test_index_serves_client_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"<div id=\"root\">" in resp.data


def test_index_ignores_query_params(client):
    resp = client.get("/?token=EC-123&PayerID=XYZ")
    assert resp.status_code == 200
    assert resp.mimetype == "text/html"


# ---------------------------------------------------------------------------
# Pass-through
# ---------------------------------------------------------------------------

def test_relays_provider_status_and_body(client, token_route, respx_mock, endpoint):
    path, upstream, _ = endpoint
    body = {"id": "X-1", "links": [{"rel": "self", "href": "https://example.test"}]}
    respx_mock.post(upstream).mock(return_value=httpx.Response(422, json=body))

    resp = client.post(path, json={"cart": []})

    assert resp.status_code == 422
    assert resp.get_json() == body


def test_capture_order_scenario(client, token_route, respx_mock):
    """A completed capture comes back with the provider's 201."""
    respx_mock.post(f"{ORDERS_URL}/ABC123/capture").mock(
        return_value=httpx.Response(201, json={"status": "COMPLETED"})
    )

    resp = client.post("/api/orders/ABC123/capture")

    assert resp.status_code == 201
    assert resp.get_json() == {"status": "COMPLETED"}


def test_create_order_ignores_cart(client, token_route, respx_mock):
    route = respx_mock.post(ORDERS_URL).mock(
        return_value=httpx.Response(201, json={"id": "ORDER-1", "status": "CREATED"})
    )

    resp = client.post(
        "/api/orders",
        json={"cart": [{"id": "SKU-1", "quantity": "7", "price": "3000"}]},
    )

    assert resp.status_code == 201
    sent = json.loads(route.calls.last.request.content)
    assert sent["purchase_units"][0]["amount"] == {"currency_code": "USD", "value": "100"}


def test_create_order_without_body(client, token_route, respx_mock):
    respx_mock.post(ORDERS_URL).mock(return_value=httpx.Response(201, json={"id": "ORDER-2"}))

    resp = client.post("/api/orders")

    assert resp.status_code == 201
    assert resp.get_json() == {"id": "ORDER-2"}


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

def test_missing_credentials_returns_500(respx_mock, endpoint):
    path, _, message = endpoint
    app = Flask(__name__)
    app.config["TESTING"] = True
    FlaskCheckout(app, config=CheckoutConfig())

    resp = app.test_client().post(path, json={"cart": []})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": message}
    assert not respx_mock.calls


def test_upstream_network_error_returns_500(client, token_route, respx_mock, endpoint):
    path, upstream, message = endpoint
    respx_mock.post(upstream).mock(side_effect=httpx.ReadTimeout("timed out"))

    resp = client.post(path, json={"cart": []})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": message}


def test_non_json_upstream_body_returns_500(client, token_route, respx_mock, endpoint):
    path, upstream, message = endpoint
    respx_mock.post(upstream).mock(return_value=httpx.Response(503, text="Service Unavailable"))

    resp = client.post(path, json={"cart": []})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": message}


def test_unexpected_error_returns_500(client, token_route, respx_mock, endpoint, caplog):
    """Errors outside httpx.HTTPError still get the fixed JSON payload."""
    path, upstream, message = endpoint
    respx_mock.post(upstream).mock(side_effect=httpx.StreamClosed())

    resp = client.post(path, json={"cart": []})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": message}
    assert message in caplog.text


def test_order_id_is_encoded_in_upstream_path(client, token_route, respx_mock):
    route = respx_mock.post(f"{ORDERS_URL}/a%3Fb/capture").mock(
        return_value=httpx.Response(201, json={"status": "COMPLETED"})
    )

    resp = client.post("/api/orders/a%3Fb/capture")

    assert resp.status_code == 201
    assert route.calls.last.request.url.raw_path == b"/v2/checkout/orders/a%3Fb/capture"


def test_control_character_in_order_id_stays_in_path(client, token_route, respx_mock):
    route = respx_mock.post(f"{ORDERS_URL}/A%00B/capture").mock(
        return_value=httpx.Response(404, json={"name": "RESOURCE_NOT_FOUND"})
    )

    resp = client.post("/api/orders/A%00B/capture")

    assert resp.status_code == 404
    assert resp.get_json() == {"name": "RESOURCE_NOT_FOUND"}
    assert route.called


def test_token_endpoint_failure_returns_500(client, respx_mock):
    respx_mock.post(f"{SANDBOX_BASE_URL}/v1/oauth2/token").mock(
        side_effect=httpx.ConnectError("name resolution failed")
    )

    resp = client.post("/api/orders/ORDER-1/capture")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to capture order."}


def test_failure_is_logged(app, client, token_route, respx_mock, caplog):
    respx_mock.post(f"{ORDERS_URL}/ORDER-1/authorize").mock(
        return_value=httpx.Response(500, text="<h1>Internal Error</h1>")
    )

    client.post("/api/orders/ORDER-1/authorize")

    assert "Failed to authorize order." in caplog.text
    assert "<h1>Internal Error</h1>" in caplog.text
