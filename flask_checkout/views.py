"""Blueprint with the index page and the checkout API routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from flask import Blueprint, current_app, jsonify, request, send_from_directory

from flask_checkout.provider import ProviderResult

if TYPE_CHECKING:
    from flask_checkout import FlaskCheckout


def relay(call: Callable[[], ProviderResult], error_message: str):
    """Run *call* and turn its result into a Flask response.

    The provider's JSON body and status code are passed through unchanged.
    Any failure is logged and answered with HTTP 500 and *error_message*.
    """
    try:
        result = call()
    except Exception as exc:  # noqa: BLE001
        current_app.logger.error("%s %s", error_message, exc)
        return jsonify({"error": error_message}), 500

    if not result.ok:
        current_app.logger.error("%s %s", error_message, result.text)
        return jsonify({"error": error_message}), 500
    return jsonify(result.body), result.status_code


def create_blueprint(ext: "FlaskCheckout") -> Blueprint:
    """Return a Blueprint pre-configured with the extension instance."""

    bp = Blueprint("checkout", __name__)

    # Each app keeps the provider it was initialised with.
    provider = ext.provider
    static_folder = ext.config.static_folder

    # ------------------------------------------------------------------
    # Client bundle
    # ------------------------------------------------------------------

    @bp.route("/")
    def index():
        """Serve the client entry page."""
        return send_from_directory(static_folder, "index.html")

    # ------------------------------------------------------------------
    # Client token
    # ------------------------------------------------------------------

    @bp.route("/api/token", methods=["POST"])
    def client_token():
        """Return a client token for the hosted card fields."""
        return relay(provider.generate_client_token, "Failed to generate client token.")

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    @bp.route("/api/orders", methods=["POST"])
    def create_order():
        """Create an order.  Accepts a JSON body ``{"cart": ...}``."""
        data = request.get_json(silent=True) or {}
        cart = data.get("cart") if isinstance(data, dict) else None
        return relay(lambda: provider.create_order(cart), "Failed to create order.")

    @bp.route("/api/orders/<order_id>/capture", methods=["POST"])
    def capture_order(order_id: str):
        return relay(lambda: provider.capture_order(order_id), "Failed to capture order.")

    @bp.route("/api/orders/<order_id>/authorize", methods=["POST"])
    def authorize_order(order_id: str):
        return relay(lambda: provider.authorize_order(order_id), "Failed to authorize order.")

    # ------------------------------------------------------------------
    # Authorizations
    # ------------------------------------------------------------------

    @bp.route("/orders/<authorization_id>/captureAuthorize", methods=["POST"])
    def capture_authorization(authorization_id: str):
        """Capture a previously authorized payment."""
        return relay(
            lambda: provider.capture_authorization(authorization_id),
            "Failed to capture authorize.",
        )

    return bp
