"""Async blueprint for Quart applications.

This module mirrors :mod:`flask_checkout.views` but uses ``async def``
view functions, awaits Quart's coroutine-based request helpers and talks
to the provider through :class:`~flask_checkout.provider.AsyncCheckoutProvider`.

It is selected automatically by :meth:`~flask_checkout.FlaskCheckout.init_app`
when the application is a :class:`quart.Quart` instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Awaitable

from flask_checkout.provider import ProviderResult

if TYPE_CHECKING:
    from flask_checkout import FlaskCheckout


def create_async_blueprint(ext: "FlaskCheckout"):
    """Return a Quart Blueprint pre-configured with the extension instance."""
    try:
        from quart import Blueprint, current_app, jsonify, request, send_from_directory
    except ImportError as exc:  # pragma: no cover
        raise ImportError(
            "quart is required for flask_checkout.quart_views. "
            "Install it with: pip install 'flask-checkout-gateway[quart]'"
        ) from exc

    bp = Blueprint("checkout", __name__)

    # Each app keeps the provider it was initialised with.
    provider = ext.provider
    static_folder = ext.config.static_folder

    async def relay(pending: Awaitable[ProviderResult], error_message: str):
        try:
            result = await pending
        except Exception as exc:  # noqa: BLE001
            current_app.logger.error("%s %s", error_message, exc)
            return jsonify({"error": error_message}), 500

        if not result.ok:
            current_app.logger.error("%s %s", error_message, result.text)
            return jsonify({"error": error_message}), 500
        return jsonify(result.body), result.status_code

    # ------------------------------------------------------------------
    # Client bundle
    # ------------------------------------------------------------------

    @bp.route("/")
    async def index():
        """Serve the client entry page."""
        return await send_from_directory(static_folder, "index.html")

    # ------------------------------------------------------------------
    # Client token
    # ------------------------------------------------------------------

    @bp.route("/api/token", methods=["POST"])
    async def client_token():
        return await relay(
            provider.generate_client_token(), "Failed to generate client token."
        )

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    @bp.route("/api/orders", methods=["POST"])
    async def create_order():
        data = await request.get_json(silent=True) or {}
        cart = data.get("cart") if isinstance(data, dict) else None
        return await relay(provider.create_order(cart), "Failed to create order.")

    @bp.route("/api/orders/<order_id>/capture", methods=["POST"])
    async def capture_order(order_id: str):
        return await relay(provider.capture_order(order_id), "Failed to capture order.")

    @bp.route("/api/orders/<order_id>/authorize", methods=["POST"])
    async def authorize_order(order_id: str):
        return await relay(provider.authorize_order(order_id), "Failed to authorize order.")

    # ------------------------------------------------------------------
    # Authorizations
    # ------------------------------------------------------------------

    @bp.route("/orders/<authorization_id>/captureAuthorize", methods=["POST"])
    async def capture_authorization(authorization_id: str):
        return await relay(
            provider.capture_authorization(authorization_id),
            "Failed to capture authorize.",
        )

    return bp
