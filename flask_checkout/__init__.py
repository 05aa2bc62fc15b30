"""flask_checkout – Flask/Quart extension proxying PayPal checkout calls."""

from __future__ import annotations

import os

from flask_checkout.config import CheckoutConfig
from flask_checkout.provider import (
    AsyncCheckoutProvider,
    CheckoutError,
    CheckoutProvider,
    MissingAccessTokenError,
)
from flask_checkout.version import __version__
from flask_checkout.views import create_blueprint

__all__ = [
    "CheckoutConfig",
    "CheckoutError",
    "FlaskCheckout",
    "MissingAccessTokenError",
    "__version__",
]

_ENV_KEYS = ("PAYPAL_CLIENT_ID", "PAYPAL_CLIENT_SECRET", "PAYPAL_BASE_URL", "CHECKOUT_STATIC_FOLDER")


def _is_quart_app(app) -> bool:
    """Return ``True`` when *app* is a :class:`quart.Quart` instance."""
    try:
        from quart import Quart

        return isinstance(app, Quart)
    except ImportError:
        return False


class FlaskCheckout:
    """Flask/Quart extension that exposes the checkout API on an application.

    Usage – application factory pattern::

        from flask import Flask
        from flask_checkout import FlaskCheckout

        checkout = FlaskCheckout()

        def create_app():
            app = Flask(__name__)
            checkout.init_app(app)
            return app

    Usage – explicit configuration::

        from flask_checkout import CheckoutConfig, FlaskCheckout

        config = CheckoutConfig(client_id="...", client_secret="...")
        ext = FlaskCheckout(app, config=config)

    Usage – with Quart (async)::

        from quart import Quart

        app = Quart(__name__)
        ext = FlaskCheckout(app)   # async blueprint selected automatically

    Configuration keys (set on ``app.config``, defaulting to the
    environment variable of the same name):

    ``PAYPAL_CLIENT_ID`` / ``PAYPAL_CLIENT_SECRET``
        Provider credentials.
    ``PAYPAL_BASE_URL``
        Provider REST root (default: the sandbox endpoint).
    ``CHECKOUT_STATIC_FOLDER``
        Directory holding the client ``index.html``.
    ``CHECKOUT_URL_PREFIX``
        URL prefix for the blueprint (default: ``""``).

    A :class:`CheckoutConfig` passed to the constructor or to
    :meth:`init_app` takes precedence over these keys.
    """

    def __init__(self, app=None, *, config: CheckoutConfig | None = None) -> None:
        # Only a constructor-supplied config is shared between apps.
        self._default_config = config
        self._config: CheckoutConfig | None = config
        self._provider: CheckoutProvider | AsyncCheckoutProvider | None = None

        if app is not None:
            self.init_app(app)

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def init_app(self, app, *, config: CheckoutConfig | None = None) -> None:
        """Initialise the extension against *app* (Flask or Quart)."""
        for key in _ENV_KEYS:
            app.config.setdefault(key, os.environ.get(key))
        app.config.setdefault("CHECKOUT_URL_PREFIX", "")

        if config is None:
            config = self._default_config
        if config is None:
            config = CheckoutConfig.from_mapping(app.config)
        self._config = config

        if _is_quart_app(app):
            from flask_checkout.quart_views import create_async_blueprint

            self._provider = AsyncCheckoutProvider(self._config)
            blueprint = create_async_blueprint(self)
        else:
            self._provider = CheckoutProvider(self._config)
            blueprint = create_blueprint(self)

        url_prefix = app.config["CHECKOUT_URL_PREFIX"] or None
        app.register_blueprint(blueprint, url_prefix=url_prefix)

        app.extensions["checkout"] = self

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> CheckoutConfig:
        """The :class:`CheckoutConfig` the extension was initialised with."""
        if self._config is None:
            raise RuntimeError(
                "FlaskCheckout extension not initialised. Call init_app(app) first."
            )
        return self._config

    @property
    def provider(self) -> CheckoutProvider | AsyncCheckoutProvider:
        """The provider client (async flavour for Quart apps)."""
        if self._provider is None:
            raise RuntimeError(
                "FlaskCheckout extension not initialised. Call init_app(app) first."
            )
        return self._provider
