"""Immutable configuration for the checkout gateway."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

SANDBOX_BASE_URL = "https://api-m.sandbox.paypal.com"
DEFAULT_PORT = 8888
DEFAULT_STATIC_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


@dataclass(frozen=True)
class CheckoutConfig:
    """Provider credentials and server settings.

    Build one explicitly, or from any mapping holding the usual keys::

        config = CheckoutConfig.from_env()
        config = CheckoutConfig.from_mapping(app.config)

    Recognised keys:

    ``PAYPAL_CLIENT_ID`` / ``PAYPAL_CLIENT_SECRET``
        Credentials for the client-credentials grant.
    ``PAYPAL_BASE_URL``
        Provider REST root (default: the sandbox endpoint).
    ``PORT``
        Listening port for the standalone server (default: ``8888``).
    ``CHECKOUT_STATIC_FOLDER``
        Directory holding ``index.html`` and the client bundle.
    """

    client_id: str | None = None
    client_secret: str | None = None
    base_url: str = SANDBOX_BASE_URL
    port: int = DEFAULT_PORT
    static_folder: str = DEFAULT_STATIC_FOLDER

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CheckoutConfig":
        base_url = mapping.get("PAYPAL_BASE_URL") or SANDBOX_BASE_URL
        return cls(
            client_id=mapping.get("PAYPAL_CLIENT_ID") or None,
            client_secret=mapping.get("PAYPAL_CLIENT_SECRET") or None,
            base_url=base_url.rstrip("/"),
            port=int(mapping.get("PORT") or DEFAULT_PORT),
            static_folder=mapping.get("CHECKOUT_STATIC_FOLDER") or DEFAULT_STATIC_FOLDER,
        )

    @classmethod
    def from_env(cls) -> "CheckoutConfig":
        """Read the configuration from the process environment."""
        return cls.from_mapping(os.environ)
