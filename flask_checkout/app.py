"""Standalone checkout server.

Run with::

    flask-checkout

or, during development::

    flask --app flask_checkout.app run --port 8888

Credentials are read from ``PAYPAL_CLIENT_ID`` and ``PAYPAL_CLIENT_SECRET``
(a ``.env`` file in the working directory is honoured) and the listening
port from ``PORT``.
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from flask import Flask

from flask_checkout import CheckoutConfig, FlaskCheckout


def create_app(config: CheckoutConfig | None = None) -> Flask:
    """Build a Flask app serving the client bundle and the checkout API."""
    if config is None:
        config = CheckoutConfig.from_env()

    # Static assets are served from the site root.
    app = Flask(__name__, static_folder=config.static_folder, static_url_path="")
    FlaskCheckout(app, config=config)
    return app


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    config = CheckoutConfig.from_env()
    app = create_app(config)
    app.logger.info("Server listening at http://localhost:%s/", config.port)
    app.run(port=config.port)


if __name__ == "__main__":
    main()
