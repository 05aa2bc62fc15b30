"""Quart async app exposing the checkout API.

Requires the quart extra::

    pip install "flask-checkout-gateway[quart]"

Run with::

    PAYPAL_CLIENT_ID=... PAYPAL_CLIENT_SECRET=... python examples/quart_app.py

Then use the same endpoints as the Flask version:

    curl -X POST http://localhost:5000/api/orders \\
         -H "Content-Type: application/json" \\
         -d '{"cart": []}'

    curl -X POST http://localhost:5000/api/orders/ORDER_ID/authorize

    curl -X POST http://localhost:5000/orders/AUTHORIZATION_ID/captureAuthorize
"""

from quart import Quart

from flask_checkout import FlaskCheckout

app = Quart(__name__)

# FlaskCheckout detects Quart and registers the async blueprint automatically
ext = FlaskCheckout(app)

if __name__ == "__main__":
    app.run(debug=True)
