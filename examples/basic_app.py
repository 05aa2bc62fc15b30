"""Basic Flask app exposing the checkout API.

Run with::

    PAYPAL_CLIENT_ID=... PAYPAL_CLIENT_SECRET=... python examples/basic_app.py

Then use curl:

    # Client token for the hosted card fields
    curl -X POST http://localhost:5000/api/token

    # Create an order (the cart is logged, the charge is fixed)
    curl -X POST http://localhost:5000/api/orders \\
         -H "Content-Type: application/json" \\
         -d '{"cart": [{"id": "SKU-1", "quantity": "1"}]}'

    # Capture it (replace ORDER_ID with a real one)
    curl -X POST http://localhost:5000/api/orders/ORDER_ID/capture
"""

from flask import Flask
from flask_checkout import FlaskCheckout

app = Flask(__name__)
app.config["CHECKOUT_URL_PREFIX"] = ""

# Credentials come from PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET
ext = FlaskCheckout(app)

if __name__ == "__main__":
    app.run(debug=True)
