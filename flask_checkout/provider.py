"""HTTP clients for the PayPal REST API.

:class:`CheckoutProvider` is used by Flask applications and
:class:`AsyncCheckoutProvider` by Quart applications.  Both fetch a fresh
OAuth access token before every operation and hand back the provider's
answer as a :data:`ProviderResult`::

    provider = CheckoutProvider(CheckoutConfig.from_env())
    result = provider.capture_order("5O190127TN364715T")
    if result.ok:
        print(result.status_code, result.body)
    else:
        print("non-JSON answer:", result.text)

Order and authorization IDs are percent-encoded into the upstream path.
Network failures surface as :class:`httpx.HTTPError`; a missing access
token surfaces as :class:`MissingAccessTokenError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Union
from urllib.parse import quote

import httpx

from flask_checkout.config import CheckoutConfig

logger = logging.getLogger(__name__)

ORDER_INTENT = "CAPTURE"
ORDER_CURRENCY = "USD"
ORDER_AMOUNT = "100"


class CheckoutError(Exception):
    """Base class for gateway errors."""


class MissingAccessTokenError(CheckoutError):
    """Raised when no access token could be obtained for an outbound call."""


@dataclass(frozen=True)
class ProviderResponse:
    """Provider answer whose body parsed as JSON."""

    body: Any
    status_code: int
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class ProviderFailure:
    """Provider answer whose body was not JSON; *text* holds the raw body."""

    text: str
    status_code: int
    ok: ClassVar[bool] = False


ProviderResult = Union[ProviderResponse, ProviderFailure]


def normalize_response(response: httpx.Response) -> ProviderResult:
    """Return the JSON body and status of *response*, or its raw text on parse failure."""
    try:
        body = response.json()
    except ValueError:
        return ProviderFailure(text=response.text, status_code=response.status_code)
    return ProviderResponse(body=body, status_code=response.status_code)


def order_payload() -> dict[str, Any]:
    """Payload for order creation.

    The charge is fixed; the shopping cart sent by the browser is not
    used to compute it.
    """
    return {
        "intent": ORDER_INTENT,
        "purchase_units": [
            {
                "amount": {
                    "currency_code": ORDER_CURRENCY,
                    "value": ORDER_AMOUNT,
                },
            },
        ],
    }


def _extract_token(response: httpx.Response) -> str | None:
    data = response.json()
    if not isinstance(data, dict):
        return None
    return data.get("access_token")


def _bearer_headers(access_token: str | None, **extra: str) -> dict[str, str]:
    if not access_token:
        raise MissingAccessTokenError("no access token available for the provider call")
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {access_token}",
    }
    headers.update(extra)
    return headers


def _log_cart(cart: Any) -> None:
    logger.info(
        "shopping cart information passed from the frontend createOrder() callback: %r",
        cart,
    )


class _BaseProvider:
    """Endpoint paths shared by the sync and async clients."""

    TOKEN_PATH = "/v1/oauth2/token"
    CLIENT_TOKEN_PATH = "/v1/identity/generate-token"
    ORDERS_PATH = "/v2/checkout/orders"

    def __init__(self, config: CheckoutConfig) -> None:
        self.config = config

    @property
    def _basic_auth(self) -> tuple[str, str]:
        if not self.config.has_credentials:
            raise CheckoutError("MISSING_API_CREDENTIALS")
        return (self.config.client_id, self.config.client_secret)

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _capture_order_url(self, order_id: str) -> str:
        return self._url(f"{self.ORDERS_PATH}/{quote(order_id, safe='')}/capture")

    def _authorize_order_url(self, order_id: str) -> str:
        return self._url(f"{self.ORDERS_PATH}/{quote(order_id, safe='')}/authorize")

    def _capture_authorization_url(self, authorization_id: str) -> str:
        return self._url(f"/v2/payments/authorizations/{quote(authorization_id, safe='')}/capture")


class CheckoutProvider(_BaseProvider):
    """Blocking client, one fresh :class:`httpx.Client` per outbound call."""

    def _post(self, url: str, **kwargs: Any) -> httpx.Response:
        with httpx.Client() as client:
            return client.post(url, **kwargs)

    def generate_access_token(self) -> str | None:
        """Obtain an OAuth 2.0 access token, or ``None`` when that fails.

        The failure is logged and not raised.
        """
        try:
            response = self._post(
                self._url(self.TOKEN_PATH),
                data={"grant_type": "client_credentials"},
                auth=self._basic_auth,
            )
            return _extract_token(response)
        except (CheckoutError, httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to generate Access Token: %s", exc)
            return None

    def _call(self, url: str, **kwargs: Any) -> ProviderResult:
        headers = _bearer_headers(self.generate_access_token(), **kwargs.pop("headers", {}))
        return normalize_response(self._post(url, headers=headers, **kwargs))

    def generate_client_token(self) -> ProviderResult:
        """Generate a client token for rendering the hosted card fields."""
        return self._call(
            self._url(self.CLIENT_TOKEN_PATH),
            headers={"Accept-Language": "en_US"},
        )

    def create_order(self, cart: Any = None) -> ProviderResult:
        """Create an order to start the transaction."""
        _log_cart(cart)
        return self._call(self._url(self.ORDERS_PATH), json=order_payload())

    def capture_order(self, order_id: str) -> ProviderResult:
        return self._call(self._capture_order_url(order_id))

    def authorize_order(self, order_id: str) -> ProviderResult:
        return self._call(self._authorize_order_url(order_id))

    def capture_authorization(self, authorization_id: str) -> ProviderResult:
        """Capture a previously authorized payment, by ID."""
        return self._call(self._capture_authorization_url(authorization_id))


class AsyncCheckoutProvider(_BaseProvider):
    """Coroutine-based twin of :class:`CheckoutProvider` for Quart apps."""

    async def _post(self, url: str, **kwargs: Any) -> httpx.Response:
        async with httpx.AsyncClient() as client:
            return await client.post(url, **kwargs)

    async def generate_access_token(self) -> str | None:
        try:
            response = await self._post(
                self._url(self.TOKEN_PATH),
                data={"grant_type": "client_credentials"},
                auth=self._basic_auth,
            )
            return _extract_token(response)
        except (CheckoutError, httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to generate Access Token: %s", exc)
            return None

    async def _call(self, url: str, **kwargs: Any) -> ProviderResult:
        access_token = await self.generate_access_token()
        headers = _bearer_headers(access_token, **kwargs.pop("headers", {}))
        return normalize_response(await self._post(url, headers=headers, **kwargs))

    async def generate_client_token(self) -> ProviderResult:
        return await self._call(
            self._url(self.CLIENT_TOKEN_PATH),
            headers={"Accept-Language": "en_US"},
        )

    async def create_order(self, cart: Any = None) -> ProviderResult:
        _log_cart(cart)
        return await self._call(self._url(self.ORDERS_PATH), json=order_payload())

    async def capture_order(self, order_id: str) -> ProviderResult:
        return await self._call(self._capture_order_url(order_id))

    async def authorize_order(self, order_id: str) -> ProviderResult:
        return await self._call(self._authorize_order_url(order_id))

    async def capture_authorization(self, authorization_id: str) -> ProviderResult:
        return await self._call(self._capture_authorization_url(authorization_id))
