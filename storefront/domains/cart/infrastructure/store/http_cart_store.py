"""
Cart Module HTTP Client

Async ICartStore over the cart module REST API.

Endpoints:
    - POST   /api/carts/search                          - Search carts
    - GET    /api/carts/{id}                            - Get cart
    - POST   /api/carts                                 - Create cart
    - PUT    /api/carts                                 - Update cart
    - DELETE /api/carts?ids=...                         - Delete carts
    - GET    /api/carts/{id}/availableShippingRates     - Shipping rates
    - GET    /api/carts/{id}/availablePaymentMethods    - Payment methods
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from storefront.core.domain import IntegrationException
from storefront.domains.cart.application.dto import (
    CartSearchCriteria,
    CartSearchResultDto,
    PaymentMethodDto,
    ShippingRateDto,
    ShoppingCartDto,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "cart_module"

# Path segment used for a cart that has not been stored yet
TRANSIENT_CART_ID = "transient"


class HttpCartStore:
    """
    Async HTTP client for the cart module.

    Transport and HTTP errors, and responses that do not match the expected
    schema, are raised as IntegrationException.

    Example:
        async with HttpCartStore("https://commerce.example.com", api_key="...") as store:
            result = await store.search_carts(CartSearchCriteria(store_id="electronics", customer_id="c-1"))
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Cart module base URL
            api_key: Sent as the ``api_key`` header when set
            timeout_seconds: Request timeout
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HttpCartStore:
        self._get_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        """Get the async client, creating it on first use."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["api_key"] = self.api_key
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"Cart module {method} {path} failed with HTTP {e.response.status_code}")
            raise IntegrationException(
                SERVICE_NAME, f"Cart module returned HTTP {e.response.status_code} for {method} {path}", e
            ) from e
        except httpx.TimeoutException as e:
            raise IntegrationException(SERVICE_NAME, f"Cart module request timed out: {method} {path}", e) from e
        except httpx.RequestError as e:
            raise IntegrationException(SERVICE_NAME, f"Cart module connection error: {e}", e) from e

    @staticmethod
    def _parse(model: Any, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise IntegrationException(SERVICE_NAME, f"Unexpected cart module response for {model.__name__}", e) from e

    # =========================================================================
    # Carts
    # =========================================================================

    async def search_carts(self, criteria: CartSearchCriteria) -> CartSearchResultDto:
        logger.debug(f"Searching carts: store={criteria.store_id} customer={criteria.customer_id}")
        payload = criteria.model_dump(mode="json", by_alias=True)
        response = await self._request("POST", "/api/carts/search", json=payload)
        return self._parse(CartSearchResultDto, response.json())

    async def get_cart_by_id(self, cart_id: str) -> ShoppingCartDto | None:
        client = self._get_client()
        try:
            response = await client.get(f"/api/carts/{cart_id}")
        except httpx.RequestError as e:
            raise IntegrationException(SERVICE_NAME, f"Cart module connection error: {e}", e) from e

        if response.status_code in (204, 404) or not response.content:
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise IntegrationException(
                SERVICE_NAME, f"Cart module returned HTTP {response.status_code} for GET cart {cart_id}", e
            ) from e
        return self._parse(ShoppingCartDto, response.json())

    async def create_cart(self, cart: ShoppingCartDto) -> ShoppingCartDto:
        response = await self._request("POST", "/api/carts", json=cart.model_dump(mode="json", by_alias=True))
        created = self._parse(ShoppingCartDto, response.json())
        logger.info(f"Cart module created cart {created.id}")
        return created

    async def update_cart(self, cart: ShoppingCartDto) -> None:
        await self._request("PUT", "/api/carts", json=cart.model_dump(mode="json", by_alias=True))

    async def delete_carts(self, cart_ids: list[str]) -> None:
        if not cart_ids:
            return
        await self._request("DELETE", "/api/carts", params=[("ids", cart_id) for cart_id in cart_ids])

    # =========================================================================
    # Available methods
    # =========================================================================

    async def get_available_shipping_rates(self, cart_id: str | None) -> list[ShippingRateDto]:
        response = await self._request("GET", f"/api/carts/{cart_id or TRANSIENT_CART_ID}/availableShippingRates")
        return [self._parse(ShippingRateDto, item) for item in response.json() or []]

    async def get_available_payment_methods(self, cart_id: str | None) -> list[PaymentMethodDto]:
        response = await self._request("GET", f"/api/carts/{cart_id or TRANSIENT_CART_ID}/availablePaymentMethods")
        return [self._parse(PaymentMethodDto, item) for item in response.json() or []]
