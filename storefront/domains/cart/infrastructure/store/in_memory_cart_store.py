"""
In-memory cart store.

Stands in for the cart module in development and tests. Stored carts are
copied in and out, so callers never share state with the store.
"""

import asyncio
import logging

from storefront.core.domain import IntegrationException, generate_uuid_str
from storefront.domains.cart.application.dto import (
    CartSearchCriteria,
    CartSearchResultDto,
    PaymentMethodDto,
    ShippingRateDto,
    ShoppingCartDto,
)

logger = logging.getLogger(__name__)


class InMemoryCartStore:
    """Dict-backed ICartStore."""

    def __init__(
        self,
        shipping_rates: list[ShippingRateDto] | None = None,
        payment_methods: list[PaymentMethodDto] | None = None,
    ):
        """
        Args:
            shipping_rates: Rates offered to every cart
            payment_methods: Payment methods offered to every cart
        """
        self._carts: dict[str, ShoppingCartDto] = {}
        self._shipping_rates = list(shipping_rates or [])
        self._payment_methods = list(payment_methods or [])
        self._lock = asyncio.Lock()

    @property
    def cart_ids(self) -> list[str]:
        return list(self._carts)

    def set_shipping_rates(self, rates: list[ShippingRateDto]) -> None:
        self._shipping_rates = list(rates)

    def set_payment_methods(self, methods: list[PaymentMethodDto]) -> None:
        self._payment_methods = list(methods)

    async def search_carts(self, criteria: CartSearchCriteria) -> CartSearchResultDto:
        def matches(cart: ShoppingCartDto) -> bool:
            if cart.store_id != criteria.store_id:
                return False
            if criteria.customer_id is not None and cart.customer_id != criteria.customer_id:
                return False
            if criteria.name is not None and (cart.name or "").lower() != criteria.name.lower():
                return False
            if criteria.currency is not None and cart.currency.lower() != criteria.currency.lower():
                return False
            return True

        found = [cart for cart in self._carts.values() if matches(cart)]
        page = found[criteria.skip : criteria.skip + criteria.take]
        return CartSearchResultDto(total_count=len(found), results=[cart.model_copy(deep=True) for cart in page])

    async def get_cart_by_id(self, cart_id: str) -> ShoppingCartDto | None:
        cart = self._carts.get(cart_id)
        return cart.model_copy(deep=True) if cart is not None else None

    async def create_cart(self, cart: ShoppingCartDto) -> ShoppingCartDto:
        async with self._lock:
            stored = self._assign_ids(cart.model_copy(deep=True))
            if stored.id is None:
                stored.id = generate_uuid_str()
            self._carts[stored.id] = stored
        logger.debug(f"Stored new cart {stored.id}")
        return stored.model_copy(deep=True)

    async def update_cart(self, cart: ShoppingCartDto) -> None:
        if cart.id is None or cart.id not in self._carts:
            raise IntegrationException("in_memory_cart_store", f"Cart {cart.id} does not exist")
        async with self._lock:
            self._carts[cart.id] = self._assign_ids(cart.model_copy(deep=True))

    async def delete_carts(self, cart_ids: list[str]) -> None:
        async with self._lock:
            for cart_id in cart_ids:
                self._carts.pop(cart_id, None)

    async def get_available_shipping_rates(self, cart_id: str | None) -> list[ShippingRateDto]:
        return [rate.model_copy(deep=True) for rate in self._shipping_rates]

    async def get_available_payment_methods(self, cart_id: str | None) -> list[PaymentMethodDto]:
        return [method.model_copy(deep=True) for method in self._payment_methods]

    @staticmethod
    def _assign_ids(cart: ShoppingCartDto) -> ShoppingCartDto:
        for part in [*cart.items, *cart.shipments, *cart.payments]:
            if not part.id:
                part.id = generate_uuid_str()
        return cart
