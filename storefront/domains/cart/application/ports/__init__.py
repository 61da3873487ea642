"""
Cart Application Ports

The remote cart store: durable cart CRUD plus the shipping rates and payment
methods available to a cart.
"""

from typing import Protocol, runtime_checkable

from storefront.domains.cart.application.dto import (
    CartSearchCriteria,
    CartSearchResultDto,
    PaymentMethodDto,
    ShippingRateDto,
    ShoppingCartDto,
)


@runtime_checkable
class ICartStore(Protocol):
    """Remote cart store"""

    async def search_carts(self, criteria: CartSearchCriteria) -> CartSearchResultDto:
        """Search carts by store/customer/name/currency"""
        ...

    async def get_cart_by_id(self, cart_id: str) -> ShoppingCartDto | None:
        """Get a cart by id"""
        ...

    async def create_cart(self, cart: ShoppingCartDto) -> ShoppingCartDto:
        """Create a cart; returns it with its assigned id"""
        ...

    async def update_cart(self, cart: ShoppingCartDto) -> None:
        """Replace a stored cart"""
        ...

    async def delete_carts(self, cart_ids: list[str]) -> None:
        """Delete carts by id"""
        ...

    async def get_available_shipping_rates(self, cart_id: str | None) -> list[ShippingRateDto]:
        """Shipping rates available for a cart"""
        ...

    async def get_available_payment_methods(self, cart_id: str | None) -> list[PaymentMethodDto]:
        """Payment methods available for a cart"""
        ...


__all__ = ["ICartStore"]
