"""
Shared storefront entities.

Store, customer and the per-request work context used by the catalog and cart
domains.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from storefront.domains.catalog.domain.value_objects.response_group import ItemResponseGroup

if TYPE_CHECKING:
    from storefront.domains.cart.domain.entities.cart import Cart
    from storefront.domains.catalog.application.dto import ProductSearchCriteria


@dataclass(frozen=True)
class Address:
    """Postal address used for delivery and billing."""

    first_name: str | None = None
    last_name: str | None = None
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    region_name: str | None = None
    postal_code: str | None = None
    country_code: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass
class Store:
    """Storefront store (a sales channel with its own catalog and currencies)."""

    id: str
    name: str = ""
    default_currency: str = "USD"
    default_language: str = "en-US"
    currencies: list[str] = field(default_factory=list)


@dataclass
class CustomerInfo:
    """
    Customer reference attached to carts.

    Anonymous visitors still carry an id (typically a session-bound id) so
    their cart can be found again; ``is_registered_user`` tells them apart.
    """

    id: str
    user_name: str | None = None
    full_name: str | None = None
    is_registered_user: bool = False

    @classmethod
    def anonymous(cls, customer_id: str) -> "CustomerInfo":
        """Create an anonymous customer reference."""
        return cls(id=customer_id, is_registered_user=False)


@dataclass
class WorkContext:
    """Per-request context: current store, language, currency and customer."""

    store: Store
    language: str
    currency: str
    customer: CustomerInfo | None = None
    current_cart: "Cart | None" = None
    product_response_group: ItemResponseGroup = ItemResponseGroup.ITEM_LARGE
    product_search_criteria: "ProductSearchCriteria | None" = None
