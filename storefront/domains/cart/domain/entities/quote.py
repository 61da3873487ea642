"""
Quote request types consumed when a cart is filled from an accepted quote.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.domains.catalog.domain.entities import TierPrice
from storefront.domains.shared.domain import Address


@dataclass
class QuoteItem:
    """Quoted product with its negotiated list price and selected tier."""

    product_id: str
    list_price: Decimal
    selected_tier_price: TierPrice
    name: str | None = None
    sku: str | None = None


@dataclass
class QuoteShipmentMethod:
    shipment_method_code: str
    option_name: str | None = None
    price: Decimal = Decimal("0")


@dataclass
class QuoteRequest:
    """Accepted quote."""

    id: str | None = None
    items: list[QuoteItem] = field(default_factory=list)
    request_shipping_quote: bool = False
    shipping_address: Address | None = None
    billing_address: Address | None = None
    shipment_method: QuoteShipmentMethod | None = None
    grand_total_incl_tax: Decimal = Decimal("0")
