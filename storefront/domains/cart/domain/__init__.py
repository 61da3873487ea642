"""
Cart Domain Layer

Cart aggregate, its priced parts and validation errors.
"""

from storefront.domains.cart.domain.entities import (
    Cart,
    Coupon,
    LineItem,
    Payment,
    PaymentMethod,
    QuoteItem,
    QuoteRequest,
    QuoteShipmentMethod,
    Shipment,
    ShippingMethod,
)
from storefront.domains.cart.domain.events import UserLoginEvent
from storefront.domains.cart.domain.value_objects import PriceError, QuantityError, UnavailableError, ValidationError

__all__ = [
    "Cart",
    "Coupon",
    "LineItem",
    "Payment",
    "PaymentMethod",
    "QuoteItem",
    "QuoteRequest",
    "QuoteShipmentMethod",
    "Shipment",
    "ShippingMethod",
    "UserLoginEvent",
    "PriceError",
    "QuantityError",
    "UnavailableError",
    "ValidationError",
]
