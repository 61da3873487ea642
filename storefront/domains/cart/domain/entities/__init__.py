from storefront.domains.cart.domain.entities.cart import Cart, Coupon
from storefront.domains.cart.domain.entities.line_item import LineItem
from storefront.domains.cart.domain.entities.payment import Payment, PaymentMethod
from storefront.domains.cart.domain.entities.quote import QuoteItem, QuoteRequest, QuoteShipmentMethod
from storefront.domains.cart.domain.entities.shipment import Shipment, ShippingMethod

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
]
