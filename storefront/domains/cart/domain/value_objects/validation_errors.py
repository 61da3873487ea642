"""
Cart validation errors.

Validation problems are data, not exceptions: each pass of the cart
validation clears and re-attaches them to line items and shipments.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.core.domain import ValueObject


@dataclass(frozen=True)
class ValidationError(ValueObject):
    """Base class of cart validation errors."""

    @property
    def error_code(self) -> str:
        return self.__class__.__name__.removesuffix("Error").upper()


@dataclass(frozen=True)
class UnavailableError(ValidationError):
    """Product (or shipping method) is no longer available."""


@dataclass(frozen=True)
class QuantityError(ValidationError):
    """Requested quantity exceeds available stock."""

    available_quantity: int = 0


@dataclass(frozen=True)
class PriceError(ValidationError):
    """Current price differs from the price stored on the cart."""

    old_price: Decimal = Decimal("0")
    old_price_with_tax: Decimal = Decimal("0")
    new_price: Decimal = Decimal("0")
    new_price_with_tax: Decimal = Decimal("0")
