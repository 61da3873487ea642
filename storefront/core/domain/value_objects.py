"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity

    Example:
        ```python
        @dataclass(frozen=True)
        class QuantityError(ValueObject):
            available_quantity: int

            def _validate(self) -> None:
                if self.available_quantity < 0:
                    raise ValueError("Available quantity cannot be negative")
        ```
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Coerce a numeric value to Decimal (None becomes zero)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(amount: Decimal | float | int) -> Decimal:
    """Round an amount to cents using half-up rounding."""
    return to_decimal(amount).quantize(CENT, ROUND_HALF_UP)
