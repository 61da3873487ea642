"""
Tax types.

Taxable objects describe themselves as tax lines; the tax service answers
with one rate per line, matched back by line id and line type.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Protocol, runtime_checkable

from storefront.core.domain import ValueObject, to_decimal
from storefront.domains.shared.domain import Address


class TaxLineType(str, Enum):
    ITEM = "item"
    SHIPMENT = "shipment"
    PAYMENT = "payment"


@dataclass(frozen=True)
class TaxLine(ValueObject):
    """
    Taxable amount.

    ``amount`` is the taxable total of the line (after discounts), ``price``
    the unit price it was derived from.
    """

    id: str
    line_type: TaxLineType
    code: str | None = None
    name: str | None = None
    quantity: int = 1
    amount: Decimal = Decimal("0")
    price: Decimal = Decimal("0")
    tax_type: str | None = None

    def _validate(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "price", to_decimal(self.price))


@dataclass(frozen=True)
class TaxRate(ValueObject):
    """Tax computed for one line: ``rate`` is the tax amount, ``percent_rate`` the fraction (0.2 = 20%)."""

    line_id: str
    line_type: TaxLineType
    rate: Decimal = Decimal("0")
    percent_rate: Decimal = Decimal("0")

    def _validate(self) -> None:
        object.__setattr__(self, "rate", to_decimal(self.rate))
        object.__setattr__(self, "percent_rate", to_decimal(self.percent_rate))

    def matches(self, line_id: str | None, line_type: TaxLineType) -> bool:
        return line_id is not None and self.line_id == line_id and self.line_type == line_type


@dataclass
class TaxEvaluationContext:
    """Snapshot the tax service evaluates"""

    store_id: str
    currency: str
    customer_id: str | None = None
    lines: list[TaxLine] = field(default_factory=list)
    address: Address | None = None


@runtime_checkable
class ITaxable(Protocol):
    """Anything tax rates can be applied to."""

    def apply_tax_rates(self, rates: list[TaxRate]) -> None:
        """Set tax fields from the rates matching this object's lines"""
        ...
