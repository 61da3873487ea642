"""
Product Entity for the Catalog Domain

Products are owned by the remote catalog; the storefront enriches them with
optional facets (prices, inventory, vendor, associations) on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from storefront.core.domain import Entity, ValueObject, round_money, to_decimal

if TYPE_CHECKING:
    from storefront.domains.catalog.domain.entities.category import Category
    from storefront.domains.catalog.domain.entities.vendor import Vendor


@dataclass(frozen=True)
class TierPrice(ValueObject):
    """Price applicable from a quantity breakpoint upwards."""

    price: Decimal
    quantity: int = 1
    tax_percent_rate: Decimal = Decimal("0")

    def _validate(self) -> None:
        object.__setattr__(self, "price", to_decimal(self.price))
        object.__setattr__(self, "tax_percent_rate", to_decimal(self.tax_percent_rate))
        if self.price < 0:
            raise ValueError("Tier price cannot be negative")
        if self.quantity < 1:
            raise ValueError("Tier quantity must be >= 1")

    @property
    def price_with_tax(self) -> Decimal:
        return round_money(self.price * (1 + self.tax_percent_rate))


@dataclass
class ProductPrice:
    """
    Evaluated price of a product in one currency.

    ``tier_prices`` is the quantity schedule; when it is empty the sale price
    (or the list price) applies to every quantity.
    """

    currency: str
    list_price: Decimal = Decimal("0")
    sale_price: Decimal | None = None
    tier_prices: list[TierPrice] = field(default_factory=list)
    tax_percent_rate: Decimal = Decimal("0")

    def get_tier_price(self, quantity: int) -> TierPrice:
        """
        Get the tier price for a quantity.

        Args:
            quantity: Requested quantity (values below 1 are treated as 1)

        Returns:
            The tier with the largest breakpoint not above ``quantity``
        """
        quantity = max(quantity, 1)
        applicable = [tier for tier in self.tier_prices if tier.quantity <= quantity]
        if applicable:
            return max(applicable, key=lambda tier: tier.quantity)

        base = self.sale_price if self.sale_price is not None else self.list_price
        return TierPrice(price=base, quantity=1, tax_percent_rate=self.tax_percent_rate)


@dataclass
class Inventory:
    """Stock snapshot of a product."""

    product_id: str
    in_stock_quantity: int | None = None
    reserved_quantity: int | None = None
    allow_backorder: bool = False

    @property
    def available_quantity(self) -> int | None:
        """In-stock minus reserved; None when stock is unknown."""
        if self.in_stock_quantity is None:
            return None
        return self.in_stock_quantity - (self.reserved_quantity or 0)


@dataclass
class ProductAssociation:
    """Link to another product (accessory, related item...)."""

    type: str
    product_id: str
    priority: int = 0
    product: Product | None = None


@dataclass
class CategoryAssociation:
    """Link to a category."""

    type: str
    category_id: str
    priority: int = 0
    category: Category | None = None


@dataclass(eq=False)
class Product(Entity[str]):
    """
    Catalog product.

    Example:
        ```python
        product = Product(
            id="p-1",
            sku="TSHIRT-RED-M",
            name="Red T-Shirt",
            price=ProductPrice(currency="USD", list_price=Decimal("20"), sale_price=Decimal("18")),
        )
        product.price.get_tier_price(3).price  # Decimal("18")
        ```
    """

    sku: str | None = None
    name: str = ""
    is_active: bool = True
    is_buyable: bool = True
    track_inventory: bool = False
    price: ProductPrice | None = None
    inventory: Inventory | None = None
    vendor_id: str | None = None
    vendor: Vendor | None = None
    variations: list[Product] = field(default_factory=list)
    associations: list[ProductAssociation | CategoryAssociation] = field(default_factory=list)
    outline: str | None = None
    tax_type: str | None = None
    image_url: str | None = None

    @property
    def is_available(self) -> bool:
        """Active and buyable."""
        return self.is_active and self.is_buyable

    def with_variations(self) -> list[Product]:
        """This product followed by its variations."""
        return [self, *self.variations]
