"""
Line Item Entity for the Cart Domain
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.core.domain import Entity, round_money
from storefront.domains.cart.domain.services import collect_discounts, find_tax_rate
from storefront.domains.cart.domain.value_objects import ValidationError
from storefront.domains.catalog.domain.entities import Product, TierPrice
from storefront.domains.marketing.domain import Discount, ProductPromoEntry, PromotionReward, RewardType
from storefront.domains.tax.domain import TaxLine, TaxLineType, TaxRate


@dataclass(eq=False)
class LineItem(Entity[str]):
    """
    Cart line for one product.

    Prices are unit prices; ``discount_amount`` is the discount per unit.
    Read-only lines (quote items) keep their negotiated prices and quantity.

    Invariant: ``list_price >= sale_price`` after every reprice.
    """

    product_id: str = ""
    sku: str | None = None
    name: str = ""
    quantity: int = 1
    currency: str = "USD"
    language: str | None = None
    list_price: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    discounts: list[Discount] = field(default_factory=list)
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None
    image_url: str | None = None
    is_read_only: bool = False
    is_valid: bool = True
    validation_errors: list[ValidationError] = field(default_factory=list)
    product: Product | None = None

    @classmethod
    def from_product(
        cls, product: Product, currency: str, language: str | None = None, quantity: int = 1
    ) -> LineItem:
        """Build a transient line item priced at the product's tier price for ``quantity``."""
        item = cls(
            product_id=product.id or "",
            sku=product.sku,
            name=product.name,
            quantity=quantity,
            currency=currency,
            language=language,
            tax_type=product.tax_type,
            image_url=product.image_url,
            product=product,
        )
        if product.price is not None:
            item.list_price = product.price.list_price
            item.tax_percent_rate = product.price.tax_percent_rate
            item.reprice(product.price.get_tier_price(quantity))
        return item

    # Derived prices

    @property
    def placed_price(self) -> Decimal:
        return max(self.sale_price - self.discount_amount, Decimal("0"))

    @property
    def extended_price(self) -> Decimal:
        return round_money(self.placed_price * self.quantity)

    @property
    def discount_total(self) -> Decimal:
        return round_money(self.discount_amount * self.quantity)

    @property
    def list_price_with_tax(self) -> Decimal:
        return round_money(self.list_price * (1 + self.tax_percent_rate))

    @property
    def sale_price_with_tax(self) -> Decimal:
        return round_money(self.sale_price * (1 + self.tax_percent_rate))

    @property
    def extended_price_with_tax(self) -> Decimal:
        return self.extended_price + self.tax_total

    @property
    def tax_line_id(self) -> str:
        return self.id or self.product_id

    # Pricing

    def reprice(self, tier_price: TierPrice) -> None:
        """Take the sale price from a tier price, keeping list price at or above it."""
        self.sale_price = tier_price.price
        self.ensure_list_price_not_below_sale_price()

    def ensure_list_price_not_below_sale_price(self) -> None:
        if self.list_price < self.sale_price:
            self.list_price = self.sale_price

    def apply_rewards(self, rewards: list[PromotionReward]) -> None:
        item_rewards = [
            reward
            for reward in rewards
            if reward.is_valid
            and reward.reward_type == RewardType.CATALOG_ITEM_AMOUNT
            and reward.product_id == self.product_id
        ]
        self.discounts, total = collect_discounts(item_rewards, self.sale_price, self.quantity)
        self.discount_amount = round_money(total / self.quantity) if self.quantity > 0 else Decimal("0")

    def clear_discounts(self) -> None:
        self.discounts = []
        self.discount_amount = Decimal("0")

    def apply_tax_rates(self, rates: list[TaxRate]) -> None:
        rate = find_tax_rate(rates, self.tax_line_id, TaxLineType.ITEM)
        if rate is not None:
            self.tax_total = round_money(rate.rate)
            self.tax_percent_rate = rate.percent_rate

    def to_tax_line(self) -> TaxLine:
        return TaxLine(
            id=self.tax_line_id,
            line_type=TaxLineType.ITEM,
            code=self.sku,
            name=self.name,
            quantity=self.quantity,
            amount=self.extended_price,
            price=self.placed_price,
            tax_type=self.tax_type,
        )

    def to_promo_entry(self) -> ProductPromoEntry:
        return ProductPromoEntry(
            product_id=self.product_id,
            quantity=self.quantity,
            price=self.sale_price,
            discount=self.discount_amount,
        )

    def clear_validation(self) -> None:
        self.validation_errors = []
        self.is_valid = True

    def add_validation_error(self, error: ValidationError, invalidates: bool = True) -> None:
        self.validation_errors.append(error)
        if invalidates:
            self.is_valid = False
