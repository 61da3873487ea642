"""
Cart Aggregate for the Cart Domain

The cart owns its line items, shipments, payments and coupon. Promotion and
tax evaluators never see the cart's internals: it describes itself through
evaluation contexts and receives rewards and tax rates back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.core.domain import AggregateRoot, round_money
from storefront.domains.cart.domain.entities.line_item import LineItem
from storefront.domains.cart.domain.entities.payment import Payment
from storefront.domains.cart.domain.entities.shipment import Shipment
from storefront.domains.cart.domain.services import collect_discounts
from storefront.domains.marketing.domain import Discount, PromotionEvaluationContext, PromotionReward, RewardType
from storefront.domains.shared.domain import CustomerInfo
from storefront.domains.tax.domain import TaxEvaluationContext, TaxRate


@dataclass
class Coupon:
    """Coupon entered by the customer; applied once a promotion accepts it."""

    code: str
    applied_successfully: bool = False


@dataclass(eq=False)
class Cart(AggregateRoot[str]):
    """
    Shopping cart aggregate root.

    Invariant: at most one line item per product id.

    Example:
        ```python
        cart = Cart(store_id="electronics", name="default", customer_id="c-1", currency="USD")
        cart.items.append(LineItem.from_product(product, cart.currency, quantity=2))
        cart.total  # extended prices + shipping + payment fees + taxes - cart discounts
        ```
    """

    store_id: str = ""
    name: str = "default"
    customer_id: str | None = None
    customer_name: str | None = None
    customer: CustomerInfo | None = None
    is_anonymous: bool = True
    language: str | None = None
    currency: str = "USD"
    items: list[LineItem] = field(default_factory=list)
    shipments: list[Shipment] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    coupon: Coupon | None = None
    is_valid: bool = True
    discounts: list[Discount] = field(default_factory=list)
    discount_amount: Decimal = Decimal("0")
    comment: str | None = None

    # ==================== Lookups ====================

    def find_item(self, line_item_id: str) -> LineItem | None:
        return next((item for item in self.items if item.id == line_item_id), None)

    def find_item_by_product(self, product_id: str) -> LineItem | None:
        return next((item for item in self.items if item.product_id == product_id), None)

    def find_shipment(self, shipment_id: str) -> Shipment | None:
        return next((shipment for shipment in self.shipments if shipment.id == shipment_id), None)

    def find_payment(self, payment_id: str) -> Payment | None:
        return next((payment for payment in self.payments if payment.id == payment_id), None)

    @property
    def has_items(self) -> bool:
        return bool(self.items)

    @property
    def items_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    # ==================== Totals ====================

    @property
    def sub_total(self) -> Decimal:
        return round_money(sum((item.list_price * item.quantity for item in self.items), Decimal("0")))

    @property
    def sub_total_with_tax(self) -> Decimal:
        return round_money(sum((item.list_price_with_tax * item.quantity for item in self.items), Decimal("0")))

    @property
    def extended_price_total(self) -> Decimal:
        return sum((item.extended_price for item in self.items), Decimal("0"))

    @property
    def shipping_total(self) -> Decimal:
        return sum((shipment.price - shipment.discount_amount for shipment in self.shipments), Decimal("0"))

    @property
    def payment_total(self) -> Decimal:
        return sum((payment.price - payment.discount_amount for payment in self.payments), Decimal("0"))

    @property
    def tax_total(self) -> Decimal:
        parts = [item.tax_total for item in self.items]
        parts += [shipment.tax_total for shipment in self.shipments]
        parts += [payment.tax_total for payment in self.payments]
        return sum(parts, Decimal("0"))

    @property
    def discount_total(self) -> Decimal:
        parts = [self.discount_amount]
        parts += [item.discount_total for item in self.items]
        parts += [shipment.discount_amount for shipment in self.shipments]
        parts += [payment.discount_amount for payment in self.payments]
        return sum(parts, Decimal("0"))

    @property
    def total(self) -> Decimal:
        return (
            self.extended_price_total
            - self.discount_amount
            + self.shipping_total
            + self.payment_total
            + self.tax_total
        )

    # ==================== Evaluation ====================

    def to_promotion_evaluation_context(self) -> PromotionEvaluationContext:
        return PromotionEvaluationContext(
            store_id=self.store_id,
            currency=self.currency,
            language=self.language,
            customer_id=self.customer_id,
            is_registered_user=not self.is_anonymous,
            coupon=self.coupon.code if self.coupon else None,
            cart_total=self.extended_price_total,
            promo_entries=[item.to_promo_entry() for item in self.items],
        )

    def to_tax_evaluation_context(self) -> TaxEvaluationContext:
        lines = [item.to_tax_line() for item in self.items]
        lines += [shipment.to_tax_line() for shipment in self.shipments]
        lines += [payment.to_tax_line() for payment in self.payments]
        address = next(
            (shipment.delivery_address for shipment in self.shipments if shipment.delivery_address), None
        )
        return TaxEvaluationContext(
            store_id=self.store_id,
            currency=self.currency,
            customer_id=self.customer_id,
            lines=lines,
            address=address,
        )

    def apply_rewards(self, rewards: list[PromotionReward]) -> None:
        """
        Replace all discounts with the ones granted by ``rewards``.

        Item rewards are applied first so the cart subtotal reward is capped
        by the already discounted subtotal. Read-only (quoted) lines keep
        their negotiated price.
        """
        valid = [reward for reward in rewards if reward.is_valid]

        for item in self.items:
            if item.is_read_only:
                item.clear_discounts()
            else:
                item.apply_rewards(valid)
        for shipment in self.shipments:
            shipment.apply_rewards(valid)
        for payment in self.payments:
            payment.apply_rewards(valid)

        subtotal_rewards = [reward for reward in valid if reward.reward_type == RewardType.CART_SUBTOTAL]
        self.discounts, self.discount_amount = collect_discounts(subtotal_rewards, self.extended_price_total)

        if self.coupon is not None:
            code = self.coupon.code.lower()
            self.coupon.applied_successfully = any(
                reward.coupon is not None and reward.coupon.lower() == code for reward in valid
            )

    def apply_tax_rates(self, rates: list[TaxRate]) -> None:
        for item in self.items:
            item.apply_tax_rates(rates)
        for shipment in self.shipments:
            shipment.apply_tax_rates(rates)
        for payment in self.payments:
            payment.apply_tax_rates(rates)
