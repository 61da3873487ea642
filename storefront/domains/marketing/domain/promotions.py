"""
Promotion types.

The marketing service evaluates a cart snapshot and answers with rewards;
discountable objects (carts, shipping and payment method candidates) turn
the rewards that target them into discounts.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Protocol, runtime_checkable

from storefront.core.domain import ValueObject, round_money, to_decimal


class RewardType(str, Enum):
    """What a reward discounts"""

    CART_SUBTOTAL = "CartSubtotalReward"
    CATALOG_ITEM_AMOUNT = "CatalogItemAmountReward"
    SHIPMENT = "ShipmentReward"
    PAYMENT = "PaymentReward"


class AmountType(str, Enum):
    ABSOLUTE = "Absolute"
    RELATIVE = "Relative"


@dataclass(frozen=True)
class PromotionReward(ValueObject):
    """
    Reward granted by a promotion.

    ``amount`` is a currency amount for ABSOLUTE rewards and a percentage
    (0-100) for RELATIVE ones. The targeting fields that apply depend on
    ``reward_type``: ``product_id`` for catalog item rewards,
    ``shipping_method`` for shipment rewards, ``payment_method`` for payment
    rewards.
    """

    promotion_id: str
    reward_type: RewardType
    amount: Decimal = Decimal("0")
    amount_type: AmountType = AmountType.ABSOLUTE
    product_id: str | None = None
    shipping_method: str | None = None
    payment_method: str | None = None
    coupon: str | None = None
    is_valid: bool = True
    description: str | None = None

    def _validate(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        if self.amount < 0:
            raise ValueError("Reward amount cannot be negative")
        if self.amount_type == AmountType.RELATIVE and self.amount > 100:
            raise ValueError("Relative reward amount must be a percentage between 0 and 100")

    def discount_for(self, price: Decimal, quantity: int = 1) -> Decimal:
        """
        Discount this reward grants on ``quantity`` units of ``price``.

        The per-unit discount never exceeds the unit price.
        """
        price = to_decimal(price)
        if price <= 0 or quantity <= 0:
            return Decimal("0")

        if self.amount_type == AmountType.RELATIVE:
            per_unit = round_money(price * self.amount / 100)
        else:
            per_unit = self.amount
        return round_money(min(per_unit, price) * quantity)

    def to_discount(self, amount: Decimal) -> "Discount":
        return Discount(
            promotion_id=self.promotion_id,
            amount=amount,
            description=self.description,
            coupon=self.coupon,
        )


@dataclass(frozen=True)
class Discount(ValueObject):
    """Applied discount (one reward materialized on one target)."""

    promotion_id: str
    amount: Decimal
    description: str | None = None
    coupon: str | None = None


@dataclass
class ProductPromoEntry:
    """Cart line as seen by the marketing service."""

    product_id: str
    quantity: int
    price: Decimal
    discount: Decimal = Decimal("0")


@dataclass
class PromotionEvaluationContext:
    """Snapshot the marketing service evaluates promotions against."""

    store_id: str
    currency: str
    language: str | None = None
    customer_id: str | None = None
    is_registered_user: bool = False
    coupon: str | None = None
    cart_total: Decimal = Decimal("0")
    promo_entries: list[ProductPromoEntry] = field(default_factory=list)


@runtime_checkable
class IDiscountable(Protocol):
    """Anything promotion rewards can be applied to."""

    @property
    def currency(self) -> str:
        """Currency the discounts are expressed in"""
        ...

    def apply_rewards(self, rewards: list[PromotionReward]) -> None:
        """Replace current discounts with the ones derived from ``rewards``"""
        ...
