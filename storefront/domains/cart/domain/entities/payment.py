"""
Payment and Payment Method for the Cart Domain
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.core.domain import Entity, round_money
from storefront.domains.cart.domain.services import collect_discounts, find_tax_rate, matches_code
from storefront.domains.cart.domain.value_objects import ValidationError
from storefront.domains.marketing.domain import Discount, PromotionReward, RewardType
from storefront.domains.shared.domain import Address
from storefront.domains.tax.domain import TaxLine, TaxLineType, TaxRate


def _payment_rewards(rewards: list[PromotionReward], gateway_code: str | None) -> list[PromotionReward]:
    return [
        reward
        for reward in rewards
        if reward.is_valid
        and reward.reward_type == RewardType.PAYMENT
        and matches_code(reward.payment_method, gateway_code)
    ]


@dataclass
class PaymentMethod:
    """Payment gateway available for the cart."""

    code: str
    name: str | None = None
    description: str | None = None
    logo_url: str | None = None
    payment_method_type: str | None = None
    priority: int = 0
    is_available_for_partial_payments: bool = False
    currency: str = "USD"
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    discounts: list[Discount] = field(default_factory=list)
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None

    @property
    def total(self) -> Decimal:
        return self.price - self.discount_amount + self.tax_total

    def apply_rewards(self, rewards: list[PromotionReward]) -> None:
        self.discounts, self.discount_amount = collect_discounts(_payment_rewards(rewards, self.code), self.price)

    def apply_tax_rates(self, rates: list[TaxRate]) -> None:
        rate = find_tax_rate(rates, self.code, TaxLineType.PAYMENT)
        if rate is not None:
            self.tax_total = round_money(rate.rate)
            self.tax_percent_rate = rate.percent_rate

    def to_tax_line(self) -> TaxLine:
        return TaxLine(
            id=self.code,
            line_type=TaxLineType.PAYMENT,
            code=self.code,
            name=self.name,
            amount=self.price - self.discount_amount,
            price=self.price,
            tax_type=self.tax_type,
        )


@dataclass(eq=False)
class Payment(Entity[str]):
    """
    Payment attached to the cart.

    ``amount`` is what the payment covers; ``price`` is the gateway fee.
    """

    payment_gateway_code: str | None = None
    currency: str = "USD"
    amount: Decimal = Decimal("0")
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    discounts: list[Discount] = field(default_factory=list)
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None
    billing_address: Address | None = None
    validation_errors: list[ValidationError] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return self.price - self.discount_amount + self.tax_total

    @property
    def tax_line_id(self) -> str:
        return self.id or self.payment_gateway_code or ""

    def apply_method(self, method: PaymentMethod) -> None:
        self.price = method.price
        self.discount_amount = method.discount_amount
        self.tax_type = method.tax_type

    def apply_rewards(self, rewards: list[PromotionReward]) -> None:
        self.discounts, self.discount_amount = collect_discounts(
            _payment_rewards(rewards, self.payment_gateway_code), self.price
        )

    def apply_tax_rates(self, rates: list[TaxRate]) -> None:
        rate = find_tax_rate(rates, self.tax_line_id, TaxLineType.PAYMENT)
        if rate is not None:
            self.tax_total = round_money(rate.rate)
            self.tax_percent_rate = rate.percent_rate

    def to_tax_line(self) -> TaxLine:
        return TaxLine(
            id=self.tax_line_id,
            line_type=TaxLineType.PAYMENT,
            code=self.payment_gateway_code,
            amount=self.price - self.discount_amount,
            price=self.price,
            tax_type=self.tax_type,
        )
