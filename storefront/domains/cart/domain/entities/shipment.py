"""
Shipment and Shipping Method for the Cart Domain
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


def _shipping_rewards(rewards: list[PromotionReward], method_code: str | None) -> list[PromotionReward]:
    return [
        reward
        for reward in rewards
        if reward.is_valid
        and reward.reward_type == RewardType.SHIPMENT
        and matches_code(reward.shipping_method, method_code)
    ]


@dataclass
class ShippingMethod:
    """
    Shipping rate candidate offered by the cart store.

    A method is identified by its code plus option (e.g. "FedEx" / "Ground").
    Candidates are discountable and taxable so the storefront can show final
    prices before one is chosen.
    """

    shipment_method_code: str
    option_name: str | None = None
    option_description: str | None = None
    name: str | None = None
    logo_url: str | None = None
    priority: int = 0
    currency: str = "USD"
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    discounts: list[Discount] = field(default_factory=list)
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None

    @property
    def id(self) -> str:
        return f"{self.shipment_method_code}:{self.option_name or ''}"

    @property
    def price_with_tax(self) -> Decimal:
        return round_money(self.price * (1 + self.tax_percent_rate))

    @property
    def total(self) -> Decimal:
        return self.price - self.discount_amount + self.tax_total

    def apply_rewards(self, rewards: list[PromotionReward]) -> None:
        self.discounts, self.discount_amount = collect_discounts(
            _shipping_rewards(rewards, self.shipment_method_code), self.price
        )

    def apply_tax_rates(self, rates: list[TaxRate]) -> None:
        rate = find_tax_rate(rates, self.id, TaxLineType.SHIPMENT)
        if rate is not None:
            self.tax_total = round_money(rate.rate)
            self.tax_percent_rate = rate.percent_rate

    def to_tax_line(self) -> TaxLine:
        return TaxLine(
            id=self.id,
            line_type=TaxLineType.SHIPMENT,
            code=self.shipment_method_code,
            name=self.option_name,
            amount=self.price - self.discount_amount,
            price=self.price,
            tax_type=self.tax_type,
        )


@dataclass(eq=False)
class Shipment(Entity[str]):
    """Shipment chosen for the cart."""

    shipment_method_code: str | None = None
    shipment_method_option: str | None = None
    currency: str = "USD"
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    discounts: list[Discount] = field(default_factory=list)
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None
    delivery_address: Address | None = None
    is_valid: bool = True
    validation_errors: list[ValidationError] = field(default_factory=list)

    @property
    def price_with_tax(self) -> Decimal:
        return round_money(self.price * (1 + self.tax_percent_rate))

    @property
    def total(self) -> Decimal:
        return self.price - self.discount_amount + self.tax_total

    @property
    def tax_line_id(self) -> str:
        return self.id or f"{self.shipment_method_code}:{self.shipment_method_option or ''}"

    def has_same_method(self, method: ShippingMethod) -> bool:
        """Same method code and option, compared case-insensitively."""
        return (self.shipment_method_code or "").lower() == method.shipment_method_code.lower() and (
            self.shipment_method_option or ""
        ).lower() == (method.option_name or "").lower()

    def apply_method(self, method: ShippingMethod) -> None:
        self.price = method.price
        self.discount_amount = method.discount_amount
        self.tax_type = method.tax_type

    def apply_rewards(self, rewards: list[PromotionReward]) -> None:
        self.discounts, self.discount_amount = collect_discounts(
            _shipping_rewards(rewards, self.shipment_method_code), self.price
        )

    def apply_tax_rates(self, rates: list[TaxRate]) -> None:
        rate = find_tax_rate(rates, self.tax_line_id, TaxLineType.SHIPMENT)
        if rate is not None:
            self.tax_total = round_money(rate.rate)
            self.tax_percent_rate = rate.percent_rate

    def to_tax_line(self) -> TaxLine:
        return TaxLine(
            id=self.tax_line_id,
            line_type=TaxLineType.SHIPMENT,
            code=self.shipment_method_code,
            name=self.shipment_method_option,
            amount=self.price - self.discount_amount,
            price=self.price,
            tax_type=self.tax_type,
        )

    def clear_validation(self) -> None:
        self.validation_errors = []
        self.is_valid = True

    def add_validation_error(self, error: ValidationError, invalidates: bool = True) -> None:
        self.validation_errors.append(error)
        if invalidates:
            self.is_valid = False
