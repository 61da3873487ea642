"""
Discount and tax adjustment helpers shared by the cart's priced parts
(line items, shipments, payments and method candidates).
"""

from decimal import Decimal
from typing import Iterable

from storefront.core.domain import round_money
from storefront.domains.marketing.domain import Discount, PromotionReward
from storefront.domains.tax.domain import TaxLineType, TaxRate


def matches_code(expected: str | None, actual: str | None) -> bool:
    """Case-insensitive code comparison; a reward without a code matches any."""
    if expected is None:
        return True
    return actual is not None and expected.lower() == actual.lower()


def collect_discounts(
    rewards: Iterable[PromotionReward], price: Decimal, quantity: int = 1
) -> tuple[list[Discount], Decimal]:
    """
    Turn rewards into discounts on ``quantity`` units of ``price``.

    The combined discount never exceeds ``price * quantity``.

    Returns:
        (discounts, total discount amount)
    """
    remaining = round_money(price * quantity)
    discounts: list[Discount] = []
    total = Decimal("0")

    for reward in rewards:
        amount = min(reward.discount_for(price, quantity), remaining)
        if amount <= 0:
            continue
        discounts.append(reward.to_discount(amount))
        total += amount
        remaining -= amount

    return discounts, total


def find_tax_rate(rates: Iterable[TaxRate], line_id: str | None, line_type: TaxLineType) -> TaxRate | None:
    return next((rate for rate in rates if rate.matches(line_id, line_type)), None)
