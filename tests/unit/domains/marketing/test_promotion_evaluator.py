"""
Unit tests for promotion rewards and PromotionEvaluator.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from storefront.domains.marketing.application.services import PromotionEvaluator
from storefront.domains.marketing.domain import (
    AmountType,
    PromotionEvaluationContext,
    PromotionReward,
    RewardType,
)


@pytest.fixture
def context() -> PromotionEvaluationContext:
    return PromotionEvaluationContext(store_id="electronics", currency="USD")


class TestPromotionReward:
    @pytest.mark.unit
    def test_relative_discount_per_unit(self):
        reward = PromotionReward(
            promotion_id="promo-1",
            reward_type=RewardType.CATALOG_ITEM_AMOUNT,
            amount=Decimal("10"),
            amount_type=AmountType.RELATIVE,
        )
        assert reward.discount_for(Decimal("18.00"), quantity=3) == Decimal("5.40")

    @pytest.mark.unit
    def test_absolute_discount_capped_at_price(self):
        reward = PromotionReward(promotion_id="promo-1", reward_type=RewardType.SHIPMENT, amount=Decimal("15"))
        assert reward.discount_for(Decimal("10.00")) == Decimal("10.00")

    @pytest.mark.unit
    def test_zero_price_gets_no_discount(self):
        reward = PromotionReward(promotion_id="promo-1", reward_type=RewardType.PAYMENT, amount=Decimal("5"))
        assert reward.discount_for(Decimal("0")) == Decimal("0")

    @pytest.mark.unit
    def test_relative_amount_above_hundred_rejected(self):
        with pytest.raises(ValueError):
            PromotionReward(
                promotion_id="promo-1",
                reward_type=RewardType.CART_SUBTOTAL,
                amount=Decimal("150"),
                amount_type=AmountType.RELATIVE,
            )


class TestPromotionEvaluator:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_queries_once_and_applies_to_every_target(self, context):
        # Arrange
        reward = PromotionReward(promotion_id="promo-1", reward_type=RewardType.CART_SUBTOTAL, amount=Decimal("5"))
        marketing_api = AsyncMock()
        marketing_api.evaluate_promotions.return_value = [reward]
        targets = [Mock(spec=["currency", "apply_rewards"]), Mock(spec=["currency", "apply_rewards"])]
        evaluator = PromotionEvaluator(marketing_api)

        # Act
        await evaluator.evaluate_discounts(context, targets)

        # Assert
        marketing_api.evaluate_promotions.assert_awaited_once_with(context)
        for target in targets:
            target.apply_rewards.assert_called_once_with([reward])

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_targets_no_query(self, context):
        marketing_api = AsyncMock()
        await PromotionEvaluator(marketing_api).evaluate_discounts(context, [])
        marketing_api.evaluate_promotions.assert_not_awaited()