"""
Promotion Evaluator

Queries the marketing service once per evaluation and hands the rewards to
every target. Targets decide which rewards concern them.
"""

import logging
from typing import Sequence

from storefront.domains.marketing.application.ports import IMarketingApi
from storefront.domains.marketing.domain import IDiscountable, PromotionEvaluationContext

logger = logging.getLogger(__name__)


class PromotionEvaluator:
    """Promotion evaluation over IDiscountable targets."""

    def __init__(self, marketing_api: IMarketingApi):
        self._marketing_api = marketing_api

    async def evaluate_discounts(
        self, context: PromotionEvaluationContext, targets: Sequence[IDiscountable]
    ) -> None:
        """
        Evaluate promotions and apply the rewards to ``targets`` in place.

        Args:
            context: Evaluation snapshot
            targets: Discountable objects (cart, method candidates)
        """
        if not targets:
            return

        rewards = await self._marketing_api.evaluate_promotions(context)
        valid = sum(1 for reward in rewards if reward.is_valid)
        logger.debug(f"Promotion evaluation returned {len(rewards)} reward(s), {valid} valid")

        for target in targets:
            target.apply_rewards(rewards)
