"""
Marketing Application Ports
"""

from typing import Protocol, Sequence, runtime_checkable

from storefront.domains.marketing.domain import IDiscountable, PromotionEvaluationContext, PromotionReward


@runtime_checkable
class IMarketingApi(Protocol):
    """Remote marketing (promotions) service"""

    async def evaluate_promotions(self, context: PromotionEvaluationContext) -> list[PromotionReward]:
        """Evaluate promotions and return the granted rewards"""
        ...


@runtime_checkable
class IPromotionEvaluator(Protocol):
    """Applies promotion rewards to discountable targets in place"""

    async def evaluate_discounts(
        self, context: PromotionEvaluationContext, targets: Sequence[IDiscountable]
    ) -> None:
        """Evaluate promotions for ``context`` and apply them to ``targets``"""
        ...


__all__ = ["IMarketingApi", "IPromotionEvaluator"]
