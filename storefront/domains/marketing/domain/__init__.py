from storefront.domains.marketing.domain.promotions import (
    AmountType,
    Discount,
    IDiscountable,
    ProductPromoEntry,
    PromotionEvaluationContext,
    PromotionReward,
    RewardType,
)

__all__ = [
    "AmountType",
    "Discount",
    "IDiscountable",
    "ProductPromoEntry",
    "PromotionEvaluationContext",
    "PromotionReward",
    "RewardType",
]
