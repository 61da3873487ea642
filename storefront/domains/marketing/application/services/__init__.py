from storefront.domains.marketing.application.services.promotion_evaluator import PromotionEvaluator

__all__ = ["PromotionEvaluator"]
