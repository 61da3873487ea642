from storefront.domains.tax.application.services.tax_evaluator import TaxEvaluator

__all__ = ["TaxEvaluator"]
