from storefront.domains.tax.domain.taxes import ITaxable, TaxEvaluationContext, TaxLine, TaxLineType, TaxRate

__all__ = ["ITaxable", "TaxEvaluationContext", "TaxLine", "TaxLineType", "TaxRate"]
