"""
Tax Application Ports
"""

from typing import Protocol, Sequence, runtime_checkable

from storefront.domains.tax.domain import ITaxable, TaxEvaluationContext, TaxRate


@runtime_checkable
class ITaxApi(Protocol):
    """Remote tax calculation service"""

    async def evaluate_taxes(self, context: TaxEvaluationContext) -> list[TaxRate]:
        """Calculate tax rates for the context's lines"""
        ...


@runtime_checkable
class ITaxEvaluator(Protocol):
    """Applies tax rates to taxable targets in place"""

    async def evaluate_taxes(self, context: TaxEvaluationContext, targets: Sequence[ITaxable]) -> None:
        """Evaluate taxes for ``context`` and apply them to ``targets``"""
        ...


__all__ = ["ITaxApi", "ITaxEvaluator"]
