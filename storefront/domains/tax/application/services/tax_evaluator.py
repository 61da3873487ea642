"""
Tax Evaluator
"""

import logging
from typing import Sequence

from storefront.domains.tax.application.ports import ITaxApi
from storefront.domains.tax.domain import ITaxable, TaxEvaluationContext

logger = logging.getLogger(__name__)


class TaxEvaluator:
    """Tax evaluation over ITaxable targets."""

    def __init__(self, tax_api: ITaxApi):
        self._tax_api = tax_api

    async def evaluate_taxes(self, context: TaxEvaluationContext, targets: Sequence[ITaxable]) -> None:
        """
        Evaluate taxes and apply the rates to ``targets`` in place.

        A context without lines is not sent to the tax service.
        """
        if not context.lines or not targets:
            return

        rates = await self._tax_api.evaluate_taxes(context)
        logger.debug(f"Tax evaluation returned {len(rates)} rate(s) for {len(context.lines)} line(s)")

        for target in targets:
            target.apply_tax_rates(rates)
