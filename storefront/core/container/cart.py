"""
Cart Domain Container.

Single Responsibility: Wire the cart builder, its store and the promotion and
tax evaluators.
"""

import logging
from typing import TYPE_CHECKING

from storefront.domains.cart.application.ports import ICartStore
from storefront.domains.cart.application.services import CartBuilder
from storefront.domains.cart.infrastructure import HttpCartStore, InMemoryCartStore
from storefront.domains.marketing.application.ports import IMarketingApi
from storefront.domains.marketing.application.services import PromotionEvaluator
from storefront.domains.tax.application.ports import ITaxApi
from storefront.domains.tax.application.services import TaxEvaluator

if TYPE_CHECKING:
    from storefront.core.container.base import BaseContainer
    from storefront.core.container.catalog import CatalogContainer

logger = logging.getLogger(__name__)


class CartContainer:
    """
    Cart domain container.

    Single Responsibility: Create cart builders (one per request) around
    shared collaborators.
    """

    def __init__(
        self,
        base: "BaseContainer",
        catalog: "CatalogContainer",
        marketing_api: IMarketingApi,
        tax_api: ITaxApi,
        cart_store: ICartStore | None = None,
    ):
        """
        Initialize cart container.

        Args:
            base: BaseContainer with shared singletons
            catalog: CatalogContainer providing the catalog search service
            marketing_api: Remote promotions service
            tax_api: Remote tax service
            cart_store: Cart store override (defaults from settings)
        """
        self._base = base
        self._catalog = catalog
        self._marketing_api = marketing_api
        self._tax_api = tax_api
        self._cart_store = cart_store

    # ==================== STORE ====================

    def get_cart_store(self) -> ICartStore:
        """
        Get the cart store (singleton).

        Uses the cart module HTTP API when CART_API_BASE_URL is set, an
        in-memory store otherwise.
        """
        if self._cart_store is None:
            settings = self._base.settings
            if settings.CART_API_BASE_URL:
                logger.info(f"Using HttpCartStore at {settings.CART_API_BASE_URL}")
                self._cart_store = HttpCartStore(
                    base_url=settings.CART_API_BASE_URL,
                    api_key=settings.CART_API_KEY,
                    timeout_seconds=settings.CART_API_TIMEOUT,
                )
            else:
                logger.warning("CART_API_BASE_URL not set, carts are kept in memory")
                self._cart_store = InMemoryCartStore()
        return self._cart_store

    # ==================== EVALUATORS ====================

    def create_promotion_evaluator(self) -> PromotionEvaluator:
        return PromotionEvaluator(marketing_api=self._marketing_api)

    def create_tax_evaluator(self) -> TaxEvaluator:
        return TaxEvaluator(tax_api=self._tax_api)

    # ==================== SERVICES ====================

    def create_cart_builder(self) -> CartBuilder:
        """Create an unbound CartBuilder."""
        settings = self._base.settings
        return CartBuilder(
            cart_store=self.get_cart_store(),
            catalog_service=self._catalog.create_catalog_search_service(),
            cache_manager=self._base.get_cache_manager(),
            promotion_evaluator=self.create_promotion_evaluator(),
            tax_evaluator=self.create_tax_evaluator(),
            cart_region=settings.CART_CACHE_REGION,
            api_region=settings.API_CACHE_REGION,
            default_cart_name=settings.DEFAULT_CART_NAME,
            anonymous_username=settings.ANONYMOUS_USERNAME,
        )
