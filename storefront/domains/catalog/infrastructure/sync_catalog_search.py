"""
Blocking facade over the catalog search service.

For legacy synchronous callers only (scripts, sync view code). Never use it
from a coroutine: ``run_sync`` raises instead of deadlocking the loop.
"""

import logging

from storefront.core.utils import run_sync
from storefront.domains.catalog.application.dto import CatalogSearchResult, ProductSearchCriteria
from storefront.domains.catalog.application.ports import ICatalogSearchService
from storefront.domains.catalog.domain.entities import Category, Product
from storefront.domains.catalog.domain.value_objects import CategoryResponseGroup, ItemResponseGroup

logger = logging.getLogger(__name__)


class SyncCatalogSearchFacade:
    """Synchronous wrapper for ICatalogSearchService."""

    def __init__(self, catalog_service: ICatalogSearchService, timeout: float | None = None):
        self._catalog_service = catalog_service
        self._timeout = timeout

    def get_products(
        self, ids: list[str], response_group: ItemResponseGroup = ItemResponseGroup.NONE
    ) -> list[Product]:
        logger.debug(f"Sync get_products for {len(ids)} id(s)")
        return run_sync(lambda: self._catalog_service.get_products(ids, response_group), self._timeout)

    def get_categories(
        self, ids: list[str], response_group: CategoryResponseGroup = CategoryResponseGroup.INFO
    ) -> list[Category]:
        return run_sync(lambda: self._catalog_service.get_categories(ids, response_group), self._timeout)

    def search_products(self, criteria: ProductSearchCriteria) -> CatalogSearchResult:
        return run_sync(lambda: self._catalog_service.search_products(criteria), self._timeout)
