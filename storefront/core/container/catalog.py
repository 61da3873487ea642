"""
Catalog Domain Container.

Single Responsibility: Wire the catalog search service to the remote catalog
adapters supplied by the host application.
"""

import logging
from typing import TYPE_CHECKING, Callable

from storefront.domains.catalog.application.ports import (
    ICatalogApi,
    IInventoryApi,
    IPricingService,
    ISearchApi,
    IVendorService,
)
from storefront.domains.catalog.application.services import CatalogSearchService
from storefront.domains.catalog.infrastructure import SyncCatalogSearchFacade
from storefront.domains.shared.domain import WorkContext

if TYPE_CHECKING:
    from storefront.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class CatalogContainer:
    """
    Catalog domain container.

    Single Responsibility: Create catalog services.
    """

    def __init__(
        self,
        base: "BaseContainer",
        work_context_factory: Callable[[], WorkContext],
        catalog_api: ICatalogApi,
        search_api: ISearchApi,
        inventory_api: IInventoryApi,
        pricing_service: IPricingService,
        vendor_service: IVendorService,
    ):
        self._base = base
        self._work_context_factory = work_context_factory
        self._catalog_api = catalog_api
        self._search_api = search_api
        self._inventory_api = inventory_api
        self._pricing_service = pricing_service
        self._vendor_service = vendor_service

    @property
    def work_context_factory(self) -> Callable[[], WorkContext]:
        return self._work_context_factory

    def create_catalog_search_service(self) -> CatalogSearchService:
        """Create CatalogSearchService with dependencies."""
        return CatalogSearchService(
            work_context_factory=self._work_context_factory,
            catalog_api=self._catalog_api,
            search_api=self._search_api,
            inventory_api=self._inventory_api,
            pricing_service=self._pricing_service,
            vendor_service=self._vendor_service,
            default_page_size=self._base.settings.CATALOG_DEFAULT_PAGE_SIZE,
        )

    def create_sync_catalog_facade(self) -> SyncCatalogSearchFacade:
        """Create the blocking facade for legacy synchronous callers."""
        return SyncCatalogSearchFacade(self.create_catalog_search_service())
