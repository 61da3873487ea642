"""
Dependency Injection Container.

Centralized container wiring concrete implementations to ports. The host
application supplies the remote catalog, pricing, vendor, marketing and tax
adapters; the container builds everything on top of them.

This module is the facade that composes the domain-specific containers.
"""

from __future__ import annotations

import logging
from typing import Callable

from storefront.config.settings import Settings
from storefront.core.cache import LocalCacheManager
from storefront.core.domain import DomainEventPublisher
from storefront.core.shared import configure_logging, get_service_logger
from storefront.domains.cart.application.ports import ICartStore
from storefront.domains.cart.application.services import CartBuilder
from storefront.domains.cart.domain import UserLoginEvent
from storefront.domains.catalog.application.ports import (
    ICatalogApi,
    IInventoryApi,
    IPricingService,
    ISearchApi,
    IVendorService,
)
from storefront.domains.catalog.application.services import CatalogSearchService
from storefront.domains.catalog.infrastructure import SyncCatalogSearchFacade
from storefront.domains.marketing.application.ports import IMarketingApi
from storefront.domains.shared.domain import WorkContext
from storefront.domains.tax.application.ports import ITaxApi

from .base import BaseContainer
from .cart import CartContainer
from .catalog import CatalogContainer

logger = logging.getLogger(__name__)


class StorefrontContainer:
    """
    Dependency Injection Container (Facade).

    Single Responsibility: Compose and delegate to domain-specific containers.
    Also subscribes the cart builder to login events so anonymous carts are
    merged when a visitor signs in.
    """

    def __init__(
        self,
        work_context_factory: Callable[[], WorkContext],
        catalog_api: ICatalogApi,
        search_api: ISearchApi,
        inventory_api: IInventoryApi,
        pricing_service: IPricingService,
        vendor_service: IVendorService,
        marketing_api: IMarketingApi,
        tax_api: ITaxApi,
        cart_store: ICartStore | None = None,
        settings: Settings | None = None,
        setup_logging: bool = False,
    ):
        """
        Initialize container with all domain sub-containers.

        Args:
            work_context_factory: Returns the current request's work context
            catalog_api: Remote catalog adapter
            search_api: Remote search adapter
            inventory_api: Remote inventory adapter
            pricing_service: Price evaluation adapter
            vendor_service: Vendor lookup adapter
            marketing_api: Remote promotions adapter
            tax_api: Remote tax adapter
            cart_store: Cart store override
            settings: Settings override
            setup_logging: Configure root logging from settings
        """
        self._base = BaseContainer(settings)

        if setup_logging:
            configure_logging(
                level=self._base.settings.LOG_LEVEL,
                format_type=self._base.settings.LOG_FORMAT,
                log_file=self._base.settings.LOG_FILE,
            )

        self._catalog = CatalogContainer(
            self._base,
            work_context_factory=work_context_factory,
            catalog_api=catalog_api,
            search_api=search_api,
            inventory_api=inventory_api,
            pricing_service=pricing_service,
            vendor_service=vendor_service,
        )
        self._cart = CartContainer(
            self._base,
            self._catalog,
            marketing_api=marketing_api,
            tax_api=tax_api,
            cart_store=cart_store,
        )
        self._service_logger = get_service_logger("storefront")

        self._base.get_event_publisher().subscribe(UserLoginEvent, self._handle_user_login)

        logger.info("StorefrontContainer initialized with all domain containers")

    @property
    def settings(self) -> Settings:
        return self._base.settings

    # ============================================================
    # SINGLETONS (delegated to BaseContainer)
    # ============================================================

    def get_cache_manager(self) -> LocalCacheManager:
        return self._base.get_cache_manager()

    def get_event_publisher(self) -> DomainEventPublisher:
        return self._base.get_event_publisher()

    def get_cart_store(self) -> ICartStore:
        return self._cart.get_cart_store()

    # ============================================================
    # CATALOG (delegated to CatalogContainer)
    # ============================================================

    def create_catalog_search_service(self) -> CatalogSearchService:
        return self._catalog.create_catalog_search_service()

    def create_sync_catalog_facade(self) -> SyncCatalogSearchFacade:
        return self._catalog.create_sync_catalog_facade()

    # ============================================================
    # CART (delegated to CartContainer)
    # ============================================================

    def create_cart_builder(self) -> CartBuilder:
        return self._cart.create_cart_builder()

    # ============================================================
    # EVENTS
    # ============================================================

    async def _handle_user_login(self, event: UserLoginEvent) -> None:
        log = self._service_logger.with_context(event_id=str(event.event_id))
        log.info(
            "Handling user login",
            prev_user=event.prev_user.id if event.prev_user else None,
            new_user=event.new_user.id if event.new_user else None,
        )
        await self.create_cart_builder().on_user_login(event)


__all__ = [
    "BaseContainer",
    "CartContainer",
    "CatalogContainer",
    "StorefrontContainer",
]
