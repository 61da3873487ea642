"""
Base Container - Shared Singletons.

Single Responsibility: Manage resources shared by every request (settings,
cache, event publisher).
"""

import logging

from storefront.config.settings import Settings, get_settings
from storefront.core.cache import LocalCacheManager
from storefront.core.domain import DomainEventPublisher

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.

    Single Responsibility: Create and cache process-wide resources.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize base container.

        Args:
            settings: Optional settings (defaults to the cached environment settings)
        """
        self.settings = settings or get_settings()

        self._cache_manager: LocalCacheManager | None = None
        self._event_publisher: DomainEventPublisher | None = None

        logger.info("BaseContainer initialized")

    def get_cache_manager(self) -> LocalCacheManager:
        """Get the shared cache manager (singleton)."""
        if self._cache_manager is None:
            self._cache_manager = LocalCacheManager(
                region_ttls=self.settings.cache_region_ttls,
                default_ttl=self.settings.API_CACHE_TTL_SECONDS,
                max_entries=self.settings.CACHE_MAX_ENTRIES,
            )
            logger.info(f"Created LocalCacheManager with regions {list(self.settings.cache_region_ttls)}")
        return self._cache_manager

    def get_event_publisher(self) -> DomainEventPublisher:
        """Get the domain event publisher (singleton)."""
        if self._event_publisher is None:
            self._event_publisher = DomainEventPublisher()
        return self._event_publisher
