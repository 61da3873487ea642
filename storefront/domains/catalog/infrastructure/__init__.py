"""
Catalog Infrastructure Layer

Adapters around the catalog search service.
"""

from storefront.domains.catalog.infrastructure.sync_catalog_search import SyncCatalogSearchFacade

__all__ = ["SyncCatalogSearchFacade"]
