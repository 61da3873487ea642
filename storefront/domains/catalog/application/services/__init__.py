from storefront.domains.catalog.application.services.catalog_search_service import CatalogSearchService
from storefront.domains.catalog.application.services.pagers import ProductPager

__all__ = ["CatalogSearchService", "ProductPager"]
