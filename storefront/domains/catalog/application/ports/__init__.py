"""
Catalog Application Ports

Interface definitions (ports) for the remote catalog, search, inventory,
pricing and vendor services, and for the catalog search service consumed by
the cart domain. Uses Protocol for structural typing.
"""

from typing import Protocol, runtime_checkable

from storefront.domains.catalog.application.dto import (
    CatalogSearchResult,
    CategorySearchCriteria,
    ProductSearchCriteria,
    ProductSearchResponse,
)
from storefront.domains.catalog.domain.entities import Category, Inventory, Product, Vendor
from storefront.domains.catalog.domain.value_objects import CategoryResponseGroup, ItemResponseGroup, PagedList
from storefront.domains.shared.domain import Store, WorkContext


@runtime_checkable
class ICatalogApi(Protocol):
    """Remote catalog: products and categories by id"""

    async def get_products_by_ids(self, ids: list[str], response_group: ItemResponseGroup) -> list[Product]:
        """Get products by ids"""
        ...

    async def get_categories_by_ids(self, ids: list[str], response_group: CategoryResponseGroup) -> list[Category]:
        """Get categories by ids"""
        ...


@runtime_checkable
class ISearchApi(Protocol):
    """Remote full-text/faceted search"""

    async def search_products(self, store_id: str, criteria: ProductSearchCriteria) -> ProductSearchResponse:
        """Search one page of products"""
        ...

    async def search_categories(self, store_id: str, criteria: CategorySearchCriteria) -> list[Category]:
        """Search categories (returns the full matching set)"""
        ...


@runtime_checkable
class IInventoryApi(Protocol):
    """Remote inventory"""

    async def get_products_inventories(self, product_ids: list[str]) -> list[Inventory]:
        """Get inventory snapshots for products"""
        ...


@runtime_checkable
class IPricingService(Protocol):
    """Price evaluation. Sets ``Product.price`` in place."""

    async def evaluate_product_prices(self, products: list[Product], work_context: WorkContext) -> None:
        """Evaluate prices for products"""
        ...


@runtime_checkable
class IVendorService(Protocol):
    """Vendor (seller) lookup"""

    async def get_vendors_by_ids(self, store: Store, language: str, vendor_ids: list[str]) -> list[Vendor]:
        """Get vendors by ids"""
        ...


@runtime_checkable
class ICatalogSearchService(Protocol):
    """Catalog queries with on-demand facet enrichment"""

    async def get_products(
        self, ids: list[str], response_group: ItemResponseGroup = ItemResponseGroup.NONE
    ) -> list[Product]:
        """Get enriched products by ids"""
        ...

    async def get_categories(
        self, ids: list[str], response_group: CategoryResponseGroup = CategoryResponseGroup.INFO
    ) -> list[Category]:
        """Get categories by ids"""
        ...

    async def search_products(self, criteria: ProductSearchCriteria) -> CatalogSearchResult:
        """Search enriched products"""
        ...

    async def search_categories(self, criteria: CategorySearchCriteria) -> PagedList[Category]:
        """Search categories"""
        ...


__all__ = [
    "ICatalogApi",
    "ISearchApi",
    "IInventoryApi",
    "IPricingService",
    "IVendorService",
    "ICatalogSearchService",
]
