"""
Catalog Search Service

Resolves product and category identifiers (or search criteria) into domain
objects and enriches them with the facets selected by a response group.
Facets are loaded concurrently over the full product set, variations
included; each loader writes a different product field.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from storefront.domains.catalog.application.dto import (
    DEFAULT_PAGE_SIZE,
    CatalogSearchResult,
    CategorySearchCriteria,
    ProductSearchCriteria,
)
from storefront.domains.catalog.application.ports import (
    ICatalogApi,
    IInventoryApi,
    IPricingService,
    ISearchApi,
    IVendorService,
)
from storefront.domains.catalog.application.services.pagers import ProductPager
from storefront.domains.catalog.domain.entities import (
    Category,
    CategoryAssociation,
    Inventory,
    Product,
    ProductAssociation,
)
from storefront.domains.catalog.domain.value_objects import CategoryResponseGroup, ItemResponseGroup, PagedList
from storefront.domains.shared.domain import WorkContext

logger = logging.getLogger(__name__)

# Associated products never load their own associations: resolution stops at one level
ASSOCIATED_PRODUCTS_RESPONSE_GROUP = (
    ItemResponseGroup.ITEM_INFO
    | ItemResponseGroup.ITEM_WITH_PRICES
    | ItemResponseGroup.SEO
    | ItemResponseGroup.OUTLINES
)
ASSOCIATED_CATEGORIES_RESPONSE_GROUP = (
    CategoryResponseGroup.INFO
    | CategoryResponseGroup.WITH_SEO
    | CategoryResponseGroup.WITH_OUTLINES
    | CategoryResponseGroup.WITH_IMAGES
)
CATEGORY_PRODUCTS_RESPONSE_GROUP = (
    ItemResponseGroup.ITEM_INFO
    | ItemResponseGroup.ITEM_WITH_PRICES
    | ItemResponseGroup.INVENTORY
    | ItemResponseGroup.ITEM_WITH_VENDOR
)


class CatalogSearchService:
    """
    Catalog query orchestration.

    Responsibilities:
    - Fetch products/categories by id or by search criteria
    - Fan out facet enrichment (associations, inventory, prices, vendor)
    - Attach lazily paginated product listings to vendors and categories
    """

    def __init__(
        self,
        work_context_factory: Callable[[], WorkContext],
        catalog_api: ICatalogApi,
        search_api: ISearchApi,
        inventory_api: IInventoryApi,
        pricing_service: IPricingService,
        vendor_service: IVendorService,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """
        Initialize service with dependencies.

        Args:
            work_context_factory: Returns the current request's work context
            catalog_api: Products/categories by id
            search_api: Product/category search
            inventory_api: Inventory snapshots
            pricing_service: Product price evaluation
            vendor_service: Vendor lookup
            default_page_size: Page size of vendor/category product listings
        """
        self._work_context_factory = work_context_factory
        self._catalog_api = catalog_api
        self._search_api = search_api
        self._inventory_api = inventory_api
        self._pricing_service = pricing_service
        self._vendor_service = vendor_service
        self._default_page_size = default_page_size

    async def get_products(
        self, ids: list[str], response_group: ItemResponseGroup = ItemResponseGroup.NONE
    ) -> list[Product]:
        """
        Get products by ids with the requested facets loaded.

        Args:
            ids: Product ids
            response_group: Facets to load; NONE uses the work context's default

        Returns:
            Products (variations are reachable through each product)
        """
        work_context = self._work_context_factory()
        if response_group == ItemResponseGroup.NONE:
            response_group = work_context.product_response_group

        if not ids:
            return []

        products = await self._catalog_api.get_products_by_ids(list(ids), response_group)
        all_products = [item for product in products for item in product.with_variations()]

        if all_products:
            loaders: list[Awaitable[None]] = []
            if ItemResponseGroup.ITEM_ASSOCIATIONS in response_group:
                loaders.append(self._load_product_associations(all_products))
            if ItemResponseGroup.INVENTORY in response_group:
                loaders.append(self._load_product_inventories(all_products))
            if ItemResponseGroup.ITEM_WITH_PRICES in response_group:
                loaders.append(self._pricing_service.evaluate_product_prices(all_products, work_context))
            if ItemResponseGroup.ITEM_WITH_VENDOR in response_group:
                loaders.append(self._load_product_vendors(all_products, work_context))

            logger.debug(f"Loading {len(loaders)} facet(s) for {len(all_products)} product(s)")
            await asyncio.gather(*loaders)

        return products

    async def get_categories(
        self, ids: list[str], response_group: CategoryResponseGroup = CategoryResponseGroup.INFO
    ) -> list[Category]:
        """Get categories by ids."""
        if not ids:
            return []
        return await self._catalog_api.get_categories_by_ids(list(ids), response_group)

    async def search_products(self, criteria: ProductSearchCriteria) -> CatalogSearchResult:
        """
        Search products and enrich the returned page.

        Args:
            criteria: Search criteria (not modified)

        Returns:
            CatalogSearchResult with the page and aggregations
        """
        work_context = self._work_context_factory()
        criteria = criteria.clone()

        response = await self._search_api.search_products(work_context.store.id, criteria)
        products = response.products

        if products:
            with_variations = [item for product in products for item in product.with_variations()]
            loaders: list[Awaitable[None]] = []
            if ItemResponseGroup.INVENTORY in criteria.response_group:
                loaders.append(self._load_product_inventories(with_variations))
            if ItemResponseGroup.ITEM_WITH_VENDOR in criteria.response_group:
                loaders.append(self._load_product_vendors(with_variations, work_context))
            if ItemResponseGroup.ITEM_WITH_PRICES in criteria.response_group:
                loaders.append(self._pricing_service.evaluate_product_prices(with_variations, work_context))
            await asyncio.gather(*loaders)

        return CatalogSearchResult(
            products=PagedList(
                items=products,
                page_number=criteria.page_number,
                page_size=criteria.page_size,
                total_count=response.total_count or 0,
            ),
            aggregations=list(response.aggregations),
        )

    async def search_categories(self, criteria: CategorySearchCriteria) -> PagedList[Category]:
        """
        Search categories.

        The search API returns the whole matching set; paging happens here.
        """
        work_context = self._work_context_factory()
        criteria = criteria.clone()
        categories = await self._search_api.search_categories(work_context.store.id, criteria)
        return PagedList.from_superset(categories, criteria.page_number, criteria.page_size)

    # Facet loaders

    async def _load_product_inventories(self, products: list[Product]) -> None:
        inventories = await self._inventory_api.get_products_inventories([product.id for product in products])
        by_product: dict[str, Inventory] = {}
        for inventory in inventories:
            by_product.setdefault(inventory.product_id, inventory)
        for product in products:
            product.inventory = by_product.get(product.id)

    async def _load_product_vendors(self, products: list[Product], work_context: WorkContext) -> None:
        vendor_ids = list(dict.fromkeys(product.vendor_id for product in products if product.vendor_id))
        if not vendor_ids:
            return

        vendors = await self._vendor_service.get_vendors_by_ids(work_context.store, work_context.language, vendor_ids)
        by_id = {vendor.id: vendor for vendor in vendors if vendor is not None}

        base_group = (
            work_context.product_search_criteria.response_group
            if work_context.product_search_criteria is not None
            else work_context.product_response_group
        )
        for product in products:
            product.vendor = by_id.get(product.vendor_id) if product.vendor_id else None
            if product.vendor is not None and product.vendor.products is None:
                product.vendor.products = ProductPager(
                    self.search_products,
                    ProductSearchCriteria(
                        vendor_id=product.vendor.id,
                        page_size=self._default_page_size,
                        response_group=base_group & ~ItemResponseGroup.ITEM_WITH_VENDOR,
                    ),
                )

    async def _load_product_associations(self, products: list[Product]) -> None:
        associations = [association for product in products for association in product.associations]
        product_associations = [a for a in associations if isinstance(a, ProductAssociation)]
        category_associations = [a for a in associations if isinstance(a, CategoryAssociation)]

        loaders: list[Awaitable[None]] = []
        if product_associations:
            loaders.append(self._resolve_product_associations(product_associations))
        if category_associations:
            loaders.append(self._resolve_category_associations(category_associations))
        await asyncio.gather(*loaders)

    async def _resolve_product_associations(self, associations: list[ProductAssociation]) -> None:
        ids = list(dict.fromkeys(association.product_id for association in associations))
        associated = await self.get_products(ids, ASSOCIATED_PRODUCTS_RESPONSE_GROUP)
        by_id = {product.id: product for product in associated}
        for association in associations:
            association.product = by_id.get(association.product_id)

    async def _resolve_category_associations(self, associations: list[CategoryAssociation]) -> None:
        ids = list(dict.fromkeys(association.category_id for association in associations))
        categories = await self.get_categories(ids, ASSOCIATED_CATEGORIES_RESPONSE_GROUP)
        by_id = {category.id: category for category in categories}
        for association in associations:
            category = by_id.get(association.category_id)
            association.category = category
            if category is not None and category.products is None:
                category.products = ProductPager(
                    self.search_products,
                    ProductSearchCriteria(
                        outline=category.outline,
                        page_size=self._default_page_size,
                        response_group=CATEGORY_PRODUCTS_RESPONSE_GROUP,
                    ),
                )
