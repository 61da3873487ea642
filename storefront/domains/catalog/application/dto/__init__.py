"""
Catalog Application DTOs

Search criteria and results exchanged with the catalog search service.
"""

from dataclasses import dataclass, field, replace

from storefront.domains.catalog.domain.entities import Product
from storefront.domains.catalog.domain.value_objects import CategoryResponseGroup, ItemResponseGroup, PagedList

DEFAULT_PAGE_SIZE = 20


# ==================== Search Criteria ====================


@dataclass
class ProductSearchCriteria:
    """Criteria for a product search"""

    keyword: str | None = None
    vendor_id: str | None = None
    outline: str | None = None
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    response_group: ItemResponseGroup = ItemResponseGroup.ITEM_MEDIUM

    def clone(self) -> "ProductSearchCriteria":
        return replace(self)


@dataclass
class CategorySearchCriteria:
    """Criteria for a category search"""

    keyword: str | None = None
    outline: str | None = None
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    response_group: CategoryResponseGroup = CategoryResponseGroup.INFO

    def clone(self) -> "CategorySearchCriteria":
        return replace(self)


# ==================== Search Results ====================


@dataclass(frozen=True)
class AggregationItem:
    """One facet value and its hit count"""

    value: str
    count: int = 0
    label: str | None = None


@dataclass(frozen=True)
class Aggregation:
    """Facet of a search result (e.g. color, brand)"""

    field: str
    label: str | None = None
    items: list[AggregationItem] = field(default_factory=list)


@dataclass
class ProductSearchResponse:
    """Raw page returned by the search API"""

    products: list[Product]
    total_count: int = 0
    aggregations: list[Aggregation] = field(default_factory=list)


@dataclass
class CatalogSearchResult:
    """Enriched product search result"""

    products: PagedList[Product]
    aggregations: list[Aggregation] = field(default_factory=list)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ProductSearchCriteria",
    "CategorySearchCriteria",
    "AggregationItem",
    "Aggregation",
    "ProductSearchResponse",
    "CatalogSearchResult",
]
