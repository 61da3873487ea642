"""
On-demand paginated product views.

A pager keeps the search criteria and a search coroutine; every page request
re-issues the search for that page. Fetching a page never mutates the pager, so
the result depends only on (criteria, page number, page size, sort).
"""

from dataclasses import replace
from typing import AsyncIterator, Awaitable, Callable

from storefront.core.domain import ValidationException
from storefront.domains.catalog.application.dto import CatalogSearchResult, ProductSearchCriteria
from storefront.domains.catalog.domain.entities import Product
from storefront.domains.catalog.domain.value_objects import PagedList

ProductSearch = Callable[[ProductSearchCriteria], Awaitable[CatalogSearchResult]]


class ProductPager:
    """
    Lazily paginated product listing (products of a vendor, of a category...).

    Example:
        ```python
        pager = ProductPager(catalog.search_products, ProductSearchCriteria(vendor_id="v-1"))
        first = await pager.fetch_page()
        second = await pager.fetch_page(2)
        async for page in pager.pages():
            ...
        ```
    """

    def __init__(self, search: ProductSearch, criteria: ProductSearchCriteria):
        self._search = search
        self._criteria = criteria.clone()

    @property
    def criteria(self) -> ProductSearchCriteria:
        """Copy of the base criteria."""
        return self._criteria.clone()

    @property
    def page_number(self) -> int:
        return self._criteria.page_number

    @property
    def page_size(self) -> int:
        return self._criteria.page_size

    async def fetch_page(
        self,
        page_number: int | None = None,
        page_size: int | None = None,
        sort_by: str | None = None,
    ) -> PagedList[Product]:
        """
        Search one page.

        Args:
            page_number: 1-based page (defaults to the pager's start page)
            page_size: Page size (defaults to the criteria page size)
            sort_by: Sort expression (defaults to the criteria sort)

        Returns:
            The requested page
        """
        page_number = page_number if page_number is not None else self._criteria.page_number
        page_size = page_size if page_size is not None else self._criteria.page_size
        if page_number < 1 or page_size < 1:
            raise ValidationException("Page number and page size must be positive", field="page_number")

        criteria = replace(
            self._criteria,
            page_number=page_number,
            page_size=page_size,
            sort_by=sort_by if sort_by is not None else self._criteria.sort_by,
        )
        result = await self._search(criteria)
        return result.products

    async def pages(
        self, page_size: int | None = None, sort_by: str | None = None
    ) -> AsyncIterator[PagedList[Product]]:
        """Iterate every page from the first one."""
        page_number = 1
        while True:
            page = await self.fetch_page(page_number, page_size, sort_by)
            yield page
            if not page.has_next_page:
                return
            page_number += 1
