from storefront.domains.catalog.domain.value_objects.paging import PagedList
from storefront.domains.catalog.domain.value_objects.response_group import CategoryResponseGroup, ItemResponseGroup

__all__ = ["CategoryResponseGroup", "ItemResponseGroup", "PagedList"]
