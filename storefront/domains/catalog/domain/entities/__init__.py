"""
Catalog Domain Entities
"""

from storefront.domains.catalog.domain.entities.category import Category
from storefront.domains.catalog.domain.entities.product import (
    CategoryAssociation,
    Inventory,
    Product,
    ProductAssociation,
    ProductPrice,
    TierPrice,
)
from storefront.domains.catalog.domain.entities.vendor import Vendor

__all__ = [
    "Category",
    "CategoryAssociation",
    "Inventory",
    "Product",
    "ProductAssociation",
    "ProductPrice",
    "TierPrice",
    "Vendor",
]
