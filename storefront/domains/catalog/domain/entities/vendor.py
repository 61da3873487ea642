"""
Vendor Entity for the Catalog Domain
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from storefront.core.domain import Entity

if TYPE_CHECKING:
    from storefront.domains.catalog.application.services.pagers import ProductPager


@dataclass(eq=False)
class Vendor(Entity[str]):
    """Seller of a product. ``products`` lists the vendor's catalog on demand."""

    name: str = ""
    products: ProductPager | None = None
