"""
Category Entity for the Catalog Domain
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from storefront.core.domain import Entity

if TYPE_CHECKING:
    from storefront.domains.catalog.application.services.pagers import ProductPager


@dataclass(eq=False)
class Category(Entity[str]):
    """Catalog category. ``outline`` is the slash-separated path from the catalog root."""

    code: str | None = None
    name: str = ""
    outline: str | None = None
    parent_id: str | None = None
    image_url: str | None = None
    products: ProductPager | None = None
