"""
Response groups.

Bit flags selecting which optional facets a catalog fetch populates. Callers
compose them freely (``ITEM_INFO | INVENTORY``) and services test membership
with ``flag in group``.
"""

from enum import IntFlag


class ItemResponseGroup(IntFlag):
    """Facets of a product fetch."""

    NONE = 0
    ITEM_INFO = 1
    ITEM_ASSETS = 1 << 1
    ITEM_PROPERTIES = 1 << 2
    ITEM_ASSOCIATIONS = 1 << 3
    ITEM_EDITORIAL_REVIEWS = 1 << 4
    VARIATIONS = 1 << 5
    SEO = 1 << 6
    OUTLINES = 1 << 7
    INVENTORY = 1 << 8
    ITEM_WITH_PRICES = 1 << 9
    ITEM_WITH_DISCOUNTS = 1 << 10
    ITEM_WITH_VENDOR = 1 << 11

    ITEM_SMALL = ITEM_INFO | ITEM_ASSETS | SEO | OUTLINES
    ITEM_MEDIUM = ITEM_SMALL | ITEM_PROPERTIES | ITEM_EDITORIAL_REVIEWS | ITEM_WITH_PRICES
    ITEM_LARGE = (
        ITEM_MEDIUM | ITEM_ASSOCIATIONS | VARIATIONS | INVENTORY | ITEM_WITH_DISCOUNTS | ITEM_WITH_VENDOR
    )


class CategoryResponseGroup(IntFlag):
    """Facets of a category fetch."""

    NONE = 0
    INFO = 1
    WITH_IMAGES = 1 << 1
    WITH_PROPERTIES = 1 << 2
    WITH_SEO = 1 << 3
    WITH_OUTLINES = 1 << 4
    WITH_PARENTS = 1 << 5

    FULL = INFO | WITH_IMAGES | WITH_PROPERTIES | WITH_SEO | WITH_OUTLINES | WITH_PARENTS
