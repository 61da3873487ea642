"""
Cart Infrastructure Layer

Cart store adapters.
"""

from storefront.domains.cart.infrastructure.store import HttpCartStore, InMemoryCartStore

__all__ = ["HttpCartStore", "InMemoryCartStore"]
