from storefront.domains.cart.infrastructure.store.http_cart_store import HttpCartStore
from storefront.domains.cart.infrastructure.store.in_memory_cart_store import InMemoryCartStore

__all__ = ["HttpCartStore", "InMemoryCartStore"]
