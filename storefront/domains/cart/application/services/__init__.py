from storefront.domains.cart.application.services.cart_builder import CartBuilder, cart_cache_key, cart_id_cache_key

__all__ = ["CartBuilder", "cart_cache_key", "cart_id_cache_key"]
