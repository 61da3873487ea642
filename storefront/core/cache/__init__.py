"""
Cache Module

Get-or-compute caching with named regions and explicit invalidation.
"""

from storefront.core.cache.local_cache import CacheEntry, LocalCacheManager

__all__ = ["CacheEntry", "LocalCacheManager"]
