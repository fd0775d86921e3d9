"""
Cache Module

Bounded TTL cache fronting repeated remote metadata lookups.

Usage:
    from cache import TTLCache

    cache = TTLCache(max_entries=100, default_ttl_ms=300_000)
"""

from cache.ttl_cache import CacheEntry, CacheStats, TTLCache, monotonic_ms

__all__ = [
    "CacheEntry",
    "CacheStats",
    "TTLCache",
    "monotonic_ms",
]
