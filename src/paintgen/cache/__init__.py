"""Cache subsystem: in-memory store with fingerprinted keys."""

from paintgen.cache.keys import fingerprint_key, hash_image
from paintgen.cache.stats import CacheEntry, CacheStats
from paintgen.cache.store import CacheStore

__all__ = [
    "CacheStore",
    "CacheEntry",
    "CacheStats",
    "fingerprint_key",
    "hash_image",
]
