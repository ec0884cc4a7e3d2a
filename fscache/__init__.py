"""fscache: a persistent, asynchronous key/value cache stored on a filesystem.

Typical use::

    store = create_cache_store("/var/cache/myapp")
    await store.set("users/42", profile, ttl=300)
    profile = await store.get("users/42")
"""

from fscache.core.factory import create_cache_store
from fscache.core.services.cache_store import CacheStore
from fscache.domain.models.cache import CacheItem, CacheResult, ClearFailure, ClearReport, Outcome

__all__ = [
    "CacheItem",
    "CacheResult",
    "CacheStore",
    "ClearFailure",
    "ClearReport",
    "Outcome",
    "create_cache_store",
]
