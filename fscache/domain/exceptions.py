"""Domain exceptions raised inside the cache engine.

These never escape the public cache contract; CacheStore converts them into
an Outcome. Filesystem adapters raise plain OSError for I/O faults.
"""


class FsCacheError(Exception):
    """Base class for cache engine errors."""


class CorruptEntryError(FsCacheError):
    """Stored bytes could not be decoded into a CacheItem."""


class InvalidKeyError(FsCacheError, ValueError):
    """A cache key cannot be mapped to a path under the cache root."""
