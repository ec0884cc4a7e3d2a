"""Interface for the cache.

Defines the asynchronous contract for storing, retrieving and removing
cached values with an optional TTL. Implementations never raise to the
caller: failures fold into a boolean or the supplied default. The only
operation reporting failure detail is clear().
"""

import abc
from datetime import timedelta
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from fscache.domain.models.cache import ClearReport
from fscache.domain.models.common import CacheKey

# Seconds, a timedelta, or None for "never expires"
Ttl = Optional[Union[int, float, timedelta]]


class CacheService(abc.ABC):
    """Abstract Base Class for cache operations."""

    @abc.abstractmethod
    async def get(self, key: CacheKey, default: Any = None) -> Any:
        """Retrieves a value asynchronously.

        Expired or undecodable entries are removed on the way and reported
        as a miss.

        Args:
            key: The cache key to retrieve.
            default: Returned when the key is missing, expired or corrupt.

        Returns:
            The cached value, or ``default``.
        """
        pass

    @abc.abstractmethod
    async def set(self, key: CacheKey, value: Any, ttl: Ttl = None) -> bool:
        """Stores a value asynchronously.

        Args:
            key: The cache key. '/' creates intermediate directories.
            value: The value to store.
            ttl: Time-to-live; None means the entry never expires.

        Returns:
            True if the entry was written, False otherwise.
        """
        pass

    @abc.abstractmethod
    async def delete(self, key: CacheKey) -> bool:
        """Deletes an entry asynchronously.

        Returns:
            True if an entry was removed, False if there was none or the
            removal failed.
        """
        pass

    @abc.abstractmethod
    async def has(self, key: CacheKey) -> bool:
        """Checks whether an entry exists for ``key``.

        NOTE: This does not look at the TTL. An entry that has expired but
        was not read since still reports True; only get() purges expired
        entries.

        Returns:
            True if a file exists at the key's path.
        """
        pass

    @abc.abstractmethod
    async def get_multiple(self, keys: Iterable[CacheKey], default: Any = None) -> Dict[CacheKey, Any]:
        """Retrieves several values concurrently.

        Returns:
            A mapping holding every requested key, with ``default`` for misses.
        """
        pass

    @abc.abstractmethod
    async def set_multiple(self, values: Mapping[CacheKey, Any], ttl: Ttl = None) -> bool:
        """Stores several values concurrently.

        Entries written before a failure are kept.

        Returns:
            True only if every entry was written.
        """
        pass

    @abc.abstractmethod
    async def delete_multiple(self, keys: Iterable[CacheKey]) -> bool:
        """Deletes several entries concurrently.

        Returns:
            True only if every entry was removed.
        """
        pass

    @abc.abstractmethod
    async def clear(self) -> ClearReport:
        """Removes every entry and directory under the cache root.

        Returns:
            A report listing removed nodes and the ones that could not be
            removed.
        """
        pass
