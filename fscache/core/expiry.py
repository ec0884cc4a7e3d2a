"""Decides whether a stored item is stale."""

from fscache.domain.models.cache import CacheItem


class ExpiryPolicy:
    """Absolute-timestamp TTL policy."""

    def has_expired(self, item: CacheItem, now: float) -> bool:
        """An item expires once ``now`` reaches its ``expires_at``.

        Items without an expiry never expire.
        """
        return item.expires_at is not None and now >= item.expires_at
