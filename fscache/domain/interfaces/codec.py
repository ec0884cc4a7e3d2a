"""Interface for turning cache items into bytes and back."""

import abc
from typing import Generic, TypeVar

from fscache.domain.models.cache import CacheItem

T = TypeVar("T")


class ItemCodec(abc.ABC, Generic[T]):
    """Encodes a CacheItem whose data is of type ``T``."""

    @abc.abstractmethod
    def encode(self, item: CacheItem) -> bytes:
        """Serializes ``item``.

        Raises:
            ValueError: If the item's data cannot be marshaled by this codec.
        """
        pass

    @abc.abstractmethod
    def decode(self, data: bytes) -> CacheItem:
        """Deserializes bytes produced by encode().

        An expired item is still a valid decode; expiry is not the codec's
        concern.

        Raises:
            CorruptEntryError: If ``data`` is not a valid encoded item.
        """
        pass
