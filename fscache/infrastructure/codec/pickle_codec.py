"""Pickle-based codec: stores any picklable Python value.

Only read cache directories you trust; unpickling runs code chosen by
whoever wrote the file.
"""

import logging
import pickle
from typing import Any

from fscache.domain.exceptions import CorruptEntryError
from fscache.domain.interfaces.codec import ItemCodec
from fscache.domain.models.cache import CacheItem
from fscache.infrastructure.codec.header import check_expires_at, pack_header, unpack_payload

logger = logging.getLogger(__name__)

CODEC_ID = b"P"
# Pinned so files stay readable across interpreter upgrades
PICKLE_PROTOCOL = 4


class PickleItemCodec(ItemCodec[Any]):
    """Encodes items as a pickled ``(data, expires_at)`` tuple."""

    def encode(self, item: CacheItem) -> bytes:
        try:
            payload = pickle.dumps((item.data, item.expires_at), protocol=PICKLE_PROTOCOL)
        except Exception as e:
            # __reduce__ and deep nesting (RecursionError) can raise anything
            raise ValueError(f"Value cannot be pickled: {e}") from e
        return pack_header(CODEC_ID) + payload

    def decode(self, data: bytes) -> CacheItem:
        payload = unpack_payload(data, CODEC_ID)
        try:
            decoded = pickle.loads(payload)
        except Exception as e:
            # Unpickling garbage can raise nearly anything
            raise CorruptEntryError(f"Failed to unpickle entry: {e}") from e

        if not isinstance(decoded, tuple) or len(decoded) != 2:
            raise CorruptEntryError(f"Unexpected pickled entry structure: {type(decoded).__name__}")
        value, expires_at = decoded
        check_expires_at(expires_at)
        return CacheItem(data=value, expires_at=expires_at)
