"""JSON codec for values made of dicts, lists, strings, numbers, booleans
and None. Produces human-readable entries and never executes code on read.
"""

import json
from typing import Any

from fscache.domain.exceptions import CorruptEntryError
from fscache.domain.interfaces.codec import ItemCodec
from fscache.domain.models.cache import CacheItem
from fscache.infrastructure.codec.header import check_expires_at, pack_header, unpack_payload

CODEC_ID = b"J"


class JsonItemCodec(ItemCodec[Any]):
    """Encodes items as ``{"data": ..., "expires_at": ...}``."""

    def encode(self, item: CacheItem) -> bytes:
        try:
            payload = json.dumps(
                {"data": item.data, "expires_at": item.expires_at},
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise ValueError(f"Value is not JSON serializable: {e}") from e
        return pack_header(CODEC_ID) + payload.encode("utf-8")

    def decode(self, data: bytes) -> CacheItem:
        payload = unpack_payload(data, CODEC_ID)
        try:
            decoded = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptEntryError(f"Failed to parse JSON entry: {e}") from e

        if not isinstance(decoded, dict) or set(decoded) != {"data", "expires_at"}:
            raise CorruptEntryError("JSON entry must hold exactly 'data' and 'expires_at'")
        check_expires_at(decoded["expires_at"])
        return CacheItem(data=decoded["data"], expires_at=decoded["expires_at"])
