"""Item codecs: byte formats for cache entries on disk.

Every encoded entry starts with a small header so the format can evolve:

    b"FSC\\x00" | codec id (1 byte) | format version (1 byte) | payload
"""

from typing import Dict, Type

from fscache.domain.interfaces.codec import ItemCodec
from fscache.infrastructure.codec.json_codec import JsonItemCodec
from fscache.infrastructure.codec.pickle_codec import PickleItemCodec

CODECS: Dict[str, Type[ItemCodec]] = {
    "pickle": PickleItemCodec,
    "json": JsonItemCodec,
}


def create_codec(name: str) -> ItemCodec:
    """Instantiates the codec registered under ``name``.

    Raises:
        ValueError: If no codec has that name.
    """
    try:
        return CODECS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown cache codec '{name}'. Choose one of: {', '.join(sorted(CODECS))}") from None
