"""Wires a CacheStore from its collaborators.

Library users call create_cache_store(); the CLI builds its store the same
way from configuration.
"""

import logging
import os
from typing import Optional, Union

from fscache.core.key_path_resolver import KeyPathResolver
from fscache.core.services.cache_store import CacheStore
from fscache.domain.interfaces.clock import Clock
from fscache.domain.interfaces.codec import ItemCodec
from fscache.domain.interfaces.filesystem import FileSystem
from fscache.infrastructure.clock.clocks import create_clock
from fscache.infrastructure.codec import create_codec
from fscache.infrastructure.filesystem.local_fs import LocalFileSystem

logger = logging.getLogger(__name__)


def create_cache_store(
    root: Union[str, os.PathLike],
    codec: Union[str, ItemCodec] = "pickle",
    high_resolution_clock: bool = True,
    file_system: Optional[FileSystem] = None,
    clock: Optional[Clock] = None,
) -> CacheStore:
    """Builds a CacheStore rooted at ``root``.

    The root directory is created by the first write; until then a missing
    root reads as an empty cache.

    Args:
        root: Directory holding the cache entries.
        codec: Codec instance, or the name of a registered codec.
        high_resolution_clock: Pick the nanosecond clock over time.time().
        file_system: Filesystem adapter; the local disk by default.
        clock: Explicit clock, overriding ``high_resolution_clock``.

    Raises:
        ValueError: If ``codec`` names an unknown codec.
    """
    file_system = file_system or LocalFileSystem()
    item_codec = create_codec(codec) if isinstance(codec, str) else codec
    store = CacheStore(
        file_system=file_system,
        resolver=KeyPathResolver(file_system, root),
        codec=item_codec,
        clock=clock or create_clock(high_resolution_clock),
    )
    logger.info(f"Cache store ready at {store.resolver.root} (codec={item_codec.__class__.__name__})")
    return store
