"""Filesystem-backed implementation of the CacheService interface.

Each key is stored as one file under the cache root holding the encoded
(value, expires_at) pair. Nothing is kept in memory between calls: every
operation re-reads the filesystem. Expired entries are purged lazily, when
get() reads them.

Every operation has an explicit-result variant (get_result, set_result,
delete_result) returning an Outcome; the public CacheService methods
collapse it to a boolean or the caller's default and never raise.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fscache.core.expiry import ExpiryPolicy
from fscache.core.key_path_resolver import KeyPathResolver
from fscache.core.services.tree_walker import TreeWalker
from fscache.domain.exceptions import CorruptEntryError, InvalidKeyError
from fscache.domain.interfaces.cache import CacheService, Ttl
from fscache.domain.interfaces.clock import Clock
from fscache.domain.interfaces.codec import ItemCodec
from fscache.domain.interfaces.filesystem import FileNode, FileSystem, NotExistNode
from fscache.domain.models.cache import CacheItem, CacheResult, ClearFailure, ClearReport, Outcome
from fscache.domain.models.common import CacheKey

logger = logging.getLogger(__name__)


class CacheStore(CacheService):
    """Persistent asynchronous key/value cache on a filesystem."""

    def __init__(
        self,
        file_system: FileSystem,
        resolver: KeyPathResolver,
        codec: ItemCodec,
        clock: Clock,
        expiry_policy: Optional[ExpiryPolicy] = None,
        tree_walker: Optional[TreeWalker] = None,
    ):
        """Initializes the store with its collaborators."""
        self.file_system = file_system
        self.resolver = resolver
        self.codec = codec
        self.clock = clock
        self.expiry_policy = expiry_policy or ExpiryPolicy()
        self.tree_walker = tree_walker or TreeWalker(file_system)
        logger.debug(f"CacheStore initialized at root: {resolver.root}")

    # --- Explicit result operations ---

    async def get_result(self, key: CacheKey) -> CacheResult:
        """Reads ``key`` and reports why it was or was not found."""
        try:
            path = self.resolver.resolve(key)
            node = await self.file_system.detect(path)
        except InvalidKeyError as e:
            logger.warning(f"Rejected cache key on read: {e}")
            return CacheResult(Outcome.INVALID_KEY)
        except OSError as e:
            logger.warning(f"Failed to inspect cache entry '{key}': {e}")
            return CacheResult(Outcome.IO_FAILURE)

        if not isinstance(node, FileNode):
            logger.debug(f"Cache miss for key: {key}")
            return CacheResult(Outcome.NOT_FOUND)

        try:
            contents = await node.get_contents()
        except OSError as e:
            logger.warning(f"Failed to read cache file {node.path}: {e}")
            return CacheResult(Outcome.IO_FAILURE)

        try:
            item = self.codec.decode(contents)
        except CorruptEntryError as e:
            logger.warning(f"Corrupt cache entry '{key}': {e}. Removing.")
            await self._discard(node)
            return CacheResult(Outcome.CORRUPT_ENTRY)

        if self.expiry_policy.has_expired(item, self.clock.now()):
            logger.debug(f"Cache entry expired for key: {key}. Removing file.")
            await self._discard(node)
            return CacheResult(Outcome.NOT_FOUND)

        logger.debug(f"Cache hit for key: {key}")
        return CacheResult(Outcome.SUCCESS, item.data)

    async def set_result(self, key: CacheKey, value: Any, ttl: Ttl = None) -> Outcome:
        """Writes ``value`` under ``key`` and reports the outcome."""
        try:
            path = self.resolver.resolve(key)
        except InvalidKeyError as e:
            logger.warning(f"Rejected cache key on write: {e}")
            return Outcome.INVALID_KEY

        try:
            item = CacheItem(data=value, expires_at=self._expires_at(ttl))
            data = self.codec.encode(item)
        except (TypeError, ValueError, ArithmeticError) as e:
            logger.warning(f"Cannot encode value for key '{key}': {e}")
            return Outcome.IO_FAILURE

        try:
            await self.resolver.ensure_parent(key)
            node = await self.file_system.detect(path)
            if isinstance(node, NotExistNode):
                node = await node.create_file()
            if not isinstance(node, FileNode):
                logger.warning(f"Cannot store key '{key}': {path} is a directory.")
                return Outcome.IO_FAILURE
            await node.put_contents(data)
        except OSError as e:
            logger.error(f"Failed to write cache entry '{key}': {e}")
            return Outcome.IO_FAILURE

        logger.debug(f"Stored cache entry: key={key}, expires_at={item.expires_at}")
        return Outcome.SUCCESS

    async def delete_result(self, key: CacheKey) -> Outcome:
        """Removes ``key`` and reports the outcome."""
        try:
            node = await self.file_system.detect(self.resolver.resolve(key))
            if not isinstance(node, FileNode):
                return Outcome.NOT_FOUND
            await node.unlink()
        except InvalidKeyError as e:
            logger.warning(f"Rejected cache key on delete: {e}")
            return Outcome.INVALID_KEY
        except OSError as e:
            logger.warning(f"Failed to delete cache entry '{key}': {e}")
            return Outcome.IO_FAILURE

        logger.debug(f"Deleted cache entry: key={key}")
        return Outcome.SUCCESS

    # --- CacheService Interface Implementation ---

    async def get(self, key: CacheKey, default: Any = None) -> Any:
        result = await self.get_result(key)
        return result.value if result.outcome.ok else default

    async def set(self, key: CacheKey, value: Any, ttl: Ttl = None) -> bool:
        return (await self.set_result(key, value, ttl)).ok

    async def delete(self, key: CacheKey) -> bool:
        return (await self.delete_result(key)).ok

    async def has(self, key: CacheKey) -> bool:
        # Existence only; TTL is enforced by get()
        try:
            node = await self.file_system.detect(self.resolver.resolve(key))
        except (InvalidKeyError, OSError) as e:
            logger.debug(f"has('{key}') treated as missing: {e}")
            return False
        return isinstance(node, FileNode)

    async def get_multiple(self, keys: Iterable[CacheKey], default: Any = None) -> Dict[CacheKey, Any]:
        keys = list(keys)
        values = await asyncio.gather(*(self.get(key, default) for key in keys))
        return dict(zip(keys, values))

    async def set_multiple(self, values: Mapping[CacheKey, Any], ttl: Ttl = None) -> bool:
        outcomes = await asyncio.gather(*(
            self.set_result(key, value, ttl) for key, value in values.items()
        ))
        return self._all_succeeded("set", list(values), outcomes)

    async def delete_multiple(self, keys: Iterable[CacheKey]) -> bool:
        keys = list(keys)
        outcomes = await asyncio.gather(*(self.delete_result(key) for key in keys))
        return self._all_succeeded("delete", keys, outcomes)

    async def clear(self) -> ClearReport:
        root = self.resolver.root
        try:
            nodes = await self.tree_walker.discover(root)
        except OSError as e:
            logger.error(f"Failed to enumerate cache root {root}: {e}")
            return ClearReport(failures=[ClearFailure(path=root, error=str(e))])

        report = await self.tree_walker.delete_depth_ordered(nodes)
        if report.succeeded:
            logger.info(f"Cleared cache at {root}: {len(report.removed)} node(s) removed.")
        else:
            logger.warning(
                f"Cache clear at {root} incomplete: {report.failure_count} node(s) "
                f"could not be removed, {len(report.removed)} removed."
            )
        return report

    # --- Helpers ---

    def _expires_at(self, ttl: Ttl) -> Optional[float]:
        if ttl is None:
            return None
        if isinstance(ttl, timedelta):
            ttl = ttl.total_seconds()
        if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
            raise TypeError(f"TTL must be seconds, a timedelta or None, got {ttl!r}")
        return self.clock.now() + ttl

    async def _discard(self, node: FileNode) -> None:
        """Best-effort removal of a stale or corrupt entry."""
        try:
            await node.unlink()
        except OSError as e:
            logger.debug(f"Could not remove {node.path}: {e}")

    def _all_succeeded(self, operation: str, keys: List[CacheKey], outcomes: List[Outcome]) -> bool:
        failed = [key for key, outcome in zip(keys, outcomes) if not outcome.ok]
        if failed:
            logger.debug(f"Batch {operation} failed for {len(failed)} of {len(keys)} key(s): {failed}")
        return not failed
