"""Maps cache keys to paths under the cache root.

A key is used verbatim as a path relative to the root, so ``a/b/c`` lives
in file ``c`` inside directories ``a`` and ``a/b``.
"""

import logging
import os
from typing import Optional, Union

from fscache.domain.exceptions import InvalidKeyError
from fscache.domain.interfaces.filesystem import FileSystem, NotExistNode
from fscache.domain.models.common import KEY_SEPARATOR, CacheKey, FilePath

logger = logging.getLogger(__name__)


class KeyPathResolver:
    """Resolves keys against a root directory and prepares parent directories."""

    def __init__(self, file_system: FileSystem, root: Union[str, os.PathLike]):
        self.file_system = file_system
        root_str = os.fspath(root)
        # Concatenation below relies on the trailing separator
        if not root_str.endswith(("/", os.sep)):
            root_str += os.sep
        self.root = FilePath(root_str)

    def validate(self, key: CacheKey) -> None:
        """Rejects keys that do not map to a path strictly below the root.

        Raises:
            InvalidKeyError: For empty or absolute keys, keys with a NUL byte,
                or keys containing an empty, '.' or '..' segment.
        """
        if not isinstance(key, str) or not key:
            raise InvalidKeyError(f"Cache key must be a non-empty string, got {key!r}")
        if "\x00" in key:
            raise InvalidKeyError(f"Cache key contains a NUL byte: {key!r}")
        if key.startswith(KEY_SEPARATOR) or os.path.isabs(key):
            raise InvalidKeyError(f"Cache key must be relative: {key!r}")
        for segment in key.split(KEY_SEPARATOR):
            if segment in ("", ".", ".."):
                raise InvalidKeyError(f"Cache key has an invalid segment: {key!r}")

    def resolve(self, key: CacheKey) -> FilePath:
        """Returns the path of the file holding ``key``.

        Raises:
            InvalidKeyError: If the key is not valid.
        """
        self.validate(key)
        return FilePath(self.root + key)

    def parent_of(self, key: CacheKey) -> Optional[str]:
        """Strips the last segment of a hierarchical key; None for flat keys."""
        if KEY_SEPARATOR not in key:
            return None
        return key.rsplit(KEY_SEPARATOR, 1)[0]

    async def ensure_parent(self, key: CacheKey) -> None:
        """Creates the directory holding ``key`` if it is missing.

        For a hierarchical key that is the whole chain above its last
        segment; for a flat key it is the cache root. Only a NotExist node
        is created; any existing node is accepted as is and a directory
        created concurrently is not an error.

        Raises:
            InvalidKeyError: If the key is not valid.
            OSError: If the directory cannot be inspected or created.
        """
        self.validate(key)
        parent = self.parent_of(key)
        parent_path = self.root if parent is None else FilePath(self.root + parent)

        node = await self.file_system.detect(parent_path)
        if isinstance(node, NotExistNode):
            logger.debug(f"Creating cache directory: {node.path}")
            await node.create_directory()
