"""Concrete implementation of the FileSystem interface for the local disk.

Uses `aiofiles` for async file I/O and its `aiofiles.os` wrappers for
stat/listing/removal so no call blocks the event loop.
"""

import asyncio
import logging
import os
import stat
import uuid
from typing import List

import aiofiles
import aiofiles.os

# Domain Layer Imports
from fscache.domain.interfaces.filesystem import DirectoryNode, FileNode, FileSystem, Node, NotExistNode
from fscache.domain.models.common import FilePath

logger = logging.getLogger(__name__)


class LocalFile(FileNode):
    """A regular file on the local disk."""

    async def get_contents(self) -> bytes:
        async with aiofiles.open(self.path, mode='rb') as f:
            return await f.read()

    async def put_contents(self, data: bytes) -> None:
        """Writes through a temp file and os.replace so readers never see a
        partially written entry."""
        temp_path = f"{self.path}.{uuid.uuid4().hex}.tmp"
        try:
            async with aiofiles.open(temp_path, mode='wb') as f:
                await f.write(data)
            await aiofiles.os.replace(temp_path, self.path)
        except OSError:
            try:
                await aiofiles.os.remove(temp_path)
            except OSError:
                logger.debug(f"Temp file {temp_path} already gone after failed write")
            raise
        logger.debug(f"Wrote {len(data)} bytes to {self.path}")

    async def unlink(self) -> None:
        await aiofiles.os.remove(self.path)


class LocalDirectory(DirectoryNode):
    """A directory on the local disk."""

    def __init__(self, path: FilePath, file_system: "LocalFileSystem"):
        super().__init__(path)
        self._file_system = file_system

    async def ls(self) -> List[Node]:
        names = await aiofiles.os.listdir(self.path)
        return list(await asyncio.gather(*(
            self._file_system.detect(FilePath(os.path.join(self.path, name)))
            for name in sorted(names)
        )))

    async def remove(self) -> None:
        await aiofiles.os.rmdir(self.path)


class LocalNotExist(NotExistNode):
    """A path with nothing on the local disk."""

    def __init__(self, path: FilePath, file_system: "LocalFileSystem"):
        super().__init__(path)
        self._file_system = file_system

    async def create_file(self) -> FileNode:
        # Append mode creates the file without truncating a concurrent writer's data
        async with aiofiles.open(self.path, mode='ab'):
            pass
        logger.debug(f"Created file: {self.path}")
        return LocalFile(self.path)

    async def create_directory(self) -> DirectoryNode:
        await aiofiles.os.makedirs(self.path, exist_ok=True)
        logger.debug(f"Created directory: {self.path}")
        return LocalDirectory(self.path, self._file_system)


class LocalFileSystem(FileSystem):
    """Implementation of FileSystem for the local disk."""

    def __init__(self):
        """Initializes the LocalFileSystem adapter."""
        logger.debug("LocalFileSystem initialized.")

    async def detect(self, path: FilePath) -> Node:
        """Stats ``path`` asynchronously and wraps it in the matching node."""
        try:
            st = await aiofiles.os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return LocalNotExist(path, self)
        if stat.S_ISDIR(st.st_mode):
            return LocalDirectory(path, self)
        return LocalFile(path)
