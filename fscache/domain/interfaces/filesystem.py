"""Interface for interacting with the file system.

Defines the node model the cache engine consumes: a path is detected into
one of three node variants (absent, file, directory), each exposing only the
asynchronous operations that make sense for it. This keeps the engine
independent of the concrete storage (local disk, in-memory fakes, etc.).
"""

import abc
import posixpath
from typing import List

from fscache.domain.models.common import FilePath


class Node(abc.ABC):
    """A filesystem entity at a given path."""

    def __init__(self, path: FilePath):
        self._path = FilePath(str(path))

    @property
    def path(self) -> FilePath:
        """Full path of the node."""
        return self._path

    @property
    def name(self) -> str:
        """Last segment of the node's path."""
        return posixpath.basename(self._path.replace("\\", "/").rstrip("/"))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._path!r})"


class FileNode(Node):
    """A regular file holding a cache entry."""

    @abc.abstractmethod
    async def get_contents(self) -> bytes:
        """Reads the whole file.

        Raises:
            OSError: If the file cannot be read.
        """
        pass

    @abc.abstractmethod
    async def put_contents(self, data: bytes) -> None:
        """Replaces the file's contents with ``data``.

        Raises:
            OSError: If the file cannot be written.
        """
        pass

    @abc.abstractmethod
    async def unlink(self) -> None:
        """Removes the file.

        Raises:
            OSError: If the file cannot be removed.
        """
        pass


class DirectoryNode(Node):
    """A directory under the cache root."""

    @abc.abstractmethod
    async def ls(self) -> List[Node]:
        """Lists the immediate children of the directory.

        Raises:
            OSError: If the directory cannot be listed.
        """
        pass

    @abc.abstractmethod
    async def remove(self) -> None:
        """Removes the directory, which must be empty.

        Raises:
            OSError: If the directory is not empty or cannot be removed.
        """
        pass


class NotExistNode(Node):
    """A path with nothing on it."""

    @abc.abstractmethod
    async def create_file(self) -> FileNode:
        """Creates an empty file at the path (never truncating a file
        created concurrently).

        Raises:
            OSError: If the file cannot be created.
        """
        pass

    @abc.abstractmethod
    async def create_directory(self) -> DirectoryNode:
        """Creates a directory at the path, including missing parents.

        A directory created concurrently by someone else is not an error.

        Raises:
            OSError: If the directory cannot be created.
        """
        pass


class FileSystem(abc.ABC):
    """Abstract Base Class for file system operations."""

    @abc.abstractmethod
    async def detect(self, path: FilePath) -> Node:
        """Detects what lives at ``path``.

        Args:
            path: The path to inspect.

        Returns:
            A NotExistNode, FileNode or DirectoryNode.

        Raises:
            OSError: If the path cannot be inspected (e.g. permission denied).
        """
        pass
