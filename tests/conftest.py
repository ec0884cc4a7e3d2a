import pytest
from pathlib import Path
from typing import Iterable
from typer.testing import CliRunner

from fscache.core.key_path_resolver import KeyPathResolver
from fscache.core.services.cache_store import CacheStore
from fscache.domain.interfaces.clock import Clock
from fscache.domain.interfaces.filesystem import DirectoryNode, FileNode, FileSystem, Node, NotExistNode
from fscache.domain.models.common import FilePath
from fscache.infrastructure.codec.pickle_codec import PickleItemCodec
from fscache.infrastructure.config.settings import clear_test_config
from fscache.infrastructure.filesystem.local_fs import LocalFile, LocalFileSystem


class FakeClock(Clock):
    """Manually advanced clock so TTL tests never sleep."""

    def __init__(self, start: float = 1_000_000.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class _FailingFile(LocalFile):
    async def put_contents(self, data: bytes) -> None:
        raise OSError(f"simulated write failure for {self.path}")


class _FlakyNotExist(NotExistNode):
    def __init__(self, inner: NotExistNode):
        super().__init__(inner.path)
        self._inner = inner

    async def create_file(self) -> FileNode:
        await self._inner.create_file()
        return _FailingFile(self.path)

    async def create_directory(self) -> DirectoryNode:
        return await self._inner.create_directory()


class FlakyFileSystem(FileSystem):
    """Local disk whose writes fail for paths ending in one of ``failing_suffixes``."""

    def __init__(self, failing_suffixes: Iterable[str]):
        self._inner = LocalFileSystem()
        self.failing_suffixes = tuple(failing_suffixes)

    async def detect(self, path: FilePath) -> Node:
        node = await self._inner.detect(path)
        if not str(path).endswith(self.failing_suffixes):
            return node
        if isinstance(node, NotExistNode):
            return _FlakyNotExist(node)
        if isinstance(node, FileNode):
            return _FailingFile(node.path)
        return node


def build_store(root: Path, clock: Clock, file_system: FileSystem = None) -> CacheStore:
    file_system = file_system or LocalFileSystem()
    return CacheStore(
        file_system=file_system,
        resolver=KeyPathResolver(file_system, root),
        codec=PickleItemCodec(),
        clock=clock,
    )


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Cache root directory that does not exist until the first write."""
    return tmp_path / "cache"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(cache_root: Path, clock: FakeClock) -> CacheStore:
    """CacheStore on the local disk with a fake clock."""
    return build_store(cache_root, clock)


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path):
    """Keep tests independent of the developer's FSCACHE_* environment."""
    monkeypatch.setenv("FSCACHE_CACHE_ROOT", str(tmp_path / "configured-root"))
    monkeypatch.delenv("FSCACHE_CACHE_CODEC", raising=False)
    monkeypatch.delenv("FSCACHE_CACHE_DEFAULT_TTL", raising=False)
    monkeypatch.delenv("FSCACHE_LOGGING_FILE", raising=False)
    yield
    clear_test_config()
