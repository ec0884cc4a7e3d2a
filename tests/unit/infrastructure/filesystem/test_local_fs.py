import pytest
from pathlib import Path

from fscache.infrastructure.filesystem.local_fs import LocalDirectory, LocalFile, LocalFileSystem, LocalNotExist


@pytest.fixture
def fs() -> LocalFileSystem:
    return LocalFileSystem()


@pytest.mark.asyncio
async def test_detect_variants(fs: LocalFileSystem, tmp_path: Path):
    (tmp_path / "file").write_bytes(b"x")
    (tmp_path / "dir").mkdir()

    assert isinstance(await fs.detect(str(tmp_path / "file")), LocalFile)
    assert isinstance(await fs.detect(str(tmp_path / "dir")), LocalDirectory)
    assert isinstance(await fs.detect(str(tmp_path / "missing")), LocalNotExist)
    # A path below a regular file does not exist either
    assert isinstance(await fs.detect(str(tmp_path / "file" / "child")), LocalNotExist)


@pytest.mark.asyncio
async def test_node_name_and_path(fs: LocalFileSystem, tmp_path: Path):
    (tmp_path / "dir").mkdir()
    node = await fs.detect(str(tmp_path / "dir"))
    assert node.name == "dir"
    assert node.path == str(tmp_path / "dir")


@pytest.mark.asyncio
async def test_create_write_read_unlink(fs: LocalFileSystem, tmp_path: Path):
    target = tmp_path / "entry"
    missing = await fs.detect(str(target))

    file_node = await missing.create_file()
    assert target.read_bytes() == b""

    await file_node.put_contents(b"payload")
    assert await file_node.get_contents() == b"payload"

    await file_node.put_contents(b"new")
    assert target.read_bytes() == b"new"
    # No temp files left behind
    assert [p.name for p in tmp_path.iterdir()] == ["entry"]

    await file_node.unlink()
    assert not target.exists()


@pytest.mark.asyncio
async def test_create_file_does_not_truncate(fs: LocalFileSystem, tmp_path: Path):
    target = tmp_path / "raced"
    missing = await fs.detect(str(target))
    target.write_bytes(b"written meanwhile")

    await missing.create_file()

    assert target.read_bytes() == b"written meanwhile"


@pytest.mark.asyncio
async def test_create_directory_is_recursive_and_race_tolerant(fs: LocalFileSystem, tmp_path: Path):
    target = tmp_path / "a" / "b"
    missing = await fs.detect(str(target))
    target.mkdir(parents=True)  # someone else got there first

    directory = await missing.create_directory()

    assert isinstance(directory, LocalDirectory)
    assert target.is_dir()


@pytest.mark.asyncio
async def test_ls_and_remove(fs: LocalFileSystem, tmp_path: Path):
    (tmp_path / "d" / "sub").mkdir(parents=True)
    (tmp_path / "d" / "f").write_bytes(b"1")
    directory = await fs.detect(str(tmp_path / "d"))

    children = await directory.ls()

    assert sorted(child.name for child in children) == ["f", "sub"]
    kinds = {child.name: type(child) for child in children}
    assert kinds == {"f": LocalFile, "sub": LocalDirectory}

    with pytest.raises(OSError):
        await directory.remove()  # not empty

    for child in children:
        if isinstance(child, LocalFile):
            await child.unlink()
        else:
            await child.remove()
    await directory.remove()
    assert not (tmp_path / "d").exists()


@pytest.mark.asyncio
async def test_failed_write_cleans_temp_file(fs: LocalFileSystem, tmp_path: Path, mocker):
    (tmp_path / "entry").write_bytes(b"old")
    node = await fs.detect(str(tmp_path / "entry"))
    mocker.patch("fscache.infrastructure.filesystem.local_fs.aiofiles.os.replace", side_effect=OSError("disk full"))

    with pytest.raises(OSError, match="disk full"):
        await node.put_contents(b"new")

    assert (tmp_path / "entry").read_bytes() == b"old"
    assert [p.name for p in tmp_path.iterdir()] == ["entry"]
