import pytest
from pathlib import Path
from typer.testing import CliRunner

from fscache.main import app

# These fixtures are defined in tests/conftest.py:
# runner: CliRunner
# isolated_config: points FSCACHE_CACHE_ROOT at a temp directory


@pytest.fixture(autouse=True)
def quiet_logging(mocker):
    """Leave pytest's logging handlers alone while the CLI configures logging."""
    return mocker.patch("fscache.main.setup_logging")


@pytest.fixture
def cli(runner: CliRunner, tmp_path: Path):
    root = tmp_path / "cli-cache"

    def invoke(*args: str):
        return runner.invoke(app, ["--root", str(root), *args])

    invoke.root = root
    return invoke


def test_set_then_get(cli):
    result = cli("set", "greeting", "hello")
    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    assert (cli.root / "greeting").is_file()

    result = cli("get", "greeting")
    assert result.exit_code == 0
    assert "hello" in result.stdout


def test_get_missing_key(cli):
    result = cli("get", "absent")
    assert result.exit_code == 1
    assert "No cache entry" in result.stdout

    result = cli("get", "absent", "--default", "fallback")
    assert result.exit_code == 0
    assert "fallback" in result.stdout


def test_has_and_delete(cli):
    cli("set", "users/42", "Ada")

    result = cli("has", "users/42")
    assert result.exit_code == 0
    assert "true" in result.stdout

    assert cli("delete", "users/42").exit_code == 0
    result = cli("has", "users/42")
    assert result.exit_code == 1
    assert "false" in result.stdout
    assert cli("delete", "users/42").exit_code == 1


def test_zero_ttl_entry_exists_but_reads_as_missing(cli):
    assert cli("set", "flash", "x", "--ttl", "0").exit_code == 0
    assert cli("has", "flash").exit_code == 0
    assert cli("get", "flash").exit_code == 1
    assert cli("has", "flash").exit_code == 1


def test_clear_removes_everything(cli):
    for key in ["a", "dir/sub/key", "dir/other"]:
        assert cli("set", key, "v").exit_code == 0

    result = cli("clear")

    assert result.exit_code == 0, result.stdout
    assert "Cache cleared" in result.stdout
    assert list(cli.root.iterdir()) == []


def test_root_from_configuration(runner: CliRunner, tmp_path: Path):
    """Without --root the FSCACHE_CACHE_ROOT environment variable decides."""
    result = runner.invoke(app, ["set", "k", "v"])
    assert result.exit_code == 0, result.stdout
    assert (tmp_path / "configured-root" / "k").is_file()


def test_unknown_codec_fails_initialization(cli):
    result = cli("--codec", "xml", "get", "k")
    assert result.exit_code == 2


def test_json_codec_round_trip(runner: CliRunner, tmp_path: Path):
    root = str(tmp_path / "json-cache")
    assert runner.invoke(app, ["--root", root, "--codec", "json", "set", "k", "v"]).exit_code == 0
    assert b'"data": "v"' in (tmp_path / "json-cache" / "k").read_bytes()

    result = runner.invoke(app, ["--root", root, "--codec", "json", "get", "k"])
    assert result.exit_code == 0
    assert "v" in result.stdout
