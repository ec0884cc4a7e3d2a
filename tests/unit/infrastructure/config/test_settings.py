import pytest
from pathlib import Path

from fscache.infrastructure.config import settings


@pytest.fixture
def fresh_settings(monkeypatch, tmp_path: Path):
    """Resets the module-level store so load_configuration() runs again."""
    monkeypatch.setattr(settings, "_config", {})
    monkeypatch.setattr(settings, "_loaded", False)
    monkeypatch.chdir(tmp_path)
    return settings


def test_env_var_name():
    assert settings.env_var_name("cache.root") == "FSCACHE_CACHE_ROOT"
    assert settings.env_var_name("logging.level") == "FSCACHE_LOGGING_LEVEL"


def test_yaml_values_are_flattened(fresh_settings, tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("cache:\n  codec: json\n  default_ttl: 60\nlogging:\n  level: DEBUG\n")

    fresh_settings.load_configuration(config_file=config_file)

    assert fresh_settings.get_config("cache.codec") == "json"
    assert fresh_settings.get_default_ttl() == 60.0
    assert fresh_settings.get_config("logging.level") == "DEBUG"


def test_invalid_yaml_is_ignored(fresh_settings, tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("cache: [unclosed\n")

    fresh_settings.load_configuration(config_file=config_file)

    assert fresh_settings.get_codec_name() == "pickle"


def test_environment_overrides_yaml(fresh_settings, tmp_path: Path, monkeypatch):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("cache:\n  codec: json\n")
    monkeypatch.setenv("FSCACHE_CACHE_CODEC", "pickle")

    fresh_settings.load_configuration(config_file=config_file)

    assert fresh_settings.get_codec_name() == "pickle"


def test_dotenv_file_is_loaded(fresh_settings, tmp_path: Path, monkeypatch):
    # setenv + delenv makes monkeypatch drop whatever the .env load adds on teardown
    monkeypatch.setenv("FSCACHE_CACHE_HIGH_RESOLUTION_CLOCK", "unset")
    monkeypatch.delenv("FSCACHE_CACHE_HIGH_RESOLUTION_CLOCK")
    (tmp_path / ".env").write_text("FSCACHE_CACHE_HIGH_RESOLUTION_CLOCK=false\n")

    fresh_settings.load_configuration(config_file=tmp_path / "absent.yaml")

    assert fresh_settings.use_high_resolution_clock() is False


def test_test_config_has_highest_priority(monkeypatch):
    monkeypatch.setenv("FSCACHE_CACHE_CODEC", "pickle")
    settings.set_config_for_testing({"cache.codec": "json"})
    assert settings.get_codec_name() == "json"
    settings.clear_test_config()
    assert settings.get_codec_name() == "pickle"


def test_cache_root_comes_from_environment(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("FSCACHE_CACHE_ROOT", str(tmp_path / "elsewhere"))
    assert settings.get_cache_root() == tmp_path / "elsewhere"


def test_invalid_default_ttl_is_ignored():
    settings.set_config_for_testing({"cache.default_ttl": "tomorrow"})
    assert settings.get_default_ttl() is None
