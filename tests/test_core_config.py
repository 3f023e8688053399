# Released under MIT License.
# Copyright (c) 2025 The mjsync developers


from dataclasses import dataclass, field

import pytest

from mjsync_lib.core.config import Config, _dict_to_dataclass


def test_dict_to_dataclass_simple_conversion():
    @dataclass
    class SimpleConfig:
        name: str = "default"
        count: int = 0

    result = _dict_to_dataclass(SimpleConfig, {"name": "test", "count": 42})

    assert isinstance(result, SimpleConfig)
    assert result.name == "test"
    assert result.count == 42


def test_dict_to_dataclass_nested_conversion():
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "default"

    result = _dict_to_dataclass(Outer, {"inner": {"value": 99}, "name": "outer"})

    assert isinstance(result.inner, Inner)
    assert result.inner.value == 99
    assert result.name == "outer"


def test_dict_to_dataclass_extra_fields_ignored():
    @dataclass
    class Partial:
        valid: str = "default"
        other: int = 42

    result = _dict_to_dataclass(Partial, {"valid": "value", "invalid": "ignored"})

    assert result.valid == "value"
    assert result.other == 42
    assert not hasattr(result, "invalid")


def test_dict_to_dataclass_non_dataclass_returns_unchanged():
    data = {"key": "value"}
    assert _dict_to_dataclass(str, data) == data


def test_defaults_match_remote_api():
    config = Config()

    assert config.sync.max_pages == 200
    assert config.sync.empty_page_limit == 0
    assert config.sync.jobs_dir == "jobs"
    assert config.scheduler.interval == 3600
    assert config.api.ordering_modes == ["new", "top-all"]
    assert config.timeouts.catalog is None
    assert config.timeouts.image is None
    assert config.credentials.user_id_file == "userid.txt"
    assert config.credentials.session_token_file == "sessiontoken.txt"


def test_get_config_path_env_variable_highest_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "custom_config.toml"
    config_file.write_text("")
    (tmp_path / "mjsync_config.toml").write_text("")

    monkeypatch.setenv("MJSYNC_CONFIG", str(config_file))
    monkeypatch.chdir(tmp_path)

    assert Config._get_config_path() == config_file


def test_get_config_path_current_directory_second_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "mjsync_config.toml"
    config_file.write_text("")

    xdg_config = tmp_path / "config"
    (xdg_config / "mjsync").mkdir(parents=True)
    (xdg_config / "mjsync" / "config.toml").write_text("")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MJSYNC_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))

    assert Config._get_config_path() == config_file


def test_get_config_path_xdg_config_home_third_priority(tmp_path, monkeypatch):
    xdg_config = tmp_path / "config"
    (xdg_config / "mjsync").mkdir(parents=True)
    config_file = xdg_config / "mjsync" / "config.toml"
    config_file.write_text("")

    other_dir = tmp_path / "other"
    other_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))
    monkeypatch.chdir(other_dir)
    monkeypatch.delenv("MJSYNC_CONFIG", raising=False)

    assert Config._get_config_path() == config_file


def test_get_config_path_returns_none_when_no_config_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MJSYNC_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))

    assert Config._get_config_path() is None


def test_load_with_explicit_path(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
binary_name = "mjs"

[sync]
max_pages = 10
empty_page_limit = 3

[timeouts]
catalog = 30.0

[codes]
catalog_fetch = 903
""")

    config = Config.load(config_file)

    assert config.binary_name == "mjs"
    assert config.sync.max_pages == 10
    assert config.sync.empty_page_limit == 3
    assert config.timeouts.catalog == 30.0
    assert config.codes.catalog_fetch == 903

    # non-overriden values
    assert config.sync.jobs_dir == "jobs"
    assert config.timeouts.image is None
    assert config.codes.page_write == 804


def test_load_returns_defaults_when_file_missing(tmp_path):
    assert Config.load(tmp_path / "does_not_exist.toml") == Config()


def test_load_invalid_toml_raises_value_error(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[sync\nmax_pages = ")

    with pytest.raises(ValueError, match="Could not read mjsync config"):
        Config.load(config_file)
