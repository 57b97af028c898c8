# flake8: noqa
# flake8 is not happy with fixture imports

from pathlib import Path

import pydantic
import pytest

from fileserve.config import (
    CONFIG_KEY_TO_VAR,
    DEFAULT_CONFIG,
    ConfigError,
    ConfigManager,
    ServerConfig,
)

from .fixture import reset_env_vars


def test_default_config(tmp_path, monkeypatch, reset_env_vars):
    monkeypatch.chdir(tmp_path)

    server_config = ConfigManager().server_config()

    assert server_config.bind == DEFAULT_CONFIG["bind"]
    assert server_config.port == DEFAULT_CONFIG["port"]
    assert server_config.directory == tmp_path.resolve()
    assert server_config.address == ("0.0.0.0", 8000)


def test_load_config_from_env(tmp_path):
    env = {
        "FILESERVE_BIND": "127.0.0.1",
        "FILESERVE_PORT": "9000",
        "FILESERVE_DIRECTORY": str(tmp_path),
        "UNRELATED": "value",
    }

    config_manager = ConfigManager(env=env)

    assert set(config_manager._load_config_from_env(env)) == set(CONFIG_KEY_TO_VAR)
    server_config = config_manager.server_config()
    assert server_config.bind == "127.0.0.1"
    assert server_config.port == 9000
    assert server_config.directory == tmp_path.resolve()


def test_load_config_from_file(tmp_path):
    (tmp_path / "public").mkdir()
    config_file = tmp_path / "fileserve.yaml"
    config_file.write_text("bind: 127.0.0.1\nport: 8080\ndirectory: public\n")

    server_config = ConfigManager(config_file=config_file, env={}).server_config()

    assert server_config.bind == "127.0.0.1"
    assert server_config.port == 8080
    # relative directories are relative to the configuration file
    assert server_config.directory == (tmp_path / "public").resolve()


def test_empty_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "fileserve.yaml"
    config_file.write_text("")

    config_manager = ConfigManager(config_file=config_file, env={})

    assert dict(config_manager.config) == DEFAULT_CONFIG


def test_precedence(tmp_path):
    config_file = tmp_path / "fileserve.yaml"
    config_file.write_text("port: 1001\nbind: 10.0.0.1\n")
    env = {"FILESERVE_PORT": "1002", "FILESERVE_DIRECTORY": str(tmp_path)}

    config = ConfigManager(
        config_file=config_file,
        cli_args={"port": 1003, "bind": None, "directory": None},
        env=env,
    ).config

    assert config["port"] == 1003
    assert config["bind"] == "10.0.0.1"
    assert config["directory"] == str(tmp_path)


def test_config_is_read_only(tmp_path):
    config = ConfigManager(env={}).config

    with pytest.raises(TypeError):
        config["port"] = 1  # type: ignore[index]


@pytest.mark.parametrize(
    "content, match",
    [
        ("port: [", "Invalid YAML"),
        ("- a\n- b\n", "must contain a mapping"),
        ("port: 80\nroot: /srv\n", "Unknown configuration keys in .*: root"),
    ],
)
def test_invalid_config_file(tmp_path, content, match):
    config_file = tmp_path / "fileserve.yaml"
    config_file.write_text(content)

    with pytest.raises(ConfigError, match=match):
        ConfigManager(config_file=config_file, env={})


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot read configuration file"):
        ConfigManager(config_file=tmp_path / "missing.yaml", env={})


@pytest.mark.parametrize(
    "env",
    [
        {"FILESERVE_PORT": "http"},
        {"FILESERVE_PORT": "70000"},
        {"FILESERVE_PORT": "-1"},
        {"FILESERVE_BIND": "  "},
        {"FILESERVE_DIRECTORY": "/nonexistent/fileserve/root"},
    ],
)
def test_invalid_values(env):
    with pytest.raises(ConfigError):
        ConfigManager(env=env).server_config()


def test_directory_must_be_a_directory(tmp_path):
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.touch()

    with pytest.raises(pydantic.ValidationError, match="is not a directory"):
        ServerConfig(directory=not_a_dir)


def test_server_config_is_frozen(tmp_path):
    server_config = ServerConfig(directory=tmp_path)

    with pytest.raises(pydantic.ValidationError):
        server_config.port = 1  # type: ignore[misc]


def test_server_config_resolves_directory(tmp_path, monkeypatch):
    (tmp_path / "www").mkdir()
    monkeypatch.chdir(tmp_path)

    server_config = ServerConfig(directory=Path("www/../www"))

    assert server_config.directory.is_absolute()
    assert server_config.directory == (tmp_path / "www").resolve()
