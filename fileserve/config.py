import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from .logger import logger


class ConfigError(Exception):
    pass


class ServerConfig(BaseModel):
    """Immutable settings shared by every request.

    ``directory`` is resolved to an absolute path when the model is built.
    """

    bind: str = "0.0.0.0"
    port: int = Field(8000, ge=0, le=65535)
    directory: Path = Path(".")
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    @pydantic.field_validator("bind")
    @classmethod
    def _check_bind(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("bind address must not be empty")
        return value

    @pydantic.field_validator("directory")
    @classmethod
    def _resolve_directory(cls, value: Path) -> Path:
        directory = value.expanduser().resolve()
        if not directory.is_dir():
            raise ValueError(f"{directory} is not a directory")
        return directory

    @property
    def address(self) -> tuple[str, int]:
        return (self.bind, self.port)


class ConfigManager:
    """
    Configuration manager for the file server.

    The configuration can be loaded from the following sources (in order of precedence):

        1. Command line arguments
        2. Environment variables
        3. Configuration file (YAML)
        4. Default values
    """

    def __init__(
        self,
        config_file: Path | None = None,
        cli_args: Mapping[str, Any] | None = None,
        env: Mapping[str, str] | None = None,
    ):
        self.config_file = config_file
        self._config: dict[str, Any] = {
            **self._load_default_config(),
            **self._load_config_file(config_file),
            **self._load_config_from_env(os.environ if env is None else env),
            **self._load_config_from_cli(cli_args or {}),
        }

    def _load_default_config(self) -> Mapping[str, Any]:
        return dict(DEFAULT_CONFIG)

    def _load_config_file(self, path: Path | None) -> Mapping[str, Any]:
        """Load the ``bind``, ``port`` and ``directory`` keys from a YAML file.

        A relative ``directory`` is taken relative to the file itself.
        """
        if path is None:
            return {}

        import yaml

        try:
            stream = path.read_bytes()
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

        try:
            config_raw = yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if config_raw is None:
            return {}

        if not isinstance(config_raw, dict):
            raise ConfigError(f"{path} must contain a mapping, got {config_raw!r}")

        unknown = set(config_raw) - set(CONFIG_KEY_TO_VAR)
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys in {path}: {', '.join(sorted(unknown))}"
            )

        if "directory" in config_raw:
            config_raw["directory"] = path.parent / str(config_raw["directory"])

        logger.debug("loaded configuration file %s", path)
        return config_raw

    def _load_config_from_env(self, env: Mapping[str, str]) -> Mapping[str, str]:
        return {
            CONFIG_VAR_TO_KEY[key]: env[key] for key in env if key in CONFIG_VAR_TO_KEY
        }

    def _load_config_from_cli(self, cli_args: Mapping[str, Any]) -> Mapping[str, Any]:
        return {
            key: value
            for key, value in cli_args.items()
            if key in CONFIG_KEY_TO_VAR and value is not None
        }

    @property
    def config(self) -> Mapping[str, Any]:
        return MappingProxyType(self._config)

    def server_config(self) -> ServerConfig:
        try:
            return ServerConfig(**self._config)
        except pydantic.ValidationError as e:
            raise ConfigError(str(e)) from e


# Configuration keys and corresponding environment variables.
CONFIG_KEY_TO_VAR: dict[str, str] = {
    "bind": "FILESERVE_BIND",
    "port": "FILESERVE_PORT",
    "directory": "FILESERVE_DIRECTORY",
}

CONFIG_VAR_TO_KEY = {v: k for k, v in CONFIG_KEY_TO_VAR.items()}

DEFAULT_CONFIG: dict[str, Any] = {
    "bind": "0.0.0.0",
    "port": 8000,
    "directory": ".",
}
