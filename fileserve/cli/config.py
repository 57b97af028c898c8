from pathlib import Path
from typing import Any

import typer

from ..config import ConfigError, ConfigManager, ServerConfig
from ..logger import logger

app = typer.Typer(help="Inspect the configuration used by `fileserve serve`")

CONFIG_FILE_OPTION = typer.Option(
    None,
    "--config",
    help="YAML configuration file with `bind`, `port` and `directory` keys.",
)


@app.callback(no_args_is_help=True)
def callback() -> None:
    return


def load_server_config(config_file: Path | None, **cli_args: Any) -> ServerConfig:
    """Build the server configuration, exiting with status 1 if it is invalid."""
    try:
        return ConfigManager(config_file=config_file, cli_args=cli_args).server_config()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        raise typer.Exit(1) from e


def _get_configs(config_file: Path | None) -> dict[str, str]:
    server_config = load_server_config(config_file)
    return {k: str(v) for k, v in server_config.model_dump().items()}


@app.command("list")
def list_config(config_file: Path = CONFIG_FILE_OPTION) -> None:
    """
    List the resolved configuration values
    """
    configs = _get_configs(config_file)

    for k, v in configs.items():
        typer.echo(f"{k}={v}")


@app.command("get")
def get_config(
    config_var: str = typer.Argument(
        ..., help="A config variable to get. Use `list` to see all possible values."
    ),
    config_file: Path = CONFIG_FILE_OPTION,
) -> None:
    """
    Get a single resolved configuration value
    """
    configs = _get_configs(config_file)

    if config_var not in configs:
        typer.echo(f"Config variable {config_var} not found.")
        raise typer.Exit(1)

    typer.echo(configs[config_var])
