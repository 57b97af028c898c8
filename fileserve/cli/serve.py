from pathlib import Path

import typer

from .. import serve
from ..logger import logger, set_log_level
from .config import CONFIG_FILE_OPTION, load_server_config


def main(
    bind: str = typer.Option(
        None, "--bind", "-bind", help="Bind address. [default: 0.0.0.0]"
    ),
    port: int = typer.Option(None, "--port", "-port", help="Bind port. [default: 8000]"),
    directory: Path = typer.Option(
        None,
        "--directory",
        "-directory",
        help="Base directory to serve. [default: current directory]",
    ),
    config_file: Path = CONFIG_FILE_OPTION,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging, including the access log."
    ),
) -> None:
    """Serve a directory tree over HTTP.

    Directories are rendered as an HTML index, files are sent with a content
    type guessed from their extension.
    """
    with set_log_level(logger, verbose):
        server_config = load_server_config(
            config_file, bind=bind, port=port, directory=directory
        )
        serve.main(server_config)
