#!/usr/bin/env python3
import typer

from . import __version__
from .cli import config, content_type, serve

app = typer.Typer(
    name="fileserve",
    help="Serve a local directory tree over HTTP.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fileserve {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    return


app.command("serve")(serve.main)
app.command("content-type")(content_type.main)
app.add_typer(config.app, name="config")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
