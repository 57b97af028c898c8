import typer

from ..content_types import guess_content_type


def main(
    paths: list[str] = typer.Argument(..., help="File names or paths to look up."),
) -> None:
    """Print the content type a file would be served with."""
    for path in paths:
        typer.echo(f"{path}\t{guess_content_type(path)}")
