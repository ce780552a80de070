"""cleanctl command-line entry point.

Wires the command groups into one Typer app and handles the global
version and verbosity flags.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from cleanctl import __version__
from cleanctl.cli.commands import categories, clean, config, exclude, log, scan, status
from cleanctl.utils.formatting import err_console

app = typer.Typer(
    name="cleanctl",
    help="Reclaim disk space from caches, logs and trash.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cleanctl version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Route library logging through Rich on stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """cleanctl - Reclaim disk space from known cache, log and trash locations.

    Scan first to see what would be removed; cleaning deletes permanently.
    """
    _configure_logging(verbose, quiet)


app.add_typer(categories.app, name="categories")
app.add_typer(scan.app, name="scan")
app.add_typer(clean.app, name="clean")
app.add_typer(status.app, name="status")
app.add_typer(config.app, name="config")
app.add_typer(exclude.app, name="exclude")
app.add_typer(log.app, name="log")


if __name__ == "__main__":
    app()
