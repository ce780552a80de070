"""Exclude commands: manage paths that are never scanned or deleted."""

from typing import Annotated

import typer
from rich.markup import escape

from cleanctl.core.settings import SettingsStore, SettingsStoreError
from cleanctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage the exclusion list.",
    no_args_is_help=True,
)


@app.command("list")
def list_paths() -> None:
    """Show excluded paths."""
    paths = SettingsStore().load_excluded_paths()
    if not paths:
        print_info("Exclusion list is empty.")
        return
    for path in paths:
        console.print(f"  [muted]-[/] {escape(path)}")


@app.command()
def add(
    path: Annotated[str, typer.Argument(help="Path to exclude (~ allowed).")],
) -> None:
    """Exclude a path and everything below it."""
    try:
        changed = SettingsStore().add_excluded_path(path)
    except SettingsStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if changed:
        print_success(f"Excluded: {path.strip()}")
    else:
        print_info("Path is empty or already excluded.")


@app.command()
def remove(
    path: Annotated[str, typer.Argument(help="Excluded path to remove.")],
) -> None:
    """Remove a path from the exclusion list."""
    try:
        changed = SettingsStore().remove_excluded_path(path)
    except SettingsStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not changed:
        print_error(f"Not in exclusion list: {path}")
        raise typer.Exit(code=1)
    print_success(f"Removed: {path.strip()}")
