"""Config commands: show and update settings."""

from typing import Annotated

import typer
from rich.table import Table

from cleanctl.core.settings import Settings, SettingsStore, SettingsStoreError
from cleanctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or change settings.",
    no_args_is_help=True,
)


def _print_settings(settings: Settings) -> None:
    """Display settings as a table."""
    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value", width=7)
    table.add_column("Description", style="dim")

    for name, field in Settings.model_fields.items():
        value = getattr(settings, name)
        value_str = "[success]on[/]" if value else "[muted]off[/]"
        table.add_row(name, value_str, field.description or "")

    console.print(table)


@app.command()
def show() -> None:
    """Show current settings."""
    _print_settings(SettingsStore().load())


@app.command("set")
def set_settings(
    only_safe_areas: Annotated[
        bool | None,
        typer.Option(
            "--only-safe-areas/--all-areas",
            help="Restrict scans and cleanups to safe categories.",
        ),
    ] = None,
    request_root_access: Annotated[
        bool | None,
        typer.Option(
            "--request-root-access/--no-request-root-access",
            help="Ask for elevated privileges (reserved).",
        ),
    ] = None,
    keep_run_log: Annotated[
        bool | None,
        typer.Option(
            "--keep-run-log/--replace-run-log",
            help="Keep earlier runs in the run log.",
        ),
    ] = None,
) -> None:
    """Update one or more settings."""
    updates = {
        name: value
        for name, value in (
            ("only_safe_areas", only_safe_areas),
            ("request_root_access", request_root_access),
            ("keep_run_log", keep_run_log),
        )
        if value is not None
    }
    if not updates:
        print_info("Nothing to change.")
        return

    store = SettingsStore()
    settings = store.load().model_copy(update=updates)
    try:
        store.save(settings)
    except SettingsStoreError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success("Settings saved.")
    _print_settings(settings)
