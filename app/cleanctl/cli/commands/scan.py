"""Scan command implementation.

Builds a cleanup plan without touching the filesystem and shows what a
cleanup would remove.
"""

import json
from typing import Annotated

import typer

from cleanctl.cli.display import print_plan
from cleanctl.cli.types import OutputFormat, resolve_categories
from cleanctl.core.runlog import RunLogStore, plan_preview_lines
from cleanctl.core.settings import SettingsStore
from cleanctl.filesystem.categories import Category
from cleanctl.filesystem.engine import CleanupEngine
from cleanctl.utils.formatting import busy, console, print_info, print_warning

app = typer.Typer(
    help="Preview reclaimable space without deleting anything.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan(
    category: Annotated[
        list[Category] | None,
        typer.Option(
            "--category",
            "-c",
            help="Category to scan (repeatable). Defaults to the safe preset.",
            case_sensitive=False,
        ),
    ] = None,
    select_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Scan every category."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            help="Limit number of targets shown.",
        ),
    ] = None,
) -> None:
    """Scan the selected categories and show the resulting plan."""
    store = SettingsStore()
    settings = store.load()
    categories = resolve_categories(category, select_all, settings)

    if not categories:
        print_info("No categories selected (optional categories are locked by only_safe_areas).")
        return

    engine = CleanupEngine()
    with busy("Scanning..."):
        plan = engine.build_plan(
            categories,
            store.load_excluded_paths(),
            safe_only=settings.only_safe_areas,
        )

    try:
        RunLogStore().append_run(plan_preview_lines(plan, "Preview"), settings.keep_run_log)
    except OSError as e:
        print_warning(f"Could not update run log: {e}")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(plan.to_dict()))
        return

    print_plan(plan, limit=limit, title="Cleanup Preview")
