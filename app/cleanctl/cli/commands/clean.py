"""Clean command implementation.

Builds a fresh plan, shows it, asks for confirmation and permanently
deletes the planned targets.
"""

from typing import Annotated

import typer

from cleanctl.cli.display import print_execution_result, print_plan
from cleanctl.cli.types import resolve_categories
from cleanctl.core.runlog import RunLogStore, plan_preview_lines
from cleanctl.core.settings import SettingsStore, SettingsStoreError
from cleanctl.filesystem.categories import Category
from cleanctl.filesystem.engine import CleanupEngine
from cleanctl.utils.formatting import busy, console, print_info, print_warning

app = typer.Typer(
    help="Permanently delete reclaimable files.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean(
    category: Annotated[
        list[Category] | None,
        typer.Option(
            "--category",
            "-c",
            help="Category to clean (repeatable). Defaults to the safe preset.",
            case_sensitive=False,
        ),
    ] = None,
    select_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Clean every category."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the plan without deleting."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Scan the selected categories and delete what was found."""
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

    print_plan(plan, title="Planned Deletions (dry-run)" if dry_run else "Planned Deletions")

    deletable = [t for t in plan.targets if not t.category.is_preview_only]
    if dry_run:
        print_info(f"Dry-run: {len(deletable)} target(s) would be deleted.")
        return

    if not deletable:
        print_info("Nothing to delete.")
        return

    console.print(
        "\n[warning]Warning:[/] selected targets are deleted [bold]permanently[/]; "
        "they do not go to the Trash and cannot be restored."
    )
    if not yes:
        confirmed = typer.confirm(
            f"Proceed with deleting {len(deletable)} target(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    # Exclusions are re-read so edits made while confirming still apply
    with busy("Cleaning..."):
        result = engine.execute(plan, settings, store.load_excluded_paths())

    print_execution_result(result)

    try:
        store.save_last_run(result.finished_at)
    except SettingsStoreError as e:
        print_warning(f"Could not record last run: {e}")

    try:
        RunLogStore().append_run(
            [*plan_preview_lines(plan, "Pre-run plan"), *result.log_lines],
            settings.keep_run_log,
        )
    except OSError as e:
        print_warning(f"Could not update run log: {e}")

    if result.has_failures:
        raise typer.Exit(code=1)
