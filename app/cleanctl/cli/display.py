"""Shared Rich display functions for plans, results and the run log."""

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from cleanctl.core.runlog import parse_log_level
from cleanctl.filesystem.categories import Category, RiskLevel, all_categories
from cleanctl.filesystem.models import ExecutionResult, Plan
from cleanctl.utils.formatting import console, print_success, print_warning
from cleanctl.utils.units import format_bytes


def format_risk(risk: RiskLevel) -> str:
    """Format a risk level with color markup."""
    return f"[risk_{risk.value}]{risk.value}[/]"


def create_categories_table(categories: list[Category] | None = None) -> Table:
    """Create a table describing cleanup categories.

    Args:
        categories: Categories to list. Defaults to all, sorted by title.

    Returns:
        Rich Table with one row per category.
    """
    table = Table(
        title="Cleanup Categories",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category", no_wrap=True)
    table.add_column("ID", style="muted", no_wrap=True)
    table.add_column("Risk", width=9)
    table.add_column("Deletes", width=7, justify="center")
    table.add_column("Roots", style="text")
    table.add_column("Warning", style="warning")

    for category in categories if categories is not None else all_categories():
        roots = "\n".join(f"~/{root}" for root in category.spec.home_roots)
        deletes = "[muted]no[/]" if category.is_preview_only else "yes"
        table.add_row(
            category.title,
            category.value,
            format_risk(category.risk),
            deletes,
            roots,
            category.warning or "-",
        )

    return table


def create_plan_table(plan: Plan, limit: int | None = None, title: str = "Cleanup Plan") -> Table:
    """Create a table of plan targets, largest first.

    Args:
        plan: Plan to display.
        limit: Maximum number of rows (None for all).
        title: Table title.

    Returns:
        Rich Table with one row per target.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=False)
    table.add_column("Category", style="muted")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Files", justify="right")

    targets = plan.sorted_targets
    for target in targets[:limit] if limit else targets:
        path = escape(target.display_path)
        if target.category.is_preview_only:
            path = f"{path} [muted](report only)[/]"
        table.add_row(
            path,
            target.category.title,
            format_bytes(target.size_bytes),
            str(target.file_count),
        )

    return table


def create_totals_table(plan: Plan) -> Table:
    """Create a table of byte totals per category."""
    table = Table(
        title="Totals by Category",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category")
    table.add_column("Size", style="info", justify="right")

    totals = plan.category_totals
    for category in sorted(totals, key=lambda c: c.title):
        table.add_row(category.title, format_bytes(totals[category]))
    table.add_row("[bold]Total[/]", f"[bold]{format_bytes(plan.total_bytes)}[/]")

    return table


def print_plan(plan: Plan, limit: int | None = None, title: str = "Cleanup Plan") -> None:
    """Print plan targets, totals and notes."""
    if plan.targets:
        console.print(create_plan_table(plan, limit=limit, title=title))
        if limit and len(plan.targets) > limit:
            console.print(f"[dim](showing {limit} of {len(plan.targets)} targets)[/dim]")
        console.print(create_totals_table(plan))
    else:
        console.print("[muted]No targets found. Check category selection or permissions.[/]")

    print_notes(plan)


def print_notes(plan: Plan) -> None:
    """Print plan notes, if any."""
    if not plan.notes:
        return
    console.print("\n[bold_header]Notes[/]")
    for note in plan.notes:
        console.print(f"  [muted]-[/] {escape(note)}")


def print_execution_result(result: ExecutionResult) -> None:
    """Print a summary of an execution result."""
    table = Table(
        title="Cleanup Result",
        show_header=False,
        border_style="border",
    )
    table.add_column("Field", style="muted")
    table.add_column("Value", justify="right")

    table.add_row("Mode", "[warning]permanent delete[/]")
    table.add_row("Deleted targets", str(result.deleted_target_count))
    table.add_row("Deleted files", str(result.deleted_file_count))
    table.add_row("Estimated freed", format_bytes(result.estimated_bytes))
    table.add_row("Actually freed", f"[success]{format_bytes(result.actual_bytes_freed)}[/]")
    if result.preview_only_skipped:
        table.add_row("Report-only (skipped)", str(result.preview_only_skipped))

    console.print(table)

    if not result.failures:
        print_success("Cleanup finished.")
        return

    failures = Table(
        title="Failures",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    failures.add_column("Path", style="bold")
    failures.add_column("Reason", style="dim")
    for failure in result.failures:
        failures.add_row(escape(failure.path), escape(failure.reason))
    console.print(failures)
    print_warning(f"Cleanup finished, {len(result.failures)} target(s) were not deleted.")


def render_log_line(line: str) -> Text:
    """Render a run log line styled by its level."""
    level = parse_log_level(line)
    style = f"log.{level.value.lower()}" if level is not None else "text"
    return Text(line, style=style)


def print_log_lines(lines: list[str]) -> None:
    """Print run log lines styled by level."""
    for line in lines:
        console.print(render_log_line(line))
