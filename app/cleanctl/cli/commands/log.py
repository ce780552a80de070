"""Log commands: view and clear the persisted run log."""

from typing import Annotated

import typer

from cleanctl.cli.display import print_log_lines
from cleanctl.core.runlog import RunLogStore
from cleanctl.utils.formatting import print_info, print_success

app = typer.Typer(
    help="View the run log.",
    no_args_is_help=True,
)


@app.command()
def show(
    tail: Annotated[
        int | None,
        typer.Option("--tail", "-n", min=0, help="Show only the last N lines."),
    ] = None,
) -> None:
    """Print the run log, colored by level."""
    lines = RunLogStore().read()
    if not lines:
        print_info("Run log is empty.")
        return
    if tail is not None:
        lines = lines[max(len(lines) - tail, 0) :]
    print_log_lines(lines)


@app.command()
def clear() -> None:
    """Delete the run log."""
    RunLogStore().clear()
    print_success("Run log cleared.")
