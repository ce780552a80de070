"""Categories command: list the known cleanup categories."""

import json
from typing import Annotated

import typer

from cleanctl.cli.display import create_categories_table
from cleanctl.cli.types import OutputFormat
from cleanctl.filesystem.categories import all_categories
from cleanctl.utils.formatting import console

app = typer.Typer(
    help="List cleanup categories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_categories(
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show every category with its risk level, roots and warnings."""
    if output_format == OutputFormat.JSON:
        data = [
            {
                "id": c.value,
                "title": c.title,
                "description": c.description,
                "risk": c.risk.value,
                "preview_only": c.is_preview_only,
                "default_selected": c.default_selected,
                "warning": c.warning,
                "roots": [str(root) for root in c.roots()],
            }
            for c in all_categories()
        ]
        console.print_json(json.dumps(data))
        return

    console.print(create_categories_table())
