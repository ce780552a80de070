"""Status command: last cleanup time and the safe-preset estimate."""

import typer

from cleanctl.core.settings import SettingsStore
from cleanctl.filesystem.categories import safe_preset
from cleanctl.filesystem.engine import CleanupEngine
from cleanctl.utils.formatting import busy, console
from cleanctl.utils.units import format_bytes

app = typer.Typer(
    help="Show last cleanup and reclaimable space estimate.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def status() -> None:
    """Show when the last cleanup ran and how much the safe preset would free."""
    store = SettingsStore()
    settings = store.load()

    last_run = store.load_last_run()
    last_run_str = last_run.astimezone().strftime("%Y-%m-%d %H:%M") if last_run else "never"

    with busy("Estimating..."):
        plan = CleanupEngine().build_plan(
            safe_preset(),
            store.load_excluded_paths(),
            safe_only=True,
        )

    console.print(f"[muted]Last cleanup:[/] {last_run_str}")
    console.print(f"[muted]Safe cleanup estimate:[/] [info]{format_bytes(plan.total_bytes)}[/]")
    mode = "safe areas only" if settings.only_safe_areas else "all categories"
    console.print(f"[muted]Mode:[/] {mode}")
