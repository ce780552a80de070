"""Shared Rich consoles and one-line message helpers.

Human-facing output goes through ``console`` (stdout) or ``err_console``
(stderr). Both carry the cleanctl theme, loaded once at import.
"""

import sys

from rich.console import Console
from rich.status import Status

from cleanctl.core.theme import get_theme


def _color_system() -> str | None:
    # Hex theme colors need truecolor; piped output lets Rich decide
    return "truecolor" if sys.stdout.isatty() else None


def _make_console(*, stderr: bool = False) -> Console:
    return Console(theme=get_theme(), stderr=stderr, color_system=_color_system())


console = _make_console()
err_console = _make_console(stderr=True)


def busy(message: str) -> Status:
    """Spinner shown while a scan or cleanup blocks the command."""
    return console.status(f"[muted]{message}[/]", spinner="dots")


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {message}")
