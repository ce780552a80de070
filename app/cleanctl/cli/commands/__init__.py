"""CLI commands for cleanctl.

This package contains all subcommand implementations.
"""

from cleanctl.cli.commands import categories, clean, config, exclude, log, scan, status

__all__ = ["categories", "clean", "config", "exclude", "log", "scan", "status"]
