"""Shared types and helpers for CLI commands.

Category selection rules are shared by ``scan``, ``clean`` and ``status``
so that what a user previews is exactly what a cleanup acts on.
"""

from enum import Enum

from cleanctl.core.settings import Settings
from cleanctl.filesystem.categories import Category, RiskLevel, safe_preset


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def resolve_categories(
    selected: list[Category] | None,
    select_all: bool,
    settings: Settings,
) -> set[Category]:
    """Determine which categories a command operates on.

    Explicit ``--category`` options win over ``--all``; with neither the
    safe preset is used. When ``only_safe_areas`` is enabled, optional
    categories are dropped from the selection.

    Args:
        selected: Categories given with ``--category`` (may be None/empty).
        select_all: Whether ``--all`` was given.
        settings: Current settings.

    Returns:
        Effective category set (possibly empty).
    """
    if selected:
        categories = set(selected)
    elif select_all:
        categories = set(Category)
    else:
        categories = set(safe_preset())

    if settings.only_safe_areas:
        categories = {c for c in categories if c.risk == RiskLevel.SAFE}

    return categories
