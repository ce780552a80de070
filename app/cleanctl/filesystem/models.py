"""Filesystem domain models for cleanup plans and execution results.

Plans and results are immutable value objects owned by the caller. The
engine keeps no reference to them after returning.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from cleanctl.filesystem.categories import Category


def abbreviate_home(path: str) -> str:
    """Replace a leading home directory with ``~`` for display."""
    home = str(Path.home())
    if path == home:
        return "~"
    if path.startswith(home.rstrip("/") + "/"):
        return "~" + path[len(home.rstrip("/")) :]
    return path


@dataclass(frozen=True, slots=True)
class Target:
    """A single file or directory selected by a plan.

    Attributes:
        category: Category the target was found for.
        path: Absolute filesystem path.
        size_bytes: Allocated size on disk (recursive for directories).
        file_count: Number of regular files under the path (1 for a file).
    """

    category: Category
    path: str
    size_bytes: int
    file_count: int

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size must be non-negative, got {self.size_bytes}"
            raise ValueError(msg)
        if self.file_count < 0:
            msg = f"File count must be non-negative, got {self.file_count}"
            raise ValueError(msg)

    @property
    def display_path(self) -> str:
        """Path with the home directory abbreviated to ``~``."""
        return abbreviate_home(self.path)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "path": self.path,
            "size_bytes": self.size_bytes,
            "file_count": self.file_count,
        }


@dataclass(frozen=True, slots=True)
class Plan:
    """Read-only result of a scan.

    Attributes:
        generated_at: When the plan was built (UTC).
        targets: Targets in discovery order.
        notes: Diagnostics for roots that were missing, protected or unreadable.
    """

    generated_at: datetime
    targets: tuple[Target, ...] = ()
    notes: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "Plan":
        return cls(generated_at=datetime.now(UTC))

    @property
    def total_bytes(self) -> int:
        return sum(t.size_bytes for t in self.targets)

    @property
    def category_totals(self) -> dict[Category, int]:
        """Byte totals per category, for categories with at least one target."""
        totals: dict[Category, int] = {}
        for target in self.targets:
            totals[target.category] = totals.get(target.category, 0) + target.size_bytes
        return totals

    @property
    def sorted_targets(self) -> list[Target]:
        """Targets ordered by size, largest first."""
        return sorted(self.targets, key=lambda t: t.size_bytes, reverse=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generated_at": self.generated_at.isoformat(),
            "total_bytes": self.total_bytes,
            "category_totals": {c.value: size for c, size in self.category_totals.items()},
            "targets": [t.to_dict() for t in self.targets],
            "notes": list(self.notes),
        }


@dataclass(frozen=True, slots=True)
class Failure:
    """A target that could not be deleted.

    Attributes:
        path: Display path of the target.
        reason: Why the deletion did not happen.
    """

    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of executing a plan.

    Attributes:
        started_at: Execution start (UTC).
        finished_at: Execution end (UTC).
        deleted_target_count: Targets actually removed.
        deleted_file_count: Sum of file counts of removed targets, at least 1 each.
        preview_only_skipped: Report-only targets that were left untouched.
        estimated_bytes: Total size of all deletable targets in the plan.
        actual_bytes_freed: Total size of the targets actually removed.
        failures: One entry per target that could not be deleted.
        log_lines: Ordered ``[HH:MM:SS] [LEVEL] message`` lines.
    """

    started_at: datetime
    finished_at: datetime
    deleted_target_count: int = 0
    deleted_file_count: int = 0
    preview_only_skipped: int = 0
    estimated_bytes: int = 0
    actual_bytes_freed: int = 0
    failures: tuple[Failure, ...] = ()
    log_lines: tuple[str, ...] = ()

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)
