"""Run log formatting, merging and persistence.

Every line follows the shape ``[HH:MM:SS] [LEVEL] message``. The execution
engine emits INFO/OK/SKIP/ERR/WARN lines, plan previews add PLAN/NOTE
lines, and the CLI merges each run into a log file under the state
directory.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import Enum
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import TYPE_CHECKING

from cleanctl.core.paths import get_run_log_path
from cleanctl.utils.units import format_bytes

if TYPE_CHECKING:
    from cleanctl.filesystem.models import Plan

logger = logging.getLogger(__name__)

# Plan previews list at most this many targets
MAX_PREVIEW_TARGETS = 150

# Merged logs keep only the newest lines
MAX_RUN_LOG_LINES = 800

_LINE_PATTERN = re.compile(r"^\[(\d{2}:\d{2}:\d{2})\] \[([A-Z]+)\] (.*)$")


class LogLevel(str, Enum):
    """Levels of run log lines."""

    INFO = "INFO"
    OK = "OK"
    SKIP = "SKIP"
    ERR = "ERR"
    WARN = "WARN"
    PLAN = "PLAN"
    NOTE = "NOTE"


def format_log_line(level: LogLevel, message: str, now: datetime | None = None) -> str:
    """Format a single run log line.

    Args:
        level: Line level.
        message: Free-text message.
        now: Timestamp to print (local wall clock). Defaults to now.

    Returns:
        Line of the form ``[HH:MM:SS] [LEVEL] message``.
    """
    stamp = (now or datetime.now()).strftime("%H:%M:%S")
    return f"[{stamp}] [{level.value}] {message}"


def parse_log_level(line: str) -> LogLevel | None:
    """Extract the level of a run log line, or None if it is malformed."""
    match = _LINE_PATTERN.match(line)
    if match is None:
        return None
    try:
        return LogLevel(match.group(2))
    except ValueError:
        return None


def plan_preview_lines(plan: Plan, title: str, now: datetime | None = None) -> list[str]:
    """Render a plan as PLAN/NOTE log lines.

    Targets are listed largest first, capped at :data:`MAX_PREVIEW_TARGETS`.
    """
    lines = [
        format_log_line(LogLevel.PLAN, title, now),
        format_log_line(
            LogLevel.PLAN,
            f"Targets: {len(plan.targets)}, total: {format_bytes(plan.total_bytes)}",
            now,
        ),
    ]

    for target in plan.sorted_targets[:MAX_PREVIEW_TARGETS]:
        lines.append(
            format_log_line(
                LogLevel.PLAN,
                f"{target.display_path} ({format_bytes(target.size_bytes)}, "
                f"{target.file_count} files)",
                now,
            )
        )

    if len(plan.targets) > MAX_PREVIEW_TARGETS:
        extra = len(plan.targets) - MAX_PREVIEW_TARGETS
        lines.append(format_log_line(LogLevel.PLAN, f"... {extra} more targets not listed", now))

    lines.extend(format_log_line(LogLevel.NOTE, note, now) for note in plan.notes)
    return lines


def merge_run_log(
    existing: Sequence[str],
    new_lines: Sequence[str],
    keep_run_log: bool,
    now: datetime | None = None,
) -> list[str]:
    """Merge a run's log lines into the accumulated log.

    With ``keep_run_log`` and a non-empty existing log, the new lines are
    appended after an INFO separator line; otherwise they replace the
    existing log. The result is trimmed to the newest
    :data:`MAX_RUN_LOG_LINES` lines.

    Args:
        existing: Previously accumulated lines.
        new_lines: Lines from the latest run.
        keep_run_log: Whether earlier runs are kept.
        now: Timestamp for the separator line.

    Returns:
        The merged log.
    """
    if not new_lines:
        return list(existing)

    if keep_run_log and existing:
        merged = [*existing, format_log_line(LogLevel.INFO, "----------------", now), *new_lines]
    else:
        merged = list(new_lines)

    return merged[-MAX_RUN_LOG_LINES:]


class RunLogStore:
    """Persists the merged run log as a plain text file.

    Storage location: ~/.local/state/cleanctl/run.log
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else get_run_log_path()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> list[str]:
        """Read the stored lines. A missing or unreadable file yields no lines."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning("Cannot read run log %s: %s", self._path, e)
            return []
        return [line for line in text.splitlines() if line]

    def write(self, lines: Iterable[str]) -> None:
        """Replace the stored log atomically.

        Raises:
            OSError: If the file cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        content = "".join(f"{line}\n" for line in lines)

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(content)
            os.replace(tmp_path, self._path)
        except OSError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise

    def append_run(self, new_lines: Sequence[str], keep_run_log: bool) -> list[str]:
        """Merge a run into the stored log and persist the result.

        Returns:
            The merged log as written.
        """
        merged = merge_run_log(self.read(), new_lines, keep_run_log)
        self.write(merged)
        return merged

    def clear(self) -> None:
        """Delete the stored log, if any."""
        self._path.unlink(missing_ok=True)
