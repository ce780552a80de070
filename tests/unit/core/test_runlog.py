"""Unit tests for run log formatting, merging and persistence."""

import re
from datetime import UTC, datetime
from pathlib import Path

from cleanctl.core.runlog import (
    MAX_PREVIEW_TARGETS,
    MAX_RUN_LOG_LINES,
    LogLevel,
    RunLogStore,
    format_log_line,
    merge_run_log,
    parse_log_level,
    plan_preview_lines,
)
from cleanctl.filesystem.categories import Category
from cleanctl.filesystem.models import Plan, Target

NOW = datetime(2026, 3, 14, 9, 5, 7)


def _plan(count: int, notes: tuple[str, ...] = ()) -> Plan:
    targets = tuple(
        Target(
            category=Category.USER_CACHES,
            path=f"/data/item{i:03d}",
            size_bytes=(i + 1) * 1000,
            file_count=i,
        )
        for i in range(count)
    )
    return Plan(generated_at=datetime.now(UTC), targets=targets, notes=notes)


class TestFormatLogLine:
    """Tests for format_log_line and parse_log_level."""

    def test_format(self) -> None:
        assert format_log_line(LogLevel.OK, "Deleted: ~/x", NOW) == "[09:05:07] [OK] Deleted: ~/x"

    def test_default_timestamp(self) -> None:
        """Without an explicit time the current wall clock is used."""
        line = format_log_line(LogLevel.INFO, "hello")
        assert re.match(r"^\[\d{2}:\d{2}:\d{2}\] \[INFO\] hello$", line)

    def test_parse_level(self) -> None:
        assert parse_log_level("[09:05:07] [ERR] boom") == LogLevel.ERR
        assert parse_log_level("[09:05:07] [NOTE] Trash: nothing to clean") == LogLevel.NOTE

    def test_parse_malformed(self) -> None:
        """Lines without a known level are not parsed."""
        assert parse_log_level("free text") is None
        assert parse_log_level("[09:05:07] [DEBUG] nope") is None


class TestPlanPreviewLines:
    """Tests for plan_preview_lines."""

    def test_header_targets_and_notes(self) -> None:
        """Targets are listed largest first, followed by notes."""
        lines = plan_preview_lines(_plan(2, notes=("Trash: nothing to clean",)), "Preview", NOW)

        assert lines == [
            "[09:05:07] [PLAN] Preview",
            "[09:05:07] [PLAN] Targets: 2, total: 3 KB",
            "[09:05:07] [PLAN] /data/item001 (2 KB, 1 files)",
            "[09:05:07] [PLAN] /data/item000 (1 KB, 0 files)",
            "[09:05:07] [NOTE] Trash: nothing to clean",
        ]

    def test_caps_listed_targets(self) -> None:
        """Only the largest targets are listed, with a summary line for the rest."""
        lines = plan_preview_lines(_plan(MAX_PREVIEW_TARGETS + 5), "Preview", NOW)

        assert len(lines) == 2 + MAX_PREVIEW_TARGETS + 1
        assert lines[-1] == "[09:05:07] [PLAN] ... 5 more targets not listed"
        assert "item154" in lines[2]

    def test_empty_plan(self) -> None:
        lines = plan_preview_lines(Plan.empty(), "Preview", NOW)
        assert lines[1] == "[09:05:07] [PLAN] Targets: 0, total: 0 KB"
        assert len(lines) == 2


class TestMergeRunLog:
    """Tests for merge_run_log."""

    def test_keep_appends_with_separator(self) -> None:
        """Earlier runs are kept behind an INFO separator."""
        merged = merge_run_log(["old"], ["new1", "new2"], keep_run_log=True, now=NOW)
        assert merged == ["old", "[09:05:07] [INFO] ----------------", "new1", "new2"]

    def test_keep_without_existing_has_no_separator(self) -> None:
        assert merge_run_log([], ["new"], keep_run_log=True) == ["new"]

    def test_replace(self) -> None:
        """Without keep_run_log the new run replaces the log."""
        assert merge_run_log(["old"], ["new"], keep_run_log=False) == ["new"]

    def test_no_new_lines_keeps_existing(self) -> None:
        assert merge_run_log(["old"], [], keep_run_log=False) == ["old"]

    def test_trimmed_to_newest_lines(self) -> None:
        """The merged log is capped, dropping the oldest lines."""
        existing = [f"old{i}" for i in range(MAX_RUN_LOG_LINES)]
        merged = merge_run_log(existing, ["new"], keep_run_log=True, now=NOW)

        assert len(merged) == MAX_RUN_LOG_LINES
        assert merged[-1] == "new"
        assert merged[0] == "old2"


class TestRunLogStore:
    """Tests for RunLogStore persistence."""

    def test_missing_file_reads_empty(self, tmp_path: Path) -> None:
        assert RunLogStore(tmp_path / "run.log").read() == []

    def test_write_and_read(self, tmp_path: Path) -> None:
        """Lines round-trip through the file and parent dirs are created."""
        store = RunLogStore(tmp_path / "nested" / "run.log")
        store.write(["a", "b"])

        assert store.path.read_text(encoding="utf-8") == "a\nb\n"
        assert store.read() == ["a", "b"]

    def test_append_run(self, tmp_path: Path) -> None:
        """append_run merges into the stored log."""
        store = RunLogStore(tmp_path / "run.log")
        store.append_run(["first"], keep_run_log=True)
        merged = store.append_run(["second"], keep_run_log=True)

        assert merged[0] == "first"
        assert parse_log_level(merged[1]) == LogLevel.INFO
        assert merged[2] == "second"
        assert store.read() == merged

    def test_append_run_replaces(self, tmp_path: Path) -> None:
        store = RunLogStore(tmp_path / "run.log")
        store.append_run(["first"], keep_run_log=True)
        store.append_run(["second"], keep_run_log=False)
        assert store.read() == ["second"]

    def test_clear(self, tmp_path: Path) -> None:
        """Clearing removes the file and is idempotent."""
        store = RunLogStore(tmp_path / "run.log")
        store.write(["a"])
        store.clear()
        store.clear()
        assert not store.path.exists()

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        store = RunLogStore(tmp_path / "run.log")
        store.write(["a"])
        assert list(tmp_path.glob("*.tmp")) == []

    def test_default_path_under_state_dir(self, fake_home: Path, tmp_path: Path) -> None:
        """The default location honors XDG_STATE_HOME."""
        assert RunLogStore().path == tmp_path / "xdg-state" / "cleanctl" / "run.log"
