"""Plan execution: permanent deletion of planned targets.

Every deletable target is re-checked against the safety filter with a
freshly normalized exclusion list right before it is removed, because the
filesystem and the exclusion list may have changed since the plan was
built. Failures are isolated per target and never abort the run.
"""

import logging
import os
import shutil
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from cleanctl.core.runlog import LogLevel, format_log_line
from cleanctl.core.settings import Settings
from cleanctl.filesystem.models import ExecutionResult, Failure, Plan, Target
from cleanctl.filesystem.protected import is_candidate_safe, normalize_excluded_paths
from cleanctl.utils.units import format_bytes

logger = logging.getLogger(__name__)

UNSAFE_TARGET_REASON = "Unsafe or excluded target"


class CleanupOperator:
    """Executes cleanup plans.

    Report-only targets are counted and left untouched. There is no dry
    run and no trash stage: what this class removes is gone.
    """

    def execute(
        self,
        plan: Plan,
        settings: Settings,
        excluded_paths: Iterable[str],
    ) -> ExecutionResult:
        """Delete the plan's deletable targets in plan order.

        Args:
            plan: Plan to execute.
            settings: Current settings snapshot.
            excluded_paths: Current exclusion list (``~`` allowed).

        Returns:
            ExecutionResult with counters, failures and the run log.
        """
        _ = settings  # Root escalation and log retention are handled by callers

        excluded = normalize_excluded_paths(excluded_paths)
        started_at = datetime.now(UTC)

        deletable = [t for t in plan.targets if not t.category.is_preview_only]
        preview_only_skipped = len(plan.targets) - len(deletable)

        deleted_targets = 0
        deleted_files = 0
        freed = 0
        failures: list[Failure] = []
        log_lines: list[str] = []

        def log(level: LogLevel, message: str) -> None:
            log_lines.append(format_log_line(level, message))

        log(
            LogLevel.INFO,
            f"Cleanup started. Mode: PERMANENT DELETE, targets: {len(deletable)}",
        )
        if preview_only_skipped:
            log(LogLevel.INFO, f"Report-only targets (not deleted): {preview_only_skipped}")

        for target in deletable:
            display = target.display_path

            if not is_candidate_safe(target.path, target.category, excluded):
                failures.append(Failure(path=display, reason=UNSAFE_TARGET_REASON))
                log(LogLevel.SKIP, f"{display} skipped by safety filter.")
                continue

            if not os.path.lexists(target.path):
                log(LogLevel.SKIP, f"{display} not found.")
                continue

            try:
                self._remove(target)
            except OSError as e:
                logger.warning("Failed to delete %s: %s", target.path, e)
                failures.append(Failure(path=display, reason=str(e)))
                log(LogLevel.ERR, f"Could not delete: {display} -> {e}")
                continue

            deleted_targets += 1
            deleted_files += max(target.file_count, 1)
            freed += target.size_bytes
            log(LogLevel.OK, f"Deleted: {display} ({format_bytes(target.size_bytes)})")

        estimated = sum(t.size_bytes for t in deletable)
        log(
            LogLevel.INFO,
            f"Finished. Targets: {deleted_targets}, files: {deleted_files}, "
            f"space: {format_bytes(freed)}",
        )
        if failures:
            log(LogLevel.WARN, f"Failed or skipped targets: {len(failures)}")

        return ExecutionResult(
            started_at=started_at,
            finished_at=datetime.now(UTC),
            deleted_target_count=deleted_targets,
            deleted_file_count=deleted_files,
            preview_only_skipped=preview_only_skipped,
            estimated_bytes=estimated,
            actual_bytes_freed=freed,
            failures=tuple(failures),
            log_lines=tuple(log_lines),
        )

    @staticmethod
    def _remove(target: Target) -> None:
        """Remove a target recursively.

        Directories (but not symlinks to directories) go through
        shutil.rmtree; files and symlinks are unlinked.

        Raises:
            OSError: If removal fails.
        """
        path = Path(target.path)
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
        logger.debug("Deleted %s", target.path)
