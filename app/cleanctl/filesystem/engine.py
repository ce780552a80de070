"""Cleanup engine: the serialized entry point for scanning and deletion.

``build_plan`` reads the filesystem and ``execute`` mutates it. A single
lock guarantees that at most one of them is in flight per engine, so a
scan never observes a half-finished cleanup. Both calls block; callers
with an interactive loop should run them on a worker thread.
"""

import logging
import threading
from collections.abc import Iterable
from enum import Enum

from cleanctl.core.settings import Settings
from cleanctl.filesystem.categories import Category
from cleanctl.filesystem.models import ExecutionResult, Plan
from cleanctl.filesystem.operator import CleanupOperator
from cleanctl.filesystem.scanner import LARGE_FILE_THRESHOLD_BYTES, PlanBuilder

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    """What the engine is currently doing.

    Attributes:
        IDLE: No call in flight.
        SCANNING: build_plan is running.
        EXECUTING: execute is running.
    """

    IDLE = "idle"
    SCANNING = "scanning"
    EXECUTING = "executing"


class CleanupEngine:
    """Serializes plan building and plan execution.

    Args:
        large_file_threshold_bytes: Minimum size reported by the
            large-file scan.
    """

    def __init__(self, *, large_file_threshold_bytes: int = LARGE_FILE_THRESHOLD_BYTES) -> None:
        self._lock = threading.Lock()
        self._state = EngineState.IDLE
        self._builder = PlanBuilder(large_file_threshold_bytes=large_file_threshold_bytes)
        self._operator = CleanupOperator()

    @property
    def state(self) -> EngineState:
        return self._state

    def build_plan(
        self,
        categories: Iterable[Category],
        excluded_paths: Iterable[str],
        safe_only: bool,
    ) -> Plan:
        """Scan categories into a plan. Blocks while another call is running."""
        with self._lock:
            self._state = EngineState.SCANNING
            try:
                return self._builder.build(categories, list(excluded_paths), safe_only)
            finally:
                self._state = EngineState.IDLE

    def execute(
        self,
        plan: Plan,
        settings: Settings,
        excluded_paths: Iterable[str],
    ) -> ExecutionResult:
        """Execute a plan. Blocks while another call is running."""
        with self._lock:
            self._state = EngineState.EXECUTING
            try:
                logger.info("Executing plan with %d targets", len(plan.targets))
                return self._operator.execute(plan, settings, list(excluded_paths))
            finally:
                self._state = EngineState.IDLE
