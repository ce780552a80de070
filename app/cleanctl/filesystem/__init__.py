"""Filesystem cleanup engine.

This module provides the category registry, the path safety filter,
plan building, plan execution and the serialized engine facade.
"""

from cleanctl.filesystem.categories import (
    CATEGORY_SPECS,
    Category,
    CategorySpec,
    RiskLevel,
    all_categories,
    get_category,
    safe_preset,
)
from cleanctl.filesystem.engine import CleanupEngine, EngineState
from cleanctl.filesystem.models import ExecutionResult, Failure, Plan, Target
from cleanctl.filesystem.operator import CleanupOperator
from cleanctl.filesystem.protected import (
    PROTECTED_ROOTS,
    is_candidate_safe,
    is_descendant,
    is_protected,
    normalize,
)
from cleanctl.filesystem.scanner import LARGE_FILE_THRESHOLD_BYTES, PlanBuilder, measure

__all__ = [
    "CATEGORY_SPECS",
    "LARGE_FILE_THRESHOLD_BYTES",
    "PROTECTED_ROOTS",
    "Category",
    "CategorySpec",
    "CleanupEngine",
    "CleanupOperator",
    "EngineState",
    "ExecutionResult",
    "Failure",
    "Plan",
    "PlanBuilder",
    "RiskLevel",
    "Target",
    "all_categories",
    "get_category",
    "is_candidate_safe",
    "is_descendant",
    "is_protected",
    "measure",
    "normalize",
    "safe_preset",
]
