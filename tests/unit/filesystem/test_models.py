"""Tests for plan and result value objects."""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from cleanctl.filesystem.categories import Category
from cleanctl.filesystem.models import ExecutionResult, Failure, Plan, Target, abbreviate_home


def _target(name: str, size: int, category: Category = Category.USER_CACHES) -> Target:
    return Target(category=category, path=f"/data/{name}", size_bytes=size, file_count=1)


class TestTarget:
    """Tests for Target."""

    def test_negative_size_rejected(self) -> None:
        """Sizes cannot be negative."""
        with pytest.raises(ValueError, match="non-negative"):
            Target(category=Category.TRASH, path="/x", size_bytes=-1, file_count=0)

    def test_negative_count_rejected(self) -> None:
        """File counts cannot be negative."""
        with pytest.raises(ValueError, match="non-negative"):
            Target(category=Category.TRASH, path="/x", size_bytes=0, file_count=-1)

    def test_empty_path_rejected(self) -> None:
        """Paths cannot be empty."""
        with pytest.raises(ValueError, match="empty"):
            Target(category=Category.TRASH, path="", size_bytes=0, file_count=0)

    def test_display_path(self, fake_home: Path) -> None:
        """The home directory is abbreviated to ~."""
        target = Target(
            category=Category.TRASH,
            path=str(fake_home / ".Trash" / "old.zip"),
            size_bytes=1,
            file_count=1,
        )
        assert target.display_path == "~/.Trash/old.zip"

    def test_to_dict(self) -> None:
        """Targets serialize with the category identifier."""
        assert _target("a", 5).to_dict() == {
            "category": "user_caches",
            "path": "/data/a",
            "size_bytes": 5,
            "file_count": 1,
        }


class TestAbbreviateHome:
    """Tests for abbreviate_home."""

    def test_home_itself(self, fake_home: Path) -> None:
        assert abbreviate_home(str(fake_home)) == "~"

    def test_lookalike_sibling(self, fake_home: Path) -> None:
        """A sibling sharing the home prefix is not abbreviated."""
        sibling = str(fake_home) + "2/file"
        assert abbreviate_home(sibling) == sibling

    def test_outside_home(self, fake_home: Path) -> None:
        assert abbreviate_home("/tmp/x") == "/tmp/x"


class TestPlan:
    """Tests for Plan derived views."""

    def test_totals(self) -> None:
        """Totals are derived from targets."""
        plan = Plan(
            generated_at=datetime.now(UTC),
            targets=(
                _target("a", 10),
                _target("b", 30),
                _target("c", 5, Category.TRASH),
            ),
        )

        assert plan.total_bytes == 45
        assert plan.category_totals == {Category.USER_CACHES: 40, Category.TRASH: 5}
        assert [t.size_bytes for t in plan.sorted_targets] == [30, 10, 5]
        # Stored order is untouched
        assert [t.size_bytes for t in plan.targets] == [10, 30, 5]

    def test_empty(self) -> None:
        """The empty plan has no targets, notes or bytes."""
        plan = Plan.empty()
        assert plan.targets == ()
        assert plan.notes == ()
        assert plan.total_bytes == 0
        assert plan.category_totals == {}

    def test_to_dict(self) -> None:
        """Plans serialize with totals and notes."""
        plan = Plan(
            generated_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
            targets=(_target("a", 10),),
            notes=("Trash: nothing to clean",),
        )
        data = plan.to_dict()
        assert data["generated_at"] == "2026-01-02T03:04:05+00:00"
        assert data["total_bytes"] == 10
        assert data["category_totals"] == {"user_caches": 10}
        assert data["notes"] == ["Trash: nothing to clean"]


class TestExecutionResult:
    """Tests for ExecutionResult."""

    def test_has_failures(self) -> None:
        now = datetime.now(UTC)
        assert ExecutionResult(started_at=now, finished_at=now).has_failures is False
        result = ExecutionResult(
            started_at=now,
            finished_at=now,
            failures=(Failure(path="~/x", reason="busy"),),
        )
        assert result.has_failures is True
