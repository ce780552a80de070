"""Plan builder: scans category roots for reclaimable space.

Deletable categories contribute the direct children of their roots, each
measured recursively. The report-only large-file category walks its roots
fully and reports single files above a size threshold. Scanning never
modifies the filesystem; problems with individual roots become plan notes.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, datetime
from pathlib import Path

from cleanctl.filesystem.categories import Category, RiskLevel
from cleanctl.filesystem.models import Plan, Target
from cleanctl.filesystem.protected import (
    is_candidate_safe,
    is_protected,
    normalize_excluded_paths,
)

logger = logging.getLogger(__name__)

# Files at or above this allocated size are reported by the large-file scan
LARGE_FILE_THRESHOLD_BYTES: int = 500 * 1024 * 1024

# Directories with these suffixes are opaque bundles: measured as a whole
# entry but never descended into during walks.
BUNDLE_SUFFIXES: frozenset[str] = frozenset(
    {
        ".app",
        ".appex",
        ".bundle",
        ".framework",
        ".kext",
        ".plugin",
        ".photoslibrary",
        ".musiclibrary",
        ".xcarchive",
        ".xcodeproj",
        ".xcworkspace",
        ".rtfd",
        ".pages",
        ".numbers",
        ".key",
    }
)


def is_bundle(name: str) -> bool:
    """Check whether a directory name denotes an opaque bundle."""
    return os.path.splitext(name)[1].lower() in BUNDLE_SUFFIXES


def allocated_size(st: os.stat_result) -> int:
    """Return the space a file occupies on disk.

    Uses the allocated block count where the platform reports one and
    falls back to the logical size otherwise.
    """
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return st.st_size
    return blocks * 512


def walk_files(
    root: str, *, skip_dir: Callable[[str], bool] | None = None
) -> Iterator[os.DirEntry[str]]:
    """Yield every regular file below ``root``.

    Symbolic links are never followed. Bundle directories, and any
    directory rejected by ``skip_dir``, are not descended into.
    Unreadable directories are skipped.

    Args:
        root: Directory to walk.
        skip_dir: Optional predicate on directory paths; True means skip.

    Yields:
        Directory entries of regular files, in name order per directory.
    """
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug("Cannot enumerate %s: %s", current, e)
            continue

        subdirs: list[str] = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    if is_bundle(entry.name):
                        continue
                    if skip_dir is not None and skip_dir(entry.path):
                        continue
                    subdirs.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    yield entry
            except OSError as e:
                logger.debug("Cannot inspect %s: %s", entry.path, e)

        # Reversed so the stack pops subdirectories in name order
        stack.extend(reversed(subdirs))


def measure(path: Path) -> tuple[int, int]:
    """Measure the allocated size and regular-file count of a path.

    A missing path or a symbolic link measures as zero, since removing a
    link frees nothing of its destination. A file counts as one. A
    directory is walked recursively; entries that cannot be read are
    skipped, so the result is whatever could be summed.

    Args:
        path: File or directory to measure.

    Returns:
        Tuple of (allocated bytes, regular file count).
    """
    try:
        if path.is_symlink() or not path.exists():
            return 0, 0
        if not path.is_dir():
            return allocated_size(path.stat()), 1
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return 0, 0

    total_bytes = 0
    total_files = 0
    for entry in walk_files(str(path)):
        try:
            total_bytes += allocated_size(entry.stat(follow_symlinks=False))
        except OSError as e:
            logger.debug("Cannot stat %s: %s", entry.path, e)
            continue
        total_files += 1

    return total_bytes, total_files


def _missing_roots_note(category: Category) -> str:
    if category == Category.TRASH:
        return f"{category.title}: nothing to clean"
    return f"{category.title}: no suitable folder found"


class PlanBuilder:
    """Builds cleanup plans for a set of categories.

    Args:
        large_file_threshold_bytes: Minimum allocated size for the
            large-file report.
    """

    def __init__(self, *, large_file_threshold_bytes: int = LARGE_FILE_THRESHOLD_BYTES) -> None:
        self._large_file_threshold = large_file_threshold_bytes

    @property
    def large_file_threshold_bytes(self) -> int:
        return self._large_file_threshold

    def build(
        self,
        categories: Iterable[Category],
        excluded_paths: Iterable[str],
        safe_only: bool,
    ) -> Plan:
        """Scan the given categories and assemble a plan.

        Categories are processed in title order so notes are deterministic.
        Errors are recorded as notes; this method does not raise for
        filesystem problems.

        Args:
            categories: Categories to scan.
            excluded_paths: User exclusion list (``~`` allowed).
            safe_only: Restrict to categories with risk == safe.

        Returns:
            Plan with all safe, non-empty targets and diagnostic notes.
        """
        effective = sorted(
            {c for c in categories if not safe_only or c.risk == RiskLevel.SAFE},
            key=lambda c: c.title,
        )
        excluded = normalize_excluded_paths(excluded_paths)

        targets: list[Target] = []
        notes: list[str] = []

        for category in effective:
            roots = [root for root in category.roots() if root.exists()]
            if not roots:
                notes.append(_missing_roots_note(category))
                continue

            if category.is_preview_only:
                targets.extend(self._scan_large_files(category, roots, excluded))
                continue

            for root in roots:
                if is_protected(root):
                    notes.append(f"{category.title}: protected root skipped -> {root}")
                    continue
                try:
                    targets.extend(self._scan_children(category, root, excluded))
                except OSError as e:
                    logger.warning("Cannot read %s: %s", root, e)
                    notes.append(f"{category.title}: {root} could not be read ({e})")

        logger.debug("Built plan with %d targets and %d notes", len(targets), len(notes))
        return Plan(generated_at=datetime.now(UTC), targets=tuple(targets), notes=tuple(notes))

    def _scan_children(self, category: Category, root: Path, excluded: list[str]) -> list[Target]:
        """Measure the direct children of a root.

        Raises:
            OSError: If the root cannot be enumerated.
        """
        targets: list[Target] = []
        for child in sorted(root.iterdir()):
            if not is_candidate_safe(child, category, excluded):
                continue

            size, file_count = measure(child)
            if size <= 0:
                continue

            targets.append(
                Target(category=category, path=str(child), size_bytes=size, file_count=file_count)
            )
        return targets

    def _scan_large_files(
        self, category: Category, roots: list[Path], excluded: list[str]
    ) -> list[Target]:
        """Walk roots recursively and report files above the threshold."""
        targets: list[Target] = []
        for root in roots:
            if is_protected(root):
                continue

            for entry in walk_files(str(root), skip_dir=is_protected):
                try:
                    size = allocated_size(entry.stat(follow_symlinks=False))
                except OSError:
                    continue
                if size < self._large_file_threshold:
                    continue
                if not is_candidate_safe(entry.path, category, excluded):
                    continue
                targets.append(
                    Target(category=category, path=entry.path, size_bytes=size, file_count=1)
                )
        return targets
