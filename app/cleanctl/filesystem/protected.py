"""Path safety filter.

Every scan and deletion decision goes through :func:`is_candidate_safe`.
Paths are compared only after :func:`normalize`, which resolves symbolic
links, so two spellings of the same filesystem object always compare
equal and a link cannot smuggle a protected directory into a category.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from cleanctl.filesystem.categories import Category

# Roots that may never be scanned or deleted, nor anything below them.
# Entries starting with ~ are expanded to the user's home directory at
# call time. User exclusions cannot override this list.
PROTECTED_ROOTS: tuple[str, ...] = (
    "/System",
    "/Library",
    "/Applications",
    "/private/var/db",
    "/private/var/vm",
    "~/Library/Application Support",
    "~/Library/Keychains",
    "~/Library/Mobile Documents",
    "~/Library/Containers/com.apple.CloudDocs",
)


def expand_path(value: str) -> str:
    """Expand a leading home reference (``~``) and make the path absolute."""
    return os.path.abspath(os.path.expanduser(value))


def normalize(path: str | os.PathLike[str]) -> str:
    """Return the canonical form of a path.

    Symbolic links are resolved (components that do not exist are kept
    as written) and ``.``/``..``/duplicate separators are collapsed.
    """
    return os.path.realpath(os.fspath(path))


def normalize_excluded_paths(excluded_paths: Iterable[str]) -> list[str]:
    """Normalize a user-supplied exclusion list.

    Blank entries are dropped. Every other entry has its leading ``~``
    expanded and is then normalized.

    Args:
        excluded_paths: Paths as entered by the user.

    Returns:
        Normalized paths, in input order.
    """
    return [normalize(expand_path(p.strip())) for p in excluded_paths if p.strip()]


def is_descendant(child: str, parent: str) -> bool:
    """Check whether ``child`` equals ``parent`` or lies below it.

    Both arguments must already be normalized. The comparison respects
    segment boundaries: ``/Users/bob2`` is not below ``/Users/bob``.
    """
    if child == parent:
        return True
    prefix = parent if parent.endswith(os.sep) else parent + os.sep
    return child.startswith(prefix)


def protected_roots() -> list[str]:
    """Return the normalized protected roots for the current home directory."""
    home = str(Path.home())
    expanded = (home + entry[1:] if entry.startswith("~") else entry for entry in PROTECTED_ROOTS)
    return [normalize(p) for p in expanded]


def is_protected(path: str | os.PathLike[str]) -> bool:
    """Check whether a path is a protected root or lies below one.

    Args:
        path: Filesystem path to check.

    Returns:
        True if the path must never be scanned or deleted.
    """
    normalized = normalize(path)
    return any(is_descendant(normalized, root) for root in protected_roots())


def is_candidate_safe(
    path: str | os.PathLike[str],
    category: Category,
    excluded_paths: Iterable[str],
) -> bool:
    """Decide whether a path may be scanned or deleted for a category.

    A path is safe if and only if it is not protected, lies below at
    least one of the category's roots, and lies below none of the
    excluded paths.

    This is the single gate used both when building a plan and again,
    independently, right before each deletion.

    Args:
        path: Candidate path.
        category: Category the candidate belongs to.
        excluded_paths: Exclusion list, already passed through
            :func:`normalize_excluded_paths`.

    Returns:
        True if the candidate passes all three checks.
    """
    normalized = normalize(path)

    if is_protected(normalized):
        return False

    roots = [normalize(root) for root in category.roots()]
    if not any(is_descendant(normalized, root) for root in roots):
        return False

    return not any(is_descendant(normalized, excluded) for excluded in excluded_paths)
