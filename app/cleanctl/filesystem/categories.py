"""Cleanup category registry.

Each category is a closed enum member backed by an immutable
:class:`CategorySpec` in :data:`CATEGORY_SPECS`. All category-specific
behavior is data: titles, risk level, report-only flag and root paths.
Roots are stored relative to the home directory and resolved on every
call, so a changed ``HOME`` is picked up without restarting.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class RiskLevel(str, Enum):
    """Risk classification of a cleanup category.

    Attributes:
        SAFE: Regenerable data; included in the one-tap safe preset.
        OPTIONAL: Deleting may have user-visible side effects.
    """

    SAFE = "safe"
    OPTIONAL = "optional"


@dataclass(frozen=True, slots=True)
class CategorySpec:
    """Static description of a cleanup category.

    Attributes:
        title: Human-readable title, also the processing sort key.
        description: One-line description of what the category covers.
        risk: Risk classification.
        home_roots: Root directories relative to the user's home.
        warning: Optional caution shown before selecting the category.
        preview_only: Report targets but never delete them.
    """

    title: str
    description: str
    risk: RiskLevel
    home_roots: tuple[str, ...]
    warning: str = ""
    preview_only: bool = False


class Category(str, Enum):
    """Known cleanup categories."""

    USER_CACHES = "user_caches"
    USER_LOGS = "user_logs"
    TRASH = "trash"
    XCODE_DERIVED_DATA = "xcode_derived_data"
    IOS_SIMULATORS = "ios_simulators"
    HOMEBREW_CACHE = "homebrew_cache"
    BROWSER_CACHES = "browser_caches"
    LARGE_FILES = "large_files"

    @property
    def spec(self) -> CategorySpec:
        return CATEGORY_SPECS[self]

    @property
    def title(self) -> str:
        return self.spec.title

    @property
    def description(self) -> str:
        return self.spec.description

    @property
    def risk(self) -> RiskLevel:
        return self.spec.risk

    @property
    def warning(self) -> str:
        return self.spec.warning

    @property
    def is_preview_only(self) -> bool:
        return self.spec.preview_only

    @property
    def default_selected(self) -> bool:
        return self.spec.risk == RiskLevel.SAFE

    def roots(self, home: Path | None = None) -> list[Path]:
        """Resolve the category's root directories against a home directory.

        Args:
            home: Home directory to resolve against. Defaults to the
                current user's home, looked up at call time.

        Returns:
            Absolute root paths in declaration order.
        """
        base = home if home is not None else Path.home()
        return [base / relative for relative in self.spec.home_roots]


CATEGORY_SPECS: dict[Category, CategorySpec] = {
    Category.USER_CACHES: CategorySpec(
        title="User Caches",
        description="Per-user application caches under ~/Library/Caches",
        risk=RiskLevel.SAFE,
        home_roots=("Library/Caches",),
    ),
    Category.USER_LOGS: CategorySpec(
        title="Logs",
        description="Log files under ~/Library/Logs",
        risk=RiskLevel.SAFE,
        home_roots=("Library/Logs",),
    ),
    Category.TRASH: CategorySpec(
        title="Trash",
        description="Contents of ~/.Trash",
        risk=RiskLevel.SAFE,
        home_roots=(".Trash",),
    ),
    Category.XCODE_DERIVED_DATA: CategorySpec(
        title="Xcode DerivedData",
        description="Xcode build artifacts",
        risk=RiskLevel.SAFE,
        home_roots=("Library/Developer/Xcode/DerivedData",),
    ),
    Category.IOS_SIMULATORS: CategorySpec(
        title="iOS Simulators",
        description="CoreSimulator device data",
        risk=RiskLevel.SAFE,
        home_roots=("Library/Developer/CoreSimulator/Devices",),
        warning="Simulator devices are reset and have to be recreated.",
    ),
    Category.HOMEBREW_CACHE: CategorySpec(
        title="Homebrew Cache",
        description="Homebrew download cache",
        risk=RiskLevel.SAFE,
        home_roots=("Library/Caches/Homebrew",),
    ),
    Category.BROWSER_CACHES: CategorySpec(
        title="Browser Caches",
        description="Safari / Chrome / Edge cache folders",
        risk=RiskLevel.OPTIONAL,
        home_roots=(
            "Library/Caches/Google/Chrome",
            "Library/Caches/com.apple.Safari",
            "Library/Caches/Microsoft Edge",
        ),
        warning="Browser sessions and first launch time may be affected.",
    ),
    Category.LARGE_FILES: CategorySpec(
        title="Large File Scan",
        description="Report of large files under Desktop, Documents and Downloads",
        risk=RiskLevel.OPTIONAL,
        home_roots=("Desktop", "Documents", "Downloads"),
        warning="This category never deletes anything, it only reports.",
        preview_only=True,
    ),
}


def all_categories() -> list[Category]:
    """Return every category, sorted by title."""
    return sorted(Category, key=lambda c: c.title)


def safe_preset() -> frozenset[Category]:
    """Return the categories selected by default (risk == safe)."""
    return frozenset(c for c in Category if c.default_selected)


def get_category(identifier: str) -> Category:
    """Look up a category by its identifier.

    Args:
        identifier: Category identifier such as ``"user_caches"``.

    Returns:
        The matching Category.

    Raises:
        ValueError: If no category has this identifier.
    """
    try:
        return Category(identifier)
    except ValueError:
        known = ", ".join(c.value for c in Category)
        msg = f"Unknown category '{identifier}' (known: {known})"
        raise ValueError(msg) from None
