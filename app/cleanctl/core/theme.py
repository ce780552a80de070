"""Console color theme.

The bundled ``data/theme.toml`` defines every color. A user file at
``~/.config/cleanctl/theme.toml`` may override any subset of them; an
override that fails validation is ignored as a whole.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from cleanctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) used by the CLI."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    risk_safe: str = "#03b971"
    risk_optional: str = "#faf870"

    # Run log levels without a semantic counterpart
    log_ok: str = "#03b971"
    log_skip: str = "#b2bec3"
    log_plan: str = "#0e8ac8"
    log_note: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        if not isinstance(value, str) or not _HEX_COLOR.match(value.strip()):
            msg = f"expected a #RGB or #RRGGBB color, got {value!r}"
            raise ValueError(msg)
        return value.strip()


# Rich style name -> (ThemeColors field, extra style attributes)
_STYLES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "risk_safe": ("risk_safe", ""),
    "risk_optional": ("risk_optional", ""),
    "log.info": ("info", ""),
    "log.ok": ("log_ok", ""),
    "log.skip": ("log_skip", ""),
    "log.err": ("error", "bold"),
    "log.warn": ("warning", ""),
    "log.plan": ("log_plan", ""),
    "log.note": ("log_note", ""),
}


def get_bundled_theme_path() -> Path:
    return Path(str(resources.files("cleanctl.data").joinpath("theme.toml")))


def _read_colors(path: Path) -> dict[str, object]:
    """Return the ``[colors]`` table of a theme file.

    A missing, unreadable or malformed file yields an empty table.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return colors


def load_theme() -> ThemeColors:
    """Load the bundled colors merged with the user's overrides."""
    bundled = _read_colors(get_bundled_theme_path())
    if not bundled:
        logger.error("Bundled theme is missing, using built-in colors")

    user_path = get_user_theme_path()
    overrides = _read_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)

    try:
        return ThemeColors.model_validate({**bundled, **overrides})
    except ValidationError as e:
        logger.warning("Ignoring theme overrides from %s: %s", user_path, e)

    try:
        return ThemeColors.model_validate(bundled)
    except ValidationError as e:
        logger.error("Bundled theme is invalid, using built-in colors: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme, one style per entry of the style table.

    Besides the plain color names there is one ``log.<level>`` style per
    run log level so the log viewer can color lines by level.
    """
    if colors is None:
        colors = load_theme()
    return Theme(
        {
            name: f"{attrs} {getattr(colors, field)}".strip()
            for name, (field, attrs) in _STYLES.items()
        }
    )


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme()
