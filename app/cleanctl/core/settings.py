"""Persisted settings, exclusion list and last-run timestamp.

Settings and the exclusion list live in ``config.toml`` in the config
directory::

    excluded_paths = ["~/Library/Caches/com.example.keep"]

    [settings]
    only_safe_areas = true
    request_root_access = false
    keep_run_log = true

The last-run timestamp is runtime state and lives in ``state.json`` in
the state directory. Reads never fail: a missing or corrupt file yields
defaults. Writes are atomic and raise :class:`SettingsStoreError`.
"""

import json
import logging
import os
import tomllib
from datetime import datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cleanctl.core.paths import CONFIG_FILENAME, STATE_FILENAME, get_config_dir, get_state_dir

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """User settings.

    Attributes:
        only_safe_areas: Restrict scans and cleanups to safe categories.
        request_root_access: Reserved for a privileged helper; not used by the engine.
        keep_run_log: Append each run to the run log instead of replacing it.
    """

    model_config = ConfigDict(extra="forbid")

    only_safe_areas: Annotated[
        bool, Field(description="Restrict to categories with risk level 'safe'")
    ] = True
    request_root_access: Annotated[
        bool, Field(description="Ask for elevated privileges (reserved)")
    ] = False
    keep_run_log: Annotated[bool, Field(description="Keep earlier runs in the run log")] = True


class SettingsStoreError(Exception):
    """Raised when settings or state cannot be written."""


def _atomic_write(path: Path, data: bytes) -> None:
    """Write bytes to a file via a temporary file and os.replace().

    Raises:
        SettingsStoreError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(mode="wb", dir=path.parent, delete=False, suffix=".tmp") as f:
            tmp_path = Path(f.name)
            f.write(data)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsStoreError(f"Failed to write {path}: {e}") from e


class SettingsStore:
    """Key/value persistence for settings, exclusions and the last run.

    Args:
        config_dir: Override for the config directory (default: XDG config).
        state_dir: Override for the state directory (default: XDG state).
    """

    def __init__(self, config_dir: Path | None = None, state_dir: Path | None = None) -> None:
        self._config_dir = config_dir if config_dir is not None else get_config_dir()
        self._state_dir = state_dir if state_dir is not None else get_state_dir()

    @property
    def config_path(self) -> Path:
        return self._config_dir / CONFIG_FILENAME

    @property
    def state_path(self) -> Path:
        return self._state_dir / STATE_FILENAME

    # =========================================================================
    # Settings
    # =========================================================================

    def load(self) -> Settings:
        """Load settings, falling back to defaults if absent or corrupt."""
        raw = self._read_config().get("settings", {})
        if not isinstance(raw, dict):
            logger.warning("Invalid [settings] section in %s, using defaults", self.config_path)
            return Settings()
        try:
            return Settings.model_validate(raw)
        except ValidationError as e:
            logger.warning("Invalid settings in %s, using defaults: %s", self.config_path, e)
            return Settings()

    def save(self, settings: Settings) -> None:
        """Persist settings, keeping the exclusion list as stored."""
        data = self._read_config()
        data["settings"] = settings.model_dump()
        self._write_config(data)

    # =========================================================================
    # Exclusion list
    # =========================================================================

    def load_excluded_paths(self) -> list[str]:
        """Load the exclusion list. Non-string entries are dropped."""
        raw = self._read_config().get("excluded_paths", [])
        if not isinstance(raw, list):
            logger.warning("Invalid excluded_paths in %s, ignoring", self.config_path)
            return []
        return [p for p in raw if isinstance(p, str)]

    def save_excluded_paths(self, paths: list[str]) -> None:
        """Persist the exclusion list, keeping the settings as stored."""
        data = self._read_config()
        data["excluded_paths"] = list(paths)
        self._write_config(data)

    def add_excluded_path(self, path: str) -> bool:
        """Append a path to the exclusion list.

        Surrounding whitespace is trimmed. Empty and duplicate entries
        are ignored.

        Returns:
            True if the list changed.
        """
        trimmed = path.strip()
        if not trimmed:
            return False
        paths = self.load_excluded_paths()
        if trimmed in paths:
            return False
        paths.append(trimmed)
        self.save_excluded_paths(paths)
        return True

    def remove_excluded_path(self, path: str) -> bool:
        """Remove a path from the exclusion list.

        Returns:
            True if the path was present.
        """
        paths = self.load_excluded_paths()
        trimmed = path.strip()
        if trimmed not in paths:
            return False
        paths.remove(trimmed)
        self.save_excluded_paths(paths)
        return True

    # =========================================================================
    # Last run
    # =========================================================================

    def load_last_run(self) -> datetime | None:
        """Load the timestamp of the last cleanup, if one was recorded."""
        state = self._read_state()
        value = state.get("last_run")
        if not isinstance(value, str):
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.warning("Invalid last_run timestamp in %s: %r", self.state_path, value)
            return None

    def save_last_run(self, timestamp: datetime | None) -> None:
        """Record the last cleanup timestamp; None clears it."""
        state = self._read_state()
        if timestamp is None:
            state.pop("last_run", None)
        else:
            state["last_run"] = timestamp.isoformat()
        _atomic_write(self.state_path, json.dumps(state, indent=2).encode("utf-8"))

    # =========================================================================
    # File access
    # =========================================================================

    def _read_config(self) -> dict[str, Any]:
        try:
            with open(self.config_path, "rb") as f:
                return tomllib.load(f)
        except FileNotFoundError:
            return {}
        except tomllib.TOMLDecodeError as e:
            logger.warning("Failed to parse %s, using defaults: %s", self.config_path, e)
            return {}
        except OSError as e:
            logger.warning("Failed to read %s, using defaults: %s", self.config_path, e)
            return {}

    def _write_config(self, data: dict[str, Any]) -> None:
        _atomic_write(self.config_path, tomli_w.dumps(data).encode("utf-8"))

    def _read_state(self) -> dict[str, Any]:
        try:
            data = json.loads(self.state_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to read %s: %s", self.state_path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return data
