"""Where cleanctl keeps its own files.

Settings and the optional theme override are configuration and live under
``$XDG_CONFIG_HOME/cleanctl`` (default ``~/.config/cleanctl``). The
last-run timestamp and the run log are state and live under
``$XDG_STATE_HOME/cleanctl`` (default ``~/.local/state/cleanctl``).

Nothing here creates directories; writers create parents on first write.
"""

import os
from pathlib import Path

APP_NAME = "cleanctl"

CONFIG_FILENAME = "config.toml"
THEME_FILENAME = "theme.toml"
STATE_FILENAME = "state.json"
RUN_LOG_FILENAME = "run.log"


def _xdg_base(env_var: str, fallback: str) -> Path:
    # Empty values count as unset
    value = os.environ.get(env_var, "")
    return Path(value) if value else Path.home() / fallback


def get_config_dir() -> Path:
    """Directory holding config.toml and theme.toml."""
    return _xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_state_dir() -> Path:
    """Directory holding state.json and run.log."""
    return _xdg_base("XDG_STATE_HOME", ".local/state") / APP_NAME


def get_user_theme_path() -> Path:
    return get_config_dir() / THEME_FILENAME


def get_run_log_path() -> Path:
    return get_state_dir() / RUN_LOG_FILENAME
