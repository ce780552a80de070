"""Pytest configuration and shared fixtures.

Every test that touches the filesystem runs against a throwaway home
directory: HOME and the XDG directories are redirected into tmp_path so
category roots, protected roots and settings files never point at the
real user's data.
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect HOME and the XDG config/state directories into tmp_path.

    Returns:
        The fake home directory (exists, empty).
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))
    return home


@pytest.fixture
def write_file() -> Callable[[Path, int], Path]:
    """Return a helper that writes a file of incompressible data.

    Random content keeps the allocated size close to the logical size
    even on compressing filesystems.
    """

    def _write(path: Path, size: int) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(os.urandom(size))
        return path

    return _write
