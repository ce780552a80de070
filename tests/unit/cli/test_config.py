"""Unit tests for config, exclude, log and version commands."""

from pathlib import Path

from cleanctl import __version__
from cleanctl.cli.main import app
from cleanctl.core.runlog import RunLogStore
from cleanctl.core.settings import SettingsStore
from typer.testing import CliRunner

runner = CliRunner()


# =============================================================================
# version / help
# =============================================================================


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"cleanctl version {__version__}" in result.output

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "clean" in result.output


# =============================================================================
# config tests
# =============================================================================


class TestConfigCommand:
    """Tests for cleanctl config."""

    def test_show_defaults(self, fake_home: Path) -> None:
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "only_safe_areas" in result.output
        assert "keep_run_log" in result.output

    def test_set_persists(self, fake_home: Path) -> None:
        result = runner.invoke(app, ["config", "set", "--all-areas", "--replace-run-log"])

        assert result.exit_code == 0
        assert "Settings saved." in result.output
        settings = SettingsStore().load()
        assert settings.only_safe_areas is False
        assert settings.keep_run_log is False
        assert settings.request_root_access is False

    def test_set_nothing(self, fake_home: Path) -> None:
        result = runner.invoke(app, ["config", "set"])
        assert result.exit_code == 0
        assert "Nothing to change." in result.output
        assert not SettingsStore().config_path.exists()


# =============================================================================
# exclude tests
# =============================================================================


class TestExcludeCommand:
    """Tests for cleanctl exclude."""

    def test_list_empty(self, fake_home: Path) -> None:
        result = runner.invoke(app, ["exclude", "list"])
        assert result.exit_code == 0
        assert "Exclusion list is empty." in result.output

    def test_add_and_list(self, fake_home: Path) -> None:
        result = runner.invoke(app, ["exclude", "add", "~/Library/Caches/keep"])
        assert result.exit_code == 0
        assert "Excluded:" in result.output

        result = runner.invoke(app, ["exclude", "list"])
        assert "~/Library/Caches/keep" in result.output

    def test_add_duplicate(self, fake_home: Path) -> None:
        runner.invoke(app, ["exclude", "add", "~/a"])
        result = runner.invoke(app, ["exclude", "add", "~/a"])

        assert result.exit_code == 0
        assert "already excluded" in result.output
        assert SettingsStore().load_excluded_paths() == ["~/a"]

    def test_remove(self, fake_home: Path) -> None:
        runner.invoke(app, ["exclude", "add", "~/a"])
        result = runner.invoke(app, ["exclude", "remove", "~/a"])

        assert result.exit_code == 0
        assert SettingsStore().load_excluded_paths() == []

    def test_remove_unknown(self, fake_home: Path) -> None:
        result = runner.invoke(app, ["exclude", "remove", "~/nope"])
        assert result.exit_code == 1


# =============================================================================
# log tests
# =============================================================================


class TestLogCommand:
    """Tests for cleanctl log."""

    def test_show_empty(self, fake_home: Path) -> None:
        result = runner.invoke(app, ["log", "show"])
        assert result.exit_code == 0
        assert "Run log is empty." in result.output

    def test_show_tail(self, fake_home: Path) -> None:
        RunLogStore().write(["[10:00:00] [INFO] first", "[10:00:01] [OK] second"])

        result = runner.invoke(app, ["log", "show", "-n", "1"])

        assert result.exit_code == 0
        assert "second" in result.output
        assert "first" not in result.output

    def test_show_tail_zero(self, fake_home: Path) -> None:
        """--tail 0 prints no lines."""
        RunLogStore().write(["[10:00:00] [INFO] first", "[10:00:01] [OK] second"])

        result = runner.invoke(app, ["log", "show", "--tail", "0"])

        assert result.exit_code == 0
        assert "first" not in result.output
        assert "second" not in result.output

    def test_show_tail_larger_than_log(self, fake_home: Path) -> None:
        RunLogStore().write(["[10:00:00] [INFO] first", "[10:00:01] [OK] second"])

        result = runner.invoke(app, ["log", "show", "-n", "5"])

        assert "first" in result.output
        assert "second" in result.output

    def test_show_negative_tail_rejected(self, fake_home: Path) -> None:
        RunLogStore().write(["[10:00:00] [INFO] first"])

        result = runner.invoke(app, ["log", "show", "--tail", "-3"])

        assert result.exit_code != 0

    def test_clear(self, fake_home: Path) -> None:
        RunLogStore().write(["[10:00:00] [INFO] first"])

        result = runner.invoke(app, ["log", "clear"])

        assert result.exit_code == 0
        assert not RunLogStore().path.exists()
