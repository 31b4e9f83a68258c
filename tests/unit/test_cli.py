"""Unit tests for the command-line interface."""

import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from expo_stallion import __version__, cli
from expo_stallion.core.config import Config

FIXTURES = Path(__file__).parent.parent / "fixtures"

runner = CliRunner()

MAIN_APPLICATION = "android/app/src/main/java/com/example/demo/MainApplication.kt"


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch):
    """Keep the CLI away from the real environment and global logging setup."""
    monkeypatch.setattr(cli, "get_config", lambda: Config())
    monkeypatch.setattr(cli, "setup_logging", lambda config=None: None)


class TestCli:
    """Tests for CLI commands."""

    def test_version(self):
        result = runner.invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert f"expo-stallion v{__version__}" in result.stdout

    def test_detect(self):
        result = runner.invoke(cli.app, ["detect", str(FIXTURES / "android" / "expo_wrapper.kt")])
        assert result.exit_code == 0
        assert "expo_react_host_wrapper" in result.stdout

    def test_detect_unsupported_file(self):
        result = runner.invoke(cli.app, ["detect", str(FIXTURES / "android" / "strings.xml")])
        assert result.exit_code == 1

    def test_apply(self, expo_project):
        result = runner.invoke(
            cli.app,
            ["apply", str(expo_project), "--project-id", "proj_123", "--app-token", "spb_abc"],
        )
        assert result.exit_code == 0, result.stdout
        assert "Stallion.getJSBundleFile" in (expo_project / MAIN_APPLICATION).read_text(encoding="utf-8")

    def test_apply_dry_run(self, expo_project):
        before = (expo_project / MAIN_APPLICATION).read_bytes()
        result = runner.invoke(
            cli.app,
            ["apply", str(expo_project), "--project-id", "p", "--app-token", "spb_abc", "--dry-run"],
        )
        assert result.exit_code == 0, result.stdout
        assert (expo_project / MAIN_APPLICATION).read_bytes() == before

    def test_apply_bad_token(self, expo_project):
        before = (expo_project / MAIN_APPLICATION).read_bytes()
        result = runner.invoke(
            cli.app,
            ["apply", str(expo_project), "--project-id", "p", "--app-token", "abc123"],
        )
        assert result.exit_code == 1
        assert (expo_project / MAIN_APPLICATION).read_bytes() == before

    def test_apply_without_credentials_skips(self, expo_project):
        before = (expo_project / MAIN_APPLICATION).read_bytes()
        result = runner.invoke(cli.app, ["apply", str(expo_project)])
        assert result.exit_code == 0
        assert (expo_project / MAIN_APPLICATION).read_bytes() == before

    def test_patch_files(self, temp_dir):
        target = temp_dir / "MainApplication.java"
        shutil.copyfile(FIXTURES / "android" / "java_host.java", target)

        result = runner.invoke(cli.app, ["patch", str(target)])
        assert result.exit_code == 0, result.stdout
        assert "protected String getJSBundleFile()" in target.read_text(encoding="utf-8")

    def test_patch_dry_run(self, temp_dir):
        target = temp_dir / "AppDelegate.mm"
        shutil.copyfile(FIXTURES / "ios" / "AppDelegate.mm", target)
        before = target.read_bytes()

        result = runner.invoke(cli.app, ["patch", "--dry-run", str(target)])
        assert result.exit_code == 0, result.stdout
        assert target.read_bytes() == before

    def test_patch_unsupported_file(self, temp_dir):
        target = temp_dir / "notes.txt"
        target.write_text("hello\n", encoding="utf-8")
        result = runner.invoke(cli.app, ["patch", str(target)])
        assert result.exit_code == 1

    def test_config(self):
        result = runner.invoke(cli.app, ["config"])
        assert result.exit_code == 0
        assert "Current Configuration" in result.stdout
