"""Tests for the Typer entry point."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cmdbox import __version__
from cmdbox.cli import app

runner = CliRunner()


@pytest.fixture
def env(tmp_path: Path) -> dict[str, str]:
    """Environment pointing the CLI at a throwaway config file."""
    return {"CMDBOX_CONFIG": str(tmp_path / "config.toml")}


class TestCLI:
    """Tests for `cmdbox` invocations."""

    def test_version(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["--version"], env=env)

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_runs_action(self, env: dict[str, str], tmp_path: Path) -> None:
        """Test that the first config is written and the action runs."""
        result = runner.invoke(app, ["--no-plugins", "hello"], env=env)

        assert result.exit_code == 0
        assert result.output.strip() == "world"
        assert (tmp_path / "config.toml").exists()

    def test_action_options_pass_through(self, env: dict[str, str], tmp_path: Path) -> None:
        """Test that options after the action word reach the action."""
        (tmp_path / "doc.md").write_text("**hi**\n")

        result = runner.invoke(
            app, ["--no-plugins", "md", str(tmp_path / "doc.md"), "--plain"], env=env
        )

        assert result.exit_code == 0
        assert result.output == "**hi**\n"

    def test_no_arguments_lists_actions(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["--no-plugins"], env=env)

        assert result.exit_code == 0
        assert "Actions" in result.output
        assert "hello" in result.output

    def test_unknown_action(self, env: dict[str, str]) -> None:
        result = runner.invoke(app, ["--no-plugins", "frobnicate"], env=env)

        assert result.exit_code == 41
        assert "no action matches frobnicate" in result.output

    def test_invalid_config(self, env: dict[str, str], tmp_path: Path) -> None:
        """Test that a broken config file exits with the config error code."""
        (tmp_path / "config.toml").write_text("[downloads]\nretries = 0\n")

        result = runner.invoke(app, ["hello"], env=env)

        assert result.exit_code == 22

    def test_plugins_from_config_directory(
        self, env: dict[str, str], tmp_path: Path
    ) -> None:
        """Test that private actions in the configured directory are available."""
        plugins = tmp_path / "plugins"
        plugins.mkdir()
        (plugins / "mine.py").write_text(
            "def install(register, ctx):\n"
            "    register('mine', run=lambda m: ctx.console.print('mine ran'))\n"
        )
        (tmp_path / "config.toml").write_text(
            f"[plugins]\ndirectory = {str(plugins)!r}\n"
        )

        result = runner.invoke(app, ["mine"], env=env)

        assert result.exit_code == 0
        assert "mine ran" in result.output
