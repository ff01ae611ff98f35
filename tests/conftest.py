"""Pytest fixtures for cmdbox tests."""

from collections.abc import Generator
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from cmdbox.actions.context import ActionContext
from cmdbox.config import reset_config
from cmdbox.config.schema import CmdBoxConfig


class RecordingRenderer:
    """Markdown engine that records every unit it is asked to render."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def render(self, markdown: str) -> str:
        self.calls.append(markdown)
        return f"[{markdown}]"


@pytest.fixture(autouse=True)
def reset_config_fixture() -> Generator[None, None, None]:
    """Reset the config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def default_config(tmp_path: Path) -> CmdBoxConfig:
    """Default configuration with downloads and plugins under tmp_path."""
    config = CmdBoxConfig()
    config.downloads.directory = tmp_path / "Downloads"
    config.downloads.mirror = "https://mirror.test"
    config.downloads.retries = 1
    config.plugins.directory = tmp_path / "plugins"
    return config


@pytest.fixture
def action_context(
    default_config: CmdBoxConfig,
    recorder: RecordingRenderer,
    tmp_path: Path,
) -> ActionContext:
    """Context whose consoles and output stream write to StringIO buffers."""
    return ActionContext(
        config=default_config,
        console=Console(file=StringIO(), width=200, no_color=True),
        err_console=Console(file=StringIO(), width=200, no_color=True),
        renderer=recorder,
        out=StringIO(),
        stdin=StringIO(""),
        confirm=lambda message, console: True,
        working_dir=tmp_path,
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a test config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text("""
default_provider = "ollama"

[providers.ollama]
default_model = "qwen2.5-coder"

[render]
renderer = "plain"
code_theme = "native"

[downloads]
mirror = "https://example.org/mirror"
retries = 5
""")
    return config_path
