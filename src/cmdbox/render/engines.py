"""Markdown-to-terminal rendering engines."""

from enum import Enum
from io import StringIO
from typing import Any, Protocol, runtime_checkable

from rich.console import Console
from rich.markdown import Markdown


class RendererType(str, Enum):
    """Available Markdown engines."""

    RICH = "rich"
    PLAIN = "plain"


@runtime_checkable
class MarkdownRenderer(Protocol):
    """Converts one unit of Markdown into terminal-ready text.

    Implementations must be synchronous and side-effect free.
    """

    def render(self, markdown: str) -> str: ...


class RichMarkdownRenderer:
    """Render Markdown with Rich, keeping ANSI styling in the returned text."""

    def __init__(
        self,
        code_theme: str = "monokai",
        width: int | None = None,
        color: bool = True,
    ) -> None:
        """Initialize the renderer.

        Args:
            code_theme: Pygments theme for fenced code blocks.
            width: Wrap width. None uses the terminal width.
            color: Emit terminal escapes. Disable for pipes and tests.
        """
        self._code_theme = code_theme
        self._width = width
        self._color = color

    def render(self, markdown: str) -> str:
        buffer = StringIO()
        console = Console(
            file=buffer,
            width=self._width,
            force_terminal=self._color,
            no_color=not self._color,
            highlight=False,
        )
        console.print(Markdown(markdown, code_theme=self._code_theme))
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"RichMarkdownRenderer(code_theme={self._code_theme!r})"


class PlainMarkdownRenderer:
    """Pass Markdown through untouched."""

    def render(self, markdown: str) -> str:
        return markdown


def get_renderer(
    renderer_type: RendererType | str = RendererType.RICH,
    **kwargs: Any,
) -> MarkdownRenderer:
    """Get a renderer instance by type.

    Args:
        renderer_type: Engine to use.
        **kwargs: Engine-specific options (ignored by the plain engine).

    Raises:
        ValueError: If renderer_type is not recognized.
    """
    if isinstance(renderer_type, str):
        renderer_type = RendererType(renderer_type.lower())

    if renderer_type == RendererType.RICH:
        return RichMarkdownRenderer(**kwargs)
    if renderer_type == RendererType.PLAIN:
        return PlainMarkdownRenderer()
    raise ValueError(f"Unknown renderer type: {renderer_type}")
