"""Terminal Markdown rendering.

Usage:
    from cmdbox.render import get_renderer, render_markdown_stream

    await render_markdown_stream(provider.astream(prompt), get_renderer("rich"))
"""

from cmdbox.render.engines import (
    MarkdownRenderer,
    PlainMarkdownRenderer,
    RendererType,
    RichMarkdownRenderer,
    get_renderer,
)
from cmdbox.render.stream import MarkdownStream, render_markdown_stream

__all__ = [
    "MarkdownRenderer",
    "PlainMarkdownRenderer",
    "RichMarkdownRenderer",
    "RendererType",
    "get_renderer",
    "MarkdownStream",
    "render_markdown_stream",
]
