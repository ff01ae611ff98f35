"""Incremental Markdown rendering for streamed text.

Text arrives in fragments that ignore line boundaries (an LLM response,
a file read in chunks). Each line is rendered as soon as its newline
arrives, except inside fenced code blocks, which are held back and rendered
in one piece when the closing fence arrives so highlighting sees the whole
block.
"""

import sys
from collections.abc import AsyncIterable
from typing import TextIO

from cmdbox.render.engines import MarkdownRenderer, RichMarkdownRenderer

FENCE = "```"


class MarkdownStream:
    """Line-buffering state machine for one stream.

    States are ``Idle`` (``in_code_block`` false) and ``InFence``. An instance
    belongs to a single stream; create a new one per response.

    Attributes:
        buffer: Text received after the last newline.
        in_code_block: Whether a fence is open.
        code_block_buffer: Lines of the open fence, each newline-terminated.
            Empty whenever no fence is open.
    """

    def __init__(
        self,
        renderer: MarkdownRenderer | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.renderer = renderer or RichMarkdownRenderer()
        self.out = out or sys.stdout
        self.buffer = ""
        self.in_code_block = False
        self.code_block_buffer = ""

    def feed(self, fragment: str) -> None:
        """Consume a fragment, rendering every line it completes."""
        if not fragment:
            return
        self.buffer += fragment
        *lines, self.buffer = self.buffer.split("\n")
        for line in lines:
            self._process_line(line)

    def close(self) -> None:
        """Flush a trailing unterminated line.

        Blank remainders are dropped. If a fence is still open the remainder
        joins it and the unterminated block is rendered as it stands.
        """
        rest, self.buffer = self.buffer, ""
        if not rest.strip():
            return
        if self.in_code_block:
            self.code_block_buffer += rest
            self._emit(self.code_block_buffer)
            self.in_code_block = False
            self.code_block_buffer = ""
        else:
            self._emit(rest)

    def _process_line(self, line: str) -> None:
        if line.lstrip().startswith(FENCE):
            if not self.in_code_block:
                self.in_code_block = True
                self.code_block_buffer = line + "\n"
            else:
                self.code_block_buffer += line + "\n"
                self._emit(self.code_block_buffer)
                self.in_code_block = False
                self.code_block_buffer = ""
        elif self.in_code_block:
            self.code_block_buffer += line + "\n"
        else:
            self._emit(line)

    def _emit(self, markdown: str) -> None:
        rendered = self.renderer.render(markdown).rstrip()
        self.out.write(rendered + "\n")
        self.out.flush()


async def render_markdown_stream(
    stream: AsyncIterable[str],
    renderer: MarkdownRenderer | None = None,
    out: TextIO | None = None,
) -> None:
    """Render an async stream of Markdown fragments line by line.

    Every completed line is written to ``out`` (stdout by default) before the
    next fragment is awaited. Errors raised by ``stream`` propagate; any
    partial line buffered at that point is discarded.

    Args:
        stream: Async iterable of text fragments with arbitrary boundaries.
        renderer: Markdown engine. Defaults to Rich.
        out: Output stream. Defaults to stdout.

    Example:
        await render_markdown_stream(provider.astream(prompt))
    """
    state = MarkdownStream(renderer, out)
    async for fragment in stream:
        state.feed(fragment)
    state.close()
