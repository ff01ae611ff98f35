"""LLM chat and Markdown viewing actions."""

import re

from cmdbox.actions.context import ActionContext
from cmdbox.dispatch import RegisterFunction
from cmdbox.exceptions import ActionError
from cmdbox.render import MarkdownRenderer, MarkdownStream, PlainMarkdownRenderer
from cmdbox.render import render_markdown_stream
from cmdbox.utils.logging import get_logger

log = get_logger(__name__)

READ_CHUNK = 4096


def split_options(args: tuple[str, ...]) -> tuple[dict[str, str | bool], list[str]]:
    """Separate ``--flag`` / ``--key=value`` options from positional words.

    A bare ``--`` ends option parsing.
    """
    options: dict[str, str | bool] = {}
    words: list[str] = []
    it = iter(args)
    for arg in it:
        if arg == "--":
            words.extend(it)
            break
        if arg.startswith("--") and len(arg) > 2:
            key, sep, value = arg[2:].partition("=")
            options[key] = value if sep else True
        else:
            words.append(arg)
    return options, words


def install(register: RegisterFunction, ctx: ActionContext) -> None:
    def pick_renderer(options: dict[str, str | bool]) -> MarkdownRenderer:
        if options.get("plain"):
            return PlainMarkdownRenderer()
        return ctx.markdown

    async def chat(_m: re.Match[str], *args: str) -> None:
        options, words = split_options(args)
        prompt = " ".join(words)
        if not prompt and not ctx.stdin.isatty():
            prompt = ctx.stdin.read()
        if not prompt.strip():
            raise ActionError("Nothing to ask. Pass a prompt or pipe one in.")

        provider_name = options.get("provider")
        model = options.get("model")
        provider = ctx.provider_factory(
            ctx.config,
            provider_name if isinstance(provider_name, str) else None,
            model if isinstance(model, str) else None,
        )
        renderer = pick_renderer(options)
        if options.get("no-stream"):
            log.info("Asking %r", provider)
            response = await provider.ainvoke(prompt)
            stream = MarkdownStream(renderer, ctx.out)
            stream.feed(response.content)
            stream.close()
            return

        log.info("Streaming answer from %r", provider)
        await render_markdown_stream(provider.astream(prompt), renderer, ctx.out)

    def view(_m: re.Match[str], file_m: re.Match[str], *args: str) -> None:
        options, _ = split_options(args)
        path = ctx.working_dir / file_m.string
        if not path.is_file():
            raise ActionError(f"{path} does not exist")

        stream = MarkdownStream(pick_renderer(options), ctx.out)
        with open(path, encoding="utf-8") as f:
            for chunk in iter(lambda: f.read(READ_CHUNK), ""):
                stream.feed(chunk)
        stream.close()

    register(
        re.compile(r"^(chat|ask)$"),
        run=chat,
        description="Ask the LLM; --provider=NAME --model=NAME --plain --no-stream",
    )
    register(
        "md",
        re.compile(r"."),
        run=view,
        description="Render a Markdown file in the terminal (--plain for raw)",
    )
