"""Dependency container handed to action installers."""

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

import httpx
from rich.console import Console
from rich.prompt import Confirm

from cmdbox.config import get_config
from cmdbox.config.schema import CmdBoxConfig, ProviderType
from cmdbox.exceptions import CmdBoxError, ProviderError, ProviderNotAvailableError
from cmdbox.providers import PROVIDER_CLASSES, LLMProvider
from cmdbox.render import MarkdownRenderer, get_renderer


def create_provider(
    config: CmdBoxConfig,
    provider: str | None = None,
    model: str | None = None,
) -> LLMProvider:
    """Create an LLM provider from configuration.

    Args:
        config: Configuration supplying defaults and credentials.
        provider: Provider name override.
        model: Model name override.

    Raises:
        ProviderNotAvailableError: If the provider name is unknown.
        ProviderError: If the provider rejects its settings.
    """
    name = provider.lower() if provider else config.default_provider
    try:
        provider_type = ProviderType(name)
    except ValueError as e:
        raise ProviderNotAvailableError(f"Unknown provider '{name}'") from e

    default_model: str | None = None
    kwargs: dict[str, Any] = {}

    if provider_type == ProviderType.OLLAMA:
        ollama = config.providers.ollama
        default_model = ollama.default_model
        kwargs["base_url"] = ollama.base_url
        kwargs["timeout"] = ollama.timeout
    elif provider_type == ProviderType.OPENAI:
        openai = config.providers.openai
        default_model = openai.default_model
        kwargs["timeout"] = openai.timeout
        if openai.api_key:
            kwargs["api_key"] = openai.api_key
        if openai.base_url:
            kwargs["base_url"] = openai.base_url
    elif provider_type == ProviderType.ANTHROPIC:
        anthropic = config.providers.anthropic
        default_model = anthropic.default_model
        kwargs["timeout"] = anthropic.timeout
        kwargs["max_tokens"] = anthropic.max_tokens
        if anthropic.api_key:
            kwargs["api_key"] = anthropic.api_key

    if model or default_model:
        kwargs["model"] = model or default_model
    try:
        return PROVIDER_CLASSES[provider_type](**kwargs)
    except CmdBoxError:
        raise
    except Exception as e:
        raise ProviderError(f"Failed to create provider '{name}': {e}") from e


def create_renderer(config: CmdBoxConfig) -> MarkdownRenderer:
    """Create the configured Markdown engine."""
    render = config.render
    return get_renderer(
        render.renderer,
        code_theme=render.code_theme,
        width=render.width,
        color=render.color,
    )


def ask_confirm(message: str, console: Console) -> bool:
    return Confirm.ask(message, console=console)


@dataclass
class ActionContext:
    """Services available to actions.

    Attributes:
        config: Application configuration.
        console: Console for regular output.
        err_console: Console for errors and diagnostics.
        renderer: Markdown engine for streamed output; built from config
            on first use of ``markdown`` when not given.
        out: Stream the Markdown renderer writes to.
        stdin: Stream read when an action takes piped input.
        provider_factory: Builds an LLM provider from (config, provider, model).
        confirm: Yes/no prompt; receives the message and the console.
        http_client: Shared HTTP client, or None for one client per request.
        verbose: Whether to show verbose output.
        working_dir: Directory actions operate in.
    """

    config: CmdBoxConfig
    console: Console = field(default_factory=Console)
    err_console: Console = field(default_factory=lambda: Console(stderr=True))
    renderer: MarkdownRenderer | None = None
    out: TextIO = field(default_factory=lambda: sys.stdout)
    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    provider_factory: Callable[..., LLMProvider] = create_provider
    confirm: Callable[[str, Console], bool] = ask_confirm
    http_client: httpx.Client | None = None
    verbose: bool = False
    working_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_config(cls, config: CmdBoxConfig | None = None, **kwargs: Any) -> "ActionContext":
        """Build a context from the global (or given) configuration."""
        return cls(config=config or get_config(), **kwargs)

    @property
    def markdown(self) -> MarkdownRenderer:
        """The injected Markdown engine, or the configured one built on first use."""
        if self.renderer is None:
            self.renderer = create_renderer(self.config)
        return self.renderer

    @property
    def downloads_dir(self) -> Path:
        return self.config.downloads.directory.expanduser()
