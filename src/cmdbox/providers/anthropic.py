"""Anthropic provider implementation using LangChain."""

import os
from typing import Any

from cmdbox.config.schema import ProviderType
from cmdbox.exceptions import ProviderAuthError, ProviderError
from cmdbox.providers.chat import ChatModelProvider


class AnthropicProvider(ChatModelProvider):
    """Anthropic (Claude) chat models.

    Requires langchain-anthropic:
        pip install cmdbox[anthropic]
    """

    display_name = "Anthropic"
    finish_reason_key = "stop_reason"

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
        max_tokens: int = 4096,
        timeout: float = 60.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(ProviderType.ANTHROPIC, model, timeout)
        self._api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._max_tokens = max_tokens
        self._extra_kwargs = kwargs

        if not self._api_key:
            raise ProviderAuthError(
                "Anthropic API key not provided. "
                "Set ANTHROPIC_API_KEY environment variable or pass api_key parameter."
            )

    def _build_chat_model(self) -> Any:
        try:
            from langchain_anthropic import ChatAnthropic
        except ImportError as e:
            raise ProviderError(
                "langchain-anthropic not installed. "
                "Install with: pip install cmdbox[anthropic]"
            ) from e

        return ChatAnthropic(
            model=self.model_name,
            api_key=self._api_key,
            max_tokens=self._max_tokens,
            timeout=self._timeout,
            **self._extra_kwargs,
        )

