"""OpenAI provider implementation using LangChain."""

import os
from typing import Any

from cmdbox.config.schema import ProviderType
from cmdbox.exceptions import ProviderAuthError, ProviderError
from cmdbox.providers.chat import ChatModelProvider


class OpenAIProvider(ChatModelProvider):
    """OpenAI (or any OpenAI-compatible endpoint) chat models.

    Requires langchain-openai:
        pip install cmdbox[openai]
    """

    display_name = "OpenAI"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(ProviderType.OPENAI, model, timeout)
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self._base_url = base_url
        self._extra_kwargs = kwargs

        if not self._api_key:
            raise ProviderAuthError(
                "OpenAI API key not provided. "
                "Set OPENAI_API_KEY environment variable or pass api_key parameter."
            )

    def _build_chat_model(self) -> Any:
        try:
            from langchain_openai import ChatOpenAI
        except ImportError as e:
            raise ProviderError(
                "langchain-openai not installed. "
                "Install with: pip install cmdbox[openai]"
            ) from e

        if self._base_url:
            self._extra_kwargs.setdefault("base_url", self._base_url)
        return ChatOpenAI(
            model=self.model_name,
            api_key=self._api_key,
            timeout=self._timeout,
            **self._extra_kwargs,
        )

