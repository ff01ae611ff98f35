"""Shared LangChain chat-model plumbing for the hosted providers."""

from abc import abstractmethod
from collections.abc import AsyncIterator
from typing import Any, NoReturn

from cmdbox.config.schema import ProviderType
from cmdbox.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from cmdbox.providers.base import LLMProvider, LLMResponse
from cmdbox.utils.logging import get_logger
from cmdbox.utils.retry import llm_retry

log = get_logger(__name__)


def _text_of(content: Any) -> str:
    """Flatten LangChain message content (str or list of parts) to text."""
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(str(part.get("text", "")))
    return "".join(parts)


class ChatModelProvider(LLMProvider):
    """Provider backed by a lazily created LangChain chat model.

    Subclasses build the model and may tune error classification; calling
    and streaming live here.
    """

    display_name: str = "LLM"
    finish_reason_key: str = "finish_reason"

    def __init__(
        self,
        provider_type: ProviderType,
        model_name: str,
        timeout: float,
    ) -> None:
        super().__init__(provider_type, model_name)
        self._timeout = timeout
        self._chat_model: Any = None

    @abstractmethod
    def _build_chat_model(self) -> Any:
        """Import and construct the LangChain chat model."""
        ...

    def _get_chat_model(self) -> Any:
        if self._chat_model is None:
            self._chat_model = self._build_chat_model()
        return self._chat_model

    def _handle_error(self, e: Exception) -> NoReturn:
        """Convert a backend exception into a provider error."""
        error_str = str(e).lower()
        log.debug("%s call failed: %s", self.display_name, e)

        if "connection" in error_str or "refused" in error_str:
            raise ProviderNotAvailableError(
                f"Cannot reach {self.display_name}: {e}"
            ) from e
        if "authentication" in error_str or "api key" in error_str or "401" in error_str:
            raise ProviderAuthError(
                f"{self.display_name} authentication failed. Check your API key."
            ) from e
        if "rate limit" in error_str or "429" in error_str:
            raise ProviderRateLimitError(
                f"{self.display_name} rate limit exceeded. Try again later."
            ) from e
        if "timeout" in error_str or "timed out" in error_str:
            raise ProviderTimeoutError(
                f"{self.display_name} request timed out after {self._timeout}s"
            ) from e
        raise ProviderError(f"{self.display_name} error: {e}") from e

    def _to_response(self, message: Any) -> LLMResponse:
        tokens_used = None
        usage = getattr(message, "usage_metadata", None)
        if usage:
            tokens_used = usage.get("total_tokens")
        return LLMResponse(
            content=_text_of(message.content),
            model=self.model_name,
            provider=self.provider_type,
            tokens_used=tokens_used,
            finish_reason=(getattr(message, "response_metadata", None) or {}).get(
                self.finish_reason_key
            ),
        )

    @llm_retry
    async def ainvoke(self, prompt: str, **kwargs: Any) -> LLMResponse:
        try:
            message = await self._get_chat_model().ainvoke(prompt, **kwargs)
        except ProviderError:
            raise
        except Exception as e:
            self._handle_error(e)
        return self._to_response(message)

    async def astream(self, prompt: str, **kwargs: Any) -> AsyncIterator[str]:
        try:
            async for chunk in self._get_chat_model().astream(prompt, **kwargs):
                text = _text_of(chunk.content)
                if text:
                    yield text
        except ProviderError:
            raise
        except Exception as e:
            self._handle_error(e)
