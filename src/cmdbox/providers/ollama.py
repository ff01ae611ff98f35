"""Ollama provider implementation using LangChain."""

from typing import Any, NoReturn

from cmdbox.config.schema import ProviderType
from cmdbox.exceptions import ProviderError, ProviderNotAvailableError
from cmdbox.providers.chat import ChatModelProvider


class OllamaProvider(ChatModelProvider):
    """Local models served by Ollama.

    Uses langchain-ollama, which cmdbox installs by default.
    """

    display_name = "Ollama"
    finish_reason_key = "done_reason"

    def __init__(
        self,
        model: str = "llama3",
        base_url: str = "http://localhost:11434",
        timeout: float = 120.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(ProviderType.OLLAMA, model, timeout)
        self._base_url = base_url
        self._extra_kwargs = kwargs

    def _build_chat_model(self) -> Any:
        try:
            from langchain_ollama import ChatOllama
        except ImportError as e:
            raise ProviderError(
                "langchain-ollama not installed. "
                "Reinstall cmdbox or run: pip install langchain-ollama"
            ) from e

        return ChatOllama(
            model=self.model_name,
            base_url=self._base_url,
            client_kwargs={"timeout": self._timeout},
            **self._extra_kwargs,
        )

    def _handle_error(self, e: Exception) -> NoReturn:
        error_str = str(e).lower()
        if "connection" in error_str or "refused" in error_str:
            raise ProviderNotAvailableError(
                f"Cannot connect to Ollama at {self._base_url}. "
                "Make sure Ollama is running: ollama serve"
            ) from e
        super()._handle_error(e)

