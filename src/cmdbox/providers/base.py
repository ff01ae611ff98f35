"""Provider interface: a prompt in, Markdown text out."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from cmdbox.config.schema import ProviderType


@dataclass
class LLMResponse:
    """A complete answer with whatever usage data the backend reported."""

    content: str
    model: str
    provider: ProviderType
    tokens_used: int | None = None
    finish_reason: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class LLMProvider(ABC):
    """A chat backend the chat action can ask.

    ``astream`` feeds the incremental renderer; ``ainvoke`` serves
    ``chat --no-stream``, which renders the whole answer at once.
    """

    def __init__(self, provider_type: ProviderType, model_name: str) -> None:
        self.provider_type = provider_type
        self.model_name = model_name

    @abstractmethod
    async def ainvoke(self, prompt: str, **kwargs: Any) -> LLMResponse:
        """Ask for the full answer in one call.

        Raises:
            ProviderError: If the backend call fails.
        """
        ...

    async def astream(self, prompt: str, **kwargs: Any) -> AsyncIterator[str]:
        """Yield answer text as the backend produces it.

        Fragments may end anywhere, mid-word or mid-line. Backends without
        streaming fall back to a single fragment.

        Raises:
            ProviderError: If the backend call fails, possibly after some
                fragments were already yielded.
        """
        response = await self.ainvoke(prompt, **kwargs)
        yield response.content

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider_type.value}, model={self.model_name})"
