"""LLM providers that turn a prompt into a stream of text fragments.

Usage:
    from cmdbox.providers import OllamaProvider

    provider = OllamaProvider(model="llama3")
    async for fragment in provider.astream("Explain this code"):
        ...

Hosted SDKs are imported when a provider first talks to its backend, so
every provider class can be imported without its extra installed.
"""

from cmdbox.config.schema import ProviderType
from cmdbox.providers.anthropic import AnthropicProvider
from cmdbox.providers.base import LLMProvider, LLMResponse
from cmdbox.providers.mock import MockProvider
from cmdbox.providers.ollama import OllamaProvider
from cmdbox.providers.openai import OpenAIProvider

PROVIDER_CLASSES: dict[ProviderType, type[LLMProvider]] = {
    ProviderType.OLLAMA: OllamaProvider,
    ProviderType.OPENAI: OpenAIProvider,
    ProviderType.ANTHROPIC: AnthropicProvider,
    ProviderType.MOCK: MockProvider,
}

__all__ = [
    "PROVIDER_CLASSES",
    "AnthropicProvider",
    "LLMProvider",
    "LLMResponse",
    "MockProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "ProviderType",
]
