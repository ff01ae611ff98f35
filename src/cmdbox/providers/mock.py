"""Mock provider for testing."""

import asyncio
import hashlib
from collections.abc import AsyncIterator
from typing import Any

from cmdbox.config.schema import ProviderType
from cmdbox.providers.base import LLMProvider, LLMResponse


class MockProvider(LLMProvider):
    """Deterministic provider for tests and offline demos.

    Responses are looked up by prompt substring; streaming splits the
    response into fixed-size fragments that ignore line boundaries, the way
    real token streams do.
    """

    def __init__(
        self,
        model: str = "mock-model",
        responses: dict[str, str] | None = None,
        chunk_size: int = 7,
        latency_ms: int = 0,
    ) -> None:
        """Initialize mock provider.

        Args:
            model: Model name to report.
            responses: Dict mapping prompt substrings to responses.
            chunk_size: Characters per streamed fragment.
            latency_ms: Simulated delay before each fragment.
        """
        super().__init__(ProviderType.MOCK, model)
        self._responses = responses or {}
        self._chunk_size = max(1, chunk_size)
        self._latency_ms = latency_ms
        self._call_history: list[dict[str, Any]] = []

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Get history of all calls made to this provider."""
        return self._call_history

    @property
    def call_count(self) -> int:
        return len(self._call_history)

    def _generate_response(self, prompt: str) -> str:
        for key, response in self._responses.items():
            if key.lower() in prompt.lower():
                return response

        prompt_hash = hashlib.sha256(prompt.encode()).hexdigest()[:8]
        return f"Mock response for prompt (hash: {prompt_hash}): {prompt[:50]}"

    def _record_call(self, method: str, prompt: str, **kwargs: Any) -> None:
        self._call_history.append({"method": method, "prompt": prompt, "kwargs": kwargs})

    def _response(self, content: str, prompt: str) -> LLMResponse:
        return LLMResponse(
            content=content,
            model=self.model_name,
            provider=self.provider_type,
            tokens_used=len(prompt.split()) + len(content.split()),
            finish_reason="stop",
        )

    async def ainvoke(self, prompt: str, **kwargs: Any) -> LLMResponse:
        self._record_call("ainvoke", prompt, **kwargs)
        if self._latency_ms > 0:
            await asyncio.sleep(self._latency_ms / 1000)
        return self._response(self._generate_response(prompt), prompt)

    async def astream(self, prompt: str, **kwargs: Any) -> AsyncIterator[str]:
        self._record_call("astream", prompt, **kwargs)
        content = self._generate_response(prompt)
        for start in range(0, len(content), self._chunk_size):
            if self._latency_ms > 0:
                await asyncio.sleep(self._latency_ms / 1000)
            yield content[start : start + self._chunk_size]

