"""Retry decorators built on tenacity."""

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cmdbox.exceptions import ProviderRateLimitError, ProviderTimeoutError

F = TypeVar("F", bound=Callable[..., Any])

# Failures worth another attempt: the request never produced a response.
TRANSIENT_NETWORK_ERRORS: tuple[type[Exception], ...] = (
    httpx.TransportError,
    ConnectionError,
)


def with_retry(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
    retry_on: tuple[type[Exception], ...] = TRANSIENT_NETWORK_ERRORS,
) -> Callable[[F], F]:
    """Create a retry decorator with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts, including the first one.
        min_wait: Minimum wait time between attempts (seconds).
        max_wait: Maximum wait time between attempts (seconds).
        retry_on: Exception types that trigger another attempt.

    Returns:
        A tenacity retry decorator. The last exception is re-raised.

    Usage:
        @with_retry(max_attempts=5)
        def fetch(url: str) -> str:
            return httpx.get(url).text
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        reraise=True,
    )


# Retry decorator for one-shot LLM calls (not streams, which cannot be replayed).
llm_retry = with_retry(
    retry_on=(ProviderRateLimitError, ProviderTimeoutError, ConnectionError),
)
