"""Retry helpers for transient completion failures.

Updates:
  v0.1.1 - 2026-09-21 - Classify LiteLLM status/timeout errors as retryable.
  v0.1.0 - 2026-09-14 - Add async exponential backoff retry helper.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING, TypeVar

import httpx

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("quote_wall.retry")

_RETRYABLE_HTTP_STATUS_CODES = {408, 429}
_RETRYABLE_EXCEPTION_NAMES = {
    "APIConnectionError",
    "InternalServerError",
    "RateLimitError",
    "ServiceUnavailableError",
    "Timeout",
}


def is_retryable_http_status(status_code: int) -> bool:
    """Return ``True`` when *status_code* suggests a transient failure."""
    return status_code in _RETRYABLE_HTTP_STATUS_CODES or 500 <= status_code < 600


def is_retryable_httpx_error(exc: Exception) -> bool:
    """Return ``True`` when *exc* represents a transient httpx error."""
    if isinstance(exc, httpx.HTTPStatusError):
        return is_retryable_http_status(exc.response.status_code)
    return isinstance(exc, (httpx.TimeoutException, httpx.TransportError))


def is_retryable_completion_error(exc: Exception) -> bool:
    """Return ``True`` when a completion call failed for a transient reason.

    LiteLLM maps provider failures onto OpenAI-style exception classes that
    carry a ``status_code``; rate limits, timeouts and 5xx responses are worth
    another attempt while authentication or validation errors are not.
    """
    if is_retryable_httpx_error(exc):
        return True
    if isinstance(exc, (TimeoutError, ConnectionError)):
        return True
    if type(exc).__name__ in _RETRYABLE_EXCEPTION_NAMES:
        return True
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int):
        return is_retryable_http_status(status_code)
    return False


def _compute_delay_seconds(
    attempt: int,
    *,
    base: float,
    maximum: float,
    jitter: float,
) -> float:
    delay = min(maximum, base * (2 ** (attempt - 1)))
    if jitter <= 0:
        return delay
    return delay + (delay * jitter * random.random())


T = TypeVar("T")


async def async_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    base_delay_seconds: float = 0.5,
    max_delay_seconds: float = 4.0,
    jitter_fraction: float = 0.1,
    should_retry: Callable[[Exception], bool],
) -> T:
    """Await *operation* with exponential-backoff retries.

    Args:
      operation: Zero-argument coroutine factory to execute.
      max_attempts: Total attempts including the first call.
      base_delay_seconds: Delay before the second attempt; ``0`` retries immediately.
      max_delay_seconds: Cap for the exponential backoff.
      jitter_fraction: Random jitter added as a fraction of the computed delay.
      should_retry: Predicate deciding whether an exception is transient.

    Returns:
      The value returned by *operation* on success.

    Raises:
      Exception: The last exception once retries are exhausted or it is not retryable.
    """
    attempts = max(1, int(max_attempts))
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as exc:
            if attempt >= attempts or not should_retry(exc):
                raise
            delay = 0.0
            if base_delay_seconds > 0:
                delay = _compute_delay_seconds(
                    attempt,
                    base=base_delay_seconds,
                    maximum=max_delay_seconds,
                    jitter=jitter_fraction,
                )
            logger.info(
                "Attempt %d/%d failed with %s; retrying in %.2fs",
                attempt,
                attempts,
                type(exc).__name__,
                delay,
            )
            if delay:
                await asyncio.sleep(delay)
    raise RuntimeError("async_retry exhausted retries")  # pragma: no cover


__all__ = [
    "async_retry",
    "is_retryable_completion_error",
    "is_retryable_http_status",
    "is_retryable_httpx_error",
]
