"""Resilience utilities for external service calls with retry logic.

Wraps OCR and summarization transport calls with exponential backoff using
tenacity. The default of a single attempt means transient failures surface to the
caller unchanged; retries only happen when ``external_max_attempts`` is raised.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def async_retrying(
    max_attempts: int = 1,
    min_wait: float = 1,
    max_wait: float = 10,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
) -> AsyncRetrying:
    """Build a tenacity retry controller for asynchronous external calls.

    Logs a warning before each retry attempt and re-raises the last exception
    once attempts are exhausted.

    Args:
        max_attempts: Maximum attempts including the first call (default: 1).
        min_wait: Minimum wait time in seconds between attempts (default: 1).
        max_wait: Maximum wait time in seconds between attempts (default: 10).
        retry_on: Exception types that trigger another attempt.

    Returns:
        AsyncRetrying: Configured retry controller.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


async def resilient_async_call(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 1,
    min_wait: float = 1,
    max_wait: float = 10,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)`` under the retry policy of :func:`async_retrying`.

    Example:
        >>> text = await resilient_async_call(
        ...     client.post, url, files=files, max_attempts=3, retry_on=(httpx.TransportError,)
        ... )
    """
    retrying = async_retrying(
        max_attempts=max_attempts,
        min_wait=min_wait,
        max_wait=max_wait,
        retry_on=retry_on,
    )
    return await retrying(func, *args, **kwargs)


__all__ = ["async_retrying", "resilient_async_call"]
