"""Retry logic with a fixed delay between attempts.

This module provides:
- retry_with_fixed_delay: Await a coroutine factory up to N times
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0  # seconds

SleepFunc = Callable[[float], Awaitable[Any]]


async def retry_with_fixed_delay(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_RETRY_DELAY,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
    description: str = "Operation",
    sleep: SleepFunc = asyncio.sleep,
) -> T:
    """Await a coroutine function, retrying with a fixed delay.

    The delay does not grow between attempts and has no jitter.

    Args:
        func: Zero-argument coroutine function to call.
        max_attempts: Total number of attempts (at least 1).
        delay: Seconds to wait between attempts.
        retryable_exceptions: Tuple of exception types to retry on.
        description: Label used in log messages.
        sleep: Awaitable sleep function.

    Returns:
        Result of the first successful attempt.

    Raises:
        The last exception, unchanged, if every attempt fails.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        try:
            return await func()
        except retryable_exceptions as e:
            if attempt == max_attempts:
                logger.error(f"{description} failed after {max_attempts} attempts: {e}")
                raise

            logger.warning(
                f"{description} attempt {attempt}/{max_attempts} failed: {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            await sleep(delay)

    raise RuntimeError("Unexpected retry loop exit")
