"""Exponential backoff around upstream calls.

The policy is a plain value object so each service instance (and each test)
can carry its own. Backoff is an ``await`` on the caller's task: only the
request being retried is suspended, and cancelling that task cancels the
pending sleep.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from employee_api.core.config import Settings
from employee_api.core.errors import EmployeeServiceError, RateLimitedError, UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (UpstreamError, EmployeeServiceError)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    initial_interval: float = 2.0
    multiplier: float = 2.0
    max_interval: float = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_interval < 0 or self.max_interval < 0:
            raise ValueError("backoff intervals must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            initial_interval=settings.RETRY_INITIAL_INTERVAL_MS / 1000,
            multiplier=settings.RETRY_MULTIPLIER,
            max_interval=settings.RETRY_MAX_INTERVAL_MS / 1000,
        )

    def backoff(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return min(self.initial_interval * self.multiplier ** (attempt - 1), self.max_interval)


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    description: str,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds or ``policy.max_attempts`` is spent.

    Only ``RETRYABLE_ERRORS`` are retried; anything else (including
    ``EmployeeNotFoundError``) propagates unchanged from the attempt that
    raised it. On exhaustion an ``EmployeeServiceError`` chained to the last
    failure is raised.
    """
    last_error: Exception | None = None

    for attempt in range(1, policy.max_attempts + 1):
        logger.info("Attempt %d/%d to %s", attempt, policy.max_attempts, description)
        try:
            return await operation()
        except RETRYABLE_ERRORS as err:
            last_error = err
            if attempt == policy.max_attempts:
                break
            delay = policy.backoff(attempt)
            logger.warning(
                "Attempt %d/%d to %s failed (%s); retrying in %.1fs",
                attempt,
                policy.max_attempts,
                description,
                err,
                delay,
            )
            await sleep(delay)

    logger.warning("Max retry attempts reached while trying to %s", description)
    if isinstance(last_error, RateLimitedError):
        raise EmployeeServiceError("Rate limit exceeded. Please try again later.") from last_error
    raise EmployeeServiceError(
        f"Failed to {description} after {policy.max_attempts} attempts"
    ) from last_error
