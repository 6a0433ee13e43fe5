"""Bounded retry with a fixed delay between attempts."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from sfmap.core.errors import MapperError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry policy for fallible operations.

    Attributes:
        max_retries: Extra attempts after the first one (0 disables retry).
        delay: Seconds to sleep between attempts.
    """

    max_retries: int = 3
    delay: float = 5.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.delay < 0:
            raise ValueError("delay must be >= 0")


NO_RETRY = RetryPolicy(max_retries=0, delay=0)


def with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy,
    *,
    description: str = "operation",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run `operation` up to `policy.max_retries + 1` times.

    Between attempts (never before the first) this sleeps `policy.delay`
    seconds and logs a warning naming the attempt number. Only `MapperError`
    failures are retried. The last error is re-raised unchanged.

    Args:
        operation: Zero-argument callable to run.
        policy: Retry policy to apply.
        description: Human-readable name used in log lines.
        sleep: Sleep function, injectable for tests.

    Returns:
        The operation's result from the first successful attempt.
    """

    def _before_sleep(state: RetryCallState) -> None:
        logger.error("%s failed: %s", description, state.outcome.exception())
        logger.warning(
            "Retry attempt %d of %d for %s",
            state.attempt_number,
            policy.max_retries,
            description,
        )

    retrying = Retrying(
        stop=stop_after_attempt(policy.max_retries + 1),
        wait=wait_fixed(policy.delay),
        retry=retry_if_exception_type(MapperError),
        before_sleep=_before_sleep,
        sleep=sleep,
        reraise=True,
    )
    return retrying(operation)
