# -*- coding: utf-8 -*-
"""
Bounded exponential-backoff retry for asynchronous API calls.

Every exception is retried the same way; there is no split between
transient and permanent errors. When the last attempt fails, its exception
is re-raised unchanged so the caller decides what the failure means.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt


MAX_ATTEMPTS = 5     # 1 initial call + 4 retries
BACKOFF_FACTOR = 2
MIN_DELAY = 1.0      # seconds
MAX_DELAY = 10.0     # seconds


@dataclass(frozen=True)
class FailedAttempt:
    """What the observer hook is told about a failed, to-be-retried attempt."""

    attempt_number: int
    retries_left: int
    error: BaseException


def log_failed_attempt(failure: FailedAttempt):
    logging.warning(
        f"Attempt {failure.attempt_number} failed. "
        f"{failure.retries_left} retries left. ({failure.error})"
    )


class BackoffRetrier:
    """
    Run an async operation up to `max_attempts` times.

    The delay before retry n (n starting at 1) is
    ``min_delay * factor ** (n - 1)`` clamped to ``[min_delay, max_delay]``,
    which gives 1, 2, 4 and 8 seconds with the defaults.

    Args:
        max_attempts (int): Total number of calls, first one included.
        factor (float): Multiplier applied to the delay after each failure.
        min_delay (float): Lower bound for a delay, in seconds.
        max_delay (float): Upper bound for a delay, in seconds.
        on_failed_attempt (callable): Observer called with a FailedAttempt
            after each failure that will be retried. Logs a warning by default.
        sleep (callable): Coroutine function used to wait between attempts.
    """

    def __init__(
            self,
            max_attempts: int = MAX_ATTEMPTS,
            factor: float = BACKOFF_FACTOR,
            min_delay: float = MIN_DELAY,
            max_delay: float = MAX_DELAY,
            on_failed_attempt: Optional[Callable[[FailedAttempt], None]] = log_failed_attempt,
            sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError("Delays must satisfy 0 <= min_delay <= max_delay")
        self.max_attempts = max_attempts
        self.factor = factor
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.on_failed_attempt = on_failed_attempt
        self.sleep = sleep

    def delay_for(self, attempt_number: int) -> float:
        """Seconds to wait after failed attempt `attempt_number`."""
        delay = self.min_delay * self.factor ** (attempt_number - 1)
        return min(max(delay, self.min_delay), self.max_delay)

    def _wait(self, retry_state: RetryCallState) -> float:
        return self.delay_for(retry_state.attempt_number)

    def _before_sleep(self, retry_state: RetryCallState):
        if self.on_failed_attempt is None:
            return
        self.on_failed_attempt(FailedAttempt(
            attempt_number=retry_state.attempt_number,
            retries_left=self.max_attempts - retry_state.attempt_number,
            error=retry_state.outcome.exception(),
        ))

    async def call(self, operation: Callable[..., Awaitable], *args, **kwargs):
        """
        Await `operation(*args, **kwargs)`, retrying on any exception.

        Returns:
            The operation's result.

        Raises:
            Exception: The last attempt's exception, unchanged.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait,
            before_sleep=self._before_sleep,
            sleep=self.sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                result = await operation(*args, **kwargs)
        return result
