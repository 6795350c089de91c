"""Backoff strategies and a self-retrying Deferred.

:class:`RetryableDeferred` runs an async operation until it succeeds or
``max_attempts`` is used up, settling itself with the outcome. The wait
between attempts comes from a :class:`RetryStrategy`; by default a fixed
``retry_delay``.

Example:
    >>> from alis_utils.execution.retry import RetryableDeferred, ExponentialBackoff
    >>>
    >>> d = RetryableDeferred(fetch_config, max_attempts=5,
    ...                       backoff=ExponentialBackoff(base_delay=0.5))
    >>> config = await d
    >>>
    >>> strategy = ExponentialBackoff(base_delay=1.0, max_delay=60.0)
    >>> for attempt in range(5):
    ...     delay = strategy.next_delay(attempt)
    ...     print(f"Attempt {attempt}: wait {delay:.2f}s")
"""

from __future__ import annotations

import asyncio
import random
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from alis_utils.core.errors import DeferredCancelledError, InvalidRetryError, ValidationError
from alis_utils.core.logging import get_logger
from alis_utils.core.settings import get_settings
from alis_utils.execution.deferred import Deferred

logger = get_logger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]


class RetryStrategy(ABC):
    """Abstract base for inter-attempt delays."""

    @abstractmethod
    def next_delay(self, attempt: int) -> float:
        """Calculate delay before the next attempt.

        Args:
            attempt: Zero-based retry number (0 = wait before the 2nd attempt)

        Returns:
            Delay in seconds
        """
        ...


@dataclass
class ConstantBackoff(RetryStrategy):
    """Constant delay between attempts."""

    delay: float = 1.0

    def next_delay(self, attempt: int) -> float:
        return self.delay


@dataclass
class LinearBackoff(RetryStrategy):
    """Linear backoff strategy.

    Delay = min(base_delay + increment * attempt, max_delay)
    """

    base_delay: float = 1.0
    increment: float = 1.0
    max_delay: float = 30.0

    def next_delay(self, attempt: int) -> float:
        return min(self.base_delay + (self.increment * attempt), self.max_delay)


@dataclass
class ExponentialBackoff(RetryStrategy):
    """Exponential backoff with optional jitter.

    Delay = min(base_delay * (multiplier ** attempt), max_delay) ± jitter

    Attributes:
        base_delay: Initial delay in seconds
        max_delay: Maximum delay cap in seconds
        multiplier: Exponential multiplier (default: 2)
        jitter: Add randomness to prevent thundering herd
        jitter_range: Range of jitter as fraction of delay (0.0-1.0)
    """

    base_delay: float = 1.0
    max_delay: float = 60.0
    multiplier: float = 2.0
    jitter: bool = True
    jitter_range: float = 0.25

    def next_delay(self, attempt: int) -> float:
        delay = min(self.base_delay * (self.multiplier**attempt), self.max_delay)

        if self.jitter:
            jitter_amount = delay * self.jitter_range
            delay += random.uniform(-jitter_amount, jitter_amount)
            delay = max(0.0, delay)

        return delay


class RetryableDeferred(Deferred[T]):
    """A Deferred that settles itself by running ``operation`` with retries.

    The attempt loop starts as a task on the running loop as soon as the
    object is constructed; construct it from inside a coroutine. Any
    exception the operation raises counts as a failed attempt; the last
    one becomes the rejection error once attempts run out.

    Cancelling (or rejecting from outside) stops further attempts but does
    not interrupt an attempt already in flight; its outcome is discarded.

    Args:
        operation: Zero-argument async callable producing the value.
        max_attempts: Total attempts, >= 1 (default from settings).
        retry_delay: Seconds between attempts (default from settings).
        backoff: Strategy overriding ``retry_delay`` per attempt.
    """

    def __init__(
        self,
        operation: Operation[T],
        max_attempts: int | None = None,
        retry_delay: float | None = None,
        *,
        backoff: RetryStrategy | None = None,
    ) -> None:
        super().__init__()
        settings = get_settings()
        if max_attempts is None:
            max_attempts = settings.retry_max_attempts
        if retry_delay is None:
            retry_delay = settings.retry_delay_seconds

        if max_attempts < 1:
            raise ValidationError(
                "max_attempts must be at least 1",
                field="max_attempts",
                value=max_attempts,
                constraint=">= 1",
            )
        if retry_delay < 0:
            raise ValidationError(
                "retry_delay must be non-negative",
                field="retry_delay",
                value=retry_delay,
                constraint=">= 0",
            )

        self._operation = operation
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._backoff = backoff or ConstantBackoff(delay=retry_delay)
        self._attempts = 0
        self._tasks: set[asyncio.Task[None]] = set()

        self._start()

    @property
    def attempt_count(self) -> int:
        return self._attempts

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def remaining_attempts(self) -> int:
        return max(0, self._max_attempts - self._attempts)

    def retry(self) -> None:
        """Run the attempt loop again, continuing the attempt count.

        Raises:
            InvalidRetryError: If the deferred has already settled.
        """
        if self.is_settled:
            raise InvalidRetryError()
        self._start()

    def _start(self) -> None:
        task = asyncio.get_running_loop().create_task(self._run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self) -> None:
        while self._attempts < self._max_attempts and self.is_pending:
            self._attempts += 1
            attempt = self._attempts
            try:
                result = await self._operation()
            except asyncio.CancelledError as e:
                # Only a cancel aimed at this task stops the loop; a cancelled
                # inner await is a failed attempt.
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
                error: BaseException = DeferredCancelledError(
                    "Operation was cancelled", cause=e
                )
            except Exception as e:
                error = e
            else:
                self.resolve(result)
                return

            if attempt >= self._max_attempts:
                if self.reject(error):
                    logger.warning(
                        "retryable_deferred.exhausted",
                        attempts=attempt,
                        error=str(error),
                    )
                return

            delay = self._backoff.next_delay(attempt - 1)
            logger.warning(
                "retryable_deferred.attempt_failed",
                attempt=attempt,
                max_attempts=self._max_attempts,
                delay=delay,
                error=str(error),
            )
            await asyncio.sleep(delay)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["attempts"] = self._attempts
        result["max_attempts"] = self._max_attempts
        return result


__all__ = [
    "RetryStrategy",
    "ConstantBackoff",
    "LinearBackoff",
    "ExponentialBackoff",
    "RetryableDeferred",
]
