"""
Retry policy for recognition calls.

Provides configurable retry behavior with exponential backoff and error
categorization. Retries happen inside a single per-file await, so batch
ordering is unaffected.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, TypeVar

from paxmanifest.core.errors import RecognitionError
from paxmanifest.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ErrorCategory(str, Enum):
    """Category of a recognition failure."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    PARSE_FAILURE = "parse_failure"
    UNREADABLE = "unreadable"
    DATA_ERROR = "data_error"
    UNKNOWN = "unknown"


RETRYABLE_CATEGORIES = frozenset(
    {ErrorCategory.NETWORK, ErrorCategory.TIMEOUT, ErrorCategory.RATE_LIMIT}
)


def root_cause(error: BaseException) -> BaseException:
    """Follow ``__cause__`` links to the innermost exception."""
    seen = set()
    while error.__cause__ is not None and id(error) not in seen:
        seen.add(id(error))
        error = error.__cause__
    return error


def categorize_error(error: BaseException) -> ErrorCategory:
    """
    Categorize an error for retry decisions and logging.

    Wrapped errors are categorized by their root cause.
    """
    cause = root_cause(error)
    error_str = str(cause).lower()
    error_type = type(cause).__name__.lower()

    if isinstance(cause, (TimeoutError, asyncio.TimeoutError)) or "timeout" in error_type:
        return ErrorCategory.TIMEOUT

    if "429" in error_str or "rate limit" in error_str or "resourceexhausted" in error_type:
        return ErrorCategory.RATE_LIMIT

    if isinstance(cause, ConnectionError) or "connection" in error_type or "unavailable" in error_type:
        return ErrorCategory.NETWORK

    if "json" in error_str or "parse" in error_str or "decode" in error_str:
        return ErrorCategory.PARSE_FAILURE

    if isinstance(cause, RecognitionError):
        return ErrorCategory.UNREADABLE

    if isinstance(cause, (ValueError, TypeError, KeyError)):
        return ErrorCategory.DATA_ERROR

    return ErrorCategory.UNKNOWN


@dataclass
class RetryPolicy:
    """Configuration for retry behavior."""

    max_attempts: int = 1
    initial_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")

    def compute_delay(self, attempt: int) -> float:
        """
        Delay before the next attempt.

        Args:
            attempt: Attempt that just failed (1-indexed).

        Returns:
            Delay in seconds.
        """
        delay = self.initial_delay_seconds * (self.exponential_base ** (attempt - 1))
        delay = min(delay, self.max_delay_seconds)

        if self.jitter:
            # Up to 25% extra
            delay += delay * 0.25 * random.random()

        return delay

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        """Whether ``error`` on ``attempt`` warrants another try."""
        if attempt >= self.max_attempts:
            return False
        return categorize_error(error) in RETRYABLE_CATEGORIES


@dataclass
class RetryAttempt:
    """Record of a single attempt."""

    attempt_number: int
    started_at: datetime
    completed_at: datetime | None = None
    success: bool = False
    error: str | None = None
    error_category: ErrorCategory | None = None


@dataclass
class RetryContext:
    """Attempts made for one document."""

    label: str
    policy: RetryPolicy = field(default_factory=RetryPolicy)
    attempts: list[RetryAttempt] = field(default_factory=list)

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    def record_attempt(
        self,
        started_at: datetime,
        error: BaseException | None = None,
    ) -> RetryAttempt:
        """Append an attempt outcome."""
        attempt = RetryAttempt(
            attempt_number=self.attempt_count + 1,
            started_at=started_at,
            completed_at=datetime.now(),
            success=error is None,
        )
        if error is not None:
            attempt.error = str(error)
            attempt.error_category = categorize_error(error)
        self.attempts.append(attempt)
        return attempt


class RetryExecutor:
    """Runs a coroutine function under a retry policy."""

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize retry executor.

        Args:
            policy: Retry policy to use.
            sleep: Awaitable sleep used between attempts.
        """
        self.policy = policy or RetryPolicy()
        self.sleep = sleep

    async def execute(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        label: str = "call",
        **kwargs: Any,
    ) -> tuple[T, RetryContext]:
        """
        Await ``func`` until it succeeds or the policy gives up.

        Returns:
            Tuple of (result, RetryContext).

        Raises:
            Exception: The last error once no further retry is allowed.
        """
        context = RetryContext(label=label, policy=self.policy)
        attempt = 0

        while True:
            attempt += 1
            started_at = datetime.now()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                context.record_attempt(started_at, error=e)
                if not self.policy.should_retry(e, attempt):
                    raise
                delay = self.policy.compute_delay(attempt)
                logger.info(
                    "%s: attempt %d failed (%s), retrying in %.1fs",
                    label,
                    attempt,
                    categorize_error(e).value,
                    delay,
                )
                await self.sleep(delay)
            else:
                context.record_attempt(started_at)
                return result, context

