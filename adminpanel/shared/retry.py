"""Bounded retry with a per-attempt deadline.

run_with_retry() never raises for a failing operation: it resolves to an
OperationResult the caller can branch on. Attempts run back to back with
no backoff; the only user is the manual dashboard refresh, which is
short and user-initiated.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from adminpanel.domain.exceptions import (
    AdminPanelException,
    OperationTimeoutError,
    RetryExhaustedError,
)
from adminpanel.shared.errors import normalize_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of run_with_retry.

    Attributes:
        success: True when some attempt completed.
        value: Return value of the successful attempt.
        error: Normalized error of the last attempt when success is False.
        attempts: Number of attempts made.
        operation_name: Label used in logs and errors.
    """

    success: bool
    value: T | None = None
    error: AdminPanelException | None = None
    attempts: int = 0
    operation_name: str = "operation"

    def unwrap(self) -> T:
        """Return value on success; raise RetryExhaustedError on failure."""
        if self.success:
            return self.value  # type: ignore[return-value]
        if self.error is None:
            raise ValueError(f"{self.operation_name} failed without an error to report")
        raise RetryExhaustedError(
            self.operation_name, self.attempts, self.error
        ) from self.error


async def _attempt(
    operation: Callable[[], Awaitable[T]],
    timeout_seconds: float,
    operation_name: str,
) -> T:
    try:
        return await asyncio.wait_for(operation(), timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise OperationTimeoutError(operation_name, timeout_seconds) from e


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    timeout_seconds: float,
    retries: int,
    operation_name: str = "operation",
) -> OperationResult[T]:
    """Run operation up to retries + 1 times, each under timeout_seconds.

    Args:
        operation: Zero-argument callable returning an awaitable. A
            synchronous raise from the call itself counts as a failed attempt.
        timeout_seconds: Deadline per attempt.
        retries: Extra attempts after the first one (0 means a single try).
        operation_name: Label for timeout errors and logs.

    Returns:
        OperationResult with the first successful value, or the last
        attempt's normalized error after all attempts failed.
    """
    if retries < 0:
        raise ValueError("retries must be zero or greater")
    max_attempts = retries + 1
    last_error: AdminPanelException | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            value: Any = await _attempt(operation, timeout_seconds, operation_name)
        except Exception as e:
            last_error = normalize_error(e)
            logger.warning(
                "%s attempt %s/%s failed: %s",
                operation_name,
                attempt,
                max_attempts,
                last_error.message,
            )
            continue
        if attempt > 1:
            logger.info("%s succeeded on attempt %s", operation_name, attempt)
        return OperationResult(
            success=True,
            value=value,
            attempts=attempt,
            operation_name=operation_name,
        )
    return OperationResult(
        success=False,
        error=last_error,
        attempts=max_attempts,
        operation_name=operation_name,
    )
