"""Retry Resilience Pattern."""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 4
    initial_delay: float = 0.01
    max_delay: float = 10.0
    exponential_base: float = 5.0
    jitter: bool = True
    retryable_exceptions: tuple = (Exception,)

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""
        delay = min(
            self.initial_delay * (self.exponential_base ** (attempt - 1)),
            self.max_delay,
        )
        if self.jitter:
            # Kubernetes style jitter: up to +10% of the delay
            delay = delay * (1 + random.uniform(0, 0.1))
        return delay


class RetryExhausted(Exception):
    """Raised when all retry attempts are exhausted."""

    def __init__(self, operation: str, attempts: int, last_error: Exception):
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Operation '{operation}' failed after {attempts} attempts: {last_error}")


def with_retry(
    func: Callable[[], T],
    config: RetryConfig | None = None,
    operation_name: str = "operation",
    sleep: Callable[[float], Any] = time.sleep,
) -> T:
    """
    Execute an operation, retrying on the configured exceptions.

    Exceptions outside ``config.retryable_exceptions`` propagate immediately.

    Args:
        func: Zero-argument callable to execute
        config: Retry policy (defaults to RetryConfig())
        operation_name: Name used in logs and in RetryExhausted
        sleep: Sleep function, injectable so tests run without delays

    Returns:
        Whatever ``func`` returns on the first successful attempt

    Raises:
        RetryExhausted: If every attempt raised a retryable exception
    """
    config = config or RetryConfig()
    last_error: Exception | None = None

    for attempt in range(1, config.max_attempts + 1):
        try:
            return func()
        except config.retryable_exceptions as e:
            last_error = e
            if attempt >= config.max_attempts:
                logger.debug(
                    "retry_exhausted",
                    operation=operation_name,
                    attempt=attempt,
                    error=str(e),
                )
                raise RetryExhausted(operation_name, attempt, e) from e

            delay = config.delay_for(attempt)
            logger.debug(
                "retry_attempt",
                operation=operation_name,
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=f"{delay:.3f}s",
                error=str(e),
            )
            sleep(delay)

    raise RetryExhausted(operation_name, config.max_attempts, last_error)
