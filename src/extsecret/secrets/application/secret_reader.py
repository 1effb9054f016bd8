"""
Secret lookups with retry on not-found.

A template often references a secret another controller creates moments
later, so a missing secret is retried with a bounded backoff before being
reported as absent.
"""

import time
from collections.abc import Callable
from typing import Any

from extsecret.secrets.domain.exceptions import SecretNotFoundError
from extsecret.secrets.domain.ports import SecretStore
from extsecret.shared.infrastructure.logging import get_logger
from extsecret.shared.infrastructure.resilience.retry import RetryConfig, RetryExhausted, with_retry

logger = get_logger(__name__)

DEFAULT_RETRY = RetryConfig()


class SecretReader:
    """Fetches secret payloads, treating a secret that never shows up as absent."""

    def __init__(
        self,
        store: SecretStore,
        retry_config: RetryConfig | None = None,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        base = retry_config or DEFAULT_RETRY
        # only not-found is worth waiting for
        self._retry_config = RetryConfig(
            max_attempts=base.max_attempts,
            initial_delay=base.initial_delay,
            max_delay=base.max_delay,
            exponential_base=base.exponential_base,
            jitter=base.jitter,
            retryable_exceptions=(SecretNotFoundError,),
        )
        self._store = store
        self._sleep = sleep

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry_config

    def fetch(self, name: str, namespace: str) -> dict[str, bytes] | None:
        """
        Fetch a secret payload.

        Args:
            name: Secret name
            namespace: Namespace of the secret

        Returns:
            The payload, or None if the secret is still missing after retrying

        Raises:
            SecretStoreError: Any store failure other than not-found, without retrying
        """
        try:
            return with_retry(
                lambda: self._store.get(name, namespace),
                self._retry_config,
                operation_name=f"get_secret {namespace}/{name}",
                sleep=self._sleep,
            )
        except RetryExhausted as e:
            logger.debug(
                "secret_not_found",
                secret=name,
                namespace=namespace,
                attempts=e.attempts,
            )
            return None
