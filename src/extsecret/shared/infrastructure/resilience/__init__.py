"""
Resilience Patterns for extsecret.

Provides the retry policy used when waiting for secrets that another
controller may still be creating.
"""

from .retry import RetryConfig, RetryExhausted, with_retry

__all__ = [
    "RetryConfig",
    "RetryExhausted",
    "with_retry",
]
