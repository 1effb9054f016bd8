"""
Tests for the retry policy.

Sleeps are recorded instead of performed.
"""

from unittest.mock import Mock

import pytest

from extsecret.shared.infrastructure.resilience import RetryConfig, RetryExhausted, with_retry


class TestRetryConfig:
    def test_default_matches_kubernetes_backoff(self):
        config = RetryConfig()

        assert config.max_attempts == 4
        assert config.initial_delay == 0.01
        assert config.exponential_base == 5.0
        assert config.jitter is True

    def test_exponential_delays_without_jitter(self):
        config = RetryConfig(initial_delay=0.01, exponential_base=5.0, jitter=False)

        assert config.delay_for(1) == pytest.approx(0.01)
        assert config.delay_for(2) == pytest.approx(0.05)
        assert config.delay_for(3) == pytest.approx(0.25)

    def test_delay_capped_by_max_delay(self):
        config = RetryConfig(initial_delay=1.0, exponential_base=10.0, max_delay=5.0, jitter=False)

        assert config.delay_for(3) == 5.0

    def test_jitter_adds_at_most_ten_percent(self):
        config = RetryConfig(initial_delay=1.0, exponential_base=2.0, jitter=True)

        for _ in range(20):
            assert 1.0 <= config.delay_for(1) <= 1.1


class TestWithRetry:
    def test_success_without_retry(self):
        func = Mock(return_value="ok")
        sleeps = []

        assert with_retry(func, RetryConfig(jitter=False), sleep=sleeps.append) == "ok"
        assert func.call_count == 1
        assert sleeps == []

    def test_failure_then_success(self):
        func = Mock(side_effect=[KeyError("a"), KeyError("b"), "ok"])
        sleeps = []
        config = RetryConfig(max_attempts=4, initial_delay=0.01, exponential_base=5.0, jitter=False,
                             retryable_exceptions=(KeyError,))

        assert with_retry(func, config, sleep=sleeps.append) == "ok"
        assert func.call_count == 3
        assert sleeps == [pytest.approx(0.01), pytest.approx(0.05)]

    def test_exhausted(self):
        error = KeyError("missing")
        func = Mock(side_effect=error)
        sleeps = []
        config = RetryConfig(max_attempts=3, jitter=False, retryable_exceptions=(KeyError,))

        with pytest.raises(RetryExhausted) as exc_info:
            with_retry(func, config, operation_name="lookup", sleep=sleeps.append)

        assert exc_info.value.attempts == 3
        assert exc_info.value.last_error is error
        assert exc_info.value.operation == "lookup"
        assert func.call_count == 3
        assert len(sleeps) == 2

    def test_non_retryable_exception_propagates_immediately(self):
        func = Mock(side_effect=ValueError("bad"))
        sleeps = []
        config = RetryConfig(retryable_exceptions=(KeyError,))

        with pytest.raises(ValueError):
            with_retry(func, config, sleep=sleeps.append)

        assert func.call_count == 1
        assert sleeps == []
