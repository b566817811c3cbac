"""
Tests for the backoff policy and the cancellable sleep.

Run with: python -m pytest opencode_client/tests/test_retry.py -v
"""

import logging
import threading
import time

import pytest
from tenacity import Future, RetryCallState

from opencode_client.errors import (
    APIConnectionError,
    DeadlineExceededError,
    InternalServerError,
    InvalidRequestError,
    RateLimitedError,
    RequestCancelledError,
)
from opencode_client.retry import RetryPolicy, check_cancelled, interruptible_sleep, should_retry


def failed_state(attempt: int, exc: BaseException) -> RetryCallState:
    state = RetryCallState(retry_object=None, fn=None, args=(), kwargs={})
    state.attempt_number = attempt
    future = Future(attempt)
    future.set_exception(exc)
    state.outcome = future
    return state


class TestRetryPolicy:
    """Tests for RetryPolicy.compute_delay and its tenacity wait hook."""

    def test_exponential_schedule(self):
        """Test 0.5s doubling per attempt."""
        policy = RetryPolicy()
        assert [policy.compute_delay(n) for n in (1, 2, 3, 4)] == [0.5, 1.0, 2.0, 4.0]

    def test_capped_at_max_delay(self):
        policy = RetryPolicy()
        assert policy.compute_delay(5) == 8.0
        assert policy.compute_delay(30) == 8.0

    def test_override_wins(self):
        assert RetryPolicy().compute_delay(3, override=0.1) == 0.1
        assert RetryPolicy().compute_delay(1, override=0) == 0

    def test_wait_hook_reads_retry_after(self):
        """Test the server's Retry-After carried by the error replaces the backoff."""
        policy = RetryPolicy()
        exc = RateLimitedError(429, "slow down", retry_after=0.25)
        assert policy(failed_state(2, exc)) == 0.25

    def test_wait_hook_without_override(self):
        policy = RetryPolicy(initial_delay=0.1, max_delay=1)
        assert policy(failed_state(3, InternalServerError(500, "x"))) == pytest.approx(0.4)

    def test_delay_decision_logged(self, caplog):
        policy = RetryPolicy()
        with caplog.at_level(logging.DEBUG, logger="opencode_client.retry"):
            policy(failed_state(1, RateLimitedError(429, "slow down", retry_after=0.25)))
            policy(failed_state(2, InternalServerError(500, "x")))

        messages = [record.getMessage() for record in caplog.records]
        assert "Server requested a retry delay of 0.250s" in messages
        assert "Backing off 1.000s after attempt 2" in messages

    def test_negative_delays_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(initial_delay=-1)


class TestShouldRetry:
    def test_retryable_failures(self):
        assert should_retry(InternalServerError(502, "bad gateway"))
        assert should_retry(RateLimitedError(429, "slow down"))
        assert should_retry(APIConnectionError("reset", retryable=True))

    def test_non_retryable_failures(self):
        """Test plain 4xx, cancellation and foreign exceptions are final."""
        assert not should_retry(InvalidRequestError(400, "bad"))
        assert not should_retry(APIConnectionError("tls"))
        assert not should_retry(RequestCancelledError())
        assert not should_retry(ValueError("x"))


class TestCancellation:
    """Tests for check_cancelled and interruptible_sleep."""

    def test_check_cancelled(self):
        event = threading.Event()
        check_cancelled(event, time.monotonic() + 10)
        event.set()
        with pytest.raises(RequestCancelledError):
            check_cancelled(event, time.monotonic() + 10)

    def test_check_deadline(self):
        with pytest.raises(DeadlineExceededError):
            check_cancelled(None, time.monotonic() - 1)

    def test_sleep_interrupted_by_event(self):
        """Test a cancellation during backoff aborts well before the delay."""
        event = threading.Event()
        timer = threading.Timer(0.05, event.set)
        timer.start()
        started = time.monotonic()
        try:
            with pytest.raises(RequestCancelledError):
                interruptible_sleep(event, time.monotonic() + 30, 5.0)
        finally:
            timer.cancel()
        assert time.monotonic() - started < 2.0

    def test_sleep_never_passes_deadline(self):
        started = time.monotonic()
        with pytest.raises(DeadlineExceededError):
            interruptible_sleep(None, time.monotonic() + 0.05, 5.0)
        assert time.monotonic() - started < 2.0

    def test_short_sleep_completes(self):
        interruptible_sleep(threading.Event(), time.monotonic() + 10, 0.01)
