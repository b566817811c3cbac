"""
Retry policy and backoff for the request executor.

The retry loop itself is a ``tenacity.Retrying`` controller built per call by
:mod:`opencode_client.request`; this module supplies its pieces:

- :class:`RetryPolicy` computes the delay before the next attempt, preferring
  the server's ``Retry-After-Ms`` / ``Retry-After`` over exponential backoff.
- :func:`should_retry` decides which failures earn another attempt.
- :func:`interruptible_sleep` waits on the caller's cancellation event and
  never sleeps past the call deadline.
"""

import logging
import threading
import time
from typing import Optional

from tenacity import RetryCallState
from tenacity.wait import wait_base

from opencode_client.errors import (
    APIConnectionError,
    APIError,
    DeadlineExceededError,
    RequestCancelledError,
)

logger = logging.getLogger(__name__)

INITIAL_BACKOFF = 0.5
MAX_BACKOFF = 8.0


class RetryPolicy(wait_base):
    """Exponential backoff with a server override.

    The n-th retry waits ``initial_delay * 2 ** (n - 1)`` seconds, capped at
    ``max_delay``.  A ``retry_after`` carried by the failed attempt's
    :class:`~opencode_client.errors.APIError` replaces the computed value.

    Parameters
    ----------
    initial_delay : float
        Delay before the first retry.
    max_delay : float
        Upper bound for the computed delay.
    """

    def __init__(self, initial_delay: float = INITIAL_BACKOFF, max_delay: float = MAX_BACKOFF):
        if initial_delay < 0 or max_delay < 0:
            raise ValueError("retry delays must not be negative")
        self.initial_delay = initial_delay
        self.max_delay = max_delay

    def compute_delay(self, attempt: int, override: Optional[float] = None) -> float:
        """Delay in seconds after failed attempt number *attempt* (1-based)."""
        if override is not None:
            return override
        return min(self.initial_delay * (2 ** max(attempt - 1, 0)), self.max_delay)

    def __call__(self, retry_state: RetryCallState) -> float:
        override = None
        if retry_state.outcome is not None and retry_state.outcome.failed:
            override = getattr(retry_state.outcome.exception(), "retry_after", None)
        delay = self.compute_delay(retry_state.attempt_number, override)
        if override is not None:
            logger.debug("Server requested a retry delay of %.3fs", delay)
        else:
            logger.debug("Backing off %.3fs after attempt %d", delay, retry_state.attempt_number)
        return delay

    def __eq__(self, other):
        return (
            isinstance(other, RetryPolicy)
            and self.initial_delay == other.initial_delay
            and self.max_delay == other.max_delay
        )

    def __hash__(self):
        return hash((self.initial_delay, self.max_delay))

    def __repr__(self):
        return f"RetryPolicy(initial_delay={self.initial_delay}, max_delay={self.max_delay})"


def should_retry(exc: BaseException) -> bool:
    """True for 429/5xx responses and retryable connection failures."""
    if isinstance(exc, APIError):
        return exc.is_retryable
    if isinstance(exc, APIConnectionError):
        return exc.retryable
    return False


def check_cancelled(cancel_event: Optional[threading.Event], deadline: float) -> None:
    """Raise if the call was cancelled or its deadline has passed."""
    if cancel_event is not None and cancel_event.is_set():
        raise RequestCancelledError()
    if time.monotonic() >= deadline:
        raise DeadlineExceededError()


def interruptible_sleep(
    cancel_event: Optional[threading.Event], deadline: float, seconds: float
) -> None:
    """Sleep for *seconds*, aborting early on cancellation or deadline."""
    remaining = deadline - time.monotonic()
    wait = max(0.0, min(seconds, remaining))
    if cancel_event is not None:
        if cancel_event.wait(wait):
            raise RequestCancelledError("request cancelled during retry backoff")
    elif wait:
        time.sleep(wait)
    if seconds >= remaining:
        raise DeadlineExceededError(
            f"request deadline exceeded while waiting {seconds:.2f}s to retry"
        )
