"""
Utilities
=========

Helpers that are used across the application but do not belong to a more
specific domain like the document store or the classification providers.

Currently, it contains a `retry` decorator for handling transient transport
errors with exponential backoff and jitter. The number of attempts comes from
``settings.MAX_RETRIES``; the default of 1 means a single attempt.
"""

import random
import time
from functools import wraps
from typing import Callable, Type, TypeVar

import structlog

log = structlog.get_logger(__name__)
T = TypeVar("T")


def retry(
    retryable_exceptions: tuple[Type[Exception], ...],
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    A decorator that retries a method call on specific exceptions.

    The decorated method's instance must expose ``self.settings`` with
    ``MAX_RETRIES`` and ``MAX_RETRY_BACKOFF_SECONDS``.

    Args:
        retryable_exceptions: A tuple of exception types that should trigger a retry.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(self, *args, **kwargs) -> T:
            settings = self.settings
            max_retries = settings.MAX_RETRIES
            if max_retries < 1:
                raise ValueError("MAX_RETRIES must be >= 1")
            for attempt in range(1, max_retries + 1):
                try:
                    return func(self, *args, **kwargs)
                except retryable_exceptions as e:
                    if attempt == max_retries:
                        log.warning(
                            "Call failed after all attempts",
                            func=func.__name__,
                            attempts=attempt,
                            error=str(e),
                        )
                        raise
                    log.warning(
                        "Call failed; retrying",
                        func=func.__name__,
                        error=str(e),
                        attempt=attempt,
                        max_retries=max_retries,
                    )
                    _sleep_backoff(attempt, settings)
            # This part should be unreachable if MAX_RETRIES > 0
            raise RuntimeError("Retry loop exited unexpectedly.")

        return wrapper

    return decorator


def _sleep_backoff(attempt: int, settings) -> None:
    """Sleep for a short duration with exponential backoff and jitter."""
    delay = min(
        float(settings.MAX_RETRY_BACKOFF_SECONDS),
        (2**attempt) * random.uniform(0.8, 1.2),
    )
    log.info(
        "Sleeping before retry",
        delay=round(delay, 1),
        attempt=attempt,
        max_retries=settings.MAX_RETRIES,
    )
    time.sleep(delay)
