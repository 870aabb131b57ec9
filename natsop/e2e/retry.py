"""Fixed-interval retry helpers used by the end-to-end checks."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Callable, TypeVar, Union

T = TypeVar("T")

Interval = Union[float, int, timedelta]


def _seconds(interval: Interval) -> float:
    if isinstance(interval, timedelta):
        return interval.total_seconds()
    return float(interval)


def _check(attempts: int, interval: Interval) -> float:
    if attempts < 1:
        raise ValueError("attempts must be at least 1")
    seconds = _seconds(interval)
    if seconds < 0:
        raise ValueError("interval must not be negative")
    return seconds


def retry_get(attempts: int, interval: Interval, fn: Callable[[], T]) -> T:
    """Call fn until it returns without raising, waiting interval before each call.

    Returns fn's result. After the last attempt fails, its exception is re-raised.
    """
    seconds = _check(attempts, interval)
    remaining = attempts
    while True:
        time.sleep(seconds)
        remaining -= 1
        try:
            return fn()
        except Exception:
            if remaining == 0:
                raise


def retry(attempts: int, interval: Interval, fn: Callable[[], object]) -> None:
    """Call fn until it returns without raising, waiting interval before each call.

    After the last attempt fails, its exception is re-raised.
    """
    retry_get(attempts, interval, fn)