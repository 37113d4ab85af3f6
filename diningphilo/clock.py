"""Millisecond clock and a sleep that tracks elapsed wall time closely."""

from __future__ import annotations

import time

_POLL_INTERVAL_S = 0.0005


def now_ms() -> int:
    """Return the current time of a monotonic clock in whole milliseconds."""
    return time.monotonic_ns() // 1_000_000


def smart_sleep(duration_ms: float) -> None:
    """Sleep in short slices until at least ``duration_ms`` milliseconds passed.

    Short slices keep the overshoot small, which a single long sleep
    does not guarantee.
    """
    start = now_ms()
    while now_ms() - start < duration_ms:
        time.sleep(_POLL_INTERVAL_S)