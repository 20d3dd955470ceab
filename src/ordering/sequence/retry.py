"""Optimistic compare-and-swap retry combinator.

Independent of any storage backend: callers pass a reader and a conditional
writer. The writer returns the new value when its condition held, or None
when another caller won the race.
"""

import time
from collections.abc import Callable
from typing import TypeVar

from ordering.sequence.exceptions import RaceExhausted

C = TypeVar("C")
V = TypeVar("V")


def linear_backoff(base_delay: float) -> Callable[[int], float]:
    """Delay of ``attempt * base_delay`` seconds after the given attempt."""

    def delay(attempt: int) -> float:
        return attempt * base_delay

    return delay


def compare_and_swap(
    read_current: Callable[[], C],
    try_update: Callable[[C], V | None],
    max_attempts: int = 5,
    backoff: Callable[[int], float] = linear_backoff(0.01),
    sleep: Callable[[float], None] = time.sleep,
    key: str | None = None,
) -> V:
    """Read, attempt a conditional update, and retry on conflict.

    Waits ``backoff(attempt)`` between attempts, never after the last one.
    Errors raised by either callable propagate unchanged.

    Raises:
        RaceExhausted: every one of ``max_attempts`` attempts hit a conflict.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        current = read_current()
        result = try_update(current)
        if result is not None:
            return result
        if attempt < max_attempts:
            sleep(backoff(attempt))

    raise RaceExhausted(max_attempts, key=key)
