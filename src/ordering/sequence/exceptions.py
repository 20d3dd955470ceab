"""Errors raised while issuing order sequence numbers."""


class SequenceError(Exception):
    """Base class for sequence generation failures."""


class StorageError(SequenceError):
    """The sequence backing store failed (connectivity, timeout, driver error).

    Order creation must abort: an order is never created without a number.
    """


class AtomicIncrementUnavailable(SequenceError):
    """The store cannot perform an atomic increment-and-fetch.

    Signals the generator to switch to the compare-and-swap path; never
    surfaced to callers.
    """


class RaceExhausted(SequenceError):
    """Compare-and-swap retries ran out before an update succeeded."""

    def __init__(self, attempts: int, key: str | None = None):
        self.attempts = attempts
        self.key = key
        target = f" for {key}" if key else ""
        super().__init__(f"Failed to update sequence{target} after {attempts} attempts")
