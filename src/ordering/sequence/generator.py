"""Order number generation.

Order numbers look like ``TC-240101-0001``: a prefix, the calendar day as
``YYMMDD`` and the day's counter zero-padded to a minimum width. Counters
past the pad width simply grow wider. Numbers are unique, but a caller that
abandons a request after its increment burns that counter, so they are not
guaranteed gapless.
"""

import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime

import structlog

from ordering.sequence.exceptions import AtomicIncrementUnavailable, RaceExhausted
from ordering.sequence.port import SequenceStorePort
from ordering.sequence.retry import compare_and_swap, linear_backoff

logger = structlog.get_logger(__name__)

DATE_KEY_FORMAT = "%y%m%d"
_DATE_KEY_RE = re.compile(r"^\d{6}$")


def date_key_for(day: date | datetime) -> str:
    return day.strftime(DATE_KEY_FORMAT)


def validate_date_key(date_key: str) -> str:
    if not isinstance(date_key, str) or not _DATE_KEY_RE.match(date_key):
        raise ValueError(f"Date key must be six digits (YYMMDD), got {date_key!r}")
    return date_key


@dataclass(frozen=True)
class OrderNumber:
    prefix: str
    date_key: str
    counter: int
    width: int = 4

    def __str__(self) -> str:
        return f"{self.prefix}-{self.date_key}-{self.counter:0{self.width}d}"

    @classmethod
    def parse(cls, value: str, width: int = 4) -> "OrderNumber":
        """Split an order number back into prefix, date key and counter.

        The prefix may itself contain dashes; the last two segments are
        always the date key and the counter. A zero-padded counter fixes the
        pad width, so the parsed number formats back to ``value``.
        """
        parts = value.rsplit("-", 2)
        if len(parts) != 3 or not parts[0] or not parts[2].isdigit():
            raise ValueError(f"Not an order number: {value!r}")
        prefix, date_key, counter = parts
        if counter.startswith("0"):
            width = len(counter)
        else:
            width = min(width, len(counter))
        return cls(prefix=prefix, date_key=validate_date_key(date_key), counter=int(counter), width=width)


class SequenceGenerator:
    """Issues per-day counters that are unique across processes.

    The store's atomic increment is used whenever it exists. Without it the
    generator runs a bounded compare-and-swap loop: read, insert-if-absent or
    conditional update, back off linearly on conflict, give up with
    ``RaceExhausted``. Storage failures propagate as ``StorageError``.
    """

    def __init__(
        self,
        store: SequenceStorePort,
        prefix: str = "TC",
        width: int = 4,
        max_attempts: int = 5,
        base_delay: float = 0.01,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        self.store = store
        self.prefix = prefix
        self.width = width
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep
        self._clock = clock

    def next(self, date_key: str) -> int:
        validate_date_key(date_key)
        try:
            counter = self.store.increment(date_key)
        except AtomicIncrementUnavailable as exc:
            logger.warning(
                "Atomic sequence increment unavailable, using conditional updates",
                date_key=date_key,
                store=self.store.name,
                reason=str(exc),
            )
            counter = self._next_with_retry(date_key)
        return counter

    def _next_with_retry(self, date_key: str) -> int:
        store = self.store

        def try_update(current: int | None) -> int | None:
            if current is None:
                return 1 if store.insert_if_absent(date_key, 1) else None
            if store.compare_and_set(date_key, current, current + 1):
                return current + 1
            return None

        try:
            return compare_and_swap(
                read_current=lambda: store.read(date_key),
                try_update=try_update,
                max_attempts=self.max_attempts,
                backoff=linear_backoff(self.base_delay),
                sleep=self._sleep,
                key=date_key,
            )
        except RaceExhausted:
            logger.error("Order sequence contention exhausted retries", date_key=date_key, attempts=self.max_attempts)
            raise

    def today(self) -> str:
        return date_key_for(self._clock())

    def next_order_number(self, date_key: str | None = None) -> OrderNumber:
        """Consume the next counter for ``date_key`` (default: today, UTC)."""
        date_key = date_key or self.today()
        counter = self.next(date_key)
        order_number = OrderNumber(prefix=self.prefix, date_key=date_key, counter=counter, width=self.width)
        logger.info("Generated order number", order_number=str(order_number), sequence=counter)
        return order_number
