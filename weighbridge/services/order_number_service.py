"""
Sequential order numbers (ORD-0001, ORD-0002, ...).

Two strategies are available, selected with ORDER_NUMBER_STRATEGY:

- ``max_scan``: read MAX(suffix) over the existing numbers and add one. The read
  and the following insert are not synchronized, so two orders created at the
  same moment without a client-supplied number can receive the same number, and
  the upsert then turns the second one into an update of the first.
- ``counter``: keep the last issued value per prefix in ``code_counters`` and
  increment it under a row lock in the same transaction as the insert.
"""
import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from weighbridge.models import CodeCounter, Order

logger = logging.getLogger(__name__)

STRATEGY_MAX_SCAN = 'max_scan'
STRATEGY_COUNTER = 'counter'


def format_code(prefix: str, number: int, pad_width: int) -> str:
    """ORD + 7 + 4 -> 'ORD-0007'. Wider numbers are not truncated."""
    return f"{prefix}-{number:0{pad_width}d}"


def parse_code_suffix(value: Optional[str], prefix: str) -> Optional[int]:
    """Numeric suffix of a code with the given prefix, or None if it has none."""
    stem = f"{prefix}-"
    if not value or not value.startswith(stem):
        return None
    suffix = value[len(stem):]
    if not (suffix.isascii() and suffix.isdigit()):
        return None
    return int(suffix)


def max_code_value_from(values: Iterable[Optional[str]], prefix: str) -> int:
    """Highest numeric suffix among values; 0 when nothing matches."""
    numbers = (parse_code_suffix(value, prefix) for value in values)
    return max((n for n in numbers if n is not None), default=0)


def next_code_from_values(values: Iterable[Optional[str]], prefix: str, pad_width: int) -> str:
    """
    Next code after the highest existing one.

    Examples:
        next_code_from_values([], 'ORD', 4) -> 'ORD-0001'
        next_code_from_values(['ORD-0001', 'ORD-0007', 'ORD-3'], 'ORD', 4) -> 'ORD-0008'
        next_code_from_values(['ORD-9999'], 'ORD', 4) -> 'ORD-10000'
    """
    return format_code(prefix, max_code_value_from(values, prefix) + 1, pad_width)


def max_code_value(session, prefix: str, column) -> int:
    """Scan `column` for codes with this prefix and return the highest suffix."""
    values = session.execute(
        select(column).where(column.startswith(f"{prefix}-", autoescape=True))
    ).scalars()
    return max_code_value_from(values, prefix)


def next_code(session, prefix: str, pad_width: int, column) -> str:
    """Best-effort next code for `prefix`, scanning `column` (see module docstring)."""
    return format_code(prefix, max_code_value(session, prefix, column) + 1, pad_width)


class MaxScanAllocator:
    """Order numbers from MAX(existing)+1. Not safe under concurrent creation."""

    strategy = STRATEGY_MAX_SCAN

    def __init__(self, prefix: str = 'ORD', pad_width: int = 4, column=None):
        self.prefix = prefix
        self.pad_width = pad_width
        self.column = column if column is not None else Order.__table__.c.order_number

    def next_code(self, session) -> str:
        return next_code(session, self.prefix, self.pad_width, self.column)


class CounterAllocator(MaxScanAllocator):
    """
    Order numbers from a locked counter row.

    The counter is incremented with SELECT ... FOR UPDATE and committed (or
    rolled back) together with the order insert, so concurrent requests queue
    on the row instead of reading the same maximum. Before each increment the
    counter is moved past the highest stored number, so numbers that clients
    supplied themselves are never issued again.
    """

    strategy = STRATEGY_COUNTER

    def _locked_counter(self, session) -> Optional[CodeCounter]:
        return session.query(CodeCounter).filter(
            CodeCounter.prefix == self.prefix
        ).with_for_update().first()

    def next_code(self, session) -> str:
        counter = self._locked_counter(session)

        if counter is None:
            seed = max_code_value(session, self.prefix, self.column)
            try:
                counter = CodeCounter(prefix=self.prefix, last_value=seed)
                session.add(counter)
                session.flush()
                logger.info(f"[ORDER_NUMBER] Seeded counter {self.prefix} at {seed}")
            except IntegrityError:
                # Another request seeded it first
                session.rollback()
                counter = self._locked_counter(session)

        counter.last_value = max(counter.last_value, max_code_value(session, self.prefix, self.column)) + 1
        session.flush()
        return format_code(self.prefix, counter.last_value, self.pad_width)


ALLOCATORS = {
    STRATEGY_MAX_SCAN: MaxScanAllocator,
    STRATEGY_COUNTER: CounterAllocator,
}


def build_allocator(config) -> MaxScanAllocator:
    """Create the allocator selected by ORDER_NUMBER_STRATEGY."""
    strategy = config.get('ORDER_NUMBER_STRATEGY', STRATEGY_MAX_SCAN)
    allocator_cls = ALLOCATORS.get(strategy)
    if allocator_cls is None:
        raise ValueError(
            f"Unknown ORDER_NUMBER_STRATEGY '{strategy}' (expected one of {', '.join(ALLOCATORS)})"
        )
    return allocator_cls(
        prefix=config.get('ORDER_NUMBER_PREFIX', 'ORD'),
        pad_width=config.get('ORDER_NUMBER_PAD_WIDTH', 4),
    )
