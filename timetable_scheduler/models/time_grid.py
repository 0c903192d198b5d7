"""
Fixed weekly time grid: 6 teaching days x 8 periods = 48 slots.

The grid is never resized during a run. Slot keys are plain (day, period)
tuples so they can be used directly as dict keys by the tracking store.
"""

from typing import Iterator, List, NamedTuple, Tuple

DAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
PERIODS_PER_DAY = 8
PERIODS: Tuple[int, ...] = tuple(range(1, PERIODS_PER_DAY + 1))

DAY_ORDER = {day: index for index, day in enumerate(DAYS)}


class TimeSlot(NamedTuple):
    day: str
    period: int


def slot_key(day: str, period: int) -> TimeSlot:
    return TimeSlot(day, period)


def all_slots() -> List[TimeSlot]:
    """All 48 slots, Monday period 1 first."""
    return [TimeSlot(day, period) for day in DAYS for period in PERIODS]


def block_start_slots(length: int) -> List[TimeSlot]:
    """Slots where a block of `length` consecutive periods fits inside the day."""
    if length < 1:
        return []
    last_start = PERIODS_PER_DAY - length + 1
    return [TimeSlot(day, period) for day in DAYS for period in range(1, last_start + 1)]


def block_periods(day: str, start_period: int, length: int) -> Iterator[TimeSlot]:
    for offset in range(length):
        yield TimeSlot(day, start_period + offset)


def is_valid_slot(day: str, period: int) -> bool:
    return day in DAY_ORDER and 1 <= period <= PERIODS_PER_DAY


def chronological_key(day: str, period: int) -> Tuple[int, int]:
    """Sort key: Monday -> Saturday, then period ascending."""
    return DAY_ORDER.get(day, len(DAYS)), period
