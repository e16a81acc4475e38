"""Time units and local-calendar arithmetic on epoch milliseconds.

Boundaries (start of an hour, first of a month, ...) are taken in the host's
local wall-clock time, the same way naive date strings are interpreted.
"""

import calendar
from datetime import datetime, timedelta
from enum import Enum
from functools import total_ordering

from timeaxis.core.errors import TimeRangeError


@total_ordering
class TimeUnit(Enum):
    """Tick granularity, ordered from finest to coarsest."""

    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    HALF_MONTH = "half-month"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def rank(self) -> int:
        """Position from finest (0) to coarsest."""
        return _FINEST_FIRST.index(self)

    @property
    def parent(self) -> "TimeUnit":
        """The primary unit one rung coarser (year is its own parent)."""
        return _PARENTS[self]

    def __lt__(self, other):
        if not isinstance(other, TimeUnit):
            return NotImplemented
        return self.rank < other.rank


_FINEST_FIRST = tuple(TimeUnit)

# Coarseness ladder used for TimeLevel.level: year = 0 ... millisecond = 8
COARSENESS_LADDER = tuple(reversed(_FINEST_FIRST))

# Units that label formatters show as context (no half-month or quarter)
PRIMARY_UNITS = (
    TimeUnit.MILLISECOND,
    TimeUnit.SECOND,
    TimeUnit.MINUTE,
    TimeUnit.HOUR,
    TimeUnit.DAY,
    TimeUnit.MONTH,
    TimeUnit.YEAR,
)

_PARENTS = {
    TimeUnit.MILLISECOND: TimeUnit.SECOND,
    TimeUnit.SECOND: TimeUnit.MINUTE,
    TimeUnit.MINUTE: TimeUnit.HOUR,
    TimeUnit.HOUR: TimeUnit.DAY,
    TimeUnit.DAY: TimeUnit.MONTH,
    TimeUnit.HALF_MONTH: TimeUnit.MONTH,
    TimeUnit.MONTH: TimeUnit.YEAR,
    TimeUnit.QUARTER: TimeUnit.YEAR,
    TimeUnit.YEAR: TimeUnit.YEAR,
}


def coarseness_level(unit: TimeUnit) -> int:
    """Index of a unit in the coarsest-first ladder."""
    return COARSENESS_LADDER.index(unit)



def to_local(ms: int) -> datetime:
    """Convert epoch milliseconds to a naive local-time datetime.

    Raises:
        TimeRangeError: If the instant has no local calendar date
    """
    seconds, millis = divmod(int(ms), 1000)
    try:
        return datetime.fromtimestamp(seconds) + timedelta(milliseconds=millis)
    except (OverflowError, OSError, ValueError) as e:
        raise TimeRangeError(f"{ms} ms is outside the supported calendar range") from e


def from_local(ts: datetime) -> int:
    """Convert a naive local-time datetime to epoch milliseconds.

    Raises:
        TimeRangeError: If the local time cannot be mapped to an epoch
    """
    try:
        seconds = int(ts.replace(microsecond=0).timestamp())
    except (OverflowError, OSError, ValueError) as e:
        raise TimeRangeError(f"{ts.isoformat()} is outside the supported calendar range") from e
    return seconds * 1000 + ts.microsecond // 1000


def _shift_months(ts: datetime, months: int) -> datetime:
    index = ts.year * 12 + ts.month - 1 + months
    year, month = divmod(index, 12)
    day = min(ts.day, calendar.monthrange(year, month + 1)[1])
    return ts.replace(year=year, month=month + 1, day=day)


def _floor(ts: datetime, unit: TimeUnit, multiple: int) -> datetime:
    if unit is TimeUnit.MILLISECOND:
        millis = ts.microsecond // 1000
        return ts.replace(microsecond=millis // multiple * multiple * 1000)
    if unit is TimeUnit.SECOND:
        return ts.replace(second=ts.second // multiple * multiple, microsecond=0)
    if unit is TimeUnit.MINUTE:
        return ts.replace(minute=ts.minute // multiple * multiple, second=0, microsecond=0)

    day_start = ts.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit is TimeUnit.HOUR:
        return day_start.replace(hour=ts.hour // multiple * multiple)
    if unit is TimeUnit.DAY:
        return day_start.replace(day=(ts.day - 1) // multiple * multiple + 1)
    if unit is TimeUnit.HALF_MONTH:
        return day_start.replace(day=1 if ts.day < 16 else 16)
    if unit is TimeUnit.MONTH:
        return day_start.replace(month=(ts.month - 1) // multiple * multiple + 1, day=1)
    if unit is TimeUnit.QUARTER:
        months = 3 * multiple
        return day_start.replace(month=(ts.month - 1) // months * months + 1, day=1)
    # No year 0 in the calendar
    return day_start.replace(year=max(ts.year // multiple * multiple, 1), month=1, day=1)


def _advance(ts: datetime, unit: TimeUnit, multiple: int) -> datetime:
    if unit is TimeUnit.MILLISECOND:
        return ts + timedelta(milliseconds=multiple)
    if unit is TimeUnit.SECOND:
        return ts + timedelta(seconds=multiple)
    if unit is TimeUnit.MINUTE:
        return ts + timedelta(minutes=multiple)
    if unit is TimeUnit.HOUR:
        return ts + timedelta(hours=multiple)
    if unit is TimeUnit.DAY:
        return ts + timedelta(days=multiple)
    if unit is TimeUnit.HALF_MONTH:
        for _ in range(multiple):
            if ts.day < 16:
                ts = ts.replace(day=16)
            else:
                ts = _shift_months(ts.replace(day=1), 1)
        return ts
    if unit is TimeUnit.MONTH:
        return _shift_months(ts, multiple)
    if unit is TimeUnit.QUARTER:
        return _shift_months(ts, 3 * multiple)
    return _shift_months(ts, 12 * multiple)


def floor_time(ms: int, unit: TimeUnit, multiple: int = 1) -> int:
    """Last boundary at or before ``ms`` aligned to ``multiple`` units.

    Args:
        ms: Epoch milliseconds
        unit: Boundary unit
        multiple: Step size in units; alignment restarts in each parent unit

    Returns:
        Epoch milliseconds of the boundary

    Raises:
        TimeRangeError: If ``ms`` lies outside the supported calendar range
    """
    return from_local(_floor(to_local(ms), unit, multiple))


def next_boundary(ms: int, unit: TimeUnit, multiple: int = 1) -> int:
    """First aligned boundary strictly after the aligned boundary ``ms``.

    Stepping across a parent boundary re-aligns, so day steps restart at the
    first of each month.
    """
    ts = to_local(ms)
    try:
        stepped = _advance(ts, unit, multiple)
    except (OverflowError, ValueError) as e:
        raise TimeRangeError(f"cannot step {multiple} {unit.value} past {ts.isoformat()}") from e
    realigned = _floor(stepped, unit, multiple)
    if realigned <= ts:
        return from_local(stepped)
    return from_local(realigned)


def resolve_upper_unit(lower: TimeUnit, start: int, end: int) -> TimeUnit:
    """Pick the label-context unit for ticks of granularity ``lower``.

    Returns the first primary unit coarser than ``lower`` whose value differs
    between ``start`` and ``end``; falls back to the parent of ``lower``.
    """
    for unit in PRIMARY_UNITS:
        if unit > lower and floor_time(start, unit) != floor_time(end, unit):
            return unit
    return lower.parent
