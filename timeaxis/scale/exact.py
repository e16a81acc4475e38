"""Exact ticks: caller-supplied timestamps used verbatim."""

from typing import Optional

import numpy as np

from timeaxis.core.config import DEFAULTS, UNIT_DURATIONS
from timeaxis.core.errors import TimeRangeError
from timeaxis.core.state import AxisExtent, ExactTicksConfig, Tick, TimeLevel
from timeaxis.core.units import COARSENESS_LADDER, TimeUnit, resolve_upper_unit
from timeaxis.parsing.time_parser import normalize_times


def unit_for_gap(gap: float, tolerance: float = DEFAULTS.GAP_TOLERANCE) -> TimeUnit:
    """Find the coarsest unit that evenly describes a spacing.

    A unit matches when the gap is at least (1 - tolerance) units long and
    lies within ``tolerance`` units of a whole multiple, so 15-minute gaps
    map to minutes and 28-31 day gaps map to months.

    Args:
        gap: Spacing in milliseconds
        tolerance: Allowed deviation from a whole multiple, in units

    Returns:
        Matching TimeUnit (millisecond when nothing coarser fits)
    """
    for unit in COARSENESS_LADDER:
        ratio = gap / UNIT_DURATIONS[unit]
        if ratio >= 1 - tolerance and abs(ratio - round(ratio)) <= tolerance:
            return unit
    return TimeUnit.MILLISECOND


def infer_time_level(values: np.ndarray, extent: AxisExtent) -> TimeLevel:
    """Infer the TimeLevel of sorted, distinct tick values.

    Uses the median gap between neighbours, so a few irregular gaps do not
    change the granularity of an otherwise regular sequence.
    """
    if len(values) < 2:
        lower = DEFAULTS.SINGLE_TICK_UNIT
        return TimeLevel.for_units(lower, lower.parent)

    lower = unit_for_gap(float(np.median(np.diff(values))))
    start = max(int(values[0]), extent.min)
    end = min(int(values[-1]), extent.max)
    if start > end:
        start, end = int(values[0]), int(values[-1])
    try:
        upper = resolve_upper_unit(lower, start, end)
    except TimeRangeError:
        # Epochs beyond the local calendar keep their values but get no wider context
        upper = lower.parent
    return TimeLevel.for_units(lower, upper)


def provide_exact_ticks(config: ExactTicksConfig, extent: AxisExtent) -> Optional[list[Tick]]:
    """Turn explicit timestamps into ticks.

    Values are normalized, sorted and deduplicated; interval constraints
    play no part. Ticks outside the extent are kept (the extent filter
    drops them).

    Args:
        config: Exact tick configuration
        extent: Resolved axis extent

    Returns:
        Ticks in ascending order, or None when exact ticks are disabled or no
        raw value could be parsed
    """
    if not config.enabled:
        return None
    times = normalize_times(config.raw_values)
    if not times:
        return None

    values = np.unique(np.asarray(times, dtype=np.int64))
    time_level = infer_time_level(values, extent)
    return [Tick(value=value, time=time_level) for value in values.tolist()]
