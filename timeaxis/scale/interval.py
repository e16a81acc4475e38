"""Automatic tick placement on nice, calendar-aligned intervals."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from timeaxis.core.config import DEFAULTS, STEP_LADDER, UNIT_DURATIONS
from timeaxis.core.errors import TimeRangeError
from timeaxis.core.state import AxisExtent, IntervalConstraints, Tick, TimeLevel
from timeaxis.core.units import TimeUnit, floor_time, next_boundary, resolve_upper_unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepCandidate:
    """One rung of the nice-step ladder: ``multiple`` x ``unit``."""

    unit: TimeUnit
    multiple: int

    @property
    def duration(self) -> int:
        """Nominal step length in milliseconds."""
        return UNIT_DURATIONS[self.unit] * self.multiple


# Every rung of STEP_LADDER, shortest first
CANDIDATE_STEPS = tuple(StepCandidate(unit, multiple) for unit, multiples in STEP_LADDER for multiple in multiples)


def tick_count(span: int, step: int) -> int:
    """Number of ticks a step yields over a span."""
    return int(span // step) + 1


def _allowed_steps(constraints: IntervalConstraints) -> list[StepCandidate]:
    low, high = constraints.min_interval, constraints.max_interval
    return [
        step
        for step in CANDIDATE_STEPS
        if (low is None or step.duration >= low) and (high is None or step.duration <= high)
    ]


def _clamp_step(constraints: IntervalConstraints) -> StepCandidate:
    target = constraints.min_interval if constraints.min_interval is not None else constraints.max_interval
    step = min(CANDIDATE_STEPS, key=lambda candidate: abs(candidate.duration - target))
    logger.warning(
        "No step satisfies minInterval=%s maxInterval=%s; using %d %s",
        constraints.min_interval,
        constraints.max_interval,
        step.multiple,
        step.unit.value,
    )
    return step


def choose_step(span: int, constraints: IntervalConstraints) -> StepCandidate:
    """Select the nice step for a span.

    Among allowed steps producing at least two ticks, takes the highest tick
    count not exceeding the split number, preferring the coarsest step on
    ties. Falls back to the coarsest allowed step when every step yields too
    many ticks.

    Args:
        span: Extent length in milliseconds (> 0)
        constraints: Interval constraints

    Returns:
        Chosen StepCandidate
    """
    split_number = constraints.split_number if constraints.split_number is not None else DEFAULTS.SPLIT_NUMBER
    allowed = _allowed_steps(constraints)
    if not allowed:
        return _clamp_step(constraints)

    viable = [step for step in allowed if tick_count(span, step.duration) >= 2]
    if not viable:
        # Every allowed step is longer than the span
        return allowed[0]

    fitting = [step for step in viable if tick_count(span, step.duration) <= split_number]
    if not fitting:
        return viable[-1]

    best = max(tick_count(span, step.duration) for step in fitting)
    return [step for step in fitting if tick_count(span, step.duration) == best][-1]


def generate_aligned_ticks(start: int, end: int, unit: TimeUnit, multiple: int) -> list[int]:
    """Boundary-aligned values from at-or-before ``start`` to at-or-past ``end``.

    Args:
        start: Range start (epoch ms)
        end: Range end (epoch ms)
        unit: Step unit
        multiple: Step size in units

    Returns:
        Ascending epoch milliseconds
    """
    values = [floor_time(start, unit, multiple)]
    while values[-1] < end:
        if len(values) >= DEFAULTS.MAX_TICKS:
            logger.warning("Stopped generating %d %s ticks at %d", multiple, unit.value, DEFAULTS.MAX_TICKS)
            break
        values.append(next_boundary(values[-1], unit, multiple))
    return values


def plan_ticks(extent: Optional[AxisExtent], constraints: IntervalConstraints) -> list[Tick]:
    """Compute automatic ticks covering an extent.

    Never raises for unusable extents: undefined, non-finite or inverted
    extents and ranges outside the supported calendar give an empty list.

    Args:
        extent: Resolved axis extent, or None for an empty axis
        constraints: minInterval / maxInterval / splitNumber

    Returns:
        Ticks sharing one TimeLevel
    """
    if extent is None:
        return []
    if not (math.isfinite(extent.min) and math.isfinite(extent.max)) or extent.min > extent.max:
        return []

    if extent.span == 0:
        lower = DEFAULTS.SINGLE_TICK_UNIT
        return [Tick(value=int(extent.min), time=TimeLevel.for_units(lower, lower.parent))]

    step = choose_step(extent.span, constraints)
    try:
        values = generate_aligned_ticks(int(extent.min), int(extent.max), step.unit, step.multiple)
        upper = resolve_upper_unit(step.unit, int(extent.min), int(extent.max))
    except TimeRangeError as e:
        logger.warning("Cannot place %s ticks over %s: %s", step.unit.value, extent, e)
        return []

    time_level = TimeLevel.for_units(step.unit, upper)
    return [Tick(value=value, time=time_level) for value in values]
