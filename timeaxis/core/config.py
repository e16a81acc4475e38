"""Configuration constants, the nice-step ladder, and default settings."""

from timeaxis.core.units import TimeUnit

# Time lengths in milliseconds
ONE_SECOND = 1000
ONE_MINUTE = 60 * ONE_SECOND
ONE_HOUR = 60 * ONE_MINUTE
ONE_DAY = 24 * ONE_HOUR
ONE_YEAR = 31_556_952_000  # 365.2425 days (Gregorian mean)
ONE_MONTH = ONE_YEAR // 12
HALF_MONTH = ONE_MONTH // 2
ONE_QUARTER = 3 * ONE_MONTH

# Nominal length of one of each unit, used for tick counting and gap inference
UNIT_DURATIONS = {
    TimeUnit.MILLISECOND: 1,
    TimeUnit.SECOND: ONE_SECOND,
    TimeUnit.MINUTE: ONE_MINUTE,
    TimeUnit.HOUR: ONE_HOUR,
    TimeUnit.DAY: ONE_DAY,
    TimeUnit.HALF_MONTH: HALF_MONTH,
    TimeUnit.MONTH: ONE_MONTH,
    TimeUnit.QUARTER: ONE_QUARTER,
    TimeUnit.YEAR: ONE_YEAR,
}

# Candidate steps for automatic ticks: (unit, allowed multiples), finest first.
# Multiples divide the parent unit evenly except for days, which restart
# counting at the first of every month.
STEP_LADDER = (
    (TimeUnit.MILLISECOND, (1, 2, 5, 10, 20, 50, 100, 200, 500)),
    (TimeUnit.SECOND, (1, 2, 5, 10, 15, 30)),
    (TimeUnit.MINUTE, (1, 2, 5, 10, 15, 30)),
    (TimeUnit.HOUR, (1, 2, 3, 6, 12)),
    (TimeUnit.DAY, (1, 2, 3, 5, 10)),
    (TimeUnit.HALF_MONTH, (1,)),
    (TimeUnit.MONTH, (1, 2)),
    (TimeUnit.QUARTER, (1, 2)),
    (TimeUnit.YEAR, (1, 2, 5, 10, 20, 50, 100, 200, 500, 1000)),
)


class DEFAULTS:
    """Default configuration values."""

    # Target tick count for automatic planning
    SPLIT_NUMBER = 5

    # Hard cap on generated automatic ticks
    MAX_TICKS = 10_000

    # Padding applied on both sides of a zero-width data extent
    DEGENERATE_PADDING = ONE_DAY

    # Fraction of a unit a gap may deviate from a whole multiple and still
    # count as "evenly spaced" by that unit
    GAP_TOLERANCE = 0.1

    # Granularity of a lone exact tick (no spacing to infer from)
    SINGLE_TICK_UNIT = TimeUnit.DAY
