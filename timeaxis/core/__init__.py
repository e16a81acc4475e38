"""Core modules for timeaxis: value types, units, errors, and configuration."""

from timeaxis.core.config import DEFAULTS, STEP_LADDER, UNIT_DURATIONS
from timeaxis.core.errors import (
    InvalidExtentError,
    TimeAxisConfigError,
    TimeAxisError,
    TimeParseError,
    TimeRangeError,
)
from timeaxis.core.state import (
    AxisExtent,
    ExactTicksConfig,
    IntervalConstraints,
    Tick,
    TimeAxisOption,
    TimeLevel,
)
from timeaxis.core.units import TimeUnit

__all__ = [
    "AxisExtent",
    "ExactTicksConfig",
    "IntervalConstraints",
    "Tick",
    "TimeAxisOption",
    "TimeLevel",
    "TimeUnit",
    "TimeAxisError",
    "InvalidExtentError",
    "TimeParseError",
    "TimeRangeError",
    "TimeAxisConfigError",
    "DEFAULTS",
    "STEP_LADDER",
    "UNIT_DURATIONS",
]
