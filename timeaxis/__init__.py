"""
timeaxis: tick computation for time-valued chart axes.

Produces ordered ticks with time-unit granularity metadata, either from
explicit timestamps (exact ticks) or from nice calendar-aligned intervals.
"""

__version__ = "0.1.0"

from timeaxis.core.state import AxisExtent, Tick, TimeAxisOption, TimeLevel
from timeaxis.core.units import TimeUnit
from timeaxis.scale.time_scale import TimeScale, compute_ticks

__all__ = [
    "TimeScale",
    "TimeAxisOption",
    "AxisExtent",
    "Tick",
    "TimeLevel",
    "TimeUnit",
    "compute_ticks",
    "__version__",
]
