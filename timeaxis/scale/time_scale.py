"""Tick computation for a time axis.

``compute_ticks`` is a pure function of an axis option and the series time
values. It resolves the extent, takes exact ticks when they apply and falls
back to automatic planning otherwise, then clips to the extent.

``TimeScale`` wraps one immutable snapshot of those inputs. A new option or
data set means a new TimeScale; nothing is cached between calls.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from timeaxis.core.errors import TimeAxisError
from timeaxis.core.state import AxisExtent, Tick, TimeAxisOption
from timeaxis.parsing.series_loader import extract_series_times
from timeaxis.scale.exact import provide_exact_ticks
from timeaxis.scale.extent import resolve_extent
from timeaxis.scale.extent_filter import filter_ticks
from timeaxis.scale.interval import plan_ticks

logger = logging.getLogger(__name__)


def axis_extent(option: TimeAxisOption, series_times: Iterable[Any] = ()) -> Optional[AxisExtent]:
    """Resolve the extent of an axis from its option and series data.

    Exact tick values take part in the data extent only while exact mode is
    enabled.
    """
    data_values = list(series_times)
    if option.exact_ticks.enabled:
        data_values.extend(option.exact_ticks.raw_values)
    return resolve_extent(option.min, option.max, data_values)


def compute_ticks(option: TimeAxisOption, series_times: Iterable[Any] = ()) -> list[Tick]:
    """Compute the ticks of a time axis.

    Args:
        option: Axis option snapshot
        series_times: Raw time values of the series plotted on the axis

    Returns:
        Ascending ticks inside the resolved extent
    """
    extent = axis_extent(option, series_times)
    if extent is None:
        return []

    ticks = provide_exact_ticks(option.exact_ticks, extent)
    if ticks is None:
        ticks = plan_ticks(extent, option.constraints)
    return filter_ticks(ticks, extent)


class TimeScale:
    """Time axis scale over one configuration and data snapshot.

    Example usage:
        scale = TimeScale.from_options(
            {"type": "time", "useExactTicks": True, "data": [0, 3600000]},
            series=[{"data": [[0, 10], [3600000, 20]]}],
        )
        ticks = scale.get_ticks()
    """

    def __init__(self, option: TimeAxisOption, series_times: Iterable[Any] = ()):
        """Initialize scale.

        Args:
            option: Axis option snapshot
            series_times: Raw time values of every series on the axis
        """
        self._option = option
        self._series_times = tuple(series_times)

    @classmethod
    def from_options(cls, axis_options: Mapping, series: Iterable[Mapping] = ()) -> "TimeScale":
        """Build a scale from chart-style axis and series options.

        Raises:
            TimeAxisConfigError: If the axis options are not a valid time axis
        """
        return cls(TimeAxisOption.from_dict(axis_options), extract_series_times(series))

    @property
    def option(self) -> TimeAxisOption:
        return self._option

    @property
    def series_times(self) -> tuple:
        return self._series_times

    def with_option(self, option: TimeAxisOption) -> "TimeScale":
        """Return a scale over the same data with a different option."""
        return TimeScale(option, self._series_times)

    def with_series(self, series_times: Iterable[Any]) -> "TimeScale":
        """Return a scale with the same option over different data."""
        return TimeScale(self._option, series_times)

    def get_extent(self) -> Optional[AxisExtent]:
        """Resolved extent, or None for an empty axis."""
        try:
            return axis_extent(self._option, self._series_times)
        except TimeAxisError as e:
            logger.error("Error resolving time axis extent: %s", e)
            return None

    def get_ticks(self) -> list[Tick]:
        """Ordered ticks of the axis; empty when nothing can be computed."""
        try:
            return compute_ticks(self._option, self._series_times)
        except TimeAxisError as e:
            logger.error("Error computing time axis ticks: %s", e)
            return []
