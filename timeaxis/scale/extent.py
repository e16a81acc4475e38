"""Extent resolution from configured bounds and observed data."""

import logging
from collections.abc import Iterable
from typing import Any, Optional

import numpy as np

from timeaxis.core.config import DEFAULTS
from timeaxis.core.errors import InvalidExtentError, TimeParseError
from timeaxis.core.state import AxisExtent, BoundSpec
from timeaxis.parsing.time_parser import normalize_times, parse_time

logger = logging.getLogger(__name__)

DATA_MIN = "dataMin"
DATA_MAX = "dataMax"


def _resolve_bound(
    spec: BoundSpec,
    default: Optional[int],
    data_min: Optional[int],
    data_max: Optional[int],
) -> tuple[Optional[int], bool]:
    """Resolve one configured bound.

    Returns:
        Tuple of (bound, configured) where configured is False when the
        bound came from data
    """
    if spec is None:
        return default, False
    if spec == DATA_MIN:
        return data_min, False
    if spec == DATA_MAX:
        return data_max, False
    if callable(spec):
        spec = spec({"min": data_min, "max": data_max})
        if spec is None:
            return default, False
    try:
        return parse_time(spec), True
    except TimeParseError as e:
        logger.warning("Ignoring axis bound: %s", e)
        return default, False


def data_extent(data_values: Iterable[Any]) -> tuple[Optional[int], Optional[int]]:
    """Min and max of all parseable data values, or (None, None)."""
    times = normalize_times(data_values)
    if not times:
        return None, None
    arr = np.asarray(times, dtype=np.int64)
    return int(arr.min()), int(arr.max())


def resolve_extent(
    configured_min: BoundSpec = None,
    configured_max: BoundSpec = None,
    data_values: Iterable[Any] = (),
) -> Optional[AxisExtent]:
    """Determine the axis extent.

    Configured bounds win; missing or unparseable ones are derived from the
    data. Bounds may also be "dataMin"/"dataMax" or a callable receiving the
    data extent as ``{"min": ..., "max": ...}``.

    Args:
        configured_min: Configured lower bound
        configured_max: Configured upper bound
        data_values: Raw time values of every data source feeding the axis

    Returns:
        AxisExtent, or None when neither bounds nor data exist
    """
    data_min, data_max = data_extent(data_values)
    low, low_configured = _resolve_bound(configured_min, data_min, data_min, data_max)
    high, high_configured = _resolve_bound(configured_max, data_max, data_min, data_max)

    if low is None and high is None:
        return None
    if low is None:
        low = high
    if high is None:
        high = low

    if low == high and not (low_configured or high_configured):
        low -= DEFAULTS.DEGENERATE_PADDING
        high += DEFAULTS.DEGENERATE_PADDING

    try:
        return AxisExtent(min=low, max=high)
    except InvalidExtentError as e:
        logger.warning("%s; swapping bounds", e)
        return AxisExtent(min=high, max=low)
