"""Clipping of tick sequences to the axis extent."""

import numpy as np

from timeaxis.core.state import AxisExtent, Tick


def filter_ticks(ticks: list[Tick], extent: AxisExtent) -> list[Tick]:
    """Keep ticks with ``extent.min <= value <= extent.max``.

    Order is preserved; no sorting or deduplication happens here.

    Args:
        ticks: Ticks from the exact provider or the interval planner
        extent: Resolved axis extent

    Returns:
        Ticks inside the extent (inclusive)
    """
    if not ticks:
        return []
    values = np.fromiter((tick.value for tick in ticks), dtype=np.int64, count=len(ticks))
    mask = (values >= extent.min) & (values <= extent.max)
    return [tick for tick, keep in zip(ticks, mask) if keep]
