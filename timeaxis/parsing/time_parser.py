"""Normalization of raw time values to epoch milliseconds."""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import numpy as np
import pandas as pd

from timeaxis.core.errors import TimeParseError
from timeaxis.core.units import from_local

logger = logging.getLogger(__name__)

_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

# Strings pandas resolves against the current clock
_RELATIVE_KEYWORDS = frozenset({"now", "today"})


def timestamp_to_ms(ts: datetime) -> int:
    """Convert a datetime or Timestamp to epoch milliseconds.

    Naive values are read as local time; aware ones keep their offset.

    Raises:
        TimeRangeError: If a naive value has no epoch in local time
    """
    if isinstance(ts, pd.Timestamp):
        ts = ts.to_pydatetime()
    if ts.tzinfo is None:
        return from_local(ts)
    return (ts - _EPOCH_UTC) // _ONE_MS


def _parse_string(value: str) -> pd.Timestamp:
    text = value.strip()
    if not text:
        raise TimeParseError("empty time string")
    if text.lower() in _RELATIVE_KEYWORDS:
        raise TimeParseError(f"relative time string {value!r} has no fixed instant")
    try:
        ts = pd.Timestamp(text)
    except (ValueError, OverflowError) as e:
        raise TimeParseError(f"unparseable time string {value!r}: {e}") from e
    if ts is pd.NaT:
        raise TimeParseError(f"unparseable time string {value!r}")
    return ts


def parse_time(value: Any) -> int:
    """Parse one time value into epoch milliseconds.

    Accepts numeric epochs (passed through, rounded to whole ms), date/time
    strings, and datetime or Timestamp objects.

    Args:
        value: Raw time value

    Returns:
        Epoch milliseconds

    Raises:
        TimeParseError: If the value cannot be interpreted as a time
    """
    if isinstance(value, bool):
        raise TimeParseError(f"boolean is not a time value: {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        if not math.isfinite(value):
            raise TimeParseError(f"non-finite time value: {value!r}")
        return int(round(value))
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str):
        ts = _parse_string(value)
    else:
        raise TimeParseError(f"unsupported time value type {type(value).__name__}: {value!r}")
    try:
        return timestamp_to_ms(ts)
    except (ValueError, OverflowError) as e:
        raise TimeParseError(f"time value {value!r} is out of range: {e}") from e


def normalize_times(values: Iterable[Any]) -> list[int]:
    """Parse many time values, dropping the ones that cannot be parsed.

    ``None`` entries are treated as absent. Input order is kept.

    Args:
        values: Raw time values (numbers, strings, datetimes)

    Returns:
        Epoch milliseconds of every parseable value
    """
    result = []
    for value in values:
        if value is None:
            continue
        try:
            result.append(parse_time(value))
        except TimeParseError as e:
            logger.debug("Dropping time value: %s", e)
    return result
