"""Extraction of time values from series data."""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Union

import pandas as pd


def _item_time(item: Any) -> Any:
    """Return the time dimension (first value) of one series data item."""
    if isinstance(item, Mapping):
        item = item.get("value")
    if isinstance(item, (list, tuple)):
        return item[0] if item else None
    return item


def extract_series_times(series: Iterable[Mapping]) -> list[Any]:
    """Collect raw time values from chart series.

    Items may be ``[time, value]`` pairs, ``{"value": [time, value]}``
    dicts, or bare time values.

    Args:
        series: Series option mappings, each with a ``data`` list

    Returns:
        Raw (unparsed) time values in series order
    """
    times = []
    for entry in series:
        for item in entry.get("data") or ():
            time_value = _item_time(item)
            if time_value is not None:
                times.append(time_value)
    return times


def load_series_csv(filepath: Union[str, Path], time_column: str = "time") -> list[Any]:
    """Read the time column of a CSV file.

    Args:
        filepath: Path to the CSV file
        time_column: Name of the column holding times

    Returns:
        Raw time values (strings or numbers) with missing cells removed

    Raises:
        KeyError: If the column does not exist
    """
    df = pd.read_csv(filepath)
    if time_column not in df.columns:
        raise KeyError(f"column {time_column!r} not found in {filepath}; columns: {list(df.columns)}")
    return df[time_column].dropna().tolist()
