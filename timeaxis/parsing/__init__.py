"""Parsers turning raw option and series values into epoch milliseconds."""

from timeaxis.parsing.series_loader import extract_series_times, load_series_csv
from timeaxis.parsing.time_parser import normalize_times, parse_time, timestamp_to_ms

__all__ = [
    "parse_time",
    "normalize_times",
    "timestamp_to_ms",
    "extract_series_times",
    "load_series_csv",
]
