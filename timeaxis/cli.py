"""Command-line interface for timeaxis.

This module provides the Click-based CLI for computing the ticks of a time
axis described by a JSON option file.
"""

import json
import logging
from pathlib import Path

import click

from timeaxis.core.errors import TimeAxisConfigError, TimeRangeError
from timeaxis.core.state import Tick
from timeaxis.core.units import to_local
from timeaxis.parsing.series_loader import extract_series_times, load_series_csv
from timeaxis.scale.time_scale import TimeScale

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def load_chart_option(filepath: str) -> tuple[dict, list]:
    """Read an axis option, or a chart option with xAxis and series.

    Args:
        filepath: Path to a JSON file

    Returns:
        Tuple of (axis option, series list)
    """
    with Path(filepath).open(encoding="utf-8") as fh:
        doc = json.load(fh)
    if not isinstance(doc, dict):
        raise TimeAxisConfigError(f"expected a JSON object in {filepath}")
    if "xAxis" not in doc:
        return doc, []

    axis = doc["xAxis"]
    if isinstance(axis, list):
        if not axis:
            raise TimeAxisConfigError("xAxis list is empty")
        axis = axis[0]
    if not isinstance(axis, dict):
        raise TimeAxisConfigError(f"xAxis must be an object, got {axis!r}")
    return axis, doc.get("series") or []


def format_tick(tick: Tick) -> str:
    """One human-readable output line for a tick."""
    try:
        local_time = to_local(tick.value).isoformat(sep=" ", timespec="milliseconds")
    except TimeRangeError:
        local_time = "-"
    return (
        f"{tick.value:>15}  {local_time}  "
        f"{tick.time.lower_time_unit.value}/{tick.time.upper_time_unit.value}  "
        f"level={tick.time.level}"
    )


@click.command()
@click.argument("option_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--series-csv",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="CSV file whose time column is plotted on the axis",
)
@click.option("--time-column", default="time", show_default=True, help="Time column of --series-csv")
@click.option("--json", "as_json", is_flag=True, help="Print ticks as a JSON array")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="TIMEAXIS_LOG_LEVEL",
    show_default=True,
    help="Logging verbosity",
)
def main(option_file, series_csv, time_column, as_json, log_level):
    """timeaxis - compute the ticks of a time axis.

    OPTION_FILE is JSON holding either an axis option or a chart option with
    "xAxis" and "series".

    \b
    Examples:
        timeaxis axis.json                                # Axis option only
        timeaxis chart.json --json                        # Chart option, JSON output
        timeaxis axis.json --series-csv data.csv          # Series times from CSV
    """
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        axis_options, series = load_chart_option(option_file)
        series_times = extract_series_times(series)
        if series_csv:
            series_times.extend(load_series_csv(series_csv, time_column))
        scale = TimeScale.from_options(axis_options, [{"data": series_times}])
    except (json.JSONDecodeError, TimeAxisConfigError, KeyError) as e:
        raise click.ClickException(str(e)) from e

    ticks = scale.get_ticks()
    if as_json:
        click.echo(json.dumps([tick.to_dict() for tick in ticks], indent=2))
        return

    if not ticks:
        click.echo("Warning: axis has no ticks", err=True)
    for tick in ticks:
        click.echo(format_tick(tick))


if __name__ == "__main__":
    main()
