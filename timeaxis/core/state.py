"""Immutable value types shared by the tick pipeline.

Every computation reads a snapshot built from these types and returns fresh
tick lists. Nothing here is mutated after construction: a changed option or
data set produces a new snapshot.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from timeaxis.core.errors import InvalidExtentError, TimeAxisConfigError
from timeaxis.core.units import TimeUnit, coarseness_level

# A bound may be a time value, "dataMin"/"dataMax", or a callable of the data extent
BoundSpec = Union[int, float, str, Callable[[dict], Any], None]


@dataclass(frozen=True)
class TimeLevel:
    """Granularity metadata used by label formatting.

    Attributes:
        level: Index of lower_time_unit in the coarsest-first unit ladder
        upper_time_unit: Unit giving primary label context (e.g. day for hour ticks)
        lower_time_unit: Unit of the tick spacing itself
    """

    level: int
    upper_time_unit: TimeUnit
    lower_time_unit: TimeUnit

    def __post_init__(self):
        if self.upper_time_unit < self.lower_time_unit:
            raise ValueError(
                f"upper_time_unit {self.upper_time_unit.value} is finer than "
                f"lower_time_unit {self.lower_time_unit.value}"
            )

    @classmethod
    def for_units(cls, lower: TimeUnit, upper: TimeUnit) -> "TimeLevel":
        """Build a TimeLevel whose level is derived from the lower unit."""
        return cls(level=coarseness_level(lower), upper_time_unit=upper, lower_time_unit=lower)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "upperTimeUnit": self.upper_time_unit.value,
            "lowerTimeUnit": self.lower_time_unit.value,
        }


@dataclass(frozen=True)
class Tick:
    """A single labeled reference point on a time axis."""

    value: int
    time: TimeLevel

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "time": self.time.to_dict()}


@dataclass(frozen=True)
class AxisExtent:
    """Inclusive [min, max] time range displayed by an axis (epoch ms)."""

    min: int
    max: int

    def __post_init__(self):
        if self.min > self.max:
            raise InvalidExtentError(f"extent min {self.min} is greater than max {self.max}")

    @property
    def span(self) -> int:
        """Duration covered by the extent in milliseconds."""
        return self.max - self.min


@dataclass(frozen=True)
class ExactTicksConfig:
    """Caller-supplied tick positions, used verbatim when enabled."""

    enabled: bool = False
    raw_values: tuple = ()


@dataclass(frozen=True)
class IntervalConstraints:
    """Limits on automatic tick spacing (durations in ms)."""

    min_interval: Optional[float] = None
    max_interval: Optional[float] = None
    split_number: Optional[int] = None


def _optional_number(options: Mapping, key: str) -> Optional[float]:
    value = options.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TimeAxisConfigError(f"{key} must be a number, got {value!r}")
    return value


def _optional_flag(options: Mapping, key: str) -> bool:
    value = options.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TimeAxisConfigError(f"{key} must be a boolean, got {value!r}")
    return value


def _data_item(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("value")
    return item


@dataclass(frozen=True)
class TimeAxisOption:
    """Snapshot of one time axis configuration.

    Example usage:
        option = TimeAxisOption.from_dict({
            "type": "time",
            "useExactTicks": True,
            "data": ["2024-01-01 08:00:00", "2024-01-01 09:00:00"],
        })
    """

    min: BoundSpec = None
    max: BoundSpec = None
    exact_ticks: ExactTicksConfig = field(default_factory=ExactTicksConfig)
    constraints: IntervalConstraints = field(default_factory=IntervalConstraints)

    @classmethod
    def from_dict(cls, options: Mapping) -> "TimeAxisOption":
        """Read chart-style axis keys (useExactTicks, splitNumber, ...).

        Args:
            options: Axis option mapping with ``type: "time"``

        Returns:
            TimeAxisOption snapshot

        Raises:
            TimeAxisConfigError: If the mapping is not a time axis or a
                numeric or boolean option has the wrong type
        """
        axis_type = options.get("type", "time")
        if axis_type != "time":
            raise TimeAxisConfigError(f"expected a time axis, got type {axis_type!r}")

        data = options.get("data")
        if data is None:
            data = ()
        if isinstance(data, (str, bytes)) or not hasattr(data, "__iter__"):
            raise TimeAxisConfigError(f"data must be a sequence, got {data!r}")

        split_number = _optional_number(options, "splitNumber")
        return cls(
            min=options.get("min"),
            max=options.get("max"),
            exact_ticks=ExactTicksConfig(
                enabled=_optional_flag(options, "useExactTicks"),
                raw_values=tuple(_data_item(item) for item in data),
            ),
            constraints=IntervalConstraints(
                min_interval=_optional_number(options, "minInterval"),
                max_interval=_optional_number(options, "maxInterval"),
                split_number=int(split_number) if split_number is not None else None,
            ),
        )
