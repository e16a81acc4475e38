"""End-to-end tests for TimeScale and compute_ticks."""

import logging
import time
from datetime import datetime

import pytest

from timeaxis import TimeScale, TimeUnit, compute_ticks
from timeaxis.core.errors import InvalidExtentError, TimeAxisConfigError
from timeaxis.core.state import AxisExtent, TimeAxisOption
from timeaxis.scale.extent_filter import filter_ticks
from timeaxis.scale.interval import plan_ticks


def local_ms(*args) -> int:
    """Epoch milliseconds of a naive local datetime."""
    return int(datetime(*args).timestamp() * 1000)


def stamp(hour: int, minute: int = 0) -> str:
    """Naive local date string on 2024-01-01."""
    return f"2024-01-01 {hour:02d}:{minute:02d}:00"


def series_of(*times) -> list[dict]:
    """A single line series with one point per time."""
    return [{"type": "line", "data": [[t, i] for i, t in enumerate(times)]}]


@pytest.fixture
def morning_series():
    """Series spanning 08:00 to 12:00."""
    return series_of(*(stamp(hour) for hour in range(8, 13)))


class TestExactMode:
    """Tests for exact ticks through the full pipeline."""

    def test_ticks_are_the_data(self, morning_series):
        """Test exact ticks equal the supplied timestamps."""
        scale = TimeScale.from_options(
            {"type": "time", "useExactTicks": True, "data": [stamp(8), stamp(9), stamp(10)]},
            morning_series,
        )
        ticks = scale.get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(2024, 1, 1, h) for h in (8, 9, 10)]
        assert len(ticks) == 3

    def test_fifteen_minute_ticks(self):
        """Test quarter-hour data gives minute ticks."""
        data = [stamp(8, minute) for minute in (0, 15, 30, 45)] + [stamp(9)]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert len(ticks) == 5
        assert all(tick.time.lower_time_unit is TimeUnit.MINUTE for tick in ticks)
        assert all(tick.time.upper_time_unit is TimeUnit.HOUR for tick in ticks)

    def test_unsorted_input_sorted(self):
        """Test output is ascending whatever the input order."""
        data = [stamp(10), stamp(8), stamp(9)]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(2024, 1, 1, h) for h in (8, 9, 10)]

    def test_duplicates_collapsed(self):
        """Test equal instants in different forms give one tick."""
        data = [stamp(8), local_ms(2024, 1, 1, 8), stamp(9), stamp(9)]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(2024, 1, 1, 8), local_ms(2024, 1, 1, 9)]

    def test_value_dict_items(self):
        """Test data items wrapped as {"value": x}."""
        data = [{"value": stamp(8)}, {"value": stamp(9)}]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert len(ticks) == 2

    def test_constraints_ignored(self, morning_series):
        """Test interval options do not change exact ticks."""
        base = {"type": "time", "useExactTicks": True, "data": [stamp(8), stamp(9), stamp(10)]}
        constrained = dict(base, minInterval=86400000, maxInterval=1000, splitNumber=2)
        assert (
            TimeScale.from_options(base, morning_series).get_ticks()
            == TimeScale.from_options(constrained, morning_series).get_ticks()
        )

    def test_numeric_epochs_pass_through(self):
        """Test numeric epochs are used without conversion."""
        now = int(time.time() * 1000)
        data = [now, now + 60000]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert [tick.value for tick in ticks] == data

    def test_unparseable_values_dropped(self):
        """Test bad entries are skipped."""
        data = ["bogus", stamp(8), None, stamp(9)]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(2024, 1, 1, 8), local_ms(2024, 1, 1, 9)]


class TestCalendarRange:
    """Tests for instants outside the nanosecond Timestamp range."""

    def test_numeric_epochs_past_2262(self):
        """Test far-future epochs pass through unchanged."""
        data = [local_ms(2300, 1, 1) + hour * 3600000 for hour in range(3)]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert [tick.value for tick in ticks] == data

    def test_strings_past_2262(self):
        """Test far-future date strings become ticks."""
        data = ["2300-01-01 08:00:00", "2300-01-01 09:00:00"]
        ticks = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": data}).get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(2300, 1, 1, 8), local_ms(2300, 1, 1, 9)]

    def test_automatic_ticks_before_1677(self):
        """Test automatic ticks for an extent starting in 1678."""
        options = {"type": "time", "min": local_ms(1678, 6, 1), "max": local_ms(1700, 1, 1)}
        ticks = TimeScale.from_options(options).get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(year, 1, 1) for year in range(1680, 1701, 5)]

    def test_relative_strings_idempotent(self):
        """Test "now" is dropped so repeated calls agree."""
        scale = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": ["now", "2024-01-01"]})
        first = scale.get_ticks()
        time.sleep(0.01)
        assert scale.get_ticks() == first
        assert [tick.value for tick in first] == [local_ms(2024, 1, 1)]


class TestFallback:
    """Tests for exact mode falling back to automatic intervals."""

    def test_empty_data_uses_automatic(self, morning_series):
        """Test empty exact data yields the automatic ticks."""
        scale = TimeScale.from_options({"type": "time", "useExactTicks": True, "data": []}, morning_series)
        ticks = scale.get_ticks()
        assert ticks
        extent = scale.get_extent()
        assert ticks == filter_ticks(plan_ticks(extent, scale.option.constraints), extent)

    def test_empty_data_hourly_ticks(self, morning_series):
        """Test the fallback over 08:00-12:00 gives hourly ticks."""
        ticks = TimeScale.from_options(
            {"type": "time", "useExactTicks": True, "data": []}, morning_series
        ).get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(2024, 1, 1, h) for h in range(8, 13)]
        assert ticks[0].time.lower_time_unit is TimeUnit.HOUR

    def test_all_unparseable_uses_automatic(self, morning_series):
        """Test exact data that fails to parse is treated as empty."""
        exact = TimeScale.from_options(
            {"type": "time", "useExactTicks": True, "data": ["x", "y"]}, morning_series
        ).get_ticks()
        automatic = TimeScale.from_options({"type": "time"}, morning_series).get_ticks()
        assert exact == automatic


class TestAutomaticMode:
    """Tests for the default automatic mode."""

    def test_default_non_empty(self, morning_series):
        """Test the default mode produces ticks."""
        assert TimeScale.from_options({"type": "time"}, morning_series).get_ticks()

    def test_ascending(self, morning_series):
        """Test automatic ticks are non-decreasing."""
        values = [tick.value for tick in TimeScale.from_options({"type": "time"}, morning_series).get_ticks()]
        assert values == sorted(values)

    def test_disabled_exact_data_not_in_extent(self, morning_series):
        """Test axis data is ignored while exact mode is off."""
        scale = TimeScale.from_options({"type": "time", "data": [stamp(0)]}, morning_series)
        assert scale.get_extent() == AxisExtent(min=local_ms(2024, 1, 1, 8), max=local_ms(2024, 1, 1, 12))

    def test_split_number(self, morning_series):
        """Test a larger split number gives more ticks."""
        few = TimeScale.from_options({"type": "time", "splitNumber": 3}, morning_series).get_ticks()
        many = TimeScale.from_options({"type": "time", "splitNumber": 10}, morning_series).get_ticks()
        assert len(many) > len(few)


class TestExtentFiltering:
    """Tests for clipping to configured bounds."""

    def test_bounds_clip_exact_ticks(self):
        """Test ticks 07..11 with min 08 and max 10 give 08, 09, 10."""
        options = {
            "type": "time",
            "useExactTicks": True,
            "data": [stamp(hour) for hour in range(7, 12)],
            "min": stamp(8),
            "max": stamp(10),
        }
        ticks = TimeScale.from_options(options).get_ticks()
        assert [tick.value for tick in ticks] == [local_ms(2024, 1, 1, h) for h in (8, 9, 10)]

    def test_automatic_ticks_inside_bounds(self):
        """Test automatic ticks never leave the extent."""
        options = {"type": "time", "min": stamp(8, 7), "max": stamp(8, 58)}
        ticks = TimeScale.from_options(options).get_ticks()
        assert all(local_ms(2024, 1, 1, 8, 7) <= tick.value <= local_ms(2024, 1, 1, 8, 58) for tick in ticks)
        assert [tick.value for tick in ticks] == [local_ms(2024, 1, 1, 8, m) for m in (15, 30, 45)]


class TestTickShape:
    """Tests for tick metadata."""

    @pytest.mark.parametrize("exact", [True, False])
    def test_every_tick_has_metadata(self, exact, morning_series):
        """Test value, level, upper and lower on every tick in both modes."""
        options = {"type": "time", "useExactTicks": exact, "data": [stamp(8), stamp(10)]}
        ticks = TimeScale.from_options(options, morning_series).get_ticks()
        assert ticks
        for tick in ticks:
            data = tick.to_dict()
            assert isinstance(data["value"], int)
            assert set(data["time"]) == {"level", "upperTimeUnit", "lowerTimeUnit"}
            assert tick.time.upper_time_unit >= tick.time.lower_time_unit


class TestTimeScale:
    """Tests for the TimeScale wrapper."""

    def test_empty_axis(self):
        """Test no data and no bounds give no ticks."""
        assert TimeScale.from_options({"type": "time"}).get_ticks() == []
        assert TimeScale.from_options({"type": "time"}).get_extent() is None

    def test_idempotent(self, morning_series):
        """Test repeated calls give equal results."""
        scale = TimeScale.from_options({"type": "time"}, morning_series)
        assert scale.get_ticks() == scale.get_ticks()

    def test_with_option_returns_new_scale(self, morning_series):
        """Test replacing the option leaves the original scale alone."""
        scale = TimeScale.from_options({"type": "time"}, morning_series)
        before = scale.get_ticks()
        exact = scale.with_option(TimeAxisOption.from_dict({"useExactTicks": True, "data": [stamp(9)]}))
        assert exact is not scale
        assert scale.get_ticks() == before
        assert [tick.value for tick in exact.get_ticks()] == [local_ms(2024, 1, 1, 9)]

    def test_with_series(self):
        """Test replacing the data gives a new extent."""
        scale = TimeScale(TimeAxisOption())
        assert scale.with_series([0, 1000]).get_extent() == AxisExtent(min=0, max=1000)
        assert scale.get_extent() is None

    def test_compute_ticks_matches_scale(self, morning_series):
        """Test the function and the wrapper agree."""
        scale = TimeScale.from_options({"type": "time"}, morning_series)
        assert compute_ticks(scale.option, scale.series_times) == scale.get_ticks()

    def test_errors_logged_not_raised(self, monkeypatch, caplog, morning_series):
        """Test pipeline errors become an empty tick list."""

        def broken(*args, **kwargs):
            raise InvalidExtentError("broken extent")

        monkeypatch.setattr("timeaxis.scale.time_scale.compute_ticks", broken)
        scale = TimeScale.from_options({"type": "time"}, morning_series)
        with caplog.at_level(logging.ERROR):
            assert scale.get_ticks() == []
        assert "broken extent" in caplog.text

    def test_non_time_axis_rejected(self):
        """Test non-time axis options raise."""
        with pytest.raises(TimeAxisConfigError):
            TimeScale.from_options({"type": "value"})
