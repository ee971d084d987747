"""Tests for CrossDayAverager — pure logic, no HA deps."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from conftest import at, sample
from daily_active_energy import averager as _averager_mod
from daily_active_energy.averager import CrossDayAverager


@pytest.fixture
def averager() -> CrossDayAverager:
    """Return an averager over a 7-day window."""
    return CrossDayAverager(window_days=7)


class TestWindow:
    """Test window bounds."""

    def test_excludes_today(self, averager: CrossDayAverager):
        assert averager.window(at(0, 0)) == (at(-7, 0), at(0, 0))

    def test_custom_size(self):
        assert CrossDayAverager(window_days=2).window(at(0, 0)) == (at(-2, 0), at(0, 0))

    def test_rejects_empty_window(self):
        with pytest.raises(ValueError):
            CrossDayAverager(window_days=0)


class TestDailyCumulative:
    """Test per-day 24-slot cumulative arrays."""

    def test_running_sum_across_empty_hours(self, averager: CrossDayAverager):
        samples = [sample(at(-1, 2), 10.0), sample(at(-1, 5), 30.0)]
        result = averager.daily_cumulative(samples, at(-7, 0), at(0, 0))
        cumulative = result[at(-1, 0)]
        assert len(cumulative) == 24
        assert cumulative[:2] == [0.0, 0.0]
        assert cumulative[2:5] == [10.0, 10.0, 10.0]
        assert cumulative[5] == 40.0
        assert cumulative[23] == 40.0

    def test_only_days_with_data(self, averager: CrossDayAverager):
        samples = [sample(at(-6, 8), 1.0), sample(at(-2, 8), 1.0)]
        result = averager.daily_cumulative(samples, at(-7, 0), at(0, 0))
        assert set(result) == {at(-6, 0), at(-2, 0)}


class TestHourlyAverage:
    """Test the per-hour qualifying-day average."""

    def test_non_overlapping_days(self, averager: CrossDayAverager):
        """Morning-only day A and afternoon-only day B never drag each other down."""
        day_a = [sample(at(-2, h), 10.0) for h in range(0, 6)]     # hours 0-5
        day_b = [sample(at(-1, h), 30.0) for h in range(10, 16)]   # hours 10-15
        averages = averager.hourly_average(day_a + day_b, at(-7, 0), at(0, 0))

        # Hour 2: only A has activity -> A's cumulative (3 hours * 10)
        assert averages[2] == pytest.approx(30.0)
        # Hour 12: A stopped reporting after hour 5 -> B's cumulative alone (3 * 30)
        assert averages[12] == pytest.approx(90.0)

    def test_after_every_days_last_sample(self, averager: CrossDayAverager):
        day_a = [sample(at(-2, h), 10.0) for h in range(0, 6)]
        day_b = [sample(at(-1, h), 30.0) for h in range(10, 16)]
        averages = averager.hourly_average(day_a + day_b, at(-7, 0), at(0, 0))
        assert averages[15] == pytest.approx(180.0)
        assert averages[16:] == [0.0] * 8

    def test_gap_before_later_data_keeps_day_present(self, averager: CrossDayAverager):
        """Empty hours count as present when the day reports again later."""
        samples = [sample(at(-1, 2), 10.0), sample(at(-1, 9), 5.0)]
        averages = averager.hourly_average(samples, at(-7, 0), at(0, 0))
        assert averages[1] == 0.0
        assert averages[5] == pytest.approx(10.0)
        assert averages[9] == pytest.approx(15.0)
        assert averages[10] == 0.0

    def test_hour_before_any_activity(self, averager: CrossDayAverager):
        day_b = [sample(at(-1, h), 20.0) for h in range(10, 16)]
        averages = averager.hourly_average(day_b, at(-7, 0), at(0, 0))
        assert averages[2] == 0.0
        assert averages[12] == pytest.approx(60.0)

    def test_days_overlapping_at_hour(self, averager: CrossDayAverager):
        day_a = [sample(at(-3, 1), 5.0), sample(at(-3, 20), 15.0)]
        day_b = [sample(at(-1, 12), 80.0)]
        averages = averager.hourly_average(day_a + day_b, at(-7, 0), at(0, 0))
        assert averages[1] == 5.0
        assert averages[12] == pytest.approx((5.0 + 80.0) / 2)
        # B stopped at hour 12
        assert averages[20] == pytest.approx(20.0)

    def test_missing_days_not_counted_as_zero(self, averager: CrossDayAverager):
        """Seven-day window with data on only two days averages over two."""
        samples = [sample(at(-5, 0), 50.0), sample(at(-1, 0), 70.0)]
        averages = averager.hourly_average(samples, at(-7, 0), at(0, 0))
        assert averages[0] == pytest.approx(60.0)

    def test_no_data(self, averager: CrossDayAverager):
        assert averager.hourly_average([], at(-7, 0), at(0, 0)) == [0.0] * 24


class TestAverageCumulative:
    """Test the plotted average series."""

    def test_anchor_only_without_data(self, averager: CrossDayAverager):
        series = averager.average_cumulative([], at(-7, 0), at(0, 0), at(0, 0))
        assert [(p.timestamp, p.value) for p in series] == [(at(0, 0), 0.0)]

    def test_anchor_only_with_zero_valued_samples(self, averager: CrossDayAverager):
        samples = [sample(at(-1, 9), 0.0)]
        series = averager.average_cumulative(samples, at(-7, 0), at(0, 0), at(0, 0))
        assert len(series) == 1

    def test_plotted_at_end_of_hour_on_today(self, averager: CrossDayAverager):
        samples = [sample(at(-2, 0), 50.0), sample(at(-1, 0), 70.0)]
        series = averager.average_cumulative(samples, at(-7, 0), at(0, 0), at(0, 0))
        assert len(series) == 25
        assert series[0].timestamp == at(0, 0)
        assert series[0].value == 0.0
        assert series[1].timestamp == at(0, 1)
        assert series[1].value == pytest.approx(60.0)
        assert series[24].timestamp == at(1, 0)


class TestProjectedTotal:
    """Test the mean of complete daily totals."""

    def test_mean_of_days_with_data(self, averager: CrossDayAverager):
        samples = [
            sample(at(-4, 8), 400.0),
            sample(at(-4, 18), 200.0),
            sample(at(-1, 12), 300.0),
        ]
        assert averager.projected_total(samples, at(-7, 0), at(0, 0)) == pytest.approx(450.0)

    def test_empty_is_zero(self, averager: CrossDayAverager):
        assert averager.projected_total([], at(-7, 0), at(0, 0)) == 0.0

    def test_differs_from_average_series(self, averager: CrossDayAverager):
        """A day that reported only zeros counts for the total but never qualifies hourly."""
        samples = [sample(at(-2, 9), 0.0), sample(at(-1, 9), 100.0)]
        series = averager.average_cumulative(samples, at(-7, 0), at(0, 0), at(0, 0))
        assert averager.projected_total(samples, at(-7, 0), at(0, 0)) == pytest.approx(50.0)
        assert series[10].value == pytest.approx(100.0)


class TestCompute:
    """Test the combined result."""

    def test_two_day_example(self):
        averager = CrossDayAverager(window_days=2)
        samples = [sample(at(-2, 0), 50.0), sample(at(-1, 0), 70.0)]
        result = averager.compute(samples, at(0, 0))
        assert result.cumulative[1].timestamp == at(0, 1)
        assert result.cumulative[1].value == pytest.approx(60.0)
        assert result.projected_total == pytest.approx(60.0)
        assert result.days_tracked == 2

    def test_ignores_today_and_older_days(self):
        averager = CrossDayAverager(window_days=2)
        samples = [
            sample(at(-3, 0), 999.0),   # outside window
            sample(at(-1, 0), 70.0),
            sample(at(0, 0), 999.0),    # today
        ]
        result = averager.compute(samples, at(0, 0))
        assert result.projected_total == pytest.approx(70.0)
        assert result.days_tracked == 1

    def test_daily_totals_computed_once(self):
        averager = CrossDayAverager(window_days=3)
        samples = [sample(at(-3, 8), 200.0), sample(at(-1, 8), 400.0)]
        with patch.object(_averager_mod, "total_by_day", wraps=_averager_mod.total_by_day) as spy:
            result = averager.compute(samples, at(0, 0))
        assert spy.call_count == 1
        assert result.projected_total == pytest.approx(300.0)
        assert result.days_tracked == 2
