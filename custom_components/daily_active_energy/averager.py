"""Pure logic for the cross-day average over a trailing window.

No Home Assistant dependencies — fully unit-testable.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from .bucketing import hourly_sums_by_day, total_by_day
from .models import CumulativePoint, DailyTotal, RawSample, TrailingAverage

HOURS_PER_DAY = 24


class CrossDayAverager:
    """Averages complete days in a sliding window of window_days.

    A day counts toward the average at hour h only while it is present at h:
    it has nonzero cumulative energy by h and reported data at h or some
    later hour. Only days that reported any sample count toward the
    projected total. Days without data are never treated as 0.
    """

    def __init__(self, window_days: int = 7) -> None:
        if window_days < 1:
            raise ValueError(f"window_days must be at least 1, got {window_days}")
        self._window_days = window_days

    @property
    def window_days(self) -> int:
        """Return the window size."""
        return self._window_days

    def window(self, today_start: datetime) -> tuple[datetime, datetime]:
        """Return [start, end) covering the complete days before today_start."""
        return today_start - timedelta(days=self._window_days), today_start

    def _day_profiles(
        self,
        samples: Iterable[RawSample],
        range_start: datetime,
        range_end: datetime,
    ) -> dict[datetime, tuple[list[float], int]]:
        """Map each day with data to its cumulative array and last reporting hour."""
        profiles: dict[datetime, tuple[list[float], int]] = {}
        for day, hours in hourly_sums_by_day(samples, range_start, range_end).items():
            running = 0.0
            cumulative = []
            for hour in range(HOURS_PER_DAY):
                running += hours.get(hour, 0.0)
                cumulative.append(running)
            profiles[day] = (cumulative, max(hours))
        return profiles

    def daily_cumulative(
        self,
        samples: Iterable[RawSample],
        range_start: datetime,
        range_end: datetime,
    ) -> dict[datetime, list[float]]:
        """Build a 24-slot cumulative-by-hour array for each day with data."""
        return {
            day: cumulative
            for day, (cumulative, _) in self._day_profiles(
                samples, range_start, range_end
            ).items()
        }

    def hourly_average(
        self,
        samples: Iterable[RawSample],
        range_start: datetime,
        range_end: datetime,
    ) -> list[float]:
        """Average cumulative value per hour of day over the days present at that hour.

        Returns:
            24 values; 0.0 where no day qualifies at that hour, including
            hours after every day's last sample.
        """
        profiles = self._day_profiles(samples, range_start, range_end).values()
        averages = []
        for hour in range(HOURS_PER_DAY):
            values = [
                cumulative[hour]
                for cumulative, last_hour in profiles
                if hour <= last_hour and cumulative[hour] > 0
            ]
            averages.append(sum(values) / len(values) if values else 0.0)
        return averages

    def average_cumulative(
        self,
        samples: Iterable[RawSample],
        range_start: datetime,
        range_end: datetime,
        anchor: datetime,
    ) -> list[CumulativePoint]:
        """Return the average pattern as a series plotted from anchor.

        Hour h's average sits at anchor + h + 1 hours. Each value averages
        only the days present at that hour, so the series drops back to 0
        after the last hour any day reported data. When no hour has a
        qualifying day the series is just the (anchor, 0) point.
        """
        averages = self.hourly_average(samples, range_start, range_end)
        series = [CumulativePoint(timestamp=anchor, value=0.0)]
        if not any(averages):
            return series
        for hour, value in enumerate(averages):
            series.append(
                CumulativePoint(timestamp=anchor + timedelta(hours=hour + 1), value=value)
            )
        return series

    @staticmethod
    def _mean_total(totals: list[DailyTotal]) -> float:
        if not totals:
            return 0.0
        return sum(t.total for t in totals) / len(totals)

    def projected_total(
        self,
        samples: Iterable[RawSample],
        range_start: datetime,
        range_end: datetime,
    ) -> float:
        """Mean of the daily totals of days that reported data, else 0.0."""
        return self._mean_total(total_by_day(samples, range_start, range_end))

    def compute(
        self,
        samples: Iterable[RawSample],
        today_start: datetime,
    ) -> TrailingAverage:
        """Average the window ending at today_start from one batch of samples."""
        samples = list(samples)
        range_start, range_end = self.window(today_start)
        totals = total_by_day(samples, range_start, range_end)
        return TrailingAverage(
            cumulative=tuple(
                self.average_cumulative(samples, range_start, range_end, today_start)
            ),
            projected_total=self._mean_total(totals),
            days_tracked=len(totals),
        )
