"""Composes today's series and the trailing-window average into a snapshot.

Pure orchestration. The only suspension points are the sample source
queries, everything else is synchronous arithmetic.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from .averager import CrossDayAverager
from .bucketing import bucket_by_hour, local_day_start
from .cumulative import build_cumulative, interpolate_at, value_at_hour
from .exceptions import ActiveEnergyError, QueryFailed
from .models import CumulativePoint, MetricSnapshot, RawSample, TrailingAverage

if TYPE_CHECKING:
    from .sample_source import SampleSource

_LOGGER = logging.getLogger(__name__)


class MetricOrchestrator:
    """Computes MetricSnapshots for one energy category.

    Holds no state between calls; two calls with the same inputs against an
    unchanged source return equal snapshots.
    """

    def __init__(
        self,
        source: SampleSource,
        category: str,
        interpolate: bool = False,
    ) -> None:
        self._source = source
        self._category = category
        self._interpolate = interpolate

    @property
    def category(self) -> str:
        return self._category

    @property
    def interpolate(self) -> bool:
        """Whether the current-hour average is interpolated within the hour."""
        return self._interpolate

    async def _async_fetch(self, start: datetime, end: datetime) -> list[RawSample]:
        """Query the source, surfacing every failure as a typed error."""
        try:
            return list(await self._source.async_query_samples(self._category, start, end))
        except ActiveEnergyError:
            raise
        except Exception as err:
            raise QueryFailed(self._category, start, end, str(err)) from err

    async def async_today(self, now: datetime) -> list[CumulativePoint]:
        """Return today's cumulative series from local midnight up to now."""
        today_start = local_day_start(now)
        samples = await self._async_fetch(today_start, now)
        hourly = bucket_by_hour(samples, today_start, now)
        return build_cumulative(hourly, today_start, until=now)

    async def async_trailing_average(
        self, now: datetime, window_days: int
    ) -> TrailingAverage:
        """Return the average pattern and projected total of the complete days before today."""
        averager = CrossDayAverager(window_days)
        today_start = local_day_start(now)
        start, end = averager.window(today_start)
        # One query for the whole window, not one per day
        samples = await self._async_fetch(start, end)
        return averager.compute(samples, today_start)

    def average_at(self, series: Sequence[CumulativePoint], now: datetime) -> float:
        """Read the average series at now, exact hour or interpolated."""
        if self._interpolate:
            return interpolate_at(series, now)
        return value_at_hour(series, now.hour)

    async def async_compute_snapshot(
        self,
        now: datetime,
        window_days: int,
        goal: float | None = None,
    ) -> MetricSnapshot:
        """Compute a fresh snapshot for now.

        Today and the trailing window are fetched concurrently. A failure in
        either one fails the whole snapshot.

        Raises:
            SourceUnavailable: The source could not be reached.
            QueryFailed: A range query errored.
        """
        today, trailing = await asyncio.gather(
            self.async_today(now),
            self.async_trailing_average(now, window_days),
        )

        snapshot = MetricSnapshot(
            computed_at=now,
            window_days=window_days,
            today_total=today[-1].value,
            average_at_current_hour=self.average_at(trailing.cumulative, now),
            projected_total=trailing.projected_total,
            today_cumulative=tuple(today),
            average_cumulative=trailing.cumulative,
            days_tracked=trailing.days_tracked,
            goal=goal,
        )
        _LOGGER.debug(
            "Snapshot for %s: today=%.1f, average now=%.1f, projected=%.1f (%d days)",
            self._category,
            snapshot.today_total,
            snapshot.average_at_current_hour,
            snapshot.projected_total,
            snapshot.days_tracked,
        )
        return snapshot
