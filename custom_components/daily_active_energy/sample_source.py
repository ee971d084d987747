"""Sample sources feeding the aggregation core.

The core only depends on the SampleSource protocol. RecorderSampleSource
reads energy samples from Home Assistant's recorder statistics.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Literal, Protocol

from homeassistant.components.recorder import get_instance
from homeassistant.components.recorder.statistics import statistics_during_period
from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util

from .exceptions import QueryFailed, SourceUnavailable
from .models import RawSample

_LOGGER = logging.getLogger(__name__)


class SampleSource(Protocol):
    """Anything that can return raw samples for a date range."""

    async def async_query_samples(
        self, category: str, start: datetime, end: datetime
    ) -> list[RawSample]:
        """Return the samples of category whose start lies in [start, end)."""


def _as_datetime(value: Any) -> datetime:
    """Recorder rows carry float timestamps; older releases used datetimes."""
    if isinstance(value, datetime):
        return value
    return dt_util.utc_from_timestamp(float(value))


def _rows_to_samples(rows: list[dict[str, Any]]) -> list[RawSample]:
    samples: list[RawSample] = []
    for row in rows:
        change = row.get("change")
        if change is None:
            continue
        value = float(change)
        if value < 0:
            # Meter resets show up as negative change
            _LOGGER.debug("Clamping negative change %.2f at %s", value, row.get("start"))
            value = 0.0
        samples.append(
            RawSample(
                start=_as_datetime(row["start"]),
                end=_as_datetime(row["end"]),
                value=value,
            )
        )
    return samples


class RecorderSampleSource:
    """Reads energy samples from the recorder's statistics tables."""

    def __init__(self, hass: HomeAssistant) -> None:
        self.hass = hass

    def _period_for(self, end: datetime) -> Literal["5minute", "hour"]:
        """Hourly statistics for ranges ending by local midnight, 5-minute ones for today."""
        return "hour" if end <= dt_util.start_of_local_day() else "5minute"

    async def async_query_samples(
        self, category: str, start: datetime, end: datetime
    ) -> list[RawSample]:
        """Return statistic changes of category as samples in [start, end)."""
        if "recorder" not in self.hass.config.components:
            raise SourceUnavailable("Recorder integration is not loaded")

        period = self._period_for(end)
        try:
            result = await get_instance(self.hass).async_add_executor_job(
                statistics_during_period,
                self.hass,
                start,
                end,
                {category},
                period,
                None,
                {"change"},
            )
        except Exception as err:
            raise QueryFailed(category, start, end, str(err)) from err

        samples = _rows_to_samples(result.get(category, []))
        _LOGGER.debug(
            "Fetched %d %s samples for %s (%s - %s)",
            len(samples), period, category, start, end,
        )
        return samples
