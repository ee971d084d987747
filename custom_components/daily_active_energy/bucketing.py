"""Pure logic for grouping raw energy samples into hourly and daily sums.

No Home Assistant dependencies — fully unit-testable.

Samples are grouped by the local calendar hour/day of their *start* time,
using the timezone of the range bounds passed in. Hours and days without any
sample are absent from the results, never zero-filled.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, tzinfo

from .models import DailyTotal, HourlyPoint, RawSample


def _to_local(ts: datetime, tz: tzinfo | None) -> datetime:
    if tz is None or ts.tzinfo is None:
        return ts
    return ts.astimezone(tz)


def local_hour_start(ts: datetime, tz: tzinfo | None = None) -> datetime:
    """Return the start of the local calendar hour containing ts."""
    return _to_local(ts, tz).replace(minute=0, second=0, microsecond=0)


def local_day_start(ts: datetime, tz: tzinfo | None = None) -> datetime:
    """Return local midnight of the calendar day containing ts."""
    return _to_local(ts, tz).replace(hour=0, minute=0, second=0, microsecond=0)


def _in_range(
    samples: Iterable[RawSample], range_start: datetime, range_end: datetime
) -> Iterable[RawSample]:
    for sample in samples:
        if range_start <= sample.start < range_end:
            yield sample


def bucket_by_hour(
    samples: Iterable[RawSample],
    range_start: datetime,
    range_end: datetime,
) -> list[HourlyPoint]:
    """Sum sample values per occupied local hour within [range_start, range_end).

    Returns:
        One HourlyPoint per hour that had at least one sample, ascending.
    """
    tz = range_start.tzinfo
    sums: dict[datetime, float] = defaultdict(float)
    for sample in _in_range(samples, range_start, range_end):
        sums[local_hour_start(sample.start, tz)] += sample.value
    return [HourlyPoint(hour_start=h, value=sums[h]) for h in sorted(sums)]


def total_by_day(
    samples: Iterable[RawSample],
    range_start: datetime,
    range_end: datetime,
) -> list[DailyTotal]:
    """Sum sample values per local day within [range_start, range_end).

    Days with no samples are excluded. A day whose samples are all 0 is kept
    with a total of 0: it reported data, it just had no activity.
    """
    tz = range_start.tzinfo
    sums: dict[datetime, float] = {}
    for sample in _in_range(samples, range_start, range_end):
        day = local_day_start(sample.start, tz)
        sums[day] = sums.get(day, 0.0) + sample.value
    return [DailyTotal(day_start=day, total=total) for day, total in sums.items()]


def hourly_sums_by_day(
    samples: Iterable[RawSample],
    range_start: datetime,
    range_end: datetime,
) -> dict[datetime, dict[int, float]]:
    """Partition samples by (local day, hour of day) and sum each cell.

    Returns:
        Mapping of local midnight -> {hour 0..23: summed value}. Only days
        and hours that had samples appear.
    """
    tz = range_start.tzinfo
    days: dict[datetime, dict[int, float]] = {}
    for sample in _in_range(samples, range_start, range_end):
        local = _to_local(sample.start, tz)
        hours = days.setdefault(local_day_start(local), {})
        hours[local.hour] = hours.get(local.hour, 0.0) + sample.value
    return days
