"""Pure logic for running-total series and lookups on them.

No Home Assistant dependencies — fully unit-testable.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from .models import CumulativePoint, HourlyPoint

BUCKET_WIDTH = timedelta(hours=1)


def build_cumulative(
    buckets: Iterable[HourlyPoint],
    anchor: datetime,
    until: datetime | None = None,
    width: timedelta = BUCKET_WIDTH,
) -> list[CumulativePoint]:
    """Turn ordered bucket sums into a running-total series.

    Each bucket is plotted at the *end* of its window (bucket start + width),
    so energy recorded 00:00-01:00 shows up at 01:00.

    Args:
        buckets: Bucket sums, ascending by start.
        anchor: Start of the period; becomes the leading zero point.
        until: If given, bucket ends later than this are clamped to it
            (used for the hour still in progress).
        width: Bucket width, one hour by default.

    Returns:
        Series starting with (anchor, 0). Empty input gives just the anchor.
    """
    series = [CumulativePoint(timestamp=anchor, value=0.0)]
    running = 0.0
    for bucket in buckets:
        running += bucket.value
        end = bucket.hour_start + width
        if until is not None and end > until:
            end = until
        series.append(CumulativePoint(timestamp=end, value=running))
    return series


def value_at_hour(series: Sequence[CumulativePoint], hour: int) -> float:
    """Return the first point whose local hour equals hour, else 0.0."""
    for point in series:
        if point.timestamp.hour == hour:
            return point.value
    return 0.0


def interpolate_at(series: Sequence[CumulativePoint], now: datetime) -> float:
    """Linearly interpolate the series between now's hour and the next one.

    Falls back to the value at now's hour when there is no point one hour
    later (e.g. the series holds only its anchor).
    """
    hour_start = now.replace(minute=0, second=0, microsecond=0)
    next_hour = hour_start + BUCKET_WIDTH
    current = value_at_hour(series, now.hour)
    upcoming = next((p.value for p in series if p.timestamp == next_hour), None)
    if upcoming is None:
        return current
    fraction = (now.minute + now.second / 60) / 60
    return current + (upcoming - current) * fraction
