"""Data models for the Daily Active Energy integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RawSample:
    """A single energy measurement covering [start, end)."""

    start: datetime
    end: datetime
    value: float


@dataclass(frozen=True)
class HourlyPoint:
    """Summed sample values for one occupied local-calendar hour."""

    hour_start: datetime
    value: float


@dataclass(frozen=True)
class DailyTotal:
    """Summed sample values for one local-calendar day that reported data."""

    day_start: datetime
    total: float


@dataclass(frozen=True)
class CumulativePoint:
    """Running total at the end of an accumulation window."""

    timestamp: datetime
    value: float

    def as_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CumulativePoint:
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            value=float(data["value"]),
        )


@dataclass(frozen=True)
class TrailingAverage:
    """Result of averaging the trailing window of complete days."""

    cumulative: tuple[CumulativePoint, ...]
    projected_total: float
    days_tracked: int


@dataclass(frozen=True)
class MetricSnapshot:
    """Everything the presentation layer needs for one refresh.

    Computed fresh on each call and never mutated. ``goal`` is carried
    through for display only and takes no part in the aggregation.
    """

    computed_at: datetime
    window_days: int
    today_total: float
    average_at_current_hour: float
    projected_total: float
    today_cumulative: tuple[CumulativePoint, ...] = field(default_factory=tuple)
    average_cumulative: tuple[CumulativePoint, ...] = field(default_factory=tuple)
    days_tracked: int = 0
    goal: float | None = None

    @property
    def goal_progress(self) -> float | None:
        """Percentage of the goal reached today, or None without a goal."""
        if not self.goal or self.goal <= 0:
            return None
        return round(self.today_total / self.goal * 100, 1)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (ISO-8601 instants)."""
        return {
            "computed_at": self.computed_at.isoformat(),
            "window_days": self.window_days,
            "today_total": self.today_total,
            "average_at_current_hour": self.average_at_current_hour,
            "projected_total": self.projected_total,
            "today_cumulative": [p.as_dict() for p in self.today_cumulative],
            "average_cumulative": [p.as_dict() for p in self.average_cumulative],
            "days_tracked": self.days_tracked,
            "goal": self.goal,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetricSnapshot:
        """Rebuild a snapshot written by as_dict().

        Raises KeyError, ValueError or TypeError on malformed input.
        """
        goal = data.get("goal")
        return cls(
            computed_at=datetime.fromisoformat(data["computed_at"]),
            window_days=int(data["window_days"]),
            today_total=float(data["today_total"]),
            average_at_current_hour=float(data["average_at_current_hour"]),
            projected_total=float(data["projected_total"]),
            today_cumulative=tuple(
                CumulativePoint.from_dict(p) for p in data.get("today_cumulative", [])
            ),
            average_cumulative=tuple(
                CumulativePoint.from_dict(p) for p in data.get("average_cumulative", [])
            ),
            days_tracked=int(data.get("days_tracked", 0)),
            goal=float(goal) if goal is not None else None,
        )
