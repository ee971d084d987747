"""Errors raised while computing an energy snapshot."""

from __future__ import annotations

from datetime import datetime


class ActiveEnergyError(Exception):
    """Base class for snapshot computation failures."""


class SourceUnavailable(ActiveEnergyError):
    """The sample source cannot be reached at all."""


class QueryFailed(ActiveEnergyError):
    """A single range query against the sample source errored."""

    def __init__(
        self,
        category: str,
        start: datetime,
        end: datetime,
        reason: str = "",
    ) -> None:
        self.category = category
        self.start = start
        self.end = end
        self.reason = reason
        message = f"Query for {category} between {start.isoformat()} and {end.isoformat()} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
