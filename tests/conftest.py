"""Shared test fixtures for Daily Active Energy tests.

HA modules are replaced with mocks before the integration package is
imported, so the pure logic modules can be tested without a HA install.
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest

for mod_name in [
    "homeassistant",
    "homeassistant.core",
    "homeassistant.config_entries",
    "homeassistant.helpers",
    "homeassistant.helpers.update_coordinator",
    "homeassistant.helpers.storage",
    "homeassistant.helpers.entity_platform",
    "homeassistant.helpers.selector",
    "homeassistant.helpers.event",
    "homeassistant.components",
    "homeassistant.components.sensor",
    "homeassistant.components.number",
    "homeassistant.components.recorder",
    "homeassistant.components.recorder.statistics",
    "homeassistant.data_entry_flow",
    "homeassistant.util",
    "homeassistant.util.dt",
    "voluptuous",
]:
    sys.modules.setdefault(mod_name, MagicMock())

_COMPONENTS_DIR = Path(__file__).parent.parent / "custom_components"
sys.path.insert(0, str(_COMPONENTS_DIR))

from daily_active_energy.models import RawSample

# Fixed UTC+1 zone keeps tests independent of the machine's local time
TZ = timezone(timedelta(hours=1))

# Fixed test day: Wednesday 2026-02-25
TODAY = datetime(2026, 2, 25, tzinfo=TZ)


def at(day_offset: int, hour: int, minute: int = 0) -> datetime:
    """Return TODAY + day_offset days at hour:minute local time."""
    return TODAY + timedelta(days=day_offset, hours=hour, minutes=minute)


def sample(start: datetime, value: float, minutes: int = 60) -> RawSample:
    """Build a sample of value covering minutes from start."""
    return RawSample(start=start, end=start + timedelta(minutes=minutes), value=value)


class FakeSampleSource:
    """In-memory SampleSource that records every query it receives."""

    def __init__(self, samples: list[RawSample] | None = None) -> None:
        self.samples = list(samples or [])
        self.queries: list[tuple[str, datetime, datetime]] = []
        self.error: Exception | None = None

    async def async_query_samples(
        self, category: str, start: datetime, end: datetime
    ) -> list[RawSample]:
        self.queries.append((category, start, end))
        if self.error is not None:
            raise self.error
        return [s for s in self.samples if start <= s.start < end]


@pytest.fixture
def source() -> FakeSampleSource:
    """Return an empty fake sample source."""
    return FakeSampleSource()
