"""JSON-based persistent storage for Daily Active Energy.

Keeps the most recent snapshot in HA's .storage directory so it survives
restarts and can be read by other processes (e.g. a dashboard exporter).
"""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .const import DOMAIN, SNAPSHOT_SAVE_DELAY_SECONDS
from .models import MetricSnapshot

_LOGGER = logging.getLogger(__name__)

STORAGE_VERSION = 1
STORAGE_KEY_PREFIX = DOMAIN


def _default_data() -> dict[str, Any]:
    """Return default storage data."""
    return {
        "last_snapshot": None,
    }


class ActiveEnergyStore:
    """Manages persistent storage for the integration."""

    def __init__(self, hass: HomeAssistant, entry_id: str) -> None:
        self._store = Store(
            hass,
            STORAGE_VERSION,
            f"{STORAGE_KEY_PREFIX}.{entry_id}",
        )
        self._data: dict[str, Any] = _default_data()

    async def async_load(self) -> None:
        """Load data from storage."""
        stored = await self._store.async_load()
        if stored:
            self._data = {**_default_data(), **stored}
        else:
            self._data = _default_data()
        _LOGGER.debug("Loaded storage data: %s entries", len(self._data))

    async def async_save(self) -> None:
        """Save data to storage."""
        await self._store.async_save(self._data)

    # --- Last Snapshot ---

    @property
    def last_snapshot(self) -> MetricSnapshot | None:
        """Return the last persisted snapshot, or None if missing or unreadable."""
        data = self._data.get("last_snapshot")
        if not data:
            return None
        try:
            return MetricSnapshot.from_dict(data)
        except (KeyError, ValueError, TypeError):
            _LOGGER.warning("Could not restore snapshot from storage: %s", data)
            return None

    def async_set_last_snapshot(self, snapshot: MetricSnapshot) -> None:
        """Remember the snapshot and schedule a delayed write."""
        self._data["last_snapshot"] = snapshot.as_dict()
        self._store.async_delay_save(lambda: self._data, SNAPSHOT_SAVE_DELAY_SECONDS)

    async def async_remove(self) -> None:
        """Remove the storage file."""
        await self._store.async_remove()
