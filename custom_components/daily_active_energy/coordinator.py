"""DataUpdateCoordinator for Daily Active Energy.

Owns the snapshot orchestrator and publishes a fresh MetricSnapshot on
every refresh.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from .const import (
    CONF_DAILY_GOAL,
    CONF_ENERGY_SENSOR,
    CONF_GOAL_SENSOR,
    CONF_INTERPOLATE_AVERAGE,
    CONF_WINDOW_DAYS,
    DEFAULT_DAILY_GOAL,
    DEFAULT_INTERPOLATE_AVERAGE,
    DEFAULT_UNIT,
    DEFAULT_WINDOW_DAYS,
    DOMAIN,
    UPDATE_INTERVAL_SECONDS,
)
from .exceptions import ActiveEnergyError
from .models import MetricSnapshot
from .orchestrator import MetricOrchestrator
from .sample_source import RecorderSampleSource
from .storage import ActiveEnergyStore

_LOGGER = logging.getLogger(__name__)


class ActiveEnergyCoordinator(DataUpdateCoordinator[MetricSnapshot]):
    """Coordinator that recomputes the energy snapshot."""

    config_entry: ConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry,
        store: ActiveEnergyStore,
    ) -> None:
        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            update_interval=timedelta(seconds=UPDATE_INTERVAL_SECONDS),
        )
        self.entry = entry
        self.store = store
        self.orchestrator = MetricOrchestrator(
            RecorderSampleSource(hass),
            self.energy_sensor,
            interpolate=self.interpolate_average,
        )

    def _opt(self, key: str, default: Any) -> Any:
        """Get a config value, preferring options over data."""
        return self.entry.options.get(key, self.entry.data.get(key, default))

    def _update_option(self, key: str, value: Any) -> None:
        """Update a single option in the config entry."""
        new_options = {**self.entry.options, key: value}
        self.hass.config_entries.async_update_entry(self.entry, options=new_options)

    # --- Config accessors (live, re-read each cycle) ---

    @property
    def energy_sensor(self) -> str:
        return str(self.entry.data.get(CONF_ENERGY_SENSOR, ""))

    @property
    def window_days(self) -> int:
        return int(self._opt(CONF_WINDOW_DAYS, DEFAULT_WINDOW_DAYS))

    @property
    def interpolate_average(self) -> bool:
        return bool(self._opt(CONF_INTERPOLATE_AVERAGE, DEFAULT_INTERPOLATE_AVERAGE))

    @property
    def daily_goal(self) -> float:
        return float(self._opt(CONF_DAILY_GOAL, DEFAULT_DAILY_GOAL))

    @daily_goal.setter
    def daily_goal(self, value: float) -> None:
        self._update_option(CONF_DAILY_GOAL, value)

    @property
    def unit(self) -> str:
        """Unit of the source sensor, used for all energy entities."""
        state = self.hass.states.get(self.energy_sensor)
        if state is None:
            return DEFAULT_UNIT
        return str(state.attributes.get("unit_of_measurement") or DEFAULT_UNIT)

    # --- Goal provider ---

    def current_goal(self) -> float | None:
        """Goal from the goal sensor if configured and readable, else the option."""
        goal_entity = self._opt(CONF_GOAL_SENSOR, "")
        if goal_entity:
            state = self.hass.states.get(goal_entity)
            if state is not None and state.state not in ("unknown", "unavailable"):
                try:
                    return float(state.state)
                except (ValueError, TypeError):
                    _LOGGER.warning("Goal sensor %s has non-numeric state '%s'", goal_entity, state.state)
            else:
                _LOGGER.debug("Goal sensor %s unavailable, using configured goal", goal_entity)
        goal = self.daily_goal
        return goal if goal > 0 else None

    # --- Main update ---

    async def _async_update_data(self) -> MetricSnapshot:
        """Recompute the snapshot from the recorder."""
        now = dt_util.now()
        try:
            snapshot = await self.orchestrator.async_compute_snapshot(
                now, self.window_days, goal=self.current_goal()
            )
        except ActiveEnergyError as err:
            raise UpdateFailed(str(err)) from err

        self.store.async_set_last_snapshot(snapshot)
        return snapshot
