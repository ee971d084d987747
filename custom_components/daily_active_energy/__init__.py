"""Daily Active Energy integration for Home Assistant.

Compares today's cumulative active energy with the average pattern of the
previous days and projects an end-of-day total.
"""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.event import async_track_time_change

from .const import DOMAIN, HOUR_ROLLOVER_DELAY_SECONDS, PLATFORMS
from .coordinator import ActiveEnergyCoordinator
from .storage import ActiveEnergyStore

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Daily Active Energy from a config entry."""
    hass.data.setdefault(DOMAIN, {})

    # Initialize storage
    store = ActiveEnergyStore(hass, entry.entry_id)
    await store.async_load()

    coordinator = ActiveEnergyCoordinator(hass, entry, store)
    await coordinator.async_config_entry_first_refresh()

    hass.data[DOMAIN][entry.entry_id] = coordinator

    # Set up platforms
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    _register_event_listeners(hass, entry, coordinator)

    # Listen for options updates
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    _LOGGER.info(
        "Daily Active Energy setup complete for %s (%s, %d day window)",
        entry.title, coordinator.energy_sensor, coordinator.window_days,
    )
    return True


def _register_event_listeners(
    hass: HomeAssistant,
    entry: ConfigEntry,
    coordinator: ActiveEnergyCoordinator,
) -> None:
    """Refresh right after each hour boundary so hour-based values roll over."""

    async def _on_hour(_now=None) -> None:
        await coordinator.async_request_refresh()

    unsub = async_track_time_change(
        hass, _on_hour, minute=0, second=HOUR_ROLLOVER_DELAY_SECONDS
    )
    entry.async_on_unload(unsub)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        coordinator: ActiveEnergyCoordinator = hass.data[DOMAIN].pop(entry.entry_id)
        await coordinator.store.async_save()
    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Delete the stored snapshot when the entry is removed."""
    store = ActiveEnergyStore(hass, entry.entry_id)
    await store.async_remove()


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update."""
    await hass.config_entries.async_reload(entry.entry_id)
