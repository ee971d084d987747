"""Diagnostics support for Daily Active Energy."""

from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import DOMAIN
from .coordinator import ActiveEnergyCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: ActiveEnergyCoordinator = hass.data[DOMAIN][entry.entry_id]
    stored = coordinator.store.last_snapshot

    # Redact entity IDs partially for privacy
    config_data = dict(entry.data)
    for key in list(config_data.keys()):
        if "sensor" in key:
            val = config_data[key]
            if isinstance(val, str):
                config_data[key] = f"***{val[-20:]}" if len(val) > 20 else val

    return {
        "config": config_data,
        "options": dict(entry.options),
        "interpolate_average": coordinator.orchestrator.interpolate,
        "last_update_success": coordinator.last_update_success,
        "coordinator_data": coordinator.data.as_dict() if coordinator.data else {},
        "store": {
            "last_snapshot": stored.as_dict() if stored else None,
        },
    }
