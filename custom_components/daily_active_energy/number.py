"""Number platform for Daily Active Energy.

The daily goal is both a live setting and synced with the config entry
options, so changes from the dashboard/automations are persisted.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from homeassistant.components.number import NumberEntity, NumberEntityDescription, NumberMode
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .coordinator import ActiveEnergyCoordinator


@dataclass(frozen=True, kw_only=True)
class ActiveEnergyNumberDescription(NumberEntityDescription):
    """Describe a Daily Active Energy number entity."""

    getter: Callable[[ActiveEnergyCoordinator], float]
    setter: Callable[[ActiveEnergyCoordinator, float], None]


NUMBER_DESCRIPTIONS: tuple[ActiveEnergyNumberDescription, ...] = (
    ActiveEnergyNumberDescription(
        key="daily_goal",
        translation_key="daily_goal",
        icon="mdi:bullseye-arrow",
        native_min_value=0.0,
        native_max_value=5000.0,
        native_step=10.0,
        mode=NumberMode.BOX,
        getter=lambda c: c.daily_goal,
        setter=lambda c, v: setattr(c, "daily_goal", v),
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Daily Active Energy number entities."""
    coordinator: ActiveEnergyCoordinator = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        ActiveEnergyNumber(coordinator, description, entry)
        for description in NUMBER_DESCRIPTIONS
    )


class ActiveEnergyNumber(NumberEntity):
    """A Daily Active Energy number entity backed by config options."""

    entity_description: ActiveEnergyNumberDescription
    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: ActiveEnergyCoordinator,
        description: ActiveEnergyNumberDescription,
        entry: ConfigEntry,
    ) -> None:
        self.coordinator = coordinator
        self.entity_description = description
        self._attr_unique_id = f"{entry.entry_id}_{description.key}"
        self._attr_device_info = {
            "identifiers": {(DOMAIN, entry.entry_id)},
            "name": entry.title,
            "manufacturer": "Daily Active Energy",
            "model": "Virtual",
        }
        self._attr_native_unit_of_measurement = coordinator.unit

    @property
    def native_value(self) -> float:
        """Return the current value."""
        return self.entity_description.getter(self.coordinator)

    async def async_set_native_value(self, value: float) -> None:
        """Update the value; the options listener reloads the entry."""
        self.entity_description.setter(self.coordinator, value)
