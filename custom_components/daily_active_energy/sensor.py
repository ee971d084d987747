"""Sensor platform for Daily Active Energy."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorEntityDescription
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .coordinator import ActiveEnergyCoordinator
from .models import CumulativePoint, MetricSnapshot


@dataclass(frozen=True, kw_only=True)
class ActiveEnergySensorDescription(SensorEntityDescription):
    """Describe a Daily Active Energy sensor."""

    value_fn: Callable[[MetricSnapshot], Any]
    attrs_fn: Callable[[MetricSnapshot], dict[str, Any]] | None = None
    energy: bool = True


def _series_attr(series: Sequence[CumulativePoint]) -> list[dict[str, Any]]:
    """Format a cumulative series for dashboard cards."""
    return [
        {"time": p.timestamp.isoformat(), "value": round(p.value, 1)}
        for p in series
    ]


SENSOR_DESCRIPTIONS: tuple[ActiveEnergySensorDescription, ...] = (
    ActiveEnergySensorDescription(
        key="today_total",
        translation_key="today_total",
        icon="mdi:fire",
        value_fn=lambda s: round(s.today_total, 1),
        attrs_fn=lambda s: {
            "goal": s.goal,
            "goal_progress": s.goal_progress,
            "series": _series_attr(s.today_cumulative),
            "computed_at": s.computed_at.isoformat(),
        },
    ),
    ActiveEnergySensorDescription(
        key="average_at_current_hour",
        translation_key="average_at_current_hour",
        icon="mdi:chart-bell-curve-cumulative",
        value_fn=lambda s: round(s.average_at_current_hour, 1),
        attrs_fn=lambda s: {
            "difference": round(s.today_total - s.average_at_current_hour, 1),
            "series": _series_attr(s.average_cumulative),
        },
    ),
    ActiveEnergySensorDescription(
        key="projected_total",
        translation_key="projected_total",
        icon="mdi:flag-checkered",
        value_fn=lambda s: round(s.projected_total, 1),
        attrs_fn=lambda s: {
            "window_days": s.window_days,
            "days_tracked": s.days_tracked,
        },
    ),
    ActiveEnergySensorDescription(
        key="days_tracked",
        translation_key="days_tracked",
        icon="mdi:calendar-check",
        energy=False,
        value_fn=lambda s: s.days_tracked,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Daily Active Energy sensors."""
    coordinator: ActiveEnergyCoordinator = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        ActiveEnergySensor(coordinator, description, entry)
        for description in SENSOR_DESCRIPTIONS
    )


class ActiveEnergySensor(
    CoordinatorEntity[ActiveEnergyCoordinator], SensorEntity
):
    """A Daily Active Energy sensor."""

    entity_description: ActiveEnergySensorDescription
    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: ActiveEnergyCoordinator,
        description: ActiveEnergySensorDescription,
        entry: ConfigEntry,
    ) -> None:
        super().__init__(coordinator)
        self.entity_description = description
        self._attr_unique_id = f"{entry.entry_id}_{description.key}"
        self._attr_device_info = {
            "identifiers": {(DOMAIN, entry.entry_id)},
            "name": entry.title,
            "manufacturer": "Daily Active Energy",
            "model": "Virtual",
        }
        if description.energy:
            self._attr_native_unit_of_measurement = coordinator.unit

    @property
    def native_value(self) -> Any:
        """Return the sensor value."""
        if self.coordinator.data is None:
            return None
        return self.entity_description.value_fn(self.coordinator.data)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        """Return additional attributes."""
        if self.coordinator.data is None or self.entity_description.attrs_fn is None:
            return None
        return self.entity_description.attrs_fn(self.coordinator.data)
