"""Config flow for Daily Active Energy integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry, ConfigFlow, OptionsFlow
from homeassistant.core import callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers import selector

from .const import (
    CONF_DAILY_GOAL,
    CONF_ENERGY_SENSOR,
    CONF_GOAL_SENSOR,
    CONF_INTERPOLATE_AVERAGE,
    CONF_WINDOW_DAYS,
    DEFAULT_DAILY_GOAL,
    DEFAULT_INTERPOLATE_AVERAGE,
    DEFAULT_NAME,
    DEFAULT_WINDOW_DAYS,
    DOMAIN,
    MAX_WINDOW_DAYS,
    MIN_WINDOW_DAYS,
)

_LOGGER = logging.getLogger(__name__)


def _entity_selector(domain: str) -> selector.EntitySelector:
    return selector.EntitySelector(selector.EntitySelectorConfig(domain=domain))


def _settings_schema(current: dict[str, Any]) -> vol.Schema:
    """Schema shared by the settings step and the options flow."""
    return vol.Schema(
        {
            vol.Required(
                CONF_WINDOW_DAYS,
                default=current.get(CONF_WINDOW_DAYS, DEFAULT_WINDOW_DAYS),
            ): vol.All(vol.Coerce(int), vol.Range(min=MIN_WINDOW_DAYS, max=MAX_WINDOW_DAYS)),
            vol.Required(
                CONF_DAILY_GOAL,
                default=current.get(CONF_DAILY_GOAL, DEFAULT_DAILY_GOAL),
            ): vol.All(vol.Coerce(float), vol.Range(min=0)),
            vol.Required(
                CONF_INTERPOLATE_AVERAGE,
                default=current.get(CONF_INTERPOLATE_AVERAGE, DEFAULT_INTERPOLATE_AVERAGE),
            ): bool,
        }
    )


class DailyActiveEnergyConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Daily Active Energy."""

    VERSION = 1

    def __init__(self) -> None:
        """Initialize the config flow."""
        self._data: dict[str, Any] = {}

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Get the options flow handler."""
        return DailyActiveEnergyOptionsFlow(config_entry)

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Step 1: Name."""
        if user_input is not None:
            self._data.update(user_input)
            return await self.async_step_source()

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required("name", default=DEFAULT_NAME): str,
                }
            ),
        )

    async def async_step_source(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Step 2: Energy statistic sensor and optional goal sensor."""
        errors: dict[str, str] = {}

        if user_input is not None:
            entity_id = user_input[CONF_ENERGY_SENSOR]
            if self.hass.states.get(entity_id) is None:
                errors[CONF_ENERGY_SENSOR] = "entity_not_found"
            else:
                self._data.update(user_input)
                return await self.async_step_settings()

        return self.async_show_form(
            step_id="source",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_ENERGY_SENSOR): _entity_selector("sensor"),
                    vol.Optional(CONF_GOAL_SENSOR): _entity_selector("sensor"),
                }
            ),
            errors=errors,
        )

    async def async_step_settings(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Step 3: Averaging window and goal."""
        if user_input is not None:
            self._data.update(user_input)
            await self.async_set_unique_id(
                f"{DOMAIN}_{self._data[CONF_ENERGY_SENSOR]}"
            )
            self._abort_if_unique_id_configured()
            _LOGGER.debug("Creating entry for %s", self._data[CONF_ENERGY_SENSOR])
            return self.async_create_entry(
                title=self._data.get("name", DEFAULT_NAME),
                data=self._data,
            )

        return self.async_show_form(
            step_id="settings",
            data_schema=_settings_schema({}),
        )


class DailyActiveEnergyOptionsFlow(OptionsFlow):
    """Handle options for Daily Active Energy."""

    def __init__(self, config_entry: ConfigEntry) -> None:
        """Initialize options flow."""
        self._config_entry = config_entry

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Manage the settings options."""
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        current = {**self._config_entry.data, **self._config_entry.options}

        return self.async_show_form(
            step_id="init",
            data_schema=_settings_schema(current),
        )
