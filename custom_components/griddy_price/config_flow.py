"""Config flow for the Griddy Price integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlowWithReload,
)
from homeassistant.core import callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.selector import (
    NumberSelector,
    NumberSelectorConfig,
    NumberSelectorMode,
    TextSelector,
)

from .api import GriddyApiClient, GriddyApiClientError
from .const import (
    CONF_MEMBER_ID,
    CONF_METER_ID,
    CONF_SCAN_INTERVAL,
    CONF_SETTLEMENT_POINT,
    DEFAULT_POLL_INTERVAL,
    DEVICE_NAME,
    DOMAIN,
    MIN_POLL_INTERVAL,
)
from .models import GriddyConfigError, PollConfig

_LOGGER = logging.getLogger(__name__)


def _user_schema(defaults: dict[str, Any] | None = None) -> vol.Schema:
    """Build the schema for the meter identifiers."""
    if defaults is None:
        defaults = {}
    return vol.Schema(
        {
            vol.Required(
                CONF_METER_ID, default=defaults.get(CONF_METER_ID, vol.UNDEFINED)
            ): TextSelector(),
            vol.Required(
                CONF_MEMBER_ID, default=defaults.get(CONF_MEMBER_ID, vol.UNDEFINED)
            ): TextSelector(),
            vol.Required(
                CONF_SETTLEMENT_POINT,
                default=defaults.get(CONF_SETTLEMENT_POINT, vol.UNDEFINED),
            ): TextSelector(),
        }
    )


def _options_schema(defaults: dict[str, Any]) -> vol.Schema:
    """Build the schema for tunable options."""
    return vol.Schema(
        {
            vol.Required(
                CONF_SCAN_INTERVAL,
                default=defaults.get(
                    CONF_SCAN_INTERVAL, DEFAULT_POLL_INTERVAL.total_seconds()
                ),
            ): NumberSelector(
                NumberSelectorConfig(
                    min=MIN_POLL_INTERVAL.total_seconds(),
                    max=86400,
                    step=1,
                    mode=NumberSelectorMode.BOX,
                    unit_of_measurement="s",
                )
            ),
        }
    )


class GriddyPriceConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Griddy Price."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> GriddyPriceOptionsFlow:
        """Get the options flow for this handler."""
        return GriddyPriceOptionsFlow()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            data = {key: str(value).strip() for key, value in user_input.items()}
            try:
                config = PollConfig.from_entry_data(data)
            except GriddyConfigError:
                errors["base"] = "missing_identifier"
            else:
                await self.async_set_unique_id(
                    f"{config.meter_id}_{config.member_id}"
                )
                self._abort_if_unique_id_configured()

                client = GriddyApiClient(async_get_clientsession(self.hass))
                try:
                    await client.async_get_price(config)
                except GriddyApiClientError as err:
                    _LOGGER.warning("Could not fetch Griddy price: %s", err)
                    errors["base"] = "cannot_connect"
                else:
                    return self.async_create_entry(title=DEVICE_NAME, data=data)

        return self.async_show_form(
            step_id="user",
            data_schema=_user_schema(user_input),
            errors=errors,
        )


class GriddyPriceOptionsFlow(OptionsFlowWithReload):
    """Handle options flow for Griddy Price."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the poll interval."""
        if user_input is not None:
            interval = max(
                float(user_input[CONF_SCAN_INTERVAL]),
                MIN_POLL_INTERVAL.total_seconds(),
            )
            return self.async_create_entry(data={CONF_SCAN_INTERVAL: interval})

        return self.async_show_form(
            step_id="init",
            data_schema=_options_schema(dict(self.config_entry.options)),
        )
