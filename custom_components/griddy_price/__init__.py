"""The Griddy Price integration."""

from __future__ import annotations

from datetime import timedelta
import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EVENT_HOMEASSISTANT_STOP, Platform
from homeassistant.core import Event, HomeAssistant
from homeassistant.exceptions import ConfigEntryError
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import GriddyApiClient
from .const import CONF_SCAN_INTERVAL, DEFAULT_POLL_INTERVAL, DOMAIN
from .coordinator import GriddyPriceCoordinator
from .models import GriddyConfigError, PollConfig

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [Platform.SENSOR]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Griddy Price from a config entry."""
    interval_seconds = entry.options.get(
        CONF_SCAN_INTERVAL, DEFAULT_POLL_INTERVAL.total_seconds()
    )
    try:
        config = PollConfig.from_entry_data(
            entry.data, poll_interval=timedelta(seconds=interval_seconds)
        )
    except GriddyConfigError as err:
        raise ConfigEntryError(str(err)) from err

    client = GriddyApiClient(async_get_clientsession(hass))
    coordinator = GriddyPriceCoordinator(
        hass, client, config, name=f"{DOMAIN}_{entry.entry_id}"
    )
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = coordinator

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    async def _async_stop_polling(_event: Event) -> None:
        await coordinator.async_stop()

    entry.async_on_unload(
        hass.bus.async_listen_once(EVENT_HOMEASSISTANT_STOP, _async_stop_polling)
    )
    coordinator.async_start()
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry and stop its polling loop."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        coordinator: GriddyPriceCoordinator = hass.data[DOMAIN].pop(entry.entry_id)
        await coordinator.async_stop()
        _LOGGER.debug("Unloaded Griddy Price entry %s", entry.entry_id)
    return unload_ok
