"""Sensor platform for the Griddy Price integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import (
    DEVICE_MANUFACTURER,
    DEVICE_MODEL,
    DEVICE_NAME,
    DOMAIN,
    SENSOR_KEY,
    SENSOR_NAME,
    SENSOR_UNIT,
)
from .coordinator import GriddyPriceCoordinator


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Griddy price sensor from a config entry."""
    coordinator: GriddyPriceCoordinator = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([GriddyPriceSensor(coordinator, entry)])


class GriddyPriceSensor(CoordinatorEntity[GriddyPriceCoordinator], SensorEntity):
    """Read-only sensor holding the latest Griddy energy cost."""

    _attr_has_entity_name = True
    _attr_name = SENSOR_NAME
    _attr_icon = "mdi:currency-usd"
    _attr_native_unit_of_measurement = SENSOR_UNIT
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_suggested_display_precision = 1

    def __init__(
        self, coordinator: GriddyPriceCoordinator, entry: ConfigEntry
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{SENSOR_KEY}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry.entry_id)},
            name=DEVICE_NAME,
            manufacturer=DEVICE_MANUFACTURER,
            model=DEVICE_MODEL,
            entry_type=DeviceEntryType.SERVICE,
        )

    @property
    def available(self) -> bool:
        """Stay available with the last known price while Griddy is unreachable."""
        return True

    @property
    def native_value(self) -> float | None:
        """Return the current price in cents per kWh."""
        reading = self.coordinator.data.current_value
        if reading is None:
            return None
        return reading.value

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the raw reading as delivered by Griddy."""
        reading = self.coordinator.data.current_value
        if reading is None:
            return {}
        last_updated = self.coordinator.data.last_updated
        return {
            "price_display": reading.display_value,
            "price_display_sign": reading.sign,
            "formatted": reading.formatted,
            "last_updated": last_updated.isoformat() if last_updated else None,
        }
