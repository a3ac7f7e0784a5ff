"""Support for AVM Home Automation outlets."""
from __future__ import annotations
from typing import Any

from homeassistant.components.switch import SwitchEntity # type: ignore
from homeassistant.config_entries import ConfigEntry # type: ignore
from homeassistant.core import HomeAssistant # type: ignore
from homeassistant.helpers.entity import DeviceInfo # type: ignore
from homeassistant.helpers.entity_platform import AddEntitiesCallback # type: ignore
from homeassistant.helpers.update_coordinator import CoordinatorEntity # type: ignore

from .const import DOMAIN
from .coordinator import HomeAutomationUpdateCoordinator
from .api.models import Device, Functions


# --- SETUP ENTRY -------------------------------------------------------------

async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback
) -> None:
    """Set up outlet switches."""
    coordinator: HomeAutomationUpdateCoordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]

    async_add_entities(
        HomeAutomationOutletSwitch(coordinator, ain)
        for ain, device in coordinator.data.items()
        if Functions.OUTLET in device.functions
    )


# --- OUTLET SWITCH -----------------------------------------------------------

class HomeAutomationOutletSwitch(CoordinatorEntity, SwitchEntity):
    """A switchable outlet (FRITZ!DECT 2xx)."""

    _attr_has_entity_name = True
    _attr_name = None

    def __init__(self, coordinator: HomeAutomationUpdateCoordinator, ain: str):
        super().__init__(coordinator)
        self._ain = ain
        self._attr_unique_id = f"{DOMAIN}_{ain}_switch"

        device = self._device
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, ain)},
            name=device.name if device else ain,
            manufacturer=device.manufacturer if device else None,
            model=device.product_name if device else None,
            sw_version=device.firmware_version if device else None,
        )

    @property
    def _device(self) -> Device | None:
        return self.coordinator.data.get(self._ain)

    @property
    def available(self) -> bool:
        device = self._device
        return super().available and device is not None and device.is_present

    @property
    def is_on(self) -> bool | None:
        device = self._device
        if device is None or device.switch is None:
            return None
        return device.switch.state


    # --- TURN ON --------------------------------------------------------------

    async def async_turn_on(self, **kwargs: Any) -> None:
        await self.coordinator.client.switches.set_on(self._ain)
        await self.coordinator.async_request_refresh()


    # --- TURN OFF -------------------------------------------------------------

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self.coordinator.client.switches.set_off(self._ain)
        await self.coordinator.async_request_refresh()
