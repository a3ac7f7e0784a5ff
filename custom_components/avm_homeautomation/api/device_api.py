"""API Handler for device information and generic device commands."""
from typing import Any

from .base_api import Command, HomeAutomationBaseApi, validate_name
from .codec import (
    OnOff,
    decode_on_off,
    decode_string,
    decode_temperature,
    encode_on_off,
    parse_xml,
)
from .models import Device, DeviceList, DeviceStats, MetaData, bind_document


# --- DEVICE API --------------------------------------------------------------

class DeviceApi(HomeAutomationBaseApi):
    """Handles device lists, statistics, naming and simple on/off."""

    # --- DEVICE LIST ----------------------------------------------------------

    async def get_device_list(self) -> DeviceList:
        """Return all devices and groups."""
        return bind_document(DeviceList, await self.get_device_list_xml(), "devicelist")

    async def get_device_list_xml(self) -> dict[str, Any]:
        """Return the device list as parsed XML document."""
        return parse_xml(await self._request(Command("getdevicelistinfos")))


    # --- SINGLE DEVICE --------------------------------------------------------

    async def get_device(self, ain: str) -> Device:
        return bind_document(Device, await self.get_device_xml(ain), "device")

    async def get_device_xml(self, ain: str) -> dict[str, Any]:
        return parse_xml(await self._request(Command("getdeviceinfos", ain)))

    async def get_temperature(self, ain: str) -> float | None:
        """Return the measured temperature in °C, offset included."""
        return decode_temperature(await self._request(Command("gettemperature", ain)))


    # --- STATISTICS -----------------------------------------------------------

    async def get_basic_stats(self, ain: str) -> DeviceStats:
        """Return temperature, voltage, power and energy history."""
        return bind_document(DeviceStats, await self.get_basic_stats_xml(ain), "devicestats")

    async def get_basic_stats_xml(self, ain: str) -> dict[str, Any]:
        return parse_xml(await self._request(Command("getbasicdevicestats", ain)))


    # --- SIMPLE ON/OFF --------------------------------------------------------

    async def set_simple_on_off(self, ain: str, on_off: OnOff) -> OnOff:
        """Switch a device, lamp or actor on, off or toggle it."""
        command = Command("setsimpleonoff", ain, (("onoff", encode_on_off(on_off)),))
        return decode_on_off(await self._request(command))


    # --- NAME / METADATA ------------------------------------------------------

    async def set_name(self, ain: str, name: str) -> str:
        """
        Rename a device or group, returns the name stored by the gateway.
        Requires the restricted app settings permission.
        """
        validate_name(name)
        return decode_string(await self._request(Command("setname", ain, (("name", name),))))

    async def set_metadata(self, ain: str, metadata: MetaData) -> None:
        """Store JSON metadata on a template or device."""
        await self._request(Command("setmetadata", ain, (("metadata", metadata.to_json()),)))
