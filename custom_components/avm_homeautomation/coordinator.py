"""DataUpdateCoordinator for AVM Home Automation."""
from __future__ import annotations

import logging
from datetime import timedelta

from homeassistant.config_entries import ConfigEntry # type: ignore
from homeassistant.core import HomeAssistant # type: ignore
from homeassistant.exceptions import ConfigEntryAuthFailed # type: ignore
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed # type: ignore

from .const import DOMAIN, CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL
from .api.client import HomeAutomationClient
from .api.base_api import HomeAutomationApiError, HomeAutomationError, HomeAutomationInvalidCredentialsError
from .api.models import Device

_LOGGER = logging.getLogger(__name__)


# --- HOME AUTOMATION UPDATE COORDINATOR --------------------------------------

class HomeAutomationUpdateCoordinator(DataUpdateCoordinator):
    """Class to manage polling the device list from the gateway."""

    def __init__(self, hass: HomeAssistant, client: HomeAutomationClient, entry: ConfigEntry) -> None:
        """Initialize."""
        self.client = client
        self.entry = entry

        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            update_interval=timedelta(
                seconds=entry.options.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)
            ),
        )


    # --- UPDATE DATA ----------------------------------------------------------

    async def _async_update_data(self) -> dict[str, Device]:
        """Fetch the device list and index it by AIN."""
        try:
            if not self.client.connected:
                await self.client.async_login()

            device_list = await self.client.devices.get_device_list()
            return {
                device.identifier: device
                for device in device_list.devices
                if device.identifier
            }

        except HomeAutomationInvalidCredentialsError as err:
            raise ConfigEntryAuthFailed(f"Login failed: {err}") from err

        except HomeAutomationApiError as err:
            _LOGGER.error("Gateway API Error: %s - %s", err.title, err.detail)
            # The session may have expired; log in again on the next poll
            self.client.auth.invalidate()
            raise UpdateFailed(f"API Error - {err.title}: {err.detail}") from err

        except HomeAutomationError as err:
            raise UpdateFailed(f"Error communicating with gateway: {type(err).__name__} - {err}") from err
