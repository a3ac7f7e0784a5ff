"""Initialization of the AVM Home Automation integration."""
from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry # type: ignore
from homeassistant.const import Platform  # type: ignore
from homeassistant.core import HomeAssistant # type: ignore
from homeassistant.exceptions import ConfigEntryAuthFailed, ConfigEntryNotReady # type: ignore
from homeassistant.helpers.aiohttp_client import async_get_clientsession # type: ignore

from .const import DOMAIN, CONF_HOST, CONF_USERNAME, CONF_PASSWORD
from .api.client import HomeAutomationClient
from .api.base_api import HomeAutomationAuthError, HomeAutomationInvalidCredentialsError
from .coordinator import HomeAutomationUpdateCoordinator


_LOGGER = logging.getLogger(__name__)

# Supported platforms
PLATFORMS: list[Platform] = [
    Platform.SWITCH,
]


# --- SETUP ENTRY -------------------------------------------------------------

async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up AVM Home Automation from a config entry."""

    # 1. Initialize API Client and log in
    client = HomeAutomationClient(
        session=async_get_clientsession(hass),
        host=entry.data[CONF_HOST],
        username=entry.data[CONF_USERNAME],
        password=entry.data[CONF_PASSWORD],
    )
    try:
        await client.async_login()
    except HomeAutomationInvalidCredentialsError as err:
        raise ConfigEntryAuthFailed(str(err)) from err
    except HomeAutomationAuthError as err:
        raise ConfigEntryNotReady(str(err)) from err
    _LOGGER.debug("Connected to gateway at %s", entry.data[CONF_HOST])

    # 2. Initialize Coordinator
    coordinator = HomeAutomationUpdateCoordinator(hass, client, entry)
    await coordinator.async_config_entry_first_refresh()

    # 3. Store instances
    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "api_client": client,
        "coordinator": coordinator,
    }

    # 4. Load platforms
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    # 5. Setup listeners
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    return True


# --- UNLOAD ENTRY ------------------------------------------------------------

async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Handle unloading of the integration."""
    unloaded = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unloaded:
        data = hass.data[DOMAIN].pop(entry.entry_id)
        await data["api_client"].async_close()
    return unloaded


# --- UPDATE LISTENER ---------------------------------------------------------

async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update by reloading the integration."""
    await hass.config_entries.async_reload(entry.entry_id)
