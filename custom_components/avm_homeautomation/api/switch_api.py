"""API Handler for switchable outlets."""
from .base_api import Command, HomeAutomationBaseApi
from .codec import (
    decode_bool,
    decode_energy,
    decode_list,
    decode_optional_bool,
    decode_power,
    decode_string,
)


# --- SWITCH API --------------------------------------------------------------

class SwitchApi(HomeAutomationBaseApi):
    """Handles the outlet commands (getswitch*/setswitch*)."""

    # --- LIST -----------------------------------------------------------------

    async def get_switch_list(self) -> list[str]:
        """Return the AINs of all known outlets."""
        return decode_list(await self._request(Command("getswitchlist")))


    # --- SWITCHING ------------------------------------------------------------

    async def set_on(self, ain: str) -> bool:
        """Turn the outlet on, returns the new state."""
        return decode_bool(await self._request(Command("setswitchon", ain)))

    async def set_off(self, ain: str) -> bool:
        """Turn the outlet off, returns the new state."""
        return decode_bool(await self._request(Command("setswitchoff", ain)))

    async def toggle(self, ain: str) -> bool:
        """Toggle the outlet, returns the new state."""
        return decode_bool(await self._request(Command("setswitchtoggle", ain)))


    # --- STATE ----------------------------------------------------------------

    async def get_state(self, ain: str) -> bool | None:
        """Return the switching state, None if unknown."""
        return decode_optional_bool(await self._request(Command("getswitchstate", ain)))

    async def get_present(self, ain: str) -> bool:
        """Return True if the outlet is connected."""
        return decode_bool(await self._request(Command("getswitchpresent", ain)))

    async def get_power(self, ain: str) -> float | None:
        """Return the current power draw in W."""
        return decode_power(await self._request(Command("getswitchpower", ain)))

    async def get_energy(self, ain: str) -> float | None:
        """Return the energy delivered since the last reset."""
        return decode_energy(await self._request(Command("getswitchenergy", ain)))

    async def get_name(self, ain: str) -> str:
        return decode_string(await self._request(Command("getswitchname", ain)))
