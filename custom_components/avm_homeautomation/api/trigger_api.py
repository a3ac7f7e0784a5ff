"""API Handler for routines/triggers (Fritz!OS 7.39 and later)."""
from typing import Any

from .base_api import Command, HomeAutomationBaseApi
from .codec import decode_bool, encode_bool, parse_xml
from .models import TriggerList, bind_document


class TriggerApi(HomeAutomationBaseApi):
    """Handles trigger commands."""

    async def get_trigger_list(self) -> TriggerList:
        return bind_document(TriggerList, await self.get_trigger_list_xml(), "triggerlist")

    async def get_trigger_list_xml(self) -> dict[str, Any]:
        return parse_xml(await self._request(Command("gettriggerlistinfos")))

    async def set_active(self, ain: str, active: bool) -> bool:
        """Activate or deactivate a trigger, returns the new state."""
        command = Command("settriggeractive", ain, (("active", encode_bool(active)),))
        return decode_bool(await self._request(command))
