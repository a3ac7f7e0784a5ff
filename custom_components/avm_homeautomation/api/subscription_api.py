"""API Handler for DECT-ULE device registration."""
from typing import Any

from .base_api import Command, HomeAutomationBaseApi
from .codec import parse_xml
from .models import SubscriptionState, bind_document


class SubscriptionApi(HomeAutomationBaseApi):
    """
    Handles DECT-ULE registration.
    Requires the restricted app settings permission.
    """

    async def start_ule_subscription(self) -> None:
        """Start registering a new DECT-ULE device."""
        await self._request(Command("startulesubscription"))

    async def get_state(self) -> SubscriptionState:
        return bind_document(SubscriptionState, await self.get_state_xml(), "State")

    async def get_state_xml(self) -> dict[str, Any]:
        return parse_xml(await self._request(Command("getsubscriptionstate")))
