"""API Handler for blinds (HAN-FUN unit type 281)."""
from .base_api import Command, HomeAutomationBaseApi
from .codec import BlindTarget, decode_blind_target, encode_blind_target


class BlindApi(HomeAutomationBaseApi):
    """Handles blind commands."""

    async def set_blind(self, ain: str, target: BlindTarget) -> BlindTarget:
        """Open, close or stop the blind."""
        command = Command("setblind", ain, (("target", encode_blind_target(target)),))
        return decode_blind_target(await self._request(command))
