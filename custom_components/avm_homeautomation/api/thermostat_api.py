"""API Handler for radiator controller (HKR) operations."""
from datetime import datetime, timedelta

from .base_api import (
    Command,
    HomeAutomationBaseApi,
    HomeAutomationValidationError,
    validate_range,
)
from .codec import (
    HkrSentinel,
    decode_hkr_temperature,
    decode_timestamp,
    encode_hkr_temperature,
    encode_timestamp,
)

MIN_TEMPERATURE = 8.0
MAX_TEMPERATURE = 28.0

# boost and window open modes can be scheduled at most this far ahead
MAX_MODE_DURATION = timedelta(hours=24)


def _validate_end_time(end: datetime | None) -> None:
    if end is None:
        return
    now = datetime.now(end.tzinfo)
    if end < now or end > now + MAX_MODE_DURATION:
        raise HomeAutomationValidationError(
            f"End time must lie within the next 24 hours, got {end.isoformat()}"
        )


# --- THERMOSTAT API ----------------------------------------------------------

class ThermostatApi(HomeAutomationBaseApi):
    """Handles thermostat-related commands."""

    # --- TEMPERATURES ---------------------------------------------------------

    async def get_target(self, ain: str) -> float | HkrSentinel:
        """Return the target temperature in °C, or the ON/OFF sentinel."""
        return decode_hkr_temperature(await self._request(Command("gethkrtsoll", ain)))

    async def get_comfort(self, ain: str) -> float | HkrSentinel:
        return decode_hkr_temperature(await self._request(Command("gethkrkomfort", ain)))

    async def get_eco(self, ain: str) -> float | HkrSentinel:
        return decode_hkr_temperature(await self._request(Command("gethkrabsenk", ain)))

    async def set_target(self, ain: str, temperature: float | HkrSentinel) -> float | HkrSentinel:
        """
        Set the target temperature.

        :param ain: Identification of the actor or template.
        :param temperature: 8 to 28 °C in half degrees, or HkrSentinel.ON/OFF.
        """
        if not isinstance(temperature, HkrSentinel):
            validate_range("temperature", temperature, MIN_TEMPERATURE, MAX_TEMPERATURE)
        command = Command("sethkrtsoll", ain, (("param", encode_hkr_temperature(temperature)),))
        return decode_hkr_temperature(await self._request(command))


    # --- MODES ----------------------------------------------------------------

    async def set_boost(self, ain: str, end: datetime | None = None) -> datetime | None:
        """
        Activate boost until ``end``, or deactivate it with None.
        Returns the end time confirmed by the gateway.
        """
        _validate_end_time(end)
        command = Command("sethkrboost", ain, (("endtimestamp", encode_timestamp(end)),))
        return decode_timestamp(await self._request(command))

    async def set_window_open(self, ain: str, end: datetime | None = None) -> datetime | None:
        """Activate window open mode until ``end``, or deactivate it with None."""
        _validate_end_time(end)
        command = Command("sethkrwindowopen", ain, (("endtimestamp", encode_timestamp(end)),))
        return decode_timestamp(await self._request(command))
