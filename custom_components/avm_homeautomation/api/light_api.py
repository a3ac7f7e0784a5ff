"""API Handler for dimmable and color lamps."""
from datetime import timedelta
from typing import Any

from .base_api import Command, HomeAutomationBaseApi, validate_range
from .codec import decode_int, encode_duration, parse_xml
from .models import ColorDefaults, bind_document

MAX_LEVEL = 255
MAX_HUE = 359
MAX_SATURATION = 255
MIN_COLOR_TEMPERATURE = 2700
MAX_COLOR_TEMPERATURE = 6500


def validate_color(hue: int, saturation: int) -> None:
    validate_range("hue", hue, 0, MAX_HUE)
    validate_range("saturation", saturation, 0, MAX_SATURATION)


def validate_color_temperature(temperature: int) -> None:
    validate_range("temperature", temperature, MIN_COLOR_TEMPERATURE, MAX_COLOR_TEMPERATURE)


# --- LIGHT API ---------------------------------------------------------------

class LightApi(HomeAutomationBaseApi):
    """Handles level and color commands."""

    # --- LEVEL ----------------------------------------------------------------

    async def set_level(self, ain: str, level: int) -> int:
        """Set dimming, height, brightness or level (0 - 255)."""
        validate_range("level", level, 0, MAX_LEVEL)
        return decode_int(await self._request(Command("setlevel", ain, (("level", str(level)),))))

    async def set_level_percentage(self, ain: str, level: int) -> int:
        """Set the level in percent (0 - 100)."""
        validate_range("level", level, 0, 100)
        command = Command("setlevelpercentage", ain, (("level", str(level)),))
        return decode_int(await self._request(command))


    # --- COLOR ----------------------------------------------------------------

    async def set_color(
        self, ain: str, hue: int, saturation: int, duration: timedelta | None = None
    ) -> int:
        """
        Set hue and saturation from the color defaults.
        The brightness is controlled with set_level / set_level_percentage.

        :param duration: Transition time, rounded down to tenths of a second.
        """
        validate_color(hue, saturation)
        return decode_int(await self._request(self._color_command("setcolor", ain, hue, saturation, duration)))

    async def set_unmapped_color(
        self, ain: str, hue: int, saturation: int, duration: timedelta | None = None
    ) -> int:
        """Set any hue and saturation, not restricted to the color defaults."""
        validate_color(hue, saturation)
        return decode_int(
            await self._request(self._color_command("setunmappedcolor", ain, hue, saturation, duration))
        )

    async def set_color_temperature(
        self, ain: str, temperature: int, duration: timedelta | None = None
    ) -> int:
        """Set the color temperature in Kelvin (2700 - 6500)."""
        validate_color_temperature(temperature)
        command = Command(
            "setcolortemperature",
            ain,
            (("temperature", str(temperature)), ("duration", encode_duration(duration))),
        )
        return decode_int(await self._request(command))

    @staticmethod
    def _color_command(
        name: str, ain: str, hue: int, saturation: int, duration: timedelta | None
    ) -> Command:
        return Command(
            name,
            ain,
            (
                ("hue", str(hue)),
                ("saturation", str(saturation)),
                ("duration", encode_duration(duration)),
            ),
        )


    # --- COLOR DEFAULTS -------------------------------------------------------

    async def get_color_defaults(self) -> ColorDefaults:
        """Return the proposed hue/saturation and temperature values."""
        return bind_document(ColorDefaults, await self.get_color_defaults_xml(), "colordefaults")

    async def get_color_defaults_xml(self) -> dict[str, Any]:
        return parse_xml(await self._request(Command("getcolordefaults")))
