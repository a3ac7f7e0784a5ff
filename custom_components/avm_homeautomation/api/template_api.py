"""API Handler for templates."""
from typing import Any, Iterable

from .base_api import (
    Command,
    HomeAutomationBaseApi,
    HomeAutomationValidationError,
    validate_name,
    validate_range,
)
from .codec import decode_int, parse_xml
from .light_api import validate_color, validate_color_temperature
from .models import TemplateList, bind_document


# --- TEMPLATE API ------------------------------------------------------------

class TemplateApi(HomeAutomationBaseApi):
    """Handles template listing, application and creation."""

    # --- LIST -----------------------------------------------------------------

    async def get_template_list(self) -> TemplateList:
        return bind_document(TemplateList, await self.get_template_list_xml(), "templatelist")

    async def get_template_list_xml(self) -> dict[str, Any]:
        return parse_xml(await self._request(Command("gettemplatelistinfos")))


    # --- APPLY ----------------------------------------------------------------

    async def apply_template(self, ain: str) -> int:
        """Apply the template identified by ``ain``, returns its id."""
        return decode_int(await self._request(Command("applytemplate", ain)))


    # --- CREATE ---------------------------------------------------------------

    async def add_color_level_template(
        self,
        name: str,
        level_percentage: int,
        ains: Iterable[str],
        *,
        hue: int | None = None,
        saturation: int | None = None,
        temperature: int | None = None,
        colorpreset: bool = False,
    ) -> int:
        """
        Create a light template for the lamps in ``ains``.

        Either ``hue`` and ``saturation`` or a color ``temperature`` (Kelvin)
        must be given. The lamps are sent as child_1, child_2, ... in order.
        Returns the id of the new template.
        """
        validate_name(name)
        validate_range("level_percentage", level_percentage, 0, 100)

        params: list[tuple[str, str]] = [
            ("name", name),
            ("levelPercentage", str(level_percentage)),
        ]
        if temperature is not None:
            if hue is not None or saturation is not None:
                raise HomeAutomationValidationError(
                    "Use either hue/saturation or temperature, not both"
                )
            validate_color_temperature(temperature)
            params.append(("temperature", str(temperature)))
        elif hue is not None and saturation is not None:
            validate_color(hue, saturation)
            params.append(("hue", str(hue)))
            params.append(("saturation", str(saturation)))
        else:
            raise HomeAutomationValidationError(
                "Either hue and saturation or temperature is required"
            )

        children = list(ains)
        if not children:
            raise HomeAutomationValidationError("At least one lamp is required")
        params.extend((f"child_{index}", ain) for index, ain in enumerate(children, start=1))
        if colorpreset:
            params.append(("colorpreset", "true"))

        return decode_int(await self._request(Command("addcolorleveltemplate", params=tuple(params))))
