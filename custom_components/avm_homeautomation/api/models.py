"""Records returned by the structured AHA commands.

Each record is a dataclass whose fields declare where they live in the XML
answer: ``xml`` names the child element (or ``@attribute``), ``parse`` the
codec applied to its text, ``model`` the record type of a nested element and
``many`` whether the element repeats. ``from_xml`` binds an ``xmltodict`` node
to a record using only these declarations.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum, IntFlag
from typing import Any, Callable, TypeVar

from .base_api import UnrecognizedValueError
from .codec import (
    HkrSentinel,
    decode_hkr_measured,
    decode_hkr_temperature,
    decode_int,
    decode_list,
    decode_optional_bool,
    decode_power,
    decode_temperature,
    decode_timestamp,
)

T = TypeVar("T")


def xml_field(
    name: str,
    parse: Callable[[str], Any] | None = None,
    *,
    model: type | None = None,
    many: bool = False,
    text: bool = False,
    default: Any = None,
) -> Any:
    """Declare the XML binding of a record field."""
    metadata = {"xml": name, "parse": parse, "model": model, "many": many, "text": text}
    if many:
        return field(default_factory=list, metadata=metadata)
    return field(default=default, metadata=metadata)


def _text(node: Any) -> str | None:
    if isinstance(node, dict):
        return node.get("#text")
    return node


def _as_list(node: Any) -> list[Any]:
    if node is None:
        return []
    if isinstance(node, list):
        return node
    return [node]


def from_xml(cls: type[T], node: Any) -> T:
    """Bind an ``xmltodict`` node to the record type ``cls``."""
    if node is None:
        node = {}
    elif not isinstance(node, dict):
        # element with text only and no attributes
        node = {"#text": node}

    values: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        meta = f.metadata
        if "xml" not in meta:
            continue
        raw = node.get("#text") if meta["text"] else node.get(meta["xml"])
        if meta["many"]:
            items = _as_list(raw)
            if meta["model"] is not None:
                values[f.name] = [from_xml(meta["model"], item) for item in items]
            else:
                values[f.name] = [_convert(meta["parse"], _text(item)) for item in items]
            continue
        if raw is None:
            continue
        if meta["model"] is not None:
            values[f.name] = from_xml(meta["model"], raw)
        else:
            values[f.name] = _convert(meta["parse"], _text(raw))
    return cls(**values)


def _convert(parse: Callable[[str], Any] | None, text: str | None) -> Any:
    if text is None:
        return None
    if parse is None:
        return text
    return parse(text)


def _flag(text: str) -> bool | None:
    # Empty elements mean unknown on some firmware versions
    if not text.strip():
        return None
    return decode_optional_bool(text)


def _optional_int(text: str) -> int | None:
    if not text.strip():
        return None
    return decode_int(text)


def _int_list(text: str) -> list[int | None]:
    return [None if item in ("-", "") else decode_int(item) for item in text.split(",")]


def _hkr(text: str) -> float | HkrSentinel | None:
    if not text.strip():
        return None
    return decode_hkr_temperature(text)


def _hkr_measured(text: str) -> float | None:
    if not text.strip():
        return None
    return decode_hkr_measured(text)


# --- FUNCTIONS ---------------------------------------------------------------

class Functions(IntFlag):
    """Function classes of a device (``functionbitmask``)."""

    HAN_FUN_DEVICE = 1 << 0
    LIGHT = 1 << 2
    ALARM_SENSOR = 1 << 4
    AVM_BUTTON = 1 << 5
    THERMOSTAT = 1 << 6
    ENERGY_METER = 1 << 7
    TEMPERATURE_SENSOR = 1 << 8
    OUTLET = 1 << 9
    DECT_REPEATER = 1 << 10
    MICROPHONE = 1 << 11
    HAN_FUN_UNIT = 1 << 13
    SWITCHABLE = 1 << 15
    LEVEL_CONTROL = 1 << 16
    COLOR_CONTROL = 1 << 17
    BLIND = 1 << 18
    HUMIDITY_SENSOR = 1 << 20


# --- DEVICE SUB-RECORDS ------------------------------------------------------

@dataclass
class Switch:
    state: bool | None = xml_field("state", _flag)
    mode: str | None = xml_field("mode")
    lock: bool | None = xml_field("lock", _flag)
    device_lock: bool | None = xml_field("devicelock", _flag)


@dataclass
class SimpleOnOff:
    state: bool | None = xml_field("state", _flag)


@dataclass
class PowerMeter:
    """Voltage in V, power in W, energy in Wh."""

    voltage: float | None = xml_field("voltage", decode_power)
    power: float | None = xml_field("power", decode_power)
    energy: int | None = xml_field("energy", _optional_int)


@dataclass
class Temperature:
    celsius: float | None = xml_field("celsius", decode_temperature)
    offset: float | None = xml_field("offset", decode_temperature)


@dataclass
class Humidity:
    rel_humidity: int | None = xml_field("rel_humidity", _optional_int)


@dataclass
class Alert:
    state: bool | None = xml_field("state", _flag)
    last_alert_change: datetime | None = xml_field("lastalertchgtimestamp", decode_timestamp)


@dataclass
class Button:
    identifier: str | None = xml_field("@identifier")
    id: str | None = xml_field("@id")
    name: str | None = xml_field("name")
    last_pressed: datetime | None = xml_field("lastpressedtimestamp", decode_timestamp)


@dataclass
class EtsiUnitInfo:
    etsi_device_id: str | None = xml_field("etsideviceid")
    unit_type: int | None = xml_field("unittype", _optional_int)
    interfaces: str | None = xml_field("interfaces")


@dataclass
class NextChange:
    end_period: datetime | None = xml_field("endperiod", decode_timestamp)
    temperature: float | HkrSentinel | None = xml_field("tchange", _hkr)


@dataclass
class Hkr:
    """Radiator controller state, temperatures on the half degree scale."""

    actual: float | None = xml_field("tist", _hkr_measured)
    target: float | HkrSentinel | None = xml_field("tsoll", _hkr)
    comfort: float | HkrSentinel | None = xml_field("komfort", _hkr)
    eco: float | HkrSentinel | None = xml_field("absenk", _hkr)
    battery_low: bool | None = xml_field("batterylow", _flag)
    battery: int | None = xml_field("battery", _optional_int)
    window_open: bool | None = xml_field("windowopenactiv", _flag)
    window_open_end: datetime | None = xml_field("windowopenactiveendtime", decode_timestamp)
    boost_active: bool | None = xml_field("boostactive", _flag)
    boost_end: datetime | None = xml_field("boostactiveendtime", decode_timestamp)
    lock: bool | None = xml_field("lock", _flag)
    device_lock: bool | None = xml_field("devicelock", _flag)
    summer_active: bool | None = xml_field("summeractive", _flag)
    holiday_active: bool | None = xml_field("holidayactive", _flag)
    error_code: int | None = xml_field("errorcode", _optional_int)
    next_change: NextChange | None = xml_field("nextchange", model=NextChange)


@dataclass
class LevelControl:
    level: int | None = xml_field("level", _optional_int)
    level_percentage: int | None = xml_field("levelpercentage", _optional_int)


@dataclass
class ColorControl:
    supported_modes: int | None = xml_field("@supported_modes", _optional_int)
    current_mode: int | None = xml_field("@current_mode", _optional_int)
    hue: int | None = xml_field("hue", _optional_int)
    saturation: int | None = xml_field("saturation", _optional_int)
    temperature: int | None = xml_field("temperature", _optional_int)


@dataclass
class Blind:
    end_positions_set: bool | None = xml_field("endpositionsset", _flag)
    mode: str | None = xml_field("mode")


# --- DEVICES -----------------------------------------------------------------

@dataclass
class Device:
    identifier: str | None = xml_field("@identifier")
    id: str | None = xml_field("@id")
    firmware_version: str | None = xml_field("@fwversion")
    manufacturer: str | None = xml_field("@manufacturer")
    product_name: str | None = xml_field("@productname")
    function_bitmask: int = xml_field("@functionbitmask", decode_int, default=0)
    present: bool | None = xml_field("present", _flag)
    tx_busy: bool | None = xml_field("txbusy", _flag)
    name: str | None = xml_field("name")
    switch: Switch | None = xml_field("switch", model=Switch)
    simple_on_off: SimpleOnOff | None = xml_field("simpleonoff", model=SimpleOnOff)
    power_meter: PowerMeter | None = xml_field("powermeter", model=PowerMeter)
    temperature: Temperature | None = xml_field("temperature", model=Temperature)
    humidity: Humidity | None = xml_field("humidity", model=Humidity)
    alert: Alert | None = xml_field("alert", model=Alert)
    buttons: list[Button] = xml_field("button", model=Button, many=True)
    etsi_unit_info: EtsiUnitInfo | None = xml_field("etsiunitinfo", model=EtsiUnitInfo)
    hkr: Hkr | None = xml_field("hkr", model=Hkr)
    level_control: LevelControl | None = xml_field("levelcontrol", model=LevelControl)
    color_control: ColorControl | None = xml_field("colorcontrol", model=ColorControl)
    blind: Blind | None = xml_field("blind", model=Blind)

    @property
    def functions(self) -> Functions:
        return Functions(self.function_bitmask)

    @property
    def is_present(self) -> bool:
        return bool(self.present)


@dataclass
class GroupInfo:
    master_device_id: str | None = xml_field("masterdeviceid")
    members: list[str] | None = xml_field("members", decode_list)


@dataclass
class Group(Device):
    group_info: GroupInfo | None = xml_field("groupinfo", model=GroupInfo)


@dataclass
class DeviceList:
    version: str | None = xml_field("@version")
    firmware_version: str | None = xml_field("@fwversion")
    devices: list[Device] = xml_field("device", model=Device, many=True)
    groups: list[Group] = xml_field("group", model=Group, many=True)

    def get(self, ain: str) -> Device | None:
        """Find a device or group by AIN."""
        for item in [*self.devices, *self.groups]:
            if item.identifier == ain:
                return item
        return None


# --- STATISTICS --------------------------------------------------------------

@dataclass
class Stats:
    """A series of samples, newest first, ``grid`` seconds apart."""

    count: int | None = xml_field("@count", _optional_int)
    grid: int | None = xml_field("@grid", _optional_int)
    data_time: datetime | None = xml_field("@datatime", decode_timestamp)
    values: list[int | None] = xml_field("#text", _int_list, text=True, default=None)


@dataclass
class StatsSeries:
    stats: list[Stats] = xml_field("stats", model=Stats, many=True)


@dataclass
class DeviceStats:
    temperature: StatsSeries | None = xml_field("temperature", model=StatsSeries)
    humidity: StatsSeries | None = xml_field("humidity", model=StatsSeries)
    voltage: StatsSeries | None = xml_field("voltage", model=StatsSeries)
    power: StatsSeries | None = xml_field("power", model=StatsSeries)
    energy: StatsSeries | None = xml_field("energy", model=StatsSeries)


# --- TEMPLATES AND TRIGGERS --------------------------------------------------

@dataclass
class TemplateDevice:
    identifier: str | None = xml_field("@identifier")


@dataclass
class TemplateDevices:
    devices: list[TemplateDevice] = xml_field("device", model=TemplateDevice, many=True)


@dataclass
class Template:
    identifier: str | None = xml_field("@identifier")
    id: str | None = xml_field("@id")
    function_bitmask: int = xml_field("@functionbitmask", decode_int, default=0)
    apply_mask: int = xml_field("@applymask", decode_int, default=0)
    name: str | None = xml_field("name")
    metadata: str | None = xml_field("metadata")
    devices: TemplateDevices | None = xml_field("devices", model=TemplateDevices)

    @property
    def device_ains(self) -> list[str]:
        if self.devices is None:
            return []
        return [d.identifier for d in self.devices.devices if d.identifier]


@dataclass
class TemplateList:
    version: str | None = xml_field("@version")
    templates: list[Template] = xml_field("template", model=Template, many=True)


@dataclass
class Trigger:
    identifier: str | None = xml_field("@identifier")
    active: bool | None = xml_field("@active", _flag)
    name: str | None = xml_field("name")


@dataclass
class TriggerList:
    version: str | None = xml_field("@version")
    triggers: list[Trigger] = xml_field("trigger", model=Trigger, many=True)


# --- COLOR DEFAULTS ----------------------------------------------------------

@dataclass
class HsColor:
    sat_index: int | None = xml_field("@sat_index", _optional_int)
    hue: int | None = xml_field("@hue", _optional_int)
    saturation: int | None = xml_field("@sat", _optional_int)
    value: int | None = xml_field("@val", _optional_int)


@dataclass
class HsName:
    enum: int | None = xml_field("@enum", _optional_int)
    text: str | None = xml_field("#text", text=True)


@dataclass
class HsDefault:
    hue_index: int | None = xml_field("@hue_index", _optional_int)
    name: HsName | None = xml_field("name", model=HsName)
    colors: list[HsColor] = xml_field("color", model=HsColor, many=True)


@dataclass
class HsDefaults:
    hs: list[HsDefault] = xml_field("hs", model=HsDefault, many=True)


@dataclass
class ColorTemperature:
    value: int | None = xml_field("@value", _optional_int)


@dataclass
class TemperatureDefaults:
    temperatures: list[ColorTemperature] = xml_field("temp", model=ColorTemperature, many=True)


@dataclass
class ColorDefaults:
    hs_defaults: HsDefaults | None = xml_field("hsdefaults", model=HsDefaults)
    temperature_defaults: TemperatureDefaults | None = xml_field(
        "temperaturedefaults", model=TemperatureDefaults
    )


# --- SUBSCRIPTION ------------------------------------------------------------

class SubscriptionCode(Enum):
    NOT_RUNNING = 0
    RUNNING = 1
    TIMEOUT = 2
    ERROR = 3


def _subscription_code(text: str) -> SubscriptionCode:
    value = decode_int(text)
    try:
        return SubscriptionCode(value)
    except ValueError as err:
        raise UnrecognizedValueError(text, "subscription state") from err


@dataclass
class SubscriptionState:
    code: SubscriptionCode | None = xml_field("@code", _subscription_code)
    latest_ain: str | None = xml_field("latestain")


# --- METADATA ----------------------------------------------------------------

class MetaDataType(Enum):
    """Template metadata types."""

    THERMOSTAT_SUMMER = "thermostat_summer"
    THERMOSTAT_HOLIDAY = "thermostat_holiday"
    THERMOSTAT_WEEKPROGRAM = "thermostat_weekprogram"


@dataclass
class MetaData:
    """JSON metadata attached to a template or device."""

    icon: int | None = None
    type: MetaDataType | None = None

    def to_json(self) -> str:
        """Serialize, writing enums by member name."""
        data: dict[str, Any] = {}
        if self.icon is not None:
            data["icon"] = self.icon
        if self.type is not None:
            data["type"] = self.type.name
        return json.dumps(data, separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> MetaData:
        try:
            data = json.loads(raw) if raw.strip() else {}
        except ValueError as err:
            raise UnrecognizedValueError(raw, "metadata") from err
        if not isinstance(data, dict):
            raise UnrecognizedValueError(raw, "metadata")

        type_name = data.get("type")
        meta_type = None
        if type_name is not None:
            if type_name in MetaDataType.__members__:
                meta_type = MetaDataType[type_name]
            else:
                try:
                    meta_type = MetaDataType(type_name)
                except ValueError as err:
                    raise UnrecognizedValueError(raw, "metadata type") from err
        return cls(icon=data.get("icon"), type=meta_type)


# --- DOCUMENT ROOTS ----------------------------------------------------------

def bind_document(cls: type[T], document: dict[str, Any], root: str) -> T:
    """Bind the root element ``root`` of a parsed document to ``cls``."""
    if not isinstance(document, dict) or root not in document:
        raise UnrecognizedValueError(document, f"<{root}> document")
    return from_xml(cls, document[root])

