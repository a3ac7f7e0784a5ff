"""Wire value encodings of the AHA interface.

The gateway answers most commands with a bare text value terminated by a
newline. Every decoder below is total on the documented value space only and
raises UnrecognizedValueError for anything else.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

from .base_api import UnrecognizedValueError

INVALID = "inval"

HKR_RAW_ON = 254
HKR_RAW_OFF = 253
HKR_RAW_MIN = 16
HKR_RAW_MAX = 56

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_INTEGER = re.compile(r"-?[0-9]+")


class HkrSentinel(Enum):
    """Reserved thermostat settings outside the temperature scale."""

    ON = "on"
    OFF = "off"


class OnOff(Enum):
    """Simple on/off switch codes."""

    OFF = 0
    ON = 1
    TOGGLE = 2


class BlindTarget(Enum):
    """Blind movement targets."""

    CLOSE = "close"
    OPEN = "open"
    STOP = "stop"


def _to_int(raw: str | None, kind: str) -> int:
    if raw is None or not _INTEGER.fullmatch(raw):
        raise UnrecognizedValueError(raw, kind)
    return int(raw)


# --- SCALARS -----------------------------------------------------------------

def decode_string(raw: str) -> str:
    return raw.rstrip()


def decode_int(raw: str) -> int:
    return _to_int(raw.rstrip(), "integer")


def decode_bool(raw: str) -> bool:
    """Decode "0"/"1"."""
    value = raw.rstrip()
    if value == "0":
        return False
    if value == "1":
        return True
    raise UnrecognizedValueError(raw, "boolean")


def decode_optional_bool(raw: str) -> bool | None:
    """Decode "0"/"1", or "inval" as unknown."""
    if raw.rstrip() == INVALID:
        return None
    return decode_bool(raw)


def encode_bool(value: bool) -> str:
    return "1" if value else "0"


def decode_power(raw: str) -> float | None:
    """Milli-units (mW, mV) to units; "inval" is unknown."""
    value = raw.rstrip()
    if value == INVALID:
        return None
    return _to_int(value, "power") / 1000


def decode_energy(raw: str) -> float | None:
    value = raw.rstrip()
    if value == INVALID:
        return None
    return _to_int(value, "energy") / 1000


def decode_temperature(raw: str) -> float | None:
    """Tenths of a degree Celsius, signed; "inval" is unknown."""
    value = raw.rstrip()
    if value == INVALID:
        return None
    return _to_int(value, "temperature") / 10


# --- THERMOSTAT --------------------------------------------------------------

def decode_hkr_temperature(raw: str) -> float | HkrSentinel:
    """
    Half degrees Celsius, 16 (8 °C) to 56 (28 °C).
    254 means permanently on, 253 permanently off.
    """
    value = _to_int(raw.rstrip(), "thermostat temperature")
    if value == HKR_RAW_ON:
        return HkrSentinel.ON
    if value == HKR_RAW_OFF:
        return HkrSentinel.OFF
    if not HKR_RAW_MIN <= value <= HKR_RAW_MAX:
        raise UnrecognizedValueError(raw, "thermostat temperature")
    return value / 2


def decode_hkr_measured(raw: str) -> float:
    """Measured temperature in half degrees, not limited to the setpoint scale."""
    return _to_int(raw.rstrip(), "measured temperature") / 2


def encode_hkr_temperature(value: float | HkrSentinel) -> str:
    if value is HkrSentinel.ON:
        return str(HKR_RAW_ON)
    if value is HkrSentinel.OFF:
        return str(HKR_RAW_OFF)
    return str(int(round(value * 2)))


# --- ENUMS -------------------------------------------------------------------

def decode_on_off(raw: str) -> OnOff:
    value = raw.rstrip()
    for member in OnOff:
        if value == str(member.value):
            return member
    raise UnrecognizedValueError(raw, "on/off state")


def encode_on_off(value: OnOff) -> str:
    return str(value.value)


def decode_blind_target(raw: str) -> BlindTarget:
    value = raw.rstrip()
    for member in BlindTarget:
        if value == member.value:
            return member
    raise UnrecognizedValueError(raw, "blind target")


def encode_blind_target(value: BlindTarget) -> str:
    return value.name.lower()


# --- LISTS, DURATIONS, TIMESTAMPS --------------------------------------------

def decode_list(raw: str) -> list[str]:
    """Comma separated identifiers."""
    value = raw.rstrip()
    if not value:
        return []
    return value.split(",")


def encode_duration(value: timedelta | None) -> str:
    """Transition duration in tenths of a second."""
    if value is None:
        return "0"
    return str(value // timedelta(milliseconds=100))


def decode_timestamp(raw: str) -> datetime | None:
    """Seconds since epoch, 0 meaning no timestamp."""
    seconds = _to_int(raw.rstrip(), "timestamp")
    if seconds == 0:
        return None
    return UNIX_EPOCH + timedelta(seconds=seconds)


def encode_timestamp(value: datetime | None) -> str:
    if value is None:
        return "0"
    return str(int(value.timestamp()))


# --- DOCUMENTS ---------------------------------------------------------------

def parse_xml(raw: str) -> dict[str, Any]:
    """Parse an XML answer into a plain document tree."""
    try:
        return xmltodict.parse(raw)
    except ExpatError as err:
        raise UnrecognizedValueError(raw, "XML document") from err
