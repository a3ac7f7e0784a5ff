"""Tests for the wire value encodings."""

from datetime import datetime, timedelta, timezone

import pytest

from api.base_api import UnrecognizedValueError
from api.codec import (
    BlindTarget,
    HkrSentinel,
    OnOff,
    decode_blind_target,
    decode_bool,
    decode_energy,
    decode_hkr_measured,
    decode_hkr_temperature,
    decode_int,
    decode_list,
    decode_on_off,
    decode_optional_bool,
    decode_power,
    decode_string,
    decode_temperature,
    decode_timestamp,
    encode_blind_target,
    encode_bool,
    encode_duration,
    encode_hkr_temperature,
    encode_on_off,
    encode_timestamp,
    parse_xml,
)


class TestScalars:
    """Strings, integers and booleans."""

    def test_string_strips_trailing_newline(self):
        assert decode_string("Bodhran\n") == "Bodhran"

    def test_int(self):
        assert decode_int("128\n") == 128
        assert decode_int("-5") == -5

    @pytest.mark.parametrize("raw", ["", "12a", "1.5", " 7"])
    def test_int_rejects_garbage(self, raw):
        with pytest.raises(UnrecognizedValueError) as exc:
            decode_int(raw)
        assert exc.value.value == raw

    def test_bool(self):
        assert decode_bool("1\n") is True
        assert decode_bool("0\n") is False

    def test_bool_rejects_inval(self):
        with pytest.raises(UnrecognizedValueError) as exc:
            decode_bool("inval\n")
        assert exc.value.value == "inval\n"

    def test_bool_rejects_other_numbers(self):
        with pytest.raises(UnrecognizedValueError):
            decode_bool("2")

    def test_optional_bool(self):
        assert decode_optional_bool("inval\n") is None
        assert decode_optional_bool("1") is True
        assert decode_optional_bool("0") is False

    def test_encode_bool(self):
        assert encode_bool(True) == "1"
        assert encode_bool(False) == "0"

    def test_unrecognized_value_is_value_error(self):
        with pytest.raises(ValueError):
            decode_bool("yes")


class TestMeasurements:
    """Power, energy and temperature scaling."""

    def test_power_in_watt(self):
        assert decode_power("12340\n") == pytest.approx(12.34)

    def test_power_inval(self):
        assert decode_power("inval\n") is None

    def test_energy(self):
        assert decode_energy("7073") == pytest.approx(7.073)
        assert decode_energy("inval") is None

    def test_temperature_tenths(self):
        assert decode_temperature("215\n") == pytest.approx(21.5)
        assert decode_temperature("-15") == pytest.approx(-1.5)
        assert decode_temperature("inval") is None

    def test_temperature_rejects_garbage(self):
        with pytest.raises(UnrecognizedValueError):
            decode_temperature("warm")


class TestHkrTemperature:
    """Thermostat half degree scale and its reserved values."""

    @pytest.mark.parametrize("raw", range(16, 57))
    def test_scale_roundtrip(self, raw):
        value = decode_hkr_temperature(str(raw))
        assert value == raw / 2
        assert encode_hkr_temperature(value) == str(raw)

    def test_bounds(self):
        assert decode_hkr_temperature("16") == 8.0
        assert decode_hkr_temperature("56") == 28.0

    def test_sentinels(self):
        assert decode_hkr_temperature("254\n") is HkrSentinel.ON
        assert decode_hkr_temperature("253\n") is HkrSentinel.OFF
        assert encode_hkr_temperature(HkrSentinel.ON) == "254"
        assert encode_hkr_temperature(HkrSentinel.OFF) == "253"

    @pytest.mark.parametrize("raw", ["15", "57", "100", "-3", "252", "255"])
    def test_rejects_values_off_the_scale(self, raw):
        with pytest.raises(UnrecognizedValueError) as exc:
            decode_hkr_temperature(raw)
        assert exc.value.value == raw

    def test_measured_temperature_is_not_limited(self):
        assert decode_hkr_measured("12\n") == 6.0
        assert decode_hkr_measured("60") == 30.0

    def test_encode_rounds_to_half_degrees(self):
        assert encode_hkr_temperature(21.0) == "42"
        assert encode_hkr_temperature(21.5) == "43"


class TestEnums:
    """On/off codes and blind targets."""

    def test_on_off(self):
        assert decode_on_off("0\n") is OnOff.OFF
        assert decode_on_off("1") is OnOff.ON
        assert decode_on_off("2") is OnOff.TOGGLE
        assert encode_on_off(OnOff.TOGGLE) == "2"

    def test_on_off_unknown(self):
        with pytest.raises(UnrecognizedValueError) as exc:
            decode_on_off("3")
        assert exc.value.value == "3"

    def test_blind_target(self):
        assert encode_blind_target(BlindTarget.OPEN) == "open"
        assert encode_blind_target(BlindTarget.STOP) == "stop"
        assert decode_blind_target("close\n") is BlindTarget.CLOSE

    def test_blind_target_unknown(self):
        with pytest.raises(UnrecognizedValueError):
            decode_blind_target("halfway")


class TestListsAndTime:
    """Identifier lists, durations and timestamps."""

    def test_list(self):
        assert decode_list("111,222,333\n") == ["111", "222", "333"]

    def test_empty_list(self):
        assert decode_list("\n") == []
        assert decode_list("") == []

    def test_duration_in_tenths(self):
        assert encode_duration(timedelta(seconds=1)) == "10"
        assert encode_duration(timedelta(milliseconds=250)) == "2"
        assert encode_duration(None) == "0"

    def test_timestamp(self):
        assert decode_timestamp("1700000000\n") == datetime(
            2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc
        )

    def test_timestamp_zero_is_none(self):
        assert decode_timestamp("0\n") is None

    def test_encode_timestamp(self):
        moment = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert encode_timestamp(moment) == "1700000000"
        assert encode_timestamp(None) == "0"


class TestParseXml:
    """Document parsing."""

    def test_parse(self):
        document = parse_xml('<State code="1"><latestain>123</latestain></State>')
        assert document["State"]["@code"] == "1"
        assert document["State"]["latestain"] == "123"

    def test_malformed(self):
        with pytest.raises(UnrecognizedValueError):
            parse_xml("<devicelist><device>")
