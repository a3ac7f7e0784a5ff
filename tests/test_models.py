"""Tests for binding XML answers to records."""

from datetime import datetime, timezone

import pytest

from api.base_api import UnrecognizedValueError
from api.codec import HkrSentinel, parse_xml
from api.models import (
    ColorDefaults,
    Device,
    DeviceList,
    DeviceStats,
    Functions,
    MetaData,
    MetaDataType,
    SubscriptionCode,
    SubscriptionState,
    TemplateList,
    TriggerList,
    bind_document,
)

from common import load_fixture


@pytest.fixture
def device_list() -> DeviceList:
    return bind_document(DeviceList, parse_xml(load_fixture("devicelist.xml")), "devicelist")


class TestDeviceList:
    """The getdevicelistinfos answer."""

    def test_header(self, device_list):
        assert device_list.version == "1"
        assert device_list.firmware_version == "7.57"
        assert len(device_list.devices) == 5
        assert len(device_list.groups) == 1

    def test_outlet(self, device_list):
        outlet = device_list.get("08761 0500005")
        assert outlet.name == "Bodhran"
        assert outlet.product_name == "FRITZ!DECT 200"
        assert outlet.is_present
        assert Functions.OUTLET in outlet.functions
        assert Functions.ENERGY_METER in outlet.functions
        assert Functions.THERMOSTAT not in outlet.functions
        assert outlet.switch.state is True
        assert outlet.switch.mode == "manuell"
        assert outlet.switch.lock is False
        assert outlet.simple_on_off.state is True
        assert outlet.power_meter.voltage == pytest.approx(231.475)
        assert outlet.power_meter.power == pytest.approx(12.34)
        assert outlet.power_meter.energy == 7073
        assert outlet.temperature.celsius == pytest.approx(21.5)
        assert outlet.temperature.offset == pytest.approx(-0.5)
        assert outlet.hkr is None

    def test_thermostat(self, device_list):
        hkr = device_list.get("09995 0125605").hkr
        assert hkr.actual == 20.5
        assert hkr.target is HkrSentinel.OFF
        assert hkr.comfort == 21.0
        assert hkr.eco == 16.0
        assert hkr.battery == 80
        assert hkr.battery_low is False
        assert hkr.device_lock is None
        assert hkr.window_open is False
        assert hkr.window_open_end is None
        assert hkr.boost_active is True
        assert hkr.boost_end == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert hkr.error_code == 0
        assert hkr.next_change.temperature is HkrSentinel.ON
        assert hkr.next_change.end_period == datetime(2023, 11, 14, 23, 13, 20, tzinfo=timezone.utc)

    def test_buttons(self, device_list):
        device = device_list.get("13096 0015206")
        assert not device.is_present
        assert device.temperature.celsius is None
        assert device.humidity.rel_humidity == 48
        assert [b.identifier for b in device.buttons] == ["13096 0015206-1", "13096 0015206-3"]
        assert device.buttons[0].name == "Taster: Oben rechts"
        assert device.buttons[0].last_pressed is not None
        assert device.buttons[1].last_pressed is None

    def test_alert(self, device_list):
        device = device_list.get("11934 0100883-1")
        assert Functions.ALARM_SENSOR in device.functions
        assert device.alert.state is True
        assert device.etsi_unit_info.unit_type == 514
        assert device.buttons == []

    def test_light(self, device_list):
        lamp = device_list.get("12701 0087042-1")
        assert lamp.functions & Functions.COLOR_CONTROL
        assert lamp.level_control.level == 128
        assert lamp.level_control.level_percentage == 50
        assert lamp.color_control.supported_modes == 5
        assert lamp.color_control.hue == 358
        assert lamp.color_control.temperature is None

    def test_group(self, device_list):
        group = device_list.get("grp303E4F-3F9F15D79")
        assert group in device_list.groups
        assert group.group_info.master_device_id == "0"
        assert group.group_info.members == ["16", "17"]
        assert group.switch.lock is None

    def test_unknown_ain(self, device_list):
        assert device_list.get("00000 0000000") is None

    def test_empty_list(self):
        device_list = bind_document(DeviceList, parse_xml('<devicelist version="1" />'), "devicelist")
        assert device_list.devices == []
        assert device_list.groups == []

    def test_wrong_root(self):
        with pytest.raises(UnrecognizedValueError):
            bind_document(DeviceList, parse_xml("<templatelist />"), "devicelist")


class TestSingleDevice:
    def test_device_infos(self):
        device = bind_document(Device, parse_xml(load_fixture("deviceinfos.xml")), "device")
        assert device.identifier == "08761 0500005"
        assert device.switch.state is False
        assert device.switch.lock is True
        assert device.power_meter.voltage is None
        assert device.power_meter.power == 0

    def test_cold_room_measurement_below_setpoint_scale(self):
        document = parse_xml("<device><hkr><tist>12</tist><tsoll>253</tsoll></hkr></device>")
        hkr = bind_document(Device, document, "device").hkr
        assert hkr.actual == 6.0
        assert hkr.target is HkrSentinel.OFF


class TestStats:
    def test_basic_stats(self):
        stats = bind_document(DeviceStats, parse_xml(load_fixture("devicestats.xml")), "devicestats")
        temperature = stats.temperature.stats[0]
        assert temperature.count == 4
        assert temperature.grid == 900
        assert temperature.values == [215, 213, None, 210]
        assert temperature.data_time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert stats.humidity is None
        assert [s.grid for s in stats.energy.stats] == [2678400, 86400]
        assert stats.power.stats[0].values == [12340, 0]


class TestTemplatesAndTriggers:
    def test_templates(self):
        templates = bind_document(
            TemplateList, parse_xml(load_fixture("templatelist.xml")), "templatelist"
        )
        summer, all_off = templates.templates
        assert summer.name == "Sommer"
        assert summer.id == "60008"
        assert summer.function_bitmask == 320
        assert summer.apply_mask == 4
        assert summer.device_ains == ["09995 0125605", "09995 0125606"]
        assert MetaData.from_json(summer.metadata).type is MetaDataType.THERMOSTAT_SUMMER
        assert all_off.metadata is None
        assert all_off.device_ains == ["08761 0500005"]

    def test_triggers(self):
        triggers = bind_document(TriggerList, parse_xml(load_fixture("triggerlist.xml")), "triggerlist")
        assert [(t.name, t.active) for t in triggers.triggers] == [
            ("Abendlicht", True),
            ("Urlaub", False),
        ]


class TestColorDefaults:
    def test_color_defaults(self):
        defaults = bind_document(
            ColorDefaults, parse_xml(load_fixture("colordefaults.xml")), "colordefaults"
        )
        red = defaults.hs_defaults.hs[0]
        assert red.hue_index == 1
        assert red.name.text == "Rot"
        assert red.name.enum == 5569
        assert [c.saturation for c in red.colors] == [180, 112, 54]
        assert red.colors[0].value == 255
        assert [t.value for t in defaults.temperature_defaults.temperatures] == [2700, 3000, 3400, 6500]


class TestSubscriptionState:
    def test_state(self):
        state = bind_document(
            SubscriptionState, parse_xml(load_fixture("subscriptionstate.xml")), "State"
        )
        assert state.code is SubscriptionCode.RUNNING
        assert state.latest_ain == "11934 0100883"

    def test_unknown_code(self):
        with pytest.raises(UnrecognizedValueError):
            bind_document(SubscriptionState, parse_xml('<State code="9" />'), "State")


class TestMetaData:
    def test_to_json_writes_member_name(self):
        meta = MetaData(icon=3, type=MetaDataType.THERMOSTAT_HOLIDAY)
        assert meta.to_json() == '{"icon":3,"type":"THERMOSTAT_HOLIDAY"}'

    def test_from_json_accepts_name_and_value(self):
        assert MetaData.from_json('{"type":"THERMOSTAT_SUMMER"}').type is MetaDataType.THERMOSTAT_SUMMER
        assert MetaData.from_json('{"type":"thermostat_summer"}').type is MetaDataType.THERMOSTAT_SUMMER

    def test_from_json_empty(self):
        assert MetaData.from_json("") == MetaData()

    def test_from_json_unknown_type(self):
        with pytest.raises(UnrecognizedValueError):
            MetaData.from_json('{"type":"sprinkler"}')
