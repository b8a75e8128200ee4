"""Test protocol response parsing."""

import pytest

from iqos.exceptions import InvalidResponseError, ProtocolError
from iqos.models.enums import BrightnessLevel, FlexBatteryMode
from iqos.protocol.commands import HOLDER_PRODUCT_NUMBER_CLASS, STICK_PRODUCT_NUMBER_CLASS
from iqos.protocol.responses import (
    parse_battery_level,
    parse_brightness_response,
    parse_charge_start_response,
    parse_flexbattery_response,
    parse_flexpuff_response,
    parse_pausemode_response,
    parse_product_number_response,
    parse_vibration_response,
    validate_response,
)


def _corrupt(data: bytes, index: int = 2) -> bytes:
    """Flip one header byte."""
    corrupted = bytearray(data)
    corrupted[index] ^= 0xFF
    return bytes(corrupted)


class TestValidateResponse:
    """Test header/length validation."""

    def test_accepts_matching_header(self):
        validate_response(b"\x01\x02\x03", b"\x01\x02", 3, "test")

    def test_too_short(self):
        with pytest.raises(InvalidResponseError, match="too short"):
            validate_response(b"\x01\x02", b"\x01\x02", 3, "test")

    def test_header_mismatch_includes_data(self):
        with pytest.raises(InvalidResponseError, match="data: 01 09 03") as exc_info:
            validate_response(b"\x01\x09\x03", b"\x01\x02", 3, "test")
        assert exc_info.value.data == b"\x01\x09\x03"


class TestParseBattery:
    """Test battery characteristic parsing."""

    def test_level(self, battery_status):
        assert parse_battery_level(battery_status) == 85

    def test_too_short(self):
        with pytest.raises(InvalidResponseError):
            parse_battery_level(b"\x00\x00")

    def test_out_of_range(self):
        with pytest.raises(InvalidResponseError, match="out of range"):
            parse_battery_level(b"\x00\x00\x65")


class TestParseVibration:
    """Test vibration settings load response parsing."""

    def test_bit_zero_of_each_byte(self, vibration_heat_and_puffend_response):
        settings = parse_vibration_response(vibration_heat_and_puffend_response)
        assert settings.when_heating_start is True
        assert settings.when_starting_to_use is False
        assert settings.when_puff_end is True
        assert settings.when_manually_terminated is False
        assert settings.when_charging_start is None

    def test_all_on(self, vibration_all_on_response):
        settings = parse_vibration_response(vibration_all_on_response)
        assert settings.is_complete
        assert all((
            settings.when_heating_start,
            settings.when_starting_to_use,
            settings.when_puff_end,
            settings.when_manually_terminated,
        ))

    def test_corrupted_header(self, vibration_all_on_response):
        with pytest.raises(ProtocolError):
            parse_vibration_response(_corrupt(vibration_all_on_response))


class TestParseChargeStart:
    """Test charge-start vibration response parsing."""

    def test_on(self, charge_start_on_response):
        assert parse_charge_start_response(charge_start_on_response) is True

    def test_off(self, charge_start_off_response):
        assert parse_charge_start_response(charge_start_off_response) is False

    def test_unknown_pattern(self, charge_start_on_response):
        data = bytearray(charge_start_on_response)
        data[9] = 0x05
        with pytest.raises(InvalidResponseError, match="pattern 0x05"):
            parse_charge_start_response(bytes(data))

    def test_short_frame(self, charge_start_on_response):
        with pytest.raises(InvalidResponseError, match="too short"):
            parse_charge_start_response(charge_start_on_response[:12])


class TestParseBrightness:
    """Test brightness response parsing."""

    def test_high(self, brightness_high_response):
        assert parse_brightness_response(brightness_high_response) is BrightnessLevel.HIGH

    def test_low(self, brightness_low_response):
        assert parse_brightness_response(brightness_low_response) is BrightnessLevel.LOW

    def test_unknown_level(self, brightness_high_response):
        data = bytearray(brightness_high_response)
        data[4] = 0x50
        with pytest.raises(InvalidResponseError, match="brightness level"):
            parse_brightness_response(bytes(data))

    def test_corrupted_header(self, brightness_low_response):
        with pytest.raises(ProtocolError):
            parse_brightness_response(_corrupt(brightness_low_response))


class TestParseFlexPuff:
    """Test FlexPuff response parsing."""

    def test_enabled(self, flexpuff_enabled_response):
        assert parse_flexpuff_response(flexpuff_enabled_response) is True

    def test_disabled(self, flexpuff_enabled_response):
        data = bytearray(flexpuff_enabled_response)
        data[5] = 0x00
        assert parse_flexpuff_response(bytes(data)) is False

    def test_unknown_state(self, flexpuff_enabled_response):
        data = bytearray(flexpuff_enabled_response)
        data[5] = 0x02
        with pytest.raises(InvalidResponseError):
            parse_flexpuff_response(bytes(data))


class TestParseFlexBattery:
    """Test FlexBattery and pause mode response parsing."""

    def test_performance(self, flexbattery_performance_response):
        assert parse_flexbattery_response(flexbattery_performance_response) is FlexBatteryMode.PERFORMANCE

    def test_eco(self, flexbattery_eco_response):
        assert parse_flexbattery_response(flexbattery_eco_response) is FlexBatteryMode.ECO

    def test_corrupted_header(self, flexbattery_eco_response):
        with pytest.raises(ProtocolError):
            parse_flexbattery_response(_corrupt(flexbattery_eco_response))

    def test_pausemode_on(self, pausemode_on_response):
        assert parse_pausemode_response(pausemode_on_response) is True

    def test_pausemode_wrong_frame(self, flexbattery_eco_response):
        with pytest.raises(InvalidResponseError, match="pause mode"):
            parse_pausemode_response(flexbattery_eco_response)


class TestParseProductNumber:
    """Test product number response parsing."""

    def test_holder(self, holder_product_number_response):
        text = parse_product_number_response(holder_product_number_response, HOLDER_PRODUCT_NUMBER_CLASS)
        assert text == "DK000123"

    def test_stick(self, stick_product_number_response):
        text = parse_product_number_response(stick_product_number_response, STICK_PRODUCT_NUMBER_CLASS)
        assert text == "DA000456"

    def test_class_mismatch(self, holder_product_number_response):
        with pytest.raises(InvalidResponseError):
            parse_product_number_response(holder_product_number_response, STICK_PRODUCT_NUMBER_CLASS)

    def test_empty(self):
        data = bytes([0x00, 0x08, 0x80, 0x01, 0x00, 0x00, 0x11])
        with pytest.raises(InvalidResponseError, match="empty"):
            parse_product_number_response(data, HOLDER_PRODUCT_NUMBER_CLASS)

    def test_not_ascii(self):
        data = bytes([0x00, 0x08, 0x80, 0x01, 0xC3, 0xA9, 0x11])
        with pytest.raises(InvalidResponseError, match="ASCII"):
            parse_product_number_response(data, HOLDER_PRODUCT_NUMBER_CLASS)
