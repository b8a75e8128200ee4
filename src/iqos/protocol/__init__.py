"""BLE protocol implementation."""

from .commands import (
    BATTERY_CHARACTERISTIC_UUID,
    CONFIRMATION_SIGNAL,
    DEVICE_INFO_CHARACTERISTICS,
    DEVICE_INFO_SERVICE_UUID,
    SCP_CONTROL_CHARACTERISTIC_UUID,
    SERVICE_UUID,
    build_autostart_command,
    build_brightness_commands,
    build_flexbattery_command,
    build_flexpuff_command,
    build_pausemode_command,
    build_smartgesture_command,
    command_checksum,
    with_checksum,
)
from .responses import (
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
from .vibration import (
    build_charge_start_commands,
    build_vibration_commands,
    decode_register,
    encode_register,
    register_checksum,
)

__all__ = [
    "SERVICE_UUID",
    "BATTERY_CHARACTERISTIC_UUID",
    "SCP_CONTROL_CHARACTERISTIC_UUID",
    "DEVICE_INFO_SERVICE_UUID",
    "DEVICE_INFO_CHARACTERISTICS",
    "CONFIRMATION_SIGNAL",
    "command_checksum",
    "with_checksum",
    "build_autostart_command",
    "build_brightness_commands",
    "build_flexbattery_command",
    "build_flexpuff_command",
    "build_pausemode_command",
    "build_smartgesture_command",
    "register_checksum",
    "encode_register",
    "decode_register",
    "build_charge_start_commands",
    "build_vibration_commands",
    "validate_response",
    "parse_battery_level",
    "parse_brightness_response",
    "parse_vibration_response",
    "parse_charge_start_response",
    "parse_flexpuff_response",
    "parse_flexbattery_response",
    "parse_pausemode_response",
    "parse_product_number_response",
]
