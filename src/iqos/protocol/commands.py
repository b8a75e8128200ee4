"""BLE protocol signals for IQOS devices.

Every constant below is sent verbatim to the SCP control characteristic.
Frames are ``[target:2][command:1][class:1][payload...][checksum:1]``, where
target ``0x00C0`` addresses the stick and ``0x00C9``/``0x00D2`` the holder.
"""

from __future__ import annotations

from typing import Final

from ..models.enums import BrightnessLevel, FlexBatteryMode

# GATT layout
SERVICE_UUID = "daebb240-b041-11e4-9e45-0002a5d5c51b"
BATTERY_CHARACTERISTIC_UUID = "f8a54120-b041-11e4-9be7-0002a5d5c51b"
SCP_CONTROL_CHARACTERISTIC_UUID = "e16c6e20-b041-11e4-a4c3-0002a5d5c51b"

DEVICE_INFO_SERVICE_UUID = "0000180a-0000-1000-8000-00805f9b34fb"
MODEL_NUMBER_CHAR_UUID = "00002a24-0000-1000-8000-00805f9b34fb"
SERIAL_NUMBER_CHAR_UUID = "00002a25-0000-1000-8000-00805f9b34fb"
SOFTWARE_REVISION_CHAR_UUID = "00002a28-0000-1000-8000-00805f9b34fb"
MANUFACTURER_NAME_CHAR_UUID = "00002a29-0000-1000-8000-00805f9b34fb"

DEVICE_INFO_CHARACTERISTICS: Final[dict[str, str]] = {
    "model_number": MODEL_NUMBER_CHAR_UUID,
    "serial_number": SERIAL_NUMBER_CHAR_UUID,
    "software_revision": SOFTWARE_REVISION_CHAR_UUID,
    "manufacturer_name": MANUFACTURER_NAME_CHAR_UUID,
}

# Advertised names
DEVICE_NAME_PREFIX = "IQOS"
BASELINE_NAME_MARKER = "ONE"

COMMAND_CHECKSUM_XOR = 0x48

# Generic
CONFIRMATION_SIGNAL = bytes([0x00, 0xC0, 0x01, 0x00, 0xF6])

# Find my IQOS
START_VIBRATE_SIGNAL = bytes([0x00, 0xC0, 0x45, 0x22, 0x01, 0x1E, 0x00, 0x00, 0xC3])
STOP_VIBRATE_SIGNAL = bytes([0x00, 0xC0, 0x45, 0x22, 0x00, 0x1E, 0x00, 0x00, 0xD5])

# Lock (followed by CONFIRMATION_SIGNAL)
LOCK_SIGNALS: Final[tuple[bytes, ...]] = (
    bytes([0x00, 0xC9, 0x44, 0x04, 0x02, 0xFF, 0x00, 0x00, 0x5A]),
    bytes([0x00, 0xC9, 0x00, 0x04, 0x1C]),
)
UNLOCK_SIGNALS: Final[tuple[bytes, ...]] = (
    bytes([0x00, 0xC9, 0x44, 0x04, 0x00, 0x00, 0x00, 0x00, 0x5D]),
    bytes([0x00, 0xC9, 0x00, 0x04, 0x1C]),
)

# Brightness
LOAD_BRIGHTNESS_SIGNAL = bytes([0x00, 0xC0, 0x02, 0x23, 0xC3])
BRIGHTNESS_HIGH_SIGNALS: Final[tuple[bytes, ...]] = (
    bytes([0x00, 0xC0, 0x46, 0x23, 0x64, 0x00, 0x00, 0x00, 0x4F]),
    bytes([0x00, 0xC0, 0x02, 0x23, 0xC3]),
    bytes([0x00, 0xC9, 0x44, 0x24, 0x64, 0x00, 0x00, 0x00, 0x34]),
)
BRIGHTNESS_LOW_SIGNALS: Final[tuple[bytes, ...]] = (
    bytes([0x00, 0xC0, 0x46, 0x23, 0x1E, 0x00, 0x00, 0x00, 0xE1]),
    bytes([0x00, 0xC0, 0x02, 0x23, 0xC3]),
    bytes([0x00, 0xC9, 0x44, 0x24, 0x1E, 0x00, 0x00, 0x00, 0x9A]),
)

# Vibration
LOAD_VIBRATION_SETTINGS_SIGNAL = bytes([0x00, 0xC9, 0x00, 0x23, 0xE9])
VIBRATION_REGISTER_HEADER = bytes([0x00, 0xC9, 0x44, 0x23, 0x10, 0x00])

LOAD_CHARGE_START_VIBRATION_SIGNAL = bytes([0x00, 0xC9, 0x07, 0x04, 0x04, 0x00, 0x00, 0x00, 0x08])

CHARGE_START_VIBRATION_ON_SIGNALS: Final[tuple[bytes, ...]] = (
    bytes([0x01, 0xC9, 0x4F, 0x04, 0x5B, 0x04, 0x00, 0xFF, 0xFF, 0xFF,
           0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00]),
    bytes([0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x06]),
    bytes([0x01, 0xC9, 0x4F, 0x04, 0x72, 0x05, 0x00, 0xFF, 0xFF, 0xFF,
           0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00]),
    bytes([0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x72]),
    bytes([0x00, 0xC9, 0x47, 0x04, 0x00, 0xFF, 0xFF, 0x00, 0xDA]),
    bytes([0x00, 0xC9, 0x07, 0x04, 0x04, 0x00, 0x00, 0x00, 0x08]),
    bytes([0x00, 0xC9, 0x07, 0x04, 0x05, 0x00, 0x00, 0x00, 0x1E]),
)
CHARGE_START_VIBRATION_OFF_SIGNALS: Final[tuple[bytes, ...]] = (
    bytes([0x01, 0xC9, 0x4F, 0x04, 0x64, 0x04, 0x00, 0xFF, 0xFF, 0xFF,
           0x09, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00]),
    bytes([0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x0C]),
    bytes([0x01, 0xC9, 0x4F, 0x04, 0x4D, 0x05, 0x00, 0xFF, 0xFF, 0xFF,
           0x09, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00]),
    bytes([0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x78]),
    bytes([0x00, 0xC9, 0x47, 0x04, 0x00, 0xFF, 0xFF, 0x00, 0xDA]),
    bytes([0x00, 0xC9, 0x07, 0x04, 0x04, 0x00, 0x00, 0x00, 0x08]),
    bytes([0x00, 0xC9, 0x07, 0x04, 0x05, 0x00, 0x00, 0x00, 0x1E]),
)

# Autostart / smart gesture (holder settings register 0x24)
AUTOSTART_ENABLE_SIGNAL = bytes([0x00, 0xC9, 0x47, 0x24, 0x01, 0x01, 0x00, 0x00, 0x3F])
AUTOSTART_DISABLE_SIGNAL = bytes([0x00, 0xC9, 0x47, 0x24, 0x01, 0x00, 0x00, 0x00, 0x54])
SMARTGESTURE_ENABLE_SIGNAL = bytes([0x00, 0xC9, 0x47, 0x24, 0x04, 0x01, 0x00, 0x00, 0x3C])
SMARTGESTURE_DISABLE_SIGNAL = bytes([0x00, 0xC9, 0x47, 0x24, 0x04, 0x00, 0x00, 0x00, 0x57])

# FlexPuff
LOAD_FLEXPUFF_SIGNAL = bytes([0x00, 0xD2, 0x05, 0x22, 0x03, 0x00, 0x00, 0x00, 0x17])
FLEXPUFF_ENABLE_SIGNAL = bytes([0x00, 0xD2, 0x45, 0x22, 0x03, 0x01, 0x00, 0x00, 0x0A])
FLEXPUFF_DISABLE_SIGNAL = bytes([0x00, 0xD2, 0x45, 0x22, 0x03, 0x00, 0x00, 0x00, 0x61])

# FlexBattery
LOAD_FLEXBATTERY_SIGNAL = bytes([0x00, 0xC9, 0x00, 0x25, 0xFB])
FLEXBATTERY_ECO_SIGNAL = bytes([0x00, 0xC9, 0x44, 0x25, 0x01, 0x00, 0x00, 0x00, 0x4D])
FLEXBATTERY_PERFORMANCE_SIGNAL = bytes([0x00, 0xC9, 0x44, 0x25, 0x00, 0x00, 0x00, 0x00, 0x5B])

LOAD_PAUSEMODE_SIGNAL = bytes([0x00, 0xC9, 0x07, 0x24, 0x01, 0x00, 0x00, 0x00, 0x22])
PAUSEMODE_ON_SIGNAL = bytes([0x00, 0xC9, 0x47, 0x24, 0x02, 0x01, 0x00, 0x00, 0x05])
PAUSEMODE_OFF_SIGNAL = bytes([0x00, 0xC9, 0x47, 0x24, 0x02, 0x00, 0x00, 0x00, 0x6E])

# Product numbers (class byte is echoed in the response header)
HOLDER_PRODUCT_NUMBER_CLASS = 0x01
STICK_PRODUCT_NUMBER_CLASS = 0x02
LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL = bytes([0x00, 0xC9, 0x00, HOLDER_PRODUCT_NUMBER_CLASS, 0x07])
LOAD_STICK_PRODUCT_NUMBER_SIGNAL = bytes([0x00, 0xC9, 0x00, STICK_PRODUCT_NUMBER_CLASS, 0x0E])


def command_checksum(data: bytes) -> int:
    """Calculate the additive command checksum.

    Sums all bytes with 8-bit wraparound and XORs the result with
    COMMAND_CHECKSUM_XOR. The result does not depend on byte order.

    Args:
        data: Command bytes without trailer

    Returns:
        Checksum byte (0-255)
    """
    return (sum(data) & 0xFF) ^ COMMAND_CHECKSUM_XOR


def with_checksum(data: bytes) -> bytes:
    """Append command_checksum() to a frame.

    Returns:
        Frame bytes followed by one checksum byte
    """
    return bytes(data) + bytes([command_checksum(data)])


def build_autostart_command(enable: bool) -> bytes:
    """Build the autostart update frame."""
    return AUTOSTART_ENABLE_SIGNAL if enable else AUTOSTART_DISABLE_SIGNAL


def build_smartgesture_command(enable: bool) -> bytes:
    """Build the smart gesture update frame."""
    return SMARTGESTURE_ENABLE_SIGNAL if enable else SMARTGESTURE_DISABLE_SIGNAL


def build_flexpuff_command(enable: bool) -> bytes:
    """Build the FlexPuff update frame."""
    return FLEXPUFF_ENABLE_SIGNAL if enable else FLEXPUFF_DISABLE_SIGNAL


def build_pausemode_command(enable: bool) -> bytes:
    """Build the FlexBattery pause mode update frame."""
    return PAUSEMODE_ON_SIGNAL if enable else PAUSEMODE_OFF_SIGNAL


def build_brightness_commands(level: BrightnessLevel) -> tuple[bytes, ...]:
    """Build the brightness update sequence for a level.

    Returns:
        Three frames: stick level, stick reload, holder level
    """
    if level is BrightnessLevel.HIGH:
        return BRIGHTNESS_HIGH_SIGNALS
    return BRIGHTNESS_LOW_SIGNALS


def build_flexbattery_command(mode: FlexBatteryMode) -> bytes:
    """Build the FlexBattery mode update frame."""
    if mode is FlexBatteryMode.ECO:
        return FLEXBATTERY_ECO_SIGNAL
    return FLEXBATTERY_PERFORMANCE_SIGNAL
