"""BLE response validation and parsing.

Each parser checks the fixed header of a notification before looking at the
payload. A frame that does not match is always an error, never a default.
"""

from __future__ import annotations

from ..exceptions import InvalidResponseError
from ..models.enums import BrightnessLevel, FlexBatteryMode
from ..models.vibration import VibrationSettings

BRIGHTNESS_RESPONSE_HEADER = bytes([0x00, 0xC0, 0x86, 0x23])
VIBRATION_RESPONSE_HEADER = bytes([0x00, 0x08, 0x84, 0x23, 0x10])
CHARGE_START_RESPONSE_HEADER = bytes([0x00, 0x08, 0x8B, 0x04, 0x04])
FLEXPUFF_RESPONSE_HEADER = bytes([0x00, 0x90, 0x85, 0x22, 0x03])
FLEXBATTERY_RESPONSE_HEADER = bytes([0x00, 0x08, 0x84, 0x25])
PAUSEMODE_RESPONSE_HEADER = bytes([0x00, 0x08, 0x87, 0x24, 0x02])
PRODUCT_NUMBER_RESPONSE_PREFIX = bytes([0x00, 0x08, 0x80])

BRIGHTNESS_HIGH_VALUE = 0x64
BRIGHTNESS_LOW_VALUE = 0x1E

CHARGE_START_ON_VALUE = 0x00
CHARGE_START_OFF_VALUE = 0x09


def validate_response(data: bytes, header: bytes, min_length: int, what: str) -> None:
    """Validate length and header prefix of a notification.

    Args:
        data: Raw notification payload
        header: Expected leading bytes
        min_length: Minimum total frame length
        what: Name of the setting, used in error messages

    Raises:
        InvalidResponseError: If too short or the header does not match
    """
    if len(data) < min_length:
        raise InvalidResponseError(
            f"{what} response too short: {len(data)} bytes (need {min_length})",
            data,
        )
    if data[:len(header)] != header:
        raise InvalidResponseError(
            f"Invalid {what} header: expected {header.hex(' ')}, "
            f"got {data[:len(header)].hex(' ')}",
            data,
        )


def _parse_flag(data: bytes, index: int, what: str) -> bool:
    flag = data[index]
    if flag == 0x01:
        return True
    if flag == 0x00:
        return False
    raise InvalidResponseError(f"Unknown {what} state 0x{flag:02x}", data)


def parse_battery_level(data: bytes) -> int:
    """Parse a battery characteristic read.

    Format: [flags:2][percent:1]...

    Returns:
        Holder battery level in percent

    Raises:
        InvalidResponseError: If too short or out of range
    """
    if len(data) < 3:
        raise InvalidResponseError(f"Battery data too short: {len(data)} bytes (need 3)", data)
    level = data[2]
    if level > 100:
        raise InvalidResponseError(f"Battery level out of range: {level}", data)
    return level


def parse_brightness_response(data: bytes) -> BrightnessLevel:
    """Parse brightness load response.

    Format: [00 C0 86 23][level:1][...] where level 0x64 = high, 0x1E = low
    """
    validate_response(data, BRIGHTNESS_RESPONSE_HEADER, 9, "brightness")
    level = data[4]
    if level == BRIGHTNESS_HIGH_VALUE:
        return BrightnessLevel.HIGH
    if level == BRIGHTNESS_LOW_VALUE:
        return BrightnessLevel.LOW
    raise InvalidResponseError(f"Unknown brightness level 0x{level:02x}", data)


def parse_vibration_response(data: bytes) -> VibrationSettings:
    """Parse vibration settings load response.

    Format: [00 08 84 23 10][reserved:1][heat_use:1][end_terminated:1][...]
    - heat_use: bit 0 = heating start, bit 4 = starting to use
    - end_terminated: bit 0 = puff end, bit 4 = manually terminated

    Charge-start vibration is not part of this frame and stays None.
    """
    validate_response(data, VIBRATION_RESPONSE_HEADER, 9, "vibration settings")
    heat_use_byte = data[6]
    end_terminated_byte = data[7]
    return VibrationSettings(
        when_heating_start=bool(heat_use_byte & 0x01),
        when_starting_to_use=bool(heat_use_byte & 0x10),
        when_puff_end=bool(end_terminated_byte & 0x01),
        when_manually_terminated=bool(end_terminated_byte & 0x10),
    )


def parse_charge_start_response(data: bytes) -> bool:
    """Parse charge-start vibration load response (ILUMA and newer).

    Format: [00 08 8B 04 04][reserved:4][pattern:1][...:8][checksum:1]
    where pattern 0x00 = vibrate, 0x09 = silent
    """
    validate_response(data, CHARGE_START_RESPONSE_HEADER, 19, "charge start vibration")
    pattern = data[9]
    if pattern == CHARGE_START_ON_VALUE:
        return True
    if pattern == CHARGE_START_OFF_VALUE:
        return False
    raise InvalidResponseError(f"Unknown charge start vibration pattern 0x{pattern:02x}", data)


def parse_flexpuff_response(data: bytes) -> bool:
    """Parse FlexPuff load response.

    Format: [00 90 85 22 03][enabled:1][...]
    """
    validate_response(data, FLEXPUFF_RESPONSE_HEADER, 9, "FlexPuff")
    return _parse_flag(data, 5, "FlexPuff")


def parse_flexbattery_response(data: bytes) -> FlexBatteryMode:
    """Parse FlexBattery mode load response.

    Format: [00 08 84 25][mode:1][...] where 0x00 = performance, 0x01 = eco
    """
    validate_response(data, FLEXBATTERY_RESPONSE_HEADER, 9, "FlexBattery")
    mode = data[4]
    if mode == 0x00:
        return FlexBatteryMode.PERFORMANCE
    if mode == 0x01:
        return FlexBatteryMode.ECO
    raise InvalidResponseError(f"Unknown FlexBattery mode 0x{mode:02x}", data)


def parse_pausemode_response(data: bytes) -> bool:
    """Parse FlexBattery pause mode load response.

    Format: [00 08 87 24 02][enabled:1][...]
    """
    validate_response(data, PAUSEMODE_RESPONSE_HEADER, 9, "pause mode")
    return _parse_flag(data, 5, "pause mode")


def parse_product_number_response(data: bytes, class_id: int) -> str:
    """Parse a product number load response.

    Format: [00 08 80][class:1][ascii:n][checksum:1], NUL padded

    Args:
        data: Raw notification payload
        class_id: Class byte of the request that was sent

    Returns:
        Product number string

    Raises:
        InvalidResponseError: If the header, class or text is malformed
    """
    header = PRODUCT_NUMBER_RESPONSE_PREFIX + bytes([class_id])
    validate_response(data, header, len(header) + 2, "product number")

    raw = data[len(header):-1].strip(b"\x00")
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidResponseError("Product number is not ASCII", data) from e

    if not text or not text.isprintable():
        raise InvalidResponseError("Product number is empty or not printable", data)
    return text
