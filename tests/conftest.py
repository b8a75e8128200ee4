"""Shared fixtures: notification frames in the layout holders send."""

import pytest


@pytest.fixture
def battery_status():
    """Battery characteristic read at 85%."""
    return bytes([0x00, 0x00, 0x55, 0x00, 0x00, 0x00, 0x00])


@pytest.fixture
def vibration_heat_and_puffend_response():
    """Vibration load response with heating start and puff end enabled."""
    return bytes([0x00, 0x08, 0x84, 0x23, 0x10, 0x00, 0x01, 0x01, 0x00])


@pytest.fixture
def vibration_all_on_response():
    """Vibration load response with all four triggers enabled."""
    return bytes([0x00, 0x08, 0x84, 0x23, 0x10, 0x00, 0x11, 0x11, 0x00])


@pytest.fixture
def charge_start_on_response():
    """Charge-start vibration load response, vibrate on charge start."""
    return bytes([0x00, 0x08, 0x8B, 0x04, 0x04, 0x00, 0x00, 0x00, 0x00,
                  0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x56])


@pytest.fixture
def charge_start_off_response():
    """Charge-start vibration load response, silent on charge start."""
    return bytes([0x00, 0x08, 0x8B, 0x04, 0x04, 0x00, 0x00, 0x00, 0x00,
                  0x09, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0xEE])


@pytest.fixture
def brightness_high_response():
    return bytes([0x00, 0xC0, 0x86, 0x23, 0x64, 0x00, 0x00, 0x00, 0x6B])


@pytest.fixture
def brightness_low_response():
    return bytes([0x00, 0xC0, 0x86, 0x23, 0x1E, 0x00, 0x00, 0x00, 0xC5])


@pytest.fixture
def flexpuff_enabled_response():
    return bytes([0x00, 0x90, 0x85, 0x22, 0x03, 0x01, 0x00, 0x00, 0x4E])


@pytest.fixture
def flexbattery_performance_response():
    return bytes([0x00, 0x08, 0x84, 0x25, 0x00, 0x00, 0x00, 0x00, 0x1A])


@pytest.fixture
def flexbattery_eco_response():
    return bytes([0x00, 0x08, 0x84, 0x25, 0x01, 0x00, 0x00, 0x00, 0x0C])


@pytest.fixture
def pausemode_on_response():
    return bytes([0x00, 0x08, 0x87, 0x24, 0x02, 0x01, 0x00, 0x00, 0x44])


@pytest.fixture
def holder_product_number_response():
    """Holder product number load response ("DK000123", NUL padded)."""
    return bytes([0x00, 0x08, 0x80, 0x01]) + b"DK000123" + bytes([0x00, 0x00, 0x5F])


@pytest.fixture
def stick_product_number_response():
    """Stick product number load response ("DA000456", NUL padded)."""
    return bytes([0x00, 0x08, 0x80, 0x02]) + b"DA000456" + bytes([0x00, 0x00, 0x21])
