"""Test the signal catalog and command builders."""

import pytest

from iqos.models.enums import BrightnessLevel, FlexBatteryMode
from iqos.protocol.commands import (
    AUTOSTART_DISABLE_SIGNAL,
    AUTOSTART_ENABLE_SIGNAL,
    BRIGHTNESS_HIGH_SIGNALS,
    BRIGHTNESS_LOW_SIGNALS,
    CHARGE_START_VIBRATION_OFF_SIGNALS,
    CHARGE_START_VIBRATION_ON_SIGNALS,
    CONFIRMATION_SIGNAL,
    FLEXBATTERY_ECO_SIGNAL,
    FLEXBATTERY_PERFORMANCE_SIGNAL,
    FLEXPUFF_DISABLE_SIGNAL,
    FLEXPUFF_ENABLE_SIGNAL,
    LOCK_SIGNALS,
    PAUSEMODE_OFF_SIGNAL,
    PAUSEMODE_ON_SIGNAL,
    SMARTGESTURE_DISABLE_SIGNAL,
    SMARTGESTURE_ENABLE_SIGNAL,
    START_VIBRATE_SIGNAL,
    STOP_VIBRATE_SIGNAL,
    UNLOCK_SIGNALS,
    build_autostart_command,
    build_brightness_commands,
    build_flexbattery_command,
    build_flexpuff_command,
    build_pausemode_command,
    build_smartgesture_command,
    command_checksum,
    with_checksum,
)


class TestSignalCatalog:
    """Test fixed signals against captured traffic."""

    def test_confirmation_signal(self):
        assert CONFIRMATION_SIGNAL == bytes.fromhex("00c00100f6")

    def test_find_my_iqos_signals(self):
        assert START_VIBRATE_SIGNAL == bytes.fromhex("00c04522011e0000c3")
        assert STOP_VIBRATE_SIGNAL == bytes.fromhex("00c04522001e0000d5")

    def test_lock_sequences(self):
        """Lock and unlock are two-frame sequences sharing the reload frame."""
        assert len(LOCK_SIGNALS) == 2
        assert len(UNLOCK_SIGNALS) == 2
        assert LOCK_SIGNALS[0] == bytes.fromhex("00c9440402ff00005a")
        assert UNLOCK_SIGNALS[0] == bytes.fromhex("00c94404000000005d")
        assert LOCK_SIGNALS[1] == UNLOCK_SIGNALS[1] == bytes.fromhex("00c900041c")

    def test_charge_start_sequences_have_seven_frames(self):
        assert len(CHARGE_START_VIBRATION_ON_SIGNALS) == 7
        assert len(CHARGE_START_VIBRATION_OFF_SIGNALS) == 7
        # Trailing reload frames are identical
        assert CHARGE_START_VIBRATION_ON_SIGNALS[4:] == CHARGE_START_VIBRATION_OFF_SIGNALS[4:]

    def test_signals_are_bytes(self):
        for signal in (
                AUTOSTART_ENABLE_SIGNAL,
                SMARTGESTURE_ENABLE_SIGNAL,
                FLEXPUFF_ENABLE_SIGNAL,
                FLEXBATTERY_ECO_SIGNAL,
                PAUSEMODE_ON_SIGNAL,
        ):
            assert isinstance(signal, bytes)
            assert len(signal) == 9


class TestCommandChecksum:
    """Test the additive command checksum."""

    def test_reproduces_lock_frame_trailer(self):
        frame = LOCK_SIGNALS[0]
        assert command_checksum(frame[:-1]) == frame[-1]

    def test_empty(self):
        assert command_checksum(b"") == 0x48

    def test_wraps_at_eight_bits(self):
        assert command_checksum(b"\xff\x02") == (0x01 ^ 0x48)

    def test_is_order_independent(self):
        data = bytes([0x00, 0xC9, 0x44, 0x04, 0x02, 0xFF])
        assert command_checksum(data) == command_checksum(data[::-1])
        assert command_checksum(data) == command_checksum(bytes(sorted(data)))

    def test_with_checksum_appends_one_byte(self):
        frame = with_checksum(LOCK_SIGNALS[0][:-1])
        assert frame == LOCK_SIGNALS[0]


class TestCommandBuilders:
    """Test builders select the right signal."""

    def test_autostart(self):
        assert build_autostart_command(True) == AUTOSTART_ENABLE_SIGNAL
        assert build_autostart_command(False) == AUTOSTART_DISABLE_SIGNAL

    def test_smartgesture(self):
        assert build_smartgesture_command(True) == SMARTGESTURE_ENABLE_SIGNAL
        assert build_smartgesture_command(False) == SMARTGESTURE_DISABLE_SIGNAL

    def test_flexpuff_enable_and_disable_differ(self):
        assert build_flexpuff_command(True) == FLEXPUFF_ENABLE_SIGNAL
        assert build_flexpuff_command(False) == FLEXPUFF_DISABLE_SIGNAL
        assert FLEXPUFF_ENABLE_SIGNAL != FLEXPUFF_DISABLE_SIGNAL

    def test_pausemode(self):
        assert build_pausemode_command(True) == PAUSEMODE_ON_SIGNAL
        assert build_pausemode_command(False) == PAUSEMODE_OFF_SIGNAL

    @pytest.mark.parametrize(
        "level,expected",
        [
            (BrightnessLevel.HIGH, BRIGHTNESS_HIGH_SIGNALS),
            (BrightnessLevel.LOW, BRIGHTNESS_LOW_SIGNALS),
        ],
    )
    def test_brightness(self, level, expected):
        commands = build_brightness_commands(level)
        assert commands == expected
        assert len(commands) == 3

    def test_flexbattery(self):
        assert build_flexbattery_command(FlexBatteryMode.ECO) == FLEXBATTERY_ECO_SIGNAL
        assert build_flexbattery_command(FlexBatteryMode.PERFORMANCE) == FLEXBATTERY_PERFORMANCE_SIGNAL
