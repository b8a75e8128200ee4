"""Vibration register codec.

The four holder vibration triggers live in one 16-bit register sent as
``[header:6][reg_hi:1][reg_lo:1][checksum:1]``. The trailer is an XOR fold
over the set bits, not the generic command checksum.

Charge-start vibration is not part of the register. It is toggled by a
separate seven frame sequence on ILUMA and newer.
"""

from __future__ import annotations

from typing import Final

from ..exceptions import InvalidResponseError
from ..models.vibration import VibrationSettings
from .commands import (
    CHARGE_START_VIBRATION_OFF_SIGNALS,
    CHARGE_START_VIBRATION_ON_SIGNALS,
    VIBRATION_REGISTER_HEADER,
)

WHEN_PUFF_END = 0x0001
WHEN_MANUALLY_TERMINATED = 0x0010
WHEN_HEATING_START = 0x0100
WHEN_STARTING_TO_USE = 0x1000

REGISTER_CHECKSUM_BASE = 0x77

# (register bit, XOR term)
_CHECKSUM_TERMS: Final[tuple[tuple[int, int], ...]] = (
    (WHEN_PUFF_END, 0x07),
    (WHEN_MANUALLY_TERMINATED, 0x70),
    (WHEN_HEATING_START, 0x15),
    (WHEN_STARTING_TO_USE, 0x57),
)

REGISTER_MASK = WHEN_PUFF_END | WHEN_MANUALLY_TERMINATED | WHEN_HEATING_START | WHEN_STARTING_TO_USE

REGISTER_FRAME_LENGTH = len(VIBRATION_REGISTER_HEADER) + 3


def register_checksum(register: int) -> int:
    """Calculate the trailer byte for a register value.

    Args:
        register: 16-bit register value

    Returns:
        Checksum byte
    """
    checksum = REGISTER_CHECKSUM_BASE
    for bit, term in _CHECKSUM_TERMS:
        if register & bit:
            checksum ^= term
    return checksum


def pack_register(settings: VibrationSettings) -> int:
    """Pack the four trigger flags into a register value.

    Unspecified flags are packed as off.
    """
    register = 0
    if settings.when_heating_start:
        register |= WHEN_HEATING_START
    if settings.when_starting_to_use:
        register |= WHEN_STARTING_TO_USE
    if settings.when_puff_end:
        register |= WHEN_PUFF_END
    if settings.when_manually_terminated:
        register |= WHEN_MANUALLY_TERMINATED
    return register


def unpack_register(register: int) -> VibrationSettings:
    """Unpack a register value into fully specified settings."""
    return VibrationSettings(
        when_heating_start=bool(register & WHEN_HEATING_START),
        when_starting_to_use=bool(register & WHEN_STARTING_TO_USE),
        when_puff_end=bool(register & WHEN_PUFF_END),
        when_manually_terminated=bool(register & WHEN_MANUALLY_TERMINATED),
    )


def encode_register(settings: VibrationSettings) -> bytes:
    """Build the register update frame.

    An all-off register is still emitted; the device needs the explicit
    zero update.

    Returns:
        9-byte frame: header + reg_hi + reg_lo + checksum
    """
    register = pack_register(settings)
    return VIBRATION_REGISTER_HEADER + bytes([
        (register >> 8) & 0xFF,
        register & 0xFF,
        register_checksum(register),
    ])


def decode_register(frame: bytes) -> VibrationSettings:
    """Parse a register update frame built by encode_register().

    Raises:
        InvalidResponseError: On wrong length, header or checksum
    """
    if len(frame) != REGISTER_FRAME_LENGTH:
        raise InvalidResponseError(
            f"Register frame must be {REGISTER_FRAME_LENGTH} bytes, got {len(frame)}",
            frame,
        )
    if frame[:len(VIBRATION_REGISTER_HEADER)] != VIBRATION_REGISTER_HEADER:
        raise InvalidResponseError("Invalid vibration register header", frame)

    register = (frame[6] << 8) | frame[7]
    if register & ~REGISTER_MASK:
        raise InvalidResponseError(f"Unknown register bits 0x{register:04x}", frame)
    if frame[8] != register_checksum(register):
        raise InvalidResponseError(
            f"Register checksum mismatch: expected 0x{register_checksum(register):02x}, "
            f"got 0x{frame[8]:02x}",
            frame,
        )
    return unpack_register(register)


def build_charge_start_commands(enable: bool) -> tuple[bytes, ...]:
    """Build the charge-start vibration toggle sequence."""
    return CHARGE_START_VIBRATION_ON_SIGNALS if enable else CHARGE_START_VIBRATION_OFF_SIGNALS


def build_vibration_commands(
        settings: VibrationSettings,
        include_charge_start: bool = False,
) -> list[bytes]:
    """Build every frame needed to apply vibration settings.

    Args:
        settings: Settings to write (unset register flags are written as off)
        include_charge_start: Append the charge-start sequence when
            ``settings.when_charging_start`` is specified

    Returns:
        Register frame, optionally followed by seven charge-start frames
    """
    commands = [encode_register(settings)]
    if include_charge_start and settings.when_charging_start is not None:
        commands.extend(build_charge_start_commands(settings.when_charging_start))
    return commands
