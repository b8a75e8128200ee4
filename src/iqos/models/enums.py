from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class DeviceTier(IntEnum):
    """Device capability tier.

    Ordered so that a richer tier compares greater than a poorer one.
    """
    BASELINE = 0       # IQOS ONE
    ENHANCED = 1       # IQOS ILUMA
    ENHANCED_PLUS = 2  # IQOS ILUMA i and newer

    @property
    def display_name(self) -> str:
        """Marketing name of the tier."""
        return TIER_DISPLAY_NAMES[self]


TIER_DISPLAY_NAMES: Final[dict[DeviceTier, str]] = {
    DeviceTier.BASELINE: "ONE",
    DeviceTier.ENHANCED: "ILUMA",
    DeviceTier.ENHANCED_PLUS: "ILUMA i",
}


class DeviceState(Enum):
    """Lifecycle of an IqosDevice."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"  # link up, tier unresolved
    READY = "ready"          # tier resolved, endpoints bound


class BrightnessLevel(Enum):
    """Holder LED brightness."""
    HIGH = "high"
    LOW = "low"

    @classmethod
    def parse(cls, text: str) -> BrightnessLevel:
        """Parse 'high' or 'low' (case-insensitive).

        Raises:
            ValueError: If text is not a known level
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid brightness level: {text!r} (expected 'high' or 'low')") from None

    def __str__(self) -> str:
        return self.value


class FlexBatteryMode(Enum):
    """FlexBattery charge strategy (ILUMA i)."""
    PERFORMANCE = "performance"
    ECO = "eco"

    @classmethod
    def parse(cls, text: str) -> FlexBatteryMode:
        """Parse 'performance' or 'eco' (case-insensitive).

        Raises:
            ValueError: If text is not a known mode
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid FlexBattery mode: {text!r} (expected 'performance' or 'eco')"
            ) from None

    def __str__(self) -> str:
        return self.value
