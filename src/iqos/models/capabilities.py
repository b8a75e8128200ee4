"""Capability gating by device tier."""

from __future__ import annotations

from enum import Enum
from typing import Final

from ..exceptions import CapabilityError
from .enums import DeviceTier


class Feature(Enum):
    """Device features that are gated by tier."""
    BATTERY = "battery"
    LOCK = "lock"
    FIND_MY_IQOS = "vibrate"
    VIBRATION_SETTINGS = "vibration settings"
    CHARGE_START_VIBRATION = "charge start vibration"
    BRIGHTNESS = "brightness"
    AUTOSTART = "autostart"
    SMART_GESTURE = "smart gesture"
    FLEXPUFF = "FlexPuff"
    FLEXBATTERY = "FlexBattery"


FEATURE_MIN_TIER: Final[dict[Feature, DeviceTier]] = {
    Feature.BATTERY: DeviceTier.BASELINE,
    Feature.LOCK: DeviceTier.BASELINE,
    Feature.FIND_MY_IQOS: DeviceTier.BASELINE,
    Feature.VIBRATION_SETTINGS: DeviceTier.BASELINE,
    Feature.CHARGE_START_VIBRATION: DeviceTier.ENHANCED,
    Feature.BRIGHTNESS: DeviceTier.ENHANCED,
    Feature.AUTOSTART: DeviceTier.ENHANCED,
    Feature.SMART_GESTURE: DeviceTier.ENHANCED,
    Feature.FLEXPUFF: DeviceTier.ENHANCED,
    Feature.FLEXBATTERY: DeviceTier.ENHANCED_PLUS,
}


def supports(tier: DeviceTier, feature: Feature) -> bool:
    """Check whether a tier supports a feature."""
    return tier >= FEATURE_MIN_TIER[feature]


def require(tier: DeviceTier, feature: Feature) -> None:
    """Fail if a tier does not support a feature.

    Raises:
        CapabilityError: If tier is below the feature's minimum tier
    """
    required = FEATURE_MIN_TIER[feature]
    if tier < required:
        raise CapabilityError(feature, tier, required)


def supported_features(tier: DeviceTier) -> list[Feature]:
    """List features available on a tier, in declaration order."""
    return [feature for feature in Feature if supports(tier, feature)]
