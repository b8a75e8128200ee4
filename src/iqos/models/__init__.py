"""Data models for IQOS devices."""

from .capabilities import FEATURE_MIN_TIER, Feature, require, supported_features, supports
from .device_info import DeviceInfo
from .enums import BrightnessLevel, DeviceState, DeviceTier, FlexBatteryMode
from .flexbattery import FlexBatteryState
from .vibration import VibrationSettings

__all__ = [
    "BrightnessLevel",
    "DeviceInfo",
    "DeviceState",
    "DeviceTier",
    "Feature",
    "FEATURE_MIN_TIER",
    "FlexBatteryMode",
    "FlexBatteryState",
    "VibrationSettings",
    "require",
    "supported_features",
    "supports",
]
