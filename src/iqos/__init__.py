"""IQOS BLE Protocol Package.

  Pure Python package for controlling IQOS holders over Bluetooth Low Energy.
  """

from .classification import ClassificationResult, classify
from .device import IqosDevice
from .discovery import discover_devices
from .exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    CapabilityError,
    InvalidResponseError,
    IqosError,
    NoResponseError,
    ProtocolError,
    TransportError,
)
from .models.capabilities import Feature, supported_features, supports
from .models.device_info import DeviceInfo
from .models.enums import BrightnessLevel, DeviceState, DeviceTier, FlexBatteryMode
from .models.flexbattery import FlexBatteryState
from .models.vibration import VibrationSettings
from .protocol import SERVICE_UUID

__version__ = "0.1.0"

__all__ = [
    # Main API
    "IqosDevice",
    "discover_devices",
    "classify",
    "ClassificationResult",
    # Exceptions
    "IqosError",
    "TransportError",
    "BLEConnectionError",
    "BLETimeoutError",
    "NoResponseError",
    "ProtocolError",
    "InvalidResponseError",
    "CapabilityError",
    # Models
    "DeviceInfo",
    "FlexBatteryState",
    "VibrationSettings",
    # Enums
    "BrightnessLevel",
    "DeviceState",
    "DeviceTier",
    "Feature",
    "FlexBatteryMode",
    # Utilities
    "supports",
    "supported_features",
    # Constants
    "SERVICE_UUID",
]
