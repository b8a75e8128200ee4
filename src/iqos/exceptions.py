"""Exceptions raised by the IQOS protocol engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.capabilities import Feature
    from .models.enums import DeviceTier


class IqosError(Exception):
    """Base exception for all IQOS errors."""


class TransportError(IqosError):
    """BLE layer failure (connect, read or write)."""


class BLEConnectionError(TransportError):
    """Connection to the device failed or was lost."""


class BLETimeoutError(TransportError):
    """A BLE operation timed out at the link layer."""


class NoResponseError(IqosError):
    """A load request was written but no notification arrived."""


class ProtocolError(IqosError):
    """Device replied with a frame that does not match the protocol.

    Attributes:
        data: The offending bytes, if any
    """

    def __init__(self, message: str, data: bytes | None = None):
        if data is not None:
            message = f"{message} (data: {data.hex(' ')})"
        super().__init__(message)
        self.data = data


class InvalidResponseError(ProtocolError):
    """Response frame is too short, has a wrong header or an unknown value."""


class CapabilityError(IqosError):
    """Operation is not supported by the connected device tier."""

    def __init__(self, feature: Feature, tier: DeviceTier, required: DeviceTier):
        super().__init__(
            f"{feature.value} requires {required.display_name} or newer, "
            f"device is {tier.display_name}"
        )
        self.feature = feature
        self.tier = tier
        self.required = required
