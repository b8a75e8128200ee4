"""Scan for nearby IQOS devices."""

from __future__ import annotations

import logging

from bleak import BleakScanner

from .protocol.commands import DEVICE_NAME_PREFIX

_LOGGER = logging.getLogger(__name__)


async def discover_devices(timeout: float = 10.0) -> dict[str, str]:
    """Scan for IQOS holders.

    Args:
        timeout: Scan duration in seconds (default: 10)

    Returns:
        Mapping of advertised name to BLE address
    """
    _LOGGER.debug("Scanning for IQOS devices (%.1fs)", timeout)
    devices = await BleakScanner.discover(timeout=timeout)

    found = {
        device.name: device.address
        for device in devices
        if device.name and DEVICE_NAME_PREFIX in device.name
    }
    _LOGGER.info("Found %d IQOS device(s)", len(found))
    return found
