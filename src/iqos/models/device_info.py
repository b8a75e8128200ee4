"""Descriptive device information."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import DeviceTier


@dataclass
class DeviceInfo:
    """Strings read once while the device is being initialized.

    Attributes:
        name: Advertised local name
        address: BLE address
        model_number: Device Information Service model number
        serial_number: Device Information Service serial number
        software_revision: Device Information Service software revision
        manufacturer_name: Device Information Service manufacturer
        stick_product_number: Stick product number (ILUMA and newer)
        holder_product_number: Holder product number (ILUMA and newer)
    """
    name: str | None = None
    address: str | None = None
    model_number: str = "Unknown"
    serial_number: str = "Unknown"
    software_revision: str = "Unknown"
    manufacturer_name: str = "Unknown"
    stick_product_number: str | None = None
    holder_product_number: str | None = None

    def describe(self, tier: DeviceTier) -> str:
        """Multi-line summary, laid out per tier."""
        lines = [
            f"Model: {tier.display_name}",
            f"Model Number: {self.model_number}",
            f"Serial Number: {self.serial_number}",
            f"Manufacturer Name: {self.manufacturer_name}",
        ]
        if tier is DeviceTier.BASELINE:
            lines.append(f"Software Revision: {self.software_revision}")
            return "\n".join(lines)

        lines.extend([
            "",
            "Stick:",
            f"\tProduct Number: {self.stick_product_number or 'Unknown'}",
            f"\tSoftware Revision: {self.software_revision}",
            "Holder:",
            f"\tHolder Product Number: {self.holder_product_number or 'Unknown'}",
        ])
        return "\n".join(lines)
