"""Typed vibration settings."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Final, Sequence

# Textual option names accepted by VibrationSettings.from_args()
OPTION_FIELDS: Final[dict[str, str]] = {
    "charge": "when_charging_start",
    "heating": "when_heating_start",
    "starting": "when_starting_to_use",
    "puffend": "when_puff_end",
    "terminated": "when_manually_terminated",
}

REGISTER_FIELDS: Final[tuple[str, ...]] = (
    "when_heating_start",
    "when_starting_to_use",
    "when_puff_end",
    "when_manually_terminated",
)


def _parse_switch(option: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in ("on", "enable", "true"):
        return True
    if lowered in ("off", "disable", "false"):
        return False
    raise ValueError(f"Invalid value for {option}: {value!r} (expected 'on' or 'off')")


@dataclass(frozen=True, slots=True)
class VibrationSettings:
    """When the holder vibrates.

    Each field is tri-state: None means "not specified". A partial settings
    object is merged with the device's current settings before it is written.
    ``when_charging_start`` is only available on ILUMA and newer.
    """

    when_heating_start: bool | None = None
    when_starting_to_use: bool | None = None
    when_puff_end: bool | None = None
    when_manually_terminated: bool | None = None
    when_charging_start: bool | None = None

    @classmethod
    def from_args(cls, args: Sequence[str]) -> VibrationSettings:
        """Parse ``<option> <on|off>`` pairs.

        Example: ``["heating", "on", "puffend", "off"]``

        Raises:
            ValueError: On unknown options, bad values or a dangling option
        """
        if len(args) % 2:
            raise ValueError(f"Missing value for option {args[-1]!r}")

        values: dict[str, bool] = {}
        for option, value in zip(args[::2], args[1::2]):
            name = OPTION_FIELDS.get(option.lower())
            if name is None:
                raise ValueError(
                    f"Unknown vibration option: {option!r} "
                    f"(expected one of {', '.join(OPTION_FIELDS)})"
                )
            values[name] = _parse_switch(option, value)
        return cls(**values)

    @property
    def is_complete(self) -> bool:
        """True when all four register flags are specified."""
        return all(getattr(self, name) is not None for name in REGISTER_FIELDS)

    def merged_with(self, current: VibrationSettings) -> VibrationSettings:
        """Fill unspecified fields from ``current``."""
        updates = {
            f.name: getattr(current, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None
        }
        return replace(self, **updates)

    def describe(self) -> str:
        """Multi-line human readable summary."""
        lines = ["Vibration Settings"]
        if self.when_charging_start is not None:
            lines.append(f"\twhen charge start: {self.when_charging_start}")
        lines.extend([
            f"\twhen heating: {self.when_heating_start}",
            f"\twhen starting: {self.when_starting_to_use}",
            f"\twhen puff end soon: {self.when_puff_end}",
            f"\twhen terminated: {self.when_manually_terminated}",
        ])
        return "\n".join(lines)
