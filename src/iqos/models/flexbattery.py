"""FlexBattery state model (ILUMA i)."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import FlexBatteryMode


@dataclass(frozen=True, slots=True)
class FlexBatteryState:
    """FlexBattery mode plus pause mode.

    Pause mode only exists in performance mode and must be None in eco mode.
    """

    mode: FlexBatteryMode
    pause_mode: bool | None = None

    def __post_init__(self) -> None:
        if self.mode is FlexBatteryMode.ECO and self.pause_mode is not None:
            raise ValueError("pause_mode is only available in performance mode")

    def __str__(self) -> str:
        text = f"FlexBattery mode: {self.mode}"
        if self.pause_mode is not None:
            text += f"\nPause mode: {'on' if self.pause_mode else 'off'}"
        return text
