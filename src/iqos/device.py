"""Main IQOS BLE device class."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import TYPE_CHECKING, AsyncIterator

from .classification import classify
from .exceptions import NoResponseError, ProtocolError
from .models.capabilities import Feature, require, supports
from .models.device_info import DeviceInfo
from .models.enums import BrightnessLevel, DeviceState, DeviceTier, FlexBatteryMode
from .models.flexbattery import FlexBatteryState
from .models.vibration import VibrationSettings
from .protocol import (
    CONFIRMATION_SIGNAL,
    build_autostart_command,
    build_brightness_commands,
    build_flexbattery_command,
    build_flexpuff_command,
    build_pausemode_command,
    build_smartgesture_command,
    build_vibration_commands,
    parse_battery_level,
    parse_brightness_response,
    parse_charge_start_response,
    parse_flexbattery_response,
    parse_flexpuff_response,
    parse_pausemode_response,
    parse_product_number_response,
    parse_vibration_response,
)
from .protocol.commands import (
    HOLDER_PRODUCT_NUMBER_CLASS,
    LOAD_BRIGHTNESS_SIGNAL,
    LOAD_CHARGE_START_VIBRATION_SIGNAL,
    LOAD_FLEXBATTERY_SIGNAL,
    LOAD_FLEXPUFF_SIGNAL,
    LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL,
    LOAD_PAUSEMODE_SIGNAL,
    LOAD_STICK_PRODUCT_NUMBER_SIGNAL,
    LOAD_VIBRATION_SETTINGS_SIGNAL,
    LOCK_SIGNALS,
    START_VIBRATE_SIGNAL,
    STICK_PRODUCT_NUMBER_CLASS,
    STOP_VIBRATE_SIGNAL,
    UNLOCK_SIGNALS,
)
from .transport import BLEConnection

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class IqosDevice:
    """IQOS holder reachable over BLE.

    Main API for reading and changing holder settings. The device tier is
    resolved once while connecting; operations the tier does not support
    raise CapabilityError before anything is written.

    Usage:
        async with IqosDevice("AA:BB:CC:DD:EE:FF") as device:
            print(device.battery_percent)
            await device.set_brightness(BrightnessLevel.LOW)

        # Skip the scan with a BLEDevice from a previous discovery
        async with IqosDevice(mac, ble_device=ble_device) as device:
            await device.vibrate_start()

    Multi-frame updates (lock, brightness, vibration settings) are not
    transactional. Cancelling one part way leaves the holder with whatever
    frames were already written.
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            response_timeout: float = 5.0,
            assume_richer_tier: bool = True,
    ):
        """Initialize IQOS device.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from a previous scan
            timeout: BLE connection timeout in seconds (default: 10)
            response_timeout: Seconds to wait for a load response (default: 5)
            assume_richer_tier: Resolve an unanswered classification check to
                the richer tier (default: True)
        """
        self.mac_address = mac_address
        self.assume_richer_tier = assume_richer_tier
        self._connection = BLEConnection(
            mac_address,
            ble_device,
            timeout,
            response_timeout=response_timeout,
        )

        self._lock = asyncio.Lock()
        self._state = DeviceState.DISCONNECTED
        self._tier: DeviceTier | None = None
        self._info = DeviceInfo(address=mac_address)
        self._battery_percent: int | None = None

    async def __aenter__(self) -> IqosDevice:
        """Connect and classify device."""
        await self.connect_and_classify()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device."""
        await self.disconnect()

    @property
    def state(self) -> DeviceState:
        """Current lifecycle state."""
        return self._state

    @property
    def tier(self) -> DeviceTier:
        """Get resolved device tier."""
        if self._tier is None:
            raise RuntimeError("Device not classified - tier unknown")
        return self._tier

    @property
    def info(self) -> DeviceInfo:
        """Descriptive strings read during initialization."""
        return self._info

    @property
    def battery_percent(self) -> int:
        """Get last read holder battery level in percent."""
        self._require_ready()
        if self._battery_percent is None:
            raise RuntimeError("Battery level not read yet")
        return self._battery_percent

    async def connect_and_classify(self) -> None:
        """Connect, read device information and resolve the tier.

        Any failure disconnects and re-raises.

        Raises:
            TransportError: If the BLE link fails
            ProtocolError: If the battery read is malformed
        """
        if self._state is DeviceState.READY:
            return

        async with self._lock:
            try:
                await self._connection.connect()
                self._state = DeviceState.CONNECTED

                self._info = DeviceInfo(
                    name=self._connection.name,
                    address=self.mac_address,
                    **await self._connection.read_device_information(),
                )

                result = await classify(
                    self._connection.name,
                    self._connection,
                    assume_richer_tier=self.assume_richer_tier,
                )
                self._tier = result.tier
                self._info.holder_product_number = result.holder_product_number

                if self._tier >= DeviceTier.ENHANCED:
                    await self._read_product_numbers()

                self._battery_percent = parse_battery_level(
                    await self._connection.read_status()
                )
            except BaseException:
                await self._disconnect()
                raise

            self._state = DeviceState.READY

        _LOGGER.info(
            "Connected to %s (%s), battery %d%%",
            self._info.name or self.mac_address,
            self._tier.display_name,
            self._battery_percent,
        )

    async def _read_product_numbers(self) -> None:
        """Read stick and holder product numbers.

        These strings are descriptive only. A missing or malformed reply is
        logged and leaves the field unset.
        """
        if self._info.holder_product_number is None:
            self._info.holder_product_number = await self._load_product_number(
                LOAD_HOLDER_PRODUCT_NUMBER_SIGNAL, HOLDER_PRODUCT_NUMBER_CLASS
            )
        self._info.stick_product_number = await self._load_product_number(
            LOAD_STICK_PRODUCT_NUMBER_SIGNAL, STICK_PRODUCT_NUMBER_CLASS
        )

    async def _load_product_number(self, request: bytes, class_id: int) -> str | None:
        try:
            response = await self._connection.load(request)
            return parse_product_number_response(response, class_id)
        except (NoResponseError, ProtocolError) as e:
            _LOGGER.warning("Could not read product number (class 0x%02x): %s", class_id, e)
            return None

    async def disconnect(self) -> None:
        """Disconnect from device. Always attempted, never raises."""
        await self._disconnect()

    async def _disconnect(self) -> None:
        await self._connection.disconnect()
        self._state = DeviceState.DISCONNECTED

    def _require_ready(self, feature: Feature | None = None) -> None:
        """Fail fast unless READY and the tier supports feature.

        Raises:
            RuntimeError: If not READY
            CapabilityError: If the tier does not support feature
        """
        if self._state is not DeviceState.READY or self._tier is None:
            raise RuntimeError(f"Device is {self._state.value}, not ready")
        if feature is not None:
            require(self._tier, feature)

    @asynccontextmanager
    async def _locked(self, feature: Feature) -> AsyncIterator[None]:
        """Hold the device lock for one operation.

        Readiness is checked before waiting for the lock and again once it
        is held, since disconnect() does not take the lock.
        """
        self._require_ready(feature)
        async with self._lock:
            self._require_ready(feature)
            yield

    async def reload_battery(self) -> int:
        """Read the battery level again.

        Returns:
            Holder battery level in percent
        """
        async with self._locked(Feature.BATTERY):
            self._battery_percent = parse_battery_level(await self._connection.read_status())
        _LOGGER.debug("Battery: %d%%", self._battery_percent)
        return self._battery_percent

    async def lock(self) -> None:
        """Lock the holder."""
        async with self._locked(Feature.LOCK):
            await self._connection.write_sequence(LOCK_SIGNALS)
            await self._connection.write_command(CONFIRMATION_SIGNAL)
        _LOGGER.info("Device locked")

    async def unlock(self) -> None:
        """Unlock the holder."""
        async with self._locked(Feature.LOCK):
            await self._connection.write_sequence(UNLOCK_SIGNALS)
            await self._connection.write_command(CONFIRMATION_SIGNAL)
        _LOGGER.info("Device unlocked")

    async def vibrate_start(self) -> None:
        """Start the find-my-IQOS vibration."""
        async with self._locked(Feature.FIND_MY_IQOS):
            await self._connection.write_command(START_VIBRATE_SIGNAL)

    async def vibrate_stop(self) -> None:
        """Stop the find-my-IQOS vibration."""
        async with self._locked(Feature.FIND_MY_IQOS):
            await self._connection.write_command(STOP_VIBRATE_SIGNAL)

    async def get_brightness(self) -> BrightnessLevel:
        """Read holder LED brightness (ILUMA and newer)."""
        async with self._locked(Feature.BRIGHTNESS):
            response = await self._connection.load(LOAD_BRIGHTNESS_SIGNAL)
        return parse_brightness_response(response)

    async def set_brightness(self, level: BrightnessLevel) -> None:
        """Set holder LED brightness (ILUMA and newer).

        Args:
            level: Target brightness
        """
        async with self._locked(Feature.BRIGHTNESS):
            await self._connection.write_sequence(build_brightness_commands(level))
        _LOGGER.info("Brightness set to %s", level)

    async def get_vibration_settings(self) -> VibrationSettings:
        """Read vibration triggers.

        On ILUMA and newer the charge-start trigger is read as well.

        Returns:
            VibrationSettings with every supported field set
        """
        async with self._locked(Feature.VIBRATION_SETTINGS):
            settings = await self._load_vibration_register()
            if supports(self.tier, Feature.CHARGE_START_VIBRATION):
                response = await self._connection.load(LOAD_CHARGE_START_VIBRATION_SIGNAL)
                settings = replace(
                    settings, when_charging_start=parse_charge_start_response(response)
                )
        return settings

    async def _load_vibration_register(self) -> VibrationSettings:
        response = await self._connection.load(LOAD_VIBRATION_SETTINGS_SIGNAL)
        return parse_vibration_response(response)

    async def update_vibration_settings(self, settings: VibrationSettings) -> None:
        """Change vibration triggers.

        Unspecified register flags keep their current value, which is read
        from the device first. The charge-start sequence is only written
        when ``settings.when_charging_start`` is given.

        Args:
            settings: Partial settings to apply

        Raises:
            CapabilityError: If charge-start is given on IQOS ONE
        """
        self._require_ready(Feature.VIBRATION_SETTINGS)
        include_charge_start = settings.when_charging_start is not None
        if include_charge_start:
            require(self.tier, Feature.CHARGE_START_VIBRATION)

        async with self._locked(Feature.VIBRATION_SETTINGS):
            if not settings.is_complete:
                settings = settings.merged_with(await self._load_vibration_register())
            commands = build_vibration_commands(settings, include_charge_start)
            await self._connection.write_sequence(commands)

        _LOGGER.info("Vibration settings updated (%d frame(s))", len(commands))

    async def set_autostart(self, enable: bool) -> None:
        """Enable or disable autostart (ILUMA and newer)."""
        async with self._locked(Feature.AUTOSTART):
            await self._connection.write_command(build_autostart_command(enable))

    async def set_smartgesture(self, enable: bool) -> None:
        """Enable or disable smart gesture (ILUMA and newer)."""
        async with self._locked(Feature.SMART_GESTURE):
            await self._connection.write_command(build_smartgesture_command(enable))

    async def get_flexpuff(self) -> bool:
        """Read whether FlexPuff is enabled (ILUMA and newer)."""
        async with self._locked(Feature.FLEXPUFF):
            response = await self._connection.load(LOAD_FLEXPUFF_SIGNAL)
        return parse_flexpuff_response(response)

    async def set_flexpuff(self, enable: bool) -> None:
        """Enable or disable FlexPuff (ILUMA and newer)."""
        async with self._locked(Feature.FLEXPUFF):
            await self._connection.write_command(build_flexpuff_command(enable))

    async def get_flexbattery(self) -> FlexBatteryState:
        """Read FlexBattery mode, and pause mode when in performance (ILUMA i)."""
        async with self._locked(Feature.FLEXBATTERY):
            mode = parse_flexbattery_response(
                await self._connection.load(LOAD_FLEXBATTERY_SIGNAL)
            )
            pause_mode = None
            if mode is FlexBatteryMode.PERFORMANCE:
                pause_mode = parse_pausemode_response(
                    await self._connection.load(LOAD_PAUSEMODE_SIGNAL)
                )
        return FlexBatteryState(mode, pause_mode)

    async def set_flexbattery(self, mode: FlexBatteryMode, pause: bool | None = None) -> None:
        """Set FlexBattery mode (ILUMA i).

        The mode write is confirmed by reading the mode back.

        Args:
            mode: Target mode
            pause: Pause mode to set; only valid with PERFORMANCE

        Raises:
            ValueError: If pause is given with ECO
            ProtocolError: If the device confirms a different mode
        """
        self._require_ready(Feature.FLEXBATTERY)
        if pause is not None and mode is FlexBatteryMode.ECO:
            raise ValueError("pause mode can only be set in performance mode")

        async with self._locked(Feature.FLEXBATTERY):
            await self._connection.write_command(build_flexbattery_command(mode))
            response = await self._connection.load(LOAD_FLEXBATTERY_SIGNAL)
            confirmed = parse_flexbattery_response(response)
            if confirmed is not mode:
                raise ProtocolError(
                    f"FlexBattery mode not applied: requested {mode}, device reports {confirmed}",
                    response,
                )
            if pause is not None:
                await self._connection.write_command(build_pausemode_command(pause))

        _LOGGER.info("FlexBattery mode set to %s", mode)
