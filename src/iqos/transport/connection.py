"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable

from bleak import BleakClient, BleakScanner
from bleak.exc import BleakError
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..exceptions import BLEConnectionError, BLETimeoutError, NoResponseError
from ..protocol import (
    BATTERY_CHARACTERISTIC_UUID,
    DEVICE_INFO_CHARACTERISTICS,
    DEVICE_INFO_SERVICE_UUID,
    SCP_CONTROL_CHARACTERISTIC_UUID,
    SERVICE_UUID,
)

if TYPE_CHECKING:
    from bleak.backends.characteristic import BleakGATTCharacteristic
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)

# Unread notifications kept for load(); the oldest is dropped when full
NOTIFICATION_QUEUE_SIZE = 16


class BLEConnection:
    """Manages the BLE connection to an IQOS device.

    Features:
    - Automatic retry logic with bleak-retry-connector
    - Service caching for faster reconnections
    - Status and control characteristics bound once per connection
    - Notification queue for load request responses

    There is no request correlation in the protocol. Callers must not issue
    a second load() while one is pending.
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
            response_timeout: float = 5.0,
    ):
        """Initialize BLE connection manager.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from a previous scan
            timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching for faster reconnections (default: True)
            response_timeout: Seconds to wait for a load response notification (default: 5)
        """
        self.mac_address = mac_address
        self.ble_device = ble_device
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache
        self.response_timeout = response_timeout

        self._client: BleakClient | None = None
        self._notification_queue: asyncio.Queue[bytes] = asyncio.Queue(
            maxsize=NOTIFICATION_QUEUE_SIZE
        )
        self._status_characteristic: BleakGATTCharacteristic | None = None
        self._control_characteristic: BleakGATTCharacteristic | None = None
        self._name: str | None = ble_device.name if ble_device else None

    async def __aenter__(self) -> BLEConnection:
        """Connect to device (context manager entry)."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device (context manager exit)."""
        await self.disconnect()

    @property
    def name(self) -> str | None:
        """Advertised local name, if known."""
        return self._name

    @property
    def address(self) -> str:
        """Device address."""
        return self.mac_address

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._client is not None and self._client.is_connected

    async def connect(self) -> None:
        """Establish BLE connection to device.

        Uses bleak-retry-connector for automatic retry logic and service caching.

        Raises:
            BLEConnectionError: If connection fails or the IQOS service is missing
            BLETimeoutError: If connection times out
        """
        if self.is_connected:
            return  # Already connected

        try:
            _LOGGER.debug(
                "Connecting to %s with bleak-retry-connector (max_attempts=%d)",
                self.mac_address,
                self.max_attempts,
            )

            if self.ble_device:
                device = self.ble_device
            else:
                device = await BleakScanner.find_device_by_address(
                    self.mac_address,
                    timeout=self.timeout,
                )
                if device is None:
                    raise BLEConnectionError(
                        f"Device {self.mac_address} not found during scan"
                    )
            self._name = device.name

            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or self.mac_address,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                timeout=self.timeout,
            )

            _LOGGER.debug("Connected to %s", self.mac_address)

            await self._bind_characteristics()

        except BLEConnectionError:
            await self.disconnect()
            raise
        except asyncio.TimeoutError as e:
            await self.disconnect()
            raise BLETimeoutError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except asyncio.CancelledError:
            await self.disconnect()
            raise
        except Exception as e:
            await self.disconnect()
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Disconnect from device.

        Always attempted; failures are logged and swallowed.
        """
        if self._client and self._client.is_connected:
            try:
                _LOGGER.debug("Disconnecting from %s", self.mac_address)
                await self._client.disconnect()
            except Exception as e:
                _LOGGER.warning("Error during disconnect: %s", e)
        self._client = None
        self._status_characteristic = None
        self._control_characteristic = None

    async def _bind_characteristics(self) -> None:
        """Resolve status/control characteristics and start notifications.

        Raises:
            BLEConnectionError: If service/characteristic not found
        """
        client = self._require_client()

        service = client.services.get_service(SERVICE_UUID)
        if not service:
            raise BLEConnectionError(f"Service {SERVICE_UUID} not found")

        status = service.get_characteristic(BATTERY_CHARACTERISTIC_UUID)
        control = service.get_characteristic(SCP_CONTROL_CHARACTERISTIC_UUID)
        if status is None or control is None:
            raise BLEConnectionError("IQOS characteristics not found")

        self._status_characteristic = status
        self._control_characteristic = control

        await client.start_notify(control, self._notification_callback)

        _LOGGER.debug("Notifications started")

    def _notification_callback(self, sender, data: bytearray) -> None:
        """Queue an incoming notification for load()."""
        _LOGGER.debug("RX: %s", data.hex(" "))
        if self._notification_queue.full():
            dropped = self._notification_queue.get_nowait()
            _LOGGER.debug("Notification queue full, dropping %s", dropped.hex(" "))
        self._notification_queue.put_nowait(bytes(data))

    def _require_client(self) -> BleakClient:
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")
        return self._client

    async def read_status(self) -> bytes:
        """Read the status (battery) characteristic.

        Raises:
            BLEConnectionError: If not connected or read fails
        """
        client = self._require_client()
        if not self._status_characteristic:
            raise BLEConnectionError("Status characteristic not bound")

        try:
            data = await client.read_gatt_char(self._status_characteristic)
        except (BleakError, OSError) as e:
            raise BLEConnectionError(f"Read failed: {e}") from e
        return bytes(data)

    async def read_device_information(self) -> dict[str, str]:
        """Read the standard Device Information Service strings.

        Missing service or characteristics are skipped.

        Returns:
            Mapping of DeviceInfo field name to value
        """
        client = self._require_client()
        service = client.services.get_service(DEVICE_INFO_SERVICE_UUID)
        if not service:
            _LOGGER.debug("Device information service not found")
            return {}

        info: dict[str, str] = {}
        for field_name, uuid in DEVICE_INFO_CHARACTERISTICS.items():
            characteristic = service.get_characteristic(uuid)
            if characteristic is None:
                continue
            try:
                data = await client.read_gatt_char(characteristic)
            except (BleakError, OSError) as e:
                raise BLEConnectionError(f"Read of {field_name} failed: {e}") from e
            info[field_name] = bytes(data).decode("utf-8", errors="replace").strip("\x00")
        return info

    async def write_command(self, data: bytes, response: bool = True) -> None:
        """Write command to the control characteristic.

        Args:
            data: Command bytes to write
            response: Wait for the link-layer write acknowledgement (default: True)

        Raises:
            BLEConnectionError: If not connected or write fails
        """
        client = self._require_client()
        if not self._control_characteristic:
            raise BLEConnectionError("Control characteristic not bound")

        _LOGGER.debug("TX: %s", data.hex(" "))
        try:
            await client.write_gatt_char(
                self._control_characteristic,
                data,
                response=response,
            )
        except asyncio.TimeoutError as e:
            raise BLETimeoutError("Write timed out") from e
        except (BleakError, OSError) as e:
            raise BLEConnectionError(f"Write failed: {e}") from e

    async def write_sequence(self, commands: Iterable[bytes]) -> None:
        """Write commands one after another, each acknowledged before the next."""
        for command in commands:
            await self.write_command(command)

    async def load(self, request: bytes, timeout: float | None = None) -> bytes:
        """Write a load request and return the first notification.

        Args:
            request: Load request signal
            timeout: Response timeout in seconds (default: response_timeout)

        Returns:
            Raw notification payload

        Raises:
            BLEConnectionError: If the write fails
            NoResponseError: If no notification arrives within the timeout
        """
        self._drain_notifications()
        await self.write_command(request)
        return await self.read_response(timeout)

    async def read_response(self, timeout: float | None = None) -> bytes:
        """Read the next notification from the queue.

        Raises:
            NoResponseError: If no notification received within timeout
        """
        if timeout is None:
            timeout = self.response_timeout
        try:
            return await asyncio.wait_for(
                self._notification_queue.get(),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise NoResponseError(
                f"No response received within {timeout}s"
            ) from e

    def _drain_notifications(self) -> None:
        while not self._notification_queue.empty():
            stale = self._notification_queue.get_nowait()
            _LOGGER.debug("Dropping stale notification: %s", stale.hex(" "))
