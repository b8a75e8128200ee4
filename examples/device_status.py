"""Connect to an IQOS holder and print what it reports.

Usage:
    uv run python examples/device_status.py --scan
    uv run python examples/device_status.py AA:BB:CC:DD:EE:FF
    uv run python examples/device_status.py AA:BB:CC:DD:EE:FF --brightness low
    uv run python examples/device_status.py AA:BB:CC:DD:EE:FF --vibration heating on puffend off
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from iqos import (
    BrightnessLevel,
    Feature,
    FlexBatteryMode,
    IqosDevice,
    IqosError,
    VibrationSettings,
    discover_devices,
    supported_features,
    supports,
)


async def scan(duration: float) -> None:
    """Print nearby IQOS devices."""
    print(f"Scanning for {duration:.1f}s...")
    devices = await discover_devices(timeout=duration)
    if not devices:
        print("No IQOS devices found")
        return
    for name, address in sorted(devices.items()):
        print(f"  {name}: {address}")


async def status(args: argparse.Namespace) -> None:
    """Connect, apply requested changes and print device status."""
    async with IqosDevice(
        args.address,
        timeout=args.timeout,
        assume_richer_tier=not args.strict,
    ) as device:
        print(device.info.describe(device.tier))
        print(f"Battery: {device.battery_percent}%")
        print("Features: " + ", ".join(f.value for f in supported_features(device.tier)))

        if args.brightness:
            await device.set_brightness(BrightnessLevel.parse(args.brightness))
        if args.vibration:
            await device.update_vibration_settings(VibrationSettings.from_args(args.vibration))
        if args.flexbattery:
            await device.set_flexbattery(FlexBatteryMode.parse(args.flexbattery))
        if args.find:
            await device.vibrate_start()
            await asyncio.sleep(args.find)
            await device.vibrate_stop()

        print((await device.get_vibration_settings()).describe())
        if supports(device.tier, Feature.BRIGHTNESS):
            print(f"Brightness: {await device.get_brightness()}")
            print(f"FlexPuff: {await device.get_flexpuff()}")
        if supports(device.tier, Feature.FLEXBATTERY):
            print(await device.get_flexbattery())


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show and change IQOS holder settings.")
    parser.add_argument("address", nargs="?", help="Holder BLE address")
    parser.add_argument("--scan", action="store_true", help="List nearby IQOS devices and exit.")
    parser.add_argument("--timeout", type=float, default=10.0, help="Connect/scan timeout. Default: 10")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Resolve unanswered classification checks to the poorer tier.",
    )
    parser.add_argument("--brightness", choices=["high", "low"])
    parser.add_argument("--flexbattery", choices=["performance", "eco"])
    parser.add_argument(
        "--vibration",
        nargs="+",
        metavar="OPTION",
        help="Pairs of <charge|heating|starting|puffend|terminated> <on|off>.",
    )
    parser.add_argument("--find", type=float, metavar="SECONDS", help="Vibrate for SECONDS.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()
    if not args.scan and not args.address:
        parser.error("address is required unless --scan is given")
    return args


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.scan:
            asyncio.run(scan(args.timeout))
        else:
            asyncio.run(status(args))
    except IqosError as err:
        raise SystemExit(f"Error: {err}") from err
    except ValueError as err:
        raise SystemExit(f"Invalid argument: {err}") from err
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
