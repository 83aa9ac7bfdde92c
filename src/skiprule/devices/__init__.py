"""Emulator and real device detection."""

from .build_info import BuildInfo
from .oracle import EMULATOR_HARDWARE, DeviceOracle, FingerprintDeviceOracle, HardwareDeviceOracle


__all__ = [
    "EMULATOR_HARDWARE",
    "BuildInfo",
    "DeviceOracle",
    "FingerprintDeviceOracle",
    "HardwareDeviceOracle",
]
