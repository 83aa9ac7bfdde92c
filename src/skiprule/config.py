"""skiprule configuration."""

import logging
from collections.abc import Callable
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from skiprule.devices.build_info import BuildInfo
from skiprule.devices.oracle import DeviceOracle, FingerprintDeviceOracle, HardwareDeviceOracle


logger = logging.getLogger(__name__)

ORACLES: dict[str, Callable[[BuildInfo], DeviceOracle]] = {
    "hardware": HardwareDeviceOracle,
    "fingerprint": FingerprintDeviceOracle,
}


class SkipRuleSettings(BaseSettings):
    """Settings for building the default device oracle.

    Loads from environment variables automatically:
        SKIPRULE_ORACLE, SKIPRULE_BUILD_SOURCE, SKIPRULE_ADB_SERIAL,
        SKIPRULE_ADB_PATH, SKIPRULE_ADB_TIMEOUT, SKIPRULE_BUILD__HARDWARE, ...
    """

    oracle: Literal["hardware", "fingerprint"] = Field(
        default="hardware", description="Heuristic used to classify the device"
    )
    build_source: Literal["env", "adb"] = Field(
        default="env", description="Read build strings from settings or from a device through adb"
    )
    build: BuildInfo = Field(default_factory=BuildInfo, description="Build strings when build_source is 'env'")
    adb_serial: str | None = Field(default=None, description="Device serial passed to adb -s")
    adb_path: str = Field(default="adb", description="adb executable")
    adb_timeout: float = Field(default=5.0, gt=0, description="Seconds to wait for adb")

    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="SKIPRULE_",
        env_nested_delimiter="__",
    )

    def load_build(self) -> BuildInfo:
        """Return the build strings from the configured source."""
        if self.build_source == "adb":
            return BuildInfo.from_adb(self.adb_serial, adb_path=self.adb_path, timeout=self.adb_timeout)
        return self.build


def default_device_oracle(settings: SkipRuleSettings | None = None) -> DeviceOracle:
    """Build the device oracle described by settings (or the environment)."""
    settings = settings or SkipRuleSettings()
    build = settings.load_build()
    oracle = ORACLES[settings.oracle](build)
    logger.info("Using %s oracle for %s build (hardware=%s)", settings.oracle, settings.build_source, build.hardware)
    return oracle
