"""Android build identification strings."""

import logging
import re
import subprocess

from pydantic import BaseModel, ConfigDict, Field

from skiprule.errors import DeviceQueryError


logger = logging.getLogger(__name__)

# getprop prints one "[key]: [value]" pair per line
_GETPROP_LINE = re.compile(r"^\[(?P<key>[^\]]+)\]:\s*\[(?P<value>.*)\]$")

_PROPERTY_FIELDS = {
    "ro.product.brand": "brand",
    "ro.product.device": "device",
    "ro.build.fingerprint": "fingerprint",
    "ro.hardware": "hardware",
    "ro.product.model": "model",
    "ro.product.manufacturer": "manufacturer",
    "ro.product.name": "product",
}


class BuildInfo(BaseModel):
    """Snapshot of the identification strings a device reports about its build.

    All fields are optional; a missing value never matches any heuristic.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    brand: str | None = Field(default=None, description="ro.product.brand")
    device: str | None = Field(default=None, description="ro.product.device")
    fingerprint: str | None = Field(default=None, description="ro.build.fingerprint")
    hardware: str | None = Field(default=None, description="ro.hardware")
    model: str | None = Field(default=None, description="ro.product.model")
    manufacturer: str | None = Field(default=None, description="ro.product.manufacturer")
    product: str | None = Field(default=None, description="ro.product.name")

    @classmethod
    def from_getprop(cls, text: str) -> "BuildInfo":
        """Parse the output of ``adb shell getprop``.

        Unknown properties are ignored, as are lines that are not
        ``[key]: [value]`` pairs (multi-line values, blank lines).
        """
        values: dict[str, str] = {}
        skipped = 0
        for line in text.splitlines():
            line = line.strip()
            if not line:
                continue
            match = _GETPROP_LINE.match(line)
            if match is None:
                skipped += 1
                continue
            field_name = _PROPERTY_FIELDS.get(match.group("key"))
            if field_name is not None and match.group("value"):
                values[field_name] = match.group("value")

        if skipped:
            logger.debug("Ignored %d unparseable getprop line(s)", skipped)
        return cls(**values)

    @classmethod
    def from_adb(
        cls,
        serial: str | None = None,
        *,
        adb_path: str = "adb",
        timeout: float = 5.0,
    ) -> "BuildInfo":
        """Read build properties from a connected device through adb.

        Args:
            serial: Device serial, or None for the only connected device.
            adb_path: adb executable.
            timeout: Seconds to wait for adb.

        Raises:
            DeviceQueryError: adb is missing, fails or times out.
        """
        cmd = [adb_path]
        if serial:
            cmd += ["-s", serial]
        cmd += ["shell", "getprop"]

        try:
            output = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=timeout,
            ).stdout
        except FileNotFoundError as e:
            msg = f"adb executable not found: {adb_path}"
            raise DeviceQueryError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"adb getprop timed out after {timeout}s"
            raise DeviceQueryError(msg) from e
        except subprocess.CalledProcessError as e:
            msg = f"adb getprop failed with exit code {e.returncode}: {(e.stderr or '').strip()}"
            raise DeviceQueryError(msg) from e

        return cls.from_getprop(output)
