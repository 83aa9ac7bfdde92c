"""Device oracles: decide whether tests run on an emulator or a real device."""

from abc import ABC, abstractmethod

from skiprule.devices.build_info import BuildInfo


EMULATOR_HARDWARE = frozenset({"goldfish", "ranchu", "gce_x86"})


class DeviceOracle(ABC):
    """Determines whether tests are executed on an emulator or a real device.

    Implementations are shared by every test of a session and must be pure
    predicates: no I/O and no mutable cache once constructed.
    """

    @abstractmethod
    def is_emulator(self) -> bool:
        """True if tests are executed on an emulator."""

    def is_real_device(self) -> bool:
        """True if tests are executed on a real device."""
        return not self.is_emulator()


class HardwareDeviceOracle(DeviceOracle):
    """Default oracle: an emulator reports one of the known virtual hardware names."""

    def __init__(self, build: BuildInfo | None = None) -> None:
        self.build = build or BuildInfo()

    def is_emulator(self) -> bool:
        return self.build.hardware in EMULATOR_HARDWARE


class FingerprintDeviceOracle(DeviceOracle):
    """Broader heuristic matching emulator signatures in every build string.

    Catches the stock emulator, SDK system images, Genymotion and vbox based
    images at the cost of occasionally flagging custom ROMs built from
    generic trees.
    """

    MODEL_MARKERS = ("google_sdk", "Emulator", "Android SDK built for x86")
    PRODUCT_MARKERS = (
        "sdk_google",
        "google_sdk",
        "sdk",
        "sdk_x86",
        "sdk_gphone64_arm64",
        "vbox86p",
        "emulator",
        "simulator",
    )

    def __init__(self, build: BuildInfo | None = None) -> None:
        self.build = build or BuildInfo()

    def is_emulator(self) -> bool:
        b = self.build
        brand = b.brand or ""
        device = b.device or ""
        fingerprint = b.fingerprint or ""
        hardware = b.hardware or ""
        model = b.model or ""
        manufacturer = b.manufacturer or ""
        product = b.product or ""

        return (
            (brand.startswith("generic") and device.startswith("generic"))
            or fingerprint.startswith(("generic", "unknown"))
            or "goldfish" in hardware
            or "ranchu" in hardware
            or any(marker in model for marker in self.MODEL_MARKERS)
            or "Genymotion" in manufacturer
            or any(marker in product for marker in self.PRODUCT_MARKERS)
        )
