"""Conditions behind the ``requires_emulator`` and ``requires_real_device`` markers."""

from skiprule.conditions.base import Condition
from skiprule.devices.oracle import DeviceOracle


class NotOnEmulator(Condition):
    """Satisfied when tests are not executed on an emulator."""

    def __init__(self, oracle: DeviceOracle) -> None:
        self.oracle = oracle

    @property
    def is_satisfied(self) -> bool:
        return self.oracle.is_real_device()


class NotOnRealDevice(Condition):
    """Satisfied when tests are not executed on a real device."""

    def __init__(self, oracle: DeviceOracle) -> None:
        self.oracle = oracle

    @property
    def is_satisfied(self) -> bool:
        return self.oracle.is_emulator()
