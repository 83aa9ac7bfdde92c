import os

import pytest

from skiprule.devices import DeviceOracle


pytest_plugins = ["pytester"]


class FakeOracle(DeviceOracle):
    """Oracle with a fixed answer."""

    def __init__(self, emulator: bool) -> None:
        self.emulator = emulator

    def is_emulator(self) -> bool:
        return self.emulator


@pytest.fixture(autouse=True)
def clean_skiprule_env(monkeypatch):
    """Keep SKIPRULE_* settings from the outer environment out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("SKIPRULE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def emulator():
    return FakeOracle(emulator=True)


@pytest.fixture
def real_device():
    return FakeOracle(emulator=False)
