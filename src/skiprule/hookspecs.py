"""Hook specifications added to pytest by the skiprule plugin."""

import pytest


@pytest.hookspec(firstresult=True)
def pytest_skiprule_device_oracle(config: pytest.Config):
    """Return the DeviceOracle used by requires_emulator / requires_real_device.

    Implement it in a conftest.py to plug a custom emulator heuristic. When
    no implementation returns a value the oracle is built from SKIPRULE_*
    settings.
    """
