"""skiprule - Conditional skipping of emulator and device dependent tests."""

from .conditions import Condition, ConditionResolver, NotOnEmulator, NotOnRealDevice
from .config import SkipRuleSettings, default_device_oracle
from .devices import BuildInfo, DeviceOracle, FingerprintDeviceOracle, HardwareDeviceOracle
from .errors import ConfigurationError, DeviceQueryError, InstantiationError, SkipRuleError
from .markers import MethodInfo, conditional_skip, requires_emulator, requires_real_device
from .outcomes import SkipTest
from .rule import ConditionalSkipRule, SkipInvocation
from .version import __version__


__all__ = [
    # Markers
    "conditional_skip",
    "requires_emulator",
    "requires_real_device",
    "MethodInfo",
    # Rule
    "ConditionalSkipRule",
    "SkipInvocation",
    "SkipTest",
    # Conditions
    "Condition",
    "ConditionResolver",
    "NotOnEmulator",
    "NotOnRealDevice",
    # Devices
    "BuildInfo",
    "DeviceOracle",
    "HardwareDeviceOracle",
    "FingerprintDeviceOracle",
    "SkipRuleSettings",
    "default_device_oracle",
    # Errors
    "SkipRuleError",
    "ConfigurationError",
    "InstantiationError",
    "DeviceQueryError",
]
