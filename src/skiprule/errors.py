"""skiprule exceptions."""

from __future__ import annotations


class SkipRuleError(Exception):
    """Base class for skiprule errors."""


class ConfigurationError(SkipRuleError, ValueError):
    """A condition class is declared in a shape the resolver cannot use."""

    def __init__(self, message: str, condition_type: type | None = None) -> None:
        self.condition_type = condition_type
        super().__init__(message)


class InstantiationError(SkipRuleError):
    """Constructing an otherwise valid condition class failed."""

    def __init__(self, message: str, condition_type: type) -> None:
        self.condition_type = condition_type
        super().__init__(message)


class DeviceQueryError(SkipRuleError):
    """Reading build properties from a device failed."""
