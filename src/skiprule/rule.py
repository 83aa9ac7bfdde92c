"""Rule deciding whether a marked test method runs or is skipped."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NoReturn

from skiprule.conditions.base import Condition
from skiprule.conditions.builtin import NotOnEmulator, NotOnRealDevice
from skiprule.conditions.resolver import ConditionResolver
from skiprule.config import default_device_oracle
from skiprule.devices.oracle import DeviceOracle
from skiprule.markers import ConditionalSkip, MethodInfo, RequiresEmulator, RequiresRealDevice
from skiprule.outcomes import SkipTest


logger = logging.getLogger(__name__)


class SkipInvocation:
    """Replacement for a test body whose skip condition is satisfied.

    Calling it never runs the original body; it raises ``SkipTest`` naming
    the condition that triggered the skip.
    """

    def __init__(self, condition: Condition) -> None:
        self.condition = condition

    @property
    def reason(self) -> str:
        return f"Ignored by {type(self.condition).__name__}"

    def __call__(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise SkipTest(self.reason, self.condition)

    def __repr__(self) -> str:
        return f"SkipInvocation({type(self.condition).__name__})"


class ConditionalSkipRule:
    """Skips test methods marked with ``conditional_skip``, ``requires_emulator``
    or ``requires_real_device`` when their condition is satisfied.

    Markers are honored in that order; a method carrying several only gets
    the first one applied.

    Examples:
        # Default oracle from SKIPRULE_* settings
        rule = ConditionalSkipRule()

        # Custom emulator detection
        rule = ConditionalSkipRule(FingerprintDeviceOracle(BuildInfo.from_adb()))

        body = rule.apply(body, MethodInfo.from_callable(fn), suite)
        body()  # raises SkipTest if skipped
    """

    def __init__(self, oracle: DeviceOracle | None = None, resolver: ConditionResolver | None = None) -> None:
        self._oracle = oracle
        self.resolver = resolver or ConditionResolver()

    @property
    def oracle(self) -> DeviceOracle:
        """Device oracle, built from settings on first use when none was given."""
        if self._oracle is None:
            self._oracle = default_device_oracle()
        return self._oracle

    def apply(
        self,
        base: Callable[..., Any],
        method: MethodInfo | None,
        target: Any = None,
    ) -> Callable[..., Any]:
        """Return the callable to run for a test method.

        Args:
            base: The original test execution.
            method: Markers of the test method, or None if unknown.
            target: Test suite instance the method runs on.

        Returns:
            ``base`` itself, or a ``SkipInvocation`` if the method must be skipped.

        Raises:
            ConfigurationError: A ``conditional_skip`` class is misplaced.
            InstantiationError: A ``conditional_skip`` class failed to construct.
        """
        if method is None:
            return base

        condition = self._select_condition(method, target)
        if condition is None or not condition.is_satisfied:
            return base

        logger.debug("Skipping %s: %s is satisfied", method.name, type(condition).__name__)
        return SkipInvocation(condition)

    def _select_condition(self, method: MethodInfo, target: Any) -> Condition | None:
        marker = method.get(ConditionalSkip)
        if isinstance(marker, ConditionalSkip):
            return self.resolver.resolve(marker.condition, target)
        if method.has(RequiresEmulator):
            return NotOnEmulator(self.oracle)
        if method.has(RequiresRealDevice):
            return NotOnRealDevice(self.oracle)
        return None
