"""Tests for skiprule.rule module."""

from unittest.mock import Mock

import pytest

from skiprule import (
    BuildInfo,
    Condition,
    ConditionalSkipRule,
    ConfigurationError,
    DeviceOracle,
    DeviceQueryError,
    InstantiationError,
    MethodInfo,
    NotOnEmulator,
    NotOnRealDevice,
    SkipInvocation,
    SkipTest,
    conditional_skip,
    requires_emulator,
    requires_real_device,
)
from skiprule.devices import HardwareDeviceOracle
from skiprule.markers import ConditionalSkip, RequiresEmulator, RequiresRealDevice


class AlwaysTrue(Condition):
    @property
    def is_satisfied(self) -> bool:
        return True


class AlwaysFalse(Condition):
    @property
    def is_satisfied(self) -> bool:
        return False


class Exploding(Condition):
    def __init__(self) -> None:
        raise RuntimeError("boom")

    @property
    def is_satisfied(self) -> bool:
        return True


class Unrelated:
    class NeedsOwner(Condition):
        def __init__(self, owner) -> None:
            self.owner = owner

        @property
        def is_satisfied(self) -> bool:
            return True


class Suite:
    skip_me = True

    class FromSuite(Condition):
        def __init__(self, suite) -> None:
            self.suite = suite

        @property
        def is_satisfied(self) -> bool:
            return self.suite.skip_me


class DerivedSuite(Suite):
    skip_me = False


class Body:
    """Base execution recording whether it ran."""

    def __init__(self) -> None:
        self.executed = False

    def __call__(self) -> None:
        self.executed = True


def method(*markers) -> MethodInfo:
    return MethodInfo(name="test_sample", markers=markers)


@pytest.fixture
def body():
    return Body()


class TestWithoutMarkers:
    def test_no_method_returns_base(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        assert rule.apply(body, None, None) is body

    def test_no_markers_returns_base(self, body, emulator):
        rule = ConditionalSkipRule(emulator)
        assert rule.apply(body, method(), object()) is body

    def test_undecorated_callable_returns_base(self, body, emulator):
        def test_plain():
            pass

        rule = ConditionalSkipRule(emulator)
        assert rule.apply(body, MethodInfo.from_callable(test_plain), None) is body


class TestConditionalSkip:
    def test_satisfied_condition_returns_skip_invocation(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(ConditionalSkip(AlwaysTrue)), None)

        assert result is not body
        assert isinstance(result, SkipInvocation)
        assert isinstance(result.condition, AlwaysTrue)

    def test_skip_invocation_never_runs_body(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(ConditionalSkip(AlwaysTrue)), None)

        with pytest.raises(SkipTest) as exc_info:
            result()

        assert exc_info.value.reason == "Ignored by AlwaysTrue"
        assert exc_info.value.condition is result.condition
        assert body.executed is False

    def test_unsatisfied_condition_returns_base(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(ConditionalSkip(AlwaysFalse)), None)

        assert result is body
        result()
        assert body.executed is True

    def test_condition_nested_in_suite_gets_suite_instance(self, body, real_device):
        suite = Suite()
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(ConditionalSkip(Suite.FromSuite)), suite)

        assert isinstance(result, SkipInvocation)
        assert isinstance(result.condition, Suite.FromSuite)
        assert result.condition.suite is suite

    def test_condition_nested_in_base_class_of_suite(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(ConditionalSkip(Suite.FromSuite)), DerivedSuite())

        assert result is body

    def test_condition_nested_in_unrelated_class_raises(self, body, real_device):
        rule = ConditionalSkipRule(real_device)

        with pytest.raises(ConfigurationError) as exc_info:
            rule.apply(body, method(ConditionalSkip(Unrelated.NeedsOwner)), Suite())

        message = str(exc_info.value)
        assert "Unrelated.NeedsOwner" in message
        assert "move it inside the test suite" in message
        assert body.executed is False

    def test_condition_needing_suite_without_target_raises(self, body, real_device):
        rule = ConditionalSkipRule(real_device)

        with pytest.raises(ConfigurationError):
            rule.apply(body, method(ConditionalSkip(Suite.FromSuite)), None)

    def test_constructor_failure_propagates(self, body, real_device):
        rule = ConditionalSkipRule(real_device)

        with pytest.raises(InstantiationError) as exc_info:
            rule.apply(body, method(ConditionalSkip(Exploding)), None)

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_condition_built_fresh_for_every_call(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        info = method(ConditionalSkip(AlwaysTrue))

        first = rule.apply(body, info, None)
        second = rule.apply(body, info, None)

        assert first.condition is not second.condition

    def test_decorator_attaches_marker(self, body, real_device):
        @conditional_skip(AlwaysTrue)
        def test_decorated():
            pass

        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, MethodInfo.from_callable(test_decorated), None)

        assert isinstance(result, SkipInvocation)


class TestRequiresEmulator:
    def test_on_real_device_skips_with_not_on_emulator(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(RequiresEmulator()), None)

        assert isinstance(result, SkipInvocation)
        assert isinstance(result.condition, NotOnEmulator)
        with pytest.raises(SkipTest, match="Ignored by NotOnEmulator"):
            result()
        assert body.executed is False

    def test_on_emulator_returns_base(self, body, emulator):
        rule = ConditionalSkipRule(emulator)
        assert rule.apply(body, method(RequiresEmulator()), None) is body

    def test_queries_is_real_device(self, body):
        oracle = Mock(spec=DeviceOracle)
        oracle.is_real_device.return_value = False

        rule = ConditionalSkipRule(oracle)
        result = rule.apply(body, method(RequiresEmulator()), None)

        assert result is body
        oracle.is_real_device.assert_called_once_with()


class TestRequiresRealDevice:
    def test_on_emulator_skips_with_not_on_real_device(self, body, emulator):
        rule = ConditionalSkipRule(emulator)
        result = rule.apply(body, method(RequiresRealDevice()), None)

        assert isinstance(result, SkipInvocation)
        assert isinstance(result.condition, NotOnRealDevice)

    def test_on_real_device_returns_base(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(RequiresRealDevice()), None)

        assert result is body
        result()
        assert body.executed is True

    def test_oracle_error_propagates(self, body):
        oracle = Mock(spec=DeviceOracle)
        oracle.is_emulator.side_effect = RuntimeError("no device")

        rule = ConditionalSkipRule(oracle)
        with pytest.raises(RuntimeError, match="no device"):
            rule.apply(body, method(RequiresRealDevice()), None)


class TestPrecedence:
    def test_conditional_skip_dominates_requires_emulator(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        # RequiresEmulator alone would skip on a real device
        result = rule.apply(body, method(RequiresEmulator(), ConditionalSkip(AlwaysFalse)), None)

        assert result is body

    def test_conditional_skip_dominates_requires_real_device(self, body, real_device):
        rule = ConditionalSkipRule(real_device)
        result = rule.apply(body, method(RequiresRealDevice(), ConditionalSkip(AlwaysTrue)), None)

        assert isinstance(result.condition, AlwaysTrue)

    def test_requires_emulator_dominates_requires_real_device(self, body, emulator):
        rule = ConditionalSkipRule(emulator)
        # RequiresRealDevice alone would skip on an emulator
        result = rule.apply(body, method(RequiresRealDevice(), RequiresEmulator()), None)

        assert result is body

    def test_stacked_decorators(self, body, real_device):
        @conditional_skip(AlwaysFalse)
        @requires_emulator
        @requires_real_device
        def test_stacked():
            pass

        rule = ConditionalSkipRule(real_device)
        assert rule.apply(body, MethodInfo.from_callable(test_stacked), None) is body


class TestDefaultOracle:
    def test_built_from_settings(self, monkeypatch):
        monkeypatch.setenv("SKIPRULE_BUILD__HARDWARE", "ranchu")

        rule = ConditionalSkipRule()

        assert isinstance(rule.oracle, HardwareDeviceOracle)
        assert rule.oracle.is_emulator() is True

    def test_unconfigured_environment_is_real_device(self):
        rule = ConditionalSkipRule()
        assert rule.oracle.is_real_device() is True

    def test_oracle_built_on_first_device_marker(self, monkeypatch, body):
        calls = []

        def unreachable_device(serial=None, *, adb_path="adb", timeout=5.0):
            calls.append(serial)
            raise DeviceQueryError("adb getprop failed with exit code 1: no devices")

        monkeypatch.setenv("SKIPRULE_BUILD_SOURCE", "adb")
        monkeypatch.setattr(BuildInfo, "from_adb", staticmethod(unreachable_device))

        rule = ConditionalSkipRule()
        assert rule.apply(body, method(ConditionalSkip(AlwaysFalse)), None) is body
        assert calls == []

        with pytest.raises(DeviceQueryError):
            rule.apply(body, method(RequiresEmulator()), None)
        assert calls == [None]

    def test_oracle_built_once(self, monkeypatch):
        monkeypatch.setenv("SKIPRULE_BUILD__HARDWARE", "ranchu")
        rule = ConditionalSkipRule()

        assert rule.oracle is rule.oracle
