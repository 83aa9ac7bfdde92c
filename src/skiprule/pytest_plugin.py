"""pytest integration: honor skiprule markers and pytest marks before setup."""

from __future__ import annotations

import logging

import pytest

from skiprule.errors import ConfigurationError
from skiprule.markers import ConditionalSkip, Marker, MethodInfo, RequiresEmulator, RequiresRealDevice
from skiprule.outcomes import SkipTest
from skiprule.rule import ConditionalSkipRule


logger = logging.getLogger(__name__)

_RULE_KEY = pytest.StashKey[ConditionalSkipRule]()

_MARK_HELP = (
    "conditional_skip(condition=cls): skip the test when the given skiprule Condition class is satisfied",
    "requires_emulator: run the test only on an emulator",
    "requires_real_device: run the test only on a real device",
)


def pytest_addhooks(pluginmanager: pytest.PytestPluginManager) -> None:
    from skiprule import hookspecs  # noqa: PLC0415

    pluginmanager.add_hookspecs(hookspecs)


def pytest_configure(config: pytest.Config) -> None:
    for line in _MARK_HELP:
        config.addinivalue_line("markers", line)


def _get_rule(config: pytest.Config) -> ConditionalSkipRule:
    """Session rule, built on first use so unmarked sessions never touch a device."""
    rule = config.stash.get(_RULE_KEY, None)
    if rule is None:
        oracle = config.hook.pytest_skiprule_device_oracle(config=config)
        rule = ConditionalSkipRule(oracle)
        config.stash[_RULE_KEY] = rule
    return rule


def _marker_from_mark(mark: pytest.Mark) -> Marker | None:
    if mark.name == "conditional_skip":
        condition = mark.kwargs.get("condition", mark.args[0] if mark.args else None)
        if condition is None:
            msg = "conditional_skip mark requires a Condition class"
            raise ConfigurationError(msg)
        return ConditionalSkip(condition)
    if mark.name == "requires_emulator":
        return RequiresEmulator()
    if mark.name == "requires_real_device":
        return RequiresRealDevice()
    return None


def method_info(item: pytest.Function) -> MethodInfo:
    """Markers of a test item: skiprule decorators, then pytest marks closest first."""
    marks = (_marker_from_mark(mark) for mark in item.iter_markers())
    return MethodInfo.from_callable(item.function, extra=[m for m in marks if m is not None])


def _proceed() -> None:
    """Placeholder body; pytest runs the real test after setup."""


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_setup(item: pytest.Item) -> None:
    if not isinstance(item, pytest.Function):
        return

    method = method_info(item)
    if not method.markers:
        return

    body = _get_rule(item.config).apply(_proceed, method, item.instance)
    try:
        body()
    except SkipTest as e:
        logger.debug("%s skipped: %s", item.nodeid, e.reason)
        pytest.skip(e.reason)
