"""Resolution of condition classes named by ``conditional_skip`` markers."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from skiprule.conditions.base import Condition
from skiprule.errors import ConfigurationError, InstantiationError


logger = logging.getLogger(__name__)

_MISPLACED_MSG = (
    "Condition class '{name}' is a member class that needs an enclosing instance "
    "but was not declared inside the test suite using it. Either make this class a "
    "standalone or static class (one not needing an enclosing instance), or move it "
    "inside the test suite using it."
)


class ConditionKind(Enum):
    """How a condition class can be constructed."""

    STANDALONE = "standalone"  # no constructor arguments
    ENCLOSED = "enclosed"  # suite instance as the only argument
    INVALID = "invalid"


@dataclass(frozen=True)
class ConditionType:
    """Declaration shape of a condition class."""

    cls: type[Condition]

    @classmethod
    def of(cls, obj: Any) -> ConditionType:
        """Wrap ``obj`` after checking it is a ``Condition`` subclass.

        Raises:
            ConfigurationError: ``obj`` is not a class deriving from Condition.
        """
        if isinstance(obj, ConditionType):
            return obj
        if not inspect.isclass(obj):
            msg = f"Condition must be a class deriving from Condition, got {obj!r}"
            raise ConfigurationError(msg)
        if not issubclass(obj, Condition):
            msg = f"Condition class '{obj.__module__}.{obj.__qualname__}' does not derive from Condition"
            raise ConfigurationError(msg, obj)
        return cls(obj)

    @property
    def qualified_name(self) -> str:
        return f"{self.cls.__module__}.{self.cls.__qualname__}"

    @property
    def is_nested(self) -> bool:
        """Whether the class is declared in the body of another class."""
        # Classes defined inside functions count as top level from there on
        local_name = self.cls.__qualname__.rsplit("<locals>.", 1)[-1]
        return "." in local_name

    @property
    def needs_enclosing_instance(self) -> bool:
        """Whether the constructor has required positional parameters."""
        try:
            sig = inspect.signature(self.cls)
        except (TypeError, ValueError):
            return False
        return any(
            p.default is inspect.Parameter.empty
            and p.kind in {inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD}
            for p in sig.parameters.values()
        )

    @property
    def owner_qualname(self) -> str | None:
        """Qualified name of the class whose body declares this one."""
        if not self.is_nested:
            return None
        return self.cls.__qualname__.rsplit(".", 1)[0]

    def is_declared_in(self, suite_type: type) -> bool:
        """Whether the class is declared in ``suite_type`` or one of its bases.

        Only the declaring class counts; an alias assigned in another class
        body does not make that class the owner.
        """
        owner = self.owner_qualname
        return owner is not None and any(
            klass.__module__ == self.cls.__module__ and klass.__qualname__ == owner
            for klass in inspect.getmro(suite_type)
        )

    def classify(self, target: Any) -> ConditionKind:
        """Decide how to build the class for a test running on ``target``."""
        if not self.is_nested or not self.needs_enclosing_instance:
            return ConditionKind.STANDALONE
        if target is not None and self.is_declared_in(type(target)):
            return ConditionKind.ENCLOSED
        return ConditionKind.INVALID


def _build_standalone(cls: type[Condition], target: Any) -> Condition:
    return cls()


def _build_enclosed(cls: type[Condition], target: Any) -> Condition:
    return cls(target)  # type: ignore[call-arg]


class ConditionResolver:
    """Builds a fresh condition instance for each test invocation.

    Examples:
        resolver = ConditionResolver()
        condition = resolver.resolve(OnCI, suite)
        if condition.is_satisfied:
            ...
    """

    _factories: dict[ConditionKind, Callable[[type[Condition], Any], Condition]] = {
        ConditionKind.STANDALONE: _build_standalone,
        ConditionKind.ENCLOSED: _build_enclosed,
    }

    def resolve(self, condition: type[Condition] | ConditionType, target: Any = None) -> Condition:
        """Validate and instantiate a condition class.

        Args:
            condition: Condition class (or its ConditionType).
            target: Test suite instance the annotated method runs on.

        Raises:
            ConfigurationError: The class is not a Condition, or needs an
                enclosing instance that ``target`` cannot provide.
            InstantiationError: The constructor failed.
        """
        ctype = ConditionType.of(condition)
        kind = ctype.classify(target)
        logger.debug("Condition %s classified as %s", ctype.qualified_name, kind.value)

        if kind is ConditionKind.INVALID:
            raise ConfigurationError(_MISPLACED_MSG.format(name=ctype.qualified_name), ctype.cls)

        try:
            return self._factories[kind](ctype.cls, target)
        except Exception as e:
            msg = f"Cannot instantiate condition '{ctype.qualified_name}': {type(e).__name__}: {e}"
            raise InstantiationError(msg, ctype.cls) from e
