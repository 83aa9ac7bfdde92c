"""Skip markers attached to test callables."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from skiprule.conditions.base import Condition


F = TypeVar("F", bound=Callable[..., Any])

MARKERS_ATTR = "__skiprule_markers__"


@dataclass(frozen=True)
class ConditionalSkip:
    """Skip when an instance of ``condition`` is satisfied."""

    condition: type[Condition]


@dataclass(frozen=True)
class RequiresEmulator:
    """Skip unless running on an emulator."""


@dataclass(frozen=True)
class RequiresRealDevice:
    """Skip unless running on a real device."""


Marker = ConditionalSkip | RequiresEmulator | RequiresRealDevice

MarkerKind = type[ConditionalSkip] | type[RequiresEmulator] | type[RequiresRealDevice]


def _attach(fn: F, marker: Marker) -> F:
    setattr(fn, MARKERS_ATTR, [*getattr(fn, MARKERS_ATTR, []), marker])
    return fn


def conditional_skip(condition: type[Condition]) -> Callable[[F], F]:
    """Skip the decorated test when ``condition`` is satisfied.

    Examples:
    --------
    >>> @conditional_skip(OnCI)
    ... def test_upload(): ...
    """

    def decorator(fn: F) -> F:
        return _attach(fn, ConditionalSkip(condition))

    return decorator


def requires_emulator(fn: F) -> F:
    """Run the decorated test only on an emulator."""
    return _attach(fn, RequiresEmulator())


def requires_real_device(fn: F) -> F:
    """Run the decorated test only on a real device."""
    return _attach(fn, RequiresRealDevice())


def get_markers(fn: Callable[..., Any]) -> list[Marker]:
    """Return the markers attached to a callable, innermost decorator first."""
    return list(getattr(fn, MARKERS_ATTR, []))


@dataclass(frozen=True)
class MethodInfo:
    """Read-only view of the skip markers of one test method.

    Attributes
    ----------
    name
        Display name of the method.
    markers
        Markers in the order they were attached.
    """

    name: str
    markers: tuple[Marker, ...] = ()

    @classmethod
    def from_callable(cls, fn: Callable[..., Any], extra: Iterable[Marker] = ()) -> MethodInfo:
        """Build from a decorated callable, adding ``extra`` markers after its own."""
        name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", repr(fn))
        return cls(name=name, markers=(*get_markers(fn), *extra))

    def has(self, kind: MarkerKind) -> bool:
        """Whether a marker of ``kind`` is attached."""
        return self.get(kind) is not None

    def get(self, kind: MarkerKind) -> Marker | None:
        """First attached marker of ``kind``, or None."""
        for marker in self.markers:
            if isinstance(marker, kind):
                return marker
        return None
