"""Skip conditions and their resolution."""

from .base import Condition
from .builtin import NotOnEmulator, NotOnRealDevice
from .resolver import ConditionKind, ConditionResolver, ConditionType


__all__ = [
    "Condition",
    "ConditionKind",
    "ConditionResolver",
    "ConditionType",
    "NotOnEmulator",
    "NotOnRealDevice",
]
