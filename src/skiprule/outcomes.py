"""Skip signal raised in place of a test body."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from skiprule.conditions.base import Condition


class SkipTest(BaseException):
    """Raised instead of running a test whose skip condition is satisfied.

    Not an ``Exception``: ``except Exception`` in a test body does not catch it.
    """

    def __init__(self, reason: str, condition: Condition | None = None) -> None:
        self.reason = reason
        self.condition = condition
        super().__init__(reason)
