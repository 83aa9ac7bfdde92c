"""Standalone runner for device-dependent tests outside pytest."""

from .runner import Outcome, Report, Runner, Status, expand, run


__all__ = [
    "Outcome",
    "Report",
    "Runner",
    "Status",
    "expand",
    "run",
]
