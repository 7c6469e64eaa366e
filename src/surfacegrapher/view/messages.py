"""
User Messages
Maps a rejected plot request to what the main window shows the user.

Kept free of Qt so the wording and severity can be checked without a display.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from surfacegrapher.errors import ExpressionSyntaxError, InvalidParametersError, PlotError


class Severity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class UserMessage:
    severity: Severity
    title: str
    text: str
    status: str  # status bar line


def plot_error_message(error: PlotError) -> UserMessage:
    """Message box content for a failed plot request."""
    if isinstance(error, InvalidParametersError):
        return UserMessage(
            Severity.WARNING,
            "Invalid Parameters",
            "Please set N and Increment values.",
            f"Plot aborted: {error}",
        )
    if isinstance(error, ExpressionSyntaxError):
        return UserMessage(
            Severity.CRITICAL,
            "Invalid Function",
            f"The function could not be parsed:\n{error}",
            "Plot aborted: invalid function.",
        )
    return UserMessage(Severity.CRITICAL, "Plot Failed", str(error), f"Plot aborted: {error}")
