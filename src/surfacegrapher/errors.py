"""
Error Types
===========
Exceptions that abort a single plot request.

Everything raised here leaves the previously displayed surface untouched;
the main window catches ``PlotError`` and reports it to the user.
"""
from __future__ import annotations


class PlotError(Exception):
    """Base class for failures of a single plot request."""


class InvalidParametersError(PlotError, ValueError):
    """Domain half-width or step size is missing, zero, negative or not finite."""

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class ExpressionSyntaxError(PlotError, ValueError):
    """The expression text could not be parsed."""

    def __init__(self, message: str, expression: str = "", position: int | None = None) -> None:
        super().__init__(message)
        self.expression = expression
        self.position = position

    def __str__(self) -> str:
        msg = super().__str__()
        if self.position is None:
            return msg
        return f"{msg} (column {self.position + 1})"
