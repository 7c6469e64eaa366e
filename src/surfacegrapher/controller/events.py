"""
Plot Requests
Typed messages sent from the control panel to the plot controller.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Parameter(str, Enum):
    """Sampling parameters the user can change."""
    DOMAIN_HALF_WIDTH = "n"
    STEP_SIZE = "incr"


@dataclass(frozen=True)
class PlotRequested:
    """The user submitted an expression (preset or custom)."""
    expression: str


@dataclass(frozen=True)
class ParameterChanged:
    """A sampling parameter slider moved."""
    name: Parameter
    value: float


PlotEvent = Union[PlotRequested, ParameterChanged]
