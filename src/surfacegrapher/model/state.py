"""
Plot State (Data Model)
=======================
The current plot settings of the running application.

Why is this file needed?
------------------------
1. State Management: It holds the expression, sampling parameters and scene
   options in one place instead of module-level globals.
2. Decoupling: The controller writes to this object; the view reads it to
   initialise its controls.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from surfacegrapher.config import (
    DEFAULT_DOMAIN_HALF_WIDTH, DEFAULT_STEP_SIZE, DEFAULT_GROUND_COLOR, GROUND_OFFSET_FACTOR
)
from surfacegrapher.model.presets import DEFAULT_PRESET

logger = logging.getLogger(__name__)


@dataclass
class PlotState:
    """
    Holds the settings the next plot is built from.
    Pass this instance to the controller and the views.
    """
    expression: str = DEFAULT_PRESET.expression
    domain_half_width: float = DEFAULT_DOMAIN_HALF_WIDTH
    step_size: float = DEFAULT_STEP_SIZE

    ground_color: str = DEFAULT_GROUND_COLOR
    ground_offset: float = GROUND_OFFSET_FACTOR * DEFAULT_DOMAIN_HALF_WIDTH
    show_wireframe: bool = False

    def reset(self) -> None:
        """Restore the defaults."""
        self.expression = DEFAULT_PRESET.expression
        self.domain_half_width = DEFAULT_DOMAIN_HALF_WIDTH
        self.step_size = DEFAULT_STEP_SIZE
        self.ground_color = DEFAULT_GROUND_COLOR
        self.ground_offset = GROUND_OFFSET_FACTOR * DEFAULT_DOMAIN_HALF_WIDTH
        self.show_wireframe = False
        logger.info("Plot state has been reset.")
