"""
Plot Controller
===============
Runs the plot pipeline: expression text -> parsed function -> sampled,
colored surface -> display.

Why is this file needed?
------------------------
1. Orchestration: It is the single entry point ``plot(expression, n, incr)``
   used by the UI, with the parameters passed explicitly.
2. Atomicity: The display is only touched after the whole surface was built,
   so a rejected request leaves the current plot on screen.
3. Decoupling: It has no Qt imports; anything with a ``show_surface`` method
   can display the result.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from surfacegrapher.controller.events import Parameter, ParameterChanged, PlotEvent, PlotRequested
from surfacegrapher.model.expression import parse_function
from surfacegrapher.model.sampler import validate_parameters
from surfacegrapher.model.state import PlotState
from surfacegrapher.model.surface import SurfaceData, build_surface

logger = logging.getLogger(__name__)


class SurfaceDisplay(Protocol):
    def show_surface(self, surface: SurfaceData) -> None: ...


class PlotController:
    def __init__(self, state: PlotState, display: Optional[SurfaceDisplay] = None) -> None:
        self.state = state
        self.display = display
        self.last_surface: Optional[SurfaceData] = None

    def plot(
        self,
        expression: str,
        domain_half_width: Optional[float] = None,
        step_size: Optional[float] = None,
    ) -> SurfaceData:
        """
        Build and display the surface for an expression.

        Args:
            expression: Expression text in ``x`` and ``y``.
            domain_half_width: Half-width ``n``; defaults to the current state.
            step_size: Step size ``incr``; defaults to the current state.

        Returns:
            The surface that is now displayed.

        Raises:
            InvalidParametersError: ``n`` or ``incr`` is missing or not positive.
            ExpressionSyntaxError: The expression cannot be parsed.
        """
        if domain_half_width is None:
            domain_half_width = self.state.domain_half_width
        if step_size is None:
            step_size = self.state.step_size

        logger.info(f"Plot requested: z = {expression} (n={domain_half_width}, incr={step_size})")
        try:
            n, incr = validate_parameters(domain_half_width, step_size)
            fn = parse_function(expression)
        except ValueError as e:
            logger.warning(f"Plot request rejected: {e}")
            raise

        surface = build_surface(fn, n, incr)

        self.state.expression = fn.expression
        self.state.domain_half_width = n
        self.state.step_size = incr
        self.last_surface = surface

        if self.display is not None:
            self.display.show_surface(surface)

        logger.info(f"Surface ready: {surface.segments}x{surface.segments} segments, {surface.n_points} points.")
        return surface

    def replot(self) -> SurfaceData:
        """Plot the current expression again with the current parameters."""
        return self.plot(self.state.expression)

    def handle(self, event: PlotEvent) -> SurfaceData:
        """Dispatch a request coming from the control panel."""
        match event:
            case PlotRequested(expression=expression):
                return self.plot(expression)

            case ParameterChanged(name=Parameter.DOMAIN_HALF_WIDTH, value=value):
                self.state.domain_half_width = value
                return self.replot()

            case ParameterChanged(name=Parameter.STEP_SIZE, value=value):
                self.state.step_size = value
                return self.replot()

            case _:
                raise TypeError(f"Unsupported plot event: {event!r}")
