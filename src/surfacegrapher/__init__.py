"""Interactive 3D surface plots of z = f(x, y)."""
from surfacegrapher.errors import ExpressionSyntaxError, InvalidParametersError, PlotError
from surfacegrapher.model.expression import SurfaceFunction, parse_function

__all__ = [
    "ExpressionSyntaxError",
    "InvalidParametersError",
    "PlotError",
    "SurfaceFunction",
    "parse_function",
]
