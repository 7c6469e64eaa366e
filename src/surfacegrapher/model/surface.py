"""
Surface Data
============
Assembles a complete, renderer-independent description of one plotted surface:
sample points, vertex colors and triangle faces.

Why is this file needed?
------------------------
The 3D view only needs arrays. Keeping the assembly here lets the whole
expression -> points -> colors pipeline run (and be tested) without Qt or VTK.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
import numpy.typing as npt

from surfacegrapher.model.colors import colorize
from surfacegrapher.model.sampler import sample_surface, grid_faces

logger = logging.getLogger(__name__)


@dataclass
class SurfaceData:
    """Everything needed to draw one surface."""
    expression: str
    domain_half_width: float
    step_size: float
    segments: int
    points: npt.NDArray[np.float64]   # (N, 3)
    colors: npt.NDArray[np.float64]   # (N, 3), not clamped
    faces: npt.NDArray[np.int64]      # (M, 3) triangle indices into points

    @property
    def n_points(self) -> int:
        return int(self.points.shape[0])

    @property
    def n_faces(self) -> int:
        return int(self.faces.shape[0])

    @property
    def non_finite_count(self) -> int:
        return int(np.count_nonzero(~np.isfinite(self.points[:, 2])))


def build_surface(
    fn: Callable[[float, float], float],
    domain_half_width: float,
    step_size: float,
    expression: str | None = None,
) -> SurfaceData:
    """
    Sample ``fn`` and color the samples.

    Args:
        fn: The function to plot.
        domain_half_width: Half-width ``n`` of the sampled square.
        step_size: Step size ``incr`` controlling the resolution.
        expression: Display text; defaults to ``fn.expression`` when available.

    Returns:
        The assembled surface.
    """
    grid = sample_surface(fn, domain_half_width, step_size)
    colors = colorize(grid.points, grid.domain_half_width)

    if expression is None:
        expression = getattr(fn, "expression", repr(fn))

    surface = SurfaceData(
        expression=expression,
        domain_half_width=grid.domain_half_width,
        step_size=float(step_size),
        segments=grid.segments,
        points=grid.points,
        colors=colors,
        faces=grid_faces(grid.segments),
    )

    bad = surface.non_finite_count
    if bad:
        logger.warning(f"'{expression}' produced {bad} non-finite sample(s); they are rendered as-is.")
    return surface
