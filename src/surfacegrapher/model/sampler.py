"""
Parametric Sampler
==================
Samples ``z = f(x, y)`` on a regular grid over the square ``[-n, n] x [-n, n]``.

The grid is a parametric surface: parameters ``u, v`` run over ``[0, 1]`` and
map to ``x = (u - 0.5) * 2n``, ``y = (v - 0.5) * 2n``. Points are stored with
``v`` as the outer loop and ``u`` as the inner one, i.e. the point for
``(u_j, v_i)`` sits at index ``i * (segments + 1) + j``. ``grid_faces`` builds
triangles for exactly that ordering.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

import numpy as np
import numpy.typing as npt

from surfacegrapher.config import MIN_SEGMENTS
from surfacegrapher.errors import InvalidParametersError

logger = logging.getLogger(__name__)


@dataclass
class SampleGrid:
    """Sampled surface points, shape ``((segments + 1) ** 2, 3)``."""
    points: npt.NDArray[np.float64]
    segments: int
    domain_half_width: float

    @property
    def n_points(self) -> int:
        return int(self.points.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        """(rows along v, columns along u)"""
        return self.segments + 1, self.segments + 1

    @property
    def non_finite_count(self) -> int:
        return int(np.count_nonzero(~np.isfinite(self.points[:, 2])))


def validate_parameters(domain_half_width: float | None, step_size: float | None) -> tuple[float, float]:
    """
    Check that both sampling parameters are positive finite numbers.

    Returns:
        The parameters as floats.

    Raises:
        InvalidParametersError: If either value is missing, zero, negative or not finite.
    """
    checked = []
    for name, value in (("domain_half_width", domain_half_width), ("step_size", step_size)):
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise InvalidParametersError(f"Parameter '{name}' is not set.", name) from None
        if not math.isfinite(number) or number <= 0.0:
            raise InvalidParametersError(f"Parameter '{name}' must be positive, got {value}.", name)
        checked.append(number)
    return checked[0], checked[1]


def segment_count(domain_half_width: float, step_size: float) -> int:
    """
    Number of grid subdivisions along each axis.

    ``max(MIN_SEGMENTS, floor(2n / incr))``. There is no upper bound, so a tiny
    step size asks for a very large grid.
    """
    n, incr = validate_parameters(domain_half_width, step_size)
    return max(MIN_SEGMENTS, math.floor(2.0 * n / incr))


def _evaluate(fn: Callable[[float, float], float], x: npt.NDArray[np.float64], y: npt.NDArray[np.float64]):
    evaluate_grid = getattr(fn, "evaluate_grid", None)
    if evaluate_grid is not None:
        return evaluate_grid(x, y)
    # plain Python callables are evaluated sample by sample
    with np.errstate(all="ignore"):
        return np.vectorize(fn, otypes=[np.float64])(x, y)


def sample_surface(
    fn: Callable[[float, float], float],
    domain_half_width: float,
    step_size: float,
) -> SampleGrid:
    """
    Sample ``fn`` over ``[-n, n]^2`` at the resolution derived from the step size.

    Args:
        fn: Function of two floats; a ``SurfaceFunction`` is evaluated vectorised.
        domain_half_width: Half the side length ``n`` of the sampled square.
        step_size: Sampling coarseness ``incr``, only used for the segment count.

    Returns:
        The sampled grid. Non-finite ``z`` values are kept as they are.
    """
    n, incr = validate_parameters(domain_half_width, step_size)
    segments = segment_count(n, incr)

    t = np.linspace(0.0, 1.0, segments + 1)
    u, v = np.meshgrid(t, t)  # u varies along a row, v between rows
    x = (u - 0.5) * 2.0 * n
    y = (v - 0.5) * 2.0 * n
    z = _evaluate(fn, x, y)

    points = np.column_stack([x.ravel(), y.ravel(), np.asarray(z, dtype=np.float64).ravel()])
    logger.debug(f"Sampled {points.shape[0]} points ({segments} segments, n={n}, incr={incr}).")
    return SampleGrid(points=points, segments=segments, domain_half_width=n)


def grid_faces(segments: int) -> npt.NDArray[np.int64]:
    """
    Triangle indices for a sampled grid.

    Each grid quad with corners ``a`` (v_i, u_j), ``b`` (v_i+1, u_j),
    ``c`` (v_i+1, u_j+1) and ``d`` (v_i, u_j+1) is split into the triangles
    ``(a, b, d)`` and ``(b, c, d)``.

    Returns:
        Array of shape ``(2 * segments ** 2, 3)``.
    """
    stride = segments + 1
    i, j = np.meshgrid(np.arange(segments), np.arange(segments), indexing="ij")
    a = i * stride + j
    b = (i + 1) * stride + j
    c = b + 1
    d = a + 1
    quads = np.stack([np.stack([a, b, d], axis=-1), np.stack([b, c, d], axis=-1)], axis=2)
    return quads.reshape(-1, 3).astype(np.int64)
