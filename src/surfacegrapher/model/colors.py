"""
Colorizer
Maps sample coordinates to vertex colors.

Each channel is the affine map ``(coord + n) / (2n)``: red follows x, green
follows y, blue follows z. Nothing is clamped, so a ``z`` outside ``[-n, n]``
gives a blue channel outside ``[0, 1]``.
"""
from __future__ import annotations

import numpy as np
import numpy.typing as npt


def normalize(coord: float, domain_half_width: float) -> float:
    return (coord + domain_half_width) / (2.0 * domain_half_width)


def colorize_point(x: float, y: float, z: float, domain_half_width: float) -> tuple[float, float, float]:
    """RGB triple for a single sample point."""
    n = domain_half_width
    return normalize(x, n), normalize(y, n), normalize(z, n)


def colorize(points: npt.ArrayLike, domain_half_width: float) -> npt.NDArray[np.float64]:
    """
    RGB colors for an (N, 3) array of points.

    Returns:
        (N, 3) float array, one row per point.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    with np.errstate(invalid="ignore"):
        return (pts + domain_half_width) / (2.0 * domain_half_width)
