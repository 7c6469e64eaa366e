"""Tests for the position based vertex colorizer."""
import numpy as np
import pytest

from surfacegrapher.model.colors import colorize, colorize_point


class TestColorizePoint:
    def test_affine_map(self):
        assert colorize_point(0.0, 1.0, -1.0, 1.0) == (0.5, 1.0, 0.0)

    def test_pure(self):
        args = (0.3, -0.7, 0.12, 1.5)
        assert colorize_point(*args) == colorize_point(*args)

    def test_corner(self):
        r, g, _ = colorize_point(-2.0, -2.0, 0.0, 2.0)
        assert (r, g) == (0.0, 0.0)

    def test_out_of_range_not_clamped(self):
        _, _, b = colorize_point(0.0, 0.0, 3.0, 1.0)
        assert b == 2.0


class TestColorize:
    def test_matches_point_version(self):
        pts = np.array([[0.1, 0.2, 0.3], [-1.0, 1.0, 5.0]])
        colors = colorize(pts, 1.0)
        for p, c in zip(pts, colors):
            assert tuple(c) == pytest.approx(colorize_point(*p, 1.0))

    def test_shape(self):
        assert colorize(np.zeros((7, 3)), 1.0).shape == (7, 3)

    def test_nan_propagates(self):
        colors = colorize(np.array([[0.0, 0.0, np.nan]]), 1.0)
        assert np.isnan(colors[0, 2])
