"""Tests for the plot controller and the request messages it handles."""
import numpy as np
import pytest

from surfacegrapher.controller.events import Parameter, ParameterChanged, PlotRequested
from surfacegrapher.controller.plot import PlotController
from surfacegrapher.errors import ExpressionSyntaxError, InvalidParametersError, PlotError
from surfacegrapher.model.state import PlotState


@pytest.fixture
def controller(display):
    return PlotController(PlotState(), display=display)


# ─── plot ────────────────────────────────────────────────────────────────────

class TestPlot:
    def test_cone(self, controller, display):
        surface = controller.plot("sqrt(x ** 2 + y ** 2)", 1.0, 0.1)
        assert surface.segments == 20
        assert surface.n_points == 441
        assert surface.n_faces == 2 * 20 * 20
        assert np.all(surface.points[:, 2] >= 0.0)
        # (u, v) = (0.5, 0.5) is the grid centre
        centre = surface.points[10 * 21 + 10]
        assert centre[:2] == pytest.approx([0.0, 0.0], abs=1e-12)
        assert centre[2] == pytest.approx(0.0, abs=1e-12)
        assert display.shown == [surface]

    def test_colors_match_points(self, controller):
        surface = controller.plot("x * y", 2.0, 0.5)
        assert np.allclose(surface.colors, (surface.points + 2.0) / 4.0)

    def test_updates_state(self, controller):
        controller.plot("  x + y ", 2.0, 0.5)
        assert controller.state.expression == "x + y"
        assert controller.state.domain_half_width == 2.0
        assert controller.state.step_size == 0.5

    def test_defaults_from_state(self, controller):
        controller.state.domain_half_width = 0.5
        controller.state.step_size = 0.1
        surface = controller.plot("x")
        assert surface.domain_half_width == 0.5
        assert surface.segments == 10

    @pytest.mark.parametrize("n, incr", [(0.0, 0.1), (1.0, 0.0), (-1.0, 0.1), (None, 0.1)])
    def test_invalid_parameters_leave_display(self, controller, display, n, incr):
        first = controller.plot("x", 1.0, 0.1)
        controller.state.domain_half_width = None if n is None else 1.0
        with pytest.raises(InvalidParametersError):
            controller.plot("x ** 2", n, incr)
        assert display.shown == [first]
        assert controller.last_surface is first
        assert controller.state.expression == "x"

    def test_bad_expression_leaves_display(self, controller, display):
        first = controller.plot("x", 1.0, 0.1)
        with pytest.raises(ExpressionSyntaxError):
            controller.plot("x +", 2.0, 0.2)
        assert display.shown == [first]
        assert controller.state.domain_half_width == 1.0
        assert controller.state.step_size == 0.1

    def test_parameters_checked_before_expression(self, controller):
        with pytest.raises(InvalidParametersError):
            controller.plot("x +", 0.0, 0.1)

    def test_errors_share_base(self, controller):
        with pytest.raises(PlotError):
            controller.plot("z", 1.0, 0.1)

    def test_long_sum(self, controller, display):
        surface = controller.plot(" + ".join(["x"] * 500), 1.0, 0.1)
        assert np.allclose(surface.points[:, 2], 500.0 * surface.points[:, 0])
        assert display.shown == [surface]

    def test_too_deep_is_rejected(self, controller, display):
        with pytest.raises(ExpressionSyntaxError):
            controller.plot("(" * 2000 + "x" + ")" * 2000, 1.0, 0.1)
        assert display.shown == []

    def test_without_display(self):
        controller = PlotController(PlotState())
        surface = controller.plot("x", 1.0, 0.1)
        assert controller.last_surface is surface

    def test_non_finite_kept(self, controller, caplog):
        with caplog.at_level("WARNING", logger="surfacegrapher"):
            surface = controller.plot("sqrt(x)", 1.0, 0.1)
        assert surface.non_finite_count > 0
        assert "non-finite" in caplog.text


# ─── handle ──────────────────────────────────────────────────────────────────

class TestHandle:
    def test_plot_requested(self, controller, display):
        surface = controller.handle(PlotRequested("x ** 2 + y ** 2"))
        assert surface.expression == "x ** 2 + y ** 2"
        assert display.shown == [surface]

    def test_domain_changed_replots(self, controller, display):
        controller.plot("x", 1.0, 0.1)
        surface = controller.handle(ParameterChanged(Parameter.DOMAIN_HALF_WIDTH, 2.0))
        assert surface.expression == "x"
        assert surface.domain_half_width == 2.0
        assert surface.segments == 40
        assert len(display.shown) == 2

    def test_step_changed_replots(self, controller):
        controller.plot("x", 1.0, 0.1)
        surface = controller.handle(ParameterChanged(Parameter.STEP_SIZE, 0.05))
        assert surface.segments == 40

    def test_invalid_parameter_change(self, controller, display):
        controller.plot("x", 1.0, 0.1)
        with pytest.raises(InvalidParametersError):
            controller.handle(ParameterChanged(Parameter.STEP_SIZE, 0.0))
        assert len(display.shown) == 1

    def test_unknown_event(self, controller):
        with pytest.raises(TypeError):
            controller.handle("plot")


class TestReplot:
    def test_uses_state(self, controller):
        controller.plot("x - y", 1.5, 0.5)
        surface = controller.replot()
        assert surface.expression == "x - y"
        assert surface.domain_half_width == 1.5


class TestPlotState:
    def test_reset(self):
        state = PlotState()
        default = PlotState()
        state.expression = "x"
        state.domain_half_width = 3.0
        state.show_wireframe = True
        state.reset()
        assert state == default
