"""Tests for the control panel, run on Qt's offscreen platform."""
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from surfacegrapher.controller.events import Parameter, ParameterChanged, PlotRequested  # noqa: E402
from surfacegrapher.model.presets import DEFAULT_PRESET, get_preset  # noqa: E402
from surfacegrapher.model.state import PlotState  # noqa: E402
from surfacegrapher.view.panels.function_panel import FunctionPanel  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def panel(qapp):
    widget = FunctionPanel(PlotState())
    yield widget
    widget.deleteLater()


def record(signal):
    events = []
    signal.connect(lambda event: events.append(event))
    return events


class TestFunctionPanel:
    def test_loads_default_preset(self, panel):
        assert panel.checked_preset() == DEFAULT_PRESET
        assert panel.edit_expression.text() == DEFAULT_PRESET.expression

    def test_plot_clicked_keeps_selection(self, panel):
        events = record(panel.plot_requested)
        panel.edit_expression.setText("x +")
        panel.on_plot_clicked()
        assert events == [PlotRequested("x +")]
        assert panel.checked_preset() == DEFAULT_PRESET

    def test_sync_after_plot(self, panel):
        panel.sync_preset_selection("x ** 2 + y ** 2")
        assert panel.checked_preset() == get_preset("Parabola")
        panel.sync_preset_selection("x + y")
        assert panel.checked_preset() is None

    def test_preset_click_requests_plot(self, panel):
        events = record(panel.plot_requested)
        cone = get_preset("Cone")
        panel.on_preset_toggled(cone, True)
        assert events == [PlotRequested(cone.expression)]
        assert panel.edit_expression.text() == cone.expression

    def test_slider_changes_are_batched(self, panel):
        events = record(panel.parameter_changed)
        panel.slider_n.setValue(2.0)
        panel.slider_n.setValue(2.5)
        assert events == []
        panel._flush_parameters()
        assert events == [ParameterChanged(Parameter.DOMAIN_HALF_WIDTH, 2.5)]
