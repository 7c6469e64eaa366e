"""
Function Control Panel
Preset selection, custom expression entry, sampling sliders and ground options.

The panel does not plot anything itself: it emits ``PlotRequested`` and
``ParameterChanged`` messages that the main window hands to the controller.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QFormLayout, QLabel, QLineEdit,
    QPushButton, QRadioButton, QButtonGroup, QSlider, QColorDialog
)

from surfacegrapher.config import (
    DOMAIN_HALF_WIDTH_RANGE, STEP_SIZE_RANGE, GROUND_OFFSET_RANGE, PARAMETER_DEBOUNCE_MS
)
from surfacegrapher.controller.events import Parameter, ParameterChanged, PlotRequested
from surfacegrapher.model.presets import PRESETS, PresetFunction, find_preset
from surfacegrapher.model.state import PlotState

logger = logging.getLogger(__name__)


# ==========================================
# HELPER WIDGETS
# ==========================================

class FloatSlider(QWidget):
    """Horizontal slider over a float range with a fixed step, plus a value label."""
    valueChanged = Signal(float)

    def __init__(self, minimum: float, maximum: float, step: float, decimals: int = 2,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._minimum = minimum
        self._step = step
        self._decimals = decimals

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.slider = QSlider(Qt.Horizontal, self)
        self.slider.setRange(0, round((maximum - minimum) / step))
        self.slider.setSingleStep(1)
        layout.addWidget(self.slider, 1)

        self.label = QLabel(self)
        self.label.setMinimumWidth(40)
        self.label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        layout.addWidget(self.label)

        self.slider.valueChanged.connect(self._on_slider_changed)
        self._update_label()

    def value(self) -> float:
        return round(self._minimum + self.slider.value() * self._step, self._decimals)

    def setValue(self, value: float) -> None:
        self.slider.setValue(round((value - self._minimum) / self._step))
        self._update_label()

    def _update_label(self) -> None:
        self.label.setText(f"{self.value():.{self._decimals}f}")

    def _on_slider_changed(self, _: int) -> None:
        self._update_label()
        self.valueChanged.emit(self.value())


# ==========================================
# PANEL
# ==========================================

class FunctionPanel(QWidget):
    plot_requested = Signal(object)        # PlotRequested
    parameter_changed = Signal(object)     # ParameterChanged
    ground_color_changed = Signal(str)
    ground_offset_changed = Signal(float)

    def __init__(self, state: PlotState, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.state = state
        self._ground_color = state.ground_color
        self._pending: dict[Parameter, float] = {}

        layout = QVBoxLayout(self)

        # --- Presets ---
        grp_presets = QGroupBox("Select Function")
        presets_layout = QVBoxLayout(grp_presets)
        self.preset_group = QButtonGroup(self)
        self._preset_buttons: dict[str, QRadioButton] = {}
        for preset in PRESETS:
            btn = QRadioButton(preset.name)
            btn.setToolTip(preset.description)
            btn.toggled.connect(lambda checked, p=preset: self.on_preset_toggled(p, checked))
            self.preset_group.addButton(btn)
            self._preset_buttons[preset.expression] = btn
            presets_layout.addWidget(btn)

            formula = QLabel(f"z = {preset.expression}")
            formula.setStyleSheet(
                "font-family: monospace; color: #2563eb; background-color: #e5e7eb; "
                "padding: 4px; margin-left: 20px; border-radius: 3px;"
            )
            formula.setTextInteractionFlags(Qt.TextSelectableByMouse)
            presets_layout.addWidget(formula)
        layout.addWidget(grp_presets)

        # --- Custom function ---
        grp_custom = QGroupBox("Custom Function")
        custom_layout = QVBoxLayout(grp_custom)
        hint = QLabel("Use x and y, operators + - * / % ** (or ^) and functions such as sqrt, sin, cos, exp.")
        hint.setWordWrap(True)
        hint.setStyleSheet("color: gray;")
        custom_layout.addWidget(hint)

        row = QHBoxLayout()
        row.addWidget(QLabel("z = "))
        self.edit_expression = QLineEdit()
        self.edit_expression.setPlaceholderText("x ** 2 - y ** 2")
        self.edit_expression.returnPressed.connect(self.on_plot_clicked)
        row.addWidget(self.edit_expression, 1)
        custom_layout.addLayout(row)

        self.btn_plot = QPushButton("Plot")
        self.btn_plot.setMinimumHeight(32)
        self.btn_plot.clicked.connect(self.on_plot_clicked)
        custom_layout.addWidget(self.btn_plot)
        layout.addWidget(grp_custom)

        # --- Sampling ---
        grp_sampling = QGroupBox("Sampling")
        form = QFormLayout(grp_sampling)
        self.slider_n = FloatSlider(*DOMAIN_HALF_WIDTH_RANGE, decimals=1)
        self.slider_n.setToolTip("Half-width of the plotted square domain [-N, N].")
        self.slider_n.valueChanged.connect(lambda v: self._schedule_parameter(Parameter.DOMAIN_HALF_WIDTH, v))
        form.addRow("N:", self.slider_n)

        self.slider_incr = FloatSlider(*STEP_SIZE_RANGE, decimals=2)
        self.slider_incr.setToolTip("Sampling step; smaller values give a finer surface.")
        self.slider_incr.valueChanged.connect(lambda v: self._schedule_parameter(Parameter.STEP_SIZE, v))
        form.addRow("Incr:", self.slider_incr)
        layout.addWidget(grp_sampling)

        # --- Ground ---
        grp_ground = QGroupBox("Ground")
        ground_form = QFormLayout(grp_ground)
        self.btn_ground_color = QPushButton()
        self.btn_ground_color.setFixedWidth(60)
        self.btn_ground_color.clicked.connect(self.on_ground_color_clicked)
        ground_form.addRow("Ground Color:", self.btn_ground_color)

        self.slider_ground_y = FloatSlider(*GROUND_OFFSET_RANGE, decimals=1)
        self.slider_ground_y.valueChanged.connect(self.ground_offset_changed.emit)
        ground_form.addRow("Ground Y:", self.slider_ground_y)
        layout.addWidget(grp_ground)

        layout.addStretch()

        # Debounce slider drags into single replots
        self._debounce_timer = QTimer(self)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.setInterval(PARAMETER_DEBOUNCE_MS)
        self._debounce_timer.timeout.connect(self._flush_parameters)

        self.load_from_state()

    # --- PUBLIC ---

    def load_from_state(self) -> None:
        """Set all controls from the state without emitting requests."""
        for w in (self.slider_n, self.slider_incr, self.slider_ground_y):
            w.blockSignals(True)
        try:
            self.slider_n.setValue(self.state.domain_half_width)
            self.slider_incr.setValue(self.state.step_size)
            self.slider_ground_y.setValue(self.state.ground_offset)
        finally:
            for w in (self.slider_n, self.slider_incr, self.slider_ground_y):
                w.blockSignals(False)

        self.edit_expression.setText(self.state.expression)
        self._set_ground_color_swatch(self.state.ground_color)
        self.sync_preset_selection(self.state.expression)

    def sync_preset_selection(self, expression: str) -> None:
        """Check the preset matching the expression, or none."""
        match = find_preset(expression)
        self.preset_group.setExclusive(False)
        for text, btn in self._preset_buttons.items():
            btn.blockSignals(True)
            btn.setChecked(match is not None and text == match.expression)
            btn.blockSignals(False)
        self.preset_group.setExclusive(True)

    def checked_preset(self) -> Optional[PresetFunction]:
        for text, btn in self._preset_buttons.items():
            if btn.isChecked():
                return find_preset(text)
        return None

    # --- SLOTS ---

    def on_preset_toggled(self, preset: PresetFunction, checked: bool) -> None:
        if not checked:
            return
        self.edit_expression.setText(preset.expression)
        self.plot_requested.emit(PlotRequested(preset.expression))

    def on_plot_clicked(self) -> None:
        # the preset selection follows the plot once it succeeds
        self.plot_requested.emit(PlotRequested(self.edit_expression.text()))

    def on_ground_color_clicked(self) -> None:
        color = QColorDialog.getColor(QColor(self._ground_color), self, "Ground Color")
        if not color.isValid():
            return
        self._set_ground_color_swatch(color.name())
        self.ground_color_changed.emit(color.name())

    # --- INTERNAL ---

    def _set_ground_color_swatch(self, color: str) -> None:
        self._ground_color = color
        self.btn_ground_color.setStyleSheet(f"background-color: {color}; border: 1px solid #888;")

    def _schedule_parameter(self, name: Parameter, value: float) -> None:
        self._pending[name] = value
        self._debounce_timer.start()

    def _flush_parameters(self) -> None:
        pending, self._pending = self._pending, {}
        for name, value in pending.items():
            logger.debug(f"Parameter {name.value} -> {value}")
            self.parameter_changed.emit(ParameterChanged(name, value))
