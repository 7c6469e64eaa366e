"""
Main Application Window
=======================
The primary GUI container: control panel on the left, 3D view on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It hands the panel's plot requests to the controller and turns
   rejected requests into message boxes.
"""
import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QMessageBox, QSplitter, QScrollArea

from surfacegrapher.app import VISIBLE_APP_NAME
from surfacegrapher.controller.events import PlotEvent, PlotRequested
from surfacegrapher.controller.plot import PlotController
from surfacegrapher.errors import PlotError
from surfacegrapher.model.state import PlotState
from surfacegrapher.model.surface import SurfaceData
from surfacegrapher.view.messages import Severity, plot_error_message
from surfacegrapher.view.panels.function_panel import FunctionPanel
from surfacegrapher.view.widgets.plot_3d import SurfaceWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, state: PlotState) -> None:
        super().__init__()
        self.state: PlotState = state

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.panel = FunctionPanel(self.state)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.panel)
        splitter.addWidget(scroll)

        # --- RIGHT SIDE: 3D Visualization ---
        self.visualizer = SurfaceWidget()
        splitter.addWidget(self.visualizer)
        splitter.setSizes([350, 1050])

        self.controller = PlotController(self.state, display=self.visualizer)

        # --- SIGNAL CONNECTIONS ---
        self.panel.plot_requested.connect(self.on_plot_event)
        self.panel.parameter_changed.connect(self.on_plot_event)
        self.panel.ground_color_changed.connect(self.on_ground_color_changed)
        self.panel.ground_offset_changed.connect(self.on_ground_offset_changed)
        self.visualizer.btn_wireframe.toggled.connect(self.on_wireframe_toggled)

        self._create_actions()
        self._create_menus()

        self.visualizer.ground.set_color(self.state.ground_color)
        self.visualizer.ground.set_offset(self.state.ground_offset)

        # Initial plot
        self.on_plot_event(PlotRequested(self.state.expression))

    def _create_actions(self) -> None:
        self.act_reset = QAction("Reset", self)
        self.act_reset.setShortcut("Ctrl+R")
        self.act_reset.triggered.connect(self.on_reset)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_reset_camera = QAction("Reset Camera", self)
        self.act_reset_camera.triggered.connect(lambda: self.visualizer.reset_camera())

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_reset)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_reset_camera)

    # --- SLOTS ---

    def on_plot_event(self, event: PlotEvent) -> None:
        """Run a plot request; a rejected request keeps the current surface."""
        try:
            surface = self.controller.handle(event)
        except PlotError as e:
            self._report_error(e)
            return

        self.panel.sync_preset_selection(surface.expression)
        self._show_surface_status(surface)

    def _report_error(self, error: PlotError) -> None:
        message = plot_error_message(error)
        self.statusBar().showMessage(message.status)
        if message.severity is Severity.WARNING:
            QMessageBox.warning(self, message.title, message.text)
        else:
            QMessageBox.critical(self, message.title, message.text)

    def on_ground_color_changed(self, color: str) -> None:
        self.state.ground_color = color
        self.visualizer.set_ground_color(color)

    def on_ground_offset_changed(self, offset: float) -> None:
        self.state.ground_offset = offset
        self.visualizer.set_ground_offset(offset)

    def on_wireframe_toggled(self, checked: bool) -> None:
        self.state.show_wireframe = checked

    def on_reset(self) -> None:
        self.state.reset()
        self.panel.load_from_state()
        self.visualizer.set_wireframe(self.state.show_wireframe, render=False)
        self.visualizer.ground.set_color(self.state.ground_color)
        self.visualizer.ground.set_offset(self.state.ground_offset)
        self.on_plot_event(PlotRequested(self.state.expression))

    def _show_surface_status(self, surface: SurfaceData) -> None:
        msg = (
            f"z = {surface.expression}   |   {surface.segments} x {surface.segments} segments, "
            f"{surface.n_points} points"
        )
        if surface.non_finite_count:
            msg += f"   |   {surface.non_finite_count} non-finite samples"
        self.statusBar().showMessage(msg)

    def closeEvent(self, event, /) -> None:
        if self.visualizer and self.visualizer.plotter:
            self.visualizer.close()
        event.accept()
