"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

import logging
from typing import Optional

import pyvista as pv
from PySide6.QtCore import Signal
from PySide6.QtGui import QCloseEvent, QResizeEvent
from PySide6.QtWidgets import QFrame, QHBoxLayout, QPushButton, QStyle, QVBoxLayout, QWidget
from pyvistaqt import QtInteractor

from surfacegrapher.config import (
    CAMERA_DISTANCE_FACTOR, CAMERA_VIEW_ANGLE, DIRECTIONAL_LIGHT_INTENSITY, SHADOWS_ENABLED
)
from surfacegrapher.model.surface import SurfaceData
from surfacegrapher.view.widgets.scene import AxesHelper, GroundPlaneManager, SurfaceBuilder

logger = logging.getLogger(__name__)


class SurfaceWidget(QWidget):
    """
    Hosts the PyVista scene: function surface, ground plane and axes.

    Implements ``show_surface`` so the plot controller can display into it.
    """
    surface_shown = Signal(object)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Scene managers ---
        self.ground = GroundPlaneManager(self.plotter)
        self.surface_builder = SurfaceBuilder(self.plotter, self.ground)
        self.axes = AxesHelper(self.plotter)

        # Domain half-width the camera and axes were last fitted to
        self._fitted_domain: Optional[float] = None

        self._setup_overlay_controls()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def show_surface(self, surface: SurfaceData) -> None:
        """Replace the displayed surface and rescale the scene to its domain."""
        logger.info(f"Displaying surface z = {surface.expression}.")
        self.surface_builder.build(surface)

        n = surface.domain_half_width
        if n != self._fitted_domain:
            self.axes.update(n)
            self.reset_camera(n, render=False)
            self._fitted_domain = n

        self.plotter.render()
        self.surface_shown.emit(surface)

    def reset_camera(self, domain_half_width: Optional[float] = None, render: bool = True) -> None:
        """Put the camera on +Z at ``15 n``, looking at the origin with +Y up."""
        n = domain_half_width if domain_half_width is not None else self._fitted_domain
        if n is None:
            return
        cam = self.plotter.camera
        cam.focal_point = (0.0, 0.0, 0.0)
        cam.position = (0.0, 0.0, CAMERA_DISTANCE_FACTOR * n)
        cam.up = (0.0, 1.0, 0.0)
        cam.view_angle = CAMERA_VIEW_ANGLE
        self.plotter.reset_camera_clipping_range()
        if render:
            self.plotter.render()

    def set_wireframe(self, wireframe: bool, render: bool = True) -> None:
        self.surface_builder.set_wireframe(wireframe)
        self._sync_button(self.btn_wireframe, wireframe)
        if render:
            self.plotter.render()

    def set_ground_visible(self, visible: bool, render: bool = True) -> None:
        self.ground.set_visible(visible)
        self._sync_button(self.btn_ground, visible)
        if render:
            self.plotter.render()

    def set_axes_visible(self, visible: bool, render: bool = True) -> None:
        self.axes.set_visible(visible)
        self._sync_button(self.btn_axes, visible)
        if render:
            self.plotter.render()

    def set_ground_color(self, color: str) -> None:
        self.ground.set_color(color)
        self.plotter.render()

    def set_ground_offset(self, offset: float) -> None:
        self.ground.set_offset(offset)
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("white")
        self.plotter.add_axes()

        self.plotter.remove_all_lights()
        sun = pv.Light(
            position=(1.0, 1.0, 0.0),
            focal_point=(0.0, 0.0, 0.0),
            light_type="scene light",
            intensity=DIRECTIONAL_LIGHT_INTENSITY,
        )
        self.plotter.add_light(sun)
        # soft fill so the side facing away from the sun stays readable
        self.plotter.add_light(pv.Light(light_type="headlight", intensity=0.3))

        if SHADOWS_ENABLED:
            self.plotter.enable_shadows()

    @staticmethod
    def _sync_button(button: QPushButton, checked: bool) -> None:
        """Set a toggle button without triggering its slot."""
        if button.isChecked() != checked:
            button.blockSignals(True)
            button.setChecked(checked)
            button.blockSignals(False)

    def _setup_overlay_controls(self) -> None:
        """Floating toggle buttons."""
        self.overlay_widget = QFrame(self)
        self.overlay_widget.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 200); border-radius: 6px; border: 1px solid #ccc; }
            QPushButton { background-color: transparent; border: none; padding: 4px; }
            QPushButton:checked { background-color: rgba(0, 120, 215, 50); border: 1px solid #0078D7; border-radius: 3px; }
            QPushButton:hover { background-color: rgba(0, 0, 0, 10); }
        """)

        layout = QHBoxLayout(self.overlay_widget)
        layout.setContentsMargins(4, 4, 4, 4)

        def make_btn(icon, slot, tooltip, default_state=True, checkable=True):
            btn = QPushButton()
            btn.setIcon(self.style().standardIcon(icon))
            btn.setToolTip(tooltip)
            btn.setCheckable(checkable)
            if checkable:
                btn.setChecked(default_state)
                btn.toggled.connect(slot)
            else:
                btn.clicked.connect(slot)
            layout.addWidget(btn)
            return btn

        self.btn_wireframe = make_btn(QStyle.SP_FileDialogListView, self.on_toggle_wireframe, "Show Wireframe",
                                      default_state=False)
        self.btn_ground = make_btn(QStyle.SP_DriveHDIcon, self.on_toggle_ground, "Show Ground")
        self.btn_axes = make_btn(QStyle.SP_ArrowUp, self.on_toggle_axes, "Show Axes")
        self.btn_reset = make_btn(QStyle.SP_BrowserReload, lambda: self.reset_camera(), "Reset Camera",
                                  checkable=False)

        self.overlay_widget.adjustSize()

    # --- Toggle Slots ---
    def on_toggle_wireframe(self, checked: bool) -> None:
        self.set_wireframe(checked)

    def on_toggle_ground(self, checked: bool) -> None:
        self.set_ground_visible(checked)

    def on_toggle_axes(self, checked: bool) -> None:
        self.set_axes_visible(checked)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        # keep the overlay pinned to the top-right corner
        self.overlay_widget.move(self.width() - self.overlay_widget.width() - 10, 10)
        self.overlay_widget.raise_()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.surface_builder.clear()
        self.ground.clear()
        self.axes.clear()
        self.plotter.close()
        event.accept()
