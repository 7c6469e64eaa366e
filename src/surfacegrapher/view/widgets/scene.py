"""
Scene Objects
Builds and replaces the renderable objects of the 3D view: the function
surface, the ground plane and the axes helper.

Every manager owns at most one actor. Replacing it removes the old actor from
the plotter and releases the old dataset, so repeated plots never accumulate
meshes.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import numpy.typing as npt
import pyvista as pv

from surfacegrapher.config import (
    GROUND_SIZE_FACTOR, GROUND_RESOLUTION, GROUND_OPACITY, GROUND_OFFSET_FACTOR,
    DEFAULT_GROUND_COLOR, AXES_GRID_FACTOR
)
from surfacegrapher.model.surface import SurfaceData

logger = logging.getLogger(__name__)


def ground_size(domain_half_width: float) -> float:
    """Side length of the ground plane for a domain half-width."""
    return GROUND_SIZE_FACTOR * domain_half_width


def _release(plotter: pv.Plotter, actor: Optional[pv.Actor], mesh: Optional[pv.DataSet]) -> None:
    """Remove an actor from the plotter and free its dataset."""
    if actor is not None:
        plotter.remove_actor(actor, render=False)
    if mesh is not None:
        mesh.ReleaseData()


class GroundPlaneManager:
    """Flat reference quad below the surface, sized ``100 * n``."""

    def __init__(
        self,
        plotter: pv.Plotter,
        color: str = DEFAULT_GROUND_COLOR,
        offset: Optional[float] = None,
        opacity: float = GROUND_OPACITY,
    ) -> None:
        self.plotter = plotter
        self.color = color
        self.offset = offset
        self.opacity = opacity
        self.visible = True

        self._mesh: Optional[pv.PolyData] = None
        self._actor: Optional[pv.Actor] = None
        self._domain_half_width: Optional[float] = None

    @property
    def mesh(self) -> Optional[pv.PolyData]:
        return self._mesh

    @property
    def actor(self) -> Optional[pv.Actor]:
        return self._actor

    def update(self, domain_half_width: float) -> None:
        """Recreate the plane if the domain half-width changed."""
        if self._actor is not None and domain_half_width == self._domain_half_width:
            return

        if self.offset is None:
            self.offset = GROUND_OFFSET_FACTOR * domain_half_width

        size = ground_size(domain_half_width)
        # the surface is drawn Y-up, so the ground lies in the XZ plane
        plane = pv.Plane(
            center=(0.0, 0.0, 0.0),
            direction=(0.0, 1.0, 0.0),
            i_size=size,
            j_size=size,
            i_resolution=GROUND_RESOLUTION,
            j_resolution=GROUND_RESOLUTION,
        )
        actor = self.plotter.add_mesh(
            plane,
            color=self.color,
            opacity=self.opacity,
            pickable=False,
            show_scalar_bar=False,
            culling=False,
        )
        actor.position = (0.0, self.offset, 0.0)
        actor.SetVisibility(self.visible)

        _release(self.plotter, self._actor, self._mesh)
        self._mesh, self._actor = plane, actor
        self._domain_half_width = domain_half_width
        logger.debug(f"Ground plane rebuilt: size {size:g}, y = {self.offset:g}.")

    def set_color(self, color: str) -> None:
        self.color = color
        if self._actor is not None:
            self._actor.prop.color = color

    def set_offset(self, offset: float) -> None:
        """Move the plane vertically."""
        self.offset = offset
        if self._actor is not None:
            self._actor.position = (0.0, offset, 0.0)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible
        if self._actor is not None:
            self._actor.SetVisibility(visible)

    def clear(self) -> None:
        _release(self.plotter, self._actor, self._mesh)
        self._mesh = None
        self._actor = None
        self._domain_half_width = None


class SurfaceBuilder:
    """
    Turns ``SurfaceData`` into the displayed surface mesh.

    Each ``build`` is a full rebuild: a new mesh is added, then the previous
    actor is removed and its dataset released. The ground plane is resized to
    the same domain half-width.
    """

    def __init__(self, plotter: pv.Plotter, ground: Optional[GroundPlaneManager] = None) -> None:
        self.plotter = plotter
        self.ground = ground
        self.wireframe: bool = False

        self._mesh: Optional[pv.PolyData] = None
        self._actor: Optional[pv.Actor] = None

    @property
    def mesh(self) -> Optional[pv.PolyData]:
        return self._mesh

    @property
    def actor(self) -> Optional[pv.Actor]:
        return self._actor

    @staticmethod
    def vertex_colors(colors: npt.NDArray[np.float64]) -> npt.NDArray[np.uint8]:
        """
        Convert unclamped [0, 1] RGB floats into 8-bit colors for VTK.

        Channels outside [0, 1] are clamped, non-finite ones become 0.
        """
        rgb = np.nan_to_num(np.asarray(colors, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
        return np.round(np.clip(rgb, 0.0, 1.0) * 255.0).astype(np.uint8)

    @classmethod
    def to_polydata(cls, surface: SurfaceData) -> pv.PolyData:
        """Triangle mesh with a ``colors`` RGB point array."""
        n_faces = surface.faces.shape[0]
        cells = np.hstack([np.full((n_faces, 1), 3, dtype=np.int64), surface.faces]).ravel()
        mesh = pv.PolyData(surface.points, faces=cells)
        mesh.point_data["colors"] = cls.vertex_colors(surface.colors)
        return mesh

    def build(self, surface: SurfaceData) -> pv.Actor:
        """Replace the displayed surface with a new one."""
        mesh = self.to_polydata(surface)
        actor = self.plotter.add_mesh(
            mesh,
            scalars="colors",
            rgb=True,
            smooth_shading=True,
            style="wireframe" if self.wireframe else "surface",
            show_scalar_bar=False,
            culling=False,
        )

        _release(self.plotter, self._actor, self._mesh)
        self._mesh, self._actor = mesh, actor
        logger.debug(f"Surface mesh rebuilt: {mesh.n_points} points, {surface.n_faces} triangles.")

        if self.ground is not None:
            self.ground.update(surface.domain_half_width)

        return actor

    def set_wireframe(self, wireframe: bool) -> None:
        self.wireframe = wireframe
        if self._actor is not None:
            self._actor.prop.style = "wireframe" if wireframe else "surface"

    def clear(self) -> None:
        _release(self.plotter, self._actor, self._mesh)
        self._mesh = None
        self._actor = None


class AxesHelper:
    """X (red), Y (green) and Z (blue) axis lines from the origin, length ``10 * n``."""

    COLORS = ("red", "green", "blue")

    def __init__(self, plotter: pv.Plotter) -> None:
        self.plotter = plotter
        self.visible = True
        self._actors: list[pv.Actor] = []
        self._meshes: list[pv.PolyData] = []

    def update(self, domain_half_width: float) -> None:
        self.clear()
        length = AXES_GRID_FACTOR * domain_half_width
        for axis, color in enumerate(self.COLORS):
            tip = [0.0, 0.0, 0.0]
            tip[axis] = length
            line = pv.Line((0.0, 0.0, 0.0), tuple(tip))
            actor = self.plotter.add_mesh(line, color=color, line_width=2, pickable=False, show_scalar_bar=False)
            actor.SetVisibility(self.visible)
            self._meshes.append(line)
            self._actors.append(actor)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible
        for actor in self._actors:
            actor.SetVisibility(visible)

    def clear(self) -> None:
        for actor, mesh in zip(self._actors, self._meshes):
            _release(self.plotter, actor, mesh)
        self._actors.clear()
        self._meshes.clear()
