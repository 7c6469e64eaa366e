"""Shared fixtures: recording stand-ins for the PyVista plotter and the display."""
from __future__ import annotations

import pytest


class FakeProperty:
    def __init__(self, style: str = "surface", color=None) -> None:
        self.style = style
        self.color = color


class FakeActor:
    def __init__(self, mesh, **kwargs) -> None:
        self.mesh = mesh
        self.kwargs = kwargs
        self.prop = FakeProperty(style=kwargs.get("style", "surface"), color=kwargs.get("color"))
        self.position = (0.0, 0.0, 0.0)
        self.visible = True

    def SetVisibility(self, visible: bool) -> None:
        self.visible = bool(visible)


class FakePlotter:
    """Records add_mesh/remove_actor calls instead of rendering."""

    def __init__(self) -> None:
        self.actors: list[FakeActor] = []
        self.removed: list[FakeActor] = []

    def add_mesh(self, mesh, **kwargs) -> FakeActor:
        actor = FakeActor(mesh, **kwargs)
        self.actors.append(actor)
        return actor

    def remove_actor(self, actor, reset_camera: bool = False, render: bool = True) -> bool:
        self.actors.remove(actor)
        self.removed.append(actor)
        return True


class RecordingDisplay:
    def __init__(self) -> None:
        self.shown = []

    def show_surface(self, surface) -> None:
        self.shown.append(surface)


@pytest.fixture
def plotter() -> FakePlotter:
    return FakePlotter()


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()
