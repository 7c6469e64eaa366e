"""
Preset Functions
The built-in functions offered next to the custom expression field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PresetFunction:
    name: str
    expression: str
    description: str = ""


PRESETS: list[PresetFunction] = [
    PresetFunction("Hyperbolic Paraboloid", "x ** 2 - y ** 2", "Saddle shape"),
    PresetFunction("Parabola", "x ** 2 + y ** 2", "Paraboloid (bowl shape)"),
    PresetFunction("Deep Parabola", "3 * x ** 2 + 3 * y ** 2", "Scaled paraboloid"),
    PresetFunction("Cone", "sqrt(x ** 2 + y ** 2)", "Cone with the apex at the origin"),
]

DEFAULT_PRESET: PresetFunction = PRESETS[0]


def find_preset(expression: str) -> Optional[PresetFunction]:
    """Return the preset whose expression text matches, ignoring outer whitespace."""
    text = expression.strip()
    for preset in PRESETS:
        if preset.expression == text:
            return preset
    return None


def get_preset(name: str) -> PresetFunction:
    for preset in PRESETS:
        if preset.name == name:
            return preset
    raise KeyError(f"No preset named '{name}'")
