"""Example surfaces offered to users as starting points."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Preset:
    name: str
    formula: str
    description: str


PRESETS: List[Preset] = [
    Preset("Paraboloid", "x^2 + y^2", "Basic quadratic surface"),
    Preset("Saddle", "x^2 - y^2", "Classic saddle point"),
    Preset("Gaussian", "exp(-(x^2 + y^2))", "2D normal distribution"),
    Preset("Ripples", "sin(sqrt(x^2 + y^2))", "Radial wave pattern"),
    Preset("Cone", "sqrt(x^2 + y^2)", "Conical surface"),
    Preset("Tilted plane", "x + y", "Simple plane"),
    Preset("Cosine product", "cos(x) * cos(y)", "Egg-crate waves"),
    Preset("Rational peak", "1 / (1 + x^2 + y^2)", "Smooth peak"),
]


def get_preset(name: str) -> Optional[Preset]:
    """Look up a preset by case-insensitive name."""
    for preset in PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    return None
