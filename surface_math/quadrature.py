"""
Midpoint-rule quadrature over rectangles and boxes.

Undefined samples contribute nothing. Near singularities that biases
the estimate toward zero; the clamp band bounds the rest.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .evaluator import FunctionEvaluator

logger = logging.getLogger(__name__)

Bounds = Tuple[Tuple[float, float], ...]


def cell_centers(lo: float, hi: float, n: int) -> np.ndarray:
    """Centers of n equal cells spanning [lo, hi]."""
    width = (hi - lo) / n
    return lo + (np.arange(n) + 0.5) * width


@dataclass(frozen=True)
class IntegralResult:
    value: float
    bounds: Bounds
    subdivisions: int

    def __float__(self):
        return float(self.value)


@dataclass(frozen=True)
class CenterOfMass:
    mass: float
    center_x: Optional[float]
    center_y: Optional[float]


class Quadrature:
    """Double, absolute, triple integrals and planar center of mass."""

    def __init__(self, evaluator: FunctionEvaluator, subdivisions: int = 50,
                 triple_subdivisions: int = 20):
        self.evaluator = evaluator
        self.subdivisions = subdivisions
        self.triple_subdivisions = triple_subdivisions

    def _check_n(self, n: Optional[int], default: int) -> int:
        n = default if n is None else n
        if n < 1:
            raise ValueError(f"subdivisions must be at least 1, got {n}")
        return n

    def _accumulate(self, expression: str, x_min, x_max, y_min, y_max,
                    n: int, absolute: bool) -> float:
        fn = self.evaluator.prepare(expression)
        cell_area = ((x_max - x_min) / n) * ((y_max - y_min) / n)
        total = 0.0
        for cx in cell_centers(x_min, x_max, n):
            for cy in cell_centers(y_min, y_max, n):
                sample = self.evaluator.evaluate_compiled(fn, float(cx), float(cy))
                if sample.is_undefined:
                    continue
                total += (abs(sample.value) if absolute else sample.value) * cell_area
        return total

    def double_integral(self, expression: str, x_min: float, x_max: float,
                        y_min: float, y_max: float,
                        subdivisions: Optional[int] = None) -> IntegralResult:
        """Integral of f over [x_min, x_max] x [y_min, y_max]. Raises InvalidExpression."""
        n = self._check_n(subdivisions, self.subdivisions)
        value = self._accumulate(expression, x_min, x_max, y_min, y_max, n, absolute=False)
        logger.info(f"Integral of {expression!r} over [{x_min}, {x_max}]x[{y_min}, {y_max}] = {value:.6g}")
        return IntegralResult(value, ((x_min, x_max), (y_min, y_max)), n)

    def double_integral_absolute(self, expression: str, x_min: float, x_max: float,
                                 y_min: float, y_max: float,
                                 subdivisions: Optional[int] = None) -> IntegralResult:
        """Integral of |f|, the unsigned volume between surface and plane."""
        n = self._check_n(subdivisions, self.subdivisions)
        value = self._accumulate(expression, x_min, x_max, y_min, y_max, n, absolute=True)
        return IntegralResult(value, ((x_min, x_max), (y_min, y_max)), n)

    def triple_integral(self, expression: str, x_min: float, x_max: float,
                        y_min: float, y_max: float, z_min: float, z_max: float,
                        subdivisions: Optional[int] = None) -> IntegralResult:
        n = self._check_n(subdivisions, self.triple_subdivisions)
        fn = self.evaluator.prepare(expression, variables=('x', 'y', 'z'))
        cell_volume = ((x_max - x_min) / n) * ((y_max - y_min) / n) * ((z_max - z_min) / n)
        zs = cell_centers(z_min, z_max, n)
        total = 0.0
        for cx in cell_centers(x_min, x_max, n):
            for cy in cell_centers(y_min, y_max, n):
                for cz in zs:
                    sample = self.evaluator.evaluate_compiled(fn, float(cx), float(cy), float(cz))
                    if sample.defined:
                        total += sample.value * cell_volume
        return IntegralResult(total, ((x_min, x_max), (y_min, y_max), (z_min, z_max)), n)

    def center_of_mass(self, density: str, x_min: float, x_max: float,
                       y_min: float, y_max: float,
                       subdivisions: Optional[int] = None) -> CenterOfMass:
        """Mass and centroid of a lamina with the given density."""
        n = self._check_n(subdivisions, self.subdivisions)
        fn = self.evaluator.prepare(density)
        cell_area = ((x_max - x_min) / n) * ((y_max - y_min) / n)
        mass = moment_x = moment_y = 0.0
        for cx in cell_centers(x_min, x_max, n):
            for cy in cell_centers(y_min, y_max, n):
                px, py = float(cx), float(cy)
                rho = self.evaluator.evaluate_compiled(fn, px, py)
                if rho.is_undefined:
                    continue
                dm = rho.value * cell_area
                mass += dm
                moment_x += px * dm
                moment_y += py * dm

        if mass == 0:
            return CenterOfMass(0.0, None, None)
        return CenterOfMass(mass, moment_x / mass, moment_y / mass)
