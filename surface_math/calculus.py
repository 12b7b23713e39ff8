"""
Numerical differentiation: partial derivatives, gradients, tangent planes.

All derivatives are central differences with a fixed step h. Undefined
samples are read as 0 before differencing, so results near the edge of
a function's domain lose precision instead of failing.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from .compiler import CompiledEvaluator
from .errors import InvalidExpression
from .evaluator import FunctionEvaluator


@dataclass(frozen=True)
class GradientVector:
    dx: float
    dy: float
    magnitude: float
    direction: Tuple[float, float]

    @classmethod
    def from_partials(cls, dx: float, dy: float) -> "GradientVector":
        magnitude = math.hypot(dx, dy)
        if magnitude == 0:
            return cls(dx, dy, 0.0, (0.0, 0.0))
        return cls(dx, dy, magnitude, (dx / magnitude, dy / magnitude))

    @property
    def vector(self) -> Tuple[float, float]:
        return (self.dx, self.dy)


@dataclass(frozen=True)
class TangentPlane:
    """z = z0 + dx (x - x0) + dy (y - y0)"""
    x0: float
    y0: float
    z0: float
    dx: float
    dy: float

    def height(self, x: float, y: float) -> float:
        return self.z0 + self.dx * (x - self.x0) + self.dy * (y - self.y0)


@dataclass(frozen=True)
class GradientSample:
    x: float
    y: float
    z: float
    gradient: GradientVector


class Differentiator:
    """Central-difference calculus on top of a FunctionEvaluator."""

    def __init__(self, evaluator: FunctionEvaluator, step: float = 1e-4):
        self.evaluator = evaluator
        self.step = step

    def _sample(self, fn: CompiledEvaluator, x: float, y: float) -> float:
        return self.evaluator.evaluate_compiled(fn, x, y).value_or(0.0)

    def partials_compiled(self, fn: CompiledEvaluator, x: float, y: float) -> Tuple[float, float]:
        h = self.step
        dx = (self._sample(fn, x + h, y) - self._sample(fn, x - h, y)) / (2 * h)
        dy = (self._sample(fn, x, y + h) - self._sample(fn, x, y - h)) / (2 * h)
        return (dx if math.isfinite(dx) else 0.0,
                dy if math.isfinite(dy) else 0.0)

    def partial_derivatives(self, expression: str, x: float, y: float) -> Tuple[float, float]:
        """(df/dx, df/dy) at (x, y); (0, 0) when the expression is unusable."""
        fn = self._compile_or_none(expression)
        if fn is None:
            return (0.0, 0.0)
        return self.partials_compiled(fn, x, y)

    def gradient(self, expression: str, x: float, y: float) -> GradientVector:
        return GradientVector.from_partials(*self.partial_derivatives(expression, x, y))

    def gradient_compiled(self, fn: CompiledEvaluator, x: float, y: float) -> GradientVector:
        return GradientVector.from_partials(*self.partials_compiled(fn, x, y))

    def tangent_plane(self, expression: str, x0: float, y0: float) -> TangentPlane:
        z0 = self.evaluator.evaluate(expression, x0, y0).value_or(0.0)
        dx, dy = self.partial_derivatives(expression, x0, y0)
        return TangentPlane(x0, y0, z0, dx, dy)

    def gradient_field(self, expression: str, x_range: Tuple[float, float],
                       y_range: Tuple[float, float], grid_size: int = 10) -> List[GradientSample]:
        """Gradients at the interior nodes of a grid_size x grid_size lattice."""
        fn = self._compile_or_none(expression)
        if fn is None:
            return []

        (x_min, x_max), (y_min, y_max) = x_range, y_range
        x_step = (x_max - x_min) / grid_size
        y_step = (y_max - y_min) / grid_size
        samples = []
        for i in range(1, grid_size):
            for j in range(1, grid_size):
                x = x_min + i * x_step
                y = y_min + j * y_step
                z = self.evaluator.evaluate_compiled(fn, x, y)
                if z.is_undefined:
                    continue
                samples.append(GradientSample(x, y, z.value, self.gradient_compiled(fn, x, y)))
        return samples

    def _compile_or_none(self, expression: str):
        try:
            return self.evaluator.prepare(expression)
        except InvalidExpression:
            return None
