"""
Constrained critical points by brute-force grid search.

A grid point is reported when it sits inside the band |g(x, y)| < tol
around the constraint curve and the gradients of objective and
constraint are nearly parallel (approximate Lagrange condition). There
is no root refinement and no multiplier is computed.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .calculus import Differentiator
from .errors import InvalidExpression

logger = logging.getLogger(__name__)


class Classification(Enum):
    MAXIMUM = "maximum"
    MINIMUM = "minimum"
    SADDLE = "saddle"

    @classmethod
    def from_value(cls, z: float) -> "Classification":
        # sign of the objective only, not a second-derivative test
        if z > 0:
            return cls.MAXIMUM
        if z < 0:
            return cls.MINIMUM
        return cls.SADDLE


@dataclass(frozen=True)
class CriticalPoint:
    x: float
    y: float
    z: float
    classification: Classification

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)


@dataclass(frozen=True)
class CriticalPointSearch:
    """Search outcome; error is set when an input expression was rejected."""
    points: List[CriticalPoint] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ConstrainedSearch:
    """Grid search for points satisfying g = 0 and grad f || grad g."""

    def __init__(self, differentiator: Differentiator,
                 search_range: float = 3.0, step: float = 0.2,
                 constraint_tolerance: float = 0.1,
                 parallel_tolerance: float = 0.5,
                 dedup_radius: float = 0.5):
        self.differentiator = differentiator
        self.evaluator = differentiator.evaluator
        self.search_range = search_range
        self.step = step
        self.constraint_tolerance = constraint_tolerance
        self.parallel_tolerance = parallel_tolerance
        self.dedup_radius = dedup_radius

    def grid(self) -> List[float]:
        """Axis coordinates -range .. range inclusive."""
        count = int(math.floor(2 * self.search_range / self.step + 1e-9))
        return [-self.search_range + i * self.step for i in range(count + 1)]

    def search(self, objective: str, constraint: str) -> CriticalPointSearch:
        try:
            f = self.evaluator.prepare(objective)
            g = self.evaluator.prepare(constraint)
        except InvalidExpression as e:
            return CriticalPointSearch([], e.reason)

        axis = self.grid()
        points: List[CriticalPoint] = []
        for x in axis:
            for y in axis:
                g_val = self.evaluator.evaluate_compiled(g, x, y)
                if g_val.is_undefined or abs(g_val.value) >= self.constraint_tolerance:
                    continue

                grad_f = self.differentiator.gradient_compiled(f, x, y)
                grad_g = self.differentiator.gradient_compiled(g, x, y)
                cross = grad_f.dx * grad_g.dy - grad_f.dy * grad_g.dx
                if abs(cross) >= self.parallel_tolerance:
                    continue

                z = self.evaluator.evaluate_compiled(f, x, y)
                if z.is_undefined:
                    continue
                # first found wins
                if any(p.distance_to(x, y) < self.dedup_radius for p in points):
                    continue
                points.append(CriticalPoint(x, y, z.value, Classification.from_value(z.value)))

        logger.info(f"Found {len(points)} critical point(s) of {objective!r} on {constraint!r} = 0")
        return CriticalPointSearch(points)
