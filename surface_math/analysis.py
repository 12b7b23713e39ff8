"""
Auxiliary analyses built on pointwise evaluation:

- domain/range scan (heuristic, substring based restriction hints)
- multi-directional limit estimator
- surface sampling for renderers
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .evaluator import FunctionEvaluator

logger = logging.getLogger(__name__)

RESTRICTION_HINTS = [
    ('sqrt', "sqrt argument must be non-negative"),
    ('log', "log argument must be positive"),
    ('ln', "ln argument must be positive"),
    ('/', "denominator must be non-zero"),
]


@dataclass(frozen=True)
class DomainRangeReport:
    domain_description: str
    range_min: Optional[float]
    range_max: Optional[float]
    restrictions: List[str] = field(default_factory=list)


class LimitDirection(Enum):
    ALL = "all"   # +-x, +-y, along y = x and along y = -x
    X = "x"       # +-x only
    Y = "y"       # +-y only


_OFFSETS = {
    LimitDirection.ALL: [(1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (1, -1)],
    LimitDirection.X: [(1, 0), (-1, 0)],
    LimitDirection.Y: [(0, 1), (0, -1)],
}


@dataclass(frozen=True)
class LimitEstimate:
    exists: bool
    value: Optional[float]
    message: str
    samples: Tuple[float, ...] = ()


@dataclass
class SurfaceGrid:
    """Vertex grid of f; z[i, j] belongs to (xs[i], ys[j]), nan where undefined."""
    xs: np.ndarray
    ys: np.ndarray
    z: np.ndarray
    z_min: Optional[float]
    z_max: Optional[float]
    undefined_fraction: float
    has_singularities: bool


class Analyzer:
    def __init__(self, evaluator: FunctionEvaluator, scan_resolution: int = 50,
                 surface_resolution: int = 90, limit_offset: float = 1e-3,
                 limit_tolerance: float = 0.01):
        self.evaluator = evaluator
        self.scan_resolution = scan_resolution
        self.surface_resolution = surface_resolution
        self.limit_offset = limit_offset
        self.limit_tolerance = limit_tolerance

    def _grid(self, expression: str, x_range, y_range, resolution: int):
        fn = self.evaluator.prepare(expression)
        xs = np.linspace(x_range[0], x_range[1], resolution + 1)
        ys = np.linspace(y_range[0], y_range[1], resolution + 1)
        z = np.full((len(xs), len(ys)), np.nan)
        for i, x in enumerate(xs):
            for j, y in enumerate(ys):
                sample = self.evaluator.evaluate_compiled(fn, float(x), float(y))
                if sample.defined:
                    z[i, j] = sample.value
        return xs, ys, z

    def domain_range_scan(self, expression: str, x_min: float, x_max: float,
                          y_min: float, y_max: float) -> DomainRangeReport:
        """
        Sample f over the rectangle and report its observed range.

        Restrictions come from substring matches on the expression text
        ('sqrt', 'log'/'ln', '/'), not from solving the domain. Raises
        InvalidExpression for text that fails validation.
        """
        _, _, z = self._grid(expression, (x_min, x_max), (y_min, y_max), self.scan_resolution)
        finite = z[~np.isnan(z)]

        restrictions = []
        for needle, hint in RESTRICTION_HINTS:
            if needle == 'ln' and 'log' in expression:
                continue
            if needle in expression:
                restrictions.append(hint)

        if finite.size == 0:
            return DomainRangeReport("undefined on the sampled region", None, None, restrictions)

        domain = "R^2" if not restrictions else "R^2 minus points where: " + "; ".join(restrictions)
        if finite.size < z.size:
            domain += f" ({z.size - finite.size} of {z.size} samples undefined)"
        return DomainRangeReport(domain, float(finite.min()), float(finite.max()), restrictions)

    def estimate_limit(self, expression: str, x0: float, y0: float,
                       direction: LimitDirection = LimitDirection.ALL) -> LimitEstimate:
        """Compare f at a small offset around (x0, y0) along several directions."""
        direction = LimitDirection(direction)
        h = self.limit_offset
        samples = []
        for sx, sy in _OFFSETS[direction]:
            result = self.evaluator.evaluate(expression, x0 + sx * h, y0 + sy * h)
            if result.defined:
                samples.append(result.value)

        if len(samples) < 2:
            return LimitEstimate(False, None, "Not enough defined samples near the point", tuple(samples))

        spread = max(samples) - min(samples)
        if spread > self.limit_tolerance:
            return LimitEstimate(
                False, None,
                f"Directional values disagree (spread {spread:.4g}); the limit does not exist",
                tuple(samples))

        bound = self.evaluator.clamp_limit
        if all(abs(s) >= bound for s in samples):
            return LimitEstimate(False, None, "Function is unbounded near the point", tuple(samples))

        value = sum(samples) / len(samples)
        return LimitEstimate(True, value, f"Limit is approximately {value:.6g}", tuple(samples))

    def sample_surface(self, expression: str, x_range: Tuple[float, float],
                       y_range: Tuple[float, float],
                       resolution: Optional[int] = None) -> SurfaceGrid:
        resolution = resolution or self.surface_resolution
        xs, ys, z = self._grid(expression, x_range, y_range, resolution)
        undefined = int(np.isnan(z).sum())
        if undefined == z.size:
            z_min = z_max = None
        else:
            z_min, z_max = float(np.nanmin(z)), float(np.nanmax(z))
        has_singularities = undefined > z.size * 0.1
        if has_singularities:
            logger.info(f"{expression!r} is undefined at {undefined} of {z.size} vertices")
        return SurfaceGrid(
            xs=xs, ys=ys, z=z, z_min=z_min, z_max=z_max,
            undefined_fraction=undefined / z.size,
            has_singularities=has_singularities,
        )
