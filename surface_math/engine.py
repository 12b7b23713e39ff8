"""
Main SurfaceEngine class - unified interface for all operations.
"""

from typing import List, Optional, Tuple, Union

from .analysis import Analyzer, DomainRangeReport, LimitDirection, LimitEstimate, SurfaceGrid
from .calculus import Differentiator, GradientSample, GradientVector, TangentPlane
from .compiler import ExpressionCompiler
from .config import EngineConfig
from .core import Expr
from .evaluator import EvaluationResult, FunctionEvaluator
from .optimize import ConstrainedSearch, CriticalPoint, CriticalPointSearch
from .quadrature import CenterOfMass, IntegralResult, Quadrature
from .validator import ValidationResult, validate


class SurfaceEngine:
    """
    Unified interface for the surface math engine.

    Usage:
        engine = SurfaceEngine()

        # Point evaluation (never raises)
        engine.evaluate("x^2 + y^2", 1, 2).value        # 5.0
        engine.evaluate("1/(x^2+y^2)", 0, 0).defined    # False

        # Calculus
        engine.gradient("x^2 + y^2", 1, 2).magnitude    # ~4.472
        engine.find_constrained_critical_points("x+y", "x^2+y^2-1")
        engine.double_integral("1", 0, 2, 0, 3).value   # 6.0

    Each engine owns its compiled-expression cache; engines share nothing.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.compiler = ExpressionCompiler(cache_size=self.config.cache_size)
        self.evaluator = FunctionEvaluator(self.compiler, clamp_limit=self.config.clamp_limit)
        self.differentiator = Differentiator(self.evaluator, step=self.config.derivative_step)
        self.critical_points = ConstrainedSearch(
            self.differentiator,
            search_range=self.config.search_range,
            step=self.config.search_step,
            constraint_tolerance=self.config.constraint_tolerance,
            parallel_tolerance=self.config.parallel_tolerance,
            dedup_radius=self.config.dedup_radius,
        )
        self.quadrature = Quadrature(
            self.evaluator,
            subdivisions=self.config.subdivisions,
            triple_subdivisions=self.config.triple_subdivisions,
        )
        self.analyzer = Analyzer(
            self.evaluator,
            scan_resolution=self.config.scan_resolution,
            surface_resolution=self.config.surface_resolution,
            limit_offset=self.config.limit_offset,
            limit_tolerance=self.config.limit_tolerance,
        )

    # -- expressions ---------------------------------------------------

    def validate(self, expression: str) -> ValidationResult:
        return validate(expression)

    def parse(self, expression: str) -> Expr:
        """Parse string to expression tree. Raises CompileError."""
        return self.compiler.compile(expression).tree

    def evaluate(self, expression: str, x: float, y: float) -> EvaluationResult:
        return self.evaluator.evaluate(expression, x, y)

    # -- differentiation -----------------------------------------------

    def partial_derivatives(self, expression: str, x: float, y: float) -> Tuple[float, float]:
        return self.differentiator.partial_derivatives(expression, x, y)

    def gradient(self, expression: str, x: float, y: float) -> GradientVector:
        return self.differentiator.gradient(expression, x, y)

    def tangent_plane(self, expression: str, x0: float, y0: float) -> TangentPlane:
        return self.differentiator.tangent_plane(expression, x0, y0)

    def gradient_field(self, expression: str, x_range: Tuple[float, float],
                       y_range: Tuple[float, float], grid_size: int = 10) -> List[GradientSample]:
        return self.differentiator.gradient_field(expression, x_range, y_range, grid_size)

    # -- optimization --------------------------------------------------

    def find_constrained_critical_points(self, objective: str, constraint: str) -> List[CriticalPoint]:
        """Critical points of objective on constraint = 0; empty on invalid input too."""
        return self.critical_points.search(objective, constraint).points

    def search_constrained_critical_points(self, objective: str, constraint: str) -> CriticalPointSearch:
        """Like find_constrained_critical_points, but reports rejected input in .error."""
        return self.critical_points.search(objective, constraint)

    # -- integration ---------------------------------------------------

    def double_integral(self, expression: str, x_min: float, x_max: float,
                        y_min: float, y_max: float, subdivisions: Optional[int] = None) -> IntegralResult:
        return self.quadrature.double_integral(expression, x_min, x_max, y_min, y_max, subdivisions)

    def double_integral_absolute(self, expression: str, x_min: float, x_max: float,
                                 y_min: float, y_max: float, subdivisions: Optional[int] = None) -> IntegralResult:
        return self.quadrature.double_integral_absolute(expression, x_min, x_max, y_min, y_max, subdivisions)

    def triple_integral(self, expression: str, x_min: float, x_max: float,
                        y_min: float, y_max: float, z_min: float, z_max: float,
                        subdivisions: Optional[int] = None) -> IntegralResult:
        return self.quadrature.triple_integral(
            expression, x_min, x_max, y_min, y_max, z_min, z_max, subdivisions)

    def center_of_mass(self, density: str, x_min: float, x_max: float,
                       y_min: float, y_max: float, subdivisions: Optional[int] = None) -> CenterOfMass:
        return self.quadrature.center_of_mass(density, x_min, x_max, y_min, y_max, subdivisions)

    # -- analysis ------------------------------------------------------

    def domain_range_scan(self, expression: str, x_min: float, x_max: float,
                          y_min: float, y_max: float) -> DomainRangeReport:
        return self.analyzer.domain_range_scan(expression, x_min, x_max, y_min, y_max)

    def estimate_limit(self, expression: str, x0: float, y0: float,
                       direction: Union[LimitDirection, str] = LimitDirection.ALL) -> LimitEstimate:
        return self.analyzer.estimate_limit(expression, x0, y0, direction)

    def sample_surface(self, expression: str, x_range: Tuple[float, float],
                       y_range: Tuple[float, float], resolution: Optional[int] = None) -> SurfaceGrid:
        return self.analyzer.sample_surface(expression, x_range, y_range, resolution)
