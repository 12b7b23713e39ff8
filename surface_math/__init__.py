"""
Surface Math Engine
===================
Expression evaluation and numerical calculus for surfaces z = f(x, y).

Usage:
    from surface_math import SurfaceEngine

    engine = SurfaceEngine()

    # Safe pointwise evaluation (undefined instead of exceptions)
    result = engine.evaluate("sqrt(1 - x^2 - y^2)", 0.5, 0.5)

    # Gradient, tangent plane
    grad = engine.gradient("x^2 + y^2", 1, 2)
    plane = engine.tangent_plane("x^2 + y^2", 1, 2)

    # Lagrange-style constrained critical points
    points = engine.find_constrained_critical_points("x + y", "x^2 + y^2 - 1")

    # Midpoint quadrature (raises InvalidExpression on bad input)
    area = engine.double_integral("1", 0, 2, 0, 3).value

Version: 1.0
"""

from .config import EngineConfig
from .errors import SurfaceMathError, CompileError, InvalidExpression

from .core import Op, Expr

from .validator import ValidationIssue, ValidationResult, validate

from .parser import ExpressionParser, parse

from .compiler import LRUCache, CompiledEvaluator, ExpressionCompiler

from .evaluator import EvaluationResult, FunctionEvaluator

from .calculus import Differentiator, GradientVector, GradientSample, TangentPlane

from .optimize import Classification, CriticalPoint, CriticalPointSearch, ConstrainedSearch

from .quadrature import IntegralResult, CenterOfMass, Quadrature

from .analysis import (
    Analyzer,
    DomainRangeReport,
    LimitDirection,
    LimitEstimate,
    SurfaceGrid,
)

from .presets import Preset, PRESETS, get_preset

from .engine import SurfaceEngine

__version__ = "1.0.0"
__all__ = [
    # Configuration and errors
    'EngineConfig', 'SurfaceMathError', 'CompileError', 'InvalidExpression',

    # Expressions
    'Op', 'Expr',
    'ValidationIssue', 'ValidationResult', 'validate',
    'ExpressionParser', 'parse',
    'LRUCache', 'CompiledEvaluator', 'ExpressionCompiler',
    'EvaluationResult', 'FunctionEvaluator',

    # Calculus
    'Differentiator', 'GradientVector', 'GradientSample', 'TangentPlane',
    'Classification', 'CriticalPoint', 'CriticalPointSearch', 'ConstrainedSearch',
    'IntegralResult', 'CenterOfMass', 'Quadrature',

    # Analysis
    'Analyzer', 'DomainRangeReport', 'LimitDirection', 'LimitEstimate', 'SurfaceGrid',
    'Preset', 'PRESETS', 'get_preset',

    # Engine
    'SurfaceEngine',
]
