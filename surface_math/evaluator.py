"""
Pointwise evaluation with the undefined/clamp policy.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from .compiler import ExpressionCompiler, CompiledEvaluator
from .errors import CompileError, InvalidExpression
from .validator import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Either a finite, clamped value or the undefined marker (value is nan)."""

    value: float
    defined: bool = True
    reason: str = ""

    @classmethod
    def ok(cls, value: float) -> "EvaluationResult":
        return cls(value, True)

    @classmethod
    def undefined(cls, reason: str = "") -> "EvaluationResult":
        return cls(math.nan, False, reason)

    @property
    def is_undefined(self) -> bool:
        return not self.defined

    def value_or(self, default: float) -> float:
        return self.value if self.defined else default


class FunctionEvaluator:
    """Validate, compile (cached) and evaluate expressions at single points."""

    def __init__(self, compiler: ExpressionCompiler, clamp_limit: float = 20.0):
        self.compiler = compiler
        self.clamp_limit = clamp_limit

    def clamp(self, value: float) -> float:
        return max(-self.clamp_limit, min(self.clamp_limit, value))

    def evaluate(self, expression: str, x: float, y: float, z: float = 0.0,
                 variables: Sequence[str] = ('x', 'y')) -> EvaluationResult:
        check = validate(expression)
        if not check.valid:
            logger.warning(f"Rejected expression {expression!r}: {check.reason}")
            return EvaluationResult.undefined(check.reason)

        try:
            fn = self.compiler.compile(expression, variables)
        except CompileError as e:
            return EvaluationResult.undefined(str(e))

        return self.evaluate_compiled(fn, x, y, z)

    def evaluate_compiled(self, fn: CompiledEvaluator, x: float, y: float,
                          z: float = 0.0) -> EvaluationResult:
        """Evaluate an already compiled function, skipping validation."""
        try:
            raw = fn(x, y, z)
        except (ValueError, ArithmeticError, RecursionError) as e:
            logger.debug(f"{fn.source!r} undefined at ({x}, {y}, {z}): {e}")
            return EvaluationResult.undefined(str(e) or type(e).__name__)

        if not math.isfinite(raw):
            return EvaluationResult.undefined("result is not finite")
        return EvaluationResult.ok(self.clamp(raw))

    def prepare(self, expression: str, variables: Sequence[str] = ('x', 'y')) -> CompiledEvaluator:
        """
        Validate and compile for aggregate operations.

        Raises InvalidExpression when validation fails. Text that passes
        validation but does not parse yields a function that is undefined
        everywhere, so aggregates see zero contributions instead of an error.
        """
        check = validate(expression)
        if not check.valid:
            logger.warning(f"Rejected expression {expression!r}: {check.reason}")
            raise InvalidExpression(expression, check.reason)
        try:
            return self.compiler.compile(expression, variables)
        except CompileError as e:
            return _Unparseable(expression, variables, e)


class _Unparseable(CompiledEvaluator):
    """Stand-in for text that validated but failed to parse."""

    def __init__(self, source: str, variables: Sequence[str], error: CompileError):
        self.source = source
        self.tree = None
        self.variables = tuple(variables)
        self.error = error

    def __call__(self, x: float, y: float, z: float = 0.0) -> float:
        raise ValueError(str(self.error))
