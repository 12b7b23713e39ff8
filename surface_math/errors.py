"""Exception hierarchy for the surface math engine."""


class SurfaceMathError(Exception):
    """Base class for all engine errors."""


class CompileError(SurfaceMathError):
    """Expression text could not be turned into an expression tree."""

    def __init__(self, message: str, expression: str = "", position: int = -1):
        super().__init__(message)
        self.expression = expression
        self.position = position


class InvalidExpression(SurfaceMathError, ValueError):
    """Raised by aggregate operations (integrals, scans) on invalid input."""

    def __init__(self, expression: str, reason: str):
        super().__init__(f"Invalid expression {expression!r}: {reason}")
        self.expression = expression
        self.reason = reason
