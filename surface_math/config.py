"""Configuration for the surface math engine."""

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


@dataclass
class EngineConfig:
    """Design constants shared by every engine component."""

    # Evaluation
    clamp_limit: float = 20.0  # results are clamped to [-limit, limit]
    cache_size: int = 256

    # Differentiation
    derivative_step: float = 1e-4

    # Constrained critical point search
    search_range: float = 3.0
    search_step: float = 0.2
    constraint_tolerance: float = 0.1
    parallel_tolerance: float = 0.5
    dedup_radius: float = 0.5

    # Quadrature
    subdivisions: int = 50
    triple_subdivisions: int = 20

    # Auxiliary analyses
    scan_resolution: int = 50
    surface_resolution: int = 90
    limit_offset: float = 1e-3
    limit_tolerance: float = 0.01

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from SURFACE_MATH_* environment variables."""
        defaults = cls()
        return cls(
            clamp_limit=_env_float("SURFACE_MATH_CLAMP_LIMIT", defaults.clamp_limit),
            cache_size=_env_int("SURFACE_MATH_CACHE_SIZE", defaults.cache_size),
            derivative_step=_env_float("SURFACE_MATH_DERIVATIVE_STEP", defaults.derivative_step),
            search_range=_env_float("SURFACE_MATH_SEARCH_RANGE", defaults.search_range),
            search_step=_env_float("SURFACE_MATH_SEARCH_STEP", defaults.search_step),
            constraint_tolerance=_env_float("SURFACE_MATH_CONSTRAINT_TOLERANCE", defaults.constraint_tolerance),
            parallel_tolerance=_env_float("SURFACE_MATH_PARALLEL_TOLERANCE", defaults.parallel_tolerance),
            dedup_radius=_env_float("SURFACE_MATH_DEDUP_RADIUS", defaults.dedup_radius),
            subdivisions=_env_int("SURFACE_MATH_SUBDIVISIONS", defaults.subdivisions),
            triple_subdivisions=_env_int("SURFACE_MATH_TRIPLE_SUBDIVISIONS", defaults.triple_subdivisions),
            scan_resolution=_env_int("SURFACE_MATH_SCAN_RESOLUTION", defaults.scan_resolution),
            surface_resolution=_env_int("SURFACE_MATH_SURFACE_RESOLUTION", defaults.surface_resolution),
            limit_offset=_env_float("SURFACE_MATH_LIMIT_OFFSET", defaults.limit_offset),
            limit_tolerance=_env_float("SURFACE_MATH_LIMIT_TOLERANCE", defaults.limit_tolerance),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of warnings."""
        warnings = []

        if self.clamp_limit <= 0:
            warnings.append("clamp_limit must be positive - every result will collapse to 0")
        if self.cache_size < 1:
            warnings.append("cache_size < 1 - compiled expressions will never be reused")
        if self.derivative_step <= 0:
            warnings.append("derivative_step must be positive")
        if self.search_step <= 0 or self.search_range <= 0:
            warnings.append("search_range and search_step must be positive - critical point search disabled")
        for name in ("constraint_tolerance", "parallel_tolerance", "limit_tolerance", "limit_offset"):
            if getattr(self, name) <= 0:
                warnings.append(f"{name} must be positive")
        for name in ("subdivisions", "triple_subdivisions", "scan_resolution", "surface_resolution"):
            if getattr(self, name) < 1:
                warnings.append(f"{name} must be at least 1")

        return warnings
