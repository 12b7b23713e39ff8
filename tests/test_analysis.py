import math

import numpy as np
import pytest

from surface_math import InvalidExpression, LimitDirection


def test_range_of_paraboloid(engine):
    report = engine.domain_range_scan("x^2 + y^2", -1, 1, -1, 1)
    assert report.range_min == pytest.approx(0)
    assert report.range_max == pytest.approx(2)
    assert report.restrictions == []
    assert report.domain_description == "R^2"


def test_restriction_hints(engine):
    report = engine.domain_range_scan("sqrt(x) / ln(y)", 0.5, 1, 2, 3)
    assert "sqrt argument must be non-negative" in report.restrictions
    assert "ln argument must be positive" in report.restrictions
    assert "denominator must be non-zero" in report.restrictions


def test_log_hint_is_not_duplicated(engine):
    report = engine.domain_range_scan("log(x)", 1, 2, 1, 2)
    assert report.restrictions == ["log argument must be positive"]


def test_undefined_samples_reported(engine):
    report = engine.domain_range_scan("sqrt(x)", -1, 1, -1, 1)
    assert report.range_min < 0.25
    assert report.range_max == pytest.approx(1)
    assert "undefined" in report.domain_description


def test_nowhere_defined(engine):
    report = engine.domain_range_scan("sqrt(-1 - x^2)", -1, 1, -1, 1)
    assert report.range_min is None and report.range_max is None


def test_scan_rejects_invalid_expression(engine):
    with pytest.raises(InvalidExpression):
        engine.domain_range_scan("x#", 0, 1, 0, 1)


def test_limit_of_continuous_function(engine):
    estimate = engine.estimate_limit("x^2 + y^2 + 1", 0, 0)
    assert estimate.exists
    assert estimate.value == pytest.approx(1, abs=1e-4)
    assert len(estimate.samples) == 6


def test_limit_of_removable_singularity(engine):
    estimate = engine.estimate_limit("sin(x^2 + y^2) / (x^2 + y^2)", 0, 0)
    assert estimate.exists
    assert estimate.value == pytest.approx(1, abs=1e-3)


def test_limit_depends_on_path(engine):
    estimate = engine.estimate_limit("x*y / (x^2 + y^2)", 0, 0)
    assert not estimate.exists
    assert estimate.value is None
    assert "does not exist" in estimate.message


def test_one_directional_limit_ignores_diagonal(engine):
    estimate = engine.estimate_limit("x*y / (x^2 + y^2)", 0, 0, direction=LimitDirection.X)
    assert estimate.exists
    assert estimate.value == pytest.approx(0)
    assert len(estimate.samples) == 2
    assert engine.estimate_limit("x*y / (x^2 + y^2)", 0, 0, direction="y").exists


def test_unbounded_function_has_no_limit(engine):
    estimate = engine.estimate_limit("1 / (x^2 + y^2)", 0, 0)
    assert not estimate.exists
    assert "unbounded" in estimate.message


def test_limit_with_too_few_samples(engine):
    estimate = engine.estimate_limit("x&y", 0, 0)
    assert not estimate.exists
    assert estimate.samples == ()


def test_sample_surface_grid(engine):
    grid = engine.sample_surface("x + y", (-1, 1), (0, 2), resolution=4)
    assert grid.z.shape == (5, 5)
    np.testing.assert_allclose(grid.xs, [-1, -0.5, 0, 0.5, 1])
    assert grid.z[0, 0] == pytest.approx(-1)
    assert grid.z[4, 4] == pytest.approx(3)
    assert grid.z_min == pytest.approx(-1)
    assert grid.z_max == pytest.approx(3)
    assert grid.undefined_fraction == 0
    assert not grid.has_singularities


def test_sample_surface_marks_undefined_vertices(engine):
    grid = engine.sample_surface("sqrt(x)", (-1, 1), (-1, 1), resolution=10)
    assert math.isnan(grid.z[0, 0])
    assert grid.undefined_fraction == pytest.approx(55 / 121)
    assert grid.has_singularities


def test_limit_samples_the_anti_diagonal(engine):
    # zero along both axes and along y = x, -1 along y = -x
    estimate = engine.estimate_limit("(x*y - abs(x*y)) / (x^2 + y^2)", 0, 0)
    assert not estimate.exists
    assert min(estimate.samples) == pytest.approx(-1)


def test_singularity_threshold_counts_every_vertex(engine):
    # one undefined column of 11 out of 121 vertices stays under 10 %
    grid = engine.sample_surface("sqrt(x)", (-1, 9), (0, 10), resolution=10)
    assert int(np.isnan(grid.z).sum()) == 11
    assert not grid.has_singularities
