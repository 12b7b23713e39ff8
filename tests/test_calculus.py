import math

import pytest


def test_gradient_of_paraboloid(engine):
    grad = engine.gradient("x^2 + y^2", 1, 2)
    assert grad.dx == pytest.approx(2, rel=1e-4)
    assert grad.dy == pytest.approx(4, rel=1e-4)
    assert grad.magnitude == pytest.approx(math.sqrt(20), rel=1e-4)
    ux, uy = grad.direction
    assert ux == pytest.approx(2 / math.sqrt(20), rel=1e-4)
    assert uy == pytest.approx(4 / math.sqrt(20), rel=1e-4)


def test_gradient_of_constant_has_zero_direction(engine):
    grad = engine.gradient("5", 0.3, 0.4)
    assert grad.magnitude == 0
    assert grad.direction == (0.0, 0.0)


def test_partials_of_trig_surface(engine):
    dx, dy = engine.partial_derivatives("sin(x) * cos(y)", 0.5, 0.25)
    assert dx == pytest.approx(math.cos(0.5) * math.cos(0.25), rel=1e-4)
    assert dy == pytest.approx(-math.sin(0.5) * math.sin(0.25), rel=1e-4)


def test_invalid_expression_gives_zero_gradient(engine):
    grad = engine.gradient("x&y", 1, 1)
    assert (grad.dx, grad.dy, grad.magnitude) == (0.0, 0.0, 0.0)


def test_undefined_samples_read_as_zero(engine):
    # sqrt(x) is undefined left of 0, so the backward sample counts as 0
    dx, dy = engine.partial_derivatives("sqrt(x)", 0, 0)
    assert dx == pytest.approx(math.sqrt(1e-4) / 2e-4)
    assert dy == 0.0


def test_tangent_plane(engine):
    plane = engine.tangent_plane("x^2 + y^2", 1, 2)
    assert plane.z0 == 5
    assert plane.height(1, 2) == 5
    assert plane.height(2, 2) == pytest.approx(7, rel=1e-4)
    assert plane.height(1, 3) == pytest.approx(9, rel=1e-4)


def test_gradient_field_skips_undefined_points(engine):
    field = engine.gradient_field("sqrt(x)", (-1, 1), (-1, 1), grid_size=4)
    assert field
    assert all(sample.x >= 0 for sample in field)
    full = engine.gradient_field("x + y", (-1, 1), (-1, 1), grid_size=4)
    assert len(full) == 9
    assert all(s.gradient.dx == pytest.approx(1) for s in full)
