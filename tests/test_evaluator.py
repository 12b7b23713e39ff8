import logging
import math

import pytest

from surface_math import EvaluationResult


def test_plain_evaluation(engine):
    result = engine.evaluate("x^2 + y^2", 1, 2)
    assert result.defined
    assert result.value == 5


def test_evaluation_is_deterministic(engine):
    first = engine.evaluate("sin(x) * exp(y) / 3", 0.3, -1.7)
    second = engine.evaluate("sin(x) * exp(y) / 3", 0.3, -1.7)
    assert first == second


def test_division_by_zero_is_undefined(engine):
    result = engine.evaluate("1/(x^2+y^2)", 0, 0)
    assert result.is_undefined
    assert math.isnan(result.value)


def test_large_values_are_clamped(engine):
    assert engine.evaluate("100", 0, 0).value == 20
    assert engine.evaluate("-100", 0, 0).value == -20
    assert engine.evaluate("1/(x^2+y^2)", 0.01, 0).value == 20


def test_domain_errors_are_undefined(engine):
    assert engine.evaluate("sqrt(x)", -1, 0).is_undefined
    assert engine.evaluate("ln(x)", 0, 0).is_undefined
    assert engine.evaluate("asin(x)", 2, 0).is_undefined


def test_overflow_is_undefined(engine):
    assert engine.evaluate("exp(x)", 1000, 0).is_undefined


def test_invalid_expression_does_not_raise(engine, caplog):
    with caplog.at_level(logging.WARNING, logger="surface_math.evaluator"):
        result = engine.evaluate("x&y", 0, 0)
    assert result.is_undefined
    assert "Invalid character" in result.reason
    assert "Rejected expression" in caplog.text


def test_unparseable_expression_is_undefined(engine):
    assert engine.evaluate("x++", 1, 1).is_undefined


def test_value_or():
    assert EvaluationResult.undefined("nope").value_or(0.0) == 0.0
    assert EvaluationResult.ok(3.0).value_or(0.0) == 3.0


def test_custom_clamp_limit():
    from surface_math import EngineConfig, SurfaceEngine
    engine = SurfaceEngine(EngineConfig(clamp_limit=5))
    assert engine.evaluate("x", 7, 0).value == 5


def test_scientific_literal_evaluates(engine):
    result = engine.evaluate("1e-3*x + 0.5", 1, 0)
    assert result.value == pytest.approx(0.501)


def test_spaced_digits_join(engine):
    assert engine.evaluate("2 3", 0, 0).value == 20
    assert engine.evaluate("x2", 1, 0).is_undefined


def test_deeply_nested_expression_is_undefined(engine):
    assert engine.evaluate("+".join(["x"] * 3000), 1, 0).is_undefined
    assert engine.evaluate("(" * 1200 + "x" + ")" * 1200, 1, 0).is_undefined
