import pytest

from surface_math import (
    PRESETS, CompileError, EngineConfig, SurfaceEngine, get_preset,
)


def test_engine_uses_config_cache_size():
    engine = SurfaceEngine(EngineConfig(cache_size=2))
    for text in ("x", "y", "x+y"):
        engine.evaluate(text, 0, 0)
    assert len(engine.compiler.cache) == 2


def test_parse_returns_tree(engine):
    assert str(engine.parse("2x")) == "(2 * x)"
    with pytest.raises(CompileError):
        engine.parse("x+")


def test_validate_passthrough(engine):
    assert engine.validate("x+y").valid
    assert not engine.validate("(x+y").valid


def test_every_preset_evaluates_at_origin_neighbourhood(engine):
    assert len(PRESETS) == 8
    for preset in PRESETS:
        assert engine.validate(preset.formula).valid
        assert engine.evaluate(preset.formula, 0.5, -0.5).defined, preset.name


def test_get_preset_is_case_insensitive():
    assert get_preset("saddle").formula == "x^2 - y^2"
    assert get_preset("missing") is None


def test_saddle_surface_round_trip(engine):
    formula = get_preset("Saddle").formula
    grad = engine.gradient(formula, 1, 1)
    assert grad.dx == pytest.approx(2, rel=1e-4)
    assert grad.dy == pytest.approx(-2, rel=1e-4)
    assert engine.double_integral(formula, -1, 1, -1, 1).value == pytest.approx(0, abs=1e-9)
