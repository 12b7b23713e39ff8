from surface_math import EngineConfig


def test_defaults():
    config = EngineConfig()
    assert config.clamp_limit == 20.0
    assert config.derivative_step == 1e-4
    assert config.search_step == 0.2
    assert config.subdivisions == 50
    assert config.triple_subdivisions == 20
    assert config.validate() == []


def test_from_env(monkeypatch):
    monkeypatch.setenv("SURFACE_MATH_CLAMP_LIMIT", "50")
    monkeypatch.setenv("SURFACE_MATH_CACHE_SIZE", "8")
    config = EngineConfig.from_env()
    assert config.clamp_limit == 50.0
    assert config.cache_size == 8
    assert config.dedup_radius == 0.5


def test_validate_reports_bad_values():
    warnings = EngineConfig(derivative_step=0, subdivisions=0, limit_tolerance=-1).validate()
    assert any("derivative_step" in w for w in warnings)
    assert any("subdivisions" in w for w in warnings)
    assert any("limit_tolerance" in w for w in warnings)
