import pytest

from surface_math import SurfaceEngine


@pytest.fixture
def engine():
    return SurfaceEngine()
