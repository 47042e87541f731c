import pytest
from pydantic import ValidationError

from ruler_compass.config import EngineSettings, configure_logging, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.seed_a == (500.0, 400.0)
    assert settings.seed_b == (700.0, 400.0)
    assert settings.point_marker_radius == 3.0
    assert settings.default_tool == "circle"
    assert settings.log_level == "INFO"


def test_environment_overrides():
    settings = load_settings({
        "RULER_COMPASS_SEED_A": "1, 2",
        "RULER_COMPASS_POINT_MARKER_RADIUS": "5",
        "RULER_COMPASS_DEFAULT_TOOL": "line",
        "RULER_COMPASS_LOG_LEVEL": "debug",
        "UNRELATED": "x",
    })
    assert settings.seed_a == (1.0, 2.0)
    assert settings.point_marker_radius == 5.0
    assert settings.default_tool == "line"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("field, value", [
    ("seed_a", "1,2,3"),
    ("default_tool", "eraser"),
    ("point_marker_radius", 0),
])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        EngineSettings(**{field: value})


def test_configure_logging_accepts_level():
    configure_logging("DEBUG")
    configure_logging("WARNING")
