import pytest

from scanfill.config import AppConfig
from scanfill.palette import ColorRGB


def test_defaults():
    config = AppConfig()
    assert config.window_size == (1400, 800)
    assert config.fill_color == ColorRGB.from_rgb255(10, 132, 255)
    assert config.log_level == "INFO"


def test_log_level_is_normalized():
    assert AppConfig(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize("kwargs", [
    {"log_level": "VERBOSE"},
    {"line_thickness": 0},
    {"line_thickness": 30},
    {"min_line_thickness": 5, "max_line_thickness": 2},
    {"extrusion_depth": 0},
    {"extrusion_scale": -1.0},
    {"cap_triangulation_height": 0},
    {"window_size": (0, 600)},
    {"fill_color": (1.0, 0.5)},
    {"line_color": (2.0, 0.0, 0.0)},
])
def test_invalid_values_raise(kwargs):
    with pytest.raises(ValueError):
        AppConfig(**kwargs)


def test_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "window_size: [800, 600]\n"
        "fill_color: [1.0, 0.0, 0.0]\n"
        "line_thickness: 4\n"
        "log_level: warning\n"
    )
    config = AppConfig.from_yaml(path)
    assert config.window_size == (800, 600)
    assert config.fill_color == ColorRGB(1.0, 0.0, 0.0)
    assert config.line_thickness == 4
    assert config.log_level == "WARNING"
    assert config.extrusion_depth == 100.0


def test_from_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert AppConfig.from_yaml(path) == AppConfig()


def test_from_yaml_rejects_unknown_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("line_thickness: 3\nshading: phong\n")
    with pytest.raises(ValueError, match="Unknown config keys"):
        AppConfig.from_yaml(path)


def test_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        AppConfig.from_yaml(path)


def test_from_yaml_rejects_malformed_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("line_thickness: [1\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        AppConfig.from_yaml(path)


@pytest.mark.parametrize("content", [
    "fill_color: 3\n",
    "line_color: red\n",
    "window_size: 800\n",
])
def test_from_yaml_rejects_scalar_sequences(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content)
    with pytest.raises(ValueError, match="must be a list"):
        AppConfig.from_yaml(path)
