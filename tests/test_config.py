import pytest
from src.config import Config, load_config, BrushConfig
from src.drawing.config import DrawingConfig


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert config == Config()
    assert config.drawing.pinch_threshold == 0.055
    assert config.brush.default_color == '#667eea'
    assert len(config.brush.colors) == 8


def test_yaml_overrides_and_unknown_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "camera:\n"
        "  device_id: 2\n"
        "drawing:\n"
        "  pinch_threshold: 0.06\n"
        "  max_interpolation_steps: 10\n"
        "  not_a_setting: 1\n"
        "brush:\n"
        "  default_size: 8\n"
    )

    config = load_config(path)

    assert config.camera.device_id == 2
    assert config.camera.width == 1280
    assert config.drawing.pinch_threshold == 0.06
    assert config.drawing.max_interpolation_steps == 10
    assert config.drawing.smoothing_factor == 0.2
    assert config.brush.default_size == 8


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == Config()


@pytest.mark.parametrize("overrides", [
    {"smoothing_factor": 0.0},
    {"smoothing_factor": 1.5},
    {"pinch_threshold": -0.1},
    {"pinch_history_size": 0},
    {"interpolation_step": 0.0},
    {"slow_velocity": 500.0},
    {"slow_smoothing_cap": 1.0},
    {"fast_smoothing_cap": 0.0},
    {"slow_smoothing_multiplier": 0.0},
])
def test_drawing_config_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        DrawingConfig(**overrides)


def test_brush_default_must_be_in_range():
    with pytest.raises(ValueError):
        BrushConfig(default_size=50)


def test_invalid_yaml_value_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("drawing:\n  smoothing_factor: 2.0\n")
    with pytest.raises(ValueError):
        load_config(path)
