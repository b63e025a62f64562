from pathlib import Path
from main import parse_args, main


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config is None
    assert args.debug is False
    assert args.brush_size is None


def test_parse_args_overrides():
    args = parse_args(["--config", "my.yaml", "--camera", "1", "--brush-size", "7", "--color", "#ff0000", "--debug"])
    assert args.config == Path("my.yaml")
    assert args.camera == 1
    assert args.brush_size == 7
    assert args.color == "#ff0000"
    assert args.debug is True


def test_invalid_color_exits_before_starting(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "missing.yaml"), "--color", "blue"])
    assert code == 2
    assert "ERROR" in capsys.readouterr().out
