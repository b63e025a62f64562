"""
Config loader for AirInk.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml

from .drawing.config import DrawingConfig

DEFAULT_COLORS = [
    '#667eea',
    '#f093fb',
    '#4facfe',
    '#43e97b',
    '#fa709a',
    '#feca57',
    '#ff6b6b',
    '#ee5a6f',
]


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.7
    model_path: Optional[str] = None   # Defaults to models/hand_landmarker.task


@dataclass
class BrushConfig:
    default_size: int = 5
    min_size: int = 1
    max_size: int = 20
    default_color: str = '#667eea'
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))

    def __post_init__(self):
        if not self.min_size <= self.default_size <= self.max_size:
            raise ValueError(
                f"default_size {self.default_size} outside [{self.min_size}, {self.max_size}]"
            )


@dataclass
class UIConfig:
    show_camera: bool = True
    show_skeleton: bool = True
    save_dir: str = "."


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    drawing: DrawingConfig = field(default_factory=DrawingConfig)
    brush: BrushConfig = field(default_factory=BrushConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ValueError: if a section holds an out-of-range value.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        drawing=_dict_to_dataclass(DrawingConfig, data.get('drawing')),
        brush=_dict_to_dataclass(BrushConfig, data.get('brush')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
