"""
Tunables for the pinch detector, point smoother and stroke interpolation.
"""
from dataclasses import dataclass


@dataclass
class DrawingConfig:
    # Pinch detection (normalized landmark units)
    pinch_threshold: float = 0.055
    pinch_hysteresis_ratio: float = 0.3   # Dead-band half width as a share of the threshold
    pinch_fast_rate: float = 0.5          # Distance change per second that counts as fast
    pinch_history_size: int = 5           # Frames averaged before thresholding
    pinch_press_frames: int = 2           # Consecutive frames to commit pen down
    pinch_release_frames: int = 1         # Consecutive frames to commit pen up

    # Point smoothing (canvas pixels)
    smoothing_factor: float = 0.2         # Decay per frame of age; larger = smoother, more lag
    fast_velocity: float = 200.0          # px/s
    slow_velocity: float = 50.0           # px/s
    fast_smoothing_multiplier: float = 0.4
    fast_smoothing_cap: float = 0.35
    slow_smoothing_multiplier: float = 1.25
    slow_smoothing_cap: float = 0.9       # Must stay below 1
    point_history_size: int = 8
    velocity_history_size: int = 3

    # Stroke interpolation (canvas pixels)
    min_segment_distance: float = 0.5     # Closer points are jitter and get dropped
    interpolation_threshold: float = 15.0
    interpolation_step: float = 8.0
    max_interpolation_steps: int = 30

    def __post_init__(self):
        if self.pinch_threshold <= 0:
            raise ValueError("pinch_threshold must be positive")
        if not 0.0 < self.smoothing_factor < 1.0:
            raise ValueError("smoothing_factor must be in (0, 1)")
        for name in ('fast_smoothing_cap', 'slow_smoothing_cap'):
            if not 0.0 < getattr(self, name) < 1.0:
                raise ValueError(f"{name} must be in (0, 1)")
        if self.fast_smoothing_multiplier <= 0 or self.slow_smoothing_multiplier <= 0:
            raise ValueError("smoothing multipliers must be positive")
        if self.slow_velocity > self.fast_velocity:
            raise ValueError("slow_velocity must not exceed fast_velocity")
        if self.interpolation_step <= 0:
            raise ValueError("interpolation_step must be positive")
        for name in (
            'pinch_history_size', 'pinch_press_frames', 'pinch_release_frames',
            'point_history_size', 'velocity_history_size', 'max_interpolation_steps',
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")
