"""
Adaptive weighted moving average for the drawing cursor.
"""
from collections import deque
from enum import Enum, auto
from typing import Optional, Sequence
import time

from .config import DrawingConfig
from .geometry import Point, distance_2d


class MotionSpeed(Enum):
    """Coarse hand speed used to pick the smoothing factor."""
    SLOW = auto()
    NORMAL = auto()
    FAST = auto()


class AdaptiveSmoother:
    """
    Smooths fingertip positions with a velocity-dependent decay.

    The output is a weighted average of the last few raw points where the
    i-th oldest of N points has weight factor ** (N - 1 - i). The factor
    shrinks while the hand moves fast (less lag) and grows while the hand
    is nearly still (kills micro-jitter).
    """

    def __init__(self, config: DrawingConfig, smoothing_factor: Optional[float] = None):
        self._config = config
        self._base_factor = config.smoothing_factor if smoothing_factor is None else smoothing_factor
        if not 0.0 < self._base_factor < 1.0:
            raise ValueError("smoothing_factor must be in (0, 1)")

        self._points: deque = deque(maxlen=config.point_history_size)
        self._velocity_history: deque = deque(maxlen=config.velocity_history_size)
        self._last_timestamp: Optional[float] = None

    @property
    def average_velocity(self) -> float:
        """Mean of the recent instantaneous velocities in px/s."""
        if not self._velocity_history:
            return 0.0
        return sum(self._velocity_history) / len(self._velocity_history)

    @property
    def motion_speed(self) -> MotionSpeed:
        velocity = self.average_velocity
        if velocity > self._config.fast_velocity:
            return MotionSpeed.FAST
        if velocity < self._config.slow_velocity:
            return MotionSpeed.SLOW
        return MotionSpeed.NORMAL

    @property
    def adaptive_factor(self) -> float:
        """Smoothing factor for the current motion speed."""
        cfg = self._config
        speed = self.motion_speed
        if speed is MotionSpeed.FAST:
            return min(cfg.fast_smoothing_cap, self._base_factor * cfg.fast_smoothing_multiplier)
        if speed is MotionSpeed.SLOW:
            return min(cfg.slow_smoothing_cap, self._base_factor * cfg.slow_smoothing_multiplier)
        return self._base_factor

    def __len__(self) -> int:
        return len(self._points)

    def reset(self) -> None:
        """Drop all history. Called at every stroke boundary."""
        self._points.clear()
        self._velocity_history.clear()
        self._last_timestamp = None

    def add_point(self, point: Sequence[float], now_ms: Optional[float] = None) -> Point:
        """
        Add a raw canvas point and return the smoothed cursor.

        Args:
            point: (x, y) in canvas pixels
            now_ms: Frame time in milliseconds. Defaults to the perf counter.
        """
        if now_ms is None:
            now_ms = time.perf_counter() * 1000.0
        point = Point(float(point[0]), float(point[1]))

        velocity = 0.0
        if self._points and self._last_timestamp is not None:
            dt = max(now_ms - self._last_timestamp, 1.0)
            velocity = distance_2d(point, self._points[-1]) / dt * 1000.0

        self._velocity_history.append(velocity)
        self._points.append(point)
        self._last_timestamp = now_ms

        return self.smoothed_point()

    def smoothed_point(self) -> Optional[Point]:
        """Weighted average of the buffered points, None when empty."""
        if not self._points:
            return None
        if len(self._points) == 1:
            return self._points[0]

        factor = self.adaptive_factor
        n = len(self._points)
        total_weight = 0.0
        sx = 0.0
        sy = 0.0
        for i, p in enumerate(self._points):
            weight = factor ** (n - 1 - i)
            total_weight += weight
            sx += p.x * weight
            sy += p.y * weight

        return Point(sx / total_weight, sy / total_weight)
