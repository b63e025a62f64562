"""
Stroke segmentation: decides how successive smoothed points are joined.
"""
import math
from typing import List, Optional, Sequence

from .commands import DrawSegment
from .config import DrawingConfig
from .geometry import Point, distance_2d, lerp
from .smoothing import AdaptiveSmoother


class StrokeRenderer:
    """
    Connects smoothed cursor positions into line segments.

    Idle until the first point of a stroke arrives, then drawing until
    end() is called. Large jumps are subdivided so fast strokes stay
    unbroken, sub-pixel moves are dropped as jitter.

    The renderer owns the stroke cursor and resets the smoother together
    with it, so the two never outlive each other across a stroke boundary.
    """

    def __init__(self, config: DrawingConfig, smoother: AdaptiveSmoother):
        self._config = config
        self._smoother = smoother
        self._last_point: Optional[Point] = None
        self._prev_point: Optional[Point] = None

    @property
    def is_drawing(self) -> bool:
        return self._last_point is not None

    @property
    def last_point(self) -> Optional[Point]:
        return self._last_point

    @property
    def prev_point(self) -> Optional[Point]:
        return self._prev_point

    def extend(self, point: Sequence[float]) -> List[DrawSegment]:
        """
        Add the newest smoothed point to the current stroke.

        Returns:
            Segments to rasterize this frame (possibly empty).
        """
        target = Point(float(point[0]), float(point[1]))

        if self._last_point is None:
            self._last_point = target
            self._prev_point = None
            return []

        cfg = self._config
        start = self._last_point
        distance = distance_2d(start, target)

        if distance < cfg.min_segment_distance:
            return []

        if distance > cfg.interpolation_threshold:
            steps = min(
                math.ceil(distance / cfg.interpolation_step),
                cfg.max_interpolation_steps,
            )
            segments = []
            prev = start
            for i in range(1, steps + 1):
                nxt = target if i == steps else lerp(start, target, i / steps)
                segments.append(DrawSegment(prev, nxt))
                prev = nxt
        else:
            segments = [DrawSegment(start, target)]

        # Always advance to the real target, never an interpolated point
        self._prev_point = start
        self._last_point = target
        return segments

    def end(self) -> None:
        """Finish the current stroke and reset the smoother with it."""
        self._last_point = None
        self._prev_point = None
        self._smoother.reset()
