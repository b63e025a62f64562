"""
Pinch detection with a moving average, velocity-scaled hysteresis and
asymmetric debouncing.
"""
from collections import deque
from enum import Enum, auto
from typing import Optional, Sequence, Tuple
import time

from .config import DrawingConfig
from .geometry import distance_3d, ensure_finite


class PinchState(Enum):
    """Pen state derived from the thumb/index pinch."""
    UP = auto()
    DOWN = auto()


class PinchStateMachine:
    """
    Turns the thumb-to-index distance into a stable pen up/down signal.

    A single threshold flickers near the boundary, so the distance goes
    through three stages:
    - Average over the last few frames to damp single-frame noise
    - Hysteresis band that widens while the distance changes quickly
      and narrows while it is steady
    - Debounce that releases after one frame but presses only after two
    """

    def __init__(self, config: DrawingConfig):
        """
        Initialize pinch state machine.

        Args:
            config: Drawing tunables (threshold, hysteresis, debounce frames)
        """
        self._config = config
        self._hysteresis = config.pinch_threshold * config.pinch_hysteresis_ratio

        self._state = PinchState.UP
        self._distance_history: deque = deque(maxlen=config.pinch_history_size)
        self._state_change_counter = 0
        self._last_distance: Optional[float] = None
        self._last_timestamp: Optional[float] = None

    @property
    def state(self) -> PinchState:
        return self._state

    @property
    def is_pinching(self) -> bool:
        return self._state is PinchState.DOWN

    @property
    def average_distance(self) -> Optional[float]:
        """Mean of the retained distance readings, None before the first update."""
        if not self._distance_history:
            return None
        return sum(self._distance_history) / len(self._distance_history)

    @property
    def distance_history(self) -> Tuple[float, ...]:
        return tuple(self._distance_history)

    def reset(self) -> None:
        """Forget all history and return to pen up."""
        self._state = PinchState.UP
        self._distance_history.clear()
        self._state_change_counter = 0
        self._last_distance = None
        self._last_timestamp = None

    def update(
        self,
        thumb_tip: Sequence[float],
        index_tip: Sequence[float],
        now_ms: Optional[float] = None,
    ) -> PinchState:
        """
        Feed one frame of thumb and index tip positions.

        Args:
            thumb_tip: (x, y, z) normalized landmark
            index_tip: (x, y, z) normalized landmark
            now_ms: Frame time in milliseconds. Defaults to the perf counter.

        Returns:
            The committed pinch state after this frame.

        Raises:
            ValueError: if either landmark has a missing or non-finite coordinate.
        """
        thumb = ensure_finite(thumb_tip, "thumb_tip")
        index = ensure_finite(index_tip, "index_tip")
        if now_ms is None:
            now_ms = time.perf_counter() * 1000.0

        cfg = self._config
        distance = distance_3d(thumb, index)

        # Rate of change in distance units per second
        if self._last_distance is None or self._last_timestamp is None:
            rate = 0.0
        else:
            dt = max(now_ms - self._last_timestamp, 1.0)
            rate = abs(distance - self._last_distance) / dt * 1000.0

        self._distance_history.append(distance)
        avg_distance = self.average_distance

        if rate > cfg.pinch_fast_rate:
            hysteresis = self._hysteresis * 1.2
        else:
            hysteresis = self._hysteresis * 0.8

        desired = self._state
        if self._state is PinchState.DOWN:
            # Smaller margin on release for a snappy pen lift
            if avg_distance > cfg.pinch_threshold + hysteresis * 0.7:
                desired = PinchState.UP
        elif avg_distance < cfg.pinch_threshold - hysteresis:
            desired = PinchState.DOWN

        if desired is not self._state:
            self._state_change_counter += 1
            if desired is PinchState.DOWN:
                required = cfg.pinch_press_frames
            else:
                required = cfg.pinch_release_frames
            if self._state_change_counter >= required:
                self._state = desired
                self._state_change_counter = 0
        else:
            self._state_change_counter = 0

        self._last_distance = distance
        self._last_timestamp = now_ms
        return self._state
