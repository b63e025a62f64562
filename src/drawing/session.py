"""
Per-frame drawing pipeline: hand landmarks in, render commands out.
"""
from typing import List, Optional, Tuple
import time

from .commands import ClearOverlay, DrawCursor, DrawHand, RenderCommand
from .config import DrawingConfig
from .geometry import Point, to_canvas
from .hand import Hand
from .pinch import PinchState, PinchStateMachine
from .smoothing import AdaptiveSmoother
from .stroke import StrokeRenderer


class DrawingSession:
    """
    Explicit state for one tracking session.

    process_frame() runs the pinch detector, smoother and stroke logic in
    order for a single frame and returns what the rasterizer should draw.
    Nothing here touches a camera or a window, so a session can be driven
    entirely from recorded or synthetic landmarks.
    """

    def __init__(self, config: DrawingConfig, canvas_size: Tuple[int, int]):
        """
        Initialize drawing session.

        Args:
            config: Drawing tunables
            canvas_size: (width, height) of the target canvas in pixels
        """
        self._config = config
        self._width, self._height = canvas_size
        self.pinch = PinchStateMachine(config)
        self.smoother = AdaptiveSmoother(config)
        self.stroke = StrokeRenderer(config, self.smoother)
        self._cursor: Optional[Point] = None

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    @property
    def cursor(self) -> Optional[Point]:
        """Last raw index-tip position in canvas pixels, None without a hand."""
        return self._cursor

    def resize(self, width: int, height: int) -> None:
        """Change the canvas size. Ends any stroke in progress."""
        if (width, height) != (self._width, self._height):
            self._width, self._height = width, height
            self.stroke.end()

    def process_frame(self, hand: Optional[Hand], now_ms: Optional[float] = None) -> List[RenderCommand]:
        """
        Advance the session by one camera frame.

        Args:
            hand: Tracked hand, or None when no hand was detected
            now_ms: Frame time in milliseconds. Defaults to the perf counter.
        """
        if now_ms is None:
            now_ms = time.perf_counter() * 1000.0

        commands: List[RenderCommand] = [ClearOverlay()]

        if hand is None:
            # Pinch history survives short detection gaps, the stroke does not
            self._cursor = None
            self.stroke.end()
            return commands

        commands.append(DrawHand(hand))

        state = self.pinch.update(hand.thumb_tip, hand.index_tip, now_ms)
        is_pinching = state is PinchState.DOWN
        position = to_canvas(hand.index_tip, self._width, self._height)
        self._cursor = position

        if is_pinching:
            smoothed = self.smoother.add_point(position, now_ms)
            commands.extend(self.stroke.extend(smoothed))
        else:
            self.stroke.end()

        commands.append(DrawCursor(position, is_pinching))
        return commands
