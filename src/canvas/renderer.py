"""
Bitmap canvas for AirInk.
Strokes go to a persistent layer, hand skeleton and cursor to an overlay
that is wiped every frame.
"""
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple
import time
import cv2
import numpy as np

from ..drawing.commands import ClearOverlay, DrawCursor, DrawHand, DrawSegment, RenderCommand
from ..drawing.geometry import Point, distance_2d, midpoint, to_canvas
from ..drawing.hand import Hand, HAND_CONNECTIONS
from ..config import BrushConfig

# Fixed-point shift for sub-pixel anti-aliased drawing
_SHIFT = 4
_SCALE = 1 << _SHIFT

SKELETON_COLOR = (234, 126, 102, 153)   # rgba(102, 126, 234, 0.6) as BGRA
LANDMARK_COLOR = '#667eea'
TIP_COLOR = '#f093fb'
IDLE_CURSOR_COLOR = (255, 255, 255, 204)
CURSOR_FILL_ALPHA = 0x40


def parse_hex_color(value: str) -> Tuple[int, int, int]:
    """
    Parse '#rrggbb' into an OpenCV BGR tuple.

    Raises:
        ValueError: if the string is not a 6-digit hex colour.
    """
    text = value.strip().lstrip('#')
    if len(text) != 6:
        raise ValueError(f"Expected a #rrggbb colour, got {value!r}")
    try:
        r, g, b = (int(text[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as e:
        raise ValueError(f"Expected a #rrggbb colour, got {value!r}") from e
    return (b, g, r)


def _quadratic(p0: Point, c: Point, p1: Point, samples: int) -> np.ndarray:
    """Sample a quadratic Bezier curve, endpoints included."""
    t = np.linspace(0.0, 1.0, samples)[:, None]
    a = np.array(p0, dtype=np.float64)
    b = np.array(c, dtype=np.float64)
    d = np.array(p1, dtype=np.float64)
    return (1 - t) ** 2 * a + 2 * (1 - t) * t * b + t ** 2 * d


def _fixed(points: np.ndarray) -> np.ndarray:
    return np.round(points * _SCALE).astype(np.int32).reshape(-1, 1, 2)


def _fixed_point(p: Sequence[float]) -> Tuple[int, int]:
    return (int(round(p[0] * _SCALE)), int(round(p[1] * _SCALE)))


def _blend(base: np.ndarray, layer: np.ndarray) -> np.ndarray:
    """Alpha-composite a BGRA layer over a float BGR image."""
    alpha = layer[:, :, 3:4].astype(np.float32) / 255.0
    return base * (1.0 - alpha) + layer[:, :, :3].astype(np.float32) * alpha


class CanvasRenderer:
    """
    Rasterizes render commands onto two BGRA layers.

    - Drawing layer: persistent strokes, saved as a transparent PNG
    - Overlay layer: hand skeleton and cursor, cleared every frame
    """

    def __init__(self, width: int, height: int, brush: BrushConfig, show_skeleton: bool = True):
        """
        Initialize canvas renderer.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            brush: Brush size limits, default size and colour
            show_skeleton: Draw the hand skeleton on the overlay
        """
        self._brush_config = brush
        self._brush_size = brush.default_size
        self._brush_color_hex = brush.default_color
        self._brush_color = parse_hex_color(brush.default_color)
        self.show_skeleton = show_skeleton
        self._width = 0
        self._height = 0
        self._drawing: np.ndarray = np.zeros((0, 0, 4), dtype=np.uint8)
        self._overlay: np.ndarray = np.zeros((0, 0, 4), dtype=np.uint8)
        self.set_canvas_size(width, height)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    @property
    def brush_size(self) -> int:
        return self._brush_size

    @property
    def brush_color(self) -> str:
        return self._brush_color_hex

    @property
    def drawing(self) -> np.ndarray:
        """The persistent stroke layer (BGRA)."""
        return self._drawing

    @property
    def overlay(self) -> np.ndarray:
        """The per-frame cursor/skeleton layer (BGRA)."""
        return self._overlay

    def set_canvas_size(self, width: int, height: int) -> None:
        """Resize the canvas. Like an HTML canvas, resizing clears it."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self._width, self._height = int(width), int(height)
        self._drawing = np.zeros((self._height, self._width, 4), dtype=np.uint8)
        self._overlay = np.zeros((self._height, self._width, 4), dtype=np.uint8)

    def set_brush_size(self, size: int) -> int:
        """Set brush size, clamped to the configured range. Returns the applied size."""
        cfg = self._brush_config
        self._brush_size = int(max(cfg.min_size, min(cfg.max_size, size)))
        return self._brush_size

    def set_brush_color(self, color: str) -> None:
        self._brush_color = parse_hex_color(color)
        self._brush_color_hex = color

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def apply(self, commands: Iterable[RenderCommand]) -> int:
        """
        Execute render commands in order.

        Returns:
            Number of stroke segments actually drawn.
        """
        drawn = 0
        for command in commands:
            if isinstance(command, DrawSegment):
                if self.draw_segment(command.start, command.end):
                    drawn += 1
            elif isinstance(command, ClearOverlay):
                self.clear_overlay()
            elif isinstance(command, DrawCursor):
                self.draw_cursor(command.position, command.is_pinching)
            elif isinstance(command, DrawHand):
                if self.show_skeleton:
                    self.draw_hand_landmarks(command.hand)
            else:
                raise TypeError(f"Unknown render command: {command!r}")
        return drawn

    def draw_segment(self, start: Point, end: Point) -> bool:
        """
        Draw a rounded stroke piece from start to end.

        The piece is a quadratic curve through the midpoint so consecutive
        segments join without visible facets. Segments under one pixel are
        skipped.

        Returns:
            True if anything was drawn.
        """
        start = Point(*start)
        end = Point(*end)
        length = distance_2d(start, end)
        if length < 1:
            return False

        mid = midpoint(start, end)
        samples = max(2, int(length / 2) + 1)
        curve = np.vstack([
            _quadratic(start, start, mid, samples),
            _quadratic(mid, end, end, samples)[1:],
        ])
        color = (*self._brush_color, 255)
        cv2.polylines(
            self._drawing, [_fixed(curve)], False, color,
            thickness=self._brush_size, lineType=cv2.LINE_AA, shift=_SHIFT,
        )
        return True

    def draw_hand_landmarks(self, hand: Hand) -> None:
        """Draw skeleton connections and landmark dots, mirrored like the strokes."""
        w, h = self._width, self._height
        points = [to_canvas(lm, w, h) for lm in hand.landmarks]

        for start_idx, end_idx in HAND_CONNECTIONS:
            cv2.line(
                self._overlay,
                _fixed_point(points[start_idx]), _fixed_point(points[end_idx]),
                SKELETON_COLOR, 2, cv2.LINE_AA, _SHIFT,
            )

        for index, p in enumerate(points):
            hex_color = TIP_COLOR if index in (Hand.THUMB_TIP, Hand.INDEX_TIP) else LANDMARK_COLOR
            color = (*parse_hex_color(hex_color), 255)
            cv2.circle(self._overlay, _fixed_point(p), 4 * _SCALE, color, -1, cv2.LINE_AA, _SHIFT)

    def draw_cursor(self, position: Point, is_pinching: bool) -> None:
        """Ring around the fingertip; filled with the brush colour while drawing."""
        center = _fixed_point(position)
        if is_pinching:
            radius = (self._brush_size + 5) * _SCALE
            cv2.circle(
                self._overlay, center, radius,
                (*self._brush_color, CURSOR_FILL_ALPHA), -1, cv2.LINE_AA, _SHIFT,
            )
            ring = (*self._brush_color, 255)
        else:
            radius = (self._brush_size + 10) * _SCALE
            ring = IDLE_CURSOR_COLOR
        cv2.circle(self._overlay, center, radius, ring, 3, cv2.LINE_AA, _SHIFT)

    def clear_overlay(self) -> None:
        self._overlay[:] = 0

    def clear_drawing(self) -> None:
        self._drawing[:] = 0

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def compose(self, background: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Flatten background, strokes and overlay into one BGR image.

        Args:
            background: BGR frame shown under the drawing (e.g. the mirrored
                camera image). Resized to the canvas if needed; black if None.
        """
        if background is None:
            base = np.zeros((self._height, self._width, 3), dtype=np.float32)
        else:
            if background.shape[:2] != (self._height, self._width):
                background = cv2.resize(background, (self._width, self._height))
            base = background[:, :, :3].astype(np.float32)

        base = _blend(base, self._drawing)
        base = _blend(base, self._overlay)
        return np.clip(base, 0, 255).astype(np.uint8)

    def save_png(self, directory: Path) -> Path:
        """
        Save the stroke layer as a transparent PNG.

        Returns:
            Path of the written file.

        Raises:
            OSError: if the image could not be written.
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"air-writing-{int(time.time() * 1000)}.png"
        if not cv2.imwrite(str(path), self._drawing):
            raise OSError(f"Could not write {path}")
        return path
