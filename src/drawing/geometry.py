"""
Small geometry helpers shared by the pinch detector, smoother and stroke logic.
"""
import math
from typing import NamedTuple, Sequence, Tuple


class Point(NamedTuple):
    """A point in canvas pixel space."""
    x: float
    y: float


def distance_2d(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance using only x and y."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def distance_3d(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance using x, y and z."""
    return math.sqrt(
        (a[0] - b[0]) ** 2 +
        (a[1] - b[1]) ** 2 +
        (a[2] - b[2]) ** 2
    )


def lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def to_canvas(landmark: Sequence[float], width: float, height: float) -> Point:
    """
    Project a normalized landmark into canvas pixels.

    The x axis is mirrored so the drawing follows the hand the way a mirror
    image would.
    """
    return Point((1.0 - landmark[0]) * width, landmark[1] * height)


def ensure_finite(landmark: Sequence[float], name: str = "landmark") -> Tuple[float, float, float]:
    """
    Return the landmark as an (x, y, z) float tuple.

    Raises:
        ValueError: if a coordinate is missing or not a finite number.
    """
    if len(landmark) < 3:
        raise ValueError(f"{name} needs x, y and z, got {landmark!r}")
    try:
        coords = tuple(float(c) for c in landmark[:3])
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} has a non-numeric coordinate: {landmark!r}") from e
    if not all(math.isfinite(c) for c in coords):
        raise ValueError(f"{name} has a non-finite coordinate: {landmark!r}")
    return coords
