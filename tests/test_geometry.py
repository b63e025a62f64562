import math
import pytest
from src.drawing.geometry import (
    Point, distance_2d, distance_3d, ensure_finite, lerp, midpoint, to_canvas,
)
from src.drawing.hand import Hand


def test_distances():
    assert distance_2d((0, 0), (3, 4)) == pytest.approx(5.0)
    assert distance_3d((0, 0, 0), (1, 2, 2)) == pytest.approx(3.0)
    # 2-D ignores z
    assert distance_2d((0, 0, 5), (3, 4, -5)) == pytest.approx(5.0)


def test_lerp_and_midpoint():
    a, b = Point(0.0, 10.0), Point(10.0, 30.0)
    assert lerp(a, b, 0.25) == Point(2.5, 15.0)
    assert lerp(a, b, 1.0) == b
    assert midpoint(a, b) == Point(5.0, 20.0)


def test_to_canvas_mirrors_x():
    p = to_canvas((0.25, 0.5, 0.1), 640, 480)
    assert p == Point(480.0, 240.0)


def test_ensure_finite_accepts_numbers():
    assert ensure_finite((1, 2.5, -3)) == (1.0, 2.5, -3.0)


@pytest.mark.parametrize("bad", [(1.0, 2.0), (1.0, math.nan, 0.0), ("x", 0.0, 0.0)])
def test_ensure_finite_rejects_bad_input(bad):
    with pytest.raises(ValueError):
        ensure_finite(bad)


def test_hand_requires_21_landmarks():
    with pytest.raises(ValueError):
        Hand(landmarks=[(0.0, 0.0, 0.0)] * 20)


def test_hand_tips():
    landmarks = [(i / 100, 0.0, 0.0) for i in range(21)]
    hand = Hand(landmarks=landmarks, handedness="Right")
    assert hand.thumb_tip == (0.04, 0.0, 0.0)
    assert hand.index_tip == (0.08, 0.0, 0.0)
