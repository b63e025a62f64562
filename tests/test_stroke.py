import math
import pytest
from src.drawing.commands import DrawSegment
from src.drawing.config import DrawingConfig
from src.drawing.geometry import Point
from src.drawing.smoothing import AdaptiveSmoother
from src.drawing.stroke import StrokeRenderer


def make_renderer(**overrides):
    config = DrawingConfig(**overrides)
    smoother = AdaptiveSmoother(config)
    return StrokeRenderer(config, smoother), smoother


@pytest.fixture
def stroke():
    renderer, _ = make_renderer()
    renderer.extend((100.0, 100.0))
    return renderer


def assert_chained(segments, start, end):
    assert segments[0].start == start
    assert segments[-1].end == end
    for a, b in zip(segments, segments[1:]):
        assert a.end == b.start


def test_first_point_starts_stroke_without_segments():
    renderer, _ = make_renderer()
    assert not renderer.is_drawing

    assert renderer.extend((10.0, 20.0)) == []
    assert renderer.is_drawing
    assert renderer.last_point == Point(10.0, 20.0)
    assert renderer.prev_point is None


def test_sub_pixel_move_is_discarded(stroke):
    assert stroke.extend((100.3, 100.2)) == []
    assert stroke.last_point == Point(100.0, 100.0)
    assert stroke.prev_point is None


def test_short_move_emits_one_segment(stroke):
    segments = stroke.extend((106.0, 108.0))

    assert segments == [DrawSegment(Point(100.0, 100.0), Point(106.0, 108.0))]
    assert stroke.prev_point == Point(100.0, 100.0)
    assert stroke.last_point == Point(106.0, 108.0)


def test_move_at_threshold_is_not_interpolated(stroke):
    assert len(stroke.extend((115.0, 100.0))) == 1


def test_long_move_is_interpolated(stroke):
    segments = stroke.extend((100.0, 130.0))

    # ceil(30 / 8)
    assert len(segments) == 4
    assert_chained(segments, Point(100.0, 100.0), Point(100.0, 130.0))
    assert segments[0].end == pytest.approx(Point(100.0, 107.5))
    assert stroke.last_point == Point(100.0, 130.0)
    assert stroke.prev_point == Point(100.0, 100.0)


@pytest.mark.parametrize("distance,step", [
    (16.0, 3.3),
    (37.3, 8.0),
    (123.456, 5.0),
    (999.9, 8.0),
])
def test_interpolation_never_drifts(distance, step):
    renderer, _ = make_renderer(interpolation_step=step)
    start = Point(3.0, 7.0)
    target = Point(start.x + distance * 0.6, start.y + distance * 0.8)
    renderer.extend(start)

    segments = renderer.extend(target)

    expected = min(math.ceil(math.hypot(target.x - start.x, target.y - start.y) / step), 30)
    assert len(segments) == expected
    assert_chained(segments, start, target)
    assert renderer.last_point == target


def test_step_count_is_capped(stroke):
    segments = stroke.extend((1100.0, 100.0))
    assert len(segments) == 30
    assert stroke.last_point == Point(1100.0, 100.0)


def test_end_resets_cursor_and_smoother():
    renderer, smoother = make_renderer()
    for i in range(4):
        renderer.extend(smoother.add_point((i * 10.0, 0.0), i * 33.0))
    assert len(smoother) == 4

    renderer.end()

    assert not renderer.is_drawing
    assert renderer.last_point is None
    assert renderer.prev_point is None
    assert len(smoother) == 0


def test_new_stroke_does_not_connect_to_previous(stroke):
    stroke.extend((110.0, 100.0))
    stroke.end()

    assert stroke.extend((400.0, 300.0)) == []
    assert stroke.last_point == Point(400.0, 300.0)
    assert stroke.prev_point is None
