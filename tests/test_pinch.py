import math
import pytest
from src.drawing.config import DrawingConfig
from src.drawing.pinch import PinchStateMachine, PinchState

FRAME_MS = 33.0


def pinch_at(machine, distance, t):
    """Place thumb and index tip `distance` apart along x and update."""
    thumb = (0.5, 0.5, 0.0)
    index = (0.5 + distance, 0.5, 0.0)
    return machine.update(thumb, index, t)


@pytest.fixture
def config():
    return DrawingConfig()


@pytest.fixture
def machine(config):
    return PinchStateMachine(config)


@pytest.fixture
def single_frame_machine():
    # History of one frame isolates the debounce from the moving average
    return PinchStateMachine(DrawingConfig(pinch_history_size=1))


def test_starts_up(machine):
    assert machine.state is PinchState.UP
    assert machine.average_distance is None


def test_two_close_frames_commit_down(machine):
    # First qualifying frame is only pending
    assert pinch_at(machine, 0.02, 0.0) is PinchState.UP
    assert pinch_at(machine, 0.02, FRAME_MS) is PinchState.DOWN
    assert machine.is_pinching


def test_single_frame_dip_does_not_press(single_frame_machine):
    m = single_frame_machine
    pinch_at(m, 0.1, 0.0)
    assert pinch_at(m, 0.01, FRAME_MS) is PinchState.UP
    # Back above the threshold resets the pending counter
    assert pinch_at(m, 0.1, 2 * FRAME_MS) is PinchState.UP
    assert pinch_at(m, 0.01, 3 * FRAME_MS) is PinchState.UP
    assert pinch_at(m, 0.01, 4 * FRAME_MS) is PinchState.DOWN


def test_single_frame_rise_releases_immediately(single_frame_machine):
    m = single_frame_machine
    pinch_at(m, 0.01, 0.0)
    pinch_at(m, 0.01, FRAME_MS)
    assert m.state is PinchState.DOWN

    assert pinch_at(m, 0.1, 2 * FRAME_MS) is PinchState.UP


def test_release_after_sustained_opening(machine):
    t = 0.0
    for _ in range(5):
        pinch_at(machine, 0.02, t)
        t += FRAME_MS
    assert machine.is_pinching

    # The moving average needs a couple of frames to cross the release line
    for _ in range(3):
        pinch_at(machine, 0.2, t)
        t += FRAME_MS
    assert machine.state is PinchState.UP


def test_oscillation_inside_band_does_not_toggle_from_up(machine, config):
    band = config.pinch_threshold * config.pinch_hysteresis_ratio * 0.9
    states = []
    for i in range(40):
        d = config.pinch_threshold + (band if i % 2 else -band)
        states.append(pinch_at(machine, d, i * FRAME_MS))

    transitions = sum(1 for a, b in zip(states, states[1:]) if a is not b)
    assert transitions <= 1


def test_oscillation_inside_band_does_not_toggle_from_down(machine, config):
    t = 0.0
    for _ in range(5):
        pinch_at(machine, 0.02, t)
        t += FRAME_MS
    assert machine.is_pinching

    band = config.pinch_threshold * config.pinch_hysteresis_ratio * 0.9
    states = []
    for i in range(40):
        d = config.pinch_threshold + (band if i % 2 else -band)
        states.append(pinch_at(machine, d, t))
        t += FRAME_MS

    transitions = sum(1 for a, b in zip(states, states[1:]) if a is not b)
    assert transitions <= 1


def test_history_is_bounded(machine, config):
    for i in range(20):
        pinch_at(machine, 0.1 + i * 0.001, i * FRAME_MS)
    assert len(machine.distance_history) == config.pinch_history_size
    # Most recent reading is last
    assert machine.distance_history[-1] == pytest.approx(0.119)


def test_average_uses_3d_distance(machine):
    machine.update((0.0, 0.0, 0.0), (0.03, 0.0, 0.04), 0.0)
    assert machine.average_distance == pytest.approx(0.05)


@pytest.mark.parametrize("bad", [
    (0.5, 0.5),
    (0.5, math.nan, 0.0),
    (0.5, 0.5, math.inf),
    (0.5, None, 0.0),
])
def test_malformed_landmark_fails_fast(machine, bad):
    pinch_at(machine, 0.1, 0.0)
    before = machine.distance_history

    with pytest.raises(ValueError):
        machine.update((0.5, 0.5, 0.0), bad, FRAME_MS)

    assert machine.distance_history == before


def test_reset_clears_history(machine):
    pinch_at(machine, 0.02, 0.0)
    pinch_at(machine, 0.02, FRAME_MS)
    assert machine.is_pinching

    machine.reset()

    assert machine.state is PinchState.UP
    assert machine.distance_history == ()
