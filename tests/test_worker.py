import pytest

pytest.importorskip("PyQt5")
pytest.importorskip("mediapipe")

from src.config import Config
from src.webcam import worker as worker_module
from src.webcam.worker import WebcamWorker


class DeadCamera:
    """Tracker whose camera never returns a frame."""

    def __init__(self, failures_until_lost=3):
        self.failures_until_lost = failures_until_lost
        self.reads = 0
        self.stopped = False

    def start(self):
        return True

    def get_hand(self):
        self.reads += 1
        return False, None

    @property
    def camera_lost(self):
        return self.reads >= self.failures_until_lost

    def stop(self):
        self.stopped = True


def test_worker_gives_up_on_dead_camera(monkeypatch):
    tracker = DeadCamera()
    monkeypatch.setattr(worker_module, "HandTracker", lambda config: tracker)
    monkeypatch.setattr(worker_module, "READ_RETRY_DELAY", 0)

    worker = WebcamWorker(Config())
    errors = []
    frames = []
    worker.error.connect(errors.append)
    worker.frame_ready.connect(frames.append)

    worker.start_process()

    assert tracker.reads == 3
    assert tracker.stopped
    assert frames == []
    assert errors == ["Camera stopped delivering frames"]
