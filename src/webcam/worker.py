"""
Background worker for hand tracking and drawing.
Runs in a separate QThread to avoid blocking the UI.
"""
import threading
import time
from pathlib import Path
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from ..canvas.renderer import CanvasRenderer
from ..drawing.session import DrawingSession
from .hand_tracker import HandTracker, READ_RETRY_DELAY


class WebcamWorker(QObject):
    """
    Worker class that runs capture, drawing and compositing for each frame.

    Frames are handled strictly one at a time: a frame is fully drawn before
    the next one is read. UI requests (clear, save, brush changes) are plain
    method calls from the GUI thread and share the canvas under a lock.
    """
    # Signals
    frame_ready = pyqtSignal(object)  # Emits composited BGR numpy array
    hand_found = pyqtSignal()
    hand_lost = pyqtSignal()
    status = pyqtSignal(str)
    error = pyqtSignal(str)

    def __init__(self, config, parent=None):
        super().__init__(parent)
        self._config = config
        self._tracker: Optional[HandTracker] = None
        self._session: Optional[DrawingSession] = None
        self._is_running = False

        cam = config.camera
        self._renderer = CanvasRenderer(
            cam.width, cam.height, config.brush,
            show_skeleton=config.ui.show_skeleton,
        )
        self._canvas_lock = threading.Lock()

    @property
    def renderer(self) -> CanvasRenderer:
        return self._renderer

    def start_process(self):
        """Main processing loop. Runs in worker thread until stop_process()."""
        self._tracker = HandTracker(self._config)
        self._session = DrawingSession(self._config.drawing, self._renderer.size)

        if not self._tracker.start():
            self.error.emit("Could not start camera or hand tracking model")
            return

        self._is_running = True
        self.status.emit("ready")
        had_hand = False

        try:
            while self._is_running:
                ok, hand = self._tracker.get_hand()
                if not ok:
                    if self._tracker.camera_lost:
                        self.error.emit("Camera stopped delivering frames")
                        break
                    time.sleep(READ_RETRY_DELAY)
                    continue

                frame_size = self._tracker.frame_size
                with self._canvas_lock:
                    if frame_size is not None and frame_size != self._renderer.size:
                        self._renderer.set_canvas_size(*frame_size)
                        self._session.resize(*frame_size)

                    commands = self._session.process_frame(hand)
                    self._renderer.apply(commands)

                    background = self._tracker.last_frame if self._config.ui.show_camera else None
                    composite = self._renderer.compose(background)

                if hand is not None and not had_hand:
                    self.hand_found.emit()
                elif hand is None and had_hand:
                    self.hand_lost.emit()
                had_hand = hand is not None

                self.frame_ready.emit(composite)

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._tracker:
                self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop and release resources in worker thread."""
        self._is_running = False

    def clear_canvas(self):
        with self._canvas_lock:
            self._renderer.clear_drawing()
        self.status.emit("cleared")

    def set_brush_size(self, size: int):
        with self._canvas_lock:
            applied = self._renderer.set_brush_size(size)
        self.status.emit(f"brush size {applied}")

    def set_brush_color(self, color: str):
        try:
            with self._canvas_lock:
                self._renderer.set_brush_color(color)
        except ValueError as e:
            self.error.emit(str(e))

    def save_image(self, directory: Optional[Path] = None) -> Optional[Path]:
        """Write the drawing as PNG. Returns the path, or None on failure."""
        directory = Path(directory or self._config.ui.save_dir)
        try:
            with self._canvas_lock:
                path = self._renderer.save_png(directory)
        except OSError as e:
            self.error.emit(f"Save failed: {e}")
            return None
        print(f"Saved drawing to {path}")
        self.status.emit(f"saved {path.name}")
        return path
