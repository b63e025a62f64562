"""
Camera capture plus MediaPipe hand landmark detection.
"""
from pathlib import Path
from typing import Optional, Tuple
import time
import cv2
import numpy as np
import mediapipe as mp

from ..drawing.hand import Hand
from ..config import Config, CameraConfig, MediaPipeConfig

BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"

# Loops give up on the camera after this many failed reads in a row
MAX_READ_FAILURES = 50
READ_RETRY_DELAY = 0.1  # seconds


class HandTracker:
    """
    Reads webcam frames and turns the first detected hand into a Hand.

    Landmarks come from the raw, unmirrored image; to_canvas does the
    mirroring. last_frame holds the flipped image so the preview lines up
    with the strokes.
    """

    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Args:
            config: AirInk configuration (camera and mediapipe sections are used)
            model_path: hand_landmarker.task file, overriding config and default
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        if model_path is None and self._mp_config.model_path:
            model_path = Path(self._mp_config.model_path)
        self._model_path = Path(model_path or self.DEFAULT_MODEL_PATH)

        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._read_failures = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Open the camera and load the landmark model.

        Returns:
            False (after printing why) if either could not be opened.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            print(f"ERROR: Model file not found: {self._model_path}")
            print(f"Download from: {MODEL_URL}")
            return False

        cam = self._camera_config
        self._cap = cv2.VideoCapture(cam.device_id)
        if not self._cap.isOpened():
            print(f"ERROR: Could not open camera {cam.device_id}")
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, cam.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, cam.height)
        self._cap.set(cv2.CAP_PROP_FPS, cam.fps)

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._read_failures = 0
        self._is_running = True
        return True

    def stop(self) -> None:
        """Release the model and the camera. Safe to call twice."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None

    def get_hand(self) -> Tuple[bool, Optional[Hand]]:
        """
        Read one frame and detect a hand in it.

        Returns:
            (frame_read, hand). frame_read is False when the camera gave
            no frame; hand is None when no hand was detected.
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return False, None

        ret, frame = self._cap.read()
        if not ret:
            self._read_failures += 1
            return False, None
        self._read_failures = 0

        self._frame_count += 1
        self._last_frame = cv2.flip(frame, 1)

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # VIDEO mode rejects repeated or decreasing timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        if not result.hand_landmarks:
            return True, None

        handedness = result.handedness[0][0]
        return True, Hand(
            landmarks=[(lm.x, lm.y, lm.z) for lm in result.hand_landmarks[0]],
            handedness=handedness.category_name,
            confidence=handedness.score,
        )

    @property
    def camera_lost(self) -> bool:
        """True once MAX_READ_FAILURES reads in a row have failed."""
        return self._read_failures >= MAX_READ_FAILURES

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        """Most recent frame, mirrored for display (BGR)."""
        return self._last_frame

    @property
    def frame_size(self) -> Optional[Tuple[int, int]]:
        """(width, height) of the most recent frame."""
        if self._last_frame is None:
            return None
        h, w = self._last_frame.shape[:2]
        return (w, h)

    @property
    def frame_count(self) -> int:
        return self._frame_count
