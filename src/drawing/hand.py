"""
Hand landmark container shared by the tracker and the drawing pipeline.
"""
from dataclasses import dataclass
from typing import List, Tuple

Landmark = Tuple[float, float, float]

NUM_LANDMARKS = 21

# Same topology as MediaPipe's HAND_CONNECTIONS
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]


@dataclass(frozen=True)
class Hand:
    """
    One tracked hand for a single frame.

    Attributes:
        landmarks: 21 (x, y, z) tuples, normalized 0-1, y pointing down
        handedness: 'Left', 'Right' or 'Unknown'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Landmark]
    handedness: str = "Unknown"
    confidence: float = 1.0

    THUMB_TIP = 4
    INDEX_TIP = 8

    def __post_init__(self):
        if len(self.landmarks) != NUM_LANDMARKS:
            raise ValueError(
                f"Hand needs {NUM_LANDMARKS} landmarks, got {len(self.landmarks)}"
            )

    @property
    def thumb_tip(self) -> Landmark:
        return self.landmarks[self.THUMB_TIP]

    @property
    def index_tip(self) -> Landmark:
        return self.landmarks[self.INDEX_TIP]
