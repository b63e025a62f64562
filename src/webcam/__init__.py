"""
AirInk Webcam Module

Hand tracking with MediaPipe and the background drawing worker.
"""
from ..config import Config, load_config
from .hand_tracker import HandTracker
from .worker import WebcamWorker

__all__ = [
    'Config',
    'load_config',
    'HandTracker',
    'WebcamWorker',
]
