"""
AirInk Drawing Module

Pinch detection, cursor smoothing and stroke segmentation.
"""
from .config import DrawingConfig
from .geometry import Point
from .hand import Hand, HAND_CONNECTIONS
from .pinch import PinchStateMachine, PinchState
from .smoothing import AdaptiveSmoother, MotionSpeed
from .stroke import StrokeRenderer
from .commands import ClearOverlay, DrawHand, DrawCursor, DrawSegment, RenderCommand
from .session import DrawingSession

__all__ = [
    'DrawingConfig',
    'Point',
    'Hand',
    'HAND_CONNECTIONS',
    'PinchStateMachine',
    'PinchState',
    'AdaptiveSmoother',
    'MotionSpeed',
    'StrokeRenderer',
    'ClearOverlay',
    'DrawHand',
    'DrawCursor',
    'DrawSegment',
    'RenderCommand',
    'DrawingSession',
]
