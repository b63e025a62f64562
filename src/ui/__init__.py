"""
AirInk UI Module

PyQt5 window with the live canvas and brush controls.
"""
from .canvas_window import CanvasWindow

__all__ = [
    'CanvasWindow',
]
