"""
AirInk Canvas Module

Bitmap stroke layer, hand/cursor overlay and PNG export.
"""
from .renderer import CanvasRenderer, parse_hex_color

__all__ = [
    'CanvasRenderer',
    'parse_hex_color',
]
