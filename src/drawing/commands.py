"""
Render commands produced by a drawing session for the rasterizer.
"""
from dataclasses import dataclass
from typing import Union

from .geometry import Point
from .hand import Hand


@dataclass(frozen=True)
class ClearOverlay:
    """Wipe the transient cursor/skeleton layer."""


@dataclass(frozen=True)
class DrawHand:
    hand: Hand


@dataclass(frozen=True)
class DrawCursor:
    position: Point
    is_pinching: bool


@dataclass(frozen=True)
class DrawSegment:
    """Persistent stroke piece between two canvas points."""
    start: Point
    end: Point


RenderCommand = Union[ClearOverlay, DrawHand, DrawCursor, DrawSegment]
