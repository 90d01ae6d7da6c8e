"""
Geometry
=========
Axis-aligned rectangles and the overlap test used by combat.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle. (x, y) is the top-left corner."""
    x: float
    y: float
    width: float
    height: float


def rects_overlap(a: Rect, b: Rect) -> bool:
    """
    Check AABB overlap between two rectangles.

    Strict on all four sides: rectangles that only share an edge
    do not overlap.
    """
    return (
        a.x < b.x + b.width and
        a.x + a.width > b.x and
        a.y < b.y + b.height and
        a.y + a.height > b.y
    )


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
