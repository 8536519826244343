"""
geometry_common.py — Shared geometry types for chart_plotter

This file contains ONLY:
- shape primitives handed to a drawing surface (Rect, Line, Wedge, Circle)
- text metrics (Font, TextBounds)
- orientation / stacking enums shared by layout.py and charts.py

All coordinates are canvas pixels with the origin at the top-left corner and
y growing downward. Angles are degrees, 0 at three o'clock, increasing
counter-clockwise on screen (90 is twelve o'clock).

Keep this file free of imports from other project modules to avoid cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ============================================================================
# ENUMS
# ============================================================================

class Orientation(Enum):
    """
    VERTICAL: values grow upward (vertical bars, horizontal grid lines).
    HORIZONTAL: values grow to the right (horizontal bars, vertical grid lines).
    """
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Stacking(Enum):
    CLUSTERED = "clustered"
    STACKED = "stacked"


# ============================================================================
# SHAPES
# ============================================================================

@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Wedge:
    """Pie sector inscribed in `bounds`, from `start` sweeping `extent` degrees."""
    bounds: Rect
    start: float
    extent: float

    @property
    def center(self):
        return self.bounds.center_x, self.bounds.center_y

    @property
    def radius(self) -> float:
        return min(self.bounds.width, self.bounds.height) / 2.0


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float


# ============================================================================
# TEXT
# ============================================================================

@dataclass(frozen=True)
class Font:
    size: float
    weight: str = "normal"
    family: str = "DejaVu Sans"


@dataclass(frozen=True)
class TextBounds:
    """Measured size of a string in pixels. Text is placed by its top-left corner."""
    width: float
    height: float
