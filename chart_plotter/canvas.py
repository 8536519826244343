"""
canvas.py — Drawing surface for chart_plotter

This file contains ONLY:
- MatplotlibCanvas: a pixel-addressed drawing surface backed by a matplotlib
  Figure (Agg canvas, no pyplot, no window)

Surface contract used by layout.py and charts.py:
- width / height                       canvas size in pixels
- measure_text(text, font) -> TextBounds
- fill(shape, color)                   Rect / Wedge / Circle
- stroke(shape, color)                 Rect / Wedge / Circle / Line
- draw_text(text, x, y, font, color)   (x, y) is the top-left corner of the text

Every call paints over what was drawn before it (painter's order).
Serialization to SVG/PNG lives in output.py.
"""

from __future__ import annotations

from typing import Optional

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties
from matplotlib.lines import Line2D
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import Rectangle
from matplotlib.patches import Wedge as WedgePatch

from . import settings
from .geometry_common import Circle, Font, Line, Rect, TextBounds, Wedge

# One canvas pixel == one figure pixel
DPI = 100
# 1 px outlines (matplotlib line widths are in points)
_LINE_WIDTH_PT = 72.0 / DPI


def _font_properties(font: Font) -> FontProperties:
    return FontProperties(family=font.family, size=font.size, weight=font.weight)


class MatplotlibCanvas:
    def __init__(self, width: int, height: int, background: Optional[str] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)
        self.background = background or settings.BACKGROUND_COLOR

        self.figure = Figure(figsize=(self.width / DPI, self.height / DPI), dpi=DPI, facecolor=self.background)
        FigureCanvasAgg(self.figure)

        # One axes covering the whole figure, data units == pixels, y pointing down
        self.ax = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_axis_off()

        self._z = 0

    def _next_z(self) -> int:
        self._z += 1
        return self._z

    # ------------------------------------------------------------------------
    # TEXT
    # ------------------------------------------------------------------------

    def measure_text(self, text: str, font: Font) -> TextBounds:
        if not text:
            return TextBounds(0.0, 0.0)
        renderer = self.figure.canvas.get_renderer()
        width, height, _descent = renderer.get_text_width_height_descent(
            text, _font_properties(font), ismath=False
        )
        return TextBounds(float(width), float(height))

    def draw_text(self, text: str, x: float, y: float, font: Font, color: Optional[str] = None) -> None:
        self.ax.text(
            x,
            y,
            text,
            fontproperties=_font_properties(font),
            color=color or settings.TEXT_COLOR,
            ha="left",
            va="top",
            parse_math=False,
            zorder=self._next_z(),
        )

    # ------------------------------------------------------------------------
    # SHAPES
    # ------------------------------------------------------------------------

    def fill(self, shape, color: str) -> None:
        if isinstance(shape, Line):
            raise TypeError("Lines cannot be filled")
        patch = self._patch(shape, facecolor=color, edgecolor="none", linewidth=0, fill=True)
        self.ax.add_patch(patch)

    def stroke(self, shape, color: str) -> None:
        if isinstance(shape, Line):
            self.ax.add_line(
                Line2D(
                    [shape.x1, shape.x2],
                    [shape.y1, shape.y2],
                    color=color,
                    linewidth=_LINE_WIDTH_PT,
                    zorder=self._next_z(),
                )
            )
            return
        patch = self._patch(shape, facecolor="none", edgecolor=color, linewidth=_LINE_WIDTH_PT, fill=False)
        self.ax.add_patch(patch)

    def _patch(self, shape, **style):
        style["zorder"] = self._next_z()

        if isinstance(shape, Rect):
            return Rectangle((shape.x, shape.y), shape.width, shape.height, **style)

        if isinstance(shape, Wedge):
            # y is flipped, so a counter-clockwise screen angle `a` is `-a` in data space
            cx, cy = shape.center
            return WedgePatch(
                (cx, cy),
                shape.radius,
                -(shape.start + shape.extent),
                -shape.start,
                **style,
            )

        if isinstance(shape, Circle):
            return CirclePatch((shape.cx, shape.cy), shape.radius, **style)

        raise TypeError(f"Unsupported shape: {type(shape).__name__}")
