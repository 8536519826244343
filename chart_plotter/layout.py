"""
layout.py — Layout primitives for chart_plotter

This file contains ONLY:
- rectangle computation (title / legend / graph / grid)
- drawing of the chart furniture (title, legend, grid, axes, axis labels)
- render_shape_with_outline (the common style of every data mark)

Rectangles are allocated top to bottom: title, graph (grid + axis labels),
legend. All sizes come from measured text, so labels never collide with
the plotted data.

It intentionally does NOT contain:
- any chart-specific math (bars, bins, sectors, points)

Those live in charts.py.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from . import settings
from .geometry_common import Font, Line, Orientation, Rect, TextBounds
from .scale_common import linear_interpolation

TITLE_FONT = Font(size=settings.TITLE_FONT_SIZE, weight="bold", family=settings.FONT_FAMILY)
LABEL_FONT = Font(size=settings.LABEL_FONT_SIZE, family=settings.FONT_FAMILY)


def _margin() -> float:
    return settings.CHART_MARGIN


def max_height(bounds: Sequence[TextBounds]) -> float:
    return max((b.height for b in bounds), default=0.0)


def max_width(bounds: Sequence[TextBounds]) -> float:
    return max((b.width for b in bounds), default=0.0)


def measure_labels(labels: Sequence[str], canvas, font: Font = LABEL_FONT) -> List[TextBounds]:
    return [canvas.measure_text(label, font) for label in labels]


# ============================================================================
# RECTANGLES
# ============================================================================

def title_rectangle(title: str, canvas_width: int, canvas) -> Rect:
    """
    Full-width strip at the top. Zero height when there is no title.
    """
    m = _margin()
    height = 0.0
    if title:
        height = 2 * m + canvas.measure_text(title, TITLE_FONT).height
    return Rect(m, m, canvas_width - 2 * m, height)


def legend_rectangle(size: Tuple[int, int], label_bounds: Sequence[TextBounds], display_legend: bool = True) -> Rect:
    """
    Bottom strip for the legend.

    The top edge depends only on the label metrics, so switching the legend
    off changes this rectangle's height (to exactly 0) and nothing above it.
    """
    width, height = size
    m = _margin()
    label_height = max_height(label_bounds)
    return Rect(
        m,
        height - 2 * m - label_height,
        width - 2 * m,
        2 * m + label_height if display_legend else 0.0,
    )


def graph_rectangle(title_rect: Rect, size: Tuple[int, int], legend_rect: Rect) -> Rect:
    """
    Everything between the title and the legend: grid plus both axes labels.
    """
    width, _height = size
    m = _margin()
    return Rect(m, title_rect.max_y, width - 2 * m, legend_rect.min_y - title_rect.max_y)


def grid_rectangle(
    graph_rect: Rect,
    x_axis_label_bounds: Sequence[TextBounds],
    y_axis_label_bounds: Sequence[TextBounds],
) -> Rect:
    """
    Graph rectangle minus the margins, the left gutter for y-axis labels and
    the bottom gutter for x-axis labels.
    """
    m = _margin()
    gutter_w = max_width(y_axis_label_bounds)
    gutter_h = max_height(x_axis_label_bounds)
    return Rect(
        graph_rect.min_x + m + gutter_w,
        graph_rect.min_y + m,
        graph_rect.width - 2 * m - gutter_w,
        graph_rect.height - 2 * m - gutter_h,
    )


# ============================================================================
# DRAWING
# ============================================================================

def render_shape_with_outline(shape, fill_color: str, canvas) -> None:
    canvas.fill(shape, fill_color)
    canvas.stroke(shape, settings.STROKE_COLOR)


def render_title(title: str, title_rect: Rect, canvas) -> None:
    """
    Renders `title` centered in `title_rect`.
    """
    if not title:
        return
    bounds = canvas.measure_text(title, TITLE_FONT)
    canvas.draw_text(
        title,
        title_rect.center_x - bounds.width / 2.0,
        title_rect.center_y - bounds.height / 2.0,
        TITLE_FONT,
    )


def render_grid(grid_rect: Rect, line_count: int, orientation: Orientation, canvas) -> None:
    """
    Renders grid (the light gray lines that help estimate the value a mark represents).

    VERTICAL charts get horizontal lines, HORIZONTAL charts get vertical lines.
    """
    if orientation is Orientation.VERTICAL:
        for y in linear_interpolation(grid_rect.min_y, grid_rect.max_y, line_count):
            canvas.stroke(Line(grid_rect.min_x, y, grid_rect.max_x, y), settings.GRID_COLOR)
    else:
        for x in linear_interpolation(grid_rect.min_x, grid_rect.max_x, line_count):
            canvas.stroke(Line(x, grid_rect.min_y, x, grid_rect.max_y), settings.GRID_COLOR)


def render_axes(grid_rect: Rect, canvas) -> None:
    """Left and bottom axis lines."""
    canvas.stroke(Line(grid_rect.min_x, grid_rect.min_y, grid_rect.min_x, grid_rect.max_y), settings.STROKE_COLOR)
    canvas.stroke(Line(grid_rect.min_x, grid_rect.max_y, grid_rect.max_x, grid_rect.max_y), settings.STROKE_COLOR)


def render_x_axis_labels(
    labels: Sequence[str],
    label_bounds: Sequence[TextBounds],
    positions: Sequence[float],
    grid_rect: Rect,
    canvas,
) -> None:
    """
    Labels centered on `positions`, hanging in the bottom gutter below the grid.
    """
    y = grid_rect.max_y + _margin() / 2.0
    for label, bounds, x in zip(labels, label_bounds, positions):
        canvas.draw_text(label, x - bounds.width / 2.0, y, LABEL_FONT)


def render_y_axis_labels(
    labels: Sequence[str],
    label_bounds: Sequence[TextBounds],
    positions: Sequence[float],
    grid_rect: Rect,
    canvas,
) -> None:
    """
    Labels right-aligned in the left gutter, vertically centered on `positions`.
    """
    right = grid_rect.min_x - _margin() / 2.0
    for label, bounds, y in zip(labels, label_bounds, positions):
        canvas.draw_text(label, right - bounds.width, y - bounds.height / 2.0, LABEL_FONT)


def render_legend(
    display_legend: bool,
    labels: Sequence[str],
    label_bounds: Sequence[TextBounds],
    colors: Sequence[str],
    legend_rect: Rect,
    canvas,
) -> None:
    """
    Renders the legend if `display_legend` is true.

    Entries are laid out in one row: swatch, gap, label, double gap. The whole
    row is centered horizontally in `legend_rect`; swatches are squares as tall
    as the tallest label.
    """
    if not display_legend or not labels:
        return

    m = _margin()
    n = len(labels)
    swatch = max_height(label_bounds)
    legend_width = n * swatch + sum(b.width for b in label_bounds) + (2 * (n - 1) + n) * m

    current_x = legend_rect.center_x - legend_width / 2.0
    top = legend_rect.min_y + m
    for label, bounds, color in zip(labels, label_bounds, colors):
        render_shape_with_outline(Rect(current_x, top, swatch, swatch), color, canvas)
        current_x += swatch + m

        canvas.draw_text(label, current_x, top, LABEL_FONT)
        current_x += bounds.width + 2 * m
