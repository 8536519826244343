"""
charts.py — Chart renderers for chart_plotter

This file contains ONLY:
- chart data / style types (Bar, Histogram, Pie, Scatter)
- the pure geometry of each chart's marks (bar_rectangles, histogram_bins,
  pie_sectors, scatter_points)
- one render_* function per chart type

Every renderer runs the same single pass:
  title -> aggregates -> label metrics -> legend rectangle -> graph/plot
  rectangles -> colors -> grid -> marks -> legend
and returns the ChartLayout it computed.

It intentionally does NOT contain:
- chart construction / dispatch (plotter.py)
- rectangle primitives (layout.py)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import settings
from .csv_table import Table
from .errors import MalformedInputError, PreconditionError
from .geometry_common import Circle, Orientation, Rect, Stacking, Wedge
from .layout import (
    graph_rectangle,
    grid_rectangle,
    legend_rectangle,
    measure_labels,
    render_axes,
    render_grid,
    render_legend,
    render_shape_with_outline,
    render_title,
    render_x_axis_labels,
    render_y_axis_labels,
    title_rectangle,
)
from .scale_common import (
    linear_interpolation,
    linear_interpolation_midpoints,
    map_linear,
    range_axis_ticks,
    value_axis_ticks,
)
from .utils import cycle_colors, default_labels, format_tick_label, setup_logger

logger = setup_logger(__name__)


def _default_size() -> Tuple[int, int]:
    return (settings.DEFAULT_WIDTH, settings.DEFAULT_HEIGHT)


def _default_colors() -> Tuple[str, ...]:
    return tuple(settings.CHART_COLORS)


@dataclass(frozen=True)
class ChartLayout:
    """Rectangles computed by one render call. `plot` is the grid (or the pie square)."""
    title: Rect
    graph: Rect
    plot: Rect
    legend: Rect


# ============================================================================
# BAR
# ============================================================================

@dataclass(frozen=True)
class BarChartData:
    """Rows are categories, columns are series (one legend entry and color per column)."""
    title: str
    table: Table


@dataclass(frozen=True)
class BarChartStyle:
    size: Tuple[int, int] = field(default_factory=_default_size)
    orientation: Orientation = Orientation.VERTICAL
    stacking: Stacking = Stacking.CLUSTERED
    display_legend: bool = True
    colors: Tuple[str, ...] = field(default_factory=_default_colors)


@dataclass(frozen=True)
class BarChart:
    data: BarChartData
    style: BarChartStyle = field(default_factory=BarChartStyle)


def bar_value_max(values: Sequence[Sequence[float]], stacking: Stacking) -> float:
    """
    Largest extent on the value axis: the per-category sum when stacked,
    the single largest cell when clustered. Negative cells count as zero.
    """
    if stacking is Stacking.STACKED:
        return max(sum(max(v, 0.0) for v in row) for row in values)
    return max(max(v, 0.0) for row in values for v in row)


def bar_rectangles(
    values: Sequence[Sequence[float]],
    grid_rect: Rect,
    axis_max: float,
    orientation: Orientation = Orientation.VERTICAL,
    stacking: Stacking = Stacking.CLUSTERED,
    group_fraction: Optional[float] = None,
) -> List[Tuple[int, int, Rect]]:
    """
    Return (row, column, rectangle) for every cell.

    Each category (row) owns an equal slot along the category axis; its bars
    cover `group_fraction` of the slot, centered. Clustered bars split that
    width between the series; stacked bars share it and pile up.
    """
    if group_fraction is None:
        group_fraction = settings.BAR_GROUP_FRACTION

    n_rows = len(values)
    n_cols = len(values[0])
    vertical = orientation is Orientation.VERTICAL

    if vertical:
        centers = linear_interpolation_midpoints(grid_rect.min_x, grid_rect.max_x, n_rows)
        slot = grid_rect.width / n_rows
        extent = grid_rect.height
    else:
        centers = linear_interpolation_midpoints(grid_rect.min_y, grid_rect.max_y, n_rows)
        slot = grid_rect.height / n_rows
        extent = grid_rect.width

    group = slot * group_fraction
    thickness = group if stacking is Stacking.STACKED else group / n_cols

    result: List[Tuple[int, int, Rect]] = []
    for i, (row, center) in enumerate(zip(values, centers)):
        group_start = center - group / 2.0
        running = 0.0
        for j, value in enumerate(row):
            length = max(value, 0.0) / axis_max * extent
            if stacking is Stacking.STACKED:
                offset, across = running, group_start
                running += length
            else:
                offset, across = 0.0, group_start + j * thickness

            if vertical:
                rect = Rect(across, grid_rect.max_y - offset - length, thickness, length)
            else:
                rect = Rect(grid_rect.min_x + offset, across, length, thickness)
            result.append((i, j, rect))

    return result


def render_bar_chart(chart: BarChart, canvas) -> ChartLayout:
    data, style = chart.data, chart.style
    table = data.table
    vertical = style.orientation is Orientation.VERTICAL

    title_rect = title_rectangle(data.title, style.size[0], canvas)
    render_title(data.title, title_rect, canvas)

    if any(v < 0 for v in table.flat()):
        logger.warning("Bar chart '%s': negative values are drawn as empty bars", data.title)
    ticks = value_axis_ticks(bar_value_max(table.values, style.stacking))
    axis_max = ticks[-1]

    tick_labels = [format_tick_label(t) for t in ticks]
    category_labels = default_labels(table.row_labels, table.n_rows)
    series_labels = default_labels(table.column_labels, table.n_columns)

    tick_bounds = measure_labels(tick_labels, canvas)
    category_bounds = measure_labels(category_labels, canvas)
    series_bounds = measure_labels(series_labels, canvas)

    legend_rect = legend_rectangle(style.size, series_bounds, style.display_legend)
    graph_rect = graph_rectangle(title_rect, style.size, legend_rect)
    if vertical:
        grid_rect = grid_rectangle(graph_rect, category_bounds, tick_bounds)
    else:
        grid_rect = grid_rectangle(graph_rect, tick_bounds, category_bounds)
    logger.debug("Bar chart layout: graph=%s grid=%s legend=%s", graph_rect, grid_rect, legend_rect)

    colors = cycle_colors(style.colors, table.n_columns)

    render_grid(grid_rect, len(ticks), style.orientation, canvas)

    for _row, col, rect in bar_rectangles(table.values, grid_rect, axis_max, style.orientation, style.stacking):
        render_shape_with_outline(rect, colors[col], canvas)

    render_axes(grid_rect, canvas)
    if vertical:
        render_x_axis_labels(
            category_labels, category_bounds,
            linear_interpolation_midpoints(grid_rect.min_x, grid_rect.max_x, table.n_rows),
            grid_rect, canvas,
        )
        render_y_axis_labels(
            tick_labels, tick_bounds,
            linear_interpolation(grid_rect.max_y, grid_rect.min_y, len(ticks)),
            grid_rect, canvas,
        )
    else:
        render_x_axis_labels(
            tick_labels, tick_bounds,
            linear_interpolation(grid_rect.min_x, grid_rect.max_x, len(ticks)),
            grid_rect, canvas,
        )
        render_y_axis_labels(
            category_labels, category_bounds,
            linear_interpolation_midpoints(grid_rect.min_y, grid_rect.max_y, table.n_rows),
            grid_rect, canvas,
        )

    render_legend(style.display_legend, series_labels, series_bounds, colors, legend_rect, canvas)
    return ChartLayout(title_rect, graph_rect, grid_rect, legend_rect)


# ============================================================================
# HISTOGRAM
# ============================================================================

@dataclass(frozen=True)
class HistogramChartData:
    """Every cell of the table is one observation."""
    title: str
    table: Table
    bar_count: int = settings.DEFAULT_BAR_COUNT


@dataclass(frozen=True)
class HistogramChartStyle:
    size: Tuple[int, int] = field(default_factory=_default_size)
    colors: Tuple[str, ...] = field(default_factory=_default_colors)


@dataclass(frozen=True)
class HistogramChart:
    data: HistogramChartData
    style: HistogramChartStyle = field(default_factory=HistogramChartStyle)


def resolve_bar_count(bar_count: int) -> int:
    """Non-positive bar counts fall back to the default."""
    return bar_count if bar_count > 0 else settings.DEFAULT_BAR_COUNT


def histogram_bins(values: Sequence[float], bar_count: int) -> Tuple[List[int], List[float]]:
    """
    Count `values` into `bar_count` equal-width bins spanning [min, max].

    Returns (counts, edges) with len(edges) == len(counts) + 1. Each bin holds
    [start, end), the last one also holds max.
    """
    if not values:
        raise PreconditionError("histogram needs at least one value")
    bar_count = resolve_bar_count(bar_count)

    counts, edges = np.histogram(np.asarray(values, dtype=float), bins=bar_count, range=(min(values), max(values)))
    return [int(c) for c in counts], [float(e) for e in edges]


def _format_edge_label(value: float) -> str:
    return f"{value:.3g}"


def render_histogram_chart(chart: HistogramChart, canvas) -> ChartLayout:
    data, style = chart.data, chart.style

    title_rect = title_rectangle(data.title, style.size[0], canvas)
    render_title(data.title, title_rect, canvas)

    counts, edges = histogram_bins(data.table.flat(), data.bar_count)
    ticks = value_axis_ticks(max(counts))
    axis_max = ticks[-1]
    logger.debug("Histogram '%s': edges=%s counts=%s", data.title, edges, counts)

    tick_labels = [format_tick_label(t) for t in ticks]
    edge_labels = [_format_edge_label(e) for e in edges]
    tick_bounds = measure_labels(tick_labels, canvas)
    edge_bounds = measure_labels(edge_labels, canvas)

    legend_rect = legend_rectangle(style.size, [], display_legend=False)
    graph_rect = graph_rectangle(title_rect, style.size, legend_rect)
    grid_rect = grid_rectangle(graph_rect, edge_bounds, tick_bounds)

    (color,) = cycle_colors(style.colors, 1)

    render_grid(grid_rect, len(ticks), Orientation.VERTICAL, canvas)

    bar_width = grid_rect.width / len(counts)
    for i, count in enumerate(counts):
        height = count / axis_max * grid_rect.height
        rect = Rect(grid_rect.min_x + i * bar_width, grid_rect.max_y - height, bar_width, height)
        render_shape_with_outline(rect, color, canvas)

    render_axes(grid_rect, canvas)
    render_x_axis_labels(
        edge_labels, edge_bounds,
        linear_interpolation(grid_rect.min_x, grid_rect.max_x, len(edges)),
        grid_rect, canvas,
    )
    render_y_axis_labels(
        tick_labels, tick_bounds,
        linear_interpolation(grid_rect.max_y, grid_rect.min_y, len(ticks)),
        grid_rect, canvas,
    )
    return ChartLayout(title_rect, graph_rect, grid_rect, legend_rect)


# ============================================================================
# PIE
# ============================================================================

@dataclass(frozen=True)
class PieChartData:
    """
    Only the first row of the table is drawn; further rows are ignored (and
    logged as such).
    """
    title: str
    table: Table


@dataclass(frozen=True)
class PieChartStyle:
    size: Tuple[int, int] = field(default_factory=_default_size)
    display_legend: bool = True
    colors: Tuple[str, ...] = field(default_factory=_default_colors)


@dataclass(frozen=True)
class PieChart:
    data: PieChartData
    style: PieChartStyle = field(default_factory=PieChartStyle)


def pie_sum(row: Sequence[float]) -> float:
    """Sum of the sector values; raises PreconditionError when no pie can be drawn."""
    if any(v < 0 for v in row):
        raise PreconditionError("pie values must not be negative")
    total = float(sum(row))
    if total <= 0:
        raise PreconditionError("pie values must have a positive sum")
    return total


def pie_sectors(row: Sequence[float], pie_rect: Rect) -> List[Tuple[int, Wedge]]:
    """
    Return (column, wedge) in drawing order.

    Sectors are drawn from the last column to the first, starting at 12
    o'clock and turning counter-clockwise, so reading the pie clockwise from
    the top follows the legend order.
    """
    total = pie_sum(row)
    current = 90.0
    sectors: List[Tuple[int, Wedge]] = []
    for j in reversed(range(len(row))):
        extent = row[j] / total * 360.0
        sectors.append((j, Wedge(pie_rect, current, extent)))
        current += extent
    return sectors


def pie_rectangle(graph_rect: Rect) -> Rect:
    """Largest square that fits in the graph rectangle minus margins, centered."""
    m = settings.CHART_MARGIN
    side = max(min(graph_rect.width, graph_rect.height) - 2 * m, 0.0)
    return Rect(graph_rect.center_x - side / 2.0, graph_rect.center_y - side / 2.0, side, side)


def render_pie_chart(chart: PieChart, canvas) -> ChartLayout:
    data, style = chart.data, chart.style
    table = data.table

    title_rect = title_rectangle(data.title, style.size[0], canvas)
    render_title(data.title, title_rect, canvas)

    if table.n_rows > 1:
        logger.warning("Pie chart '%s': using the first of %d rows, the rest are ignored", data.title, table.n_rows)
    row = table.values[0]

    labels = default_labels(table.column_labels, table.n_columns)
    label_bounds = measure_labels(labels, canvas)

    legend_rect = legend_rectangle(style.size, label_bounds, style.display_legend)
    graph_rect = graph_rectangle(title_rect, style.size, legend_rect)
    pie_rect = pie_rectangle(graph_rect)

    colors = cycle_colors(style.colors, table.n_columns)

    for col, wedge in pie_sectors(row, pie_rect):
        render_shape_with_outline(wedge, colors[col], canvas)

    render_legend(style.display_legend, labels, label_bounds, colors, legend_rect, canvas)
    return ChartLayout(title_rect, graph_rect, pie_rect, legend_rect)


# ============================================================================
# SCATTER
# ============================================================================

@dataclass(frozen=True)
class ScatterChartData:
    """Each row is one point: first value is x, second is y, the rest is ignored."""
    title: str
    table: Table

    def __post_init__(self):
        if self.table.n_columns < 2:
            raise MalformedInputError("Scatter chart needs at least 2 values per row")


@dataclass(frozen=True)
class ScatterChartStyle:
    size: Tuple[int, int] = field(default_factory=_default_size)
    colors: Tuple[str, ...] = field(default_factory=_default_colors)


@dataclass(frozen=True)
class ScatterChart:
    data: ScatterChartData
    style: ScatterChartStyle = field(default_factory=ScatterChartStyle)


def scatter_points(
    values: Sequence[Sequence[float]],
    grid_rect: Rect,
    x_ticks: Sequence[float],
    y_ticks: Sequence[float],
    radius: Optional[float] = None,
) -> List[Circle]:
    if radius is None:
        radius = settings.POINT_RADIUS
    return [
        Circle(
            map_linear(row[0], x_ticks[0], x_ticks[-1], grid_rect.min_x, grid_rect.max_x),
            map_linear(row[1], y_ticks[0], y_ticks[-1], grid_rect.max_y, grid_rect.min_y),
            radius,
        )
        for row in values
    ]


def render_scatter_chart(chart: ScatterChart, canvas) -> ChartLayout:
    data, style = chart.data, chart.style
    table = data.table

    title_rect = title_rectangle(data.title, style.size[0], canvas)
    render_title(data.title, title_rect, canvas)

    xs = [row[0] for row in table.values]
    ys = [row[1] for row in table.values]
    x_ticks = range_axis_ticks(min(xs), max(xs))
    y_ticks = range_axis_ticks(min(ys), max(ys))

    x_labels = [format_tick_label(t) for t in x_ticks]
    y_labels = [format_tick_label(t) for t in y_ticks]
    x_bounds = measure_labels(x_labels, canvas)
    y_bounds = measure_labels(y_labels, canvas)

    legend_rect = legend_rectangle(style.size, [], display_legend=False)
    graph_rect = graph_rectangle(title_rect, style.size, legend_rect)
    grid_rect = grid_rectangle(graph_rect, x_bounds, y_bounds)

    (color,) = cycle_colors(style.colors, 1)

    render_grid(grid_rect, len(y_ticks), Orientation.VERTICAL, canvas)
    render_grid(grid_rect, len(x_ticks), Orientation.HORIZONTAL, canvas)
    render_axes(grid_rect, canvas)

    for point in scatter_points(table.values, grid_rect, x_ticks, y_ticks):
        render_shape_with_outline(point, color, canvas)

    render_x_axis_labels(
        x_labels, x_bounds,
        linear_interpolation(grid_rect.min_x, grid_rect.max_x, len(x_ticks)),
        grid_rect, canvas,
    )
    render_y_axis_labels(
        y_labels, y_bounds,
        linear_interpolation(grid_rect.max_y, grid_rect.min_y, len(y_ticks)),
        grid_rect, canvas,
    )
    return ChartLayout(title_rect, graph_rect, grid_rect, legend_rect)
