"""
plotter.py — Chart Plotter entry point (controller/dispatcher)

This file contains ONLY:
- build_chart (validates the table for the chart type, builds the chart)
- plot_chart (dispatcher)
- render_to_canvas (fresh canvas + dispatch)

All chart-specific rendering lives in `charts.py`.
"""

from typing import Optional, Tuple, Union

from . import settings
from .canvas import MatplotlibCanvas
from .charts import (
    BarChart,
    BarChartData,
    BarChartStyle,
    ChartLayout,
    HistogramChart,
    HistogramChartData,
    HistogramChartStyle,
    PieChart,
    PieChartData,
    PieChartStyle,
    ScatterChart,
    ScatterChartData,
    ScatterChartStyle,
    pie_sum,
    render_bar_chart,
    render_histogram_chart,
    render_pie_chart,
    render_scatter_chart,
    resolve_bar_count,
)
from .csv_table import Table
from .errors import MalformedInputError
from .geometry_common import Orientation, Stacking
from .utils import setup_logger

logger = setup_logger(__name__)

Chart = Union[BarChart, HistogramChart, PieChart, ScatterChart]

CHART_TYPES = ("bar", "histogram", "pie", "scatter")


# ============================================================================
# CONSTRUCTION
# ============================================================================

def build_chart(
    chart_type: str,
    table: Table,
    title: Optional[str] = None,
    size: Optional[Tuple[int, int]] = None,
    horizontal: bool = False,
    stacked: bool = False,
    bar_count: Optional[int] = None,
) -> Chart:
    """
    Build the chart for `chart_type` from a parsed table.

    Chart-specific validation happens here, before anything is drawn:
    scatter rows need two values, a pie needs a positive first row.
    """
    chart_type = str(chart_type).strip().lower()
    title = title or ""
    if size is None:
        size = (settings.DEFAULT_WIDTH, settings.DEFAULT_HEIGHT)
    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError(f"Chart size must be positive, got {width}x{height}")

    if chart_type == "bar":
        return BarChart(
            BarChartData(title, table),
            BarChartStyle(
                size=size,
                orientation=Orientation.HORIZONTAL if horizontal else Orientation.VERTICAL,
                stacking=Stacking.STACKED if stacked else Stacking.CLUSTERED,
            ),
        )
    elif chart_type == "histogram":
        requested = settings.DEFAULT_BAR_COUNT if bar_count is None else bar_count
        resolved = resolve_bar_count(requested)
        if resolved != requested:
            logger.info("Histogram bar count %d is not positive, using %d", requested, resolved)
        return HistogramChart(HistogramChartData(title, table, resolved), HistogramChartStyle(size=size))
    elif chart_type == "pie":
        pie_sum(table.values[0])
        return PieChart(PieChartData(title, table), PieChartStyle(size=size))
    elif chart_type == "scatter":
        if table.n_columns < 2:
            raise MalformedInputError("Scatter chart needs at least 2 values per row")
        return ScatterChart(ScatterChartData(title, table), ScatterChartStyle(size=size))
    else:
        raise ValueError(f"Unsupported chart type: {chart_type}")


# ============================================================================
# MAIN CHART PLOTTING DISPATCHER
# ============================================================================

def plot_chart(chart: Chart, canvas) -> ChartLayout:
    """
    Dispatcher function to route chart rendering to the appropriate renderer.
    """
    if isinstance(chart, BarChart):
        return render_bar_chart(chart, canvas)
    elif isinstance(chart, HistogramChart):
        return render_histogram_chart(chart, canvas)
    elif isinstance(chart, PieChart):
        return render_pie_chart(chart, canvas)
    elif isinstance(chart, ScatterChart):
        return render_scatter_chart(chart, canvas)
    else:
        raise TypeError(f"Unsupported chart: {type(chart).__name__}")


def render_to_canvas(chart: Chart) -> MatplotlibCanvas:
    """Render `chart` onto a fresh canvas of the chart's size."""
    width, height = chart.style.size
    canvas = MatplotlibCanvas(width, height)
    layout = plot_chart(chart, canvas)
    logger.debug("Rendered %s: %s", type(chart).__name__, layout)
    return canvas
