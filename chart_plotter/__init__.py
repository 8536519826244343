"""
chart_plotter — render CSV tables as bar, histogram, pie and scatter charts (SVG/PNG).
"""

from .csv_table import Table, parse_csv, parse_csv_text
from .errors import ChartPlotterError, MalformedInputError, PreconditionError
from .plotter import build_chart, plot_chart, render_to_canvas

__all__ = [
    "Table",
    "parse_csv",
    "parse_csv_text",
    "ChartPlotterError",
    "MalformedInputError",
    "PreconditionError",
    "build_chart",
    "plot_chart",
    "render_to_canvas",
]
