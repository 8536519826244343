"""Error types raised by chart_plotter."""


class ChartPlotterError(Exception):
    """Base class for every error raised by this package."""


class MalformedInputError(ChartPlotterError, ValueError):
    """The input table is unparseable or structurally invalid for the chosen chart."""


class PreconditionError(ChartPlotterError, ValueError):
    """A caller broke the contract of a numeric helper (zero pie sum, too few steps, ...)."""
