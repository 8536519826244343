"""
Shared fixtures: a recording drawing surface with deterministic text metrics,
so layouts and draw calls can be asserted without rasterizing anything.
"""

import os

# Force headless backend before anything imports pyplot
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest  # noqa: E402

from chart_plotter.geometry_common import TextBounds  # noqa: E402


class RecordingCanvas:
    """Implements the drawing-surface contract and records every call."""

    CHAR_WIDTH = 0.6  # of the font size

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.commands = []

    def measure_text(self, text, font):
        if not text:
            return TextBounds(0.0, 0.0)
        return TextBounds(len(text) * font.size * self.CHAR_WIDTH, float(font.size))

    def fill(self, shape, color):
        self.commands.append(("fill", shape, color))

    def stroke(self, shape, color):
        self.commands.append(("stroke", shape, color))

    def draw_text(self, text, x, y, font, color=None):
        self.commands.append(("text", text, x, y, font))

    # -- query helpers -------------------------------------------------------

    def filled(self, kind=None):
        return [c for c in self.commands if c[0] == "fill" and (kind is None or isinstance(c[1], kind))]

    def stroked(self, kind=None):
        return [c for c in self.commands if c[0] == "stroke" and (kind is None or isinstance(c[1], kind))]

    def texts(self):
        return [c[1] for c in self.commands if c[0] == "text"]


@pytest.fixture
def canvas():
    return RecordingCanvas()

