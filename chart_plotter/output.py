"""
output.py — Persistence + preview for rendered charts

This file contains ONLY:
- output_paths (SVG/PNG file names sharing one base name)
- save_svg (vector output from the canvas figure)
- rasterize (SVG -> PNG with cairosvg, size checked with Pillow)
- show_preview (blocking matplotlib window showing the rendered SVG)

cairosvg and pyplot are imported on first use so headless callers that only
write SVG never load them.
"""

from __future__ import annotations

import os
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple, Union

import matplotlib
import numpy as np
from PIL import Image

from . import settings
from .canvas import DPI
from .utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, os.PathLike]


def output_paths(output: PathLike) -> Tuple[Path, Path]:
    """
    Return (svg_path, png_path) for the requested output file.
    Whatever extension `output` has, both files share its base name.
    """
    base = Path(output)
    return base.with_suffix(".svg"), base.with_suffix(".png")


def save_svg(canvas, path: PathLike) -> Path:
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    # Keep labels as <text> elements instead of outlines
    with matplotlib.rc_context({"svg.fonttype": "none"}):
        canvas.figure.savefig(path, format="svg", facecolor=canvas.background)

    logger.info("Saved SVG: %s", path)
    return path


def _svg_to_png_bytes(svg_path: PathLike, size: Tuple[int, int]) -> bytes:
    import cairosvg

    width, height = size
    return cairosvg.svg2png(url=str(svg_path), output_width=width, output_height=height)


def rasterize(svg_path: PathLike, png_path: PathLike, size: Tuple[int, int]) -> Path:
    """Rasterize the SVG at the canvas size and write it to `png_path`."""
    png_bytes = _svg_to_png_bytes(svg_path, size)

    png_path = Path(png_path)
    png_path.write_bytes(png_bytes)

    with Image.open(BytesIO(png_bytes)) as im:
        if im.size != tuple(size):
            logger.warning("PNG %s is %dx%d, expected %dx%d", png_path, im.width, im.height, size[0], size[1])

    logger.info("Saved PNG: %s", png_path)
    return png_path


def show_preview(svg_path: PathLike, size: Tuple[int, int], title: Optional[str] = None) -> None:
    """
    Show the rendered SVG in a window. Blocks until the window is closed.
    """
    import matplotlib.pyplot as plt

    png_bytes = _svg_to_png_bytes(svg_path, size)
    with Image.open(BytesIO(png_bytes)) as im:
        image = np.asarray(im.convert("RGBA"))

    width, height = size
    fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    if fig.canvas.manager is not None:
        fig.canvas.manager.set_window_title(title or settings.WINDOW_TITLE)

    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.imshow(image)
    ax.set_axis_off()

    logger.debug("Opening preview window for %s", svg_path)
    plt.show()
    plt.close(fig)
