"""
cli.py — Command line entry point

Reads a CSV file, renders the requested chart to SVG (optionally PNG) and
shows it in a preview window unless --minimize is given.

Run:
  python -m chart_plotter -d data.csv -t bar -c --title "Sales"

Optional:
  python -m chart_plotter -d data.csv -t histogram -b 20 -s 1024 768 -p -m -o out/hist.svg
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from . import settings
from .csv_table import parse_csv
from .errors import MalformedInputError, PreconditionError
from .output import output_paths, rasterize, save_svg, show_preview
from .plotter import CHART_TYPES, build_chart, render_to_canvas
from .utils import setup_logger

logger = setup_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chart-plotter",
        description="Render a bar, histogram, pie or scatter chart from a CSV file to SVG.",
    )
    parser.add_argument(
        "-o", "--output",
        default=settings.DEFAULT_OUTPUT,
        help=f"The name of the output file (default: {settings.DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "-d", "--data",
        required=True,
        help="(required) The name of the data file (in CSV format).",
    )
    parser.add_argument(
        "-s", "--size",
        nargs=2,
        type=int,
        metavar=("WIDTH", "HEIGHT"),
        default=[settings.DEFAULT_WIDTH, settings.DEFAULT_HEIGHT],
        help=f"Dimensions of the output file: first width, then height "
             f"(default: {settings.DEFAULT_WIDTH} {settings.DEFAULT_HEIGHT}).",
    )
    parser.add_argument("-p", "--PNG", dest="png", action="store_true", help="Also render PNG.")
    parser.add_argument(
        "-r", "--rows-labels", action="store_true", help="Treat first column as labels for rows in CSV."
    )
    parser.add_argument(
        "-c", "--columns-labels", action="store_true", help="Treat first row as labels for columns in CSV."
    )
    parser.add_argument("-t", "--type", required=True, choices=CHART_TYPES, help="(required) The type of the chart.")
    parser.add_argument(
        "--horizontal", action="store_true", help="If bar is the selected chart type, make bars horizontal."
    )
    parser.add_argument(
        "--stacked",
        action="store_true",
        help="If bar is the selected chart type, stack the columns of each row on top of each other.",
    )
    parser.add_argument(
        "-b", "--bars",
        type=int,
        default=settings.DEFAULT_BAR_COUNT,
        help=f"If histogram is the selected chart type, the number of bars (default: {settings.DEFAULT_BAR_COUNT}).",
    )
    parser.add_argument("-m", "--minimize", action="store_true", help="Don't show the window with the chart.")
    parser.add_argument("--title", default=None, help="Set the chart title.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    data_path = Path(args.data).expanduser()
    if not data_path.is_file():
        parser.error(f"data file not found: {data_path}")

    width, height = args.size
    if width <= 0 or height <= 0:
        parser.error(f"size must be positive, got {width} {height}")
    size = (width, height)

    try:
        table = parse_csv(data_path, rows_labels=args.rows_labels, columns_labels=args.columns_labels)
        chart = build_chart(
            args.type,
            table,
            title=args.title,
            size=size,
            horizontal=args.horizontal,
            stacked=args.stacked,
            bar_count=args.bars,
        )
    except MalformedInputError as e:
        logger.error("Rejected %s: %s", data_path, e)
        print("Malformed input file.")
        return 1
    except PreconditionError as e:
        logger.error("Cannot chart %s: %s", data_path, e)
        print(f"Cannot render chart: {e}")
        return 1

    canvas = render_to_canvas(chart)

    svg_path, png_path = output_paths(args.output)
    save_svg(canvas, svg_path)
    print(f"Saved {svg_path}")

    if args.png:
        rasterize(svg_path, png_path, size)
        print(f"Saved {png_path}")

    if not args.minimize:
        show_preview(svg_path, size)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
