import os
import re
from dotenv import load_dotenv

# --- Project paths ---
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(PACKAGE_DIR)

# Expect .env at the project root (next to pyproject.toml)
ENV_PATH = os.path.join(PROJECT_DIR, ".env")
load_dotenv(dotenv_path=ENV_PATH)

# --- small helpers for env parsing ---
def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


def _env_list(name: str):
    """Parse comma/space separated env var into a list of strings, or None if missing/empty."""
    v = os.getenv(name)
    if not v:
        return None
    # accept commas or whitespace
    parts = [p.strip() for p in re.split(r"[,\s]+", v) if p.strip()]
    return parts or None


# --- Logging Configuration ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")  # options: DEBUG, INFO, WARNING, ERROR

# --- Canvas / output defaults (mirrors the CLI defaults) ---
DEFAULT_WIDTH = _env_int("CHART_DEFAULT_WIDTH", 800)    # px
DEFAULT_HEIGHT = _env_int("CHART_DEFAULT_HEIGHT", 600)  # px
DEFAULT_OUTPUT = os.getenv("CHART_DEFAULT_OUTPUT", "output.svg")
DEFAULT_BAR_COUNT = _env_int("CHART_DEFAULT_BAR_COUNT", 10)
WINDOW_TITLE = os.getenv("CHART_WINDOW_TITLE", "chart-plotter")

# --- Layout tunables ---
# Indentation around every layout rectangle (title, legend, graph, grid)
CHART_MARGIN = _env_float("CHART_MARGIN", 10.0)              # px
# Share of a category slot covered by its bars (the rest is the gap between categories)
BAR_GROUP_FRACTION = _env_float("CHART_BAR_GROUP_FRACTION", 0.8)
POINT_RADIUS = _env_float("CHART_POINT_RADIUS", 4.0)         # px

# --- Fonts ---
FONT_FAMILY = os.getenv("CHART_FONT_FAMILY", "DejaVu Sans")
TITLE_FONT_SIZE = _env_float("CHART_TITLE_FONT_SIZE", 20.0)  # pt
LABEL_FONT_SIZE = _env_float("CHART_LABEL_FONT_SIZE", 12.0)  # pt

# --- Colors ---
STROKE_COLOR = os.getenv("CHART_STROKE_COLOR", "#000000")
GRID_COLOR = os.getenv("CHART_GRID_COLOR", "#d3d3d3")
TEXT_COLOR = os.getenv("CHART_TEXT_COLOR", "#000000")
BACKGROUND_COLOR = os.getenv("CHART_BACKGROUND_COLOR", "#ffffff")

# Palette assigned cyclically to series / sectors
CHART_COLORS = _env_list("CHART_COLORS") or [
    "#1f77b4",  # blue
    "#ff7f0e",  # orange
    "#2ca02c",  # green
    "#d62728",  # red
    "#9467bd",  # purple
    "#8c564b",  # brown
    "#e377c2",  # pink
    "#7f7f7f",  # gray
]

if __name__ == "__main__":
    # Quick sanity check
    print(f"Project Directory: {PROJECT_DIR}")
    print(f"Looking for .env at: {ENV_PATH}")
    print(f"Log level: {LOG_LEVEL}")
    print(f"Default canvas: {DEFAULT_WIDTH}x{DEFAULT_HEIGHT} -> {DEFAULT_OUTPUT}")
    print(f"Margin: {CHART_MARGIN}px, fonts: {FONT_FAMILY} {TITLE_FONT_SIZE}/{LABEL_FONT_SIZE}pt")
    print(f"Palette ({len(CHART_COLORS)}): {', '.join(CHART_COLORS)}")
