"""
utils.py — Shared helpers for the chart_plotter package

This file contains small, reusable utilities used by:
- layout.py  (layout primitives)
- charts.py  (chart renderers)
- cli.py     (command line entry point)

It intentionally does NOT contain:
- any drawing code
- any layout math

Keep it "boring + stable".
"""

import logging
from typing import List, Optional, Sequence

from . import settings


# ============================================================================
# LOGGING
# ============================================================================

def setup_logger(name, level_str=settings.LOG_LEVEL):
    """
    Sets up a module logger with a console stream handler.
    IMPORTANT: propagation is ON so messages also flow to the root
    (pytest's caplog and any caller-installed handlers see them).
    """
    log_level = getattr(logging, level_str.upper(), logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(levelname)5s | %(name)s | %(message)s')

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Avoid duplicate console handlers on repeated imports
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)

    logger.propagate = True
    return logger


# ============================================================================
# COLOR
# ============================================================================

def cycle_colors(palette: Sequence[str], count: int) -> List[str]:
    """
    Assign `count` colors from `palette`, wrapping around when the palette runs out.
    """
    if not palette:
        raise ValueError("Color palette must not be empty")
    return [palette[i % len(palette)] for i in range(count)]


# ============================================================================
# LABELS
# ============================================================================

def format_tick_label(value: float) -> str:
    """
    Short, readable label for an axis tick.
    Float noise from repeated addition (0.30000000000000004) is hidden by %g.
    """
    if value == 0:
        return "0"
    return f"{value:.6g}"


def default_labels(labels: Optional[Sequence[str]], count: int) -> List[str]:
    """
    Return `labels` as a list, or "1".."count" when no labels were supplied.
    """
    if labels:
        return list(labels)
    return [str(i + 1) for i in range(count)]
