"""
scale_common.py — Numeric scale helpers for chart_plotter

This file contains ONLY:
- axis tick generation ("nice" round numbers for value axes)
- linear interpolation (grid lines, category centers)
- data -> pixel mapping

Keep this file free of imports from drawing modules to avoid cycles.
"""

from __future__ import annotations

import math
from typing import List

import numpy as np

from .errors import PreconditionError


# ============================================================================
# TICKS
# ============================================================================

def compute_decade_ticks(max_value: float, log_offset: float = 0) -> List[float]:
    """
    For segment [0, max_value] return the labels of a value axis.

    The step is a power of ten: 10 ^ (floor(log10(max_value)) + log_offset), so
    every label is a round number. The last label is >= max_value.

    Precondition: max_value > 0.
    """
    if not max_value > 0:
        raise PreconditionError(f"max_value must be positive, got {max_value!r}")

    step = 10.0 ** (math.floor(math.log10(max_value)) + log_offset)
    count = math.ceil(max_value / step) + 1
    ticks = [i * step for i in range(count)]
    if ticks[-1] < max_value:
        # float noise in max_value / step
        ticks.append(count * step)
    return ticks


def value_axis_ticks(max_value: float) -> List[float]:
    """
    Ticks for an axis that starts at zero (bar heights, histogram counts).

    Non-positive maxima (all-zero data) get a unit axis. When the decade step
    leaves fewer than 3 ticks (max_value is an exact power of ten) we go one
    decade finer.
    """
    if max_value <= 0:
        max_value = 1.0

    ticks = compute_decade_ticks(max_value, 0)
    if len(ticks) < 3:
        ticks = compute_decade_ticks(max_value, -1)
    return ticks


def range_axis_ticks(min_value: float, max_value: float) -> List[float]:
    """
    Ticks covering [min_value, max_value] for axes that may go below zero (scatter).
    """
    if max_value < min_value:
        raise PreconditionError(f"empty range [{min_value}, {max_value}]")
    if max_value == min_value:
        min_value, max_value = min_value - 1.0, max_value + 1.0

    step = 10.0 ** math.floor(math.log10(max_value - min_value))
    start = math.floor(min_value / step) * step
    end = math.ceil(max_value / step) * step
    count = int(round((end - start) / step)) + 1

    if count < 3:
        step /= 10.0
        start = math.floor(min_value / step) * step
        end = math.ceil(max_value / step) * step
        count = int(round((end - start) / step)) + 1

    return [start + i * step for i in range(count)]


# ============================================================================
# INTERPOLATION
# ============================================================================

def linear_interpolation_delta(start: float, end: float, steps: int) -> float:
    """Distance between two consecutive values of linear_interpolation()."""
    if steps < 2:
        raise PreconditionError(f"linear interpolation needs at least 2 steps, got {steps}")
    return (end - start) / (steps - 1)


def linear_interpolation(start: float, end: float, steps: int) -> List[float]:
    """
    Return `steps` values: start, start + delta, start + 2 * delta, ..., end
    """
    delta = linear_interpolation_delta(start, end, steps)
    values = start + np.arange(steps) * delta
    values[-1] = end
    return values.tolist()


def linear_interpolation_midpoints_delta(start: float, end: float, steps: int) -> float:
    """Distance between two consecutive values of linear_interpolation_midpoints()."""
    if steps < 1:
        raise PreconditionError(f"midpoint interpolation needs at least 1 step, got {steps}")
    return (end - start) / steps


def linear_interpolation_midpoints(start: float, end: float, steps: int) -> List[float]:
    """
    Return `steps` values: start + 0.5 * delta, start + 1.5 * delta, ..., end - 0.5 * delta

    These are the centers of `steps` equal slots, used to put bars and labels
    between boundaries rather than on them.
    """
    delta = linear_interpolation_midpoints_delta(start, end, steps)
    return (start + (np.arange(steps) + 0.5) * delta).tolist()


# ============================================================================
# MAPPING
# ============================================================================

def map_linear(
    value: float,
    domain_start: float,
    domain_end: float,
    target_start: float,
    target_end: float,
) -> float:
    """
    Map `value` from [domain_start, domain_end] onto [target_start, target_end].
    Targets may be reversed (pixel y grows downward).
    """
    if domain_end == domain_start:
        raise PreconditionError("cannot map from an empty domain")
    t = (value - domain_start) / (domain_end - domain_start)
    return target_start + t * (target_end - target_start)
