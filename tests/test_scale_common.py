"""
Unit tests for the numeric scale helpers (ticks, interpolation, mapping).
"""

import pytest

from chart_plotter.errors import PreconditionError
from chart_plotter.scale_common import (
    compute_decade_ticks,
    linear_interpolation,
    linear_interpolation_delta,
    linear_interpolation_midpoints,
    linear_interpolation_midpoints_delta,
    map_linear,
    range_axis_ticks,
    value_axis_ticks,
)


# ---------------------------------------------------------------------------
# linear_interpolation
# ---------------------------------------------------------------------------

class TestLinearInterpolation:
    @pytest.mark.parametrize("start,end,steps", [(0, 10, 2), (0, 10, 11), (5, -5, 7), (1.5, 2.25, 4)])
    def test_endpoints_and_length(self, start, end, steps):
        values = linear_interpolation(start, end, steps)
        assert len(values) == steps
        assert values[0] == pytest.approx(start)
        assert values[-1] == pytest.approx(end)

    def test_strictly_increasing(self):
        values = linear_interpolation(0, 1, 6)
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_strictly_decreasing(self):
        values = linear_interpolation(600, 100, 5)
        assert values == pytest.approx([600, 475, 350, 225, 100])

    def test_delta(self):
        assert linear_interpolation_delta(0, 10, 6) == pytest.approx(2.0)
        values = linear_interpolation(0, 10, 6)
        assert [b - a for a, b in zip(values, values[1:])] == pytest.approx([2.0] * 5)

    def test_needs_two_steps(self):
        with pytest.raises(PreconditionError):
            linear_interpolation(0, 1, 1)


class TestMidpoints:
    def test_values(self):
        assert linear_interpolation_midpoints(0, 10, 4) == pytest.approx([1.25, 3.75, 6.25, 8.75])

    @pytest.mark.parametrize("start,end,steps", [(0, 10, 1), (0, 10, 3), (-4, 4, 8), (100, 20, 5)])
    def test_between_boundaries(self, start, end, steps):
        mids = linear_interpolation_midpoints(start, end, steps)
        edges = linear_interpolation(start, end, steps + 1)
        assert len(mids) == steps
        for mid, a, b in zip(mids, edges, edges[1:]):
            assert min(a, b) < mid < max(a, b)

    def test_delta(self):
        assert linear_interpolation_midpoints_delta(0, 10, 4) == pytest.approx(2.5)

    def test_needs_one_step(self):
        with pytest.raises(PreconditionError):
            linear_interpolation_midpoints(0, 1, 0)


# ---------------------------------------------------------------------------
# ticks
# ---------------------------------------------------------------------------

class TestDecadeTicks:
    def test_small_integer(self):
        assert compute_decade_ticks(4, 0) == pytest.approx([0, 1, 2, 3, 4])

    def test_rounds_up(self):
        ticks = compute_decade_ticks(95, 0)
        assert ticks == pytest.approx([0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100])

    def test_finer_offset(self):
        ticks = compute_decade_ticks(4, -1)
        assert ticks[1] == pytest.approx(0.1)
        assert ticks[-1] == pytest.approx(4.0)

    @pytest.mark.parametrize("max_value", [0.25, 0.7, 1, 3.2, 17, 99.5, 250, 12345])
    def test_properties(self, max_value):
        ticks = compute_decade_ticks(max_value, 0)
        assert ticks[0] == 0
        assert ticks[-1] >= max_value
        assert all(t >= 0 for t in ticks)
        steps = [b - a for a, b in zip(ticks, ticks[1:])]
        assert steps == pytest.approx([steps[0]] * len(steps))

    @pytest.mark.parametrize("bad", [0, -1])
    def test_requires_positive_max(self, bad):
        with pytest.raises(PreconditionError):
            compute_decade_ticks(bad, 0)


class TestValueAxisTicks:
    def test_regular(self):
        assert value_axis_ticks(4) == pytest.approx([0, 1, 2, 3, 4])

    def test_power_of_ten_goes_one_decade_finer(self):
        ticks = value_axis_ticks(100)
        assert len(ticks) == 11
        assert ticks[-1] == pytest.approx(100)

    def test_zero_maximum_gets_unit_axis(self):
        ticks = value_axis_ticks(0)
        assert ticks[0] == 0
        assert ticks[-1] == pytest.approx(1.0)


class TestRangeAxisTicks:
    def test_covers_negative_range(self):
        ticks = range_axis_ticks(-3, 7)
        assert ticks[0] <= -3
        assert ticks[-1] >= 7
        assert len(ticks) >= 3

    def test_degenerate_range_is_widened(self):
        ticks = range_axis_ticks(5, 5)
        assert ticks[0] < 5 < ticks[-1]

    def test_empty_range_rejected(self):
        with pytest.raises(PreconditionError):
            range_axis_ticks(2, 1)


# ---------------------------------------------------------------------------
# mapping
# ---------------------------------------------------------------------------

def test_map_linear_reversed_target():
    # value axis in pixels: 0 at the bottom (y=500), 10 at the top (y=100)
    assert map_linear(0, 0, 10, 500, 100) == pytest.approx(500)
    assert map_linear(10, 0, 10, 500, 100) == pytest.approx(100)
    assert map_linear(2.5, 0, 10, 500, 100) == pytest.approx(400)


def test_map_linear_empty_domain():
    with pytest.raises(PreconditionError):
        map_linear(1, 3, 3, 0, 100)
