"""Numeric checks for the numba intersection kernels."""

import numpy as np
import pytest

from ruler_compass.geometry import kernels


def line(x0, y0, x1, y1):
    return np.array([x0, y0, x1, y1], dtype=np.float64)


def circle(x, y, r):
    return np.array([x, y, r], dtype=np.float64)


def test_tolerances_are_fixed():
    assert kernels.PARALLEL_EPSILON == 1e-6
    assert kernels.TANGENT_ROOT_EPSILON == 1e-12
    assert kernels.TANGENT_OFFSET_EPSILON == 1e-3


# --- line x line ---------------------------------------------------------------

def test_line_line_offset_from_origin():
    results, count = kernels.intersect_line_line(line(0, 1, 10, 1), line(5, -5, 5, 5))
    assert count == 1
    assert results[0] == pytest.approx([5.0, 1.0])
    assert np.isnan(results[1]).all()


@pytest.mark.parametrize("l0, l1", [
    (line(0, 0, 4, 2), line(1, 3, 3, -1)),
    (line(-3, 7, 2, 1), line(0, 0, 1, 5)),
    (line(100, 200, 300, 250), line(150, 400, 180, -20)),
])
def test_line_line_point_lies_on_both_lines(l0, l1):
    results, count = kernels.intersect_line_line(l0, l1)
    assert count == 1
    x, y = results[0]
    for ln in (l0, l1):
        # cross product of (p - p0) and (p1 - p0) vanishes for points on the line
        dx, dy = ln[2] - ln[0], ln[3] - ln[1]
        norm = np.hypot(dx, dy)
        assert abs((x - ln[0]) * dy - (y - ln[1]) * dx) / norm < 1e-6


def test_line_line_known_point():
    results, count = kernels.intersect_line_line(line(0, 0, 4, 2), line(1, 3, 3, -1))
    assert count == 1
    assert results[0] == pytest.approx([2.0, 1.0])


def test_parallel_lines_have_no_intersection():
    _, count = kernels.intersect_line_line(line(0, 0, 10, 0), line(0, 1, 10, 1))
    assert count == 0


def test_collinear_overlapping_lines_have_no_intersection():
    _, count = kernels.intersect_line_line(line(0, 0, 10, 0), line(5, 0, 15, 0))
    assert count == 0


# --- line x circle -------------------------------------------------------------

def test_line_circle_secant_order_is_minus_then_plus():
    results, count = kernels.intersect_line_circle(line(0, 0, 10, 0), circle(5, 0, 3))
    assert count == 2
    assert results[0] == pytest.approx([2.0, 0.0])
    assert results[1] == pytest.approx([8.0, 0.0])


def test_line_circle_tangent():
    results, count = kernels.intersect_line_circle(line(0, 0, 10, 0), circle(5, 5, 5))
    assert count == 1
    x, y = results[0]
    assert (x, y) == pytest.approx((5.0, 0.0))
    assert abs(np.hypot(x - 5, y - 5) - 5) < 1e-6


def test_line_circle_miss():
    _, count = kernels.intersect_line_circle(line(0, 0, 10, 0), circle(5, 10, 5))
    assert count == 0


def test_line_circle_secant_points_lie_on_circle():
    results, count = kernels.intersect_line_circle(line(-2, -1, 3, 4), circle(1, 1, 2.5))
    assert count == 2
    for x, y in results:
        assert np.hypot(x - 1, y - 1) == pytest.approx(2.5)


# --- circle x circle -----------------------------------------------------------

def test_circle_circle_two_points_plus_first():
    results, count = kernels.intersect_circle_circle(circle(0, 0, 5), circle(8, 0, 5))
    assert count == 2
    assert results[0] == pytest.approx([4.0, -3.0])
    assert results[1] == pytest.approx([4.0, 3.0])


def test_circle_circle_external_tangent():
    results, count = kernels.intersect_circle_circle(circle(0, 0, 5), circle(10, 0, 5))
    assert count == 1
    assert results[0] == pytest.approx([5.0, 0.0])


def test_circle_circle_internal_tangent():
    results, count = kernels.intersect_circle_circle(circle(0, 0, 5), circle(2, 0, 3))
    assert count == 1
    assert results[0] == pytest.approx([5.0, 0.0])


@pytest.mark.parametrize("c0, c1", [
    (circle(0, 0, 5), circle(20, 0, 5)),
    (circle(0, 0, 10), circle(1, 0, 2)),
    (circle(3, 3, 4), circle(3, 3, 6)),
])
def test_circle_circle_no_intersection(c0, c1):
    _, count = kernels.intersect_circle_circle(c0, c1)
    assert count == 0


def test_circle_circle_near_tangent_collapses_to_one_point():
    # yd is about 3e-4, below the tangent offset tolerance
    results, count = kernels.intersect_circle_circle(circle(0, 0, 5), circle(10 - 2e-8, 0, 5))
    assert count == 1
    assert results[0] == pytest.approx([5.0, 0.0], abs=1e-6)
