#!/usr/bin/env python3
"""
Tests for 2D body profiles and the primitive solids built from them.
"""

import numpy as np
import pytest

from tubemount.config import MountConfig
from tubemount.primitives import (
    champfer,
    cube,
    extrude_profile,
    prism,
    revolve_profile,
    rounded_box,
    torus_quarter,
    tube,
    union_all,
)
from tubemount.profiles import body_points, body_profile, circle_points, convex_hull, hull_profile

CONFIG = MountConfig()


# =============================================================================
# HULL TESTS
# =============================================================================


class TestConvexHull:
    """Test the monotone chain hull."""

    def test_square_with_interior_point(self):
        pts = np.array([(0, 0), (2, 0), (2, 2), (0, 2), (1, 1)], dtype=float)
        hull = convex_hull(pts)
        assert len(hull) == 4
        assert {tuple(p) for p in hull} == {(0, 0), (2, 0), (2, 2), (0, 2)}

    def test_collinear_points_dropped(self):
        pts = np.array([(0, 0), (1, 0), (2, 0), (2, 2), (0, 2)], dtype=float)
        assert len(convex_hull(pts)) == 4

    def test_counter_clockwise(self):
        hull = convex_hull(circle_points((0, 0), 1, 16))
        area = 0.5 * sum(
            a[0] * b[1] - b[0] * a[1] for a, b in zip(hull, np.roll(hull, -1, axis=0))
        )
        assert area > 0

    def test_too_few_points(self):
        with pytest.raises(ValueError, match="at least 3"):
            convex_hull(np.array([(0, 0), (1, 1), (1, 1)], dtype=float))


class TestBodyProfile:
    """Test tube body cross-sections."""

    def test_body_stands_on_plate(self):
        profile = np.array(body_profile(20, 11.25, 10.25, CONFIG))
        assert profile[:, 1].min() == pytest.approx(0)
        assert profile[:, 1].max() == pytest.approx(11.25 + 10.25)
        assert profile[:, 0].min() == pytest.approx(20 - 10.25)
        assert profile[:, 0].max() == pytest.approx(20 + 10.25)

    def test_floating_circle_has_no_pad(self):
        pts = body_points(0, 30, 5, CONFIG, pad_bottom=None)
        assert len(pts) == CONFIG.segments
        assert pts[:, 1].min() == pytest.approx(25)

    def test_hull_of_two_bodies_spans_both(self):
        a = body_points(10, 10, 5, CONFIG)
        b = body_points(40, 10, 5, CONFIG)
        profile = np.array(hull_profile([a, b]))
        assert profile[:, 0].min() == pytest.approx(5)
        assert profile[:, 0].max() == pytest.approx(45)


# =============================================================================
# PRIMITIVE TESTS
# =============================================================================


class TestPrimitives:
    """Test primitive solids."""

    def test_cube_position(self):
        bb = cube((1, 2, 3), (10, 20, 30)).BoundingBox()
        assert (bb.xmin, bb.ymin, bb.zmin) == pytest.approx((10, 20, 30))
        assert (bb.xmax, bb.ymax, bb.zmax) == pytest.approx((11, 22, 33))

    def test_tube_is_hollow(self):
        shape = tube(5, 4, 10)
        assert shape.Volume() == pytest.approx(np.pi * (25 - 16) * 10, rel=1e-3)

    def test_tube_rejects_inverted_radii(self):
        with pytest.raises(ValueError):
            tube(4, 5, 10)

    def test_prism_volume(self):
        shape = prism(4, 3, 2)
        assert shape.Volume() == pytest.approx(0.5 * 4 * 3 * 2)

    def test_rounded_box(self):
        shape = rounded_box(40, 20, 3, 3)
        assert shape.isValid()
        assert shape.Volume() < 40 * 20 * 3
        bb = shape.BoundingBox()
        assert (bb.xlen, bb.ylen, bb.zlen) == pytest.approx((40, 20, 3), abs=0.01)

    @pytest.mark.parametrize("axis,extent", [("y", (4, 10, 2)), ("x", (10, 4, 2))])
    def test_extrude_profile_along_axis(self, axis, extent):
        profile = [(0.0, 0.0), (4.0, 0.0), (4.0, 2.0), (0.0, 2.0)]
        shape = extrude_profile(profile, 10, start=5, axis=axis)
        bb = shape.BoundingBox()
        assert (bb.xlen, bb.ylen, bb.zlen) == pytest.approx(extent, abs=0.01)
        along_min = bb.ymin if axis == "y" else bb.xmin
        assert along_min == pytest.approx(5, abs=0.01)

    def test_extrude_profile_bad_axis(self):
        with pytest.raises(ValueError, match="axis"):
            extrude_profile([(0, 0), (1, 0), (0, 1)], 1, axis="z")

    def test_revolve_quarter_lands_in_quadrant(self):
        profile = [(5.0, 0.0), (7.0, 0.0), (7.0, 2.0), (5.0, 2.0)]
        shape = revolve_profile(profile, (10, 10), 180, 90)
        bb = shape.BoundingBox()
        # Sweep from -X to -Y around (10, 10)
        assert bb.xmax == pytest.approx(10, abs=0.01)
        assert bb.ymax == pytest.approx(10, abs=0.01)
        assert bb.xmin == pytest.approx(3, abs=0.01)
        assert bb.ymin == pytest.approx(3, abs=0.01)

    def test_torus_quarter(self):
        shape = torus_quarter(10, 2, 5, (0, 0), 0, 90)
        assert shape.isValid()
        # Pappus: area * path length of a quarter turn
        assert shape.Volume() == pytest.approx(np.pi * 4 * (np.pi * 10 / 2), rel=1e-3)

    def test_champfer_opens_outwards(self):
        shape = champfer((0, 0, 0), (0, 0, 1), 4, 1)
        bb = shape.BoundingBox()
        assert bb.xlen == pytest.approx(10, abs=0.01)
        assert bb.zmin == pytest.approx(0, abs=0.01)

    def test_union_all_skips_none(self):
        assert union_all([None, None]) is None
        box = cube((1, 1, 1))
        assert union_all([None, box]) is box
