#!/usr/bin/env python3
"""
Tests for screw hole placement and screw hole solids.
"""

import math

import pytest

from tubemount.config import MountConfig
from tubemount.screws import (
    ArcPath,
    LinePath,
    clear_of_paths,
    corner_screw_positions,
    screw_count,
    screw_hole,
    screw_holes,
    straight_screw_positions,
)

CONFIG = MountConfig()
EC = CONFIG.screw_edge_clearance


# =============================================================================
# PLACEMENT TESTS
# =============================================================================


class TestScrewCount:
    """Two holes when the span cannot hold two heads, four otherwise."""

    @pytest.mark.parametrize("span", [5.0, 10.0, 15.0, 17.4])
    def test_short_span(self, span):
        assert screw_count(span, CONFIG) == 2

    @pytest.mark.parametrize("span", [17.5, 20.0, 60.0])
    def test_long_span(self, span):
        assert screw_count(span, CONFIG) == 4

    def test_rule_holds_for_all_spans(self):
        for i in range(200):
            span = i * 0.25
            expected = 2 if span - 2 * EC < CONFIG.screw_head_diameter else 4
            assert screw_count(span, CONFIG) == expected


class TestStraightPositions:
    """Test hole positions on straight plates."""

    def test_two_holes_centred(self):
        assert straight_screw_positions(50, 15, CONFIG) == [(EC, 7.5), (50 - EC, 7.5)]

    def test_four_corner_holes(self):
        points = straight_screw_positions(100, 20, CONFIG)
        assert sorted(points) == sorted([(EC, EC), (EC, 20 - EC), (100 - EC, EC), (100 - EC, 20 - EC)])

    @pytest.mark.parametrize("dx,dy", [(50, 15), (101.5, 20), (80, 40)])
    def test_symmetric_about_centre(self, dx, dy):
        points = straight_screw_positions(dx, dy, CONFIG)
        mirrored = {(round(dx - x, 9), round(dy - y, 9)) for x, y in points}
        assert mirrored == {(round(x, 9), round(y, 9)) for x, y in points}


class TestCornerPositions:
    """Test corner fastener hole positions."""

    def test_diagonal_hole_added(self):
        points = corner_screw_positions(60, 60, (40, 40), 20, CONFIG)
        assert len(points) == 4
        x, y = points[-1]
        assert x == pytest.approx(y)
        assert math.dist((x, y), (40, 40)) == pytest.approx(20 + EC)

    def test_origin_corner_skipped(self):
        points = corner_screw_positions(60, 60, (40, 40), 20, CONFIG)
        assert (EC, EC) not in points

    def test_diagonal_dropped_when_too_close_to_edge(self):
        points = corner_screw_positions(40, 40, (20, 20), 20, CONFIG)
        assert len(points) == 3


# =============================================================================
# PATH CLEARANCE TESTS
# =============================================================================


class TestPaths:
    """Test distances to tube centre-lines."""

    def test_line_distance_inside_segment(self):
        assert LinePath((0, 0), (10, 0), 1).distance((5, 3)) == pytest.approx(3)

    def test_line_distance_past_end(self):
        assert LinePath((0, 0), (10, 0), 1).distance((13, 4)) == pytest.approx(5)

    def test_arc_distance_inside_sweep(self):
        arc = ArcPath((0, 0), 10, 180, 90, 1)
        assert arc.distance((-6, -8)) == pytest.approx(0)
        assert arc.distance((-3, -4)) == pytest.approx(5)

    def test_arc_distance_outside_sweep(self):
        """Outside the sweep the nearest point is an arc end."""
        arc = ArcPath((0, 0), 10, 180, 90, 1)
        assert arc.distance((10, 0)) == pytest.approx(math.hypot(10, 10))

    def test_clear_of_paths(self):
        path = LinePath((0, 0), (0, 50), 2)
        # Needs body radius 2 + head radius 3.5
        points = [(5.0, 10.0), (5.5, 10.0), (20.0, 10.0)]
        assert clear_of_paths(points, [path], CONFIG) == [(5.5, 10.0), (20.0, 10.0)]


# =============================================================================
# HOLE SOLID TESTS
# =============================================================================


class TestScrewHoleSolids:
    """Test screw hole cutters."""

    def test_countersunk_hole(self):
        hole = screw_hole((10, 10), 3, 20, CONFIG)
        assert hole.isValid()
        bb = hole.BoundingBox()
        assert bb.xlen == pytest.approx(CONFIG.screw_head_diameter, abs=0.05)
        assert bb.zmin == pytest.approx(-CONFIG.slack, abs=0.05)
        assert bb.zmax == pytest.approx(20 + CONFIG.overcut, abs=0.05)

    def test_flat_seat_hole(self):
        flat = CONFIG.with_overrides(countersunk=False)
        hole = screw_hole((0, 0), 3, 3, flat)
        assert hole.isValid()
        assert hole.Volume() > 0

    def test_countersink_removes_less_than_counterbore(self):
        sunk = screw_hole((0, 0), 3, 3, CONFIG)
        flat = screw_hole((0, 0), 3, 3, CONFIG.with_overrides(countersunk=False))
        assert sunk.Volume() < flat.Volume()

    def test_multiple_holes(self):
        holes = screw_holes(straight_screw_positions(100, 20, CONFIG), 3, 20, CONFIG)
        assert len(holes.Solids()) == 4

    def test_no_positions(self):
        assert screw_holes([], 3, 20, CONFIG) is None
