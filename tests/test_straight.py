#!/usr/bin/env python3
"""
Tests for straight and stacked tube clamps.

Tests cover:
- Row layout (plate size, tube offsets, axis heights, screw positions)
- Geometry of every part kind
- Stacked row heights and the stacked clamp envelope
"""

import warnings

import pytest

from tubemount.config import MountConfig
from tubemount.layout import LayoutError, OverlapWarning
from tubemount.parts import (
    PartKind,
    multiple_stacked_straight,
    multiple_straight,
    stacked_layouts,
    stacked_z_offsets,
    straight_layout,
)
from tubemount.parts.kinds import as_part_kind

CONFIG = MountConfig()
BORDER_16 = 20.75


# =============================================================================
# PART KIND TESTS
# =============================================================================


class TestPartKind:
    """Test part kind parsing."""

    @pytest.mark.parametrize("value", ["full", "bridge", "screw_holes", PartKind.BODY])
    def test_accepts_values(self, value):
        assert isinstance(as_part_kind(value), PartKind)

    def test_rejects_unknown(self):
        with pytest.raises(ValueError, match="expected one of"):
            as_part_kind("everything")


# =============================================================================
# STRAIGHT LAYOUT TESTS
# =============================================================================


class TestStraightLayout:
    """Test the three-tube reference row."""

    @pytest.fixture
    def layout(self):
        return straight_layout(20, [16, 20, 16], [25, 35], CONFIG)

    def test_plate_size(self, layout):
        assert layout.dx == pytest.approx(BORDER_16 + 25 + 35 + BORDER_16)
        assert layout.dy == 20

    def test_tube_offsets(self, layout):
        assert layout.x.offsets == pytest.approx((BORDER_16, BORDER_16 + 25, BORDER_16 + 60))

    def test_axis_heights(self, layout):
        assert layout.axis_z == pytest.approx((11.25, 13.25, 11.25))
        assert layout.top_z == pytest.approx(13.25 + 12.25)

    def test_four_screws(self, layout):
        assert len(layout.screw_positions) == 4

    def test_narrow_plate_two_screws(self):
        layout = straight_layout(12, [16], None, CONFIG)
        assert len(layout.screw_positions) == 2
        assert all(y == 6 for _, y in layout.screw_positions)

    def test_width_must_be_positive(self):
        with pytest.raises(LayoutError, match="width"):
            straight_layout(0, [16], None, CONFIG)

    def test_z_offset_lifts_axes(self):
        layout = straight_layout(20, [16], None, CONFIG, z_offset=10)
        assert layout.axis_z == pytest.approx((21.25,))

    def test_absolute_offset_past_plate_edge(self):
        with pytest.raises(LayoutError, match="plate edge"):
            multiple_straight(20, [16], [0])

    def test_absolute_offset_over_screw_holes(self):
        with pytest.raises(LayoutError, match="screw holes"):
            straight_layout(20, [16], [15], CONFIG)

    def test_absolute_offset_clear_of_screw_heads(self):
        layout = straight_layout(20, [16], [19], CONFIG)
        assert layout.dx == pytest.approx(19 + BORDER_16)


# =============================================================================
# STRAIGHT GEOMETRY TESTS
# =============================================================================


class TestMultipleStraight:
    """Test straight clamp geometry."""

    @pytest.fixture(scope="class")
    def full(self):
        return multiple_straight(20, [16, 20, 16], [25, 35])

    def test_creates_valid_shape(self, full):
        assert full.isValid()
        assert full.Volume() > 0

    def test_bounding_box(self, full):
        bb = full.BoundingBox()
        assert bb.xmin == pytest.approx(0, abs=0.05)
        assert bb.xmax == pytest.approx(101.5, abs=0.05)
        assert bb.ylen == pytest.approx(20, abs=0.05)
        assert bb.zmin == pytest.approx(0, abs=0.05)
        assert bb.zmax == pytest.approx(25.5, abs=0.05)

    def test_support_is_plate_only(self):
        shape = multiple_straight(20, [16, 20, 16], [25, 35], part="support")
        assert shape.BoundingBox().zmax == pytest.approx(CONFIG.thickness, abs=0.05)

    def test_bores_span_width(self):
        shape = multiple_straight(20, [16, 20, 16], [25, 35], part=PartKind.BORES)
        bb = shape.BoundingBox()
        assert bb.ymin < 0
        assert bb.ymax > 20

    def test_screw_holes_part(self):
        shape = multiple_straight(20, [16, 20, 16], [25, 35], part=PartKind.SCREW_HOLES)
        assert len(shape.Solids()) == 4

    def test_bridge_removes_material(self, full):
        bridge = multiple_straight(20, [16, 20, 16], [25, 35], part=PartKind.BRIDGE)
        assert bridge.isValid()
        assert bridge.Volume() < full.Volume()

    def test_champfers_remove_material(self, full):
        plain = multiple_straight(20, [16, 20, 16], [25, 35], part=PartKind.NO_CHAMFER)
        assert plain.Volume() > full.Volume()

    def test_body_is_solid(self, full):
        body = multiple_straight(20, [16, 20, 16], [25, 35], part=PartKind.BODY)
        assert body.Volume() > 0
        assert len(body.Solids()) == 3

    def test_thick_hull_joins_bodies(self):
        body = multiple_straight(20, [16, 20, 16], [25, 35], thick_hull=True, part=PartKind.BODY)
        assert len(body.Solids()) == 1

    def test_merged_tubes(self):
        """Spacing 0 merges two identical tubes into one bore."""
        merged = multiple_straight(20, [16, 16], [0])
        single = multiple_straight(20, [16], None)
        assert merged.isValid()
        assert merged.Volume() == pytest.approx(single.Volume(), rel=1e-6)

    def test_scalar_spacing(self):
        shape = multiple_straight(20, [16, 16, 16], 20)
        assert shape.BoundingBox().xlen == pytest.approx(2 * BORDER_16 + 40, abs=0.05)

    def test_config_changes_plate(self):
        thick = CONFIG.with_overrides(thickness=5)
        shape = multiple_straight(20, [16], None, config=thick, part=PartKind.SUPPORT)
        assert shape.BoundingBox().zmax == pytest.approx(5, abs=0.05)

    def test_mismatched_spacings(self):
        with pytest.raises(LayoutError):
            multiple_straight(20, [16, 20, 16], [25, 35, 10, 5])


# =============================================================================
# STACKED TESTS
# =============================================================================


class TestStackedOffsets:
    """Test row heights of stacked clamps."""

    def test_two_rows_default(self):
        assert stacked_z_offsets([[16, 20], [16]]) == [0.0, 20]

    def test_three_rows_default(self):
        assert stacked_z_offsets([[16, 16], [20], [16]]) == [0.0, 16, 36]

    def test_three_rows_literal(self):
        assert stacked_z_offsets([[16], [16], [16]], [30, 25]) == [0.0, 30, 55]

    def test_missing_entry_defaults(self):
        assert stacked_z_offsets([[16], [20], [16]], [None, 25]) == [0.0, 16, 41]

    def test_default_grows_by_fit_epsilon(self):
        assert stacked_z_offsets([[16, 20], [16]], fit_epsilon=0.5) == [0.0, 20.5]

    def test_literal_ignores_fit_epsilon(self):
        assert stacked_z_offsets([[16], [16]], [30], fit_epsilon=0.5) == [0.0, 30]

    def test_too_many_spacings(self):
        with pytest.raises(LayoutError, match="at most"):
            stacked_z_offsets([[16], [16]], [20, 20])

    def test_non_positive_spacing(self):
        with pytest.raises(LayoutError, match="must be positive"):
            stacked_z_offsets([[16], [16]], [0])


class TestMultipleStackedStraight:
    """Test stacked clamp geometry."""

    def test_layouts_per_row(self):
        layouts = stacked_layouts(20, [[16, 16], [16]], 25)
        assert len(layouts) == 2
        assert layouts[1].axis_z[0] == pytest.approx(layouts[0].axis_z[0] + 16.5)

    def test_per_row_spacings_length(self):
        with pytest.raises(LayoutError, match="spacing entries"):
            stacked_layouts(20, [[16, 16], [16]], [[25]])

    def test_empty_rows(self):
        with pytest.raises(LayoutError):
            stacked_layouts(20, [], None)

    def test_creates_valid_shape(self):
        shape = multiple_stacked_straight(20, [[16, 16], [16]], 25)
        assert shape.isValid()
        bb = shape.BoundingBox()
        assert bb.xlen == pytest.approx(66.5, abs=0.05)
        assert bb.zmax == pytest.approx(3 + 8.25 + 16.5 + 10.25, abs=0.05)

    def test_body_is_one_envelope(self):
        body = multiple_stacked_straight(20, [[16, 16], [16]], 25, part=PartKind.BODY)
        assert len(body.Solids()) == 1

    def test_bores_of_all_rows(self):
        bores = multiple_stacked_straight(20, [[16, 16], [16]], 25, [20], part=PartKind.BORES)
        assert len(bores.Solids()) == 3


class TestStackedOverlaps:
    """Test overlap checks between bores of different rows."""

    def test_default_rows_touch_without_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            layouts = stacked_layouts(20, [[16, 16], [16]], 25)
        gap = layouts[1].axis_z[0] - layouts[0].axis_z[0]
        assert gap == pytest.approx(layouts[0].bore_radii[0] + layouts[1].bore_radii[0])

    def test_default_with_larger_upper_tube(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            stacked_layouts(20, [[16], [20]], None)

    def test_tight_z_spacing_warns(self):
        with pytest.warns(OverlapWarning, match="row 0 and tube 0 of row 1"):
            stacked_layouts(20, [[16, 16], [16]], 25, [16])

    def test_tight_z_spacing_strict(self):
        with pytest.raises(LayoutError, match="overlap"):
            stacked_layouts(20, [[16, 16], [16]], 25, [16], config=MountConfig(strict=True))

    def test_offset_rows_do_not_warn(self):
        # Upper tube nests between the two lower ones
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            stacked_layouts(20, [[16, 16], [16]], [25, [33.25]], [12])

    def test_wide_z_spacing_is_clear(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            stacked_layouts(20, [[16, 16], [16]], 25, [20])
