"""
Straight multi-tube clamp.

A row of parallel tubes runs along +Y across a rounded base plate. The tubes
are spaced along X; each one sits on the plate inside a body that is the hull
of its wall circle and a flat support pad. Screw holes sit in the X borders.

The clamp is oriented with:
- Plate from (0, 0, 0) to (dx, width, thickness)
- Tube axes parallel to Y at ``x = offsets[i]``, ``z = thickness + bore radius``
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import cadquery as cq

from ..config import DEFAULT_CONFIG, MountConfig
from ..layout import (
    AxisLayout,
    LayoutError,
    Spacings,
    axis_height,
    body_radius,
    bore_radius,
    tube_offsets,
)
from ..primitives import champfer, cube, cut_all, cylinder, extrude_profile, rounded_box, union_all
from ..profiles import body_points, hull_profile
from ..screws import screw_holes, straight_screw_positions
from .kinds import PartKind, as_part_kind

log = logging.getLogger(__name__)


# =============================================================================
# LAYOUT
# =============================================================================


@dataclass(frozen=True)
class StraightLayout:
    """Everything needed to build one straight row (all in mm)."""

    width: float
    diameters: tuple[float, ...]
    fit_epsilon: float
    x: AxisLayout
    bore_radii: tuple[float, ...]
    body_radii: tuple[float, ...]
    axis_z: tuple[float, ...]
    screw_positions: tuple[tuple[float, float], ...]

    @property
    def dx(self) -> float:
        return self.x.extent

    @property
    def dy(self) -> float:
        return self.width

    @property
    def top_z(self) -> float:
        """Highest point of the tube bodies."""
        return max(z + r for z, r in zip(self.axis_z, self.body_radii))


def straight_layout(
    width: float,
    diameters: Sequence[float],
    spacings: Spacings | None,
    config: MountConfig = DEFAULT_CONFIG,
    fit_epsilon: float | None = None,
    z_offset: float = 0.0,
) -> StraightLayout:
    """
    Compute the layout of a straight row.

    Args:
        width: Plate length along the tubes
        diameters: Tube diameters
        spacings: Scalar gap or list of gaps/offsets along X
        config: Shared dimensions
        fit_epsilon: Bore diameter increment (config default if None)
        z_offset: Extra height added to every tube axis (stacked rows)
    """
    if width <= 0:
        raise LayoutError(f"Plate width must be positive, got {width}")
    eps = config.fit_epsilon if fit_epsilon is None else fit_epsilon
    x = tube_offsets(diameters, spacings, config, eps, axis="x")
    diams = tuple(diameters)
    # Screw heads in the first border must clear the first body
    head_edge = config.screw_edge_clearance + config.screw_head_diameter / 2.0
    first_body = x.offsets[0] - body_radius(diams[0], config, eps)
    if first_body < head_edge:
        raise LayoutError(
            f"First tube offset {x.offsets[0]:g} mm leaves no room for the screw holes "
            f"(the body must start at least {head_edge:g} mm from the plate edge)"
        )
    return StraightLayout(
        width=width,
        diameters=diams,
        fit_epsilon=eps,
        x=x,
        bore_radii=tuple(bore_radius(d, eps) for d in diams),
        body_radii=tuple(body_radius(d, config, eps) for d in diams),
        axis_z=tuple(axis_height(d, config, eps) + z_offset for d in diams),
        screw_positions=tuple(straight_screw_positions(x.extent, width, config)),
    )


# =============================================================================
# SUB-SOLIDS
# =============================================================================


def unique_tubes(layout: StraightLayout) -> list[tuple[float, float, float, float]]:
    """(u, z, bore radius, body radius) per tube, with merged tubes listed once."""
    tubes = zip(layout.x.offsets, layout.axis_z, layout.bore_radii, layout.body_radii)
    return list(dict.fromkeys(tubes))


def row_points(layout: StraightLayout, config: MountConfig, pads: bool = True) -> list:
    """Hull input points of every tube body in the row."""
    return [
        body_points(u, z, r_body, config, pad_bottom=0.0 if pads else None)
        for u, z, _, r_body in unique_tubes(layout)
    ]


def make_plate(layout: StraightLayout, config: MountConfig) -> cq.Shape:
    return rounded_box(layout.dx, layout.dy, config.thickness, config.rounding_radius)


def make_bodies(layout: StraightLayout, config: MountConfig, thick_hull: bool = False) -> cq.Shape:
    """Tube bodies extruded along the plate width."""
    point_sets = row_points(layout, config)
    if thick_hull:
        return extrude_profile(hull_profile(point_sets), layout.width)
    return union_all(extrude_profile(hull_profile([pts]), layout.width) for pts in point_sets)


def make_bores(layout: StraightLayout, config: MountConfig, chamfer: bool = True) -> cq.Shape:
    """Bore cutter: one cylinder per tube plus champfers at both plate faces."""
    s = config.slack
    solids = []
    for u, z, r, _ in unique_tubes(layout):
        solids.append(cylinder(r, layout.width + 2 * s, (u, -s, z), (0, 1, 0)))
        if chamfer and config.chamfer > 0:
            solids.append(champfer((u, 0, z), (0, 1, 0), r, config.chamfer, s))
            solids.append(champfer((u, layout.width, z), (0, -1, 0), r, config.chamfer, s))
    return union_all(solids)


def make_undersides(layout: StraightLayout, config: MountConfig) -> cq.Shape:
    """Slots under every bore, from below the plate up to the tube axis."""
    s = config.slack
    return union_all(
        cube((2 * r, layout.width + 2 * s, z + s), (u - r, -s, -s))
        for u, z, r, _ in unique_tubes(layout)
    )


def make_screw_holes(layout: StraightLayout, config: MountConfig, top_z: float | None = None) -> cq.Shape | None:
    top = layout.top_z if top_z is None else top_z
    return screw_holes(layout.screw_positions, config.thickness, top, config)


# =============================================================================
# BUILDER
# =============================================================================


def multiple_straight(
    width: float,
    diameters: Sequence[float],
    spacings: Spacings | None = None,
    thick_hull: bool = False,
    fit_epsilon: float | None = None,
    part: PartKind | str = PartKind.FULL,
    config: MountConfig | None = None,
    z_offset: float = 0.0,
) -> cq.Shape:
    """
    Create a clamp for a row of parallel tubes.

    Args:
        width: Plate length along the tubes (Y)
        diameters: Tube diameters, left to right
        spacings: Scalar gap (broadcast), list of gaps, or list starting with
            the absolute offset of the first tube
        thick_hull: Hull all tube bodies together into one envelope
        fit_epsilon: Bore diameter increment (config default if None)
        part: Which sub-solid to return
        config: Shared dimensions
        z_offset: Extra height of the tube axes (used by stacked rows)

    Returns:
        CadQuery Shape of the requested part

    Raises:
        LayoutError: If diameters and spacings do not describe a valid row
    """
    config = config or DEFAULT_CONFIG
    part = as_part_kind(part)
    layout = straight_layout(width, diameters, spacings, config, fit_epsilon, z_offset)
    log.debug(
        "multiple_straight: %d tube(s), plate %.2f x %.2f, part=%s",
        len(layout.diameters), layout.dx, layout.dy, part.value,
    )

    if part is PartKind.BORES:
        return make_bores(layout, config)
    if part is PartKind.SCREW_HOLES:
        return make_screw_holes(layout, config)
    if part is PartKind.BODY:
        return make_bodies(layout, config, thick_hull)

    plate = make_plate(layout, config)
    screws = make_screw_holes(layout, config)
    if part is PartKind.SUPPORT:
        return cut_all(plate, [screws])

    solid = union_all([plate, make_bodies(layout, config, thick_hull)])
    bores = make_bores(layout, config, chamfer=part is not PartKind.NO_CHAMFER)
    tools = [bores, screws]
    if part is PartKind.BRIDGE:
        tools.append(make_undersides(layout, config))
    return cut_all(solid, tools)
