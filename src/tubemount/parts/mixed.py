"""
Mixed straight/turning layouts and tees.

``straight_round`` routes each tube either through a 90° bend (``Turn``) or
straight across the plate along one axis (``Straight``). ``tee_with_side_straight``
runs a main tube straight through the plate and turns side tubes in from
both sides to run alongside it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import cadquery as cq

from ..config import DEFAULT_CONFIG, MountConfig
from ..layout import LayoutError, Spacing, Spacings, axis_height, body_radius, bore_radius
from ..primitives import cube, rounded_box
from ..screws import clear_of_paths, screw_holes
from .kinds import PartKind, as_part_kind
from .paths import TubePiece, TubeRun
from .round import (
    RoundLayout,
    build_pieces,
    corner_pieces,
    corner_screw_points,
    round_layout,
    unique_indices,
)

log = logging.getLogger(__name__)


# =============================================================================
# SEGMENTS
# =============================================================================


@dataclass(frozen=True)
class Turn:
    """
    Tube that bends from the X direction into the Y direction.

    Spacings are gaps to the previous tube along each axis. On the first
    tube a value is the absolute offset from the plate edge; None places it
    at the inner border.
    """

    spacing_x: Spacing = None
    spacing_y: Spacing = None


@dataclass(frozen=True)
class Straight:
    """Tube running straight across the plate along ``axis`` ("x" or "y")."""

    axis: str
    spacing: Spacing = None

    def __post_init__(self):
        if self.axis not in ("x", "y"):
            raise LayoutError(f"Straight axis must be 'x' or 'y', got {self.axis!r}")


Segment = Turn | Straight


def segment_spacings(segments: Sequence[Segment]) -> tuple[list[Spacing], list[Spacing]]:
    """
    Per-axis spacing lists for a mixed layout.

    A tube running along X has no X position, so its X spacing is None
    (counted as 0); likewise for Y. When the first tube has no spacing on an
    axis, only the gaps of the following tubes are used.
    """
    xs: list[Spacing] = []
    ys: list[Spacing] = []
    for seg in segments:
        if isinstance(seg, Turn):
            xs.append(seg.spacing_x)
            ys.append(seg.spacing_y)
        elif isinstance(seg, Straight):
            # A run along Y is positioned by X, and the other way round
            xs.append(seg.spacing if seg.axis == "y" else None)
            ys.append(seg.spacing if seg.axis == "x" else None)
        else:
            raise LayoutError(f"Unknown segment {seg!r}")
    if xs and xs[0] is None:
        xs = xs[1:]
    if ys and ys[0] is None:
        ys = ys[1:]
    return xs, ys


def check_crossings(segments: Sequence[Segment], layout: RoundLayout) -> None:
    """
    Reject straight tubes whose bores cross another tube.

    A straight run spans the whole plate, so it must pass outside every
    turning tube: a run along X below its inlet, a run along Y left of its
    outlet. Runs along X and along Y always cross each other.
    """
    straights = [i for i, seg in enumerate(segments) if isinstance(seg, Straight)]
    turns = [i for i, seg in enumerate(segments) if isinstance(seg, Turn)]
    if len({segments[i].axis for i in straights}) > 1:
        raise LayoutError("Straight tubes along x and along y would cross each other")
    for i in straights:
        offsets = layout.y.offsets if segments[i].axis == "x" else layout.x.offsets
        for j in turns:
            needed = layout.bore_radii[i] + layout.bore_radii[j]
            if offsets[i] + needed > offsets[j]:
                raise LayoutError(
                    f"Straight tube {i} along {segments[i].axis} crosses turning tube {j}: "
                    f"straight tubes must come before the turning ones, at least {needed:g} mm outside"
                )


def straight_round(
    segments: Sequence[Segment],
    diameters: Sequence[float],
    fit_epsilon: float | None = None,
    part: PartKind | str = PartKind.FULL,
    config: MountConfig | None = None,
) -> cq.Shape:
    """
    Create a fastener mixing turning tubes and straight tubes.

    Straight tubes run from edge to edge, so they have to sit outside the
    turning ones: list them first and keep them clear of every bend.

    Args:
        segments: One ``Turn`` or ``Straight`` per tube
        diameters: Tube diameters, outermost first
        fit_epsilon: Bore diameter increment (config default if None)
        part: Which sub-solid to return
        config: Shared dimensions

    Returns:
        CadQuery Shape of the requested part
    """
    config = config or DEFAULT_CONFIG
    part = as_part_kind(part)
    if len(segments) != len(diameters):
        raise LayoutError(f"{len(diameters)} tube(s) need {len(diameters)} segments, got {len(segments)}")

    spacings_x, spacings_y = segment_spacings(segments)
    turning = [isinstance(seg, Turn) for seg in segments]
    layout = round_layout(diameters, spacings_x, spacings_y, config, fit_epsilon, turning=turning)
    check_crossings(segments, layout)
    log.debug(
        "straight_round: %d turn(s), %d straight(s), plate %.2f x %.2f",
        sum(turning), len(turning) - sum(turning), layout.dx, layout.dy,
    )

    pieces: list[TubePiece] = []
    for i in unique_indices(layout):
        seg = segments[i]
        z, r_bore, r_body = layout.axis_z[i], layout.bore_radii[i], layout.body_radii[i]
        if isinstance(seg, Turn):
            pieces.extend(corner_pieces(layout, i))
        elif seg.axis == "x":
            pieces.append(TubeRun("x", layout.y.offsets[i], 0.0, layout.dx, z, r_bore, r_body, True, True))
        else:
            pieces.append(TubeRun("y", layout.x.offsets[i], 0.0, layout.dy, z, r_bore, r_body, True, True))

    ec = config.screw_edge_clearance
    if any(turning):
        candidates = corner_screw_points(layout, [], config, outer=turning.index(True))
    else:
        candidates = [(ec, ec), (layout.dx - ec, ec), (ec, layout.dy - ec), (layout.dx - ec, layout.dy - ec)]
    points = clear_of_paths(candidates, [p.path() for p in pieces], config)

    top_z = max(z + r for z, r in zip(layout.axis_z, layout.body_radii))
    screws = screw_holes(points, config.thickness, top_z, config)
    plate = rounded_box(layout.dx, layout.dy, config.thickness, config.rounding_radius)
    return build_pieces(pieces, plate, screws, part, config)


# =============================================================================
# TEE
# =============================================================================


def tee_with_side_straight(
    main_diameter: float,
    diameters: Sequence[float],
    spacings: Spacings | None = None,
    spacings_y: Spacings | None = None,
    left: bool = True,
    right: bool = True,
    side_branch: cq.Shape | None = None,
    fit_epsilon: float | None = None,
    part: PartKind | str = PartKind.FULL,
    config: MountConfig | None = None,
) -> cq.Shape:
    """
    Create a tee: a straight main tube with side tubes turning in beside it.

    The main tube runs along Y through the plate. On each enabled side a set
    of corner tubes (as ``multiple_round``) enters from the X edge and turns
    to run along Y next to the main tube; the left set is the mirror image of
    the right one. A filled patch joins the main body and the side sets.

    Args:
        main_diameter: Diameter of the straight main tube
        diameters: Side tube diameters, outermost first (same on both sides)
        spacings: Side tube spacings along X
        spacings_y: Side tube spacings along Y (defaults to ``spacings``)
        left: Build the side set on the -X side
        right: Build the side set on the +X side
        side_branch: Extra caller geometry fused into the body
        fit_epsilon: Bore diameter increment (config default if None)
        part: Which sub-solid to return
        config: Shared dimensions

    Returns:
        CadQuery Shape of the requested part
    """
    config = config or DEFAULT_CONFIG
    part = as_part_kind(part)
    if main_diameter <= 0:
        raise LayoutError(f"Main tube diameter must be positive, got {main_diameter}")
    eps = config.fit_epsilon if fit_epsilon is None else fit_epsilon
    side = round_layout(diameters, spacings, spacings_y, config, eps)

    r_main = bore_radius(main_diameter, eps)
    body_main = body_radius(main_diameter, config, eps)
    z_main = axis_height(main_diameter, config, eps)
    ec = config.screw_edge_clearance

    # Side sets start at the main body edge; a side without tubes keeps a screw margin
    half_right = body_main + (side.dx if right else 2 * ec)
    half_left = body_main + (side.dx if left else 2 * ec)
    xm = half_left
    dx, dy = half_left + half_right, side.dy

    local = [p for i in unique_indices(side) for p in corner_pieces(side, i)]
    pieces: list[TubePiece] = [TubeRun("y", xm, 0.0, dy, z_main, r_main, body_main, True, True)]
    local_screws = corner_screw_points(side, local, config)
    candidates = [(ec, ec), (dx - ec, ec), (ec, dy - ec), (dx - ec, dy - ec)]
    if right:
        pieces.extend(p.moved_x(xm + body_main) for p in local)
        candidates.extend((x + xm + body_main, y) for x, y in local_screws)
    if left:
        pieces.extend(p.moved_x(xm + body_main).mirrored_x(xm) for p in local)
        candidates.extend((xm - body_main - x, y) for x, y in local_screws)
    # Mirrored corner holes coincide with the plate corners up to rounding
    unique = dict.fromkeys((round(x, 6), round(y, 6)) for x, y in candidates)
    points = clear_of_paths(unique, [p.path() for p in pieces], config)
    log.debug("tee_with_side_straight: plate %.2f x %.2f, %d screw(s)", dx, dy, len(points))

    # Crossing patch between the main tube and the outer side tubes, below their axes
    patch_y = side.bend_center(0)[1]
    reach_right = body_main + (side.x.offsets[0] if right else 0.0)
    reach_left = body_main + (side.x.offsets[0] if left else 0.0)
    patch_z = min(z_main, side.axis_z[0])
    patch = None
    if dy > patch_y and (left or right):
        patch = cube((reach_left + reach_right, dy - patch_y, patch_z), (xm - reach_left, patch_y, 0.0))

    top_z = max(z_main + body_main, side.top_z)
    screws = screw_holes(points, config.thickness, top_z, config)
    plate = rounded_box(dx, dy, config.thickness, config.rounding_radius)
    return build_pieces(pieces, plate, screws, part, config, extra_body=[patch, side_branch])
