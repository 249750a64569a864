"""
Corner fastener for several tubes turning 90° together.

Each tube enters along X (its run ends at the +X plate edge), turns through a
quarter torus and leaves along Y (its run ends at the +Y plate edge). All
tubes turn the same way; mirror the result for the opposite hand.

The part is oriented with:
- Plate from (0, 0, 0) to (dx, dy, thickness)
- Tube i running along X at ``y = y.offsets[i]`` and along Y at ``x = x.offsets[i]``
- The bends bulging towards the plate corner at the origin
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import cadquery as cq

from ..config import DEFAULT_CONFIG, MountConfig
from ..layout import AxisLayout, Spacings, axis_height, body_radius, bore_radius, tube_offsets
from ..primitives import cut_all, rounded_box, union_all
from ..screws import clear_of_paths, corner_screw_positions, screw_holes
from .kinds import PartKind, as_part_kind
from .paths import TubeBend, TubePiece, TubeRun

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundLayout:
    """Positions of a corner fastener (all in mm)."""

    diameters: tuple[float, ...]
    fit_epsilon: float
    x: AxisLayout
    y: AxisLayout
    bore_radii: tuple[float, ...]
    body_radii: tuple[float, ...]
    axis_z: tuple[float, ...]
    bend_radii: tuple[float, ...]
    dx: float
    dy: float

    def bend_center(self, i: int) -> tuple[float, float]:
        return (self.x.offsets[i] + self.bend_radii[i], self.y.offsets[i] + self.bend_radii[i])

    @property
    def top_z(self) -> float:
        return max(z + r for z, r in zip(self.axis_z, self.body_radii))


def round_layout(
    diameters: Sequence[float],
    spacings_x: Spacings | None,
    spacings_y: Spacings | None = None,
    config: MountConfig = DEFAULT_CONFIG,
    fit_epsilon: float | None = None,
    turning: Sequence[bool] | None = None,
) -> RoundLayout:
    """
    Compute the layout of a corner fastener.

    The innermost turning tube (last one) bends with the smallest radius,
    large enough for every tube body. Outer tubes add their distance to the
    innermost tube, so equal X and Y spacings give concentric bends.

    Args:
        turning: Per tube, whether it bends (all by default). Tubes that do
            not bend get a bend radius of 0.
    """
    eps = config.fit_epsilon if fit_epsilon is None else fit_epsilon
    if spacings_y is None or (not isinstance(spacings_y, (int, float)) and len(spacings_y) == 0):
        spacings_y = spacings_x
    x = tube_offsets(diameters, spacings_x, config, eps, axis="x")
    y = tube_offsets(diameters, spacings_y, config, eps, axis="y")
    diams = tuple(diameters)
    body_radii = tuple(body_radius(d, config, eps) for d in diams)

    turning = [True] * len(diams) if turning is None else list(turning)
    bends = [i for i, t in enumerate(turning) if t]

    bend_radii = [0.0] * len(diams)
    dx, dy = x.extent, y.extent
    if bends:
        min_bend = max(body_radii) + config.wall
        last_x, last_y = x.offsets[bends[-1]], y.offsets[bends[-1]]
        for i in bends:
            ox, oy = x.offsets[i], y.offsets[i]
            bend_radii[i] = min_bend + max(0.0, min(last_x - ox, last_y - oy))
            # The innermost bend may reach past a small outer border
            dx = max(dx, ox + bend_radii[i])
            dy = max(dy, oy + bend_radii[i])

    return RoundLayout(
        diameters=diams,
        fit_epsilon=eps,
        x=x,
        y=y,
        bore_radii=tuple(bore_radius(d, eps) for d in diams),
        body_radii=body_radii,
        axis_z=tuple(axis_height(d, config, eps) for d in diams),
        bend_radii=tuple(bend_radii),
        dx=dx,
        dy=dy,
    )


def corner_pieces(layout: RoundLayout, i: int) -> list[TubePiece]:
    """Inlet run, bend and outlet run of tube ``i``."""
    cx, cy = layout.bend_center(i)
    z, r_bore, r_body = layout.axis_z[i], layout.bore_radii[i], layout.body_radii[i]
    ox, oy = layout.x.offsets[i], layout.y.offsets[i]
    return [
        TubeRun("x", oy, cx, layout.dx, z, r_bore, r_body, champfer_end=True),
        TubeBend((cx, cy), layout.bend_radii[i], 180.0, 90.0, z, r_bore, r_body),
        TubeRun("y", ox, cy, layout.dy, z, r_bore, r_body, champfer_end=True),
    ]


def unique_indices(layout: RoundLayout) -> list[int]:
    """Tube indices with merged (identical) tubes listed once."""
    seen: dict[tuple, int] = {}
    for i in range(len(layout.diameters)):
        key = (layout.x.offsets[i], layout.y.offsets[i], layout.bend_radii[i], layout.bore_radii[i])
        seen.setdefault(key, i)
    return list(seen.values())


def corner_screw_points(layout: RoundLayout, pieces: Sequence[TubePiece], config: MountConfig,
                        outer: int = 0) -> list[tuple[float, float]]:
    """Corner and diagonal holes that miss every piece; ``outer`` is the outermost bending tube."""
    outer_radius = layout.bend_radii[outer] + layout.body_radii[outer]
    candidates = corner_screw_positions(layout.dx, layout.dy, layout.bend_center(outer), outer_radius, config)
    return clear_of_paths(candidates, [p.path() for p in pieces], config)


def build_pieces(
    pieces: Sequence[TubePiece],
    plate: cq.Shape,
    screws: cq.Shape | None,
    part: PartKind,
    config: MountConfig,
    extra_body: Sequence[cq.Shape | None] = (),
) -> cq.Shape:
    """Compose plate, tube pieces, bores and screw holes for the requested part kind."""
    chamfer = part is not PartKind.NO_CHAMFER
    if part is PartKind.SCREW_HOLES:
        return screws
    if part is PartKind.BORES:
        return union_all(s for p in pieces for s in p.bore(config, chamfer))
    body = union_all([*(p.body(config) for p in pieces), *extra_body])
    if part is PartKind.BODY:
        return body
    if part is PartKind.SUPPORT:
        return cut_all(plate, [screws])

    tools = [s for p in pieces for s in p.bore(config, chamfer)]
    tools.append(screws)
    if part is PartKind.BRIDGE:
        tools.extend(p.underside(config) for p in pieces)
    return cut_all(union_all([plate, body]), tools)


def multiple_round(
    diameters: Sequence[float],
    spacings_x: Spacings | None = None,
    spacings_y: Spacings | None = None,
    fit_epsilon: float | None = None,
    part: PartKind | str = PartKind.FULL,
    config: MountConfig | None = None,
) -> cq.Shape:
    """
    Create a corner fastener turning several tubes by 90°.

    Args:
        diameters: Tube diameters, outermost first
        spacings_x: Spacings along X (scalar, gaps, or absolute first offset)
        spacings_y: Spacings along Y (defaults to ``spacings_x``)
        fit_epsilon: Bore diameter increment (config default if None)
        part: Which sub-solid to return
        config: Shared dimensions

    Returns:
        CadQuery Shape of the requested part
    """
    config = config or DEFAULT_CONFIG
    part = as_part_kind(part)
    layout = round_layout(diameters, spacings_x, spacings_y, config, fit_epsilon)
    log.debug(
        "multiple_round: %d tube(s), plate %.2f x %.2f, bend radii %s",
        len(layout.diameters), layout.dx, layout.dy, layout.bend_radii,
    )

    pieces = [p for i in unique_indices(layout) for p in corner_pieces(layout, i)]
    screws = screw_holes(corner_screw_points(layout, pieces, config), config.thickness, layout.top_z, config)
    plate = rounded_box(layout.dx, layout.dy, config.thickness, config.rounding_radius)
    return build_pieces(pieces, plate, screws, part, config)
