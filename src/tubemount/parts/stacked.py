"""
Stacked straight clamp.

Several rows of parallel tubes share one base plate and one continuous hull.
Row 0 rests on the plate with its support pads; every further row floats
above the row below it and is hulled together with row 0, so the part prints
as a single envelope. Each row still gets its own bores.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from math import hypot

import cadquery as cq

from ..config import DEFAULT_CONFIG, MountConfig
from ..layout import LayoutError, OverlapWarning, Spacings, validate_diameters
from ..primitives import cut_all, extrude_profile, rounded_box, union_all
from ..profiles import hull_profile
from ..screws import LinePath, clear_of_paths, screw_holes, straight_screw_positions
from .kinds import PartKind, as_part_kind
from .straight import StraightLayout, make_bores, make_undersides, row_points, straight_layout

log = logging.getLogger(__name__)


def stacked_z_offsets(
    rows: Sequence[Sequence[float]],
    spacings_z: Sequence[float | None] | None = None,
    fit_epsilon: float = 0.0,
) -> list[float]:
    """
    Height of each row above row 0.

    Row i sits ``spacings_z[i-1]`` above row i-1, or the largest diameter of
    row i-1 when that entry is missing or None. The default gap grows by
    ``fit_epsilon`` so equal bores stacked on each other just touch.
    """
    spacings_z = list(spacings_z or [])
    if len(spacings_z) > len(rows) - 1:
        raise LayoutError(
            f"{len(rows)} row(s) take at most {len(rows) - 1} Z spacing(s), got {len(spacings_z)}"
        )
    offsets = [0.0]
    for i in range(1, len(rows)):
        gap = spacings_z[i - 1] if i - 1 < len(spacings_z) else None
        if gap is None:
            gap = max(rows[i - 1]) + fit_epsilon
        elif gap <= 0:
            raise LayoutError(f"Z spacing #{i - 1} must be positive, got {gap}")
        offsets.append(offsets[-1] + gap)
    return offsets


def _row_spacings(spacings: Spacings | Sequence[Spacings] | None, count: int) -> list:
    if spacings is None or isinstance(spacings, (int, float)):
        return [spacings] * count
    per_row = list(spacings)
    if len(per_row) != count:
        raise LayoutError(f"{count} row(s) need {count} spacing entries, got {len(per_row)}")
    return per_row


def stacked_layouts(
    width: float,
    rows: Sequence[Sequence[float]],
    spacings: Spacings | Sequence[Spacings] | None,
    spacings_z: Sequence[float | None] | None = None,
    config: MountConfig = DEFAULT_CONFIG,
    fit_epsilon: float | None = None,
) -> list[StraightLayout]:
    """One ``StraightLayout`` per row, each lifted to its Z offset."""
    if not rows:
        raise LayoutError("At least one row of tubes is required")
    for row in rows:
        validate_diameters(row)
    eps = config.fit_epsilon if fit_epsilon is None else fit_epsilon
    z_offsets = stacked_z_offsets(rows, spacings_z, eps)
    layouts = [
        straight_layout(width, row, sp, config, fit_epsilon, z_offset=z)
        for row, sp, z in zip(rows, _row_spacings(spacings, len(rows)), z_offsets)
    ]
    check_row_overlaps(layouts, config)
    return layouts


def check_row_overlaps(layouts: Sequence[StraightLayout], config: MountConfig) -> None:
    """
    Report bores of different rows that intersect.

    Warns with ``OverlapWarning``, or raises ``LayoutError`` in strict mode.
    """
    for lower in range(len(layouts)):
        for upper in range(lower + 1, len(layouts)):
            a, b = layouts[lower], layouts[upper]
            for i, (xa, za, ra) in enumerate(zip(a.x.offsets, a.axis_z, a.bore_radii)):
                for j, (xb, zb, rb) in enumerate(zip(b.x.offsets, b.axis_z, b.bore_radii)):
                    distance = hypot(xb - xa, zb - za)
                    # Touching bores are fine
                    if distance + 1e-9 >= ra + rb:
                        continue
                    msg = (
                        f"Tube {i} of row {lower} and tube {j} of row {upper} overlap: "
                        f"centres {distance:g} mm apart, bores need {ra + rb:g} mm"
                    )
                    if config.strict:
                        raise LayoutError(msg)
                    warnings.warn(msg, OverlapWarning, stacklevel=3)


def _stack_screw_positions(layouts: list[StraightLayout], dx: float, config: MountConfig):
    # Holes of every row, kept only where they miss all tubes of all rows
    candidates = straight_screw_positions(dx, layouts[0].width, config)
    for layout in layouts:
        candidates.extend(p for p in layout.screw_positions if p not in candidates)
    paths = [
        LinePath((u, 0.0), (u, layout.width), r)
        for layout in layouts
        for u, r in zip(layout.x.offsets, layout.body_radii)
    ]
    return clear_of_paths(candidates, paths, config)


def multiple_stacked_straight(
    width: float,
    rows: Sequence[Sequence[float]],
    spacings: Spacings | Sequence[Spacings] | None = None,
    spacings_z: Sequence[float | None] | None = None,
    fit_epsilon: float | None = None,
    part: PartKind | str = PartKind.FULL,
    config: MountConfig | None = None,
) -> cq.Shape:
    """
    Create a clamp holding several rows of tubes stacked above each other.

    Args:
        width: Plate length along the tubes (Y)
        rows: Tube diameters per row, bottom row first
        spacings: Scalar gap for every row, or one spacing entry per row
        spacings_z: Height of each row above the previous one (None entries
            default to the largest diameter of the row below)
        fit_epsilon: Bore diameter increment (config default if None)
        part: Which sub-solid to return
        config: Shared dimensions

    Returns:
        CadQuery Shape of the requested part
    """
    config = config or DEFAULT_CONFIG
    part = as_part_kind(part)
    layouts = stacked_layouts(width, rows, spacings, spacings_z, config, fit_epsilon)
    dx = max(layout.dx for layout in layouts)
    top_z = max(layout.top_z for layout in layouts)
    log.debug(
        "multiple_stacked_straight: %d row(s), plate %.2f x %.2f, row heights %s",
        len(layouts), dx, width, [layout.axis_z for layout in layouts],
    )

    screws = screw_holes(_stack_screw_positions(layouts, dx, config), config.thickness, top_z, config)
    if part is PartKind.SCREW_HOLES:
        return screws

    bores = union_all(
        make_bores(layout, config, chamfer=part is not PartKind.NO_CHAMFER) for layout in layouts
    )
    if part is PartKind.BORES:
        return bores

    point_sets = row_points(layouts[0], config)
    for layout in layouts[1:]:
        point_sets.extend(row_points(layout, config, pads=False))
    body = extrude_profile(hull_profile(point_sets), width)
    if part is PartKind.BODY:
        return body

    plate = rounded_box(dx, width, config.thickness, config.rounding_radius)
    if part is PartKind.SUPPORT:
        return cut_all(plate, [screws])

    tools = [bores, screws]
    if part is PartKind.BRIDGE:
        tools.append(make_undersides(layouts[0], config))
    return cut_all(union_all([plate, body]), tools)
