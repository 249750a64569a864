"""
Plain supports: rounded mounting plates and L-shaped corner supports.
"""

from __future__ import annotations

import logging

import cadquery as cq

from ..config import DEFAULT_CONFIG, MountConfig
from ..layout import LayoutError
from ..primitives import cube, cut_all, prism, rounded_box, union_all
from ..screws import screw_hole, screw_holes, straight_screw_positions

log = logging.getLogger(__name__)


def rounded_plate(dx: float, dy: float, config: MountConfig | None = None, screws: bool = True) -> cq.Shape:
    """
    Create a flat plate with rounded corners.

    Screw holes follow the straight clamp rule: two holes when ``dy`` is too
    short for two heads, four corner holes otherwise.
    """
    config = config or DEFAULT_CONFIG
    ec = config.screw_edge_clearance
    if screws and (dx < 2 * ec + config.screw_head_diameter or dy < 2 * ec):
        raise LayoutError(f"Plate {dx:g} x {dy:g} mm is too small for screw holes")
    plate = rounded_box(dx, dy, config.thickness, config.rounding_radius)
    if not screws:
        return plate
    positions = straight_screw_positions(dx, dy, config)
    log.debug("rounded_plate: %g x %g with %d screw(s)", dx, dy, len(positions))
    return cut_all(plate, [screw_holes(positions, config.thickness, config.thickness, config)])


def corner_support(length: float, height: float, width: float, config: MountConfig | None = None) -> cq.Shape:
    """
    Create an L-shaped corner support.

    The base leg lies on the XY plane along +X, the upright leg stands at
    x=0 along +Z, and two triangular gussets brace the corner at both Y
    ends. Each leg has one screw hole centred between the gussets.

    Args:
        length: Base leg length along X
        height: Upright leg height along Z
        width: Width along Y
        config: Shared dimensions (``thickness`` is the leg thickness)
    """
    config = config or DEFAULT_CONFIG
    t = config.thickness
    head = config.screw_head_diameter
    if width < 2 * t + head or min(length, height) < t + 2 * config.screw_edge_clearance:
        raise LayoutError(f"Corner support {length:g} x {height:g} x {width:g} mm is too small")

    base = cube((length, width, t))
    upright = cube((t, width, height))
    gussets = [
        prism(length - t, height - t, t, (t, 0.0, t)),
        prism(length - t, height - t, t, (t, width - t, t)),
    ]
    body = union_all([base, upright, *gussets])

    y = width / 2.0
    base_hole = screw_hole(((length + t) / 2.0, y), t, t, config)
    # Built vertical, then turned so the hole axis points along +X
    upright_hole = screw_hole((-(height + t) / 2.0, y), t, t, config).rotate((0, 0, 0), (0, 1, 0), 90)
    return cut_all(body, [base_hole, upright_hole])
