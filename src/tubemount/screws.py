"""
Screw hole placement and screw hole solids.

Straight plates get 2 holes (one per side, centred) when the plate is too
short for two heads side by side, and 4 corner holes otherwise. Corner
fasteners get three corner holes plus one on the outer rounding diagonal.
Candidate holes can be filtered against the tube centre-lines so that a hole
never clips a tube body.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import cadquery as cq

from .config import MountConfig
from .primitives import cone, cylinder, union_all

Point2 = tuple[float, float]


# =============================================================================
# PLACEMENT
# =============================================================================


def screw_count(span: float, config: MountConfig) -> int:
    """
    Number of holes for a straight plate.

    Two holes along the span need ``2 * edge_clearance`` of margin plus room
    for one head between them; otherwise one hole per side is used.
    """
    if span - 2 * config.screw_edge_clearance < config.screw_head_diameter:
        return 2
    return 4


def straight_screw_positions(dx: float, dy: float, config: MountConfig) -> list[Point2]:
    """
    Hole positions for a straight plate, symmetric about the plate centre.

    Holes sit in the X borders; ``dy`` is the span checked by ``screw_count``.
    """
    ec = config.screw_edge_clearance
    xs = (ec, dx - ec)
    if screw_count(dy, config) == 2:
        return [(x, dy / 2.0) for x in xs]
    return [(x, y) for x in xs for y in (ec, dy - ec)]


def corner_screw_positions(dx: float, dy: float, outer_center: Point2, outer_radius: float,
                           config: MountConfig) -> list[Point2]:
    """
    Hole positions for a corner fastener.

    The corner at the origin is taken by the outer rounding, so it gets no
    corner hole; instead one hole sits on the diagonal from the bend centre
    through that corner, just outside the outer body.
    """
    ec = config.screw_edge_clearance
    points = [(dx - ec, ec), (ec, dy - ec), (dx - ec, dy - ec)]
    distance = outer_radius + ec
    diagonal = (
        outer_center[0] - distance / math.sqrt(2.0),
        outer_center[1] - distance / math.sqrt(2.0),
    )
    if diagonal[0] >= ec and diagonal[1] >= ec:
        points.append(diagonal)
    return points


# =============================================================================
# CLEARANCE AGAINST TUBE PATHS
# =============================================================================


@dataclass(frozen=True)
class LinePath:
    """Straight tube centre-line seen from above."""

    start: Point2
    end: Point2
    radius: float  # body radius

    def distance(self, p: Point2) -> float:
        (x0, y0), (x1, y1) = self.start, self.end
        vx, vy = x1 - x0, y1 - y0
        length2 = vx * vx + vy * vy
        t = 0.0 if length2 == 0 else max(0.0, min(1.0, ((p[0] - x0) * vx + (p[1] - y0) * vy) / length2))
        return math.hypot(p[0] - (x0 + t * vx), p[1] - (y0 + t * vy))


@dataclass(frozen=True)
class ArcPath:
    """Circular tube centre-line seen from above (angles in degrees, CCW)."""

    center: Point2
    bend_radius: float
    start_angle: float
    sweep: float
    radius: float  # body radius

    def _endpoint(self, angle_deg: float) -> Point2:
        a = math.radians(angle_deg)
        return (
            self.center[0] + self.bend_radius * math.cos(a),
            self.center[1] + self.bend_radius * math.sin(a),
        )

    def distance(self, p: Point2) -> float:
        dx, dy = p[0] - self.center[0], p[1] - self.center[1]
        angle = math.degrees(math.atan2(dy, dx))
        rel = (angle - self.start_angle) % 360.0
        if rel <= self.sweep:
            return abs(math.hypot(dx, dy) - self.bend_radius)
        return min(
            math.dist(p, self._endpoint(self.start_angle)),
            math.dist(p, self._endpoint(self.start_angle + self.sweep)),
        )


def clear_of_paths(points: Iterable[Point2], paths: Sequence[LinePath | ArcPath],
                   config: MountConfig) -> list[Point2]:
    """Keep the holes whose head stays outside every tube body."""
    head = config.screw_head_diameter / 2.0
    return [
        p for p in points
        if all(path.distance(p) >= path.radius + head for path in paths)
    ]


# =============================================================================
# HOLE SOLIDS
# =============================================================================


def screw_hole(position: Point2, seat_z: float, top_z: float, config: MountConfig) -> cq.Shape:
    """
    Cutter for one screw hole.

    Made of a shaft through everything below ``seat_z``, a seat for the head
    (countersunk cone or flat counterbore) ending at ``seat_z``, and a head
    sized overcut from the seat to ``top_z + config.overcut`` so the hole
    always cuts through whatever sits above the plate.
    """
    x, y = position
    r_shaft = config.screw_diameter / 2.0
    r_head = config.screw_head_diameter / 2.0
    bottom = -config.slack

    if config.countersunk:
        seat_depth = min(r_head - r_shaft, seat_z - bottom)
    else:
        seat_depth = min(config.screw_diameter / 2.0, seat_z - bottom)
    seat_bottom = seat_z - seat_depth

    parts = [cylinder(r_shaft, seat_bottom - bottom + config.slack, (x, y, bottom))]
    if seat_depth > 0:
        if config.countersunk:
            parts.append(cone(r_head - seat_depth, r_head, seat_depth, (x, y, seat_bottom)))
        else:
            parts.append(cylinder(r_head, seat_depth, (x, y, seat_bottom)))
    parts.append(cylinder(r_head, top_z + config.overcut - seat_z, (x, y, seat_z)))
    return union_all(parts)


def screw_holes(positions: Iterable[Point2], seat_z: float, top_z: float,
                config: MountConfig) -> cq.Shape | None:
    """Union of the cutters for all positions (None if there are none)."""
    return union_all(screw_hole(p, seat_z, top_z, config) for p in positions)
