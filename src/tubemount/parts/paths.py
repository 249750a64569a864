"""
Tube path pieces shared by the corner, mixed and tee builders.

A tube is routed as a chain of straight runs and circular bends lying in a
horizontal plane at the tube's axis height. Each piece knows how to build its
body, its bore, the slot under it (bridge variant) and its centre-line as
seen from above (for screw clearance checks).
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import cadquery as cq

from ..config import MountConfig
from ..primitives import champfer, cube, cylinder, extrude_profile, revolve_profile, torus_quarter
from ..profiles import body_profile, rect_points
from ..screws import ArcPath, LinePath

_AXIS_VECTORS = {"x": (1.0, 0.0, 0.0), "y": (0.0, 1.0, 0.0)}


def _point(axis: str, along: float, lateral: float, z: float) -> tuple[float, float, float]:
    return (along, lateral, z) if axis == "x" else (lateral, along, z)


@dataclass(frozen=True)
class TubeRun:
    """Straight run of a tube parallel to the X or Y axis."""

    axis: str
    lateral: float  # Y for runs along X, X for runs along Y
    start: float
    end: float
    axis_z: float
    bore_radius: float
    body_radius: float
    champfer_start: bool = False
    champfer_end: bool = False

    def __post_init__(self):
        if self.axis not in _AXIS_VECTORS:
            raise ValueError(f"Unknown run axis {self.axis!r} (expected 'x' or 'y')")

    @property
    def length(self) -> float:
        return self.end - self.start

    def body(self, config: MountConfig) -> cq.Shape | None:
        if self.length <= config.slack:
            return None
        profile = body_profile(self.lateral, self.axis_z, self.body_radius, config)
        return extrude_profile(profile, self.length, self.start, self.axis)

    def bore(self, config: MountConfig, chamfer: bool = True) -> list[cq.Shape]:
        s = config.slack
        direction = _AXIS_VECTORS[self.axis]
        back = tuple(-c for c in direction)
        solids = [
            cylinder(
                self.bore_radius,
                self.length + 2 * s,
                _point(self.axis, self.start - s, self.lateral, self.axis_z),
                direction,
            )
        ]
        if chamfer and config.chamfer > 0:
            if self.champfer_start:
                face = _point(self.axis, self.start, self.lateral, self.axis_z)
                solids.append(champfer(face, direction, self.bore_radius, config.chamfer, s))
            if self.champfer_end:
                face = _point(self.axis, self.end, self.lateral, self.axis_z)
                solids.append(champfer(face, back, self.bore_radius, config.chamfer, s))
        return solids

    def underside(self, config: MountConfig) -> cq.Shape:
        s = config.slack
        r = self.bore_radius
        if self.axis == "x":
            return cube((self.length + 2 * s, 2 * r, self.axis_z + s), (self.start - s, self.lateral - r, -s))
        return cube((2 * r, self.length + 2 * s, self.axis_z + s), (self.lateral - r, self.start - s, -s))

    def path(self) -> LinePath:
        a = _point(self.axis, self.start, self.lateral, 0.0)
        b = _point(self.axis, self.end, self.lateral, 0.0)
        return LinePath((a[0], a[1]), (b[0], b[1]), self.body_radius)

    def moved_x(self, dx: float) -> TubeRun:
        if self.axis == "x":
            return replace(self, start=self.start + dx, end=self.end + dx)
        return replace(self, lateral=self.lateral + dx)

    def mirrored_x(self, x0: float) -> TubeRun:
        """Mirror image across the plane X = x0."""
        if self.axis == "x":
            return replace(
                self,
                start=2 * x0 - self.end,
                end=2 * x0 - self.start,
                champfer_start=self.champfer_end,
                champfer_end=self.champfer_start,
            )
        return replace(self, lateral=2 * x0 - self.lateral)


@dataclass(frozen=True)
class TubeBend:
    """Circular bend of a tube around a vertical axis."""

    center: tuple[float, float]
    bend_radius: float
    start_angle: float
    sweep: float
    axis_z: float
    bore_radius: float
    body_radius: float

    def __post_init__(self):
        if self.bend_radius < self.body_radius:
            raise ValueError(
                f"Bend radius {self.bend_radius:g} is smaller than body radius {self.body_radius:g}"
            )

    def body(self, config: MountConfig) -> cq.Shape:
        profile = body_profile(self.bend_radius, self.axis_z, self.body_radius, config)
        return revolve_profile(profile, self.center, self.start_angle, self.sweep)

    def bore(self, config: MountConfig, chamfer: bool = True) -> list[cq.Shape]:  # noqa: ARG002
        return [
            torus_quarter(
                self.bend_radius, self.bore_radius, self.axis_z,
                self.center, self.start_angle, self.sweep,
            )
        ]

    def underside(self, config: MountConfig) -> cq.Shape:
        r = self.bore_radius
        slot = rect_points(self.bend_radius - r, self.bend_radius + r, -config.slack, self.axis_z)
        return revolve_profile([(float(u), float(z)) for u, z in slot], self.center, self.start_angle, self.sweep)

    def path(self) -> ArcPath:
        return ArcPath(self.center, self.bend_radius, self.start_angle, self.sweep, self.body_radius)

    def moved_x(self, dx: float) -> TubeBend:
        return replace(self, center=(self.center[0] + dx, self.center[1]))

    def mirrored_x(self, x0: float) -> TubeBend:
        """Mirror image across the plane X = x0 (the sweep keeps counter-clockwise order)."""
        start = (180.0 - self.start_angle - self.sweep) % 360.0
        return replace(self, center=(2 * x0 - self.center[0], self.center[1]), start_angle=start)


TubePiece = TubeRun | TubeBend
