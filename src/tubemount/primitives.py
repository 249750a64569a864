"""
Primitive solids used by the part builders.

Thin wrappers over CadQuery that take positions and directions explicitly,
so that the part builders only deal with offsets. Everything returns a
``cq.Shape``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import cadquery as cq

Point3 = tuple[float, float, float]
Profile = Sequence[tuple[float, float]]

# Workplane whose local (u, z) axes map to world (lateral, Z) for a run along each axis
_RUN_PLANES = {"x": "YZ", "y": "XZ"}


# =============================================================================
# BASIC SOLIDS
# =============================================================================


def cube(size: Point3, position: Point3 = (0, 0, 0)) -> cq.Shape:
    """Axis-aligned box with its minimum corner at ``position``."""
    return cq.Solid.makeBox(size[0], size[1], size[2], cq.Vector(*position))


def cylinder(radius: float, height: float, position: Point3 = (0, 0, 0),
             direction: Point3 = (0, 0, 1)) -> cq.Shape:
    """Cylinder starting at ``position`` and extending along ``direction``."""
    return cq.Solid.makeCylinder(radius, height, cq.Vector(*position), cq.Vector(*direction))


def cone(radius1: float, radius2: float, height: float, position: Point3 = (0, 0, 0),
         direction: Point3 = (0, 0, 1)) -> cq.Shape:
    """Truncated cone from ``radius1`` at ``position`` to ``radius2`` along ``direction``."""
    return cq.Solid.makeCone(radius1, radius2, height, cq.Vector(*position), cq.Vector(*direction))


def tube(outer_radius: float, inner_radius: float, height: float,
         position: Point3 = (0, 0, 0), direction: Point3 = (0, 0, 1)) -> cq.Shape:
    """Hollow cylinder."""
    if inner_radius >= outer_radius:
        raise ValueError(f"Inner radius {inner_radius} must be below outer radius {outer_radius}")
    outer = cylinder(outer_radius, height, position, direction)
    inner = cylinder(inner_radius, height, position, direction)
    return outer.cut(inner)


def prism(leg_x: float, leg_z: float, width: float, position: Point3 = (0, 0, 0)) -> cq.Shape:
    """
    Right-triangle prism (a gusset).

    The right angle sits at ``position``; the legs run along +X and +Z and the
    triangle is extruded along +Y by ``width``.
    """
    profile = [(0.0, 0.0), (leg_x, 0.0), (0.0, leg_z)]
    return extrude_profile(profile, width, axis="y").moved(cq.Location(cq.Vector(*position)))


def rounded_box(dx: float, dy: float, height: float, radius: float,
                position: Point3 = (0, 0, 0)) -> cq.Shape:
    """Box with rounded vertical edges, minimum corner at ``position``."""
    box = cq.Workplane("XY").box(dx, dy, height, centered=False)
    # Fillets equal to half the short side fail in OCC
    radius = min(radius, min(dx, dy) / 2.0 - 1e-3)
    if radius > 0:
        box = box.edges("|Z").fillet(radius)
    return box.val().moved(cq.Location(cq.Vector(*position)))


def champfer(position: Point3, direction: Point3, bore_radius: float, depth: float,
             slack: float = 0.0) -> cq.Shape:
    """
    45° entry bevel for a bore.

    Args:
        position: Centre of the bore opening on the part face
        direction: Unit vector pointing into the bore
        bore_radius: Radius of the bore
        depth: Bevel depth along the bore axis
        slack: Extra length outside the face to avoid coincident faces
    """
    start = tuple(p - d * slack for p, d in zip(position, direction))
    return cone(bore_radius + depth + slack, bore_radius, depth + slack, start, direction)


# =============================================================================
# PROFILE SOLIDS
# =============================================================================


def extrude_profile(profile: Profile, length: float, start: float = 0.0, axis: str = "y") -> cq.Shape:
    """
    Extrude a (u, z) polygon along a world axis.

    For ``axis="y"`` the profile u coordinate is world X; for ``axis="x"``
    it is world Y. The solid spans ``[start, start + length]`` along the axis.
    """
    plane = _RUN_PLANES.get(axis)
    if plane is None:
        raise ValueError(f"Unknown run axis {axis!r} (expected 'x' or 'y')")
    solid = cq.Workplane(plane).polyline(list(profile)).close().extrude(length).val()
    # The XZ plane normal is -Y
    if axis == "y":
        return solid.moved(cq.Location(cq.Vector(0, start + length, 0)))
    return solid.moved(cq.Location(cq.Vector(start, 0, 0)))


def revolve_profile(profile: Profile, center: tuple[float, float], start_angle: float,
                    angle: float = 90.0) -> cq.Shape:
    """
    Revolve a (radius, z) polygon around a vertical axis.

    Args:
        profile: Polygon whose u coordinate is the distance from the axis (u >= 0)
        center: (x, y) of the vertical axis
        start_angle: Angle (degrees, from +X) where the sweep starts
        angle: Sweep angle in degrees, counter-clockwise seen from +Z
    """
    solid = (
        cq.Workplane("XZ")
        .polyline(list(profile))
        .close()
        .revolve(angle, (0, 0, 0), (0, 1, 0))
        .val()
    )
    return _place_revolved(solid, center, start_angle)


def torus_quarter(bend_radius: float, radius: float, axis_z: float, center: tuple[float, float],
                  start_angle: float, angle: float = 90.0) -> cq.Shape:
    """Sector of a torus (a curved bore) around a vertical axis at ``center``."""
    solid = (
        cq.Workplane("XZ")
        .moveTo(bend_radius, axis_z)
        .circle(radius)
        .revolve(angle, (0, 0, 0), (0, 1, 0))
        .val()
    )
    return _place_revolved(solid, center, start_angle)


def _place_revolved(solid: cq.Shape, center: tuple[float, float], start_angle: float) -> cq.Shape:
    if start_angle:
        solid = solid.rotate((0, 0, 0), (0, 0, 1), start_angle)
    return solid.moved(cq.Location(cq.Vector(center[0], center[1], 0)))


# =============================================================================
# BOOLEAN HELPERS
# =============================================================================


def union_all(shapes: Iterable[cq.Shape | None]) -> cq.Shape | None:
    """Fuse all shapes, skipping None. Returns None for an empty input."""
    items = [s for s in shapes if s is not None]
    if not items:
        return None
    if len(items) == 1:
        return items[0]
    return items[0].fuse(*items[1:]).clean()


def cut_all(shape: cq.Shape, tools: Iterable[cq.Shape | None]) -> cq.Shape:
    """Subtract every non-None tool from ``shape``."""
    items = [t for t in tools if t is not None]
    if not items:
        return shape
    return shape.cut(*items).clean()


def mirror_x(shape: cq.Shape, x: float) -> cq.Shape:
    """Mirror a shape across the plane ``X = x``."""
    return shape.mirror("YZ", (x, 0, 0))
