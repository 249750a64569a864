"""
2D cross-section profiles for tube bodies.

A tube body is the convex hull of the body circle around a bore and a flat
support pad that reaches down to the plate. Profiles live in a (u, z) plane
where u is the lateral coordinate across the tubes and z is the height.
Circles are sampled with ``config.segments`` points, so the hull is a plain
polygon that can be extruded (straight runs) or revolved (elbows).
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np
from shapely.geometry import MultiPoint
from shapely.geometry.polygon import orient

from .config import MountConfig


def circle_points(center: tuple[float, float], radius: float, segments: int) -> np.ndarray:
    """Return ``segments`` points on a circle as an (N, 2) array."""
    angles = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
    return np.column_stack((
        center[0] + radius * np.cos(angles),
        center[1] + radius * np.sin(angles),
    ))


def rect_points(u0: float, u1: float, z0: float, z1: float) -> np.ndarray:
    """Corners of an axis-aligned rectangle as a (4, 2) array."""
    return np.array([(u0, z0), (u1, z0), (u1, z1), (u0, z1)], dtype=float)


def convex_hull(points: np.ndarray) -> np.ndarray:
    """
    Convex hull of a 2D point set.

    Args:
        points: (N, 2) array

    Returns:
        (M, 2) array of hull vertices in counter-clockwise order,
        without collinear points and without repeating the first vertex
    """
    pts = np.round(np.asarray(points, dtype=float), 9)
    hull = MultiPoint(pts).convex_hull
    if hull.geom_type != "Polygon":
        raise ValueError("A hull needs at least 3 non-collinear points")
    ring = orient(hull, sign=1.0).exterior.coords
    return np.array(ring[:-1])


def body_points(
    center_u: float,
    axis_z: float,
    radius: float,
    config: MountConfig,
    pad_bottom: float | None = 0.0,
) -> np.ndarray:
    """
    Points of one tube body: its circle plus the support pad corners.

    Args:
        center_u: Lateral position of the tube axis
        axis_z: Height of the tube axis
        radius: Body radius (bore radius + wall)
        config: Shared dimensions (``segments``)
        pad_bottom: Bottom of the support pad, or None for a floating circle
    """
    pts = circle_points((center_u, axis_z), radius, config.segments)
    if pad_bottom is None:
        return pts
    pad = rect_points(center_u - radius, center_u + radius, pad_bottom, axis_z)
    return np.vstack((pts, pad))


def hull_profile(point_sets: Iterable[np.ndarray]) -> list[tuple[float, float]]:
    """Hull several point sets into one polygon, returned as a list of tuples."""
    hull = convex_hull(np.vstack(list(point_sets)))
    return [(float(u), float(z)) for u, z in hull]


def body_profile(
    center_u: float,
    axis_z: float,
    radius: float,
    config: MountConfig,
) -> list[tuple[float, float]]:
    """Hull profile of a single tube body standing on z=0."""
    return hull_profile([body_points(center_u, axis_z, radius, config)])
