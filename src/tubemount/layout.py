"""
Layout arithmetic for rows of tubes.

Given tube diameters and the spacings between them, compute the plate extent
along one axis and the centre offset of every tube. Spacings are measured
between tube centres; a spacing of 0 merges two tubes on purpose.

Spacing conventions:
- A scalar is broadcast to ``n - 1`` gaps.
- ``n - 1`` entries are gaps; the first tube sits at the inner border.
- ``n`` entries: the first entry is the absolute offset of the first tube
  from the plate edge, the rest are gaps.
- ``None`` entries count as 0 in cumulative sums.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import accumulate

from .config import DEFAULT_CONFIG, MountConfig

log = logging.getLogger(__name__)

Spacing = float | None
Spacings = float | Sequence[Spacing]


class LayoutError(ValueError):
    """Raised for parameter combinations that cannot produce a valid part."""


class OverlapWarning(UserWarning):
    """Two adjacent tube bores intersect without being merged (spacing 0)."""


# =============================================================================
# SCALAR HELPERS
# =============================================================================


def sigma(values: Sequence[Spacing], end: int | None = None) -> float:
    """
    Sum ``values[:end]``, treating ``None`` and entries past the end as 0.

    Args:
        values: Spacing values (may contain None)
        end: Number of leading entries to sum (all if None)

    Returns:
        The cumulative sum
    """
    if end is None:
        end = len(values)
    total = 0.0
    for i in range(end):
        if i < len(values) and values[i] is not None:
            total += values[i]
    return total


def bore_radius(diameter: float, fit_epsilon: float) -> float:
    """Radius of the bore that receives a tube."""
    return (diameter + fit_epsilon) / 2.0


def body_radius(diameter: float, config: MountConfig, fit_epsilon: float) -> float:
    """Outer radius of the material ring around a bore."""
    return bore_radius(diameter, fit_epsilon) + config.wall


def axis_height(diameter: float, config: MountConfig, fit_epsilon: float) -> float:
    """Height of a tube axis above z=0 when the tube rests on the plate."""
    return config.thickness + bore_radius(diameter, fit_epsilon)


def border(diameter: float, config: MountConfig, fit_epsilon: float) -> float:
    """
    Distance from the plate edge to the centre of the outermost tube.

    The border keeps the screw holes clear of the tube body and of the plate
    edge: body radius plus two screw edge clearances.
    """
    return body_radius(diameter, config, fit_epsilon) + 2 * config.screw_edge_clearance


# =============================================================================
# SPACING RESOLUTION AND VALIDATION
# =============================================================================


def validate_diameters(diameters: Sequence[float]) -> list[float]:
    """Return the diameters as a list, rejecting empty or non-positive input."""
    diams = list(diameters)
    if not diams:
        raise LayoutError("At least one tube diameter is required")
    for i, d in enumerate(diams):
        if d is None or d <= 0:
            raise LayoutError(f"Tube diameter #{i} must be positive, got {d}")
    return diams


def resolve_spacings(spacings: Spacings | None, count: int) -> list[Spacing]:
    """
    Resolve a scalar or list spacing into an explicit list.

    Args:
        spacings: Scalar gap, list of gaps/offsets, or None (no spacings)
        count: Number of tubes

    Returns:
        List with ``count - 1`` or ``count`` entries

    Raises:
        LayoutError: If a list has a length other than ``count - 1`` or ``count``
    """
    if spacings is None:
        resolved: list[Spacing] = []
    elif isinstance(spacings, (int, float)):
        resolved = [float(spacings)] * (count - 1)
    else:
        resolved = list(spacings)

    if len(resolved) not in (count - 1, count):
        raise LayoutError(
            f"{count} tube(s) need {count - 1} or {count} spacing values, "
            f"got {len(resolved)}"
        )
    for i, s in enumerate(resolved):
        if s is not None and s < 0:
            raise LayoutError(f"Spacing #{i} must not be negative, got {s}")
    return resolved


def check_overlaps(
    diameters: Sequence[float],
    offsets: Sequence[float],
    config: MountConfig,
    fit_epsilon: float,
    axis: str = "x",
) -> None:
    """
    Report adjacent bores that intersect without being merged.

    A gap of exactly 0 is an intentional merge. Any other gap smaller than
    the sum of both bore radii warns, or raises in strict mode.
    """
    for i in range(len(offsets) - 1):
        gap = offsets[i + 1] - offsets[i]
        if gap == 0:
            continue
        needed = bore_radius(diameters[i], fit_epsilon) + bore_radius(diameters[i + 1], fit_epsilon)
        if gap < needed:
            msg = (
                f"Tubes {i} and {i + 1} overlap along {axis}: gap {gap:g} mm is smaller "
                f"than {needed:g} mm (use a spacing of 0 to merge them)"
            )
            if config.strict:
                raise LayoutError(msg)
            warnings.warn(msg, OverlapWarning, stacklevel=3)


# =============================================================================
# AXIS LAYOUT
# =============================================================================


@dataclass(frozen=True)
class AxisLayout:
    """Tube positions and plate extent along one axis (all in mm)."""

    offsets: tuple[float, ...]
    extent: float
    inner_border: float
    outer_border: float

    @property
    def center(self) -> float:
        return self.extent / 2.0


def tube_offsets(
    diameters: Sequence[float],
    spacings: Spacings | None,
    config: MountConfig = DEFAULT_CONFIG,
    fit_epsilon: float | None = None,
    axis: str = "x",
) -> AxisLayout:
    """
    Compute tube centre offsets and the plate extent along one axis.

    Args:
        diameters: Tube diameters (at least one, all positive)
        spacings: Scalar or list of spacings (see module docstring)
        config: Shared dimensions
        fit_epsilon: Bore diameter increment (config default if None)
        axis: Axis name used in messages

    Returns:
        AxisLayout with one offset per tube
    """
    eps = config.fit_epsilon if fit_epsilon is None else fit_epsilon
    diams = validate_diameters(diameters)
    spaces = resolve_spacings(spacings, len(diams))

    inner = border(diams[0], config, eps)
    outer = border(diams[-1], config, eps)

    if len(spaces) < len(diams):
        gaps = [0.0 if s is None else s for s in spaces]
        offsets = list(accumulate(gaps, initial=inner))
    else:
        offsets = [sigma(spaces, i + 1) for i in range(len(diams))]
        first_body = body_radius(diams[0], config, eps)
        if offsets[0] < first_body:
            raise LayoutError(
                f"First tube offset {offsets[0]:g} mm along {axis} puts its body past "
                f"the plate edge (at least {first_body:g} mm needed)"
            )

    check_overlaps(diams, offsets, config, eps, axis)

    layout = AxisLayout(
        offsets=tuple(offsets),
        extent=offsets[-1] + outer,
        inner_border=inner,
        outer_border=outer,
    )
    log.debug("Layout along %s: offsets=%s extent=%.3f", axis, layout.offsets, layout.extent)
    return layout
