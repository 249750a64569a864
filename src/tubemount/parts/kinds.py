"""
Part kinds selectable on the tube builders.

A builder computes its layout once and can emit any of these sub-solids,
so composite builders (stacked rows, tees) reuse bores and bodies without
recomputing them.
"""

from enum import Enum


class PartKind(Enum):
    """Which solid a builder returns."""

    FULL = "full"  # plate + tube bodies - bores - screw holes
    SUPPORT = "support"  # plate - screw holes
    BODY = "body"  # tube bodies only, solid
    BRIDGE = "bridge"  # FULL with the material under each bore axis removed
    BORES = "bores"  # bore cutter including champfers
    SCREW_HOLES = "screw_holes"  # screw hole cutter
    NO_CHAMFER = "no_chamfer"  # FULL with plain bores


def as_part_kind(value: "PartKind | str") -> PartKind:
    """Accept a PartKind or its string value (as used by the CLI)."""
    if isinstance(value, PartKind):
        return value
    try:
        return PartKind(value)
    except ValueError:
        choices = ", ".join(k.value for k in PartKind)
        raise ValueError(f"Unknown part kind {value!r} (expected one of: {choices})") from None
