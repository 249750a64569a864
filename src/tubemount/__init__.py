"""
tubemount - parametric 3D-printable mounts for electrical tubing.
"""

from .config import DEFAULT_CONFIG, MountConfig
from .layout import AxisLayout, LayoutError, OverlapWarning, border, sigma, tube_offsets
from .parts import (
    PartKind,
    Straight,
    Turn,
    corner_support,
    multiple_round,
    multiple_stacked_straight,
    multiple_straight,
    rounded_plate,
    straight_round,
    tee_with_side_straight,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "MountConfig",
    "AxisLayout",
    "LayoutError",
    "OverlapWarning",
    "border",
    "sigma",
    "tube_offsets",
    "PartKind",
    "Straight",
    "Turn",
    "corner_support",
    "multiple_round",
    "multiple_stacked_straight",
    "multiple_straight",
    "rounded_plate",
    "straight_round",
    "tee_with_side_straight",
]
