"""
Tube Mount Parts Module

Parametric clamps, corner fasteners, tees and supports built on CadQuery.
"""

from .kinds import PartKind
from .mixed import Segment, Straight, Turn, segment_spacings, straight_round, tee_with_side_straight
from .round import RoundLayout, multiple_round, round_layout
from .stacked import multiple_stacked_straight, stacked_layouts, stacked_z_offsets
from .straight import StraightLayout, multiple_straight, straight_layout
from .supports import corner_support, rounded_plate

__all__ = [
    "PartKind",
    # Straight clamps
    "StraightLayout",
    "multiple_straight",
    "straight_layout",
    "multiple_stacked_straight",
    "stacked_layouts",
    "stacked_z_offsets",
    # Corner fasteners
    "RoundLayout",
    "multiple_round",
    "round_layout",
    # Mixed layouts
    "Segment",
    "Straight",
    "Turn",
    "segment_spacings",
    "straight_round",
    "tee_with_side_straight",
    # Supports
    "corner_support",
    "rounded_plate",
]
