#!/usr/bin/env python3
"""
Example: corner fasteners, mixed layouts and tees.

Shows the three turning builders:
1. ``multiple_round`` - every tube turns 90° around a wall corner
2. ``straight_round`` - some tubes turn, others pass straight through
3. ``tee_with_side_straight`` - side tubes join a straight main tube
"""

from pathlib import Path

import cadquery as cq

from tubemount import Straight, Turn, multiple_round, straight_round, tee_with_side_straight
from tubemount.primitives import mirror_x

OUTPUT_DIR = Path(__file__).parent / "output"


def export(shape: cq.Shape, name: str) -> None:
    path = OUTPUT_DIR / f"{name}.step"
    cq.exporters.export(shape, str(path))
    print(f"  Exported {path.name} ({shape.Volume():.0f} mm³)")


# =============================================================================
# CORNERS
# =============================================================================

def corner_examples():
    print("Corner fasteners")
    corner = multiple_round([20, 16], 24)
    export(corner, "corner_20_16")

    # Opposite hand: mirror across the plate centre
    bb = corner.BoundingBox()
    export(mirror_x(corner, (bb.xmin + bb.xmax) / 2), "corner_20_16_mirrored")

    # Spacing 0 merges two tubes into a Y-junction
    export(multiple_round([16, 16, 20], [0, 26]), "corner_y_junction")


# =============================================================================
# MIXED LAYOUTS
# =============================================================================

def mixed_examples():
    print("Mixed straight/turn fasteners")
    segments = [Straight("y"), Turn(spacing_x=26), Turn(spacing_x=24, spacing_y=24)]
    export(straight_round(segments, [20, 16, 16]), "mixed_straight_and_turns")

    print("Tees")
    export(tee_with_side_straight(25, [16], [20]), "tee_25_16")
    export(tee_with_side_straight(25, [16, 16], 22, right=False), "tee_25_left_only")


def main():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    corner_examples()
    mixed_examples()
    print("\nDone!")
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
