#!/usr/bin/env python3
"""
Example: straight and stacked clamps for a conduit run.

Builds a three-tube wall clamp, its bridge variant (printable without
supports under the bores) and a two-row stacked clamp, and exports them
as STEP and STL.
"""

from pathlib import Path

import cadquery as cq

from tubemount import MountConfig, PartKind, multiple_stacked_straight, multiple_straight

OUTPUT_DIR = Path(__file__).parent / "output"

# Slightly stronger plate for M4 screws
CONFIG = MountConfig(thickness=4.0, screw_diameter=4.0, screw_head_diameter=8.0)


def export(shape: cq.Shape, name: str) -> None:
    for suffix in (".step", ".stl"):
        cq.exporters.export(shape, str(OUTPUT_DIR / f"{name}{suffix}"))
    bb = shape.BoundingBox()
    print(f"  {name}: {bb.xlen:.1f} x {bb.ylen:.1f} x {bb.zlen:.1f} mm")


def main():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    print("Building straight clamps...")
    export(multiple_straight(20, [16, 20, 16], [25, 35], config=CONFIG), "clamp_16_20_16")
    export(
        multiple_straight(20, [16, 20, 16], [25, 35], part=PartKind.BRIDGE, config=CONFIG),
        "clamp_16_20_16_bridge",
    )
    # One envelope around all three tubes
    export(multiple_straight(25, [20, 20, 20], 26, thick_hull=True, config=CONFIG), "clamp_3x20_hull")

    print("Building stacked clamp...")
    export(multiple_stacked_straight(20, [[20, 20], [16]], 26, config=CONFIG), "stack_20_20_over_16")

    print("\nDone!")
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
