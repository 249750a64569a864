"""
Shared configuration for tube mount parts.

All builders take a ``MountConfig`` instead of reading module-level constants.
The configuration can be:
- Constructed directly with keyword arguments
- Loaded from a YAML file (``MountConfig.from_yaml``)
- Derived from another config with ``with_overrides``
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class MountConfig:
    """
    Global dimensions shared by every part (all in mm).

    Attributes:
        thickness: Base plate thickness
        wall: Wall thickness around each tube bore
        screw_diameter: Screw shaft diameter
        screw_head_diameter: Screw head diameter
        countersunk: Countersunk (conical) seat if True, flat counterbore otherwise
        rounding_radius: Radius of the rounded vertical plate edges
        chamfer: Depth of the conical bevel at bore entrances
        fit_epsilon: Default diameter increment added to every bore
        segments: Points per circle when building hull profiles
        slack: Small overlap used to avoid coincident faces in booleans
        overcut: Height of the screw head clearance above the part
        strict: Raise instead of warn on unintended tube overlaps
    """

    thickness: float = 3.0
    wall: float = 2.0
    screw_diameter: float = 3.5
    screw_head_diameter: float = 7.0
    countersunk: bool = True
    rounding_radius: float = 3.0
    chamfer: float = 1.0
    fit_epsilon: float = 0.5
    segments: int = 64
    slack: float = 0.01
    overcut: float = 50.0
    strict: bool = False

    def __post_init__(self):
        for name in ("thickness", "wall", "screw_diameter", "screw_head_diameter"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.screw_head_diameter < self.screw_diameter:
            raise ValueError(
                f"screw_head_diameter ({self.screw_head_diameter}) is smaller than "
                f"screw_diameter ({self.screw_diameter})"
            )
        if self.segments < 8:
            raise ValueError(f"segments must be at least 8, got {self.segments}")
        for name in ("rounding_radius", "chamfer", "fit_epsilon", "slack", "overcut"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")

    @property
    def screw_edge_clearance(self) -> float:
        """Distance from a screw centre to the plate edge and to a tube body."""
        return (self.screw_diameter + self.screw_head_diameter) / 2.0

    def with_overrides(self, **overrides: Any) -> MountConfig:
        """Return a copy with the given fields replaced (``None`` values are ignored)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> MountConfig:
        """Build a config from a mapping, rejecting unknown keys."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> MountConfig:
        """Load a config from a YAML file (an optional top-level ``mount`` key is unwrapped)."""
        with open(yaml_path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict) and "mount" in data:
            data = data["mount"]
        return cls.from_dict(data)


DEFAULT_CONFIG = MountConfig()
