"""
Boundary module for the particle engine.

This module provides the Strategy pattern implementation for
boundary policies:
- SoftWallBoundary: Clamp and damped bounce at ±bound per axis
- OpenBoundary: No boundary
"""
from typing import Any, Dict, Optional

from pyparticle.core import constants
from pyparticle.core.errors import ConfigurationError

from .boundary_condition import BoundaryCondition
from .open_bc import OpenBoundary
from .soft_wall import SoftWallBoundary


def boundary_from_config(config: Optional[Dict[str, Any]]) -> BoundaryCondition:
    """
    Build a boundary policy from a mapping.

    Args:
        config: e.g. {"type": "soft_wall", "bound": 12.0, "restitution": 0.5}
            or {"type": "open"}. None means the default soft wall.

    Raises:
        ConfigurationError: For an unknown boundary type.
    """
    config = config or {"type": "soft_wall"}
    bc_type = str(config.get("type", "soft_wall")).lower()

    if bc_type == "soft_wall":
        return SoftWallBoundary(
            bound=float(config.get("bound", constants.WALL_BOUND)),
            restitution=float(config.get("restitution", constants.WALL_RESTITUTION)),
        )
    elif bc_type == "open":
        return OpenBoundary()
    else:
        raise ConfigurationError(f"Unknown boundary type: {bc_type}")


__all__ = [
    "BoundaryCondition",
    "SoftWallBoundary",
    "OpenBoundary",
    "boundary_from_config",
]
