"""
Soft-wall boundary.

Particles that leave the box [-bound, bound] on any axis are put back on
the wall and bounce off it with reduced speed.
"""
import numpy as np
from numpy.typing import NDArray

from .boundary_condition import BoundaryCondition


class SoftWallBoundary(BoundaryCondition):
    """
    Inelastic walls at ±bound on every axis.

    For each axis independently, a coordinate with |x| > bound is clamped
    to sign(x) * bound and that velocity component is multiplied by
    -restitution. Other axes of the same particle are untouched.

    Attributes:
        bound: Half-width of the box.
        restitution: Fraction of normal speed kept after the bounce.

    Example:
        >>> bc = SoftWallBoundary(bound=12.0, restitution=0.5)
        >>> positions = np.array([[13.0, 0.0]])
        >>> velocities = np.array([[4.0, 1.0]])
        >>> bc.apply(positions, velocities)
        >>> positions, velocities  # [[12., 0.]], [[-2., 1.]]
    """

    def __init__(self, bound: float, restitution: float = 0.5) -> None:
        if bound <= 0:
            raise ValueError(f"Wall bound must be positive, got {bound}")
        if not (0.0 <= restitution <= 1.0):
            raise ValueError(f"Restitution must be in [0, 1], got {restitution}")
        self.bound = float(bound)
        self.restitution = float(restitution)

    def apply(
        self,
        positions: NDArray[np.floating],
        velocities: NDArray[np.floating],
    ) -> None:
        outside = np.abs(positions) > self.bound
        if not outside.any():
            return
        positions[outside] = np.sign(positions[outside]) * self.bound
        velocities[outside] *= -self.restitution

    def get_name(self) -> str:
        return f"SoftWall(±{self.bound}, restitution={self.restitution})"
