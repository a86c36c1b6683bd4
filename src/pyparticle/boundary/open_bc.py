"""
Open boundary: particles may leave the visible region freely.
"""
import numpy as np
from numpy.typing import NDArray

from .boundary_condition import BoundaryCondition


class OpenBoundary(BoundaryCondition):
    """
    No boundary at all.

    Used for gravitational scenarios where bodies may drift out of view.
    """

    def apply(
        self,
        positions: NDArray[np.floating],
        velocities: NDArray[np.floating],
    ) -> None:
        """Leave positions and velocities unchanged."""
        pass

    def get_name(self) -> str:
        """Return 'Open' as the boundary name."""
        return "Open"
