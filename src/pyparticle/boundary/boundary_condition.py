"""
Abstract base class for boundary policies.

This module provides the BoundaryCondition ABC that defines
the interface for all boundary strategies.
"""
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray


class BoundaryCondition(ABC):
    """
    Abstract base for boundary policies (Strategy Pattern).

    A boundary policy runs after integration and may correct positions and
    velocities in place. Different implementations (soft wall, open) are
    interchangeable per scenario.

    Design Notes:
        - Policies are STATELESS; they only see the arrays passed in.

    Example:
        >>> bc = SoftWallBoundary(bound=12.0)
        >>> bc.apply(store.positions, store.velocities)
    """

    @abstractmethod
    def apply(
        self,
        positions: NDArray[np.floating],
        velocities: NDArray[np.floating],
    ) -> None:
        """
        Enforce the boundary in place.

        Args:
            positions: (N, D) positions, modified in place.
            velocities: (N, D) velocities, modified in place.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get human-readable name of this boundary policy.

        Returns:
            Name string (e.g., "SoftWall(±12.0)", "Open").
        """
        pass
