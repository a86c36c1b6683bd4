"""
Unordered pair geometry shared by all pairwise force terms.
"""
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class PairList:
    """
    Geometry of every unordered particle pair (i < j), in row-major order.

    Distances are floored: ``distance = max(|r|, distance_floor)`` and
    ``unit = r / distance``. With the floor in place no division by zero
    can occur; two coincident particles get a zero direction vector and
    therefore exert no force on each other.

    Attributes:
        i: (P,) row index of the first particle of each pair.
        j: (P,) row index of the second particle.
        delta: (P, D) displacement x_j - x_i.
        distance: (P,) floored separation.
        unit: (P, D) direction delta / distance.
        distance_floor: Floor that was applied.
    """
    i: NDArray[np.intp]
    j: NDArray[np.intp]
    delta: NDArray[np.floating]
    distance: NDArray[np.floating]
    unit: NDArray[np.floating]
    distance_floor: float

    @classmethod
    def build(cls, positions: NDArray[np.floating], distance_floor: float) -> "PairList":
        """
        Build the pair list for an (N, D) position array.

        Args:
            positions: (N, D) particle positions.
            distance_floor: Minimum separation (positive).

        Returns:
            PairList with N*(N-1)/2 entries.
        """
        if distance_floor <= 0:
            raise ValueError(f"Distance floor must be positive, got {distance_floor}")
        n = len(positions)
        i, j = np.triu_indices(n, k=1)
        delta = positions[j] - positions[i]
        distance = np.maximum(np.linalg.norm(delta, axis=1), distance_floor)
        unit = delta / distance[:, np.newaxis]
        return cls(i, j, delta, distance, unit, distance_floor)

    def __len__(self) -> int:
        return len(self.i)
