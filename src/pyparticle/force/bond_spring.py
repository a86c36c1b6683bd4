"""
Harmonic bond springs.
"""
from typing import TYPE_CHECKING, Tuple

import numpy as np
from numpy.typing import NDArray

from .force_term import ForceTerm

if TYPE_CHECKING:
    from pyparticle.bonds import BondGraph
    from pyparticle.core import ParticleStore


class HarmonicBondForce(ForceTerm):
    """
    Hooke spring along every bond.

    For bond (a, b) with r = x_b - x_a:

        disp = |r| - (radius_a + radius_b)
        F_a = +k * disp * r / max(|r|, floor)
        F_b = -k * disp * r / max(|r|, floor)
        U   = (1/2) * k * disp²

    A stretched bond pulls its endpoints together, a compressed one
    pushes them apart.

    Attributes:
        k_bond: Spring constant.
        distance_floor: Minimum separation used to normalise the bond
            direction. Coincident endpoints get a zero direction.
    """

    def __init__(self, k_bond: float, distance_floor: float) -> None:
        if k_bond < 0:
            raise ValueError(f"Bond strength must be non-negative, got {k_bond}")
        if distance_floor <= 0:
            raise ValueError(f"Distance floor must be positive, got {distance_floor}")
        self.k_bond = k_bond
        self.distance_floor = distance_floor

    def _geometry(
        self, store: "ParticleStore", graph: "BondGraph"
    ) -> Tuple[NDArray[np.intp], NDArray[np.intp], NDArray[np.floating], NDArray[np.floating]]:
        a_idx = np.array([store.index_of(bond.a) for bond in graph], dtype=np.intp)
        b_idx = np.array([store.index_of(bond.b) for bond in graph], dtype=np.intp)
        delta = store.positions[b_idx] - store.positions[a_idx]
        distance = np.linalg.norm(delta, axis=1)
        radii = store.radii()
        displacement = distance - (radii[a_idx] + radii[b_idx])
        unit = delta / np.maximum(distance, self.distance_floor)[:, np.newaxis]
        return a_idx, b_idx, displacement, unit

    def accumulate(
        self,
        store: "ParticleStore",
        graph: "BondGraph",
        forces: NDArray[np.floating],
    ) -> None:
        if len(graph) == 0:
            return
        a_idx, b_idx, displacement, unit = self._geometry(store, graph)
        spring = self.k_bond * displacement[:, np.newaxis] * unit
        np.add.at(forces, a_idx, spring)
        np.add.at(forces, b_idx, -spring)

    def compute_energy(self, store: "ParticleStore", graph: "BondGraph") -> float:
        if len(graph) == 0:
            return 0.0
        _, _, displacement, _ = self._geometry(store, graph)
        return float(0.5 * self.k_bond * np.sum(displacement ** 2))

    def get_name(self) -> str:
        return f"HarmonicBond(k={self.k_bond}, floor={self.distance_floor})"
