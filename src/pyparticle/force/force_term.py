"""
Abstract base classes for force terms.

A force term adds its contribution into a caller-owned accumulator. Pair
terms only describe a scalar magnitude per pair; the scatter into the
accumulator is shared.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np
from numpy.typing import NDArray

from .pairs import PairList

if TYPE_CHECKING:
    from pyparticle.bonds import BondGraph
    from pyparticle.core import ParticleStore


class ForceTerm(ABC):
    """
    Abstract base for force contributions (Strategy Pattern).

    Each term is independent and additive: the total force is the sum of
    every term's contribution, and each term's own contribution is a sum of
    independent per-pair (or per-bond) pieces.

    Example:
        >>> forces = np.zeros_like(store.positions)
        >>> term.accumulate(store, graph, forces)
    """

    @abstractmethod
    def accumulate(
        self,
        store: "ParticleStore",
        graph: "BondGraph",
        forces: NDArray[np.floating],
    ) -> None:
        """
        Add this term's forces into ``forces`` in place.

        Args:
            store: Particle store.
            graph: Bond graph.
            forces: (N, D) accumulator, same row order as the store.
        """
        pass

    @abstractmethod
    def compute_energy(self, store: "ParticleStore", graph: "BondGraph") -> float:
        """Return this term's potential energy."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this term."""
        pass


class PairwiseForce(ForceTerm):
    """
    Base for central forces acting along the line between two particles.

    Subclasses return a signed magnitude per pair, positive meaning
    repulsion. For a pair (i, j) with direction r̂ pointing from i to j:

        forces[i] -= magnitude * r̂
        forces[j] += magnitude * r̂

    Attributes:
        distance_floor: Minimum separation used for this term.
    """

    def __init__(self, distance_floor: float) -> None:
        if distance_floor <= 0:
            raise ValueError(f"Distance floor must be positive, got {distance_floor}")
        self.distance_floor = distance_floor

    @abstractmethod
    def pair_magnitudes(
        self, store: "ParticleStore", pairs: PairList
    ) -> NDArray[np.floating]:
        """(P,) signed force magnitudes, positive = repulsive."""
        pass

    @abstractmethod
    def pair_energies(
        self, store: "ParticleStore", pairs: PairList
    ) -> NDArray[np.floating]:
        """(P,) pair potential energies."""
        pass

    def pairs_for(
        self, store: "ParticleStore", pairs: Optional[PairList] = None
    ) -> PairList:
        """Reuse ``pairs`` when built with this term's floor, else build."""
        if pairs is not None and pairs.distance_floor == self.distance_floor:
            return pairs
        return PairList.build(store.positions, self.distance_floor)

    def accumulate(
        self,
        store: "ParticleStore",
        graph: "BondGraph",
        forces: NDArray[np.floating],
        pairs: Optional[PairList] = None,
    ) -> None:
        """Scatter pair forces into the accumulator."""
        if len(store) < 2:
            return
        pairs = self.pairs_for(store, pairs)
        magnitudes = self.pair_magnitudes(store, pairs)
        pair_forces = pairs.unit * magnitudes[:, np.newaxis]
        np.add.at(forces, pairs.i, -pair_forces)
        np.add.at(forces, pairs.j, pair_forces)

    def compute_energy(
        self,
        store: "ParticleStore",
        graph: "BondGraph",
        pairs: Optional[PairList] = None,
    ) -> float:
        if len(store) < 2:
            return 0.0
        return float(np.sum(self.pair_energies(store, self.pairs_for(store, pairs))))
