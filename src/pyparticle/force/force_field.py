"""
Force field: the composite of every active force term.

Brings the pairwise terms and the bond springs together behind one
compute_forces() call that returns a fresh, step-scoped accumulator.
"""
from typing import TYPE_CHECKING, Dict, List

import numpy as np
from numpy.typing import NDArray

from .bond_spring import HarmonicBondForce
from .coulomb import CoulombForce, GravityForce
from .force_term import ForceTerm, PairwiseForce
from .lennard_jones import LennardJonesForce
from .pairs import PairList

if TYPE_CHECKING:
    from pyparticle.bonds import BondGraph
    from pyparticle.core import ParticleStore, SimulationConfig


class ForceField:
    """
    Combine multiple force terms (Composite Pattern).

    The total force on each particle is the sum of every term's
    contribution. Pair geometry is computed once per distance floor and
    shared between pairwise terms. Summation order is fixed (terms in list
    order, pairs in row-major i < j order), so identical inputs always give
    bit-identical forces.

    Complexity is O(N²) for the pairwise terms and O(bonds) for springs.

    Example:
        >>> field = ForceField([
        ...     CoulombForce(k=100.0, distance_floor=0.5),
        ...     LennardJonesForce(epsilon=1.0, sigma_scale=0.5, distance_floor=0.5),
        ... ])
        >>> forces = field.compute_forces(store, graph)
    """

    def __init__(self, terms: List[ForceTerm]) -> None:
        """
        Initialize the force field.

        Args:
            terms: Force terms to sum.

        Raises:
            ValueError: If no terms are given.
        """
        if not terms:
            raise ValueError("Must provide at least one force term")
        self.terms = list(terms)

    @classmethod
    def from_config(cls, config: "SimulationConfig") -> "ForceField":
        """
        Build the term list enabled by ``config``.

        Raises:
            ValueError: If the config enables no term at all.
        """
        floor = config.distance_floor
        terms: List[ForceTerm] = []
        if config.gravity:
            terms.append(GravityForce(g=config.gravity_constant, distance_floor=floor))
        if config.coulomb:
            terms.append(
                CoulombForce(
                    k=config.k_coulomb,
                    distance_floor=floor,
                    charge_threshold=config.charge_threshold,
                )
            )
        if config.lennard_jones:
            terms.append(
                LennardJonesForce(
                    epsilon=config.lj_epsilon,
                    sigma_scale=config.lj_sigma,
                    distance_floor=floor,
                )
            )
        if config.bonds:
            terms.append(
                HarmonicBondForce(
                    k_bond=config.bond_strength,
                    distance_floor=config.bond_distance_floor,
                )
            )
        return cls(terms)

    def compute_forces(
        self, store: "ParticleStore", graph: "BondGraph"
    ) -> NDArray[np.floating]:
        """
        Compute the total force on every particle.

        Args:
            store: Particle store.
            graph: Bond graph.

        Returns:
            (N, D) force array, freshly zeroed and owned by the caller.
        """
        forces = np.zeros((len(store), store.dimensions), dtype=np.float64)
        if len(store) == 0:
            return forces

        pair_cache: Dict[float, PairList] = {}
        for term in self.terms:
            if isinstance(term, PairwiseForce):
                term.accumulate(store, graph, forces, pairs=self._pairs(store, term, pair_cache))
            else:
                term.accumulate(store, graph, forces)
        return forces

    def compute_energy(self, store: "ParticleStore", graph: "BondGraph") -> float:
        """Return the total potential energy of all terms."""
        if len(store) == 0:
            return 0.0
        pair_cache: Dict[float, PairList] = {}
        energy = 0.0
        for term in self.terms:
            if isinstance(term, PairwiseForce):
                energy += term.compute_energy(
                    store, graph, pairs=self._pairs(store, term, pair_cache)
                )
            else:
                energy += term.compute_energy(store, graph)
        return energy

    @staticmethod
    def _pairs(
        store: "ParticleStore", term: PairwiseForce, cache: Dict[float, PairList]
    ) -> PairList:
        floor = term.distance_floor
        if floor not in cache:
            cache[floor] = PairList.build(store.positions, floor)
        return cache[floor]

    def add_term(self, term: ForceTerm) -> None:
        """Add a term to the field."""
        self.terms.append(term)

    def get_name(self) -> str:
        """Return composite name listing all terms."""
        names = [t.get_name() for t in self.terms]
        return f"ForceField({', '.join(names)})"
