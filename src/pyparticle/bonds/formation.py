"""
Proximity-based bond formation.

After each integration step, particles that are close enough and moving
slowly enough relative to each other bond, subject to the valence and
charge rules of the BondGraph.
"""
import logging
from typing import TYPE_CHECKING, List

import numpy as np

from .bond import Bond
from .bond_graph import BondGraph

if TYPE_CHECKING:
    from pyparticle.core import ParticleStore

logger = logging.getLogger(__name__)


class BondFormation:
    """
    Greedy bond-formation pass.

    A pair (i, j) bonds when both are below valence, their charges do not
    share a sign, and

        |x_j - x_i| < (radius_i + radius_j) * bond_distance_factor
        |v_j - v_i| < max_bonding_speed

    Candidate pairs are visited in increasing (i, j) row order and valence
    is consumed as bonds form, so among competing candidates the earlier
    pair wins. The order decides which bonds form, never whether the
    valence invariant holds.

    Attributes:
        bond_distance_factor: Multiplier on the sum of radii.
        max_bonding_speed: Relative-speed limit for bonding.

    Example:
        >>> formation = BondFormation(bond_distance_factor=1.2, max_bonding_speed=2.0)
        >>> new_bonds = formation.try_form_bonds(store, graph)
    """

    def __init__(self, bond_distance_factor: float, max_bonding_speed: float) -> None:
        if bond_distance_factor <= 0:
            raise ValueError(
                f"bond_distance_factor must be positive, got {bond_distance_factor}"
            )
        if max_bonding_speed <= 0:
            raise ValueError(f"max_bonding_speed must be positive, got {max_bonding_speed}")
        self.bond_distance_factor = bond_distance_factor
        self.max_bonding_speed = max_bonding_speed

    def try_form_bonds(self, store: "ParticleStore", graph: BondGraph) -> List[Bond]:
        """
        Form every eligible bond for the current configuration.

        Args:
            store: Particle store (positions, velocities, radii, charges).
            graph: Bond graph to extend.

        Returns:
            The bonds created by this pass, in creation order.
        """
        n = len(store)
        if n < 2:
            return []

        ids = store.ids()
        max_bonds = np.array([p.max_bonds for p in store], dtype=np.intp)
        counts = np.array([graph.bond_count(pid) for pid in ids], dtype=np.intp)
        open_rows = np.flatnonzero(counts < max_bonds)
        if len(open_rows) < 2:
            return []

        i_idx, j_idx = np.triu_indices(len(open_rows), k=1)
        i_idx = open_rows[i_idx]
        j_idx = open_rows[j_idx]

        charges = store.charges()
        allowed = charges[i_idx] * charges[j_idx] <= 0.0

        positions = store.positions
        velocities = store.velocities
        radii = store.radii()
        distance = np.linalg.norm(positions[j_idx] - positions[i_idx], axis=1)
        threshold = (radii[i_idx] + radii[j_idx]) * self.bond_distance_factor
        speed = np.linalg.norm(velocities[j_idx] - velocities[i_idx], axis=1)

        candidates = np.flatnonzero(
            allowed & (distance < threshold) & (speed < self.max_bonding_speed)
        )

        formed: List[Bond] = []
        for c in candidates:
            a = int(ids[i_idx[c]])
            b = int(ids[j_idx[c]])
            if graph.create_bond(store, a, b):
                formed.append(Bond(a, b))

        if formed:
            logger.debug("Formed %d bond(s); graph now has %d", len(formed), len(graph))
        return formed

    def get_name(self) -> str:
        return (
            f"BondFormation(factor={self.bond_distance_factor}, "
            f"max_speed={self.max_bonding_speed})"
        )
