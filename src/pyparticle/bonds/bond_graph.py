"""
Bond graph over particle ids.

The graph keeps the edge list and the per-particle adjacency together, so
the simple-graph, symmetry and valence invariants are enforced in one
place instead of at every site that mutates a particle.
"""
from typing import TYPE_CHECKING, Dict, Iterator, List, Set, Tuple

from pyparticle.core.errors import BondInvariantError

from .bond import Bond

if TYPE_CHECKING:
    from pyparticle.core import ParticleStore


def same_sign_charges(charge_a: float, charge_b: float) -> bool:
    """True when both charges are nonzero and share a sign."""
    return charge_a * charge_b > 0.0


class BondGraph:
    """
    Undirected simple graph of bonds with per-particle valence limits.

    Invariants:
        - At most one bond per unordered pair, no self-bonds.
        - a in partners(b) <=> b in partners(a).
        - bond_count(p) <= kind(p).max_bonds() for every particle.
        - No bond joins two particles whose charges share a sign.

    Example:
        >>> graph = BondGraph()
        >>> graph.create_bond(store, o_id, h_id)
        True
        >>> graph.create_bond(store, h_id, o_id)  # already bonded
        False
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""
        self._bonds: List[Bond] = []
        self._keys: Set[Tuple[int, int]] = set()
        self._adjacency: Dict[int, List[int]] = {}

    # ------------------------------------------------------------------ #
    #  Mutation
    # ------------------------------------------------------------------ #

    def create_bond(self, store: "ParticleStore", a: int, b: int) -> bool:
        """
        Bond particles ``a`` and ``b`` if every invariant allows it.

        Args:
            store: Particle store used for valence and charge lookups.
            a: Id of the first particle.
            b: Id of the second particle.

        Returns:
            True if a new bond was created; False if the pair is the same
            particle, already bonded, either endpoint is at its valence
            limit, or both carry same-sign charge.

        Raises:
            ParticleNotFoundError: If either id is unknown.
        """
        particle_a = store.get(a)
        particle_b = store.get(b)

        if a == b:
            return False
        key = (a, b) if a < b else (b, a)
        if key in self._keys:
            return False
        if self.bond_count(a) >= particle_a.max_bonds:
            return False
        if self.bond_count(b) >= particle_b.max_bonds:
            return False
        if same_sign_charges(particle_a.charge, particle_b.charge):
            return False

        self._bonds.append(Bond(a, b))
        self._keys.add(key)
        self._adjacency.setdefault(a, []).append(b)
        self._adjacency.setdefault(b, []).append(a)
        return True

    def remove_bond(self, a: int, b: int) -> bool:
        """
        Remove the bond between ``a`` and ``b``, updating both endpoints.

        Returns:
            True if a bond was removed, False if none existed.
        """
        key = (a, b) if a < b else (b, a)
        if key not in self._keys:
            return False
        self._keys.discard(key)
        self._bonds = [bond for bond in self._bonds if bond.key != key]
        self._adjacency[a].remove(b)
        self._adjacency[b].remove(a)
        return True

    def clear(self) -> None:
        """Remove every bond."""
        self._bonds.clear()
        self._keys.clear()
        self._adjacency.clear()

    # ------------------------------------------------------------------ #
    #  Queries
    # ------------------------------------------------------------------ #

    def has_bond(self, a: int, b: int) -> bool:
        return ((a, b) if a < b else (b, a)) in self._keys

    def partners(self, particle_id: int) -> Tuple[int, ...]:
        """Ids bonded to ``particle_id``, in bond-creation order."""
        return tuple(self._adjacency.get(particle_id, ()))

    def bond_count(self, particle_id: int) -> int:
        return len(self._adjacency.get(particle_id, ()))

    def can_bond(self, store: "ParticleStore", particle_id: int) -> bool:
        """True if the particle is below its valence limit."""
        return self.bond_count(particle_id) < store.get(particle_id).max_bonds

    @property
    def bonds(self) -> Tuple[Bond, ...]:
        """All bonds, in creation order."""
        return tuple(self._bonds)

    def __len__(self) -> int:
        return len(self._bonds)

    def __iter__(self) -> Iterator[Bond]:
        return iter(self._bonds)

    def __contains__(self, bond: object) -> bool:
        return isinstance(bond, Bond) and bond.key in self._keys

    # ------------------------------------------------------------------ #
    #  Invariants
    # ------------------------------------------------------------------ #

    def check_invariants(self, store: "ParticleStore") -> None:
        """
        Verify every graph invariant against ``store``.

        Raises:
            BondInvariantError: Describing the first violation found.
        """
        seen: Set[Tuple[int, int]] = set()
        for bond in self._bonds:
            if bond.key in seen:
                raise BondInvariantError(f"Duplicate bond {bond.key}")
            seen.add(bond.key)
            if bond.b not in self._adjacency.get(bond.a, ()):
                raise BondInvariantError(f"{bond.b} missing from partners of {bond.a}")
            if bond.a not in self._adjacency.get(bond.b, ()):
                raise BondInvariantError(f"{bond.a} missing from partners of {bond.b}")
            if same_sign_charges(store.get(bond.a).charge, store.get(bond.b).charge):
                raise BondInvariantError(f"Same-sign charges bonded: {bond.key}")
        if seen != self._keys:
            raise BondInvariantError("Edge index out of sync with bond list")

        for particle_id, partners in self._adjacency.items():
            particle = store.get(particle_id)
            if len(partners) > particle.max_bonds:
                raise BondInvariantError(
                    f"Particle {particle_id} has {len(partners)} bonds, "
                    f"valence is {particle.max_bonds}"
                )
            for partner in partners:
                if particle_id not in self._adjacency.get(partner, ()):
                    raise BondInvariantError(
                        f"Asymmetric adjacency between {particle_id} and {partner}"
                    )

    def __repr__(self) -> str:
        return f"BondGraph(n_bonds={len(self._bonds)})"
