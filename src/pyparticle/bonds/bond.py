"""
Bond record.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from pyparticle.core import ParticleStore


@dataclass(frozen=True)
class Bond:
    """
    Undirected bond between two particles.

    Attributes:
        a: Id of the first endpoint (as requested at creation).
        b: Id of the second endpoint.
        order: Bond order. Always 1 today; kept for double/triple bonds.

    Example:
        >>> bond = Bond(3, 1)
        >>> bond.key
        (1, 3)
        >>> bond.other(3)
        1
    """
    a: int
    b: int
    order: int = 1

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise ValueError(f"A bond needs two distinct particles, got {self.a} twice")
        if self.order < 1:
            raise ValueError(f"Bond order must be >= 1, got {self.order}")

    @property
    def key(self) -> Tuple[int, int]:
        """Order-independent identity of the bond."""
        return (self.a, self.b) if self.a < self.b else (self.b, self.a)

    def other(self, particle_id: int) -> int:
        """Return the endpoint opposite ``particle_id``."""
        if particle_id == self.a:
            return self.b
        if particle_id == self.b:
            return self.a
        raise ValueError(f"Particle {particle_id} is not an endpoint of {self}")

    def rest_length(self, store: "ParticleStore") -> float:
        """Equilibrium length: the sum of the endpoint radii."""
        return store.get(self.a).radius + store.get(self.b).radius
