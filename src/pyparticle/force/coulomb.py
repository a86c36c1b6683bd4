"""
Inverse-square central forces: electrostatics and gravity.

Both share the 1/d² law; Coulomb pairs charges and may repel or attract,
gravity pairs masses and always attracts.
"""
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .force_term import PairwiseForce
from .pairs import PairList

if TYPE_CHECKING:
    from pyparticle.core import ParticleStore


class CoulombForce(PairwiseForce):
    """
    Coulomb interaction between charged particles.

    F(d) = k * q_i * q_j / d²      (positive = repulsive)
    U(d) = k * q_i * q_j / d

    Like charges repel, unlike charges attract. Pairs where either charge
    is at or below ``charge_threshold`` in magnitude contribute nothing.

    Attributes:
        k: Coulomb constant.
        charge_threshold: Charges with |q| <= threshold count as neutral.

    Example:
        >>> coulomb = CoulombForce(k=100.0, distance_floor=0.5)
        >>> coulomb.compute_pair_force(2.0, 1.0, -1.0)
        -25.0
    """

    def __init__(
        self,
        k: float,
        distance_floor: float,
        charge_threshold: float = 0.01,
    ) -> None:
        super().__init__(distance_floor)
        if k < 0:
            raise ValueError(f"Coulomb constant must be non-negative, got {k}")
        if charge_threshold < 0:
            raise ValueError(f"Charge threshold must be non-negative, got {charge_threshold}")
        self.k = k
        self.charge_threshold = charge_threshold

    def _charge_products(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        charges = store.charges()
        q_i = charges[pairs.i]
        q_j = charges[pairs.j]
        charged = (np.abs(q_i) > self.charge_threshold) & (np.abs(q_j) > self.charge_threshold)
        return np.where(charged, q_i * q_j, 0.0)

    def pair_magnitudes(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        return self.k * self._charge_products(store, pairs) / pairs.distance ** 2

    def pair_energies(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        return self.k * self._charge_products(store, pairs) / pairs.distance

    def compute_pair_force(self, r: float, q_i: float, q_j: float) -> float:
        """
        Force magnitude for a single pair at distance r.

        Args:
            r: Separation (floored internally).
            q_i: Charge of the first particle.
            q_j: Charge of the second particle.

        Returns:
            Signed magnitude (positive = repulsive).
        """
        if abs(q_i) <= self.charge_threshold or abs(q_j) <= self.charge_threshold:
            return 0.0
        d = max(r, self.distance_floor)
        return self.k * q_i * q_j / (d * d)

    def get_name(self) -> str:
        return f"Coulomb(k={self.k}, floor={self.distance_floor})"


class GravityForce(PairwiseForce):
    """
    Newtonian gravity between all particles.

    F(d) = -G * m_i * m_j / d²     (always attractive)
    U(d) = -G * m_i * m_j / d

    Attributes:
        g: Gravitational constant.
    """

    def __init__(self, g: float, distance_floor: float) -> None:
        super().__init__(distance_floor)
        if g < 0:
            raise ValueError(f"Gravitational constant must be non-negative, got {g}")
        self.g = g

    def _mass_products(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        masses = store.masses()
        return masses[pairs.i] * masses[pairs.j]

    def pair_magnitudes(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        return -self.g * self._mass_products(store, pairs) / pairs.distance ** 2

    def pair_energies(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        return -self.g * self._mass_products(store, pairs) / pairs.distance

    def get_name(self) -> str:
        return f"Gravity(G={self.g}, floor={self.distance_floor})"
