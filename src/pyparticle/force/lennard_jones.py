"""
Lennard-Jones interaction with per-pair sigma.

The classic 12-6 potential provides short-range repulsion (collision
avoidance) and weak attraction between every pair, neutral or not.
"""
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .force_term import PairwiseForce
from .pairs import PairList

if TYPE_CHECKING:
    from pyparticle.core import ParticleStore


class LennardJonesForce(PairwiseForce):
    """
    Lennard-Jones 12-6 force.

    U(d) = 4ε[(σ/d)¹² - (σ/d)⁶]
    F(d) = -dU/dd = 24ε/d * [2(σ/d)¹² - (σ/d)⁶]   (positive = repulsive)

    where σ = (radius_i + radius_j) * sigma_scale for each pair. The
    term is evaluated for every pair without a cutoff.

    Attributes:
        epsilon: Well depth ε.
        sigma_scale: Factor applied to the sum of radii.

    Example:
        >>> lj = LennardJonesForce(epsilon=1.0, sigma_scale=0.5, distance_floor=0.5)
        >>> lj.compute_pair_energy(2 ** (1 / 6), sigma=1.0)
        -1.0
    """

    def __init__(self, epsilon: float, sigma_scale: float, distance_floor: float) -> None:
        """
        Initialize Lennard-Jones force.

        Args:
            epsilon: Well depth ε (non-negative).
            sigma_scale: σ per pair is (radius_i + radius_j) * sigma_scale.
            distance_floor: Minimum separation.
        """
        super().__init__(distance_floor)
        if epsilon < 0:
            raise ValueError(f"Epsilon must be non-negative, got {epsilon}")
        if sigma_scale <= 0:
            raise ValueError(f"Sigma scale must be positive, got {sigma_scale}")
        self.epsilon = epsilon
        self.sigma_scale = sigma_scale

    def _sr6(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        radii = store.radii()
        sigma = (radii[pairs.i] + radii[pairs.j]) * self.sigma_scale
        return (sigma / pairs.distance) ** 6

    def pair_magnitudes(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        sr6 = self._sr6(store, pairs)
        return 24.0 * self.epsilon * (2.0 * sr6 * sr6 - sr6) / pairs.distance

    def pair_energies(self, store: "ParticleStore", pairs: PairList) -> NDArray[np.floating]:
        sr6 = self._sr6(store, pairs)
        return 4.0 * self.epsilon * (sr6 * sr6 - sr6)

    def compute_pair_energy(self, r: float, sigma: float) -> float:
        """
        LJ energy for a single pair at distance r.

        Args:
            r: Separation (floored internally).
            sigma: Pair σ.
        """
        d = max(r, self.distance_floor)
        sr6 = (sigma / d) ** 6
        return 4.0 * self.epsilon * (sr6 * sr6 - sr6)

    def compute_pair_force(self, r: float, sigma: float) -> float:
        """
        Analytical LJ force magnitude for a single pair.

        F(d) = 24ε/d * [2(σ/d)¹² - (σ/d)⁶]

        Args:
            r: Separation (floored internally).
            sigma: Pair σ.

        Returns:
            Force magnitude (positive = repulsive).
        """
        d = max(r, self.distance_floor)
        sr6 = (sigma / d) ** 6
        return 24.0 * self.epsilon * (2.0 * sr6 * sr6 - sr6) / d

    def get_name(self) -> str:
        return (
            f"LJ(ε={self.epsilon}, σ-scale={self.sigma_scale}, "
            f"floor={self.distance_floor})"
        )
