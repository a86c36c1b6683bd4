"""
Damped semi-implicit Euler integrator.

The velocity is updated first and the new velocity moves the position,
which keeps the scheme stable for oscillatory forces when combined with
sub-stepping.
"""
from typing import TYPE_CHECKING, Tuple

import numpy as np
from numpy.typing import NDArray

from .integrator import Integrator

if TYPE_CHECKING:
    from pyparticle.core import ParticleStore


class DampedEulerIntegrator(Integrator):
    """
    Semi-implicit (symplectic) Euler with global velocity damping.

    Algorithm (per particle, for each time step dt):
        1. a = F / m
        2. v = v + a * dt
        3. v = v * damping
        4. x = x + v * dt

    Damping is a single scalar in (0, 1]; 1.0 disables it. Lower values
    drain kinetic energy, so it doubles as a runtime "temperature" knob.

    Attributes:
        damping: Velocity multiplier applied every step.

    Example:
        >>> integrator = DampedEulerIntegrator(damping=0.98)
        >>> integrator.damping = 0.9  # cool the system down
    """

    def __init__(self, damping: float = 1.0) -> None:
        self.damping = damping

    @property
    def damping(self) -> float:
        return self._damping

    @damping.setter
    def damping(self, value: float) -> None:
        if not (0.0 < value <= 1.0):
            raise ValueError(f"Damping must be in (0, 1], got {value}")
        self._damping = float(value)

    def _advance(
        self,
        store: "ParticleStore",
        forces: NDArray[np.floating],
        dt: float,
    ) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        accelerations = forces / store.masses()[:, np.newaxis]
        velocities = (store.velocities + accelerations * dt) * self._damping
        positions = store.positions + velocities * dt
        return positions, velocities

    def get_name(self) -> str:
        return f"DampedEuler(damping={self._damping})"
