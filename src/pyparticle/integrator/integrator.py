"""
Abstract base class for time integrators.

This module provides the Integrator ABC that defines the interface
for all integration algorithms.
"""
from abc import ABC, abstractmethod
import math
from typing import TYPE_CHECKING, Tuple

import numpy as np
from numpy.typing import NDArray

from pyparticle.core.errors import NumericalInstabilityError

if TYPE_CHECKING:
    from pyparticle.core import ParticleStore


class Integrator(ABC):
    """
    Abstract base for time integration algorithms (Strategy Pattern).

    Integrators advance velocities and positions by one step given the
    forces accumulated for that step. They hold no per-step state, so the
    same instance can be driven through any number of sub-steps. A step is
    computed on fresh arrays and only committed to the store once every
    value is finite, so a failed step leaves the store untouched.

    Example:
        >>> integrator = DampedEulerIntegrator(damping=0.98)
        >>> integrator.integrate(store, forces, dt=0.004)
    """

    @abstractmethod
    def _advance(
        self,
        store: "ParticleStore",
        forces: NDArray[np.floating],
        dt: float,
    ) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return the new (positions, velocities) without touching the store."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this integrator."""
        pass

    def integrate(
        self,
        store: "ParticleStore",
        forces: NDArray[np.floating],
        dt: float,
    ) -> None:
        """
        Advance the store by one time step.

        Args:
            store: Particle store to update.
            forces: (N, D) accumulated forces, same row order as the store.
            dt: Time step size.

        Raises:
            ValueError: If dt is not positive and finite, or the force
                array has the wrong shape.
            NumericalInstabilityError: If any position or velocity would
                become NaN or infinite. The store is left unchanged.
        """
        if not (math.isfinite(dt) and dt > 0):
            raise ValueError(f"Time step must be positive, got {dt}")
        if len(store) == 0:
            return
        if forces.shape != store.positions.shape:
            raise ValueError(
                f"Forces shape {forces.shape} must match "
                f"positions shape {store.positions.shape}"
            )
        positions, velocities = self._advance(store, forces, dt)
        self._check_finite(store, positions, velocities)
        store.positions = positions
        store.velocities = velocities

    @staticmethod
    def _check_finite(
        store: "ParticleStore",
        positions: NDArray[np.floating],
        velocities: NDArray[np.floating],
    ) -> None:
        finite = np.isfinite(positions).all(axis=1) & np.isfinite(velocities).all(axis=1)
        if not finite.all():
            bad_rows = np.flatnonzero(~finite)
            ids = store.ids()
            raise NumericalInstabilityError(int(ids[row]) for row in bad_rows)
