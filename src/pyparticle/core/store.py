"""
Particle Store: the arena that owns every particle.

Static properties are kept as Particle records; positions and velocities
are kept in contiguous (N, D) float64 arrays so that force and integration
code can work on whole arrays at once.
"""
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .errors import ParticleNotFoundError
from .kinds import ParticleKind, body_color, body_radius
from .particle import Particle

_INITIAL_CAPACITY = 16


class ParticleStore:
    """
    Owner of all particle records and their dynamic state.

    The store hands out monotonically increasing integer ids that are never
    reused until clear() resets the counter. Lookups by id fail closed with
    ParticleNotFoundError rather than indexing out of bounds.

    Design Notes:
        - Arrays are over-allocated and grown by doubling, so add() is
          amortized O(1). ``positions`` and ``velocities`` are views on the
          first N rows; in-place updates through them modify the store.
        - Per-particle property arrays (masses, charges, radii) are cached
          and rebuilt only after the particle set changes.

    Attributes:
        dimensions: Spatial dimensionality (2 or 3).

    Example:
        >>> from pyparticle.core import ParticleStore, ParticleKind
        >>> store = ParticleStore(dimensions=2)
        >>> pid = store.add(ParticleKind.CARBON, (0.0, 1.0))
        >>> store.positions[store.index_of(pid)]
        array([0., 1.])
    """

    def __init__(self, dimensions: int = 2) -> None:
        """
        Initialize an empty store.

        Args:
            dimensions: 2 or 3.

        Raises:
            ValueError: If dimensions is not 2 or 3.
        """
        if dimensions not in (2, 3):
            raise ValueError(f"Dimensions must be 2 or 3, got {dimensions}")
        self.dimensions = dimensions
        self._particles: List[Particle] = []
        self._index: Dict[int, int] = {}
        self._next_id = 0
        self._positions = np.zeros((_INITIAL_CAPACITY, dimensions), dtype=np.float64)
        self._velocities = np.zeros((_INITIAL_CAPACITY, dimensions), dtype=np.float64)
        self._cache: Dict[str, NDArray] = {}

    # ------------------------------------------------------------------ #
    #  Mutation
    # ------------------------------------------------------------------ #

    def add(
        self,
        kind: ParticleKind,
        position: Sequence[float],
        velocity: Optional[Sequence[float]] = None,
        *,
        mass: Optional[float] = None,
        charge: Optional[float] = None,
        radius: Optional[float] = None,
        color=None,
    ) -> int:
        """
        Create a particle and return its id.

        Properties not given explicitly come from the kind table. Bodies
        (ParticleKind.BODY) with an explicit mass get a radius and color
        derived from that mass.

        Args:
            kind: Particle kind.
            position: Initial position, length D.
            velocity: Initial velocity, length D (default: zero).
            mass: Mass override.
            charge: Charge override.
            radius: Radius override.
            color: RGBA color override.

        Returns:
            The new particle's id.

        Raises:
            ValueError: For wrongly sized vectors or invalid properties.
        """
        props = kind.properties()
        pos = self._as_vector(position, "position")
        vel = (
            np.zeros(self.dimensions)
            if velocity is None
            else self._as_vector(velocity, "velocity")
        )

        if kind is ParticleKind.BODY and mass is not None:
            if radius is None and mass > 0:
                radius = body_radius(mass)
            if color is None:
                color = body_color(mass)

        particle = Particle(
            id=self._next_id,
            kind=kind,
            mass=props.mass if mass is None else float(mass),
            charge=props.charge if charge is None else float(charge),
            radius=props.radius if radius is None else float(radius),
            color=props.color if color is None else tuple(color),
        )

        n = len(self._particles)
        if n == len(self._positions):
            self._grow()
        self._positions[n] = pos
        self._velocities[n] = vel

        self._particles.append(particle)
        self._index[particle.id] = n
        self._next_id += 1
        self._cache.clear()
        return particle.id

    def clear(self) -> None:
        """Remove all particles and reset the id counter."""
        self._particles.clear()
        self._index.clear()
        self._next_id = 0
        self._positions[:] = 0.0
        self._velocities[:] = 0.0
        self._cache.clear()

    def _grow(self) -> None:
        capacity = 2 * len(self._positions)
        for name in ("_positions", "_velocities"):
            old = getattr(self, name)
            new = np.zeros((capacity, self.dimensions), dtype=np.float64)
            new[: len(old)] = old
            setattr(self, name, new)

    def _as_vector(self, value: Sequence[float], label: str) -> NDArray[np.floating]:
        vec = np.asarray(value, dtype=np.float64)
        if vec.shape != (self.dimensions,):
            raise ValueError(
                f"{label.capitalize()} must have {self.dimensions} components, "
                f"got shape {vec.shape}"
            )
        if not np.isfinite(vec).all():
            raise ValueError(f"{label.capitalize()} must be finite, got {vec.tolist()}")
        return vec

    # ------------------------------------------------------------------ #
    #  Lookup
    # ------------------------------------------------------------------ #

    def index_of(self, particle_id: int) -> int:
        """
        Return the array row of a particle.

        Raises:
            ParticleNotFoundError: If the id is unknown.
        """
        try:
            return self._index[particle_id]
        except (KeyError, TypeError):
            raise ParticleNotFoundError(particle_id) from None

    def get(self, particle_id: int) -> Particle:
        """Return the Particle record for an id (fails closed)."""
        return self._particles[self.index_of(particle_id)]

    def at(self, index: int) -> Particle:
        """Return the Particle record stored at array row ``index``."""
        return self._particles[index]

    def ids(self) -> NDArray[np.intp]:
        """(N,) array of particle ids in row order."""
        return np.array([p.id for p in self._particles], dtype=np.intp)

    def __len__(self) -> int:
        return len(self._particles)

    def __contains__(self, particle_id: object) -> bool:
        return particle_id in self._index

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    @property
    def next_id(self) -> int:
        """Id the next created particle will receive."""
        return self._next_id

    # ------------------------------------------------------------------ #
    #  Array views
    # ------------------------------------------------------------------ #

    @property
    def positions(self) -> NDArray[np.floating]:
        """(N, D) view of particle positions."""
        return self._positions[: len(self._particles)]

    @positions.setter
    def positions(self, value: NDArray[np.floating]) -> None:
        self._positions[: len(self._particles)] = value

    @property
    def velocities(self) -> NDArray[np.floating]:
        """(N, D) view of particle velocities."""
        return self._velocities[: len(self._particles)]

    @velocities.setter
    def velocities(self, value: NDArray[np.floating]) -> None:
        self._velocities[: len(self._particles)] = value

    def masses(self) -> NDArray[np.floating]:
        """(N,) array of masses."""
        return self._cached("mass")

    def charges(self) -> NDArray[np.floating]:
        """(N,) array of charges."""
        return self._cached("charge")

    def radii(self) -> NDArray[np.floating]:
        """(N,) array of radii."""
        return self._cached("radius")

    def _cached(self, attribute: str) -> NDArray[np.floating]:
        if attribute not in self._cache:
            values = np.array(
                [getattr(p, attribute) for p in self._particles], dtype=np.float64
            )
            values.setflags(write=False)
            self._cache[attribute] = values
        return self._cache[attribute]

    # ------------------------------------------------------------------ #
    #  Diagnostics
    # ------------------------------------------------------------------ #

    def kinetic_energy(self) -> float:
        """
        Compute total kinetic energy.

        KE = (1/2) * Σ_i m_i * |v_i|²
        """
        if not self._particles:
            return 0.0
        return float(0.5 * np.sum(self.masses()[:, np.newaxis] * self.velocities ** 2))

    def temperature(self) -> float:
        """
        Instantaneous temperature with k_B = 1.

        T = 2 * KE / (N * D). Returns 0.0 for an empty store.
        """
        if not self._particles:
            return 0.0
        return 2.0 * self.kinetic_energy() / (len(self._particles) * self.dimensions)

    def center_of_mass(self) -> NDArray[np.floating]:
        """(D,) center of mass; the zero vector when total mass is zero."""
        masses = self.masses()
        total_mass = float(np.sum(masses))
        if total_mass <= 0.0:
            return np.zeros(self.dimensions)
        return np.sum(masses[:, np.newaxis] * self.positions, axis=0) / total_mass

    def momentum(self) -> NDArray[np.floating]:
        """(D,) total momentum Σ m_i v_i."""
        if not self._particles:
            return np.zeros(self.dimensions)
        return np.sum(self.masses()[:, np.newaxis] * self.velocities, axis=0)

    def zero_momentum(self) -> None:
        """Remove center-of-mass velocity from every particle."""
        if not self._particles:
            return
        total_mass = float(np.sum(self.masses()))
        self.velocities -= self.momentum() / total_mass

    def __repr__(self) -> str:
        return f"ParticleStore(n_particles={len(self)}, dimensions={self.dimensions})"
