"""
Main Simulation class that drives the particle engine.

Brings together the ParticleStore, BondGraph, ForceField, Integrator,
boundary policy, bond formation and observers into one deterministic
step pipeline.
"""
import logging
import math
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from pyparticle.bonds import Bond, BondFormation, BondGraph
from pyparticle.boundary import BoundaryCondition, boundary_from_config
from pyparticle.core import ParticleKind, ParticleStore, SimulationConfig
from pyparticle.force import ForceField
from pyparticle.integrator import DampedEulerIntegrator, Integrator

from .snapshot import ParticleView, Snapshot

if TYPE_CHECKING:
    from pyparticle.observer import Observer

logger = logging.getLogger(__name__)

KindLike = Union[ParticleKind, str]


class Simulation:
    """
    Particle simulation driver.

    Each call to step(dt) runs one pass of the pipeline:
    1. Zero the force accumulator and sum every force term
    2. Integrate (semi-implicit Euler with damping) over dt * time_scale
    3. Apply the boundary policy
    4. Form new bonds (if enabled)
    5. Notify observers
    6. Advance the step and time counters

    The engine is single-threaded: no method may be called concurrently.

    Attributes:
        config: Validated engine parameters.
        store: Particle store (ids, properties, positions, velocities).
        graph: Bond graph.
        force_field: Active force terms, or None when every term is off.
        integrator: Time integrator.
        boundary: Boundary policy.
        formation: Bond formation pass, or None when disabled.
        observers: Observers notified after each step.

    Example:
        >>> sim = Simulation(Presets.molecular())
        >>> na = sim.create(ParticleKind.SODIUM, (-1.0, 0.0))
        >>> cl = sim.create("Cl", (1.0, 0.0))
        >>> for _ in range(60):
        ...     sim.advance(1 / 60)
        >>> sim.snapshot().particle(na).bonds
        (1,)
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        force_field: Optional[ForceField] = None,
        integrator: Optional[Integrator] = None,
        boundary: Optional[BoundaryCondition] = None,
        observers: Optional[List["Observer"]] = None,
    ) -> None:
        """
        Initialize the simulation.

        Components not passed explicitly are derived from ``config``.

        Args:
            config: Engine parameters (default: Presets.molecular()).
            force_field: Custom force field.
            integrator: Custom integrator.
            boundary: Custom boundary policy.
            observers: Observers to notify after each step.
        """
        self.config = config if config is not None else SimulationConfig()
        self.store = ParticleStore(dimensions=self.config.dimensions)
        self.graph = BondGraph()

        if force_field is None and any(self.config.enabled_terms.values()):
            force_field = ForceField.from_config(self.config)
        self.force_field = force_field

        self.integrator = (
            integrator
            if integrator is not None
            else DampedEulerIntegrator(damping=self.config.damping)
        )
        self.boundary = (
            boundary if boundary is not None else boundary_from_config(self.config.boundary)
        )
        self.formation: Optional[BondFormation] = None
        if self.config.bond_formation:
            self.formation = BondFormation(
                bond_distance_factor=self.config.bond_distance_factor,
                max_bonding_speed=self.config.max_bonding_speed,
            )
        self.observers = list(observers) if observers else []

        self._step_count = 0
        self._time = 0.0

    # ------------------------------------------------------------------ #
    #  Scenario setup
    # ------------------------------------------------------------------ #

    def create(
        self,
        kind: KindLike,
        position: Sequence[float],
        velocity: Optional[Sequence[float]] = None,
        **overrides: Any,
    ) -> int:
        """
        Create a particle of the given kind.

        Args:
            kind: ParticleKind, or a symbol/name such as "O" or "sodium".
            position: Initial position.
            velocity: Initial velocity (default: zero).
            **overrides: mass, charge, radius or color overriding the
                kind defaults.

        Returns:
            The new particle's id.
        """
        return self.store.add(ParticleKind.from_symbol(kind), position, velocity, **overrides)

    def create_body(
        self,
        position: Sequence[float],
        velocity: Optional[Sequence[float]] = None,
        mass: float = 1000.0,
    ) -> int:
        """Create a gravitational body whose radius and color follow its mass."""
        return self.store.add(ParticleKind.BODY, position, velocity, mass=mass)

    def create_bond(self, a: int, b: int) -> bool:
        """
        Request an explicit bond between two particles.

        Returns:
            True if the bond was created, False if any bonding rule
            rejected it.

        Raises:
            ParticleNotFoundError: If either id is unknown.
        """
        return self.graph.create_bond(self.store, a, b)

    def clear(self) -> None:
        """Remove every particle and bond and reset all counters."""
        self.store.clear()
        self.graph.clear()
        self._step_count = 0
        self._time = 0.0
        logger.debug("Simulation cleared")

    # ------------------------------------------------------------------ #
    #  Time stepping
    # ------------------------------------------------------------------ #

    def compute_forces(self) -> NDArray[np.floating]:
        """Return the (N, D) total force for the current state."""
        if self.force_field is None:
            return np.zeros((len(self.store), self.store.dimensions), dtype=np.float64)
        return self.force_field.compute_forces(self.store, self.graph)

    def step(self, dt: float) -> List[Bond]:
        """
        Advance the simulation by one step.

        Args:
            dt: Time step before time scaling.

        Returns:
            Bonds formed during this step.

        Raises:
            ValueError: If dt is not positive and finite.
            NumericalInstabilityError: If the state became non-finite.
        """
        if not (math.isfinite(dt) and dt > 0):
            raise ValueError(f"Time step must be positive, got {dt}")
        scaled_dt = dt * self.config.time_scale
        current_step = self._step_count

        formed: List[Bond] = []
        if len(self.store) > 0:
            forces = self.compute_forces()
            self.integrator.integrate(self.store, forces, scaled_dt)
            self.boundary.apply(self.store.positions, self.store.velocities)
            if self.formation is not None:
                formed = self.formation.try_form_bonds(self.store, self.graph)

        for observer in self.observers:
            if current_step % observer.interval == 0:
                observer.observe(self, current_step)

        self._step_count += 1
        self._time += scaled_dt
        return formed

    def advance(self, frame_dt: float, sub_steps: Optional[int] = None) -> List[Bond]:
        """
        Advance one rendered frame using several smaller steps.

        Args:
            frame_dt: Frame duration, split evenly across sub-steps.
            sub_steps: Number of sub-steps (default: config.sub_steps).

        Returns:
            Bonds formed during the frame.
        """
        n = self.config.sub_steps if sub_steps is None else sub_steps
        if int(n) != n or n < 1:
            raise ValueError(f"sub_steps must be an integer >= 1, got {n}")
        dt = frame_dt / n
        formed: List[Bond] = []
        for _ in range(int(n)):
            formed.extend(self.step(dt))
        return formed

    def run(self, num_frames: int, frame_dt: float = 1.0 / 60.0) -> None:
        """
        Run a number of frames, then finalize observers.

        Args:
            num_frames: Frames to advance.
            frame_dt: Duration of one frame.
        """
        for _ in range(num_frames):
            self.advance(frame_dt)
        for observer in self.observers:
            observer.finalize()

    # ------------------------------------------------------------------ #
    #  Runtime parameters
    # ------------------------------------------------------------------ #

    @property
    def damping(self) -> float:
        """Velocity damping factor in (0, 1]."""
        return self.integrator.damping

    @damping.setter
    def damping(self, value: float) -> None:
        self.integrator.damping = value

    # ------------------------------------------------------------------ #
    #  Read-only views
    # ------------------------------------------------------------------ #

    def snapshot(self) -> Snapshot:
        """Return an immutable copy of the current state."""
        return Snapshot.capture(self.store, self.graph, self._step_count, self._time)

    @property
    def particles(self) -> Tuple[ParticleView, ...]:
        return tuple(
            ParticleView.from_row(self.store, self.graph, row) for row in range(len(self.store))
        )

    @property
    def bonds(self) -> Tuple[Bond, ...]:
        return self.graph.bonds

    def particle(self, particle_id: int) -> ParticleView:
        """
        Return a read-only view of one particle.

        Raises:
            ParticleNotFoundError: If the id is unknown.
        """
        return ParticleView.from_row(self.store, self.graph, self.store.index_of(particle_id))

    def check_invariants(self) -> None:
        """Raise BondInvariantError if the bond graph is inconsistent."""
        self.graph.check_invariants(self.store)

    # ------------------------------------------------------------------ #
    #  Diagnostics
    # ------------------------------------------------------------------ #

    def kinetic_energy(self) -> float:
        return self.store.kinetic_energy()

    def potential_energy(self) -> float:
        """Total potential energy of every active force term."""
        if self.force_field is None:
            return 0.0
        return self.force_field.compute_energy(self.store, self.graph)

    def total_energy(self) -> float:
        return self.kinetic_energy() + self.potential_energy()

    def temperature(self) -> float:
        return self.store.temperature()

    def center_of_mass(self) -> NDArray[np.floating]:
        return self.store.center_of_mass()

    def momentum(self) -> NDArray[np.floating]:
        return self.store.momentum()

    @property
    def step_count(self) -> int:
        """Number of steps completed since construction or clear()."""
        return self._step_count

    @property
    def time(self) -> float:
        """Simulated time elapsed (sum of scaled time steps)."""
        return self._time

    def __repr__(self) -> str:
        return (
            f"Simulation(n_particles={len(self.store)}, n_bonds={len(self.graph)}, "
            f"step={self._step_count})"
        )
