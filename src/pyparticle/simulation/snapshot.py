"""
Read-only snapshots of the simulation state.

A snapshot is what an external renderer consumes once per frame. It is
built from copies, so it stays stable no matter how many steps run after
it was taken.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from pyparticle.bonds import Bond
from pyparticle.core import ParticleKind, ParticleNotFoundError
from pyparticle.core.kinds import Color

if TYPE_CHECKING:
    from pyparticle.bonds import BondGraph
    from pyparticle.core import ParticleStore


def _frozen(array: NDArray[np.floating]) -> NDArray[np.floating]:
    copy = np.array(array, dtype=np.float64, copy=True)
    copy.setflags(write=False)
    return copy


@dataclass(frozen=True)
class ParticleView:
    """
    Immutable view of one particle.

    Attributes:
        id: Particle id.
        kind: Particle kind.
        position: (D,) read-only position.
        velocity: (D,) read-only velocity.
        mass: Mass.
        charge: Charge.
        radius: Radius.
        color: RGBA color.
        bonds: Ids of bonded partners.
    """
    id: int
    kind: ParticleKind
    position: NDArray[np.floating]
    velocity: NDArray[np.floating]
    mass: float
    charge: float
    radius: float
    color: Color
    bonds: Tuple[int, ...]

    @classmethod
    def from_row(
        cls,
        store: "ParticleStore",
        graph: "BondGraph",
        row: int,
        position: Optional[NDArray[np.floating]] = None,
        velocity: Optional[NDArray[np.floating]] = None,
    ) -> "ParticleView":
        """
        Build the view of the particle stored at ``row``.

        The position and velocity rows are copied unless read-only arrays
        are passed in.
        """
        particle = store.at(row)
        return cls(
            id=particle.id,
            kind=particle.kind,
            position=_frozen(store.positions[row]) if position is None else position,
            velocity=_frozen(store.velocities[row]) if velocity is None else velocity,
            mass=particle.mass,
            charge=particle.charge,
            radius=particle.radius,
            color=particle.color,
            bonds=graph.partners(particle.id),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "symbol": self.kind.symbol,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "mass": self.mass,
            "charge": self.charge,
            "radius": self.radius,
            "color": list(self.color),
            "bonds": list(self.bonds),
        }


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable state of the whole simulation at one instant.

    Attributes:
        step: Number of steps completed.
        time: Simulated time elapsed.
        positions: (N, D) read-only positions, row order of ``particles``.
        velocities: (N, D) read-only velocities.
        particles: Per-particle views.
        bonds: Bonds in creation order.

    Example:
        >>> snap = simulation.snapshot()
        >>> for view in snap.particles:
        ...     draw_circle(view.position, view.radius, view.color)
    """
    step: int
    time: float
    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    particles: Tuple[ParticleView, ...]
    bonds: Tuple[Bond, ...]

    @classmethod
    def capture(
        cls,
        store: "ParticleStore",
        graph: "BondGraph",
        step: int = 0,
        time: float = 0.0,
    ) -> "Snapshot":
        """Copy the current store and graph into a snapshot."""
        positions = _frozen(store.positions)
        velocities = _frozen(store.velocities)
        views = tuple(
            ParticleView.from_row(store, graph, row, positions[row], velocities[row])
            for row in range(len(store))
        )
        return cls(
            step=step,
            time=time,
            positions=positions,
            velocities=velocities,
            particles=views,
            bonds=graph.bonds,
        )

    def particle(self, particle_id: int) -> ParticleView:
        """
        Return the view of one particle.

        Raises:
            ParticleNotFoundError: If the id is not in the snapshot.
        """
        for view in self.particles:
            if view.id == particle_id:
                return view
        raise ParticleNotFoundError(particle_id)

    def __len__(self) -> int:
        return len(self.particles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "time": self.time,
            "particles": [view.to_dict() for view in self.particles],
            "bonds": [
                {"a": bond.a, "b": bond.b, "order": bond.order} for bond in self.bonds
            ],
        }
