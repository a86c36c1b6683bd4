"""
Particle record for the simulation.

This module provides the Particle dataclass holding the static properties
of one particle. Dynamic quantities (position, velocity) live in the
ParticleStore arrays and bonds live in the BondGraph.
"""
from dataclasses import dataclass
import math

from .kinds import Color, ParticleKind


@dataclass
class Particle:
    """
    Static properties of a single particle.

    Attributes:
        id: Stable identity assigned by the store, never reused.
        kind: Discrete kind tag (drives valence and default properties).
        mass: Mass (positive).
        charge: Charge (may be zero).
        radius: Radius (positive); rendering size, LJ sigma and bond length.
        color: RGBA color for renderers.

    Example:
        >>> from pyparticle.core import Particle, ParticleKind
        >>> p = Particle(0, ParticleKind.OXYGEN, mass=16.0, charge=0.0, radius=0.3)
        >>> p.max_bonds
        2
    """
    id: int
    kind: ParticleKind
    mass: float
    charge: float
    radius: float
    color: Color = (1.0, 1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        """Validate particle properties after initialization."""
        if not (self.mass > 0 and math.isfinite(self.mass)):
            raise ValueError(f"Particle mass must be positive, got {self.mass}")
        if not (self.radius > 0 and math.isfinite(self.radius)):
            raise ValueError(f"Particle radius must be positive, got {self.radius}")
        if not math.isfinite(self.charge):
            raise ValueError(f"Particle charge must be finite, got {self.charge}")

    @property
    def max_bonds(self) -> int:
        """Valence limit of this particle's kind."""
        return self.kind.max_bonds()
