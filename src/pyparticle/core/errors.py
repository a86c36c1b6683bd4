"""
Exception hierarchy for pyparticle.

Every error raised by the engine derives from ParticleSimError so callers
can catch engine failures in one place, while still matching the
built-in exception family each error belongs to.
"""
from typing import Iterable


class ParticleSimError(Exception):
    """Base class for all pyparticle errors."""


class ParticleNotFoundError(ParticleSimError, KeyError):
    """Raised when a particle id does not exist in the store."""

    def __init__(self, particle_id: int) -> None:
        super().__init__(particle_id)
        self.particle_id = particle_id

    def __str__(self) -> str:
        return f"No particle with id {self.particle_id}"


class UnknownKindError(ParticleSimError, ValueError):
    """Raised when a particle kind name or symbol is not recognised."""


class ConfigurationError(ParticleSimError, ValueError):
    """Raised for invalid simulation configuration."""


class NumericalInstabilityError(ParticleSimError, ArithmeticError):
    """
    Raised when integration produced non-finite positions or velocities.

    Attributes:
        particle_ids: Ids of the particles whose state became NaN/inf.
    """

    def __init__(self, particle_ids: Iterable[int]) -> None:
        self.particle_ids = tuple(particle_ids)
        preview = ", ".join(str(i) for i in self.particle_ids[:10])
        if len(self.particle_ids) > 10:
            preview += ", ..."
        super().__init__(
            f"Integration would make the state non-finite for particle(s): {preview}"
        )


class BondInvariantError(ParticleSimError, AssertionError):
    """Raised when the bond graph violates symmetry or valence invariants."""
