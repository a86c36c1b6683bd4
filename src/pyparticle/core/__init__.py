"""
Core module for the particle engine.

This module provides the fundamental classes:
- ParticleKind / KindProperties: Closed kind table (mass, charge, valence...)
- Particle: Static properties of one particle
- ParticleStore: Arena owning particles, positions and velocities
- SimulationConfig / Presets: Validated engine parameters
- Error hierarchy rooted at ParticleSimError
"""

from .config import Presets, SimulationConfig
from .errors import (
    BondInvariantError,
    ConfigurationError,
    NumericalInstabilityError,
    ParticleNotFoundError,
    ParticleSimError,
    UnknownKindError,
)
from .kinds import KIND_TABLE, KindProperties, ParticleKind, body_color, body_radius
from .particle import Particle
from .store import ParticleStore

__all__ = [
    # Classes
    "Particle",
    "ParticleKind",
    "KindProperties",
    "ParticleStore",
    "SimulationConfig",
    "Presets",
    # Kind helpers
    "KIND_TABLE",
    "body_radius",
    "body_color",
    # Errors
    "ParticleSimError",
    "ParticleNotFoundError",
    "UnknownKindError",
    "ConfigurationError",
    "NumericalInstabilityError",
    "BondInvariantError",
]
