"""
Simulation module for the particle engine.

Provides the main simulation driver:
- Simulation: Orchestrates the step pipeline
- SimulationBuilder: Builder pattern for construction
- Snapshot / ParticleView: Read-only state for renderers
"""

from .builder import SimulationBuilder
from .simulation import Simulation
from .snapshot import ParticleView, Snapshot

__all__ = [
    "Simulation",
    "SimulationBuilder",
    "Snapshot",
    "ParticleView",
]
