"""
Shared payload schemas for the service layer and API transport.

Defines the data structures that both direct callers and the FastAPI
transport layer consume and produce. Keeping them in one place prevents
drift between the two call paths.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ------------------------------------------------------------------ #
#  Input schemas
# ------------------------------------------------------------------ #


@dataclass
class BuildConfig:
    """Everything needed to build a populated Simulation."""

    simulation: Dict[str, Any] = field(default_factory=dict)
    particles: List[Dict[str, Any]] = field(default_factory=list)
    bonds: List[List[int]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BuildConfig":
        return cls(
            simulation=d.get("simulation") or {},
            particles=d.get("particles") or [],
            bonds=d.get("bonds") or [],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "simulation": self.simulation,
            "particles": self.particles,
            "bonds": self.bonds,
            "observers": {"energy": False},
        }


@dataclass
class ParticleSpec:
    """A single particle creation request."""

    kind: str
    position: List[float]
    velocity: Optional[List[float]] = None
    mass: Optional[float] = None
    charge: Optional[float] = None
    radius: Optional[float] = None

    def overrides(self) -> Dict[str, float]:
        values = {"mass": self.mass, "charge": self.charge, "radius": self.radius}
        return {key: value for key, value in values.items() if value is not None}


@dataclass
class StepParams:
    """Parameters for advancing the simulation."""

    frames: int = 1
    frame_dt: float = 1.0 / 60.0
    sub_steps: Optional[int] = None


# ------------------------------------------------------------------ #
#  Output schemas
# ------------------------------------------------------------------ #


@dataclass
class SimulationSummary:
    """Aggregate state of the current simulation."""

    n_particles: int
    n_bonds: int
    step: int
    time: float
    damping: float
    kinetic_energy: float
    potential_energy: float
    temperature: float
    forces: List[str]
    boundary: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_particles": self.n_particles,
            "n_bonds": self.n_bonds,
            "step": self.step,
            "time": self.time,
            "damping": self.damping,
            "kinetic_energy": self.kinetic_energy,
            "potential_energy": self.potential_energy,
            "temperature": self.temperature,
            "forces": self.forces,
            "boundary": self.boundary,
        }


@dataclass
class StepResult:
    """Outcome of advancing one or more frames."""

    frames: int
    new_bonds: List[List[int]]
    summary: SimulationSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frames": self.frames,
            "new_bonds": self.new_bonds,
            "summary": self.summary.to_dict(),
        }
