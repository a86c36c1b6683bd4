"""
Backend service layer for pyparticle.

Framework-independent session logic consumed by the FastAPI transport
layer and by any in-process renderer. No references to FastAPI or any
transport concern belong here.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pyparticle.builder.config_loader import build_simulation_from_config
from pyparticle.core.config import Presets
from pyparticle.core.schemas import (
    BuildConfig,
    ParticleSpec,
    SimulationSummary,
    StepParams,
    StepResult,
)
from pyparticle.simulation import Simulation

logger = logging.getLogger(__name__)


class ParticleService:
    """Stateful engine session. One instance per renderer connection."""

    def __init__(self, simulation: Optional[Simulation] = None) -> None:
        self._simulation = simulation if simulation is not None else Simulation(
            Presets.molecular()
        )

    @property
    def simulation(self) -> Simulation:
        return self._simulation

    # ------------------------------------------------------------------ #
    #  Build
    # ------------------------------------------------------------------ #

    def build(self, config: BuildConfig) -> SimulationSummary:
        """Replace the session's simulation with one built from *config*.

        Raises ConfigurationError for malformed input; the previous
        simulation is kept in that case.
        """
        simulation = build_simulation_from_config(config.to_dict())
        self._simulation = simulation
        logger.info(
            "Built simulation: %d particle(s), %d bond(s)",
            len(simulation.store),
            len(simulation.graph),
        )
        return self.summary()

    # ------------------------------------------------------------------ #
    #  Scenario edits
    # ------------------------------------------------------------------ #

    def create_particle(self, spec: ParticleSpec) -> int:
        return self._simulation.create(
            spec.kind, spec.position, spec.velocity, **spec.overrides()
        )

    def create_bond(self, a: int, b: int) -> bool:
        return self._simulation.create_bond(a, b)

    def set_damping(self, value: float) -> float:
        self._simulation.damping = value
        return self._simulation.damping

    def clear(self) -> None:
        self._simulation.clear()
        logger.info("Simulation cleared")

    # ------------------------------------------------------------------ #
    #  Time stepping
    # ------------------------------------------------------------------ #

    def advance(self, params: StepParams) -> StepResult:
        """Advance *params.frames* frames and report the bonds that formed."""
        if params.frames < 1:
            raise ValueError(f"frames must be >= 1, got {params.frames}")
        new_bonds = []
        for _ in range(params.frames):
            formed = self._simulation.advance(params.frame_dt, params.sub_steps)
            new_bonds.extend([bond.a, bond.b] for bond in formed)
        return StepResult(frames=params.frames, new_bonds=new_bonds, summary=self.summary())

    # ------------------------------------------------------------------ #
    #  Read-only views
    # ------------------------------------------------------------------ #

    def snapshot_dict(self) -> Dict[str, Any]:
        return self._simulation.snapshot().to_dict()

    def summary(self) -> SimulationSummary:
        sim = self._simulation
        forces = [] if sim.force_field is None else [t.get_name() for t in sim.force_field.terms]
        return SimulationSummary(
            n_particles=len(sim.store),
            n_bonds=len(sim.graph),
            step=sim.step_count,
            time=float(sim.time),
            damping=float(sim.damping),
            kinetic_energy=float(sim.kinetic_energy()),
            potential_energy=float(sim.potential_energy()),
            temperature=float(sim.temperature()),
            forces=forces,
            boundary=sim.boundary.get_name(),
        )
