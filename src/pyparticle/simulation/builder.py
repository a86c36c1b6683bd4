"""
Fluent construction of Simulation instances.
"""
from typing import TYPE_CHECKING, List, Optional

from pyparticle.core import SimulationConfig

from .simulation import Simulation

if TYPE_CHECKING:
    from pyparticle.boundary import BoundaryCondition
    from pyparticle.force import ForceField
    from pyparticle.integrator import Integrator
    from pyparticle.observer import Observer


class SimulationBuilder:
    """
    Builder pattern for constructing Simulation instances.

    Every component is optional; anything not set is derived from the
    config when build() runs.

    Example:
        >>> sim = (SimulationBuilder()
        ...     .with_config(Presets.gravity())
        ...     .with_integrator(DampedEulerIntegrator(damping=1.0))
        ...     .add_observer(EnergyObserver(interval=10))
        ...     .build())
    """

    def __init__(self) -> None:
        """Initialize builder."""
        self._config: Optional[SimulationConfig] = None
        self._force_field: Optional["ForceField"] = None
        self._integrator: Optional["Integrator"] = None
        self._boundary: Optional["BoundaryCondition"] = None
        self._observers: List["Observer"] = []

    def with_config(self, config: SimulationConfig) -> "SimulationBuilder":
        """Set the engine parameters."""
        self._config = config
        return self

    def with_force_field(self, force_field: "ForceField") -> "SimulationBuilder":
        """Set the force field."""
        self._force_field = force_field
        return self

    def with_integrator(self, integrator: "Integrator") -> "SimulationBuilder":
        """Set the integrator."""
        self._integrator = integrator
        return self

    def with_boundary(self, boundary: "BoundaryCondition") -> "SimulationBuilder":
        """Set the boundary policy."""
        self._boundary = boundary
        return self

    def add_observer(self, observer: "Observer") -> "SimulationBuilder":
        """Add an observer."""
        self._observers.append(observer)
        return self

    def build(self) -> Simulation:
        """
        Build the simulation.

        Returns:
            Configured Simulation with an empty store.
        """
        return Simulation(
            self._config,
            force_field=self._force_field,
            integrator=self._integrator,
            boundary=self._boundary,
            observers=self._observers,
        )
