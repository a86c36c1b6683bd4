"""
Observer module for monitoring simulation progress.

Provides the Observer pattern for logging, trajectory recording
and energy bookkeeping during a simulation.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from pyparticle.simulation import Simulation, Snapshot


class Observer(ABC):
    """
    Abstract base for simulation observers (Observer Pattern).

    Observers are notified after each step whose index is a multiple of
    their interval.

    Attributes:
        interval: How often to call observe() (in steps).

    Example:
        >>> observer = EnergyObserver(interval=100)
        >>> if step % observer.interval == 0:
        ...     observer.observe(simulation, step)
    """

    def __init__(self, interval: int = 1) -> None:
        """
        Initialize observer.

        Args:
            interval: Observation interval in steps. Default=1 (every step).
        """
        if interval < 1:
            raise ValueError(f"Interval must be >= 1, got {interval}")
        self.interval = interval

    @abstractmethod
    def observe(self, simulation: "Simulation", step: int) -> None:
        """
        Record observation.

        Args:
            simulation: The simulation, after the step completed.
            step: Index of the completed step.
        """
        pass

    def finalize(self) -> None:
        """Called at end of a run for cleanup."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get observer name."""
        pass


class CompositeObserver(Observer):
    """
    Composite observer that wraps multiple observers.

    Delegates to child observers based on their individual intervals.
    """

    def __init__(self, observers: List[Observer]) -> None:
        super().__init__(interval=1)  # Check every step
        self.observers = observers

    def observe(self, simulation: "Simulation", step: int) -> None:
        """Delegate to child observers based on their intervals."""
        for obs in self.observers:
            if step % obs.interval == 0:
                obs.observe(simulation, step)

    def finalize(self) -> None:
        for obs in self.observers:
            obs.finalize()

    def get_name(self) -> str:
        names = [o.get_name() for o in self.observers]
        return f"Composite[{', '.join(names)}]"


class EnergyObserver(Observer):
    """
    Records energy components, temperature and bond count over time.
    """

    def __init__(self, interval: int = 1) -> None:
        super().__init__(interval)
        self.steps: List[int] = []
        self.potential_energies: List[float] = []
        self.kinetic_energies: List[float] = []
        self.total_energies: List[float] = []
        self.temperatures: List[float] = []
        self.bond_counts: List[int] = []

    def observe(self, simulation: "Simulation", step: int) -> None:
        """Record energy values."""
        kinetic = simulation.kinetic_energy()
        potential = simulation.potential_energy()

        self.steps.append(step)
        self.potential_energies.append(potential)
        self.kinetic_energies.append(kinetic)
        self.total_energies.append(potential + kinetic)
        self.temperatures.append(simulation.temperature())
        self.bond_counts.append(len(simulation.bonds))

    def get_name(self) -> str:
        return f"EnergyObserver(interval={self.interval})"

    def get_energy_drift(self) -> float:
        """
        Compute relative energy drift.

        Returns:
            (E_final - E_initial) / |E_initial|
        """
        if len(self.total_energies) < 2:
            return 0.0
        E0 = self.total_energies[0]
        E_final = self.total_energies[-1]
        if abs(E0) < 1e-10:
            return 0.0
        return (E_final - E0) / abs(E0)


class TrajectoryObserver(Observer):
    """
    Records read-only snapshots over time.
    """

    def __init__(self, interval: int = 100) -> None:
        super().__init__(interval)
        self.frames: List["Snapshot"] = []

    def observe(self, simulation: "Simulation", step: int) -> None:
        self.frames.append(simulation.snapshot())

    def get_name(self) -> str:
        return f"TrajectoryObserver(interval={self.interval})"


class PrintObserver(Observer):
    """
    Prints simulation progress to console.
    """

    def __init__(self, interval: int = 100) -> None:
        super().__init__(interval)

    def observe(self, simulation: "Simulation", step: int) -> None:
        kinetic = simulation.kinetic_energy()
        potential = simulation.potential_energy()

        print(
            f"Step {step:6d} | "
            f"N={len(simulation.store):5d} | "
            f"bonds={len(simulation.bonds):5d} | "
            f"T={simulation.temperature():10.4f} | "
            f"PE={potential:12.4f} | "
            f"KE={kinetic:12.4f} | "
            f"E_total={potential + kinetic:12.4f}"
        )

    def get_name(self) -> str:
        return f"PrintObserver(interval={self.interval})"
