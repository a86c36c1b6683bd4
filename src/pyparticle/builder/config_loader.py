"""
Configuration loader for YAML-based simulation setup.

Provides functions to load a scenario (engine parameters, initial
particles, pre-wired bonds and observers) from YAML files.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from pyparticle.core import (
    ConfigurationError,
    ParticleSimError,
    Presets,
    SimulationConfig,
)
from pyparticle.observer import EnergyObserver, Observer, PrintObserver, TrajectoryObserver
from pyparticle.simulation import Simulation

logger = logging.getLogger(__name__)

_PRESETS = {
    "molecular": Presets.molecular,
    "gravity": Presets.gravity,
}

_PARTICLE_KEYS = {"kind", "position", "velocity", "mass", "charge", "radius", "color"}


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration.

    Raises:
        ConfigurationError: If the file is not valid YAML or its root is
            not a mapping.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            content = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if content is None:
        content = {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"YAML file {path} must contain a mapping at the root")
    logger.debug("Loaded configuration from %s", path)
    return content


def _parse_simulation(config: Dict[str, Any]) -> SimulationConfig:
    """Parse engine parameters, starting from an optional named preset."""
    sim_config = dict(config.get("simulation") or {})
    preset_name = str(sim_config.pop("preset", "molecular")).lower()
    if preset_name not in _PRESETS:
        raise ConfigurationError(
            f"Unknown preset: {preset_name!r} (choose from {', '.join(_PRESETS)})"
        )
    base = _PRESETS[preset_name]().to_dict()
    base.update(sim_config)
    return SimulationConfig.from_dict(base)


def _parse_particles(simulation: Simulation, entries: Any) -> List[int]:
    """Create the listed particles, returning their ids in list order."""
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ConfigurationError("'particles' must be a list")

    ids: List[int] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"particles[{index}] must be a mapping")
        unknown = sorted(set(entry) - _PARTICLE_KEYS)
        if unknown:
            raise ConfigurationError(
                f"particles[{index}] has unknown key(s): {', '.join(unknown)}"
            )
        if "kind" not in entry or "position" not in entry:
            raise ConfigurationError(f"particles[{index}] requires 'kind' and 'position'")

        overrides = {
            key: entry[key] for key in ("mass", "charge", "radius", "color") if key in entry
        }
        try:
            ids.append(
                simulation.create(
                    entry["kind"],
                    entry["position"],
                    entry.get("velocity"),
                    **overrides,
                )
            )
        except (ParticleSimError, ValueError, TypeError) as exc:
            raise ConfigurationError(f"particles[{index}]: {exc}") from exc
    return ids


def _parse_bonds(simulation: Simulation, entries: Any, ids: List[int]) -> None:
    """Pre-wire bonds given as pairs of indices into the particle list."""
    if entries is None:
        return
    if not isinstance(entries, list):
        raise ConfigurationError("'bonds' must be a list")

    for index, pair in enumerate(entries):
        if not (isinstance(pair, (list, tuple)) and len(pair) == 2):
            raise ConfigurationError(f"bonds[{index}] must be a pair of particle indices")
        try:
            a, b = (ids[int(k)] for k in pair)
        except (IndexError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"bonds[{index}] refers to an unknown particle") from exc
        if not simulation.create_bond(a, b):
            raise ConfigurationError(
                f"bonds[{index}] between particles {pair[0]} and {pair[1]} "
                f"violates the bonding rules"
            )


def _parse_observers(config: Dict[str, Any]) -> List[Observer]:
    """Parse observers from config."""
    obs_config = config.get("observers") or {}
    if not isinstance(obs_config, dict):
        raise ConfigurationError("'observers' must be a mapping")

    observers: List[Observer] = []
    try:
        if obs_config.get("energy", True):
            observers.append(EnergyObserver(interval=obs_config.get("energy_interval", 100)))
        if obs_config.get("print", False):
            observers.append(PrintObserver(interval=obs_config.get("print_interval", 1000)))
        if obs_config.get("trajectory", False):
            observers.append(
                TrajectoryObserver(interval=obs_config.get("trajectory_interval", 100))
            )
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"observers: {exc}") from exc
    return observers


def build_simulation_from_config(config: Dict[str, Any]) -> Simulation:
    """
    Build a complete Simulation from a configuration dictionary.

    Args:
        config: Configuration dictionary (typically from YAML).

    Returns:
        Simulation populated with the initial particles and bonds.

    Raises:
        ConfigurationError: For malformed sections or values.

    Example config:
        simulation:
          preset: molecular
          damping: 0.98
          boundary:
            type: soft_wall
            bound: 12.0
        particles:
          - {kind: O, position: [0.0, 0.0]}
          - {kind: H, position: [0.6, 0.0]}
          - {kind: H, position: [-0.6, 0.0]}
        bonds:
          - [0, 1]
          - [0, 2]
        observers:
          energy: true
          energy_interval: 10
        run:
          frames: 600
          frame_dt: 0.0166667
    """
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration must be a mapping")

    sim_config = _parse_simulation(config)
    observers = _parse_observers(config)
    simulation = Simulation(sim_config, observers=observers)

    ids = _parse_particles(simulation, config.get("particles"))
    _parse_bonds(simulation, config.get("bonds"), ids)

    logger.debug(
        "Built simulation with %d particle(s) and %d bond(s)",
        len(simulation.store),
        len(simulation.graph),
    )
    return simulation


def load_and_run(path: Union[str, Path]) -> Simulation:
    """
    Load configuration from YAML and run simulation.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Simulation after run completes.
    """
    config = load_yaml(path)
    sim = build_simulation_from_config(config)

    run_config = config.get("run") or {}
    if not isinstance(run_config, dict):
        raise ConfigurationError("'run' must be a mapping")
    try:
        num_frames = int(run_config.get("frames", 600))
        frame_dt = float(run_config.get("frame_dt", 1.0 / 60.0))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"run: {exc}") from exc
    if num_frames < 0 or not frame_dt > 0:
        raise ConfigurationError(
            f"run: frames must be >= 0 and frame_dt positive, got {num_frames}, {frame_dt}"
        )

    sim.run(num_frames, frame_dt=frame_dt)
    return sim
