"""
Simulation configuration.

SimulationConfig gathers every tunable scalar of the engine (force
constants, bonding thresholds, damping, boundary extent) into one validated
value object, and Presets provides the standard scenario configurations.
"""
from dataclasses import asdict, dataclass, field, fields, replace
import math
from typing import Any, Dict

from . import constants
from .errors import ConfigurationError

BOUNDARY_TYPES = ("soft_wall", "open")


def _default_boundary() -> Dict[str, Any]:
    return {
        "type": "soft_wall",
        "bound": constants.WALL_BOUND,
        "restitution": constants.WALL_RESTITUTION,
    }


@dataclass(frozen=True)
class SimulationConfig:
    """
    Validated engine parameters.

    Attributes:
        dimensions: Spatial dimensionality (2 or 3).
        k_coulomb: Coulomb constant.
        gravity_constant: Gravitational constant G.
        lj_epsilon: Lennard-Jones well depth ε.
        lj_sigma: Scale applied to the sum of radii to obtain σ per pair.
        bond_distance_factor: Bonds may form below
            (radius_i + radius_j) * bond_distance_factor.
        bond_strength: Harmonic bond spring constant.
        max_bonding_speed: Bonds only form when the relative speed is
            below this value.
        distance_floor: Minimum separation used by the pairwise terms.
        bond_distance_floor: Minimum separation used to normalise a bond
            direction. Bond displacement always uses the true separation.
        charge_threshold: Coulomb skips pairs where either |q| is at or
            below this value.
        damping: Velocity damping factor in (0, 1], applied every step.
        time_scale: Multiplier applied to every dt passed to step().
        sub_steps: Integration sub-steps per rendered frame.
        boundary: Boundary policy, e.g. {"type": "soft_wall", "bound": 12.0}.
        coulomb: Enable the Coulomb term.
        gravity: Enable the gravity term.
        lennard_jones: Enable the Lennard-Jones term.
        bonds: Enable harmonic bond springs.
        bond_formation: Enable the automatic bond-formation pass.

    Example:
        >>> from pyparticle.core import SimulationConfig
        >>> config = SimulationConfig(damping=1.0, lennard_jones=False)
        >>> config.replace(damping=0.9).damping
        0.9
    """
    dimensions: int = 2
    k_coulomb: float = constants.K_COULOMB
    gravity_constant: float = constants.GRAVITY_CONSTANT
    lj_epsilon: float = constants.LJ_EPSILON
    lj_sigma: float = constants.LJ_SIGMA_SCALE
    bond_distance_factor: float = constants.BOND_DISTANCE_FACTOR
    bond_strength: float = constants.BOND_STRENGTH
    max_bonding_speed: float = constants.MAX_BONDING_SPEED
    distance_floor: float = constants.DISTANCE_FLOOR
    bond_distance_floor: float = constants.BOND_DISTANCE_FLOOR
    charge_threshold: float = constants.CHARGE_THRESHOLD
    damping: float = constants.DAMPING
    time_scale: float = constants.TIME_SCALE
    sub_steps: int = constants.SUB_STEPS
    boundary: Dict[str, Any] = field(default_factory=_default_boundary)
    coulomb: bool = True
    gravity: bool = False
    lennard_jones: bool = True
    bonds: bool = True
    bond_formation: bool = True

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.dimensions not in (2, 3):
            raise ConfigurationError(f"dimensions must be 2 or 3, got {self.dimensions}")

        for name in (
            "k_coulomb",
            "gravity_constant",
            "lj_epsilon",
            "lj_sigma",
            "bond_strength",
            "charge_threshold",
        ):
            value = getattr(self, name)
            if not (math.isfinite(value) and value >= 0):
                raise ConfigurationError(f"{name} must be non-negative, got {value}")

        for name in (
            "bond_distance_factor",
            "max_bonding_speed",
            "distance_floor",
            "bond_distance_floor",
            "time_scale",
        ):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if not (0.0 < self.damping <= 1.0):
            raise ConfigurationError(f"damping must be in (0, 1], got {self.damping}")
        try:
            whole = int(self.sub_steps) == self.sub_steps
        except (TypeError, ValueError, OverflowError):
            whole = False
        if not whole or self.sub_steps < 1:
            raise ConfigurationError(f"sub_steps must be an integer >= 1, got {self.sub_steps}")

        self._validate_boundary()

    def _validate_boundary(self) -> None:
        if not isinstance(self.boundary, dict):
            raise ConfigurationError("boundary must be a mapping")
        bc_type = str(self.boundary.get("type", "soft_wall")).lower()
        if bc_type not in BOUNDARY_TYPES:
            raise ConfigurationError(
                f"Unknown boundary type: {bc_type!r} (choose from {', '.join(BOUNDARY_TYPES)})"
            )
        if bc_type == "soft_wall":
            bound = self.boundary.get("bound", constants.WALL_BOUND)
            restitution = self.boundary.get("restitution", constants.WALL_RESTITUTION)
            if not (isinstance(bound, (int, float)) and bound > 0):
                raise ConfigurationError(f"boundary bound must be positive, got {bound!r}")
            if not (isinstance(restitution, (int, float)) and 0 <= restitution <= 1):
                raise ConfigurationError(
                    f"boundary restitution must be in [0, 1], got {restitution!r}"
                )

    @property
    def enabled_terms(self) -> Dict[str, bool]:
        """Map of force-term switches."""
        return {
            "coulomb": self.coulomb,
            "gravity": self.gravity,
            "lennard_jones": self.lennard_jones,
            "bonds": self.bonds,
        }

    def replace(self, **changes: Any) -> "SimulationConfig":
        """Return a copy with the given fields changed (re-validated)."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """
        Build a config from a mapping, ignoring nothing silently.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError("simulation config must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown simulation parameter(s): {', '.join(unknown)}")
        try:
            return cls(**data)
        except ConfigurationError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(str(exc)) from exc


class Presets:
    """
    Factory for the standard scenario configurations.

    Example:
        >>> config = Presets.gravity()
        >>> config.gravity, config.coulomb
        (True, False)
    """

    @staticmethod
    def molecular(**overrides: Any) -> SimulationConfig:
        """
        Atoms and ions: Coulomb + Lennard-Jones + bond springs, automatic
        bond formation, soft walls at ±12 and damping 0.98.
        """
        return SimulationConfig(**overrides)

    @staticmethod
    def gravity(**overrides: Any) -> SimulationConfig:
        """
        N-body gravity: gravity only, open boundary, no bonding, no damping.
        """
        params: Dict[str, Any] = dict(
            coulomb=False,
            gravity=True,
            lennard_jones=False,
            bonds=False,
            bond_formation=False,
            damping=1.0,
            distance_floor=0.1,
            boundary={"type": "open"},
        )
        params.update(overrides)
        return SimulationConfig(**params)
