"""
Default interaction constants.

These are visualization-scaled values, not physical ones. They seed
SimulationConfig and the boundary defaults.
"""
from typing import Final

# Electrostatics / gravity
K_COULOMB: Final[float] = 100.0
GRAVITY_CONSTANT: Final[float] = 100.0
CHARGE_THRESHOLD: Final[float] = 0.01

# Lennard-Jones (sigma is a scale applied to the sum of radii)
LJ_EPSILON: Final[float] = 1.0
LJ_SIGMA_SCALE: Final[float] = 0.5

# Bonding
BOND_DISTANCE_FACTOR: Final[float] = 1.2
BOND_STRENGTH: Final[float] = 50.0
MAX_BONDING_SPEED: Final[float] = 2.0

# Minimum separation for pairwise terms
DISTANCE_FLOOR: Final[float] = 0.5
# Minimum separation used to normalise a bond direction
BOND_DISTANCE_FLOOR: Final[float] = 0.01

# Integration
DAMPING: Final[float] = 0.98
TIME_SCALE: Final[float] = 1.0
SUB_STEPS: Final[int] = 4

# Soft wall
WALL_BOUND: Final[float] = 12.0
WALL_RESTITUTION: Final[float] = 0.5
