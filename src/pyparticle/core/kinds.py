"""
Particle kinds and their fixed property table.

Every particle carries a discrete kind that determines its default mass,
charge, radius, valence (maximum simultaneous bonds) and display color.
The kinds form a closed set; their properties live in one data table
instead of per-kind methods.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .errors import UnknownKindError

Color = Tuple[float, float, float, float]


@dataclass(frozen=True)
class KindProperties:
    """
    Immutable property record for a particle kind.

    Values are visualization-scaled, not physical units.

    Attributes:
        symbol: Short symbol (e.g., "H", "Na").
        name: Human-readable name.
        mass: Default mass (positive).
        charge: Default charge (may be zero).
        radius: Default radius; used for LJ sigma, bond rest length and
            the bond-formation distance threshold.
        max_bonds: Valence, the maximum number of simultaneous bonds.
        color: RGBA color for external renderers.
    """
    symbol: str
    name: str
    mass: float
    charge: float
    radius: float
    max_bonds: int
    color: Color


class ParticleKind(Enum):
    """
    Closed set of particle kinds.

    Example:
        >>> from pyparticle.core import ParticleKind
        >>> ParticleKind.OXYGEN.max_bonds()
        2
        >>> ParticleKind.from_symbol("na") is ParticleKind.SODIUM
        True
    """
    HYDROGEN = "hydrogen"
    CARBON = "carbon"
    NITROGEN = "nitrogen"
    OXYGEN = "oxygen"
    SODIUM = "sodium"
    CHLORINE = "chlorine"
    BODY = "body"

    def properties(self) -> KindProperties:
        """Return the property record for this kind."""
        return KIND_TABLE[self]

    def max_bonds(self) -> int:
        """Return the valence limit for this kind."""
        return KIND_TABLE[self].max_bonds

    @property
    def symbol(self) -> str:
        return KIND_TABLE[self].symbol

    @classmethod
    def from_symbol(cls, identifier: str) -> "ParticleKind":
        """
        Look up a kind by symbol or name (case-insensitive).

        Args:
            identifier: Symbol ("Cl") or name ("chlorine").

        Returns:
            The matching ParticleKind.

        Raises:
            UnknownKindError: If nothing matches.
        """
        if isinstance(identifier, ParticleKind):
            return identifier
        key = str(identifier).strip().lower()
        for kind, props in KIND_TABLE.items():
            if key in (kind.value, props.symbol.lower(), props.name.lower()):
                return kind
        raise UnknownKindError(f"Unknown particle kind: {identifier!r}")


KIND_TABLE: Dict[ParticleKind, KindProperties] = {
    ParticleKind.HYDROGEN: KindProperties(
        "H", "Hydrogen", 1.0, 0.0, 0.25, 1, (1.0, 1.0, 1.0, 1.0)
    ),
    ParticleKind.CARBON: KindProperties(
        "C", "Carbon", 12.0, 0.0, 0.35, 4, (0.3, 0.3, 0.3, 1.0)
    ),
    ParticleKind.NITROGEN: KindProperties(
        "N", "Nitrogen", 14.0, 0.0, 0.32, 3, (0.2, 0.2, 0.8, 1.0)
    ),
    ParticleKind.OXYGEN: KindProperties(
        "O", "Oxygen", 16.0, 0.0, 0.30, 2, (0.8, 0.2, 0.2, 1.0)
    ),
    # Na+ / Cl- ions
    ParticleKind.SODIUM: KindProperties(
        "Na", "Sodium", 23.0, 1.0, 0.45, 1, (0.8, 0.5, 0.8, 1.0)
    ),
    ParticleKind.CHLORINE: KindProperties(
        "Cl", "Chlorine", 35.5, -1.0, 0.40, 1, (0.2, 0.8, 0.2, 1.0)
    ),
    ParticleKind.BODY: KindProperties(
        "*", "Body", 1000.0, 0.0, 0.5, 0, (0.2, 0.7, 1.0, 1.0)
    ),
}

missing = [kind for kind in ParticleKind if kind not in KIND_TABLE]
if missing:
    raise RuntimeError(f"KIND_TABLE is missing entries for {missing}")
del missing


def body_radius(mass: float) -> float:
    """
    Radius of a gravitational body, proportional to the cube root of mass.

    Args:
        mass: Body mass (positive).

    Returns:
        (mass / 1000)^(1/3) * 0.5
    """
    return (mass / 1000.0) ** (1.0 / 3.0) * 0.5


def body_color(mass: float) -> Color:
    """Blue for light bodies, red for heavy ones."""
    t = min(max(mass / 10000.0, 0.0), 1.0)
    return (0.2 + 0.8 * t, 0.4 + 0.3 * (1.0 - t), 1.0 - 0.6 * t, 1.0)
