"""
Force module for the particle engine.

Provides the force terms and their composite:
- ForceTerm / PairwiseForce: Strategy bases
- CoulombForce, GravityForce: Inverse-square central forces
- LennardJonesForce: 12-6 short-range repulsion/attraction
- HarmonicBondForce: Springs along bonds
- ForceField: Sum of all active terms
"""

from .bond_spring import HarmonicBondForce
from .coulomb import CoulombForce, GravityForce
from .force_field import ForceField
from .force_term import ForceTerm, PairwiseForce
from .lennard_jones import LennardJonesForce
from .pairs import PairList

__all__ = [
    "ForceTerm",
    "PairwiseForce",
    "PairList",
    "CoulombForce",
    "GravityForce",
    "LennardJonesForce",
    "HarmonicBondForce",
    "ForceField",
]
