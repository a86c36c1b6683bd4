"""
Bond module for the particle engine.

Provides the valence-constrained bond graph:
- Bond: Undirected bond record with implicit rest length
- BondGraph: Edge list plus adjacency, enforcing graph invariants
- BondFormation: Proximity/speed-based automatic bonding pass
"""

from .bond import Bond
from .bond_graph import BondGraph, same_sign_charges
from .formation import BondFormation

__all__ = [
    "Bond",
    "BondGraph",
    "BondFormation",
    "same_sign_charges",
]
