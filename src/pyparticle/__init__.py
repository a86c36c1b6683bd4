"""
pyparticle - Deterministic particle-interaction simulation engine.

Evolves a system of point masses/charges under pairwise forces
(gravity, Coulomb, Lennard-Jones) and harmonic bond springs, while a
bond-formation pass maintains a valence-constrained bond graph.

Main features:
- Closed particle-kind table (mass, charge, radius, valence, color)
- Vectorised O(N²) force field with distance floors for pairs and bonds
- Damped semi-implicit Euler integration with sub-stepping
- Soft-wall and open boundary policies
- YAML configuration and an optional FastAPI transport for renderers
"""

__version__ = "0.1.0"
__author__ = "pyparticle Team"
