"""
Integrator module for the particle engine.

Provides time integration algorithms:
- DampedEulerIntegrator: Semi-implicit Euler with velocity damping
"""

from .damped_euler import DampedEulerIntegrator
from .integrator import Integrator

__all__ = [
    "Integrator",
    "DampedEulerIntegrator",
]
