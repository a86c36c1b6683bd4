"""
Observer module for the particle engine.

Provides the Observer pattern for monitoring:
- EnergyObserver: Track energy components, temperature and bond count
- TrajectoryObserver: Record read-only snapshots
- PrintObserver: Console output
- CompositeObserver: Combine multiple observers
"""

from .observer import (
    CompositeObserver,
    EnergyObserver,
    Observer,
    PrintObserver,
    TrajectoryObserver,
)

__all__ = [
    "Observer",
    "CompositeObserver",
    "EnergyObserver",
    "TrajectoryObserver",
    "PrintObserver",
]
