#!/usr/bin/env python3
"""
Example 2: Water Formation

A random cloud of hydrogen and oxygen atoms inside the soft walls. Bonds
form on contact and valence caps each oxygen at two partners and each
hydrogen at one, so the cloud settles into H2O, OH and H2 fragments.

Usage:
    pip install -e .
    python examples/02_water_formation.py
"""
from collections import Counter

import numpy as np

from pyparticle.core import ParticleKind, Presets
from pyparticle.simulation import Simulation


def main():
    print("=" * 55)
    print("  Example 2: WATER FORMATION")
    print("  20 H + 10 O in a box with damping")
    print("=" * 55)

    rng = np.random.default_rng(seed=7)
    sim = Simulation(Presets.molecular(damping=0.97))

    for kind, count in ((ParticleKind.HYDROGEN, 20), (ParticleKind.OXYGEN, 10)):
        for _ in range(count):
            sim.create(
                kind,
                rng.uniform(-6.0, 6.0, size=2),
                rng.normal(0.0, 0.5, size=2),
            )

    for frame in range(600):
        sim.advance(1.0 / 60.0)
        if frame % 100 == 0:
            print(
                f"frame {frame:4d} | bonds={len(sim.bonds):3d} | "
                f"T={sim.temperature():8.4f} | PE={sim.potential_energy():10.3f}"
            )

    sim.check_invariants()

    # Classify fragments by the kinds bonded to each oxygen
    fragments = Counter()
    for view in sim.particles:
        if view.kind is ParticleKind.OXYGEN:
            h_count = sum(
                1 for pid in view.bonds if sim.particle(pid).kind is ParticleKind.HYDROGEN
            )
            fragments[f"OH{h_count}" if h_count else "O"] += 1

    print(f"\n{'='*40}")
    print("RESULTS")
    print(f"{'='*40}")
    print(f"Total bonds:        {len(sim.bonds)}")
    for name, count in sorted(fragments.items()):
        print(f"  {name:6s}            {count}")


if __name__ == "__main__":
    main()
