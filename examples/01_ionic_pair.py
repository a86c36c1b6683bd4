#!/usr/bin/env python3
"""
Example 1: Ionic Pair

A sodium ion and a chloride ion released at rest. Coulomb attraction pulls
them together, Lennard-Jones repulsion stops the collapse and, once they
are close and slow enough, a bond forms.

Physics:
    F_coulomb = k * q_i * q_j / d²      (attractive for opposite charges)
    U_lj      = 4ε[(σ/d)¹² - (σ/d)⁶]

Usage:
    pip install -e .
    python examples/01_ionic_pair.py
"""
import numpy as np

from pyparticle.core import ParticleKind, Presets
from pyparticle.observer import EnergyObserver
from pyparticle.simulation import Simulation


def main():
    print("=" * 55)
    print("  Example 1: IONIC PAIR")
    print("  Na+ and Cl- attract, collide and bond")
    print("=" * 55)

    energy_obs = EnergyObserver(interval=4)
    sim = Simulation(Presets.molecular(), observers=[energy_obs])

    na = sim.create(ParticleKind.SODIUM, (-2.0, 0.0))
    cl = sim.create(ParticleKind.CHLORINE, (2.0, 0.0))

    frame_dt = 1.0 / 60.0
    bond_frame = None
    distances = []
    for frame in range(300):
        formed = sim.advance(frame_dt)
        if formed and bond_frame is None:
            bond_frame = frame
        delta = sim.particle(cl).position - sim.particle(na).position
        distances.append(float(np.linalg.norm(delta)))

    distances = np.array(distances)

    print(f"\n{'='*40}")
    print("RESULTS")
    print(f"{'='*40}")
    print(f"Simulated time:     {sim.time:.2f}")
    print(f"Distance range:     [{distances.min():.3f}, {distances.max():.3f}]")
    print(f"Final distance:     {distances[-1]:.3f}")
    print(f"Bond formed:        {'frame ' + str(bond_frame) if bond_frame is not None else 'no'}")
    print(f"Na partners:        {sim.particle(na).bonds}")
    print(f"Final temperature:  {sim.temperature():.4f}")
    print(f"Momentum:           {sim.momentum()}")


if __name__ == "__main__":
    main()
