#!/usr/bin/env python3
"""
Example 3: Gravity Orbits

A heavy central body with light satellites on circular orbits. Uses the
gravity preset: attraction only, open boundary, no damping, no bonds.

Physics:
    F = -G * m_i * m_j / d²
    v_circular = sqrt(G * M / r)

Usage:
    pip install -e .
    python examples/03_gravity_orbits.py
"""
import numpy as np

from pyparticle.core import Presets
from pyparticle.observer import EnergyObserver
from pyparticle.simulation import SimulationBuilder


def main():
    print("=" * 55)
    print("  Example 3: GRAVITY ORBITS")
    print("  One star, three planets")
    print("=" * 55)

    config = Presets.gravity()
    energy_obs = EnergyObserver(interval=10)
    sim = SimulationBuilder().with_config(config).add_observer(energy_obs).build()

    star_mass = 5000.0
    sim.create_body((0.0, 0.0), (0.0, 0.0), mass=star_mass)
    for radius, mass in ((3.0, 10.0), (5.0, 20.0), (8.0, 5.0)):
        speed = np.sqrt(config.gravity_constant * star_mass / radius)
        sim.create_body((radius, 0.0), (0.0, speed), mass=mass)

    sim.store.zero_momentum()
    com_start = sim.center_of_mass()

    sim.run(num_frames=600, frame_dt=1.0 / 600.0)

    print(f"\n{'='*40}")
    print("RESULTS")
    print(f"{'='*40}")
    print(f"Steps:              {sim.step_count}")
    print(f"Energy drift:       {energy_obs.get_energy_drift():+.4e}")
    print(f"COM displacement:   {np.linalg.norm(sim.center_of_mass() - com_start):.2e}")
    for view in sim.particles[1:]:
        print(f"  body {view.id}: r = {np.linalg.norm(view.position):.3f}")


if __name__ == "__main__":
    main()
