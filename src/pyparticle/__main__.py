"""Allow running with: python -m pyparticle

Runs a YAML scenario headless and prints an energy summary, or prints
version info and available commands when no scenario is given.
"""
import argparse
import logging
import sys

import pyparticle
from pyparticle.builder import load_and_run
from pyparticle.core import ParticleSimError
from pyparticle.observer import EnergyObserver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m pyparticle",
        description="Run a pyparticle scenario from a YAML file.",
    )
    parser.add_argument("config", nargs="?", help="Path to a YAML scenario file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    return parser


def print_usage() -> None:
    print(f"pyparticle {pyparticle.__version__} - Particle Interaction Engine")
    print()
    print("Usage:")
    print("  python -m pyparticle scenario.yaml   Run a YAML scenario")
    print("  python -m pyparticle.api             Launch the REST API server")
    print("  python -m pytest tests/              Run tests")
    print()
    print("Quick start:")
    print("  from pyparticle.core import ParticleKind, Presets")
    print("  from pyparticle.simulation import Simulation")
    print("  sim = Simulation(Presets.molecular())")
    print("  sim.create(ParticleKind.OXYGEN, (0.0, 0.0))")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is None:
        print_usage()
        return 0

    try:
        sim = load_and_run(args.config)
    except (OSError, ParticleSimError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(
        f"Finished {sim.step_count} steps (t={sim.time:.4f}): "
        f"{len(sim.store)} particles, {len(sim.bonds)} bonds"
    )
    for observer in sim.observers:
        if isinstance(observer, EnergyObserver):
            print(f"  Energy drift: {observer.get_energy_drift():+.4e}")
    print(f"  KE={sim.kinetic_energy():.4f}  PE={sim.potential_energy():.4f}  "
          f"T={sim.temperature():.4f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
