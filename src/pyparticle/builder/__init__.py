"""
Builder module for scenario setup.

Provides YAML/dict configuration loading:
- load_yaml: Read a YAML scenario file
- build_simulation_from_config: Build a populated Simulation from a dict
- load_and_run: Load a scenario and run it
"""

from .config_loader import build_simulation_from_config, load_and_run, load_yaml

__all__ = [
    "load_yaml",
    "build_simulation_from_config",
    "load_and_run",
]
