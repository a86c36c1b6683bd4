"""
Unit tests for the YAML/dict configuration loader.
"""
import numpy as np
import pytest

from pyparticle.boundary import OpenBoundary, SoftWallBoundary
from pyparticle.builder import build_simulation_from_config, load_and_run, load_yaml
from pyparticle.core import ConfigurationError, ParticleKind
from pyparticle.observer import EnergyObserver, PrintObserver, TrajectoryObserver

WATER_YAML = """
simulation:
  preset: molecular
  damping: 0.95
  sub_steps: 2
particles:
  - {kind: O, position: [0.0, 0.0]}
  - {kind: H, position: [0.6, 0.0], velocity: [0.0, 0.1]}
  - {kind: hydrogen, position: [-0.6, 0.0]}
  - {kind: Na, position: [5.0, 5.0], charge: 0.5, mass: 2.0, radius: 0.4}
bonds:
  - [0, 1]
  - [0, 2]
observers:
  energy: true
  energy_interval: 1
  trajectory: true
  trajectory_interval: 2
run:
  frames: 3
  frame_dt: 0.02
"""


@pytest.fixture
def water_file(tmp_path):
    path = tmp_path / "water.yaml"
    path.write_text(WATER_YAML)
    return path


class TestLoadYaml:
    """Tests for load_yaml."""

    def test_loads_mapping(self, water_file) -> None:
        config = load_yaml(water_file)
        assert config["simulation"]["damping"] == 0.95
        assert len(config["particles"]) == 4

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == {}

    def test_non_mapping_root(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_yaml(path)

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("simulation: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_yaml(str(path))

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OSError):
            load_yaml(tmp_path / "missing.yaml")


class TestBuildSimulationFromConfig:
    """Tests for build_simulation_from_config."""

    def test_builds_particles_and_bonds(self, water_file) -> None:
        sim = build_simulation_from_config(load_yaml(water_file))

        assert len(sim.store) == 4
        assert sim.config.damping == 0.95
        assert sim.damping == 0.95
        assert sim.config.sub_steps == 2
        assert len(sim.bonds) == 2
        assert sim.particle(0).bonds == (1, 2)
        assert sim.particle(2).kind is ParticleKind.HYDROGEN
        np.testing.assert_array_almost_equal(sim.particle(1).velocity, [0.0, 0.1])
        sim.check_invariants()

    def test_property_overrides(self, water_file) -> None:
        sim = build_simulation_from_config(load_yaml(water_file))
        sodium = sim.particle(3)
        assert sodium.charge == 0.5
        assert sodium.mass == 2.0
        assert sodium.radius == 0.4

    def test_observers(self, water_file) -> None:
        sim = build_simulation_from_config(load_yaml(water_file))
        kinds = [type(o) for o in sim.observers]
        assert kinds == [EnergyObserver, TrajectoryObserver]
        assert sim.observers[1].interval == 2

    def test_print_observer(self) -> None:
        sim = build_simulation_from_config(
            {"observers": {"energy": False, "print": True, "print_interval": 10}}
        )
        assert len(sim.observers) == 1
        assert isinstance(sim.observers[0], PrintObserver)
        assert sim.observers[0].interval == 10

    def test_empty_config_uses_molecular_defaults(self) -> None:
        sim = build_simulation_from_config({})
        assert len(sim.store) == 0
        assert isinstance(sim.boundary, SoftWallBoundary)
        assert sim.config.coulomb is True

    def test_gravity_preset(self) -> None:
        sim = build_simulation_from_config(
            {
                "simulation": {"preset": "gravity", "gravity_constant": 10.0},
                "particles": [
                    {"kind": "body", "position": [0.0, 0.0], "mass": 8000.0},
                    {"kind": "body", "position": [4.0, 0.0], "velocity": [0.0, 1.0]},
                ],
            }
        )
        assert sim.config.gravity is True
        assert sim.config.gravity_constant == 10.0
        assert isinstance(sim.boundary, OpenBoundary)
        assert sim.particle(0).radius == pytest.approx(1.0)
        assert sim.formation is None

    @pytest.mark.parametrize(
        "config,message",
        [
            ({"simulation": {"preset": "plasma"}}, "Unknown preset"),
            ({"simulation": {"dampening": 0.5}}, "Unknown simulation parameter"),
            ({"simulation": {"damping": 2.0}}, "damping"),
            ({"particles": {"kind": "O"}}, "'particles' must be a list"),
            ({"particles": ["O"]}, "must be a mapping"),
            ({"particles": [{"kind": "O"}]}, "requires 'kind' and 'position'"),
            ({"particles": [{"kind": "Xe", "position": [0, 0]}]}, "Unknown particle kind"),
            ({"particles": [{"kind": "O", "position": [0, 0, 0]}]}, "2 components"),
            ({"particles": [{"kind": "O", "position": [0, 0], "spin": 1}]}, "unknown key"),
            ({"particles": [{"kind": "O", "position": [0, 0], "mass": -1}]}, "mass"),
            ({"particles": [{"kind": "O", "position": [float("nan"), 0]}]}, "finite"),
            ({"simulation": {"sub_steps": "four"}}, "sub_steps"),
            ({"bonds": [[0, 1]]}, "unknown particle"),
            ({"bonds": [[0]]}, "pair of particle indices"),
            ({"bonds": "0-1"}, "'bonds' must be a list"),
            ({"observers": {"energy_interval": 0}}, "Interval"),
            ({"observers": ["energy"]}, "'observers' must be a mapping"),
            ([], "must be a mapping"),
        ],
    )
    def test_malformed_input(self, config, message: str) -> None:
        with pytest.raises(ConfigurationError, match=message):
            build_simulation_from_config(config)

    def test_bond_violating_valence(self) -> None:
        config = {
            "particles": [
                {"kind": "H", "position": [0.0, 0.0]},
                {"kind": "O", "position": [1.0, 0.0]},
                {"kind": "O", "position": [-1.0, 0.0]},
            ],
            "bonds": [[0, 1], [0, 2]],
        }
        with pytest.raises(ConfigurationError, match="bonds\\[1\\]"):
            build_simulation_from_config(config)


class TestLoadAndRun:
    """Tests for load_and_run."""

    def test_runs_configured_frames(self, water_file) -> None:
        sim = load_and_run(water_file)
        # 3 frames x 2 sub-steps
        assert sim.step_count == 6
        assert sim.time == pytest.approx(0.06)
        energy = sim.observers[0]
        assert energy.steps == [0, 1, 2, 3, 4, 5]
        trajectory = sim.observers[1]
        assert len(trajectory.frames) == 3

    @pytest.mark.parametrize(
        "run_section",
        ["run: {frames: many}\n", "run: {frame_dt: -0.1}\n", "run: [1, 2]\n"],
    )
    def test_malformed_run_section(self, tmp_path, run_section: str) -> None:
        path = tmp_path / "run.yaml"
        path.write_text("particles:\n  - {kind: O, position: [0, 0]}\n" + run_section)
        with pytest.raises(ConfigurationError, match="run"):
            load_and_run(path)


class TestCommandLine:
    """Tests for ``python -m pyparticle``."""

    def test_usage_without_config(self, capsys) -> None:
        from pyparticle.__main__ import main

        assert main([]) == 0
        out = capsys.readouterr().out
        assert "pyparticle" in out
        assert "python -m pyparticle scenario.yaml" in out

    def test_runs_scenario(self, water_file, capsys) -> None:
        from pyparticle.__main__ import main

        assert main([str(water_file)]) == 0
        out = capsys.readouterr().out
        assert "Finished 6 steps" in out
        assert "4 particles" in out
        assert "Energy drift" in out

    def test_reports_bad_config(self, tmp_path, capsys) -> None:
        from pyparticle.__main__ import main

        path = tmp_path / "bad.yaml"
        path.write_text("particles:\n  - {kind: Xe, position: [0, 0]}\n")
        assert main([str(path)]) == 2
        assert "Unknown particle kind" in capsys.readouterr().err

    def test_reports_missing_file(self, tmp_path, capsys) -> None:
        from pyparticle.__main__ import main

        assert main([str(tmp_path / "nope.yaml")]) == 2
        assert "Error:" in capsys.readouterr().err
