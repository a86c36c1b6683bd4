"""
Unit tests for core module.

Tests for ParticleKind, Particle, ParticleStore, SimulationConfig,
Presets and the error hierarchy.
"""
import numpy as np
import pytest

from pyparticle.core import (
    KIND_TABLE,
    ConfigurationError,
    NumericalInstabilityError,
    Particle,
    ParticleKind,
    ParticleNotFoundError,
    ParticleSimError,
    ParticleStore,
    Presets,
    SimulationConfig,
    UnknownKindError,
    body_color,
    body_radius,
)


class TestParticleKind:
    """Tests for the kind table."""

    def test_every_kind_has_properties(self) -> None:
        """The table covers the closed set of kinds."""
        for kind in ParticleKind:
            assert kind in KIND_TABLE
            assert kind.properties().mass > 0
            assert kind.properties().radius > 0

    @pytest.mark.parametrize(
        "kind,valence",
        [
            (ParticleKind.HYDROGEN, 1),
            (ParticleKind.CARBON, 4),
            (ParticleKind.NITROGEN, 3),
            (ParticleKind.OXYGEN, 2),
            (ParticleKind.SODIUM, 1),
            (ParticleKind.CHLORINE, 1),
            (ParticleKind.BODY, 0),
        ],
    )
    def test_valence(self, kind: ParticleKind, valence: int) -> None:
        assert kind.max_bonds() == valence

    def test_ion_charges(self) -> None:
        assert ParticleKind.SODIUM.properties().charge == 1.0
        assert ParticleKind.CHLORINE.properties().charge == -1.0
        assert ParticleKind.OXYGEN.properties().charge == 0.0

    @pytest.mark.parametrize(
        "identifier,expected",
        [
            ("H", ParticleKind.HYDROGEN),
            ("na", ParticleKind.SODIUM),
            ("Chlorine", ParticleKind.CHLORINE),
            ("oxygen", ParticleKind.OXYGEN),
            (" C ", ParticleKind.CARBON),
            ("body", ParticleKind.BODY),
        ],
    )
    def test_from_symbol(self, identifier: str, expected: ParticleKind) -> None:
        assert ParticleKind.from_symbol(identifier) is expected

    def test_from_symbol_passes_kind_through(self) -> None:
        assert ParticleKind.from_symbol(ParticleKind.NITROGEN) is ParticleKind.NITROGEN

    def test_unknown_symbol(self) -> None:
        """Unknown kinds raise an error that is also a ValueError."""
        with pytest.raises(UnknownKindError, match="Unknown particle kind"):
            ParticleKind.from_symbol("Xe")
        with pytest.raises(ValueError):
            ParticleKind.from_symbol("")

    def test_symbol_property(self) -> None:
        assert ParticleKind.SODIUM.symbol == "Na"

    def test_body_radius_scales_with_cube_root(self) -> None:
        assert body_radius(1000.0) == pytest.approx(0.5)
        assert body_radius(8000.0) == pytest.approx(1.0)

    def test_body_color_is_rgba(self) -> None:
        light = body_color(10.0)
        heavy = body_color(20000.0)
        assert len(light) == 4
        assert heavy[0] > light[0]
        assert all(0.0 <= c <= 1.0 for c in light + heavy)


class TestParticle:
    """Tests for Particle dataclass."""

    def test_particle_creation(self) -> None:
        p = Particle(0, ParticleKind.OXYGEN, mass=16.0, charge=0.0, radius=0.3)
        assert p.max_bonds == 2
        assert p.color == (1.0, 1.0, 1.0, 1.0)

    @pytest.mark.parametrize("mass", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_mass(self, mass: float) -> None:
        with pytest.raises(ValueError, match="mass must be positive"):
            Particle(0, ParticleKind.HYDROGEN, mass=mass, charge=0.0, radius=0.25)

    def test_invalid_radius(self) -> None:
        with pytest.raises(ValueError, match="radius must be positive"):
            Particle(0, ParticleKind.HYDROGEN, mass=1.0, charge=0.0, radius=0.0)

    def test_invalid_charge(self) -> None:
        with pytest.raises(ValueError, match="charge must be finite"):
            Particle(0, ParticleKind.HYDROGEN, mass=1.0, charge=float("nan"), radius=0.25)


@pytest.fixture
def store() -> ParticleStore:
    return ParticleStore(dimensions=2)


class TestParticleStore:
    """Tests for ParticleStore."""

    def test_ids_are_sequential(self, store: ParticleStore) -> None:
        ids = [store.add(ParticleKind.HYDROGEN, (float(i), 0.0)) for i in range(3)]
        assert ids == [0, 1, 2]
        assert len(store) == 3
        assert store.next_id == 3

    def test_defaults_from_kind(self, store: ParticleStore) -> None:
        pid = store.add(ParticleKind.SODIUM, (0.0, 0.0))
        particle = store.get(pid)
        assert particle.mass == 23.0
        assert particle.charge == 1.0
        assert particle.radius == pytest.approx(0.45)
        np.testing.assert_array_equal(store.velocities[0], [0.0, 0.0])

    def test_overrides(self, store: ParticleStore) -> None:
        pid = store.add(ParticleKind.CARBON, (0.0, 0.0), mass=2.0, charge=-0.5, radius=0.3)
        particle = store.get(pid)
        assert (particle.mass, particle.charge, particle.radius) == (2.0, -0.5, 0.3)
        assert particle.kind is ParticleKind.CARBON

    def test_body_derives_radius_from_mass(self, store: ParticleStore) -> None:
        pid = store.add(ParticleKind.BODY, (0.0, 0.0), mass=8000.0)
        assert store.get(pid).radius == pytest.approx(1.0)
        assert store.get(pid).color == body_color(8000.0)

    def test_wrong_vector_shape(self, store: ParticleStore) -> None:
        with pytest.raises(ValueError, match="Position must have 2 components"):
            store.add(ParticleKind.HYDROGEN, (0.0, 0.0, 0.0))
        with pytest.raises(ValueError, match="Velocity must have 2 components"):
            store.add(ParticleKind.HYDROGEN, (0.0, 0.0), velocity=(1.0,))
        assert len(store) == 0

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
    def test_non_finite_vectors_rejected(self, store: ParticleStore, bad: float) -> None:
        with pytest.raises(ValueError, match="Position must be finite"):
            store.add(ParticleKind.OXYGEN, (bad, 0.0))
        with pytest.raises(ValueError, match="Velocity must be finite"):
            store.add(ParticleKind.OXYGEN, (0.0, 0.0), velocity=(0.0, bad))
        assert len(store) == 0
        assert store.next_id == 0

    def test_invalid_dimensions(self) -> None:
        with pytest.raises(ValueError, match="Dimensions must be 2 or 3"):
            ParticleStore(dimensions=4)

    def test_three_dimensional_store(self) -> None:
        store = ParticleStore(dimensions=3)
        store.add(ParticleKind.OXYGEN, (1.0, 2.0, 3.0))
        assert store.positions.shape == (1, 3)

    def test_lookup_fails_closed(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0))
        with pytest.raises(ParticleNotFoundError) as excinfo:
            store.get(5)
        assert excinfo.value.particle_id == 5
        assert "No particle with id 5" in str(excinfo.value)
        assert isinstance(excinfo.value, KeyError)
        assert isinstance(excinfo.value, ParticleSimError)
        with pytest.raises(ParticleNotFoundError):
            store.index_of(None)

    def test_contains(self, store: ParticleStore) -> None:
        pid = store.add(ParticleKind.HYDROGEN, (0.0, 0.0))
        assert pid in store
        assert 42 not in store

    def test_growth_preserves_state(self, store: ParticleStore) -> None:
        """Adding beyond the initial capacity keeps earlier rows intact."""
        for i in range(40):
            store.add(ParticleKind.HYDROGEN, (float(i), -float(i)), velocity=(0.5, float(i)))
        assert store.positions.shape == (40, 2)
        np.testing.assert_array_equal(store.positions[:, 0], np.arange(40.0))
        np.testing.assert_array_equal(store.velocities[:, 1], np.arange(40.0))
        assert store.index_of(39) == 39

    def test_positions_are_live_views(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0))
        store.positions[0] += 1.0
        np.testing.assert_array_equal(store.positions[0], [1.0, 1.0])

    def test_property_arrays_read_only(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0))
        masses = store.masses()
        assert masses.flags.writeable is False
        with pytest.raises(ValueError):
            masses[0] = 5.0

    def test_property_cache_invalidated_on_add(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0))
        assert len(store.charges()) == 1
        store.add(ParticleKind.CHLORINE, (1.0, 0.0))
        np.testing.assert_array_equal(store.charges(), [0.0, -1.0])

    def test_clear_resets_ids(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0))
        store.add(ParticleKind.HYDROGEN, (1.0, 0.0))
        store.clear()
        assert len(store) == 0
        assert store.next_id == 0
        assert store.add(ParticleKind.OXYGEN, (0.0, 0.0)) == 0

    def test_kinetic_energy_and_temperature(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0), velocity=(3.0, 4.0))
        assert store.kinetic_energy() == pytest.approx(12.5)
        # T = 2 KE / (N D)
        assert store.temperature() == pytest.approx(12.5)

    def test_empty_diagnostics(self, store: ParticleStore) -> None:
        assert store.kinetic_energy() == 0.0
        assert store.temperature() == 0.0
        np.testing.assert_array_equal(store.center_of_mass(), [0.0, 0.0])
        np.testing.assert_array_equal(store.momentum(), [0.0, 0.0])

    def test_center_of_mass_and_momentum(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0), velocity=(1.0, 0.0), mass=1.0)
        store.add(ParticleKind.HYDROGEN, (3.0, 0.0), velocity=(0.0, 1.0), mass=2.0)
        np.testing.assert_array_almost_equal(store.center_of_mass(), [2.0, 0.0])
        np.testing.assert_array_almost_equal(store.momentum(), [1.0, 2.0])

    def test_zero_momentum(self, store: ParticleStore) -> None:
        store.add(ParticleKind.HYDROGEN, (0.0, 0.0), velocity=(1.0, 2.0))
        store.add(ParticleKind.OXYGEN, (1.0, 0.0), velocity=(-0.5, 0.5))
        store.zero_momentum()
        np.testing.assert_array_almost_equal(store.momentum(), [0.0, 0.0])


class TestSimulationConfig:
    """Tests for SimulationConfig and Presets."""

    def test_defaults(self) -> None:
        config = SimulationConfig()
        assert config.dimensions == 2
        assert config.k_coulomb == 100.0
        assert config.lj_epsilon == 1.0
        assert config.lj_sigma == 0.5
        assert config.bond_distance_factor == 1.2
        assert config.bond_strength == 50.0
        assert config.max_bonding_speed == 2.0
        assert config.damping == 0.98
        assert config.sub_steps == 4
        assert config.boundary["type"] == "soft_wall"
        assert config.boundary["bound"] == 12.0

    @pytest.mark.parametrize(
        "changes",
        [
            {"damping": 0.0},
            {"damping": 1.5},
            {"sub_steps": 0},
            {"sub_steps": 1.5},
            {"k_coulomb": -1.0},
            {"distance_floor": 0.0},
            {"bond_distance_floor": -0.01},
            {"sub_steps": "x"},
            {"sub_steps": float("inf")},
            {"time_scale": float("nan")},
            {"dimensions": 1},
            {"boundary": {"type": "periodic"}},
            {"boundary": {"type": "soft_wall", "bound": -1.0}},
            {"boundary": {"type": "soft_wall", "restitution": 2.0}},
            {"boundary": "open"},
        ],
    )
    def test_invalid_values(self, changes) -> None:
        with pytest.raises(ConfigurationError):
            SimulationConfig(**changes)

    def test_replace_revalidates(self) -> None:
        config = SimulationConfig()
        assert config.replace(damping=0.5).damping == 0.5
        assert config.damping == 0.98
        with pytest.raises(ConfigurationError):
            config.replace(damping=-0.1)

    def test_from_dict(self) -> None:
        config = SimulationConfig.from_dict({"damping": 1.0, "coulomb": False})
        assert config.damping == 1.0
        assert config.coulomb is False
        assert SimulationConfig.from_dict(None) == SimulationConfig()

    def test_from_dict_rejects_unknown_keys(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown simulation parameter"):
            SimulationConfig.from_dict({"dampening": 0.9})

    @pytest.mark.parametrize(
        "data",
        [{"sub_steps": "x"}, {"damping": "high"}, {"distance_floor": "far"}],
    )
    def test_from_dict_wraps_bad_types(self, data) -> None:
        with pytest.raises(ConfigurationError):
            SimulationConfig.from_dict(data)

    def test_bond_distance_floor_default(self) -> None:
        config = SimulationConfig()
        assert config.bond_distance_floor == pytest.approx(0.01)
        assert config.bond_distance_floor < config.distance_floor

    def test_to_dict_round_trip(self) -> None:
        config = Presets.gravity(time_scale=2.0)
        assert SimulationConfig.from_dict(config.to_dict()) == config

    def test_molecular_preset(self) -> None:
        config = Presets.molecular()
        assert config.enabled_terms == {
            "coulomb": True,
            "gravity": False,
            "lennard_jones": True,
            "bonds": True,
        }
        assert config.bond_formation is True

    def test_gravity_preset(self) -> None:
        config = Presets.gravity()
        assert config.gravity is True
        assert config.coulomb is False
        assert config.lennard_jones is False
        assert config.bond_formation is False
        assert config.damping == 1.0
        assert config.boundary == {"type": "open"}

    def test_preset_overrides(self) -> None:
        assert Presets.gravity(damping=0.9).damping == 0.9


class TestErrors:
    """Tests for the error hierarchy."""

    def test_numerical_instability_lists_ids(self) -> None:
        error = NumericalInstabilityError(iter([3, 7]))
        assert error.particle_ids == (3, 7)
        assert "3, 7" in str(error)
        assert isinstance(error, ArithmeticError)

    def test_numerical_instability_truncates(self) -> None:
        error = NumericalInstabilityError(range(25))
        assert str(error).endswith("...")

    def test_configuration_error_is_value_error(self) -> None:
        assert issubclass(ConfigurationError, ValueError)
        assert issubclass(ConfigurationError, ParticleSimError)
