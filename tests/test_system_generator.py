"""Tests for whole-system generation."""

import math

import pytest

from stellarforge.engine import generate_system
from stellarforge.engine.system_generator import MAX_MOONS
from stellarforge.specs import SolarSystemSpec, StarSpec
from stellarforge.tables import SpectralClass
from stellarforge.utils import G


class TestSingleStar:
    """Test single-star systems."""

    @pytest.fixture
    def system(self):
        return generate_system(SolarSystemSpec.single_star(), seed=42)

    def test_layout(self, system):
        assert system.id == "single-star-42"
        assert system.seed == 42
        assert len(system.stars) == 1
        assert system.hierarchy.get_star_count() == 1
        assert system.hierarchy.get_depth() == 1
        assert system.get_primary().name == "single-star A"

    def test_planet_count(self, system):
        spec = SolarSystemSpec.single_star()
        assert spec.min_planets <= len(system.planets) <= spec.max_planets

    def test_planets_ordered_and_named(self, system):
        axes = [p.orbital.semi_major_axis_m for p in system.planets]
        assert axes == sorted(axes)
        assert [p.id for p in system.planets] == [f"planet-{i}" for i in range(len(axes))]
        assert system.planets[0].name == "single-star A b"
        assert all(p.orbital.parent_id == "star-0" for p in system.planets)

    def test_moons(self, system):
        for planet in system.planets:
            moons = system.get_moons(planet.id)
            assert len(moons) <= MAX_MOONS[planet.size_category]
            axes = [m.orbital.semi_major_axis_m for m in moons]
            assert axes == sorted(axes)
            for j, moon in enumerate(moons):
                assert moon.id == f"{planet.id}-moon-{j}"
                assert moon.orbital.parent_id == planet.id
                assert moon.physical.mass_kg <= 0.05 * planet.physical.mass_kg
        assert set(system.moons) <= {p.id for p in system.planets}

    def test_belt(self, system):
        assert len(system.belts) == 1
        assert system.belts[0].name == "Main Belt"

    def test_no_belt_when_disabled(self):
        spec = SolarSystemSpec(include_asteroid_belt=False)
        assert generate_system(spec, seed=1).belts == []

    def test_unique_ids(self, system):
        ids = [body.id for body in system.get_all_bodies()]
        assert len(ids) == len(set(ids))


class TestMultiStar:
    """Test binary and triple systems."""

    def test_binary(self):
        system = generate_system(SolarSystemSpec.binary(), seed=7)
        assert len(system.stars) == 2
        root = system.hierarchy.root
        assert root.id == "barycenter-0"
        assert system.hierarchy.get_all_star_ids() == ["star-0", "star-1"]
        assert system.stars[1].stellar.age_years == system.stars[0].stellar.age_years

    def test_triple_hierarchy(self):
        system = generate_system(SolarSystemSpec.alpha_centauri_like(), seed=42)
        assert system.hierarchy.get_star_count() == 3
        assert system.hierarchy.get_depth() == 3
        assert [s.stellar.spectral_class for s in system.stars] == [
            SpectralClass.G,
            SpectralClass.K,
            SpectralClass.M,
        ]
        assert system.stars[2].name == "alpha-centauri-like C"

    def test_barycenter_periods_follow_kepler(self):
        system = generate_system(SolarSystemSpec.alpha_centauri_like(), seed=42)
        masses = {s.id: s.physical.mass_kg for s in system.stars}
        inner = system.hierarchy.find_node("barycenter-0")
        total = masses["star-0"] + masses["star-1"]
        expected = 2 * math.pi * math.sqrt(inner.separation_m**3 / (G * total))
        assert inner.orbital_period_s == pytest.approx(expected)
        assert system.hierarchy.find_node("barycenter-1").orbital_period_s > inner.orbital_period_s

    def test_planets_inside_stable_region(self):
        for seed in range(5):
            system = generate_system(SolarSystemSpec.binary(), seed=seed)
            inner = system.hierarchy.root
            limit = inner.separation_m * (1 - inner.eccentricity) / 3
            for planet in system.planets:
                assert planet.orbital.semi_major_axis_m <= limit * (1 + 1e-9)


class TestDeterminism:
    """Test reproducibility."""

    def test_same_seed_same_system(self):
        spec = SolarSystemSpec.alpha_centauri_like()
        a = generate_system(spec, seed=123)
        b = generate_system(spec, seed=123)
        assert a.stars == b.stars
        assert a.planets == b.planets
        assert a.moons == b.moons
        assert a.belts == b.belts
        assert a.hierarchy == b.hierarchy
        assert a.provenance == b.provenance

    def test_seed_sensitivity(self):
        spec = SolarSystemSpec(star_specs=[StarSpec.sun_like()])
        a = generate_system(spec, seed=1)
        b = generate_system(spec, seed=2)
        assert a.stars != b.stars

    def test_custom_system_id(self):
        system = generate_system(SolarSystemSpec(), seed=5, system_id="custom")
        assert system.id == "custom"
