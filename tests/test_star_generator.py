"""Tests for star generation."""

import pytest

from stellarforge.engine import generate_star
from stellarforge.models import BodyType, GeneratorConfig, ParentContext
from stellarforge.specs import StarSpec
from stellarforge.tables.star_table import (
    SpectralClass,
    get_mass_range_kg,
    radius_from_luminosity_temperature,
    spectral_class_from_mass,
    spectral_class_from_temperature,
)
from stellarforge.utils import SOLAR_LUMINOSITY, SOLAR_MASS, SeededRng


class TestGenerateStar:
    """Test generate_star."""

    def test_sun_like(self):
        """Test a G2 star interpolates its temperature and mass."""
        star = generate_star(StarSpec.sun_like(), None, SeededRng(42))
        assert star.body_type == BodyType.STAR
        assert star.stellar.stellar_type == "G2V"
        assert star.stellar.effective_temperature_k == pytest.approx(5822.2, abs=0.1)
        assert star.physical.mass_kg == pytest.approx(0.98667 * SOLAR_MASS, rel=1e-4)
        assert star.stellar.mass_luminosity_exponent == 4.0
        assert star.stellar.luminosity_watts == pytest.approx(
            (star.physical.mass_kg / SOLAR_MASS) ** 4 * SOLAR_LUMINOSITY
        )
        assert star.orbital is None
        assert star.surface is None

    def test_radius_from_stefan_boltzmann(self):
        """Test radius follows from luminosity and temperature."""
        star = generate_star(StarSpec(), None, SeededRng(3))
        assert star.physical.radius_m == pytest.approx(
            radius_from_luminosity_temperature(
                star.stellar.luminosity_watts, star.stellar.effective_temperature_k
            )
        )

    def test_deterministic(self):
        """Test the same seed gives the same star."""
        a = generate_star(StarSpec(), None, SeededRng(42))
        b = generate_star(StarSpec(), None, SeededRng(42))
        assert a == b

    def test_seed_sensitivity(self):
        """Test different seeds give different stars."""
        a = generate_star(StarSpec(), None, SeededRng(1))
        b = generate_star(StarSpec(), None, SeededRng(2))
        assert a.physical != b.physical

    def test_class_limits(self):
        """Test drawn classes stay between the spec's hottest and coolest."""
        spec = StarSpec(min_spectral_class=SpectralClass.K, max_spectral_class=SpectralClass.M)
        for seed in range(20):
            star = generate_star(spec, None, SeededRng(seed))
            assert star.stellar.spectral_class in (SpectralClass.K, SpectralClass.M)

    def test_mass_inside_class(self):
        """Test the mass stays inside the class's mass range."""
        for seed in range(20):
            star = generate_star(StarSpec(), None, SeededRng(seed))
            low, high = get_mass_range_kg(star.stellar.spectral_class)
            assert low * (1 - 1e-12) <= star.physical.mass_kg <= high * (1 + 1e-12)

    def test_temperature_override_infers_type(self):
        """Test a temperature override picks the class and nearest subclass."""
        spec = StarSpec(overrides={"stellar.effective_temperature_k": 5772.0})
        star = generate_star(spec, None, SeededRng(42))
        assert star.stellar.effective_temperature_k == 5772.0
        assert star.stellar.stellar_type == "G3V"

    def test_mass_override_infers_class(self):
        """Test a mass override picks the class and is kept exactly."""
        spec = StarSpec(overrides={"physical.mass_kg": 0.3 * SOLAR_MASS})
        star = generate_star(spec, None, SeededRng(42))
        assert star.physical.mass_kg == 0.3 * SOLAR_MASS
        assert star.stellar.spectral_class == SpectralClass.M

    def test_bound_respected(self):
        """Test a metallicity bound narrows the draw."""
        spec = StarSpec(bounds={"stellar.metallicity": (0.1, 0.2)})
        for seed in range(10):
            star = generate_star(spec, None, SeededRng(seed))
            assert 0.1 <= star.stellar.metallicity <= 0.2

    def test_temperature_bound_picks_matching_class(self):
        """Test a temperature bound draws a class and subclass that contain it."""
        spec = StarSpec(bounds={"stellar.effective_temperature_k": (5700.0, 5800.0)})
        for seed in range(20):
            star = generate_star(spec, None, SeededRng(seed))
            temperature = star.stellar.effective_temperature_k
            assert 5700.0 <= temperature <= 5800.0
            assert star.stellar.spectral_class == SpectralClass.G
            assert spectral_class_from_temperature(temperature) == SpectralClass.G
            assert star.stellar.subclass in (2, 3)
            assert star.stellar.stellar_type == f"G{star.stellar.subclass}V"
            assert star.provenance.spec_snapshot["stellar_type"] == star.stellar.stellar_type

    def test_mass_bound_picks_matching_class(self):
        """Test a mass bound draws a class whose mass range holds it."""
        bound = (0.1 * SOLAR_MASS, 0.2 * SOLAR_MASS)
        spec = StarSpec(bounds={"physical.mass_kg": bound})
        for seed in range(20):
            star = generate_star(spec, None, SeededRng(seed))
            assert bound[0] <= star.physical.mass_kg <= bound[1]
            assert star.stellar.spectral_class == SpectralClass.M
            assert spectral_class_from_mass(star.physical.mass_kg) == SpectralClass.M
            assert star.stellar.stellar_type.startswith("M")

    def test_bound_outside_class_limits(self):
        """Test a temperature bound outside the hottest/coolest limits still wins."""
        spec = StarSpec(
            min_spectral_class=SpectralClass.K,
            max_spectral_class=SpectralClass.M,
            bounds={"stellar.effective_temperature_k": (8000.0, 9000.0)},
        )
        star = generate_star(spec, None, SeededRng(3))
        assert star.stellar.spectral_class == SpectralClass.A
        assert 8000.0 <= star.stellar.effective_temperature_k <= 9000.0

    def test_companion_shares_context_age(self):
        """Test a star generated in a context takes the context's age."""
        context = ParentContext.sun_like()
        star = generate_star(StarSpec.red_dwarf(), context, SeededRng(42))
        assert star.stellar.age_years == context.stellar_age_years

    def test_primary_age_within_lifetime(self):
        """Test a primary's age is below its main-sequence lifetime."""
        star = generate_star(StarSpec(spectral_class=SpectralClass.F), None, SeededRng(5))
        lifetime = 1.0e10 * (star.physical.mass_kg / SOLAR_MASS) ** -2.5
        assert 0 < star.stellar.age_years <= lifetime

    def test_physical_ranges(self):
        """Test derived values stay in their physical ranges."""
        for seed in range(10):
            star = generate_star(StarSpec(), None, SeededRng(seed))
            assert 0.0 <= star.physical.oblateness <= 0.5
            assert 0.0 <= star.physical.axial_tilt_deg <= 90.0
            assert star.physical.rotation_period_s > 0
            assert star.physical.internal_heat_watts == star.stellar.luminosity_watts

    def test_names(self):
        """Test the name falls back from argument to spec name to id."""
        assert generate_star(StarSpec(), None, SeededRng(1), name="Sol").name == "Sol"
        assert generate_star(StarSpec.sun_like(), None, SeededRng(1)).name == "sun-like"
        assert generate_star(StarSpec(), None, SeededRng(1), body_id="star-7").name == "star-7"

    def test_provenance(self):
        """Test provenance records the seed and resolved type."""
        config = GeneratorConfig(clock=lambda: 1.0)
        rng = SeededRng(42)
        star = generate_star(StarSpec.sun_like(), None, rng, config)
        assert star.provenance.generation_seed == rng.seed
        assert star.provenance.created_timestamp == 1.0
        assert star.provenance.spec_snapshot == {
            "body_type": "STAR",
            "spectral_class": "G",
            "subclass": 2,
            "stellar_type": "G2V",
        }
