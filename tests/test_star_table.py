"""Tests for the main-sequence star table."""

import pytest

from stellarforge.tables.star_table import (
    MASS_RANGES,
    TEMPERATURE_RANGES,
    SpectralClass,
    format_stellar_type,
    get_mass_range_kg,
    interpolate_by_subclass,
    luminosity_from_mass,
    main_sequence_lifetime_years,
    mass_luminosity_exponent,
    radius_from_luminosity_temperature,
    random_mass_kg,
    random_spectral_class,
    spectral_class_from_mass,
    spectral_class_from_temperature,
)
from stellarforge.utils import SOLAR_LUMINOSITY, SOLAR_MASS, SOLAR_RADIUS, SeededRng


class TestSubclassInterpolation:
    """Test subclass interpolation."""

    def test_subclass_zero_is_high_end(self):
        assert interpolate_by_subclass(0, (1.0, 10.0)) == 10.0

    def test_subclass_nine_is_low_end(self):
        assert interpolate_by_subclass(9, (1.0, 10.0)) == 1.0

    def test_midpoint(self):
        assert interpolate_by_subclass(3, (0.0, 9.0)) == pytest.approx(6.0)

    @pytest.mark.parametrize("subclass", [-1, 10])
    def test_invalid_subclass(self, subclass):
        with pytest.raises(ValueError, match="subclass"):
            interpolate_by_subclass(subclass, (1.0, 10.0))


class TestClassLookup:
    """Test inverse lookups and range ordering."""

    def test_sun_is_g(self):
        assert spectral_class_from_temperature(5772.0) == SpectralClass.G

    def test_boundary_belongs_to_hotter_class(self):
        """6000 K starts the F range."""
        assert spectral_class_from_temperature(6000.0) == SpectralClass.F

    def test_temperature_clamps(self):
        assert spectral_class_from_temperature(100000.0) == SpectralClass.O
        assert spectral_class_from_temperature(1000.0) == SpectralClass.M

    def test_mass_lookup(self):
        assert spectral_class_from_mass(SOLAR_MASS) == SpectralClass.G
        assert spectral_class_from_mass(0.3 * SOLAR_MASS) == SpectralClass.M
        assert spectral_class_from_mass(50 * SOLAR_MASS) == SpectralClass.O

    def test_ranges_contiguous(self):
        """Each class's range ends where the next cooler class's begins."""
        classes = list(SpectralClass)
        for hotter, cooler in zip(classes, classes[1:]):
            assert TEMPERATURE_RANGES[hotter][0] == TEMPERATURE_RANGES[cooler][1]
            assert MASS_RANGES[hotter][0] == MASS_RANGES[cooler][1]

    def test_random_class_within_limits(self):
        rng = SeededRng(42)
        for _ in range(50):
            drawn = random_spectral_class(rng, SpectralClass.F, SpectralClass.M)
            assert SpectralClass.F <= drawn <= SpectralClass.M

    def test_random_mass_within_class(self):
        rng = SeededRng(42)
        low, high = get_mass_range_kg(SpectralClass.K)
        for _ in range(20):
            assert low <= random_mass_kg(SpectralClass.K, rng) <= high


class TestStellarPhysics:
    """Test mass-luminosity, lifetime and radius relations."""

    def test_solar_luminosity(self):
        luminosity, exponent = luminosity_from_mass(SOLAR_MASS)
        assert luminosity == pytest.approx(SOLAR_LUMINOSITY)
        assert exponent == 4.0

    @pytest.mark.parametrize("mass, exponent", [(0.3, 2.3), (1.0, 4.0), (10.0, 3.5), (60.0, 1.0)])
    def test_exponent_segments(self, mass, exponent):
        assert mass_luminosity_exponent(mass) == exponent

    def test_solar_lifetime(self):
        assert main_sequence_lifetime_years(SOLAR_MASS) == pytest.approx(1e10)

    def test_heavier_stars_live_shorter(self):
        assert main_sequence_lifetime_years(2 * SOLAR_MASS) < main_sequence_lifetime_years(
            SOLAR_MASS
        )

    def test_solar_radius(self):
        """Stefan-Boltzmann recovers the Sun's radius."""
        radius = radius_from_luminosity_temperature(SOLAR_LUMINOSITY, 5772.0)
        assert radius == pytest.approx(SOLAR_RADIUS, rel=1e-3)

    def test_stellar_type(self):
        assert format_stellar_type(SpectralClass.G, 2) == "G2V"
        assert format_stellar_type(SpectralClass.M, 5) == "M5V"
