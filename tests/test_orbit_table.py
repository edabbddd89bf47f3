"""Tests for orbit zones."""

import pytest

from stellarforge.tables.orbit_table import (
    OrbitZone,
    get_distance_range_au,
    get_distance_range_m,
    get_eccentricity_range,
    random_distance_m,
    random_zone,
    zone_from_distance,
)
from stellarforge.utils import AU, SOLAR_LUMINOSITY, SeededRng


class TestZoneFromDistance:
    """Test zone lookup."""

    def test_earth_is_temperate(self):
        assert zone_from_distance(AU) == OrbitZone.TEMPERATE

    def test_close_is_hot(self):
        assert zone_from_distance(0.1 * AU) == OrbitZone.HOT

    def test_far_is_cold(self):
        assert zone_from_distance(5.0 * AU) == OrbitZone.COLD

    def test_around_boundary(self):
        """The hot/temperate boundary sits at 0.75 AU."""
        assert zone_from_distance(0.7499 * AU) == OrbitZone.HOT
        assert zone_from_distance(0.7501 * AU) == OrbitZone.TEMPERATE

    def test_extremes_clamp(self):
        assert zone_from_distance(0.001 * AU) == OrbitZone.HOT
        assert zone_from_distance(1000.0 * AU) == OrbitZone.COLD

    def test_luminosity_scaling(self):
        """Zones move out with sqrt(L)."""
        low, high = get_distance_range_au(OrbitZone.TEMPERATE, 4 * SOLAR_LUMINOSITY)
        assert low == pytest.approx(1.5)
        assert high == pytest.approx(3.6)
        assert zone_from_distance(2.0 * AU, 4 * SOLAR_LUMINOSITY) == OrbitZone.TEMPERATE


class TestSampling:
    """Test random zone and distance draws."""

    def test_random_distance_inside_zone(self):
        rng = SeededRng(42)
        for zone in OrbitZone:
            low, high = get_distance_range_m(zone)
            for _ in range(20):
                assert low * (1 - 1e-12) <= random_distance_m(zone, rng) <= high * (1 + 1e-12)

    def test_random_zone_limits(self):
        rng = SeededRng(42)
        for _ in range(50):
            assert random_zone(rng, OrbitZone.TEMPERATE, OrbitZone.COLD) != OrbitZone.HOT

    def test_eccentricity_grows_outward(self):
        assert get_eccentricity_range(OrbitZone.HOT)[1] < get_eccentricity_range(OrbitZone.COLD)[1]
