"""Orbit zones around a star.

Zone distances are given for a star of one solar luminosity and scale with
sqrt(L / L_sun), which keeps the incident flux of each zone fixed.
"""

import math
from enum import IntEnum

from ..utils.constants import AU, SOLAR_LUMINOSITY
from ..utils.rng import SeededRng


class OrbitZone(IntEnum):
    """Orbit zones, innermost first."""

    HOT = 0
    TEMPERATE = 1
    COLD = 2


# Distance in AU at 1 L_sun: [min, max)
DISTANCE_RANGES_AU = {
    OrbitZone.HOT: (0.02, 0.75),
    OrbitZone.TEMPERATE: (0.75, 1.8),
    OrbitZone.COLD: (1.8, 50.0),
}

ECCENTRICITY_RANGES = {
    OrbitZone.HOT: (0.0, 0.1),
    OrbitZone.TEMPERATE: (0.0, 0.2),
    OrbitZone.COLD: (0.0, 0.35),
}

INCLINATION_RANGE_DEG = (0.0, 10.0)
ANGLE_RANGE_DEG = (0.0, 360.0)


def luminosity_scale(luminosity_watts: float) -> float:
    """Distance scale factor for a star of the given luminosity."""
    return math.sqrt(luminosity_watts / SOLAR_LUMINOSITY)


def get_distance_range_au(
    zone: OrbitZone, luminosity_watts: float = SOLAR_LUMINOSITY
) -> tuple[float, float]:
    low, high = DISTANCE_RANGES_AU[OrbitZone(zone)]
    scale = luminosity_scale(luminosity_watts)
    return low * scale, high * scale


def get_distance_range_m(
    zone: OrbitZone, luminosity_watts: float = SOLAR_LUMINOSITY
) -> tuple[float, float]:
    low, high = get_distance_range_au(zone, luminosity_watts)
    return low * AU, high * AU


def get_eccentricity_range(zone: OrbitZone) -> tuple[float, float]:
    return ECCENTRICITY_RANGES[OrbitZone(zone)]


def zone_from_distance(distance_m: float, luminosity_watts: float = SOLAR_LUMINOSITY) -> OrbitZone:
    """Find the zone containing a distance from a star.

    Boundaries belong to the outer zone; distances inside the hot zone's
    lower edge are HOT, distances beyond the cold zone are COLD.

    Args:
        distance_m: Distance from the star in meters
        luminosity_watts: Stellar luminosity

    Returns:
        Matching OrbitZone
    """
    distance_au = distance_m / AU / luminosity_scale(luminosity_watts)
    for zone in reversed(OrbitZone):
        if distance_au >= DISTANCE_RANGES_AU[zone][0]:
            return zone
    return OrbitZone.HOT


def random_zone(rng: SeededRng, low: OrbitZone, high: OrbitZone) -> OrbitZone:
    """Pick a zone uniformly between two bounds (inclusive)."""
    return OrbitZone(rng.randint(int(low), int(high)))


def random_distance_m(
    zone: OrbitZone, rng: SeededRng, luminosity_watts: float = SOLAR_LUMINOSITY
) -> float:
    """Sample a distance inside the zone, uniform in log-distance."""
    low, high = get_distance_range_m(zone, luminosity_watts)
    return rng.log_uniform(low, high)
