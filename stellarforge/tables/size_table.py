"""Size categories of planets and moons.

Each category owns a contiguous slice of the mass axis (in Earth masses).
Slices are ordered by category index and share their boundaries: a mass
sitting exactly on a boundary belongs to the heavier category.

Density ranges keep rocky and gaseous bodies apart: the lowest rocky
density (1800 kg/m^3) is above the highest gaseous one (1750 kg/m^3).
"""

import math
from enum import IntEnum

from ..utils.constants import EARTH_MASS, SECONDS_PER_HOUR
from ..utils.rng import SeededRng


class SizeCategory(IntEnum):
    """Planet size categories, lightest first."""

    DWARF = 0
    SUB_TERRESTRIAL = 1
    TERRESTRIAL = 2
    SUPER_EARTH = 3
    MINI_NEPTUNE = 4
    NEPTUNE_CLASS = 5
    GAS_GIANT = 6


# Mass in Earth masses: [min, max)
MASS_RANGES = {
    SizeCategory.DWARF: (1.0e-5, 0.01),
    SizeCategory.SUB_TERRESTRIAL: (0.01, 0.5),
    SizeCategory.TERRESTRIAL: (0.5, 2.0),
    SizeCategory.SUPER_EARTH: (2.0, 10.0),
    SizeCategory.MINI_NEPTUNE: (10.0, 20.0),
    SizeCategory.NEPTUNE_CLASS: (20.0, 80.0),
    SizeCategory.GAS_GIANT: (80.0, 4000.0),
}

# Mean density in kg/m^3
DENSITY_RANGES = {
    SizeCategory.DWARF: (1800.0, 3000.0),
    SizeCategory.SUB_TERRESTRIAL: (3000.0, 5500.0),
    SizeCategory.TERRESTRIAL: (4000.0, 6500.0),
    SizeCategory.SUPER_EARTH: (5000.0, 9000.0),
    SizeCategory.MINI_NEPTUNE: (1000.0, 1750.0),
    SizeCategory.NEPTUNE_CLASS: (1000.0, 1750.0),
    SizeCategory.GAS_GIANT: (500.0, 1700.0),
}

# Sidereal rotation period in hours
ROTATION_PERIOD_HOURS = {
    SizeCategory.DWARF: (4.0, 160.0),
    SizeCategory.SUB_TERRESTRIAL: (8.0, 1500.0),
    SizeCategory.TERRESTRIAL: (10.0, 1200.0),
    SizeCategory.SUPER_EARTH: (10.0, 600.0),
    SizeCategory.MINI_NEPTUNE: (8.0, 40.0),
    SizeCategory.NEPTUNE_CLASS: (12.0, 30.0),
    SizeCategory.GAS_GIANT: (8.0, 20.0),
}

# Bond albedo
ALBEDO_RANGES = {
    SizeCategory.DWARF: (0.05, 0.6),
    SizeCategory.SUB_TERRESTRIAL: (0.08, 0.4),
    SizeCategory.TERRESTRIAL: (0.1, 0.45),
    SizeCategory.SUPER_EARTH: (0.1, 0.5),
    SizeCategory.MINI_NEPTUNE: (0.2, 0.5),
    SizeCategory.NEPTUNE_CLASS: (0.25, 0.45),
    SizeCategory.GAS_GIANT: (0.3, 0.55),
}

# Magnetic dipole moment in A*m^2 (sampled log-uniformly)
MAGNETIC_MOMENT_RANGES = {
    SizeCategory.DWARF: (1.0e10, 1.0e16),
    SizeCategory.SUB_TERRESTRIAL: (1.0e12, 1.0e20),
    SizeCategory.TERRESTRIAL: (1.0e18, 1.0e23),
    SizeCategory.SUPER_EARTH: (1.0e20, 1.0e24),
    SizeCategory.MINI_NEPTUNE: (1.0e22, 1.0e25),
    SizeCategory.NEPTUNE_CLASS: (1.0e23, 1.0e26),
    SizeCategory.GAS_GIANT: (1.0e25, 1.0e28),
}

# Internal heat flow in watts (sampled log-uniformly)
INTERNAL_HEAT_RANGES = {
    SizeCategory.DWARF: (1.0e8, 1.0e11),
    SizeCategory.SUB_TERRESTRIAL: (1.0e10, 1.0e13),
    SizeCategory.TERRESTRIAL: (1.0e12, 1.0e14),
    SizeCategory.SUPER_EARTH: (1.0e13, 1.0e15),
    SizeCategory.MINI_NEPTUNE: (1.0e14, 1.0e16),
    SizeCategory.NEPTUNE_CLASS: (1.0e15, 1.0e17),
    SizeCategory.GAS_GIANT: (1.0e16, 1.0e18),
}

_GASEOUS = frozenset(
    {SizeCategory.MINI_NEPTUNE, SizeCategory.NEPTUNE_CLASS, SizeCategory.GAS_GIANT}
)


def get_mass_range(category: SizeCategory) -> tuple[float, float]:
    """Mass range of a category in Earth masses."""
    return MASS_RANGES[SizeCategory(category)]


def get_mass_range_kg(category: SizeCategory) -> tuple[float, float]:
    low, high = get_mass_range(category)
    return low * EARTH_MASS, high * EARTH_MASS


def get_density_range(category: SizeCategory) -> tuple[float, float]:
    return DENSITY_RANGES[SizeCategory(category)]


def get_rotation_period_range_s(category: SizeCategory) -> tuple[float, float]:
    low, high = ROTATION_PERIOD_HOURS[SizeCategory(category)]
    return low * SECONDS_PER_HOUR, high * SECONDS_PER_HOUR


def get_albedo_range(category: SizeCategory) -> tuple[float, float]:
    return ALBEDO_RANGES[SizeCategory(category)]


def get_magnetic_moment_range(category: SizeCategory) -> tuple[float, float]:
    return MAGNETIC_MOMENT_RANGES[SizeCategory(category)]


def get_internal_heat_range(category: SizeCategory) -> tuple[float, float]:
    return INTERNAL_HEAT_RANGES[SizeCategory(category)]


def is_gaseous(category: SizeCategory) -> bool:
    """True for categories dominated by a hydrogen/helium envelope."""
    return SizeCategory(category) in _GASEOUS


def category_from_mass(mass_earth: float) -> SizeCategory:
    """Find the size category whose mass range contains the value.

    Boundaries belong to the heavier category. Values below the lightest
    range resolve to DWARF, values above the heaviest to GAS_GIANT.

    Args:
        mass_earth: Mass in Earth masses

    Returns:
        Matching SizeCategory
    """
    for category in reversed(SizeCategory):
        if mass_earth >= MASS_RANGES[category][0]:
            return category
    return SizeCategory.DWARF


def category_from_mass_kg(mass_kg: float) -> SizeCategory:
    return category_from_mass(mass_kg / EARTH_MASS)


def categories_between(low: SizeCategory, high: SizeCategory) -> list[SizeCategory]:
    """All categories from low to high inclusive, in index order."""
    return [c for c in SizeCategory if int(low) <= c <= int(high)]


def random_category(rng: SeededRng, low: SizeCategory, high: SizeCategory) -> SizeCategory:
    """Pick a category uniformly between two bounds (inclusive)."""
    return SizeCategory(rng.randint(int(low), int(high)))


def random_mass_kg(category: SizeCategory, rng: SeededRng) -> float:
    """Sample a mass inside the category, uniform in log-mass."""
    low, high = get_mass_range_kg(category)
    return rng.log_uniform(low, high)


def random_density(category: SizeCategory, rng: SeededRng) -> float:
    low, high = get_density_range(category)
    return rng.uniform(low, high)


def radius_from_mass_density(mass_kg: float, density_kg_m3: float) -> float:
    """Radius of a uniform sphere: r = (3m / (4 pi rho))^(1/3).

    Raises:
        ValueError: If the density is not positive
    """
    if density_kg_m3 <= 0:
        raise ValueError(f"Density must be positive: {density_kg_m3}")
    return (3.0 * mass_kg / (4.0 * math.pi * density_kg_m3)) ** (1.0 / 3.0)


def density_from_mass_radius(mass_kg: float, radius_m: float) -> float:
    """Inverse of radius_from_mass_density (0 for a non-positive radius)."""
    if radius_m <= 0:
        return 0.0
    return 3.0 * mass_kg / (4.0 * math.pi * radius_m**3)
