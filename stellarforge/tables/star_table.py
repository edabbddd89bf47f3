"""Main-sequence star properties by spectral class.

Classes run from the hottest (O) to the coolest (M). Within a class the
subclass digit counts down in temperature: subclass 0 sits at the hot/high
end of every range and subclass 9 at the cool/low end.

Ranges after Allen's Astrophysical Quantities.
"""

import math
from enum import IntEnum

from ..utils.constants import (
    SECONDS_PER_DAY,
    SOLAR_LUMINOSITY,
    SOLAR_MASS,
    STEFAN_BOLTZMANN,
)
from ..utils.rng import SeededRng


class SpectralClass(IntEnum):
    """Harvard spectral classes, hottest first."""

    O = 0  # noqa: E741
    B = 1
    A = 2
    F = 3
    G = 4
    K = 5
    M = 6


# Effective temperature in kelvin: [min, max)
TEMPERATURE_RANGES = {
    SpectralClass.O: (30000.0, 50000.0),
    SpectralClass.B: (10000.0, 30000.0),
    SpectralClass.A: (7500.0, 10000.0),
    SpectralClass.F: (6000.0, 7500.0),
    SpectralClass.G: (5200.0, 6000.0),
    SpectralClass.K: (3700.0, 5200.0),
    SpectralClass.M: (2400.0, 3700.0),
}

# Mass in solar masses: [min, max)
MASS_RANGES = {
    SpectralClass.O: (16.0, 100.0),
    SpectralClass.B: (2.1, 16.0),
    SpectralClass.A: (1.4, 2.1),
    SpectralClass.F: (1.04, 1.4),
    SpectralClass.G: (0.8, 1.04),
    SpectralClass.K: (0.45, 0.8),
    SpectralClass.M: (0.08, 0.45),
}

# Equatorial rotation period in days
ROTATION_PERIOD_DAYS = {
    SpectralClass.O: (0.5, 3.0),
    SpectralClass.B: (0.5, 3.0),
    SpectralClass.A: (0.5, 3.0),
    SpectralClass.F: (1.0, 10.0),
    SpectralClass.G: (10.0, 40.0),
    SpectralClass.K: (15.0, 50.0),
    SpectralClass.M: (20.0, 100.0),
}

MAGNETIC_MOMENT_RANGE = (1.0e28, 1.0e33)  # A*m^2
METALLICITY_RANGE = (-0.5, 0.4)  # [Fe/H]
AXIAL_TILT_RANGE_DEG = (0.0, 90.0)
MIN_AGE_YEARS = 1.0e8
MAX_AGE_YEARS = 1.3e10

SUBCLASS_COUNT = 10


def get_temperature_range(spectral_class: SpectralClass) -> tuple[float, float]:
    return TEMPERATURE_RANGES[SpectralClass(spectral_class)]


def get_mass_range(spectral_class: SpectralClass) -> tuple[float, float]:
    """Mass range of a class in solar masses."""
    return MASS_RANGES[SpectralClass(spectral_class)]


def get_mass_range_kg(spectral_class: SpectralClass) -> tuple[float, float]:
    low, high = get_mass_range(spectral_class)
    return low * SOLAR_MASS, high * SOLAR_MASS


def get_rotation_period_range_s(spectral_class: SpectralClass) -> tuple[float, float]:
    low, high = ROTATION_PERIOD_DAYS[SpectralClass(spectral_class)]
    return low * SECONDS_PER_DAY, high * SECONDS_PER_DAY


def get_luminosity_range_watts(spectral_class: SpectralClass) -> tuple[float, float]:
    """Luminosities reached by the mass-luminosity relation over the class."""
    low, high = get_mass_range_kg(spectral_class)
    return luminosity_from_mass(low)[0], luminosity_from_mass(high)[0]


def get_radius_range_m(spectral_class: SpectralClass) -> tuple[float, float]:
    """Radii spanned by the class's luminosity and temperature extremes."""
    lum_low, lum_high = get_luminosity_range_watts(spectral_class)
    temp_low, temp_high = get_temperature_range(spectral_class)
    return (
        radius_from_luminosity_temperature(lum_low, temp_high),
        radius_from_luminosity_temperature(lum_high, temp_low),
    )


def interpolate_by_subclass(subclass: int, value_range: tuple[float, float]) -> float:
    """Linearly interpolate a class range by subclass digit.

    Subclass 0 maps to the high end of the range and subclass 9 to the low
    end, following spectral taxonomy where the digit grows as stars cool.

    Args:
        subclass: Subclass digit 0-9
        value_range: (low, high) range of the class

    Returns:
        Interpolated value

    Raises:
        ValueError: If subclass is outside 0-9
    """
    if not (0 <= subclass < SUBCLASS_COUNT):
        raise ValueError(f"Invalid subclass: {subclass} (must be 0-9)")
    low, high = value_range
    return high - (high - low) * subclass / (SUBCLASS_COUNT - 1)


def spectral_class_from_temperature(temperature_k: float) -> SpectralClass:
    """Find the class whose temperature range contains the value.

    A temperature on a boundary belongs to the hotter class (the one whose
    range starts there). Out-of-range values clamp to O or M.
    """
    for spectral_class in SpectralClass:
        if temperature_k >= TEMPERATURE_RANGES[spectral_class][0]:
            return spectral_class
    return SpectralClass.M


def spectral_class_from_mass(mass_kg: float) -> SpectralClass:
    """Find the class whose mass range contains the value (clamped)."""
    mass_solar = mass_kg / SOLAR_MASS
    for spectral_class in SpectralClass:
        if mass_solar >= MASS_RANGES[spectral_class][0]:
            return spectral_class
    return SpectralClass.M


def random_spectral_class(
    rng: SeededRng, hottest: SpectralClass, coolest: SpectralClass
) -> SpectralClass:
    """Pick a class uniformly between two bounds (inclusive)."""
    return SpectralClass(rng.randint(int(hottest), int(coolest)))


def random_subclass(rng: SeededRng) -> int:
    return rng.randint(0, SUBCLASS_COUNT - 1)


def random_temperature(spectral_class: SpectralClass, rng: SeededRng) -> float:
    low, high = get_temperature_range(spectral_class)
    return rng.uniform(low, high)


def random_mass_kg(spectral_class: SpectralClass, rng: SeededRng) -> float:
    low, high = get_mass_range_kg(spectral_class)
    return rng.uniform(low, high)


def mass_luminosity_exponent(mass_solar: float) -> float:
    """Exponent of the piecewise main-sequence mass-luminosity relation."""
    if mass_solar < 0.43:
        return 2.3
    if mass_solar < 2.0:
        return 4.0
    if mass_solar < 55.0:
        return 3.5
    return 1.0


def luminosity_from_mass(mass_kg: float) -> tuple[float, float]:
    """Main-sequence luminosity for a stellar mass.

    Args:
        mass_kg: Stellar mass

    Returns:
        Tuple of (luminosity in watts, exponent of the relation used)
    """
    mass_solar = mass_kg / SOLAR_MASS
    exponent = mass_luminosity_exponent(mass_solar)
    if mass_solar < 0.43:
        factor = 0.23
    elif mass_solar < 2.0:
        factor = 1.0
    elif mass_solar < 55.0:
        factor = 1.4
    else:
        factor = 32000.0
    return factor * mass_solar**exponent * SOLAR_LUMINOSITY, exponent


def main_sequence_lifetime_years(mass_kg: float) -> float:
    """Approximate main-sequence lifetime: 1e10 * M^-2.5 years."""
    return 1.0e10 * (mass_kg / SOLAR_MASS) ** -2.5


def radius_from_luminosity_temperature(luminosity_watts: float, temperature_k: float) -> float:
    """Stefan-Boltzmann radius: R = sqrt(L / (4 pi sigma T^4))."""
    return math.sqrt(luminosity_watts / (4.0 * math.pi * STEFAN_BOLTZMANN * temperature_k**4))


def format_stellar_type(spectral_class: SpectralClass, subclass: int) -> str:
    """Morgan-Keenan designation of a main-sequence star, e.g. "G2V"."""
    return f"{SpectralClass(spectral_class).name}{subclass}V"
