"""Utility functions and constants for Stellarforge."""

from .constants import (
    AU,
    EARTH_MASS,
    EARTH_RADIUS,
    G,
    GENERATOR_VERSION,
    RNG_SEED_DEFAULT,
    SCHEMA_VERSION,
    SOLAR_LUMINOSITY,
    SOLAR_MASS,
    SOLAR_RADIUS,
    STEFAN_BOLTZMANN,
)
from .rng import SeededRng

__all__ = [
    "AU",
    "EARTH_MASS",
    "EARTH_RADIUS",
    "G",
    "GENERATOR_VERSION",
    "RNG_SEED_DEFAULT",
    "SCHEMA_VERSION",
    "SOLAR_LUMINOSITY",
    "SOLAR_MASS",
    "SOLAR_RADIUS",
    "STEFAN_BOLTZMANN",
    "SeededRng",
]
