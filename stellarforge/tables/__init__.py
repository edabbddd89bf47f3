"""Lookup tables mapping categories and classes to physical ranges."""

from .orbit_table import OrbitZone, get_distance_range_m, zone_from_distance
from .size_table import (
    SizeCategory,
    category_from_mass,
    category_from_mass_kg,
    is_gaseous,
    radius_from_mass_density,
)
from .star_table import (
    SpectralClass,
    interpolate_by_subclass,
    spectral_class_from_temperature,
)
from .traveller_table import get_diameter_range_km, size_code_from_diameter_km

__all__ = [
    "OrbitZone",
    "get_distance_range_m",
    "zone_from_distance",
    "SizeCategory",
    "category_from_mass",
    "category_from_mass_kg",
    "is_gaseous",
    "radius_from_mass_density",
    "SpectralClass",
    "interpolate_by_subclass",
    "spectral_class_from_temperature",
    "get_diameter_range_km",
    "size_code_from_diameter_km",
]
