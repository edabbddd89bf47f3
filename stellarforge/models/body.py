"""Celestial body data model."""

from dataclasses import dataclass
from enum import IntEnum

from ..tables.orbit_table import OrbitZone
from ..tables.size_table import SizeCategory
from ..tables.traveller_table import size_code_from_diameter_km
from .physical import OrbitalProps, PhysicalProps, StellarProps, SurfaceProps
from .provenance import Provenance


class BodyType(IntEnum):
    """Kinds of bodies the generators know about.

    The integer values are the body-type codes used by callers.
    """

    STAR = 0
    PLANET = 1
    MOON = 2
    ASTEROID = 3

    @classmethod
    def from_code(cls, code) -> "BodyType | None":
        """Look up a body type by code, returning None for unknown codes."""
        if isinstance(code, cls):
            return code
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return None


@dataclass
class CelestialBody:
    """A fully generated star, planet, moon or asteroid.

    Sections that do not apply to a body type are None (stars carry no
    orbital or surface section, planets no stellar section).
    """

    id: str
    name: str
    body_type: BodyType
    physical: PhysicalProps
    orbital: OrbitalProps | None = None
    stellar: StellarProps | None = None
    surface: SurfaceProps | None = None
    size_category: SizeCategory | None = None
    orbit_zone: OrbitZone | None = None
    provenance: Provenance | None = None

    def __post_init__(self):
        """Validate body identity after initialization."""
        if not self.id:
            raise ValueError("Body id must be a non-empty string")
        body_type = BodyType.from_code(self.body_type)
        if body_type is None:
            raise ValueError(f"Invalid body_type: {self.body_type}")
        self.body_type = body_type

    def is_star(self) -> bool:
        return self.body_type == BodyType.STAR

    def get_size_code(self) -> str:
        """Traveller size code of the body's diameter."""
        return size_code_from_diameter_km(self.physical.get_diameter_km())
