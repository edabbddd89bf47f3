"""Solar system container."""

from dataclasses import dataclass, field

from .belt import BeltFieldData
from .body import CelestialBody
from .hierarchy import SystemHierarchy
from .provenance import Provenance


@dataclass
class SolarSystem:
    """All bodies generated for one system seed.

    Planets orbit the primary star (the first entry of ``stars``); moons are
    grouped by the id of the planet they orbit.
    """

    id: str
    seed: int
    stars: list[CelestialBody] = field(default_factory=list)
    hierarchy: SystemHierarchy = field(default_factory=SystemHierarchy)
    planets: list[CelestialBody] = field(default_factory=list)
    moons: dict[str, list[CelestialBody]] = field(default_factory=dict)
    belts: list[BeltFieldData] = field(default_factory=list)
    provenance: Provenance | None = None

    def get_primary(self) -> CelestialBody | None:
        return self.stars[0] if self.stars else None

    def get_star(self, star_id: str) -> CelestialBody | None:
        return next((s for s in self.stars if s.id == star_id), None)

    def get_planet(self, planet_id: str) -> CelestialBody | None:
        return next((p for p in self.planets if p.id == planet_id), None)

    def get_moons(self, planet_id: str) -> list[CelestialBody]:
        return self.moons.get(planet_id, [])

    def get_all_bodies(self) -> list[CelestialBody]:
        """Stars, planets and moons (belt members excluded)."""
        bodies = list(self.stars) + list(self.planets)
        for planet in self.planets:
            bodies.extend(self.get_moons(planet.id))
        return bodies
