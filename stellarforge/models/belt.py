"""Asteroid belt field data model."""

from dataclasses import dataclass, field

from .provenance import Provenance


@dataclass(frozen=True)
class BeltBody:
    """A single belt member, either a named major body or background debris."""

    id: str
    name: str
    is_major: bool
    semi_major_axis_m: float
    eccentricity: float
    inclination_deg: float
    longitude_of_ascending_node_deg: float
    mean_anomaly_deg: float
    radius_m: float
    mass_kg: float


@dataclass
class BeltFieldData:
    """Generated population of an asteroid belt."""

    id: str
    name: str
    inner_radius_m: float
    outer_radius_m: float
    major_bodies: list[BeltBody] = field(default_factory=list)
    background_bodies: list[BeltBody] = field(default_factory=list)
    provenance: Provenance | None = None

    def __post_init__(self):
        """Validate belt geometry after initialization."""
        if self.inner_radius_m <= 0:
            raise ValueError(f"Invalid inner_radius_m: {self.inner_radius_m} (must be > 0)")
        if self.outer_radius_m < self.inner_radius_m:
            raise ValueError(
                f"Invalid outer_radius_m: {self.outer_radius_m} "
                f"(must be >= inner_radius_m {self.inner_radius_m})"
            )

    def get_all_bodies(self) -> list[BeltBody]:
        return self.major_bodies + self.background_bodies

    def get_body_count(self) -> int:
        return len(self.major_bodies) + len(self.background_bodies)

    def get_total_mass_kg(self) -> float:
        return sum(body.mass_kg for body in self.get_all_bodies())
