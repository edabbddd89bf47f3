"""Physical, orbital, stellar and surface property records."""

import math
from dataclasses import dataclass

from ..tables.star_table import SpectralClass
from ..utils.constants import EARTH_MASS, EARTH_RADIUS, G


@dataclass(frozen=True)
class PhysicalProps:
    """Bulk physical properties of a body.

    A negative rotation period denotes retrograde spin.
    """

    mass_kg: float
    radius_m: float
    rotation_period_s: float = 0.0
    axial_tilt_deg: float = 0.0
    oblateness: float = 0.0
    magnetic_moment: float = 0.0  # A*m^2
    internal_heat_watts: float = 0.0

    def get_volume_m3(self) -> float:
        """Volume of a sphere with the mean radius (0 for radius <= 0)."""
        if self.radius_m <= 0:
            return 0.0
        return 4.0 / 3.0 * math.pi * self.radius_m**3

    def get_density_kg_m3(self) -> float:
        """Mean density, treated as 0 when the radius is 0."""
        volume = self.get_volume_m3()
        if volume <= 0:
            return 0.0
        return self.mass_kg / volume

    def get_surface_gravity_m_s2(self) -> float:
        if self.radius_m <= 0:
            return 0.0
        return G * self.mass_kg / self.radius_m**2

    def get_escape_velocity_m_s(self) -> float:
        if self.radius_m <= 0:
            return 0.0
        return math.sqrt(2.0 * G * self.mass_kg / self.radius_m)

    def get_equatorial_radius_m(self) -> float:
        """Equatorial radius of the oblate spheroid with the same volume."""
        return self.radius_m / (1.0 - self.oblateness) ** (1.0 / 3.0)

    def get_polar_radius_m(self) -> float:
        return self.get_equatorial_radius_m() * (1.0 - self.oblateness)

    def get_mass_earth(self) -> float:
        return self.mass_kg / EARTH_MASS

    def get_radius_earth(self) -> float:
        return self.radius_m / EARTH_RADIUS

    def get_diameter_km(self) -> float:
        return 2.0 * self.radius_m / 1000.0

    def is_retrograde(self) -> bool:
        return self.rotation_period_s < 0


@dataclass(frozen=True)
class OrbitalProps:
    """Keplerian elements of an orbit around a host body."""

    semi_major_axis_m: float
    eccentricity: float = 0.0
    inclination_deg: float = 0.0
    longitude_of_ascending_node_deg: float = 0.0
    argument_of_periapsis_deg: float = 0.0
    mean_anomaly_deg: float = 0.0
    parent_id: str | None = None  # Host body reference

    def get_orbital_period_s(self, host_mass_kg: float, body_mass_kg: float = 0.0) -> float:
        """Orbital period from Kepler's third law.

        Args:
            host_mass_kg: Mass of the body being orbited
            body_mass_kg: Mass of the orbiting body (negligible by default)

        Returns:
            Period in seconds (0 for a non-positive semi-major axis or mass)
        """
        total_mass = host_mass_kg + body_mass_kg
        if self.semi_major_axis_m <= 0 or total_mass <= 0:
            return 0.0
        return 2.0 * math.pi * math.sqrt(self.semi_major_axis_m**3 / (G * total_mass))

    def get_periapsis_m(self) -> float:
        return self.semi_major_axis_m * (1.0 - self.eccentricity)

    def get_apoapsis_m(self) -> float:
        return self.semi_major_axis_m * (1.0 + self.eccentricity)


@dataclass(frozen=True)
class StellarProps:
    """Radiative and evolutionary properties of a star."""

    luminosity_watts: float
    effective_temperature_k: float
    spectral_class: SpectralClass
    subclass: int  # 0 (hottest) to 9 (coolest)
    stellar_type: str  # e.g. "G2V"
    mass_luminosity_exponent: float
    age_years: float
    metallicity: float = 0.0  # [Fe/H], dex


@dataclass(frozen=True)
class SurfaceProps:
    """Radiative balance at the surface of a planet or moon."""

    albedo: float  # Bond albedo
    equilibrium_temperature_k: float


def rotational_oblateness(
    mass_kg: float, radius_m: float, rotation_period_s: float, response: float = 1.0
) -> float:
    """Flattening produced by rotation.

    Uses the first-order relation f = response * w^2 R^3 / (G M), capped
    at 0.5. ``response`` is about 1 for rocky bodies and lower for
    centrally condensed ones.

    Args:
        mass_kg: Body mass
        radius_m: Mean radius
        rotation_period_s: Rotation period (sign ignored)
        response: Structure factor

    Returns:
        Oblateness in [0, 0.5]
    """
    if mass_kg <= 0 or radius_m <= 0 or rotation_period_s == 0:
        return 0.0
    omega = 2.0 * math.pi / abs(rotation_period_s)
    q = omega**2 * radius_m**3 / (G * mass_kg)
    return min(response * q, 0.5)
