"""Gravitational and radiative environment handed to generators."""

import dataclasses
import math
from dataclasses import dataclass

from ..tables.size_table import density_from_mass_radius
from ..utils.constants import (
    AU,
    G,
    SECONDS_PER_YEAR,
    SOLAR_AGE_YEARS,
    SOLAR_LUMINOSITY,
    SOLAR_MASS,
    SOLAR_RADIUS,
    SOLAR_TEMPERATURE,
    STEFAN_BOLTZMANN,
    TIDAL_INITIAL_ROTATION_S,
    TIDAL_K2_GASEOUS,
    TIDAL_K2_ROCKY,
    TIDAL_Q_GASEOUS,
    TIDAL_Q_ROCKY,
)
from .body import CelestialBody


@dataclass(frozen=True)
class ParentContext:
    """Environment of a body being generated.

    The star fields always describe the system's primary. The optional
    parent-body fields are set when the body orbits a planet (moons), in
    which case the planet is the gravitational host.
    """

    stellar_mass_kg: float
    stellar_luminosity_watts: float
    stellar_temperature_k: float
    stellar_age_years: float
    orbital_distance_from_star_m: float
    stellar_radius_m: float = SOLAR_RADIUS
    parent_body_mass_kg: float | None = None
    parent_body_radius_m: float | None = None
    orbital_distance_from_parent_m: float | None = None
    parent_id: str | None = None

    def __post_init__(self):
        """Validate context data after initialization."""
        if self.stellar_mass_kg <= 0:
            raise ValueError(f"Invalid stellar_mass_kg: {self.stellar_mass_kg} (must be > 0)")
        if self.stellar_luminosity_watts <= 0:
            raise ValueError(
                f"Invalid stellar_luminosity_watts: {self.stellar_luminosity_watts} (must be > 0)"
            )
        if self.orbital_distance_from_star_m <= 0:
            raise ValueError(
                f"Invalid orbital_distance_from_star_m: {self.orbital_distance_from_star_m} "
                "(must be > 0)"
            )
        if self.stellar_age_years < 0:
            raise ValueError(f"Invalid stellar_age_years: {self.stellar_age_years} (must be >= 0)")
        if self.parent_body_mass_kg is not None and self.parent_body_mass_kg <= 0:
            raise ValueError(
                f"Invalid parent_body_mass_kg: {self.parent_body_mass_kg} (must be > 0)"
            )
        if self.parent_body_radius_m is not None and self.parent_body_radius_m <= 0:
            raise ValueError(
                f"Invalid parent_body_radius_m: {self.parent_body_radius_m} (must be > 0)"
            )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def sun_like(cls, distance_m: float = AU, parent_id: str | None = None) -> "ParentContext":
        """Context around a present-day Sun."""
        return cls(
            stellar_mass_kg=SOLAR_MASS,
            stellar_luminosity_watts=SOLAR_LUMINOSITY,
            stellar_temperature_k=SOLAR_TEMPERATURE,
            stellar_age_years=SOLAR_AGE_YEARS,
            orbital_distance_from_star_m=distance_m,
            stellar_radius_m=SOLAR_RADIUS,
            parent_id=parent_id,
        )

    @classmethod
    def for_star(cls, star: CelestialBody, distance_m: float = AU) -> "ParentContext":
        """Context for a body orbiting a generated star.

        Raises:
            ValueError: If the body is not a star
        """
        if star.stellar is None:
            raise ValueError(f"Body '{star.id}' is not a star")
        return cls(
            stellar_mass_kg=star.physical.mass_kg,
            stellar_luminosity_watts=star.stellar.luminosity_watts,
            stellar_temperature_k=star.stellar.effective_temperature_k,
            stellar_age_years=star.stellar.age_years,
            orbital_distance_from_star_m=distance_m,
            stellar_radius_m=star.physical.radius_m,
            parent_id=star.id,
        )

    @classmethod
    def for_moon(
        cls, star: CelestialBody, planet: CelestialBody, moon: CelestialBody | None = None
    ) -> "ParentContext":
        """Context for a moon of a generated planet.

        Args:
            star: Star the planet orbits
            planet: Host planet (must carry an orbital section)
            moon: Existing moon, whose distance from the planet is recorded

        Raises:
            ValueError: If the planet has no orbit
        """
        if planet.orbital is None:
            raise ValueError(f"Planet '{planet.id}' has no orbit")
        base = cls.for_star(star, planet.orbital.semi_major_axis_m)
        return dataclasses.replace(
            base,
            parent_body_mass_kg=planet.physical.mass_kg,
            parent_body_radius_m=planet.physical.radius_m,
            orbital_distance_from_parent_m=(
                moon.orbital.semi_major_axis_m if moon is not None and moon.orbital else None
            ),
            parent_id=planet.id,
        )

    def with_orbital_distance(self, distance_m: float) -> "ParentContext":
        """Copy of this context at a different distance from the star."""
        return dataclasses.replace(self, orbital_distance_from_star_m=distance_m)

    # ------------------------------------------------------------------
    # Host
    # ------------------------------------------------------------------

    def has_parent_body(self) -> bool:
        return self.parent_body_mass_kg is not None

    def get_host_mass_kg(self) -> float:
        """Mass of the body being orbited (the parent body if any, else the star)."""
        if self.parent_body_mass_kg is not None:
            return self.parent_body_mass_kg
        return self.stellar_mass_kg

    def get_host_radius_m(self) -> float:
        if self.parent_body_radius_m is not None:
            return self.parent_body_radius_m
        return self.stellar_radius_m

    def get_host_density_kg_m3(self) -> float:
        return density_from_mass_radius(self.get_host_mass_kg(), self.get_host_radius_m())

    def get_orbital_period_s(self, semi_major_axis_m: float, body_mass_kg: float = 0.0) -> float:
        """Kepler period of an orbit around the host."""
        return 2.0 * math.pi * math.sqrt(
            semi_major_axis_m**3 / (G * (self.get_host_mass_kg() + body_mass_kg))
        )

    # ------------------------------------------------------------------
    # Physics
    # ------------------------------------------------------------------

    def get_equilibrium_temperature_k(
        self, bond_albedo: float, distance_m: float | None = None
    ) -> float:
        """Blackbody equilibrium temperature of a fast rotator.

        T = (L (1 - A) / (16 pi sigma d^2))^(1/4)

        Args:
            bond_albedo: Fraction of incident radiation reflected
            distance_m: Distance from the star (defaults to the context's)

        Returns:
            Temperature in kelvin
        """
        distance = self.orbital_distance_from_star_m if distance_m is None else distance_m
        absorbed = self.stellar_luminosity_watts * (1.0 - bond_albedo)
        return (absorbed / (16.0 * math.pi * STEFAN_BOLTZMANN * distance**2)) ** 0.25

    def get_hill_sphere_radius_m(self, body_mass_kg: float | None = None) -> float:
        """Hill radius of a body orbiting the star at the context distance.

        r_H = d * (m / (3 M_star))^(1/3)

        Args:
            body_mass_kg: Mass of the body (defaults to the parent body)

        Returns:
            Hill radius in meters, 0 when there is no body mass to use
        """
        mass = self.parent_body_mass_kg if body_mass_kg is None else body_mass_kg
        if mass is None or mass <= 0:
            return 0.0
        return self.orbital_distance_from_star_m * (mass / (3.0 * self.stellar_mass_kg)) ** (
            1.0 / 3.0
        )

    def get_roche_limit_m(self, satellite_density_kg_m3: float) -> float:
        """Rigid-body Roche limit around the host.

        d = R_host * (2 rho_host / rho_satellite)^(1/3)

        Raises:
            ValueError: If the satellite density is not positive
        """
        if satellite_density_kg_m3 <= 0:
            raise ValueError(f"Satellite density must be positive: {satellite_density_kg_m3}")
        return self.get_host_radius_m() * (
            2.0 * self.get_host_density_kg_m3() / satellite_density_kg_m3
        ) ** (1.0 / 3.0)

    def get_tidal_locking_timescale_years(
        self, body_mass_kg: float, body_radius_m: float, distance_m: float, gaseous: bool = False
    ) -> float:
        """Time for the host's tides to despin a body into synchronous rotation.

        t = w a^6 I Q / (3 G M_host^2 k2 R^5) with I = 0.4 m R^2 and an
        initial rotation period of 12 hours.

        Args:
            body_mass_kg: Mass of the despun body
            body_radius_m: Radius of the despun body
            distance_m: Orbital distance from the host
            gaseous: Use gas-giant dissipation (Q, k2) instead of rocky

        Returns:
            Timescale in years (infinite for degenerate inputs)
        """
        if body_mass_kg <= 0 or body_radius_m <= 0 or distance_m <= 0:
            return math.inf
        q, k2 = (TIDAL_Q_GASEOUS, TIDAL_K2_GASEOUS) if gaseous else (TIDAL_Q_ROCKY, TIDAL_K2_ROCKY)
        omega = 2.0 * math.pi / TIDAL_INITIAL_ROTATION_S
        host_mass = self.get_host_mass_kg()
        seconds = (omega * distance_m**6 * 0.4 * body_mass_kg * q) / (
            3.0 * G * host_mass**2 * k2 * body_radius_m**3
        )
        return seconds / SECONDS_PER_YEAR

    def is_tidally_locked(
        self, body_mass_kg: float, body_radius_m: float, distance_m: float, gaseous: bool = False
    ) -> bool:
        """True when the locking timescale is shorter than the system age."""
        timescale = self.get_tidal_locking_timescale_years(
            body_mass_kg, body_radius_m, distance_m, gaseous
        )
        return timescale <= self.stellar_age_years
