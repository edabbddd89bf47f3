"""Physical plausibility checks for generated bodies."""

import math
from typing import Protocol

from pydantic import BaseModel, Field

from ..models import CelestialBody

# Densest plausible bodies (iron-rich super-Earths) in kg/m^3
MAX_PLANET_DENSITY = 20000.0


class ValidationResult(BaseModel):
    """Outcome of validating one body."""

    is_valid: bool
    issues: list[str] = Field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: list[str]) -> "ValidationResult":
        return cls(is_valid=not issues, issues=list(issues))


class Validator(Protocol):
    """Anything that can judge a generated body."""

    def validate(self, body: CelestialBody) -> ValidationResult: ...


def _check_positive(issues: list[str], label: str, value: float):
    if not (math.isfinite(value) and value > 0):
        issues.append(f"{label} must be positive and finite, got {value}")


def _check_range(issues: list[str], label: str, value: float, low: float, high: float):
    if not (low <= value <= high):
        issues.append(f"{label} {value} outside [{low}, {high}]")


class PhysicalValidator:
    """Checks that every section of a body holds physically possible values.

    The checks are limits of possibility, not of likelihood: a body that
    passes may still be unusual.
    """

    def validate(self, body: CelestialBody) -> ValidationResult:
        issues: list[str] = []
        self._check_physical(body, issues)
        if body.orbital is not None:
            self._check_orbital(body, issues)
        if body.stellar is not None:
            self._check_stellar(body, issues)
        if body.surface is not None:
            self._check_surface(body, issues)

        if body.is_star():
            if body.stellar is None:
                issues.append("Star has no stellar section")
        elif body.orbital is None:
            issues.append(f"{body.body_type.name.title()} has no orbital section")
        return ValidationResult.from_issues(issues)

    def _check_physical(self, body: CelestialBody, issues: list[str]):
        physical = body.physical
        _check_positive(issues, "mass_kg", physical.mass_kg)
        _check_positive(issues, "radius_m", physical.radius_m)
        _check_range(issues, "oblateness", physical.oblateness, 0.0, 0.5)
        _check_range(issues, "axial_tilt_deg", physical.axial_tilt_deg, 0.0, 180.0)
        if physical.rotation_period_s == 0 or not math.isfinite(physical.rotation_period_s):
            issues.append(f"rotation_period_s must be non-zero, got {physical.rotation_period_s}")
        if physical.magnetic_moment < 0:
            issues.append(f"magnetic_moment must be >= 0, got {physical.magnetic_moment}")
        if physical.internal_heat_watts < 0:
            issues.append(f"internal_heat_watts must be >= 0, got {physical.internal_heat_watts}")
        if not body.is_star() and physical.radius_m > 0:
            density = physical.get_density_kg_m3()
            if density > MAX_PLANET_DENSITY:
                issues.append(f"density {density:.0f} kg/m^3 exceeds {MAX_PLANET_DENSITY:.0f}")

    def _check_orbital(self, body: CelestialBody, issues: list[str]):
        orbital = body.orbital
        _check_positive(issues, "semi_major_axis_m", orbital.semi_major_axis_m)
        if not (0.0 <= orbital.eccentricity < 1.0):
            issues.append(f"eccentricity {orbital.eccentricity} outside [0, 1)")
        _check_range(issues, "inclination_deg", orbital.inclination_deg, 0.0, 180.0)
        for label in (
            "longitude_of_ascending_node_deg",
            "argument_of_periapsis_deg",
            "mean_anomaly_deg",
        ):
            _check_range(issues, label, getattr(orbital, label), 0.0, 360.0)

    def _check_stellar(self, body: CelestialBody, issues: list[str]):
        stellar = body.stellar
        _check_positive(issues, "luminosity_watts", stellar.luminosity_watts)
        _check_positive(issues, "effective_temperature_k", stellar.effective_temperature_k)
        if stellar.age_years < 0:
            issues.append(f"age_years must be >= 0, got {stellar.age_years}")
        _check_range(issues, "subclass", stellar.subclass, 0, 9)

    def _check_surface(self, body: CelestialBody, issues: list[str]):
        surface = body.surface
        _check_range(issues, "albedo", surface.albedo, 0.0, 1.0)
        _check_positive(issues, "equilibrium_temperature_k", surface.equilibrium_temperature_k)
