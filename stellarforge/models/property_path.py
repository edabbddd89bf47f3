"""Dotted property paths addressing body attributes.

A property path names one numeric attribute of a body as
``<section>.<field>`` (e.g. ``orbital.eccentricity``). Specs, overrides and
constraints all go through ``parse_path`` so there is exactly one place
where path strings are split and checked.
"""

import dataclasses
from dataclasses import dataclass

from .body import BodyType

PHYSICAL_FIELDS = (
    "mass_kg",
    "radius_m",
    "rotation_period_s",
    "axial_tilt_deg",
    "oblateness",
    "magnetic_moment",
    "internal_heat_watts",
)

ORBITAL_FIELDS = (
    "semi_major_axis_m",
    "eccentricity",
    "inclination_deg",
    "longitude_of_ascending_node_deg",
    "argument_of_periapsis_deg",
    "mean_anomaly_deg",
)

STELLAR_FIELDS = (
    "luminosity_watts",
    "effective_temperature_k",
    "age_years",
    "metallicity",
)

SURFACE_FIELDS = (
    "albedo",
    "equilibrium_temperature_k",
)

SECTION_FIELDS = {
    "physical": PHYSICAL_FIELDS,
    "orbital": ORBITAL_FIELDS,
    "stellar": STELLAR_FIELDS,
    "surface": SURFACE_FIELDS,
}

# Sections present on each body type
BODY_SECTIONS = {
    BodyType.STAR: ("physical", "stellar"),
    BodyType.PLANET: ("physical", "orbital", "surface"),
    BodyType.MOON: ("physical", "orbital", "surface"),
    BodyType.ASTEROID: ("physical", "orbital"),
}


@dataclass(frozen=True)
class PropertyPath:
    """A validated ``section.field`` address."""

    section: str
    field: str

    def __str__(self) -> str:
        return f"{self.section}.{self.field}"

    def applies_to(self, body_type: BodyType) -> bool:
        """Check whether bodies of the given type carry this property."""
        return self.section in BODY_SECTIONS.get(BodyType(body_type), ())


def parse_path(path) -> PropertyPath:
    """Parse and validate a dotted property path.

    Args:
        path: Path string such as "physical.mass_kg" (case and surrounding
            whitespace are ignored), or an existing PropertyPath

    Returns:
        Canonical PropertyPath

    Raises:
        ValueError: If the path is malformed or names an unknown property
    """
    if isinstance(path, PropertyPath):
        return path
    if not isinstance(path, str):
        raise ValueError(f"Property path must be a string, got {type(path).__name__}")

    parts = path.strip().lower().split(".")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Malformed property path: '{path}' (expected 'section.field')")

    section, field = parts
    if section not in SECTION_FIELDS:
        raise ValueError(
            f"Unknown section '{section}' in property path '{path}' "
            f"(must be one of {', '.join(SECTION_FIELDS)})"
        )
    if field not in SECTION_FIELDS[section]:
        raise ValueError(f"Unknown field '{field}' in section '{section}'")

    return PropertyPath(section, field)


def canonical_path(path) -> str:
    """Return the canonical string form of a property path."""
    return str(parse_path(path))


def paths_for(body_type: BodyType) -> list[PropertyPath]:
    """List every property path carried by bodies of the given type."""
    return [
        PropertyPath(section, field)
        for section in BODY_SECTIONS[BodyType(body_type)]
        for field in SECTION_FIELDS[section]
    ]


def get_property(body, path) -> float:
    """Read the value at a property path.

    Raises:
        KeyError: If the body has no such section (e.g. orbital on a star)
    """
    parsed = parse_path(path)
    section = getattr(body, parsed.section, None)
    if section is None:
        raise KeyError(f"Body '{body.id}' has no '{parsed.section}' section")
    return getattr(section, parsed.field)


def set_property(body, path, value: float):
    """Return a copy of the body with the value at the path replaced.

    Raises:
        KeyError: If the body has no such section
    """
    parsed = parse_path(path)
    section = getattr(body, parsed.section, None)
    if section is None:
        raise KeyError(f"Body '{body.id}' has no '{parsed.section}' section")
    updated = dataclasses.replace(section, **{parsed.field: value})
    return dataclasses.replace(body, **{parsed.section: updated})
