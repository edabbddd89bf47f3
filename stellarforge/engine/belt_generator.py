"""Asteroid belt population generation."""

import logging
import math

from ..models import DEFAULT_CONFIG, BeltBody, BeltFieldData, GeneratorConfig
from ..specs import BeltFieldSpec
from ..tables.orbit_table import ANGLE_RANGE_DEG
from ..tables.size_table import SizeCategory, get_density_range
from ..utils.rng import SeededRng

logger = logging.getLogger(__name__)

# Slope of the differential size distribution dN/dR ~ R^-q (collisional cascade)
BACKGROUND_SIZE_INDEX = 2.5

MAJOR_BODY_NAMES = [
    "Aurelia", "Hyperion", "Erebus", "Nyx", "Icarus", "Orpheus", "Ariadne",
    "Talos", "Janus", "Morpheus", "Tethys", "Rhea", "Helios", "Athena",
    "Hermes", "Selene", "Nereid", "Gaia", "Astraea", "Eos",
]


def sample_power_law(rng: SeededRng, low: float, high: float, index: float) -> float:
    """Draw from dN/dx ~ x^-index on [low, high] by inverse transform.

    Args:
        rng: Random number generator
        low: Smallest value (must be > 0)
        high: Largest value
        index: Power-law slope (any value, 1 included)

    Returns:
        Sample in [low, high]
    """
    u = rng.random()
    if low == high:
        return low
    if index == 1.0:
        value = low * (high / low) ** u
    else:
        exponent = 1.0 - index
        value = (low**exponent + u * (high**exponent - low**exponent)) ** (1.0 / exponent)
    return min(max(value, low), high)


def _major_body_names(rng: SeededRng, count: int) -> list[str]:
    """Distinct names for the major bodies, numbered once the list runs out."""
    pool = list(MAJOR_BODY_NAMES)
    rng.shuffle(pool)
    names = []
    for index in range(count):
        base = pool[index % len(pool)]
        cycle = index // len(pool)
        names.append(base if cycle == 0 else f"{base} {cycle + 1}")
    return names


def _generate_belt_body(
    spec: BeltFieldSpec,
    rng: SeededRng,
    body_id: str,
    name: str,
    is_major: bool,
) -> BeltBody:
    if is_major:
        radius = rng.log_uniform(*spec.major_radius_range_m)
    else:
        radius = sample_power_law(rng, *spec.background_radius_range_m, BACKGROUND_SIZE_INDEX)
    density = rng.uniform(*get_density_range(SizeCategory.DWARF))

    semi_major_axis = rng.uniform(spec.inner_radius_m, spec.outer_radius_m)
    return BeltBody(
        id=body_id,
        name=name,
        is_major=is_major,
        semi_major_axis_m=min(max(semi_major_axis, spec.inner_radius_m), spec.outer_radius_m),
        eccentricity=rng.uniform(0.0, spec.max_eccentricity),
        inclination_deg=rng.uniform(0.0, spec.max_inclination_deg),
        longitude_of_ascending_node_deg=rng.uniform(*ANGLE_RANGE_DEG),
        mean_anomaly_deg=rng.uniform(*ANGLE_RANGE_DEG),
        radius_m=radius,
        mass_kg=4.0 / 3.0 * math.pi * radius**3 * density,
    )


def generate_belt_field(
    spec: BeltFieldSpec,
    rng: SeededRng,
    config: GeneratorConfig = DEFAULT_CONFIG,
    field_id: str = "belt-0",
) -> BeltFieldData:
    """Generate the major and background members of a belt.

    Major bodies are named and drawn log-uniformly from the major radius
    range; background bodies follow a steep power-law size distribution.
    Every member's semi-major axis lies within [inner, outer] radius.
    Each population draws from its own fork of ``rng``, so changing one
    count leaves the other population unchanged.

    Args:
        spec: Belt spec
        rng: Random number generator owned by this call
        config: Versions and clock for provenance
        field_id: Id of the field, prefixed to member ids

    Returns:
        Generated belt field
    """
    major_rng = rng.fork("major")
    background_rng = rng.fork("background")

    names = _major_body_names(major_rng, spec.major_body_count)
    major_bodies = [
        _generate_belt_body(spec, major_rng, f"{field_id}-major-{i}", names[i], True)
        for i in range(spec.major_body_count)
    ]
    background_bodies = [
        _generate_belt_body(
            spec, background_rng, f"{field_id}-bg-{i}", f"{spec.name} {i + 1:04d}", False
        )
        for i in range(spec.background_body_count)
    ]
    logger.debug(
        f"Belt {field_id}: {len(major_bodies)} major and {len(background_bodies)} background bodies"
    )

    snapshot = {"body_type": "BELT_FIELD", **spec.model_dump(mode="json")}
    return BeltFieldData(
        id=field_id,
        name=spec.name,
        inner_radius_m=spec.inner_radius_m,
        outer_radius_m=spec.outer_radius_m,
        major_bodies=major_bodies,
        background_bodies=background_bodies,
        provenance=config.make_provenance(rng.seed, snapshot),
    )
