"""Whole-system generation: stars, hierarchy, planets, moons and belt."""

import dataclasses
import logging
import math

from ..models import (
    DEFAULT_CONFIG,
    CelestialBody,
    GeneratorConfig,
    HierarchyNode,
    ParentContext,
    SolarSystem,
    SystemHierarchy,
)
from ..models.hierarchy import get_total_mass_kg
from ..specs import BeltFieldSpec, PlanetSpec, SolarSystemSpec
from ..tables.size_table import SizeCategory
from ..utils.constants import AU, G
from ..utils.rng import SeededRng
from .belt_generator import generate_belt_field
from .planet_generator import generate_moon, generate_planet
from .star_generator import generate_star

logger = logging.getLogger(__name__)

STAR_LETTERS = "ABC"
PLANET_LETTERS = "bcdefghijklmnopqrstu"
ROMAN = [
    "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X",
    "XI", "XII", "XIII", "XIV", "XV", "XVI", "XVII", "XVIII", "XIX", "XX",
]

# Moons a planet of each category can hold at most
MAX_MOONS = {
    SizeCategory.DWARF: 0,
    SizeCategory.SUB_TERRESTRIAL: 1,
    SizeCategory.TERRESTRIAL: 2,
    SizeCategory.SUPER_EARTH: 2,
    SizeCategory.MINI_NEPTUNE: 3,
    SizeCategory.NEPTUNE_CLASS: 5,
    SizeCategory.GAS_GIANT: 8,
}

# Circumstellar orbits stay inside this fraction of the companion's periapsis
STABLE_ORBIT_FRACTION = 1.0 / 3.0


def _binary_period_s(separation_m: float, total_mass_kg: float) -> float:
    return 2.0 * math.pi * math.sqrt(separation_m**3 / (G * total_mass_kg))


def _build_hierarchy(
    spec: SolarSystemSpec, stars: list[CelestialBody], rng: SeededRng
) -> SystemHierarchy:
    """Arrange the stars as a single star, a binary or a hierarchical triple.

    A triple is a close pair (stars A and B) orbited by a distant third star.
    Barycenter periods follow Kepler's third law for the enclosed masses.
    """
    leaves = [HierarchyNode.create_star(f"node-{star.id}", star.id) for star in stars]
    if len(leaves) == 1:
        return SystemHierarchy(leaves[0])

    masses = {star.id: star.physical.mass_kg for star in stars}

    def pair(node_id, left, right, separation_range_au):
        separation = rng.uniform(*separation_range_au) * AU
        eccentricity = rng.uniform(0.0, spec.max_binary_eccentricity)
        node = HierarchyNode.create_barycenter(node_id, left, right, separation, eccentricity)
        node.set_orbital_period_s(_binary_period_s(separation, get_total_mass_kg(node, masses)))
        return node

    root = pair("barycenter-0", leaves[0], leaves[1], spec.binary_separation_au)
    if len(leaves) == 3:
        root = pair("barycenter-1", root, leaves[2], spec.outer_separation_au)
    return SystemHierarchy(root)


def _stable_orbit_limit_m(hierarchy: SystemHierarchy) -> float | None:
    """Outermost stable planetary orbit around the primary, if it has a companion."""
    root = hierarchy.root
    if root is None or root.is_star():
        return None
    inner = root
    while inner.left.is_barycenter():
        inner = inner.left
    return STABLE_ORBIT_FRACTION * inner.separation_m * (1.0 - inner.eccentricity)


def _renumber(
    bodies: list[CelestialBody], id_prefix: str, names: list[str]
) -> list[CelestialBody]:
    """Sort bodies outward by semi-major axis and assign ids and names in order."""
    ordered = sorted(bodies, key=lambda body: body.orbital.semi_major_axis_m)
    return [
        dataclasses.replace(body, id=f"{id_prefix}-{i}", name=names[i])
        for i, body in enumerate(ordered)
    ]


def generate_system(
    spec: SolarSystemSpec,
    seed: int,
    config: GeneratorConfig = DEFAULT_CONFIG,
    system_id: str | None = None,
) -> SolarSystem:
    """Generate a complete system from one seed.

    Algorithm:
    1. Generate the stars; companions share the primary's age
    2. Build the star hierarchy (single, binary or hierarchical triple)
    3. Generate planets around the primary, kept inside the stable region
       when there is a companion, then order them outward
    4. Generate moons for each planet, up to a count set by its size
    5. Generate a main asteroid belt if requested and stable

    Every star, planet, moon set and the belt draw from their own fork of
    the system RNG.

    Args:
        spec: System spec
        seed: System seed
        config: Versions and clock for provenance
        system_id: Id of the system (defaults to "<name>-<seed>")

    Returns:
        Generated SolarSystem
    """
    rng = SeededRng(seed)
    system_id = system_id or f"{spec.name}-{rng.seed}"

    # 1. Stars
    star_specs = spec.get_star_specs()
    stars = [
        generate_star(
            star_specs[0], None, rng.fork("star-0"), config, "star-0", f"{spec.name} A"
        )
    ]
    for i, star_spec in enumerate(star_specs[1:], start=1):
        context = ParentContext.for_star(stars[0])
        stars.append(
            generate_star(
                star_spec,
                context,
                rng.fork(f"star-{i}"),
                config,
                f"star-{i}",
                f"{spec.name} {STAR_LETTERS[i]}",
            )
        )
    primary = stars[0]

    # 2. Hierarchy
    hierarchy = _build_hierarchy(spec, stars, rng.fork("hierarchy"))
    orbit_limit = _stable_orbit_limit_m(hierarchy)

    # 3. Planets
    planet_spec = PlanetSpec()
    if orbit_limit is not None:
        planet_spec = planet_spec.with_bounds("orbital.semi_major_axis_m", 0.0, orbit_limit)
    planet_count = rng.fork("planet-count").randint(spec.min_planets, spec.max_planets)
    star_context = ParentContext.for_star(primary)
    planets = [
        generate_planet(planet_spec, star_context, rng.fork(f"planet-{i}"), config, f"planet-{i}")
        for i in range(planet_count)
    ]
    planets = _renumber(
        planets, "planet", [f"{primary.name} {PLANET_LETTERS[i]}" for i in range(planet_count)]
    )

    # 4. Moons
    moon_spec = PlanetSpec.regular_moon()
    moons = {}
    for planet in planets:
        moon_rng = rng.fork(f"moons-{planet.id}")
        limit = min(MAX_MOONS[planet.size_category], spec.max_moons_per_planet)
        count = moon_rng.randint(0, limit)
        if count == 0:
            continue
        context = ParentContext.for_moon(primary, planet)
        planet_moons = [
            generate_moon(moon_spec, context, moon_rng.fork(f"moon-{j}"), config, f"moon-{j}")
            for j in range(count)
        ]
        moons[planet.id] = _renumber(
            planet_moons, f"{planet.id}-moon", [f"{planet.name} {ROMAN[j]}" for j in range(count)]
        )

    # 5. Belt
    belts = []
    if spec.include_asteroid_belt:
        belt_spec = BeltFieldSpec.main_belt(primary.stellar.luminosity_watts).model_copy(
            update={"host_mass_kg": primary.physical.mass_kg}
        )
        if orbit_limit is not None and belt_spec.outer_radius_m > orbit_limit:
            logger.debug(f"System {system_id}: belt region is unstable, skipping belt")
        else:
            belts.append(generate_belt_field(belt_spec, rng.fork("belt-0"), config, "belt-0"))

    logger.info(
        f"Generated system {system_id}: {len(stars)} stars, {len(planets)} planets, "
        f"{sum(len(m) for m in moons.values())} moons, {len(belts)} belts"
    )
    return SolarSystem(
        id=system_id,
        seed=rng.seed,
        stars=stars,
        hierarchy=hierarchy,
        planets=planets,
        moons=moons,
        belts=belts,
        provenance=config.make_provenance(rng.seed, spec.model_dump(mode="json")),
    )
