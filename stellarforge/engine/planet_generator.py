"""Planet and moon generation.

Planets and moons share one algorithm. A moon is a planet-like body
generated against a context that carries a parent body: the parent is the
gravitational host, and its Roche limit and Hill sphere bound the orbit.
"""

import logging
import math

from ..models import (
    DEFAULT_CONFIG,
    BodyType,
    CelestialBody,
    GeneratorConfig,
    OrbitalProps,
    ParentContext,
    PhysicalProps,
    SurfaceProps,
)
from ..models.physical import rotational_oblateness
from ..specs import PlanetSpec
from ..tables.orbit_table import (
    ANGLE_RANGE_DEG,
    INCLINATION_RANGE_DEG,
    OrbitZone,
    get_distance_range_m,
    get_eccentricity_range,
    zone_from_distance,
)
from ..tables.size_table import (
    SizeCategory,
    categories_between,
    category_from_mass_kg,
    density_from_mass_radius,
    get_albedo_range,
    get_density_range,
    get_internal_heat_range,
    get_magnetic_moment_range,
    get_mass_range_kg,
    get_rotation_period_range_s,
    is_gaseous,
    radius_from_mass_density,
)
from ..utils.constants import MIN_ROTATION_ORBIT_SEPARATION, RETROGRADE_SPIN_PROB
from ..utils.rng import SeededRng
from .sampling import (
    LOG,
    LOW,
    clamp_to_bounds,
    narrow_range,
    resolve_derived,
    resolve_sampled,
    sample_range,
)

logger = logging.getLogger(__name__)

AXIAL_TILT_RANGE_DEG = (0.0, 180.0)
OBLATENESS_RANGE = (0.0, 0.5)

# Structure factor in rotational_oblateness
ROCKY_OBLATENESS_RESPONSE = 1.0
GASEOUS_OBLATENESS_RESPONSE = 0.75

# Moons
MOON_MASS_FRACTION = 0.05  # heaviest moon relative to its parent
MOON_ECCENTRICITY_RANGE = (0.0, 0.1)
MOON_INCLINATION_RANGE_DEG = (0.0, 5.0)
MOON_ROCHE_MARGIN = 2.0  # innermost orbit in Roche limits
MOON_PARENT_RADII_MIN = 3.0  # innermost orbit in parent radii
MOON_HILL_FRACTION = 0.4  # outermost stable prograde orbit in Hill radii


def _overlaps(value_range: tuple[float, float], bound: tuple[float, float]) -> bool:
    return value_range[0] <= bound[1] and value_range[1] >= bound[0]


def _volume_m3(radius_m: float) -> float:
    return 4.0 / 3.0 * math.pi * max(radius_m, 0.0) ** 3


def _radius_limits(spec: PlanetSpec) -> tuple[float, float] | None:
    """(low, high) radius the body must reach: the override, else the bound."""
    override = spec.get_override("physical.radius_m")
    if override is not None:
        return override, override
    return spec.get_bounds("physical.radius_m")


def _mass_range_for_radius(
    category: SizeCategory,
    radius_limits: tuple[float, float],
    mass_cap_kg: float | None = None,
    mass_bound: tuple[float, float] | None = None,
) -> tuple[float, float] | None:
    """Masses a category can have while its radius stays inside the limits.

    The category's densities turn the radius limits into a mass window,
    which is then cut by the category's mass range, the moon mass cap and
    any mass bound.

    Returns:
        (low, high) mass in kg, or None when no such body exists
    """
    low_density, high_density = get_density_range(category)
    low, high = get_mass_range_kg(category)
    low = max(low, low_density * _volume_m3(radius_limits[0]))
    high = min(high, high_density * _volume_m3(radius_limits[1]))
    if mass_cap_kg is not None:
        high = min(high, mass_cap_kg)
    if mass_bound is not None:
        low, high = max(low, mass_bound[0]), min(high, mass_bound[1])
    return (low, high) if low <= high else None


def _resolve_category(
    spec: PlanetSpec, rng: SeededRng, mass_cap_kg: float | None
) -> SizeCategory:
    """Pick the size category.

    An explicit category wins, then the category of a mass override.
    Otherwise one is drawn among the spec's categories that can hold a
    bounded mass, reach a locked or bounded radius at a density of their
    own, and stay under the moon mass cap. Categories outside the spec's
    range are tried before the limits are given up.
    """
    if spec.size_category is not None:
        return spec.size_category
    mass = spec.get_override("physical.mass_kg")
    if mass is not None:
        return category_from_mass_kg(mass)

    bound = spec.get_bounds("physical.mass_kg")
    radius_limits = _radius_limits(spec)

    def fits(category: SizeCategory) -> bool:
        if bound is not None and not _overlaps(get_mass_range_kg(category), bound):
            return False
        if mass_cap_kg is not None and get_mass_range_kg(category)[0] >= mass_cap_kg:
            return False
        if radius_limits is not None:
            return _mass_range_for_radius(category, radius_limits, mass_cap_kg, bound) is not None
        return True

    allowed = categories_between(spec.min_size_category, spec.max_size_category)
    candidates = [c for c in allowed if fits(c)] or [c for c in SizeCategory if fits(c)]
    if not candidates:
        logger.debug(f"No size category fits the mass and radius limits; using {allowed[0].name}")
        candidates = allowed[:1]
    return rng.choice(candidates)


def _resolve_zone(spec: PlanetSpec, rng: SeededRng, luminosity_watts: float) -> OrbitZone:
    """Pick the orbit zone of a planet (explicit, inferred or drawn)."""
    if spec.orbit_zone is not None:
        return spec.orbit_zone
    distance = spec.get_override("orbital.semi_major_axis_m")
    if distance is not None:
        return zone_from_distance(distance, luminosity_watts)

    allowed = [
        z for z in OrbitZone if int(spec.min_orbit_zone) <= z <= int(spec.max_orbit_zone)
    ]
    candidates = list(allowed)
    bound = spec.get_bounds("orbital.semi_major_axis_m")
    if bound is not None:
        candidates = [
            z for z in candidates if _overlaps(get_distance_range_m(z, luminosity_watts), bound)
        ] or allowed
    return rng.choice(candidates)


def _resolve_radius(
    spec: PlanetSpec, category: SizeCategory, mass_kg: float, rng: SeededRng
) -> float:
    """Radius from a density drawn in the category's range.

    A radius bound is turned into the matching density bound so the drawn
    density already lands inside it.
    """
    path = "physical.radius_m"
    override = spec.get_override(path)
    if override is not None:
        return override

    density_bound = None
    radius_bound = spec.get_bounds(path)
    if radius_bound is not None:
        low_radius, high_radius = radius_bound
        density_bound = (
            density_from_mass_radius(mass_kg, high_radius) if math.isfinite(high_radius) else 0.0,
            density_from_mass_radius(mass_kg, low_radius) if low_radius > 0 else math.inf,
        )
    low, high = narrow_range(get_density_range(category), density_bound, path)
    density = sample_range(rng, low, high)
    return clamp_to_bounds(spec, path, radius_from_mass_density(mass_kg, density))


def _mass_for_locked_radius(
    spec: PlanetSpec, radius_m: float, mass_range: tuple[float, float], rng: SeededRng
) -> float:
    """Mass of a body whose radius is fixed, from a density drawn to fit.

    The density is drawn across the masses allowed for this radius, so the
    resulting mass also honors any mass bound.
    """
    path = "physical.mass_kg"
    low, high = narrow_range(mass_range, spec.get_bounds(path), path)
    volume = _volume_m3(radius_m)
    density = sample_range(rng, low / volume, high / volume)
    return min(max(density * volume, low), high)


def _moon_orbit_range_m(context: ParentContext, density_kg_m3: float) -> tuple[float, float]:
    """Stable orbit distances around the parent body."""
    inner = max(
        MOON_ROCHE_MARGIN * context.get_roche_limit_m(density_kg_m3),
        MOON_PARENT_RADII_MIN * context.get_host_radius_m(),
    )
    outer = MOON_HILL_FRACTION * context.get_hill_sphere_radius_m()
    if outer <= inner:
        logger.debug(f"Hill sphere too small around {context.parent_id}; using a narrow band")
        outer = 1.1 * inner
    return inner, outer


def _separate_from_orbit(rotation_s: float, orbital_period_s: float) -> float:
    """Keep an unlocked rotation period visibly away from the orbital period."""
    if orbital_period_s <= 0:
        return rotation_s
    gap = abs(abs(rotation_s) - orbital_period_s)
    if gap >= MIN_ROTATION_ORBIT_SEPARATION * orbital_period_s:
        return rotation_s
    factor = 1.0 - 2.0 * MIN_ROTATION_ORBIT_SEPARATION
    if abs(rotation_s) >= orbital_period_s:
        factor = 1.0 + 2.0 * MIN_ROTATION_ORBIT_SEPARATION
    return math.copysign(orbital_period_s * factor, rotation_s)


def _resolve_rotation(
    spec: PlanetSpec,
    category: SizeCategory,
    rng: SeededRng,
    orbital_period_s: float,
    locked: bool,
    retrograde: bool,
) -> float:
    """Rotation period, signed negative for retrograde spin.

    Locked bodies rotate once per orbit. Unlocked bodies draw a period from
    the category's range.
    """
    path = "physical.rotation_period_s"
    rotation_range = get_rotation_period_range_s(category)
    if locked:
        synchronous = -orbital_period_s if retrograde else orbital_period_s
        return resolve_derived(spec, path, synchronous, rotation_range, rng, LOG)

    rotation = resolve_sampled(spec, path, rotation_range, rng, LOG)
    if spec.has_override(path):
        return rotation
    bound = spec.get_bounds(path)
    if retrograde and (bound is None or bound[0] <= -rotation <= bound[1]):
        rotation = -rotation
    return clamp_to_bounds(spec, path, _separate_from_orbit(rotation, orbital_period_s))


def _generate_body(
    spec: PlanetSpec,
    context: ParentContext,
    rng: SeededRng,
    config: GeneratorConfig,
    body_type: BodyType,
    body_id: str,
    name: str | None,
) -> CelestialBody:
    is_moon = body_type == BodyType.MOON
    luminosity = context.stellar_luminosity_watts

    # 1. Category and zone
    mass_cap = MOON_MASS_FRACTION * context.parent_body_mass_kg if is_moon else None
    category = _resolve_category(spec, rng, mass_cap)
    if is_moon:
        zone = zone_from_distance(context.orbital_distance_from_star_m, luminosity)
    else:
        zone = _resolve_zone(spec, rng, luminosity)
    gaseous = is_gaseous(category)
    logger.debug(f"{body_type.name.title()} {body_id}: {category.name} in {zone.name} zone")

    # 2. Mass and radius
    mass_low, mass_high = get_mass_range_kg(category)
    if mass_cap is not None and mass_low < mass_cap < mass_high:
        mass_high = mass_cap
    mass_range = (mass_low, mass_high)
    radius_limits = _radius_limits(spec)
    mass_locked = spec.has_override("physical.mass_kg")
    if radius_limits is not None and not mass_locked:
        mass_range = _mass_range_for_radius(category, radius_limits, mass_cap) or mass_range
    radius = spec.get_override("physical.radius_m")
    if radius is not None and not mass_locked:
        mass = _mass_for_locked_radius(spec, radius, mass_range, rng)
    else:
        mass = resolve_sampled(spec, "physical.mass_kg", mass_range, rng, LOG)
        radius = _resolve_radius(spec, category, mass, rng)

    # 3. Orbit
    if is_moon:
        orbit_range = _moon_orbit_range_m(context, density_from_mass_radius(mass, radius))
        eccentricity_range = MOON_ECCENTRICITY_RANGE
        inclination_range = MOON_INCLINATION_RANGE_DEG
    else:
        orbit_range = get_distance_range_m(zone, luminosity)
        eccentricity_range = get_eccentricity_range(zone)
        inclination_range = INCLINATION_RANGE_DEG

    if is_moon and context.orbital_distance_from_parent_m is not None:
        semi_major_axis = resolve_derived(
            spec,
            "orbital.semi_major_axis_m",
            context.orbital_distance_from_parent_m,
            orbit_range,
            rng,
            LOG,
        )
    else:
        semi_major_axis = resolve_sampled(spec, "orbital.semi_major_axis_m", orbit_range, rng, LOG)

    orbital = OrbitalProps(
        semi_major_axis_m=semi_major_axis,
        eccentricity=resolve_sampled(spec, "orbital.eccentricity", eccentricity_range, rng, LOW),
        inclination_deg=resolve_sampled(spec, "orbital.inclination_deg", inclination_range, rng, LOW),
        longitude_of_ascending_node_deg=resolve_sampled(
            spec, "orbital.longitude_of_ascending_node_deg", ANGLE_RANGE_DEG, rng
        ),
        argument_of_periapsis_deg=resolve_sampled(
            spec, "orbital.argument_of_periapsis_deg", ANGLE_RANGE_DEG, rng
        ),
        mean_anomaly_deg=resolve_sampled(spec, "orbital.mean_anomaly_deg", ANGLE_RANGE_DEG, rng),
        parent_id=context.parent_id,
    )

    # 4. Spin
    retrograde = rng.chance(RETROGRADE_SPIN_PROB)
    orbital_period = context.get_orbital_period_s(semi_major_axis, mass)
    locked = context.is_tidally_locked(mass, radius, semi_major_axis, gaseous)
    rotation = _resolve_rotation(spec, category, rng, orbital_period, locked, retrograde)
    axial_tilt = resolve_sampled(spec, "physical.axial_tilt_deg", AXIAL_TILT_RANGE_DEG, rng, LOW)
    response = GASEOUS_OBLATENESS_RESPONSE if gaseous else ROCKY_OBLATENESS_RESPONSE
    oblateness = resolve_derived(
        spec,
        "physical.oblateness",
        rotational_oblateness(mass, radius, rotation, response),
        OBLATENESS_RANGE,
        rng,
    )

    # 5. Secondary quantities
    magnetic_moment = resolve_sampled(
        spec, "physical.magnetic_moment", get_magnetic_moment_range(category), rng, LOG
    )
    internal_heat = resolve_sampled(
        spec, "physical.internal_heat_watts", get_internal_heat_range(category), rng, LOG
    )

    albedo_range = get_albedo_range(category)
    albedo = resolve_sampled(spec, "surface.albedo", albedo_range, rng)
    star_distance = context.orbital_distance_from_star_m if is_moon else semi_major_axis
    temperature_range = (
        context.get_equilibrium_temperature_k(albedo_range[1], star_distance),
        context.get_equilibrium_temperature_k(albedo_range[0], star_distance),
    )
    temperature = resolve_derived(
        spec,
        "surface.equilibrium_temperature_k",
        context.get_equilibrium_temperature_k(albedo, star_distance),
        temperature_range,
        rng,
    )

    snapshot = {
        "body_type": body_type.name,
        "size_category": category.name,
        "orbit_zone": zone.name,
        "tidally_locked": locked,
    }

    return CelestialBody(
        id=body_id,
        name=name or spec.name or body_id,
        body_type=body_type,
        physical=PhysicalProps(
            mass_kg=mass,
            radius_m=radius,
            rotation_period_s=rotation,
            axial_tilt_deg=axial_tilt,
            oblateness=oblateness,
            magnetic_moment=magnetic_moment,
            internal_heat_watts=internal_heat,
        ),
        orbital=orbital,
        surface=SurfaceProps(albedo=albedo, equilibrium_temperature_k=temperature),
        size_category=category,
        orbit_zone=zone,
        provenance=config.make_provenance(rng.seed, snapshot),
    )


def generate_planet(
    spec: PlanetSpec,
    context: ParentContext,
    rng: SeededRng,
    config: GeneratorConfig = DEFAULT_CONFIG,
    body_id: str = "planet-0",
    name: str | None = None,
) -> CelestialBody:
    """Generate a planet orbiting the context's star.

    Algorithm:
    1. Resolve size category and orbit zone (explicit, inferred from a mass
       or semi-major axis override, or drawn within the spec's limits)
    2. Sample mass log-uniformly in the category, then a density giving the
       radius. A locked radius works the other way: a density is drawn and
       the mass follows from it
    3. Sample orbital elements inside the luminosity-scaled zone
    4. Decide tidal locking from the locking timescale and the system age;
       locked planets rotate once per orbit
    5. Sample tilt, magnetic moment, internal heat and albedo; derive
       oblateness and equilibrium temperature

    Args:
        spec: Planet spec
        context: Star environment (must not carry a parent body)
        rng: Random number generator owned by this call
        config: Versions and clock for provenance
        body_id: Id of the generated body
        name: Display name (defaults to the spec name, then the id)

    Returns:
        Generated planet

    Raises:
        ValueError: If the context describes a parent body
    """
    if context.has_parent_body():
        raise ValueError(f"Planet '{body_id}' cannot orbit a parent body; use generate_moon")
    return _generate_body(spec, context, rng, config, BodyType.PLANET, body_id, name)


def generate_moon(
    spec: PlanetSpec,
    context: ParentContext,
    rng: SeededRng,
    config: GeneratorConfig = DEFAULT_CONFIG,
    body_id: str = "moon-0",
    name: str | None = None,
) -> CelestialBody:
    """Generate a moon of the context's parent body.

    Same algorithm as generate_planet, except that the mass stays below a
    fraction of the parent's, the orbit lies between the Roche limit and the
    Hill sphere of the parent, and the zone is the parent's.

    Raises:
        ValueError: If the context has no parent body
    """
    if not context.has_parent_body() or context.parent_body_radius_m is None:
        raise ValueError(f"Moon '{body_id}' needs a context with a parent body")
    return _generate_body(spec, context, rng, config, BodyType.MOON, body_id, name)
