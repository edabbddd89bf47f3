"""Main-sequence star generation."""

import logging

from ..models import (
    DEFAULT_CONFIG,
    BodyType,
    CelestialBody,
    GeneratorConfig,
    ParentContext,
    PhysicalProps,
    StellarProps,
)
from ..models.physical import rotational_oblateness
from ..specs import StarSpec
from ..tables.star_table import (
    AXIAL_TILT_RANGE_DEG,
    MAGNETIC_MOMENT_RANGE,
    MAX_AGE_YEARS,
    METALLICITY_RANGE,
    MIN_AGE_YEARS,
    SUBCLASS_COUNT,
    SpectralClass,
    format_stellar_type,
    get_luminosity_range_watts,
    get_mass_range_kg,
    get_radius_range_m,
    get_rotation_period_range_s,
    get_temperature_range,
    interpolate_by_subclass,
    luminosity_from_mass,
    main_sequence_lifetime_years,
    radius_from_luminosity_temperature,
    random_spectral_class,
    random_subclass,
    spectral_class_from_mass,
    spectral_class_from_temperature,
)
from ..utils.rng import SeededRng
from .sampling import LOG, resolve_derived, resolve_sampled

logger = logging.getLogger(__name__)

# Stars are centrally condensed, so they flatten less than a uniform body
STELLAR_OBLATENESS_RESPONSE = 0.5

TEMPERATURE_PATH = "stellar.effective_temperature_k"
MASS_PATH = "physical.mass_kg"


def _overlaps(class_range: tuple[float, float], bound: tuple[float, float] | None) -> bool:
    """Whether a [low, high) class range shares any value with a closed bound."""
    if bound is None:
        return True
    low, high = class_range
    return low <= bound[1] and bound[0] < high


def _classes_within_bounds(spec: StarSpec, classes: list[SpectralClass]) -> list[SpectralClass]:
    temperature_bound = spec.get_bounds(TEMPERATURE_PATH)
    mass_bound = spec.get_bounds(MASS_PATH)
    return [
        spectral_class
        for spectral_class in classes
        if _overlaps(get_temperature_range(spectral_class), temperature_bound)
        and _overlaps(get_mass_range_kg(spectral_class), mass_bound)
    ]


def _resolve_spectral_class(spec: StarSpec, rng: SeededRng) -> SpectralClass:
    if spec.spectral_class is not None:
        return spec.spectral_class
    temperature = spec.get_override(TEMPERATURE_PATH)
    if temperature is not None:
        return spectral_class_from_temperature(temperature)
    mass = spec.get_override(MASS_PATH)
    if mass is not None:
        return spectral_class_from_mass(mass)
    if spec.get_bounds(TEMPERATURE_PATH) is None and spec.get_bounds(MASS_PATH) is None:
        return random_spectral_class(rng, spec.min_spectral_class, spec.max_spectral_class)

    allowed = [
        SpectralClass(code)
        for code in range(int(spec.min_spectral_class), int(spec.max_spectral_class) + 1)
    ]
    candidates = _classes_within_bounds(spec, allowed)
    if not candidates:
        # Bounds outrank the hottest/coolest preference
        candidates = _classes_within_bounds(spec, list(SpectralClass))
    if not candidates:
        logger.debug(
            f"No spectral class fits the temperature and mass bounds together; "
            f"drawing from {allowed[0].name}-{allowed[-1].name}"
        )
        candidates = allowed
    return rng.choice(candidates)


def _subclass_for_temperature(spectral_class: SpectralClass, temperature_k: float) -> int:
    """Place a temperature on the class's subclass scale (0 hottest)."""
    low, high = get_temperature_range(spectral_class)
    fraction = (high - temperature_k) / (high - low)
    return min(max(round(fraction * (SUBCLASS_COUNT - 1)), 0), SUBCLASS_COUNT - 1)


def _resolve_subclass(spec: StarSpec, spectral_class: SpectralClass, rng: SeededRng) -> int:
    if spec.subclass is not None:
        return spec.subclass
    temperature = spec.get_override(TEMPERATURE_PATH)
    if temperature is not None and spec.spectral_class is None:
        return _subclass_for_temperature(spectral_class, temperature)
    return random_subclass(rng)


def _age_range_years(mass_kg: float) -> tuple[float, float]:
    """Ages a star of this mass can have while still on the main sequence."""
    high = min(main_sequence_lifetime_years(mass_kg), MAX_AGE_YEARS)
    return min(MIN_AGE_YEARS, 0.1 * high), high


def generate_star(
    spec: StarSpec,
    context: ParentContext | None,
    rng: SeededRng,
    config: GeneratorConfig = DEFAULT_CONFIG,
    body_id: str = "star-0",
    name: str | None = None,
) -> CelestialBody:
    """Generate a main-sequence star.

    Algorithm:
    1. Resolve the spectral class (explicit, inferred from a temperature or
       mass override, or drawn between the spec's hottest and coolest class)
       and the subclass digit. Temperature and mass bounds restrict the
       draw to classes whose ranges reach them
    2. Interpolate temperature and mass by subclass inside the class ranges
    3. Derive luminosity from the mass-luminosity relation and radius from
       Stefan-Boltzmann
    4. Take the age from the context (a companion shares its system's age)
       or sample it within the main-sequence lifetime
    5. Sample metallicity, rotation, tilt and magnetic moment; derive
       oblateness from rotation

    Overrides in the spec replace the matching quantity exactly; bounds
    narrow the range the quantity is drawn from.

    Args:
        spec: Star spec
        context: Environment of the star (None for a system primary)
        rng: Random number generator owned by this call
        config: Versions and clock for provenance
        body_id: Id of the generated body
        name: Display name (defaults to the spec name, then the id)

    Returns:
        Generated star
    """
    spectral_class = _resolve_spectral_class(spec, rng)
    subclass = _resolve_subclass(spec, spectral_class, rng)

    temperature_range = get_temperature_range(spectral_class)
    temperature = resolve_derived(
        spec,
        TEMPERATURE_PATH,
        interpolate_by_subclass(subclass, temperature_range),
        temperature_range,
        rng,
    )
    if spec.subclass is None and spec.get_bounds(TEMPERATURE_PATH) is not None:
        # The bound may have moved the temperature away from the drawn subclass
        subclass = _subclass_for_temperature(spectral_class, temperature)
    stellar_type = format_stellar_type(spectral_class, subclass)
    logger.debug(f"Star {body_id}: resolved type {stellar_type}")

    mass_range = get_mass_range_kg(spectral_class)
    mass = resolve_derived(
        spec, MASS_PATH, interpolate_by_subclass(subclass, mass_range), mass_range, rng, LOG
    )

    model_luminosity, exponent = luminosity_from_mass(mass)
    luminosity = resolve_derived(
        spec,
        "stellar.luminosity_watts",
        model_luminosity,
        get_luminosity_range_watts(spectral_class),
        rng,
        LOG,
    )
    radius = resolve_derived(
        spec,
        "physical.radius_m",
        radius_from_luminosity_temperature(luminosity, temperature),
        get_radius_range_m(spectral_class),
        rng,
        LOG,
    )

    age_range = _age_range_years(mass)
    if context is not None:
        age = resolve_derived(spec, "stellar.age_years", context.stellar_age_years, age_range, rng)
    else:
        age = resolve_sampled(spec, "stellar.age_years", age_range, rng)

    metallicity = resolve_sampled(spec, "stellar.metallicity", METALLICITY_RANGE, rng)
    rotation = resolve_sampled(
        spec, "physical.rotation_period_s", get_rotation_period_range_s(spectral_class), rng, LOG
    )
    axial_tilt = resolve_sampled(spec, "physical.axial_tilt_deg", AXIAL_TILT_RANGE_DEG, rng)
    oblateness = resolve_derived(
        spec,
        "physical.oblateness",
        rotational_oblateness(mass, radius, rotation, STELLAR_OBLATENESS_RESPONSE),
        (0.0, 0.5),
        rng,
    )
    magnetic_moment = resolve_sampled(
        spec, "physical.magnetic_moment", MAGNETIC_MOMENT_RANGE, rng, LOG
    )
    internal_heat = resolve_derived(
        spec,
        "physical.internal_heat_watts",
        luminosity,
        get_luminosity_range_watts(spectral_class),
        rng,
        LOG,
    )

    snapshot = {
        "body_type": BodyType.STAR.name,
        "spectral_class": spectral_class.name,
        "subclass": subclass,
        "stellar_type": stellar_type,
    }

    return CelestialBody(
        id=body_id,
        name=name or spec.name or body_id,
        body_type=BodyType.STAR,
        physical=PhysicalProps(
            mass_kg=mass,
            radius_m=radius,
            rotation_period_s=rotation,
            axial_tilt_deg=axial_tilt,
            oblateness=oblateness,
            magnetic_moment=magnetic_moment,
            internal_heat_watts=internal_heat,
        ),
        stellar=StellarProps(
            luminosity_watts=luminosity,
            effective_temperature_k=temperature,
            spectral_class=spectral_class,
            subclass=subclass,
            stellar_type=stellar_type,
            mass_luminosity_exponent=exponent,
            age_years=age,
            metallicity=metallicity,
        ),
        provenance=config.make_provenance(rng.seed, snapshot),
    )
