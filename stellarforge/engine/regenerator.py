"""Constraint-driven regeneration of single bodies.

The regenerator turns a ConstraintSet into a generator spec: locked
constraints become exact overrides, so locked values survive regeneration
whatever the seed, and bounded constraints narrow the sampling range of
their path. Everything else is drawn fresh from the seed.
"""

import logging
from dataclasses import dataclass, field

from ..models import (
    DEFAULT_CONFIG,
    BodyType,
    CelestialBody,
    ConstraintSet,
    GeneratorConfig,
    ParentContext,
    get_property,
    parse_path,
)
from ..specs import BodySpec, PlanetSpec, StarSpec
from ..utils.rng import SeededRng
from .planet_generator import generate_moon, generate_planet
from .star_generator import generate_star
from .validator import PhysicalValidator, Validator

logger = logging.getLogger(__name__)

SUPPORTED_BODY_TYPES = (BodyType.STAR, BodyType.PLANET, BodyType.MOON)


@dataclass
class RegenerationResult:
    """Outcome of a regeneration: a body on success, a message otherwise."""

    success: bool
    body: CelestialBody | None = None
    error_message: str | None = None
    issues: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, body: CelestialBody) -> "RegenerationResult":
        return cls(success=True, body=body)

    @classmethod
    def failure(cls, message: str, issues: list[str] | None = None) -> "RegenerationResult":
        return cls(success=False, error_message=message, issues=list(issues or []))


def constraints_from_body(
    body: CelestialBody, locked_paths: list[str], reason: str = "kept from existing body"
) -> ConstraintSet:
    """Build a set locking selected properties of an existing body.

    Args:
        body: Body whose values are kept
        locked_paths: Property paths to lock
        reason: Reason recorded on each constraint

    Returns:
        ConstraintSet with one locked constraint per path

    Raises:
        ValueError: If a path is malformed
        KeyError: If the body has no section for a path
    """
    constraints = ConstraintSet()
    for path in locked_paths:
        constraints.lock(path, get_property(body, path), reason)
    return constraints


def _default_spec(body_type: BodyType) -> BodySpec:
    if body_type == BodyType.STAR:
        return StarSpec()
    if body_type == BodyType.MOON:
        return PlanetSpec.regular_moon()
    return PlanetSpec()


class EditRegenerator:
    """Regenerates stars, planets and moons under constraints.

    Args:
        config: Versions and clock stamped into provenance
        validator: Judge of generated bodies (PhysicalValidator by default)
    """

    def __init__(
        self,
        config: GeneratorConfig = DEFAULT_CONFIG,
        validator: Validator | None = None,
    ):
        self.config = config
        self.validator = validator or PhysicalValidator()

    def regenerate(
        self,
        body_type,
        constraint_set: ConstraintSet,
        seed: int,
        existing_context: ParentContext | None = None,
        base_spec: BodySpec | None = None,
        body_id: str | None = None,
        name: str | None = None,
    ) -> RegenerationResult:
        """Generate a body that honors every constraint in the set.

        Algorithm:
        1. Reject unsupported body types and unusable constraint sets
        2. Install locked values as overrides and bounds as sampling ranges
           on the base spec (a default spec for the type when omitted)
        3. Generate from a fresh RNG seeded with ``seed``
        4. Check that every locked path kept its value exactly
        5. Validate the body

        Failures are returned, never retried.

        Args:
            body_type: BodyType or integer body-type code
            constraint_set: Locks and bounds to honor
            seed: Seed of the generation
            existing_context: Environment of the body (a sun-like star at
                1 AU for planets when omitted; required for moons)
            base_spec: Spec to start from
            body_id: Id of the generated body
            name: Display name of the generated body

        Returns:
            RegenerationResult with the body, or the reason for failure
        """
        resolved_type = BodyType.from_code(body_type)
        if resolved_type not in SUPPORTED_BODY_TYPES:
            return self._fail(f"Unsupported body type code: {body_type!r}")

        error = self._check_constraints(resolved_type, constraint_set)
        if error:
            return self._fail(error)

        spec = base_spec if base_spec is not None else _default_spec(resolved_type)
        expected_spec = StarSpec if resolved_type == BodyType.STAR else PlanetSpec
        if not isinstance(spec, expected_spec):
            return self._fail(
                f"{type(spec).__name__} cannot generate a {resolved_type.name.lower()}"
            )

        try:
            for constraint in constraint_set.get_locked_constraints():
                spec = spec.with_override(constraint.property_path, constraint.current_value)
            for constraint in constraint_set.get_bounded_constraints():
                spec = spec.with_bounds(
                    constraint.property_path, constraint.min_value, constraint.max_value
                )
        except ValueError as e:
            return self._fail(f"Invalid spec: {e}")

        rng = SeededRng(seed)
        body_id = body_id or f"{resolved_type.name.lower()}-0"
        try:
            body = self._generate(resolved_type, spec, existing_context, rng, body_id, name)
        except ValueError as e:
            return self._fail(f"Generation failed: {e}")

        for constraint in constraint_set.get_locked_constraints():
            value = get_property(body, constraint.property_path)
            if value != constraint.current_value:
                return self._fail(
                    f"Locked value at '{constraint.property_path}' changed: "
                    f"expected {constraint.current_value}, got {value}"
                )

        validation = self.validator.validate(body)
        if not validation.is_valid:
            return self._fail(
                f"Generated {resolved_type.name.lower()} failed validation", validation.issues
            )

        logger.info(
            f"Regenerated {resolved_type.name.lower()} {body.id} (seed={seed}, "
            f"{len(constraint_set.get_locked_constraints())} locked, "
            f"{len(constraint_set.get_bounded_constraints())} bounded)"
        )
        return RegenerationResult.ok(body)

    def _check_constraints(self, body_type: BodyType, constraint_set: ConstraintSet) -> str | None:
        """Describe the first problem that makes the set unusable, if any."""
        for constraint in constraint_set:
            if not parse_path(constraint.property_path).applies_to(body_type):
                return (
                    f"Property path '{constraint.property_path}' does not apply to "
                    f"{body_type.name.lower()}"
                )

        unsatisfiable = constraint_set.get_unsatisfiable()
        if unsatisfiable:
            paths = ", ".join(c.property_path for c in unsatisfiable)
            return f"Unsatisfiable constraints (min > max): {paths}"

        for constraint in constraint_set.get_locked_constraints():
            if constraint.current_value is None:
                return f"Locked constraint '{constraint.property_path}' has no value"
            if not constraint.is_value_in_range(constraint.current_value):
                return (
                    f"Locked value {constraint.current_value} at '{constraint.property_path}' "
                    f"is outside [{constraint.min_value}, {constraint.max_value}]"
                )
        return None

    def _generate(
        self,
        body_type: BodyType,
        spec: BodySpec,
        context: ParentContext | None,
        rng: SeededRng,
        body_id: str,
        name: str | None,
    ) -> CelestialBody:
        if body_type == BodyType.STAR:
            return generate_star(spec, context, rng, self.config, body_id, name)
        if body_type == BodyType.MOON:
            if context is None:
                raise ValueError("Moon regeneration needs a context with a parent body")
            return generate_moon(spec, context, rng, self.config, body_id, name)
        if context is None:
            context = ParentContext.sun_like(parent_id="star-0")
        return generate_planet(spec, context, rng, self.config, body_id, name)

    def _fail(self, message: str, issues: list[str] | None = None) -> RegenerationResult:
        logger.warning(f"Regeneration failed: {message}")
        return RegenerationResult.failure(message, issues)
