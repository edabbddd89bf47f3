"""Stellarforge - command line entry point.

Generates stars, planets, moons, belts and whole systems from a seed and
prints them as JSON.
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from .engine import EditRegenerator, constraints_from_body, generate_belt_field, generate_system
from .models import DEFAULT_CONFIG, BodyType, ConstraintSet, ParentContext
from .specs import BeltFieldSpec, PlanetSpec, SolarSystemSpec, StarSpec
from .utils import AU, EARTH_MASS, RNG_SEED_DEFAULT, SeededRng
from .utils.serialization import (
    belt_field_to_dict,
    body_from_dict,
    body_to_dict,
    system_to_dict,
)

logger = logging.getLogger(__name__)

STAR_PRESETS = {
    "sun-like": StarSpec.sun_like,
    "red-dwarf": StarSpec.red_dwarf,
    "blue-giant": StarSpec.blue_giant,
}
PLANET_PRESETS = {
    "earth-like": PlanetSpec.earth_like,
    "hot-jupiter": PlanetSpec.hot_jupiter,
    "dwarf-planet": PlanetSpec.dwarf_planet,
}
MOON_PRESETS = {
    "regular-moon": PlanetSpec.regular_moon,
}
BELT_PRESETS = {
    "main-belt": BeltFieldSpec.main_belt,
    "kuiper-belt": BeltFieldSpec.kuiper_belt,
}
SYSTEM_PRESETS = {
    "single-star": SolarSystemSpec.single_star,
    "binary": SolarSystemSpec.binary,
    "alpha-centauri-like": SolarSystemSpec.alpha_centauri_like,
}

# Default moon host: a Jupiter analogue at 5.2 AU
HOST_MASS_EARTH = 317.8
HOST_RADIUS_KM = 69911.0
HOST_DISTANCE_AU = 5.2


def parse_lock(text: str) -> tuple[str, float]:
    """Parse PATH=VALUE."""
    path, sep, value = text.partition("=")
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"Expected PATH=VALUE, got '{text}'")
    try:
        return path.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number in '{text}'") from None


def parse_bound(text: str) -> tuple[str, float, float]:
    """Parse PATH=MIN:MAX (either side may be empty for an open bound)."""
    path, sep, span = text.partition("=")
    low, colon, high = span.partition(":")
    if not sep or not colon or not path:
        raise argparse.ArgumentTypeError(f"Expected PATH=MIN:MAX, got '{text}'")
    try:
        return (
            path.strip(),
            float(low) if low.strip() else float("-inf"),
            float(high) if high.strip() else float("inf"),
        )
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number in '{text}'") from None


def build_constraints(locks, bounds) -> ConstraintSet:
    """Constraint set from parsed --lock and --bound options.

    Raises:
        ValueError: If a path is malformed
    """
    constraints = ConstraintSet()
    for path, low, high in bounds or []:
        constraints.bound(path, low, high, reason="command line")
    for path, value in locks or []:
        constraints.lock(path, value, reason="command line")
    return constraints


def moon_host_context(args) -> ParentContext:
    base = ParentContext.sun_like(args.host_distance_au * AU)
    return dataclasses.replace(
        base,
        parent_body_mass_kg=args.host_mass_earth * EARTH_MASS,
        parent_body_radius_m=args.host_radius_km * 1000.0,
        parent_id="host",
    )


def _regenerate_body(args, body_type, base_spec, context, constraints=None):
    if constraints is None:
        constraints = build_constraints(args.lock, args.bound)
    result = EditRegenerator(DEFAULT_CONFIG).regenerate(
        body_type, constraints, args.seed, existing_context=context, base_spec=base_spec
    )
    if not result.success:
        issues = "".join(f"\n  - {issue}" for issue in result.issues)
        raise ValueError(f"{result.error_message}{issues}")
    return body_to_dict(result.body)


def cmd_star(args):
    spec = STAR_PRESETS[args.preset]() if args.preset else StarSpec()
    return _regenerate_body(args, BodyType.STAR, spec, None)


def cmd_planet(args):
    spec = PLANET_PRESETS[args.preset]() if args.preset else PlanetSpec()
    context = ParentContext.sun_like(parent_id="star-0")
    return _regenerate_body(args, BodyType.PLANET, spec, context)


def cmd_moon(args):
    spec = MOON_PRESETS[args.preset]() if args.preset else PlanetSpec.regular_moon()
    return _regenerate_body(args, BodyType.MOON, spec, moon_host_context(args))


def cmd_belt(args):
    spec = BELT_PRESETS[args.preset or "main-belt"]()
    updates = {}
    if args.major is not None:
        updates["major_body_count"] = args.major
    if args.background is not None:
        updates["background_body_count"] = args.background
    if updates:
        spec = BeltFieldSpec.model_validate({**spec.model_dump(), **updates})
    return belt_field_to_dict(generate_belt_field(spec, SeededRng(args.seed), DEFAULT_CONFIG))


def cmd_system(args):
    spec = SYSTEM_PRESETS[args.preset]() if args.preset else SolarSystemSpec()
    return system_to_dict(generate_system(spec, args.seed, DEFAULT_CONFIG))


def cmd_regenerate(args):
    """Regenerate a saved body, keeping selected properties."""
    with open(args.input) as f:
        body = body_from_dict(json.load(f))
    if body is None:
        raise ValueError(f"{args.input} does not hold a valid body")

    constraints = build_constraints(args.lock, args.bound)
    for constraint in constraints_from_body(body, args.keep or []):
        constraints.set_constraint(constraint)

    context = None
    if body.body_type == BodyType.PLANET:
        context = ParentContext.sun_like(parent_id="star-0")
    elif body.body_type == BodyType.MOON:
        context = moon_host_context(args)
    return _regenerate_body(args, body.body_type, None, context, constraints)


def add_constraint_options(parser):
    parser.add_argument(
        "--lock",
        type=parse_lock,
        action="append",
        metavar="PATH=VALUE",
        help="Lock a property to an exact value (repeatable)",
    )
    parser.add_argument(
        "--bound",
        type=parse_bound,
        action="append",
        metavar="PATH=MIN:MAX",
        help="Limit a property to a range (repeatable)",
    )


def add_host_options(parser):
    parser.add_argument(
        "--host-mass-earth", type=float, default=HOST_MASS_EARTH, help="Moon host mass"
    )
    parser.add_argument(
        "--host-radius-km", type=float, default=HOST_RADIUS_KM, help="Moon host radius"
    )
    parser.add_argument(
        "--host-distance-au",
        type=float,
        default=HOST_DISTANCE_AU,
        help="Moon host distance from its star",
    )


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed (default: {RNG_SEED_DEFAULT})",
    )
    common.add_argument("--save", type=str, metavar="FILE", help="Write JSON to a file")
    common.add_argument("--debug", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="stellarforge",
        description="Stellarforge - Deterministic star system generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s star --preset sun-like                      # G2V star
  %(prog)s planet --seed 7 --lock orbital.eccentricity=0.42
  %(prog)s planet --bound physical.mass_kg=1e24:6e24   # Light rocky planet
  %(prog)s system --preset alpha-centauri-like --save system.json
  %(prog)s regenerate planet.json --keep physical.mass_kg --seed 9
        """,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    star = commands.add_parser("star", parents=[common], help="Generate a main-sequence star")
    star.add_argument("--preset", choices=sorted(STAR_PRESETS))
    add_constraint_options(star)
    star.set_defaults(handler=cmd_star)

    planet = commands.add_parser(
        "planet", parents=[common], help="Generate a planet around a sun-like star"
    )
    planet.add_argument("--preset", choices=sorted(PLANET_PRESETS))
    add_constraint_options(planet)
    planet.set_defaults(handler=cmd_planet)

    moon = commands.add_parser("moon", parents=[common], help="Generate a moon of a host planet")
    moon.add_argument("--preset", choices=sorted(MOON_PRESETS))
    add_constraint_options(moon)
    add_host_options(moon)
    moon.set_defaults(handler=cmd_moon)

    belt = commands.add_parser(
        "belt", parents=[common], help="Generate an asteroid belt population"
    )
    belt.add_argument("--preset", choices=sorted(BELT_PRESETS))
    belt.add_argument("--major", type=int, help="Number of major bodies")
    belt.add_argument("--background", type=int, help="Number of background bodies")
    belt.set_defaults(handler=cmd_belt)

    system = commands.add_parser("system", parents=[common], help="Generate a whole system")
    system.add_argument("--preset", choices=sorted(SYSTEM_PRESETS))
    system.set_defaults(handler=cmd_system)

    regenerate = commands.add_parser(
        "regenerate", parents=[common], help="Regenerate a saved body"
    )
    regenerate.add_argument("input", help="JSON file holding a body")
    regenerate.add_argument(
        "--keep", action="append", metavar="PATH", help="Keep a property of the body (repeatable)"
    )
    add_constraint_options(regenerate)
    add_host_options(regenerate)
    regenerate.set_defaults(handler=cmd_regenerate)

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        data = args.handler(args)
    except FileNotFoundError as e:
        print(f"Error: File {e.filename} not found.", file=sys.stderr)
        return 1
    except (ValueError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = json.dumps(data, indent=2)
    if args.save:
        Path(args.save).write_text(text + "\n")
        print(f"Saved {args.command} to {args.save}", file=sys.stderr)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
