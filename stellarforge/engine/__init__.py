"""Generation engine components."""

from .belt_generator import generate_belt_field
from .planet_generator import generate_moon, generate_planet
from .regenerator import EditRegenerator, RegenerationResult, constraints_from_body
from .star_generator import generate_star
from .system_generator import generate_system
from .validator import PhysicalValidator, ValidationResult, Validator

__all__ = [
    "generate_belt_field",
    "generate_moon",
    "generate_planet",
    "EditRegenerator",
    "RegenerationResult",
    "constraints_from_body",
    "generate_star",
    "generate_system",
    "PhysicalValidator",
    "ValidationResult",
    "Validator",
]
