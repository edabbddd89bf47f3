"""Declarative generation specs and their named presets."""

from .schemas import BeltFieldSpec, BodySpec, PlanetSpec, SolarSystemSpec, StarSpec

__all__ = [
    "BeltFieldSpec",
    "BodySpec",
    "PlanetSpec",
    "SolarSystemSpec",
    "StarSpec",
]
