"""Data models for Stellarforge."""

from .belt import BeltBody, BeltFieldData
from .body import BodyType, CelestialBody
from .constraints import ConstraintSet, PropertyConstraint
from .context import ParentContext
from .hierarchy import HierarchyNode, NodeKind, SystemHierarchy
from .physical import OrbitalProps, PhysicalProps, StellarProps, SurfaceProps
from .property_path import PropertyPath, get_property, parse_path, set_property
from .provenance import DEFAULT_CONFIG, GeneratorConfig, Provenance
from .system import SolarSystem

__all__ = [
    "BeltBody",
    "BeltFieldData",
    "BodyType",
    "CelestialBody",
    "ConstraintSet",
    "PropertyConstraint",
    "ParentContext",
    "HierarchyNode",
    "NodeKind",
    "SystemHierarchy",
    "OrbitalProps",
    "PhysicalProps",
    "StellarProps",
    "SurfaceProps",
    "PropertyPath",
    "get_property",
    "parse_path",
    "set_property",
    "DEFAULT_CONFIG",
    "GeneratorConfig",
    "Provenance",
    "SolarSystem",
]
