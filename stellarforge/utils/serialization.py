"""Conversion of generated data to and from plain dictionaries.

Every ``*_to_dict`` function produces a JSON-compatible tree of dicts,
lists, strings, numbers, booleans and None; the matching ``*_from_dict``
rebuilds an equal object. Enums are stored by name and infinite constraint
bounds as None.

Deserializers never return partially built objects: malformed input of any
kind yields None.
"""

import logging
import math
from typing import Any

from ..models.belt import BeltBody, BeltFieldData
from ..models.body import BodyType, CelestialBody
from ..models.constraints import ConstraintSet, PropertyConstraint
from ..models.hierarchy import HierarchyNode, NodeKind, SystemHierarchy
from ..models.physical import OrbitalProps, PhysicalProps, StellarProps, SurfaceProps
from ..models.provenance import Provenance
from ..models.system import SolarSystem
from ..tables.orbit_table import OrbitZone
from ..tables.size_table import SizeCategory
from ..tables.star_table import SpectralClass

logger = logging.getLogger(__name__)

# Errors raised by dictionary access and type conversion on malformed data
_MALFORMED = (KeyError, TypeError, ValueError, AttributeError, IndexError)


def _optional(data: dict[str, Any], key: str, convert):
    """Convert a value that may be null; the key itself must be present."""
    value = data[key]
    return None if value is None else convert(value)


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


# ========== Bodies ==========


def body_to_dict(body: CelestialBody) -> dict[str, Any]:
    """Convert a CelestialBody to a dictionary."""
    return {
        "id": body.id,
        "name": body.name,
        "body_type": body.body_type.name,
        "physical": _serialize_physical(body.physical),
        "orbital": _serialize_orbital(body.orbital) if body.orbital else None,
        "stellar": _serialize_stellar(body.stellar) if body.stellar else None,
        "surface": _serialize_surface(body.surface) if body.surface else None,
        "size_category": body.size_category.name if body.size_category is not None else None,
        "orbit_zone": body.orbit_zone.name if body.orbit_zone is not None else None,
        "provenance": _serialize_provenance(body.provenance) if body.provenance else None,
    }


def body_from_dict(data: dict[str, Any]) -> CelestialBody | None:
    """Reconstruct a CelestialBody, or None if the data is malformed."""
    try:
        return _deserialize_body(data)
    except _MALFORMED as e:
        logger.warning(f"Malformed body data: {e!r}")
        return None


def _deserialize_body(data: dict[str, Any]) -> CelestialBody:
    return CelestialBody(
        id=data["id"],
        name=data["name"],
        body_type=BodyType[data["body_type"]],
        physical=_deserialize_physical(data["physical"]),
        orbital=_optional(data, "orbital", _deserialize_orbital),
        stellar=_optional(data, "stellar", _deserialize_stellar),
        surface=_optional(data, "surface", _deserialize_surface),
        size_category=_optional(data, "size_category", lambda name: SizeCategory[name]),
        orbit_zone=_optional(data, "orbit_zone", lambda name: OrbitZone[name]),
        provenance=_optional(data, "provenance", _deserialize_provenance),
    )


def _serialize_physical(physical: PhysicalProps) -> dict[str, Any]:
    return {
        "mass_kg": physical.mass_kg,
        "radius_m": physical.radius_m,
        "rotation_period_s": physical.rotation_period_s,
        "axial_tilt_deg": physical.axial_tilt_deg,
        "oblateness": physical.oblateness,
        "magnetic_moment": physical.magnetic_moment,
        "internal_heat_watts": physical.internal_heat_watts,
    }


def _deserialize_physical(data: dict[str, Any]) -> PhysicalProps:
    return PhysicalProps(
        mass_kg=float(data["mass_kg"]),
        radius_m=float(data["radius_m"]),
        rotation_period_s=float(data["rotation_period_s"]),
        axial_tilt_deg=float(data["axial_tilt_deg"]),
        oblateness=float(data["oblateness"]),
        magnetic_moment=float(data["magnetic_moment"]),
        internal_heat_watts=float(data["internal_heat_watts"]),
    )


def _serialize_orbital(orbital: OrbitalProps) -> dict[str, Any]:
    return {
        "semi_major_axis_m": orbital.semi_major_axis_m,
        "eccentricity": orbital.eccentricity,
        "inclination_deg": orbital.inclination_deg,
        "longitude_of_ascending_node_deg": orbital.longitude_of_ascending_node_deg,
        "argument_of_periapsis_deg": orbital.argument_of_periapsis_deg,
        "mean_anomaly_deg": orbital.mean_anomaly_deg,
        "parent_id": orbital.parent_id,
    }


def _deserialize_orbital(data: dict[str, Any]) -> OrbitalProps:
    return OrbitalProps(
        semi_major_axis_m=float(data["semi_major_axis_m"]),
        eccentricity=float(data["eccentricity"]),
        inclination_deg=float(data["inclination_deg"]),
        longitude_of_ascending_node_deg=float(data["longitude_of_ascending_node_deg"]),
        argument_of_periapsis_deg=float(data["argument_of_periapsis_deg"]),
        mean_anomaly_deg=float(data["mean_anomaly_deg"]),
        parent_id=data["parent_id"],
    )


def _serialize_stellar(stellar: StellarProps) -> dict[str, Any]:
    return {
        "luminosity_watts": stellar.luminosity_watts,
        "effective_temperature_k": stellar.effective_temperature_k,
        "spectral_class": stellar.spectral_class.name,
        "subclass": stellar.subclass,
        "stellar_type": stellar.stellar_type,
        "mass_luminosity_exponent": stellar.mass_luminosity_exponent,
        "age_years": stellar.age_years,
        "metallicity": stellar.metallicity,
    }


def _deserialize_stellar(data: dict[str, Any]) -> StellarProps:
    return StellarProps(
        luminosity_watts=float(data["luminosity_watts"]),
        effective_temperature_k=float(data["effective_temperature_k"]),
        spectral_class=SpectralClass[data["spectral_class"]],
        subclass=int(data["subclass"]),
        stellar_type=data["stellar_type"],
        mass_luminosity_exponent=float(data["mass_luminosity_exponent"]),
        age_years=float(data["age_years"]),
        metallicity=float(data["metallicity"]),
    )


def _serialize_surface(surface: SurfaceProps) -> dict[str, Any]:
    return {
        "albedo": surface.albedo,
        "equilibrium_temperature_k": surface.equilibrium_temperature_k,
    }


def _deserialize_surface(data: dict[str, Any]) -> SurfaceProps:
    return SurfaceProps(
        albedo=float(data["albedo"]),
        equilibrium_temperature_k=float(data["equilibrium_temperature_k"]),
    )


def _serialize_provenance(provenance: Provenance) -> dict[str, Any]:
    return {
        "generation_seed": provenance.generation_seed,
        "generator_version": provenance.generator_version,
        "schema_version": provenance.schema_version,
        "created_timestamp": provenance.created_timestamp,
        "spec_snapshot": dict(provenance.spec_snapshot),
    }


def _deserialize_provenance(data: dict[str, Any]) -> Provenance:
    snapshot = data["spec_snapshot"]
    if not isinstance(snapshot, dict):
        raise TypeError(f"spec_snapshot must be a mapping, got {type(snapshot).__name__}")
    return Provenance(
        generation_seed=int(data["generation_seed"]),
        generator_version=str(data["generator_version"]),
        schema_version=int(data["schema_version"]),
        created_timestamp=float(data["created_timestamp"]),
        spec_snapshot=dict(snapshot),
    )


# ========== Constraints ==========


def constraint_set_to_dict(constraint_set: ConstraintSet) -> dict[str, Any]:
    """Convert a ConstraintSet to a dictionary (constraints in insertion order)."""
    return {
        "constraints": [
            {
                "property_path": c.property_path,
                "min_value": _finite_or_none(c.min_value),
                "max_value": _finite_or_none(c.max_value),
                "current_value": c.current_value,
                "is_locked": c.is_locked,
                "reason": c.reason,
            }
            for c in constraint_set
        ]
    }


def constraint_set_from_dict(data: dict[str, Any]) -> ConstraintSet | None:
    """Reconstruct a ConstraintSet, or None if the data is malformed."""
    try:
        constraints = [_deserialize_constraint(item) for item in data["constraints"]]
    except _MALFORMED as e:
        logger.warning(f"Malformed constraint data: {e!r}")
        return None
    return ConstraintSet(constraints)


def _deserialize_constraint(data: dict[str, Any]) -> PropertyConstraint:
    min_value = data["min_value"]
    max_value = data["max_value"]
    return PropertyConstraint(
        property_path=data["property_path"],
        min_value=-math.inf if min_value is None else float(min_value),
        max_value=math.inf if max_value is None else float(max_value),
        current_value=_optional(data, "current_value", float),
        is_locked=bool(data["is_locked"]),
        reason=str(data["reason"]),
    )


# ========== Hierarchy ==========


def hierarchy_to_dict(hierarchy: SystemHierarchy) -> dict[str, Any]:
    """Convert a SystemHierarchy to a nested dictionary."""
    return {"root": _serialize_node(hierarchy.root) if hierarchy.root else None}


def hierarchy_from_dict(data: dict[str, Any]) -> SystemHierarchy | None:
    """Reconstruct a SystemHierarchy, or None if the data is malformed.

    A null root is well-formed and yields an empty hierarchy.
    """
    try:
        return SystemHierarchy(_optional(data, "root", _deserialize_node))
    except _MALFORMED as e:
        logger.warning(f"Malformed hierarchy data: {e!r}")
        return None


def _serialize_node(node: HierarchyNode) -> dict[str, Any]:
    if node.is_star():
        return {"id": node.id, "kind": node.kind.value, "star_id": node.star_id}
    return {
        "id": node.id,
        "kind": node.kind.value,
        "children": [_serialize_node(child) for child in node.children],
        "separation_m": node.separation_m,
        "eccentricity": node.eccentricity,
        "orbital_period_s": node.orbital_period_s,
    }


def _deserialize_node(data: dict[str, Any]) -> HierarchyNode:
    kind = NodeKind(data["kind"])
    if kind == NodeKind.STAR:
        return HierarchyNode.create_star(data["id"], data["star_id"])

    left, right = (_deserialize_node(child) for child in data["children"])
    node = HierarchyNode.create_barycenter(
        data["id"],
        left,
        right,
        float(data["separation_m"]),
        float(data["eccentricity"]),
    )
    period = data["orbital_period_s"]
    if period is not None:
        node.set_orbital_period_s(float(period))
    return node


# ========== Belts ==========


def belt_field_to_dict(field: BeltFieldData) -> dict[str, Any]:
    """Convert a BeltFieldData to a dictionary."""
    return {
        "id": field.id,
        "name": field.name,
        "inner_radius_m": field.inner_radius_m,
        "outer_radius_m": field.outer_radius_m,
        "major_bodies": [_serialize_belt_body(b) for b in field.major_bodies],
        "background_bodies": [_serialize_belt_body(b) for b in field.background_bodies],
        "provenance": _serialize_provenance(field.provenance) if field.provenance else None,
    }


def belt_field_from_dict(data: dict[str, Any]) -> BeltFieldData | None:
    """Reconstruct a BeltFieldData, or None if the data is malformed."""
    try:
        return BeltFieldData(
            id=data["id"],
            name=data["name"],
            inner_radius_m=float(data["inner_radius_m"]),
            outer_radius_m=float(data["outer_radius_m"]),
            major_bodies=[_deserialize_belt_body(b) for b in data["major_bodies"]],
            background_bodies=[
                _deserialize_belt_body(b) for b in data["background_bodies"]
            ],
            provenance=_optional(data, "provenance", _deserialize_provenance),
        )
    except _MALFORMED as e:
        logger.warning(f"Malformed belt data: {e!r}")
        return None


def _serialize_belt_body(body: BeltBody) -> dict[str, Any]:
    return {
        "id": body.id,
        "name": body.name,
        "is_major": body.is_major,
        "semi_major_axis_m": body.semi_major_axis_m,
        "eccentricity": body.eccentricity,
        "inclination_deg": body.inclination_deg,
        "longitude_of_ascending_node_deg": body.longitude_of_ascending_node_deg,
        "mean_anomaly_deg": body.mean_anomaly_deg,
        "radius_m": body.radius_m,
        "mass_kg": body.mass_kg,
    }


def _deserialize_belt_body(data: dict[str, Any]) -> BeltBody:
    return BeltBody(
        id=data["id"],
        name=data["name"],
        is_major=bool(data["is_major"]),
        semi_major_axis_m=float(data["semi_major_axis_m"]),
        eccentricity=float(data["eccentricity"]),
        inclination_deg=float(data["inclination_deg"]),
        longitude_of_ascending_node_deg=float(data["longitude_of_ascending_node_deg"]),
        mean_anomaly_deg=float(data["mean_anomaly_deg"]),
        radius_m=float(data["radius_m"]),
        mass_kg=float(data["mass_kg"]),
    )


# ========== Systems ==========


def system_to_dict(system: SolarSystem) -> dict[str, Any]:
    """Convert a SolarSystem to a dictionary."""
    return {
        "id": system.id,
        "seed": system.seed,
        "stars": [body_to_dict(s) for s in system.stars],
        "hierarchy": hierarchy_to_dict(system.hierarchy),
        "planets": [body_to_dict(p) for p in system.planets],
        "moons": {pid: [body_to_dict(m) for m in moons] for pid, moons in system.moons.items()},
        "belts": [belt_field_to_dict(b) for b in system.belts],
        "provenance": _serialize_provenance(system.provenance) if system.provenance else None,
    }


def system_from_dict(data: dict[str, Any]) -> SolarSystem | None:
    """Reconstruct a SolarSystem, or None if any part is malformed."""
    try:
        parts = {
            "stars": [body_from_dict(s) for s in data["stars"]],
            "planets": [body_from_dict(p) for p in data["planets"]],
            "moons": {
                pid: [body_from_dict(m) for m in moons]
                for pid, moons in data["moons"].items()
            },
            "belts": [belt_field_from_dict(b) for b in data["belts"]],
            "hierarchy": hierarchy_from_dict(data["hierarchy"]),
        }
        bodies = parts["stars"] + parts["planets"] + parts["belts"]
        bodies += [m for moons in parts["moons"].values() for m in moons]
        if parts["hierarchy"] is None or any(b is None for b in bodies):
            return None
        return SolarSystem(
            id=data["id"],
            seed=int(data["seed"]),
            provenance=_optional(data, "provenance", _deserialize_provenance),
            **parts,
        )
    except _MALFORMED as e:
        logger.warning(f"Malformed system data: {e!r}")
        return None
