"""Property constraints used to steer regeneration.

A constraint either locks a property path to an exact value or bounds it to
a range. Constraints are immutable: every modifier returns a new instance.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass, replace

from .property_path import canonical_path

REASON_SEPARATOR = "; "


@dataclass(frozen=True)
class PropertyConstraint:
    """Bound or lock on one property path.

    Attributes:
        property_path: Canonical dotted path (e.g. "orbital.eccentricity")
        min_value: Inclusive lower bound (-inf when unbounded)
        max_value: Inclusive upper bound (+inf when unbounded)
        current_value: Value the property has, or is locked to
        is_locked: Whether regeneration must keep current_value exactly
        reason: Log of the reasons that narrowed the range, "; "-separated
    """

    property_path: str
    min_value: float = -math.inf
    max_value: float = math.inf
    current_value: float | None = None
    is_locked: bool = False
    reason: str = ""

    def __post_init__(self):
        """Canonicalize the property path."""
        object.__setattr__(self, "property_path", canonical_path(self.property_path))

    @classmethod
    def locked(cls, property_path: str, value: float, reason: str = "") -> "PropertyConstraint":
        """Constraint pinning a path to an exact value."""
        return cls(property_path, current_value=float(value), is_locked=True, reason=reason)

    @classmethod
    def bounded(
        cls,
        property_path: str,
        min_value: float = -math.inf,
        max_value: float = math.inf,
        reason: str = "",
    ) -> "PropertyConstraint":
        """Unlocked constraint limiting a path to a range."""
        return cls(property_path, min_value=min_value, max_value=max_value, reason=reason)

    def is_value_in_range(self, value: float) -> bool:
        """Inclusive bounds check."""
        return self.min_value <= value <= self.max_value

    def clamp_value(self, value: float) -> float:
        return min(max(value, self.min_value), self.max_value)

    def has_bounds(self) -> bool:
        """False only when both bounds are infinite."""
        return not (math.isinf(self.min_value) and math.isinf(self.max_value))

    def is_satisfiable(self) -> bool:
        return self.min_value <= self.max_value

    def with_lock(self, locked: bool) -> "PropertyConstraint":
        return replace(self, is_locked=locked)

    def with_value(self, value: float) -> "PropertyConstraint":
        return replace(self, current_value=float(value))

    def intersected_with(
        self, new_min: float, new_max: float, reason: str = ""
    ) -> "PropertyConstraint":
        """Narrow the range to its intersection with [new_min, new_max].

        Bounds never widen. The reason is appended to the reason log only
        when the resulting range is strictly smaller than this one.

        Args:
            new_min: Lower bound to intersect with
            new_max: Upper bound to intersect with
            reason: Why the range is being narrowed

        Returns:
            New constraint with the intersected range
        """
        min_value = max(self.min_value, new_min)
        max_value = min(self.max_value, new_max)
        narrowed = min_value > self.min_value or max_value < self.max_value

        log = self.reason
        if narrowed and reason:
            log = f"{log}{REASON_SEPARATOR}{reason}" if log else reason

        return replace(self, min_value=min_value, max_value=max_value, reason=log)

    def get_reasons(self) -> list[str]:
        """Reason log split into entries."""
        return [r for r in self.reason.split(REASON_SEPARATOR) if r]


class ConstraintSet:
    """Constraints keyed by property path (one per path)."""

    def __init__(self, constraints: list[PropertyConstraint] | None = None):
        self._constraints: dict[str, PropertyConstraint] = {}
        for constraint in constraints or []:
            self.set_constraint(constraint)

    def __len__(self) -> int:
        return len(self._constraints)

    def __contains__(self, property_path) -> bool:
        return self.has_constraint(property_path)

    def __iter__(self) -> Iterator[PropertyConstraint]:
        return iter(list(self._constraints.values()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return self._constraints == other._constraints

    def __repr__(self) -> str:
        return f"ConstraintSet({list(self._constraints.values())!r})"

    def set_constraint(self, constraint: PropertyConstraint) -> None:
        """Add a constraint, overwriting any existing one on the same path."""
        self._constraints[constraint.property_path] = constraint

    def get_constraint(self, property_path) -> PropertyConstraint | None:
        return self._constraints.get(canonical_path(property_path))

    def has_constraint(self, property_path) -> bool:
        return canonical_path(property_path) in self._constraints

    def remove_constraint(self, property_path) -> PropertyConstraint | None:
        return self._constraints.pop(canonical_path(property_path), None)

    def get_all_constraints(self) -> list[PropertyConstraint]:
        """All constraints in insertion order."""
        return list(self._constraints.values())

    def get_locked_constraints(self) -> list[PropertyConstraint]:
        return [c for c in self._constraints.values() if c.is_locked]

    def get_bounded_constraints(self) -> list[PropertyConstraint]:
        """Unlocked constraints that restrict their range."""
        return [c for c in self._constraints.values() if not c.is_locked and c.has_bounds()]

    def get_unsatisfiable(self) -> list[PropertyConstraint]:
        return [c for c in self._constraints.values() if not c.is_satisfiable()]

    def is_satisfiable(self) -> bool:
        return not self.get_unsatisfiable()

    def lock(self, property_path, value: float, reason: str = "") -> PropertyConstraint:
        """Lock a path to a value, keeping any bounds already recorded.

        Returns:
            The stored constraint
        """
        existing = self.get_constraint(property_path)
        if existing is None:
            constraint = PropertyConstraint.locked(property_path, value, reason)
        else:
            constraint = existing.with_value(value).with_lock(True)
        self.set_constraint(constraint)
        return constraint

    def unlock(self, property_path) -> PropertyConstraint | None:
        existing = self.get_constraint(property_path)
        if existing is None:
            return None
        constraint = existing.with_lock(False)
        self.set_constraint(constraint)
        return constraint

    def bound(
        self, property_path, min_value: float, max_value: float, reason: str = ""
    ) -> PropertyConstraint:
        """Narrow a path's range, creating the constraint if needed.

        Returns:
            The stored constraint
        """
        existing = self.get_constraint(property_path)
        if existing is None:
            existing = PropertyConstraint(property_path)
        constraint = existing.intersected_with(min_value, max_value, reason)
        self.set_constraint(constraint)
        return constraint
