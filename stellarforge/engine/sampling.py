"""Resolution of property values against spec overrides and bounds.

Every generated quantity goes through ``resolve_sampled`` (drawn from a
range) or ``resolve_derived`` (computed from other quantities). Both give
spec overrides absolute precedence, consuming no draws, and keep bounded
values inside their bounds.
"""

import logging
import math

from ..specs import BodySpec
from ..utils.rng import SeededRng

logger = logging.getLogger(__name__)

LINEAR = "linear"
LOG = "log"
LOW = "low"  # skewed toward the low end of the range


def narrow_range(
    default_range: tuple[float, float],
    bound: tuple[float, float] | None,
    path: str = "",
) -> tuple[float, float]:
    """Intersect a table default range with a caller bound.

    The result never extends past the default range unless the two ranges
    do not overlap at all, in which case the bound wins so that generated
    values still honor it.

    Args:
        default_range: (low, high) range from the tables
        bound: Optional (low, high) bound from the spec
        path: Property path, for logging

    Returns:
        (low, high) range to sample from
    """
    low, high = default_range
    if bound is None:
        return low, high

    bound_low, bound_high = bound
    narrowed_low, narrowed_high = max(low, bound_low), min(high, bound_high)
    if narrowed_low <= narrowed_high:
        return narrowed_low, narrowed_high

    logger.debug(
        f"Bound {bound} on '{path}' misses default range {default_range}; sampling in bound"
    )
    if math.isfinite(bound_low) and math.isfinite(bound_high):
        return bound_low, bound_high
    edge = bound_low if math.isfinite(bound_low) else bound_high
    return edge, edge


def sample_range(rng: SeededRng, low: float, high: float, scale: str = LINEAR) -> float:
    """Draw one value in [low, high].

    Args:
        rng: Random number generator
        low: Lower bound
        high: Upper bound
        scale: LINEAR (uniform), LOG (uniform in log space, positive ranges
            only) or LOW (cubic skew toward low)

    Returns:
        Sampled value, clamped into [low, high]
    """
    if scale == LOG and low > 0:
        value = rng.log_uniform(low, high)
    elif scale == LOW:
        value = low + (high - low) * rng.random() ** 3
    else:
        value = rng.uniform(low, high)
    return min(max(value, low), high)


def resolve_sampled(
    spec: BodySpec,
    path: str,
    default_range: tuple[float, float],
    rng: SeededRng,
    scale: str = LINEAR,
) -> float:
    """Value for a sampled property.

    Args:
        spec: Spec carrying overrides and bounds
        path: Canonical property path
        default_range: Table range for the property
        rng: Random number generator
        scale: Sampling scale, see sample_range

    Returns:
        The override when present, otherwise a draw inside the narrowed range
    """
    override = spec.get_override(path)
    if override is not None:
        return override
    low, high = narrow_range(default_range, spec.get_bounds(path), path)
    return sample_range(rng, low, high, scale)


def resolve_derived(
    spec: BodySpec,
    path: str,
    value: float,
    default_range: tuple[float, float],
    rng: SeededRng,
    scale: str = LINEAR,
) -> float:
    """Value for a property computed from others.

    The computed value is kept when it satisfies the path's bound; otherwise
    a value is drawn inside the narrowed range.

    Args:
        spec: Spec carrying overrides and bounds
        path: Canonical property path
        value: Computed value
        default_range: Table range used when the computed value is rejected
        rng: Random number generator
        scale: Sampling scale, see sample_range

    Returns:
        The override when present, otherwise the computed or resampled value
    """
    override = spec.get_override(path)
    if override is not None:
        return override
    bound = spec.get_bounds(path)
    if bound is None or bound[0] <= value <= bound[1]:
        return value
    low, high = narrow_range(default_range, bound, path)
    return sample_range(rng, low, high, scale)


def clamp_to_bounds(spec: BodySpec, path: str, value: float) -> float:
    """Clamp a value into the path's bound, if the spec has one."""
    bound = spec.get_bounds(path)
    if bound is None:
        return value
    return min(max(value, bound[0]), bound[1])
