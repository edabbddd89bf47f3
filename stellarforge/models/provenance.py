"""Provenance records and the generator configuration that stamps them."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..utils.constants import GENERATOR_VERSION, SCHEMA_VERSION


@dataclass(frozen=True)
class Provenance:
    """How a body was produced.

    The creation timestamp is informational and excluded from equality, so
    two generations from the same inputs compare equal.
    """

    generation_seed: int
    generator_version: str
    schema_version: int
    created_timestamp: float = field(default=0.0, compare=False)
    spec_snapshot: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GeneratorConfig:
    """Version information and clock shared by every generator call.

    Built once at the composition root and passed down explicitly.
    """

    generator_version: str = GENERATOR_VERSION
    schema_version: int = SCHEMA_VERSION
    clock: Callable[[], float] = field(default=time.time, compare=False)

    def make_provenance(self, seed: int, spec_snapshot: dict[str, Any]) -> Provenance:
        """Create a provenance record for a freshly generated body.

        Args:
            seed: Seed of the RNG stream that produced the body
            spec_snapshot: Resolved category/zone/class choices

        Returns:
            Provenance stamped with this configuration's versions
        """
        return Provenance(
            generation_seed=seed,
            generator_version=self.generator_version,
            schema_version=self.schema_version,
            created_timestamp=self.clock(),
            spec_snapshot=dict(spec_snapshot),
        )


DEFAULT_CONFIG = GeneratorConfig()
