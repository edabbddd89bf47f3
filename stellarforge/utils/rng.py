"""Seedable RNG wrapper for deterministic generation."""

import hashlib
import math
import random

_MASK_64 = (1 << 64) - 1


class SeededRng:
    """Wrapper around Python's random.Random for deterministic generation.

    All randomness in the generators goes through this class so that the
    same seed always produces the same bodies. Nested generators never share
    an instance: they receive a sub-stream created with ``fork``.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed, normalized to an unsigned 64-bit value
        """
        self.seed = int(seed) & _MASK_64
        self.rng = random.Random(self.seed)

    def __repr__(self) -> str:
        return f"SeededRng(seed={self.seed})"

    def random(self) -> float:
        """Return random float in [0.0, 1.0).

        Returns:
            Random float between 0.0 and 1.0
        """
        return self.rng.random()

    def uniform(self, a: float, b: float) -> float:
        """Return random float in [a, b].

        Always consumes exactly one draw, even for a degenerate range.

        Args:
            a: Lower bound
            b: Upper bound

        Returns:
            Random float between a and b
        """
        return a + (b - a) * self.rng.random()

    def log_uniform(self, a: float, b: float) -> float:
        """Return a float whose logarithm is uniform in [log a, log b].

        Args:
            a: Lower bound (must be > 0)
            b: Upper bound (must be > 0)

        Returns:
            Random float between a and b

        Raises:
            ValueError: If either bound is not positive
        """
        if a <= 0 or b <= 0:
            raise ValueError(f"log_uniform bounds must be positive: ({a}, {b})")
        return math.exp(self.uniform(math.log(a), math.log(b)))

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive.

        Args:
            a: Lower bound (inclusive)
            b: Upper bound (inclusive)

        Returns:
            Random integer between a and b
        """
        return self.rng.randint(a, b)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.rng.random() < probability

    def choice(self, seq):
        """Choose random element from non-empty sequence.

        Args:
            seq: Sequence to choose from

        Returns:
            Random element from sequence
        """
        return self.rng.choice(seq)

    def shuffle(self, seq):
        """Shuffle sequence in place.

        Args:
            seq: Sequence to shuffle
        """
        self.rng.shuffle(seq)

    def fork(self, label) -> "SeededRng":
        """Derive an independent, reproducible sub-stream.

        Exactly one 64-bit draw is taken from this RNG, whatever the child
        later does with its own stream. The draw is mixed with the label
        through BLAKE2b, so forks taken with different labels at the same
        point diverge.

        Args:
            label: String or integer naming the sub-stream (e.g. "planet-3")

        Returns:
            New SeededRng seeded from this stream and the label
        """
        parent_bits = self.rng.getrandbits(64)
        digest = hashlib.blake2b(
            f"{parent_bits}:{label}".encode("utf-8"), digest_size=8
        ).digest()
        return SeededRng(int.from_bytes(digest, "big"))

    def get_state(self):
        """Get the current state of the RNG for serialization.

        Returns:
            RNG state tuple that can be used with set_state
        """
        return self.rng.getstate()

    def set_state(self, state):
        """Set the state of the RNG for deserialization.

        Args:
            state: RNG state tuple from get_state
        """
        self.rng.setstate(state)
