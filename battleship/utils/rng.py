"""Seedable RNG wrapper for deterministic games."""

import random


class GameRNG:
    """Wrapper around Python's random.Random.

    All randomness in the game (room codes, first turn, random fleets) goes
    through this class so that a seeded instance replays the same choices.
    """

    def __init__(self, seed: int | None = None):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness, or None to seed
                from system entropy
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return self.rng.randint(a, b)

    def choice(self, seq):
        """Choose random element from non-empty sequence.

        Args:
            seq: Sequence to choose from

        Returns:
            Random element from sequence
        """
        return self.rng.choice(seq)

    def token(self, alphabet: str, length: int) -> str:
        """Return a random string of `length` characters drawn from `alphabet`."""
        return "".join(self.rng.choice(alphabet) for _ in range(length))
