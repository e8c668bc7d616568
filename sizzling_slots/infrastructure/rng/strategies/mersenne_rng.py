# sizzling_slots/infrastructure/rng/strategies/mersenne_rng.py
import random
from typing import Optional


class MersenneTwisterRNG:
    """
    Random number generator using the Mersenne Twister algorithm (Python's default).
    """
    def __init__(self, seed_value: Optional[int] = None):
        """
        Initialize the RNG with an optional seed.

        Args:
            seed_value: Optional seed value for reproducible random numbers
        """
        # Dedicated instance, never the module-level generator
        self._random = random.Random()
        self.seed(seed_value)

    def random(self) -> float:
        return self._random.random()

    def seed(self, seed_value: Optional[int]) -> None:
        self._random.seed(seed_value)
