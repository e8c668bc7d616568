# sizzling_slots/infrastructure/rng/strategies/numpy_rng.py
import numpy as np
from typing import Optional


class NumpyRNG:
    """
    Random number generator backed by NumPy's RandomState, the
    generator RTP simulations usually run on.
    """
    def __init__(self, seed_value: Optional[int] = None):
        """
        Initialize the RNG with an optional seed.

        Args:
            seed_value: Optional seed value for reproducible random numbers
        """
        self.seed(seed_value)

    def random(self) -> float:
        return float(self.rng.random_sample())

    def seed(self, seed_value: Optional[int]) -> None:
        self.rng = np.random.RandomState(seed_value)
